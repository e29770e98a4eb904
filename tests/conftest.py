"""Pytest configuration for cyclogear.

Shared fixtures for the default gearbox (N=10, orbit 1.9, contraction 0.05)
and its derived parameters.
"""

from __future__ import annotations

import logging

import pytest

from cyclogear.core.types import GearboxConfig
from cyclogear.gear.parameters import derive


@pytest.fixture
def default_config() -> GearboxConfig:
    return GearboxConfig()


@pytest.fixture
def derived(default_config):
    return derive(default_config)


@pytest.fixture
def restore_package_log_level():
    logger = logging.getLogger("cyclogear")
    level = logger.level
    yield logger
    logger.setLevel(level)
