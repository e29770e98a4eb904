"""Configuration management with pydantic and YAML support."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_CONTRACTION,
    DEFAULT_NUMBER_OF_PLANETS,
    DEFAULT_PLANET_ORBIT_RADIUS,
    DEFAULT_PLANET_RADIUS,
    DEFAULT_PLANET_SHAFT_RADIUS,
    DEFAULT_STEP_SIZE_DEG,
    FULL_TURN_DEG,
    MIN_NUMBER_OF_PLANETS,
)
from .logging import LOG_LEVELS
from .types import GearboxConfig, InvalidConfiguration


class GearboxSettings(BaseModel):
    """Gearbox dimensions in host sketch units."""

    planet_orbit_radius: float = Field(
        default=DEFAULT_PLANET_ORBIT_RADIUS, gt=0, allow_inf_nan=False
    )
    planet_radius: float = Field(default=DEFAULT_PLANET_RADIUS, gt=0, allow_inf_nan=False)
    number_of_planets: int = Field(default=DEFAULT_NUMBER_OF_PLANETS, ge=MIN_NUMBER_OF_PLANETS)
    contraction: float = Field(default=DEFAULT_CONTRACTION, ge=0, allow_inf_nan=False)
    planet_shaft_radius: float = Field(
        default=DEFAULT_PLANET_SHAFT_RADIUS, gt=0, allow_inf_nan=False
    )


class SamplingSettings(BaseModel):
    """Curve sampling settings."""

    step_size_deg: float = Field(
        default=DEFAULT_STEP_SIZE_DEG, gt=0, le=FULL_TURN_DEG, allow_inf_nan=False
    )
    max_workers: int | None = Field(default=None, ge=1)


class CyclogearConfig(BaseModel):
    """Root configuration object."""

    gearbox: GearboxSettings = Field(default_factory=GearboxSettings)
    sampling: SamplingSettings = Field(default_factory=SamplingSettings)
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        if value.upper() not in LOG_LEVELS:
            raise ValueError(
                f"unknown log level {value!r}, expected one of {sorted(LOG_LEVELS)}"
            )
        return value.upper()


def _validate(data: dict[str, Any]) -> CyclogearConfig:
    try:
        return CyclogearConfig.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfiguration(str(exc)) from exc


def load_config(path: str | Path) -> CyclogearConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed CyclogearConfig object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return _validate(data or {})


def save_config(config: CyclogearConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save.
        path: Output path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False)


def default_config() -> CyclogearConfig:
    """Return default configuration."""
    return CyclogearConfig()


def merge_config(base: CyclogearConfig, overrides: dict[str, Any]) -> CyclogearConfig:
    """Merge overrides into base configuration.

    Args:
        base: Base configuration.
        overrides: Dictionary of override values.

    Returns:
        New configuration with overrides applied.
    """
    base_dict = base.model_dump()

    def deep_merge(d1: dict, d2: dict) -> dict:
        result = d1.copy()
        for k, v in d2.items():
            if k in result and isinstance(result[k], dict) and isinstance(v, dict):
                result[k] = deep_merge(result[k], v)
            else:
                result[k] = v
        return result

    merged = deep_merge(base_dict, overrides)
    return _validate(merged)


def to_gearbox_config(config: CyclogearConfig) -> GearboxConfig:
    """Flatten settings into the immutable GearboxConfig used by the core."""
    g = config.gearbox
    return GearboxConfig(
        planet_orbit_radius=g.planet_orbit_radius,
        planet_radius=g.planet_radius,
        number_of_planets=g.number_of_planets,
        contraction=g.contraction,
        planet_shaft_radius=g.planet_shaft_radius,
        step_size_deg=config.sampling.step_size_deg,
    )
