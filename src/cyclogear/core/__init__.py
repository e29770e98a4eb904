"""Core module: types, constants, configuration, logging."""

from .config import (
    CyclogearConfig,
    GearboxSettings,
    SamplingSettings,
    default_config,
    load_config,
    merge_config,
    save_config,
    to_gearbox_config,
)
from .types import (
    CurvePoint,
    CurveSequence,
    DerivedParameters,
    GearboxConfig,
    InvalidConfiguration,
)

__all__ = [
    "CurvePoint",
    "CurveSequence",
    "DerivedParameters",
    "GearboxConfig",
    "InvalidConfiguration",
    "CyclogearConfig",
    "GearboxSettings",
    "SamplingSettings",
    "default_config",
    "load_config",
    "merge_config",
    "save_config",
    "to_gearbox_config",
]
