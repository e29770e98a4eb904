"""Gear module: parameter derivation, profile curves, gearbox build."""

from .curves import frame_point, sample_angles, sample_profiles, sun_point
from .gearbox import GearboxSketches, build_from_settings, build_gearbox, planet_circles
from .kernel import GeometryKernel, LocalGeometryKernel
from .parameters import derive, validate_config

__all__ = [
    "derive",
    "validate_config",
    "sun_point",
    "frame_point",
    "sample_angles",
    "sample_profiles",
    "GeometryKernel",
    "LocalGeometryKernel",
    "GearboxSketches",
    "build_gearbox",
    "build_from_settings",
    "planet_circles",
]
