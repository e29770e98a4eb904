"""Gearbox sketch generation.

Drives a geometry kernel through the full profile build:

    1. derive parameters (fails before any kernel call on bad input)
    2. sketches for sun gear, planet gear and frame
    3. sun and frame curves -> fitted splines -> offset tooth profiles
       (sun outward by +planet_radius, frame inward by -planet_radius)
    4. construction splines removed
    5. planet tooth circle and shaft bore

Usage:
    from cyclogear.gear.gearbox import build_gearbox
    from cyclogear.gear.kernel import LocalGeometryKernel
    result = build_gearbox(GearboxConfig(), LocalGeometryKernel())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..core.config import CyclogearConfig, to_gearbox_config
from ..core.constants import (
    FRAME_COMPONENT,
    MIN_PROFILE_SAMPLES,
    PLANET_COMPONENT,
    SUN_COMPONENT,
)
from ..core.logging import configure_logging
from ..core.types import (
    CurvePoint,
    CurveSequence,
    DerivedParameters,
    GearboxConfig,
    InvalidConfiguration,
)
from .curves import sample_angles, sample_profiles
from .kernel import GeometryKernel
from .parameters import derive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanetCircle:
    """Circle of the planet gear construction."""

    center: CurvePoint
    radius: float


@dataclass
class GearboxSketches:
    """Handles and inputs of a completed gearbox build.

    Attributes:
        config: Configuration the build ran with.
        derived: Derived parameters.
        sun_curve: Sampled sun curve handed to the kernel.
        frame_curve: Sampled frame curve handed to the kernel.
        sketches: Kernel sketch objects keyed by component name.
        sun_profile: Offset sun tooth profile curves.
        frame_profile: Offset frame tooth profile curves.
        planet_circles: Tooth circle and shaft bore handles, in that order.
    """

    config: GearboxConfig
    derived: DerivedParameters
    sun_curve: CurveSequence
    frame_curve: CurveSequence
    sketches: dict[str, Any] = field(default_factory=dict)
    sun_profile: list[Any] = field(default_factory=list)
    frame_profile: list[Any] = field(default_factory=list)
    planet_circles: list[Any] = field(default_factory=list)


def planet_circles(
    config: GearboxConfig, derived: DerivedParameters
) -> tuple[PlanetCircle, PlanetCircle]:
    """Planet gear construction circles.

    Returns:
        (tooth circle at (orbit + e, 0) with planet_radius,
         shaft bore at (orbit, 0) with planet_shaft_radius).
    """
    tooth = PlanetCircle(
        center=CurvePoint(config.planet_orbit_radius + derived.true_eccentricity, 0.0),
        radius=config.planet_radius,
    )
    shaft = PlanetCircle(
        center=CurvePoint(config.planet_orbit_radius, 0.0),
        radius=config.planet_shaft_radius,
    )
    return tooth, shaft


def _offset_profile(
    kernel: GeometryKernel,
    sketch: Any,
    curve: CurveSequence,
    distance: float,
) -> tuple[list[Any], list[Any]]:
    """Fit, offset and return (offset curves, construction entities to delete)."""
    spline = kernel.fit_spline(sketch, curve)
    connected = kernel.connected_curves(sketch, spline)
    offset = kernel.offset(sketch, connected, distance)
    return offset, [*connected, spline]


def build_gearbox(
    config: GearboxConfig,
    kernel: GeometryKernel,
    max_workers: int | None = None,
) -> GearboxSketches:
    """Generate the sun, frame and planet sketches of a gearbox.

    Args:
        config: Gearbox configuration.
        kernel: Geometry kernel the sketches are created in.
        max_workers: Forwarded to ``sample_profiles``.

    Returns:
        GearboxSketches with the kernel handles.

    Raises:
        InvalidConfiguration: Before any kernel call, if the config is invalid or
            the step size leaves fewer than three distinct samples per curve.
    """
    derived = derive(config)
    distinct = len(sample_angles(config.step_size_deg)) - 1
    if distinct < MIN_PROFILE_SAMPLES:
        raise InvalidConfiguration(
            f"step_size_deg={config.step_size_deg} gives {distinct} distinct samples per "
            f"curve; a closed profile needs at least {MIN_PROFILE_SAMPLES}"
        )

    sketches = {
        name: kernel.new_sketch(name)
        for name in (SUN_COMPONENT, PLANET_COMPONENT, FRAME_COMPONENT)
    }

    sun_curve, frame_curve = sample_profiles(derived, config, max_workers=max_workers)

    sun_profile, sun_construction = _offset_profile(
        kernel, sketches[SUN_COMPONENT], sun_curve, config.planet_radius
    )
    frame_profile, frame_construction = _offset_profile(
        kernel, sketches[FRAME_COMPONENT], frame_curve, -config.planet_radius
    )

    kernel.delete(frame_construction)
    kernel.delete(sun_construction)

    planet_sketch = sketches[PLANET_COMPONENT]
    circles = [
        kernel.add_circle(planet_sketch, circle.center, circle.radius)
        for circle in planet_circles(config, derived)
    ]

    logger.info(
        "Finished generating gearbox profile (N=%d, %d points per curve)",
        config.number_of_planets,
        sun_curve.n_points,
    )

    return GearboxSketches(
        config=config,
        derived=derived,
        sun_curve=sun_curve,
        frame_curve=frame_curve,
        sketches=sketches,
        sun_profile=sun_profile,
        frame_profile=frame_profile,
        planet_circles=circles,
    )


def build_from_settings(settings: CyclogearConfig, kernel: GeometryKernel) -> GearboxSketches:
    """Build a gearbox from loaded settings (see ``cyclogear.core.config``).

    Applies ``settings.log_level`` to the package logger first.
    """
    configure_logging(settings.log_level)
    return build_gearbox(
        to_gearbox_config(settings),
        kernel,
        max_workers=settings.sampling.max_workers,
    )
