"""Derived gearbox parameters.

Closed-form constants computed once from a GearboxConfig:

    sun_reduction_ratio   = N - 1
    frame_reduction_ratio = N + 1
    default_eccentricity  = planet_orbit_radius / N
    sun_root_radius       = (N - 1) * default_eccentricity
    frame_root_radius     = (N + 1) * default_eccentricity
    true_eccentricity     = default_eccentricity - contraction
"""

from __future__ import annotations

import logging
import math
import numbers

from ..core.constants import ECCENTRICITY_TOL, FULL_TURN_DEG, MIN_NUMBER_OF_PLANETS
from ..core.types import DerivedParameters, GearboxConfig, InvalidConfiguration

logger = logging.getLogger(__name__)

_POSITIVE_LENGTHS = ("planet_orbit_radius", "planet_radius", "planet_shaft_radius")


def _require_finite(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfiguration(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidConfiguration(f"{name} must be finite, got {value}")
    return value


def validate_config(config: GearboxConfig) -> None:
    """Reject configurations that cannot produce a closed, non-degenerate profile.

    Raises:
        InvalidConfiguration: With a message naming the offending field.
    """
    lengths = {}
    for name in _POSITIVE_LENGTHS:
        value = _require_finite(name, getattr(config, name))
        if value <= 0:
            raise InvalidConfiguration(f"{name} must be > 0, got {value}")
        lengths[name] = value

    n = config.number_of_planets
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidConfiguration(f"number_of_planets must be an integer, got {n!r}")
    if n < MIN_NUMBER_OF_PLANETS:
        raise InvalidConfiguration(
            f"number_of_planets must be >= {MIN_NUMBER_OF_PLANETS}, got {n}"
        )

    step = _require_finite("step_size_deg", config.step_size_deg)
    if step <= 0 or step > FULL_TURN_DEG:
        raise InvalidConfiguration(
            f"step_size_deg must be in (0, {FULL_TURN_DEG:g}], got {step}"
        )

    contraction = _require_finite("contraction", config.contraction)
    if contraction < 0:
        raise InvalidConfiguration(f"contraction must be >= 0, got {contraction}")

    default_eccentricity = lengths["planet_orbit_radius"] / n
    if default_eccentricity - contraction <= ECCENTRICITY_TOL * default_eccentricity:
        raise InvalidConfiguration(
            f"contraction ({contraction}) must be smaller than the default eccentricity "
            f"planet_orbit_radius / number_of_planets ({default_eccentricity})"
        )


def derive(config: GearboxConfig) -> DerivedParameters:
    """Compute the derived constants for a gearbox configuration.

    Args:
        config: User-defined gearbox dimensions.

    Returns:
        DerivedParameters.

    Raises:
        InvalidConfiguration: If the configuration fails validation.
    """
    validate_config(config)

    n = int(config.number_of_planets)
    sun_ratio = n - 1
    frame_ratio = n + 1
    default_eccentricity = float(config.planet_orbit_radius) / n

    derived = DerivedParameters(
        sun_reduction_ratio=sun_ratio,
        frame_reduction_ratio=frame_ratio,
        default_eccentricity=default_eccentricity,
        sun_root_radius=sun_ratio * default_eccentricity,
        frame_root_radius=frame_ratio * default_eccentricity,
        true_eccentricity=default_eccentricity - float(config.contraction),
    )

    logger.debug(
        "Derived parameters: ratios %d/%d, e0=%.6g, sun_root=%.6g, frame_root=%.6g, e=%.6g",
        derived.sun_reduction_ratio,
        derived.frame_reduction_ratio,
        derived.default_eccentricity,
        derived.sun_root_radius,
        derived.frame_root_radius,
        derived.true_eccentricity,
    )
    return derived
