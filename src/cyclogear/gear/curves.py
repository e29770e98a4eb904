"""Sun and frame epicyclic curves.

Each curve is the trace of a point on a small circle of radius
``e = default_eccentricity - contraction`` whose center runs around a base circle:

    sun:   (Rs cos t + e cos(N t),  Rs sin t + e sin(N t)),   Rs = sun_root + e0
    frame: (Rf cos t + e cos(-N t), Rf sin t + e sin(-N t)),  Rf = frame_root - e0

The opposite rotation of the frame's secondary term gives the internal (ring)
profile; the sun's gives the external one.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..core.constants import ANGLE_TOL_DEG, DEG_TO_RAD, FULL_TURN_DEG
from ..core.types import CurvePoint, CurveSequence, DerivedParameters, GearboxConfig

logger = logging.getLogger(__name__)


def degrees_to_radians(angle_deg: float | np.ndarray) -> float | np.ndarray:
    """Convert degrees to radians."""
    return angle_deg * DEG_TO_RAD


def sun_xy(
    angle_deg: float | np.ndarray,
    derived: DerivedParameters,
    config: GearboxConfig,
) -> tuple[np.ndarray, np.ndarray]:
    """Sun curve coordinates for scalar or array angles (degrees)."""
    t = degrees_to_radians(np.asarray(angle_deg, dtype=np.float64))
    base = derived.sun_base_radius
    e = derived.true_eccentricity
    n = config.number_of_planets

    x = base * np.cos(t) + e * np.cos(n * t)
    y = base * np.sin(t) + e * np.sin(n * t)
    return x, y


def frame_xy(
    angle_deg: float | np.ndarray,
    derived: DerivedParameters,
    config: GearboxConfig,
) -> tuple[np.ndarray, np.ndarray]:
    """Frame curve coordinates for scalar or array angles (degrees)."""
    t = degrees_to_radians(np.asarray(angle_deg, dtype=np.float64))
    base = derived.frame_base_radius
    e = derived.true_eccentricity
    n = config.number_of_planets

    x = base * np.cos(t) + e * np.cos(n * -t)
    y = base * np.sin(t) + e * np.sin(n * -t)
    return x, y


def sun_point(angle_deg: float, derived: DerivedParameters, config: GearboxConfig) -> CurvePoint:
    """Point on the sun curve at the given angle (degrees)."""
    x, y = sun_xy(angle_deg, derived, config)
    return CurvePoint(float(x), float(y))


def frame_point(angle_deg: float, derived: DerivedParameters, config: GearboxConfig) -> CurvePoint:
    """Point on the frame curve at the given angle (degrees)."""
    x, y = frame_xy(angle_deg, derived, config)
    return CurvePoint(float(x), float(y))


def sample_angles(step_deg: float) -> np.ndarray:
    """Sampling grid over a full turn, both endpoints included.

    Angles are ``i * step`` strictly below 360, followed by exactly 360 so the
    point loop closes even when 360 is not a multiple of the step.

    Args:
        step_deg: Angular step (degrees), 0 < step <= 360.

    Returns:
        Angle array (degrees) of length ``ceil(360 / step) + 1``.
    """
    step = float(step_deg)
    if not math.isfinite(step) or step <= 0:
        raise ValueError(f"step_deg must be finite and > 0, got {step_deg}")

    idx = np.arange(math.ceil(FULL_TURN_DEG / step) + 1, dtype=np.float64)
    angles = idx * step
    angles = angles[angles < FULL_TURN_DEG - ANGLE_TOL_DEG]
    return np.append(angles, FULL_TURN_DEG)


def _to_sequence(name: str, theta: np.ndarray, x: np.ndarray, y: np.ndarray) -> CurveSequence:
    points = np.column_stack([x, y])
    # Both ends are evaluated at 0 and 360; pin the last sample to the first so
    # the loop is closed bit-exactly for the spline fitter.
    points[-1] = points[0]
    return CurveSequence(name=name, theta_deg=theta, points=points)


def sample_sun_curve(derived: DerivedParameters, config: GearboxConfig) -> CurveSequence:
    """Sample the sun curve from 0 to 360 degrees inclusive."""
    theta = sample_angles(config.step_size_deg)
    x, y = sun_xy(theta, derived, config)
    return _to_sequence("sun", theta, x, y)


def sample_frame_curve(derived: DerivedParameters, config: GearboxConfig) -> CurveSequence:
    """Sample the frame curve from 0 to 360 degrees inclusive."""
    theta = sample_angles(config.step_size_deg)
    x, y = frame_xy(theta, derived, config)
    return _to_sequence("frame", theta, x, y)


def sample_profiles(
    derived: DerivedParameters,
    config: GearboxConfig,
    max_workers: int | None = None,
) -> tuple[CurveSequence, CurveSequence]:
    """Sample both profile curves.

    Args:
        derived: Derived parameters from ``derive(config)``.
        config: Gearbox configuration.
        max_workers: Sample the two curves on a thread pool when > 1.

    Returns:
        (sun, frame) curve sequences.
    """
    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, 2)) as pool:
            sun_future = pool.submit(sample_sun_curve, derived, config)
            frame_future = pool.submit(sample_frame_curve, derived, config)
            sun, frame = sun_future.result(), frame_future.result()
    else:
        sun = sample_sun_curve(derived, config)
        frame = sample_frame_curve(derived, config)

    logger.debug(
        "Sampled profiles: %d points per curve (step %.6g deg)",
        sun.n_points,
        config.step_size_deg,
    )
    return sun, frame
