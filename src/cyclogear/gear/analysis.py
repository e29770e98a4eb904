"""Structural checks on sampled profile curves.

The radius of an epicyclic profile is
``r^2 = b^2 + e^2 + 2 b e cos(k t)`` with ``k = N - 1`` for the sun and
``k = N + 1`` for the frame, so each curve spans ``b -/+ e`` radially and
crosses its mean radius ``2 k`` times per turn.
"""

from __future__ import annotations

import numpy as np

from ..core.types import CurveSequence, DerivedParameters


def radial_envelope(curve: CurveSequence) -> tuple[float, float]:
    """Return (min, max) distance of the samples from the origin."""
    return curve.min_radius, curve.max_radius


def expected_radial_envelope(base_radius: float, derived: DerivedParameters) -> tuple[float, float]:
    """Analytic (min, max) radius of a curve with the given base radius."""
    e = derived.true_eccentricity
    return base_radius - e, base_radius + e


def mean_radius_crossings(curve: CurveSequence) -> int:
    """Count crossings of the mean radius over one turn.

    The closing duplicate is dropped and the samples are treated cyclically.
    """
    r = curve.radii[:-1]
    above = r >= np.mean(r)
    return int(np.count_nonzero(above != np.roll(above, -1)))


def lobe_count(curve: CurveSequence) -> int:
    """Number of radial lobes (one per pair of mean-radius crossings)."""
    return mean_radius_crossings(curve) // 2


def closure_gap(curve: CurveSequence) -> float:
    """Distance between the first and last samples."""
    return float(np.hypot(*(curve.points[-1] - curve.points[0])))


def signed_area(points: np.ndarray) -> float:
    """Shoelace area of a polygon; positive for counter-clockwise winding.

    Args:
        points: (n, 2) vertices, closed or open.
    """
    pts = np.asarray(points, dtype=np.float64)
    x, y = pts[:, 0], pts[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def arc_length(points: np.ndarray) -> float:
    """Total polyline length of an ordered point sequence."""
    pts = np.asarray(points, dtype=np.float64)
    return float(np.sum(np.hypot(*np.diff(pts, axis=0).T)))
