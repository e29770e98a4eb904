"""Geometry kernel interface.

The gearbox builder never touches a CAD host directly. Everything it needs
(fitted splines, connected-curve lookup, offsets, circles, deletion) goes through
the ``GeometryKernel`` protocol. A CAD add-in wraps its sketch API in an object
with these methods; ``LocalGeometryKernel`` is the in-process implementation
used for previews and tests.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import numpy as np
from scipy.interpolate import CubicSpline

from ..core.types import CurvePoint, CurveSequence
from .analysis import signed_area

logger = logging.getLogger(__name__)

# Samples per fitted spline / circle in the local kernel
N_CURVE_SAMPLES = 720

# Consecutive points closer than this are merged before fitting
MIN_CHORD = 1e-12


class GeometryKernel(Protocol):
    """Sketch operations required from a geometry kernel.

    ``connected_curves`` may return the fitted spline itself, so ``delete`` must
    accept the same entity more than once in a single call.
    """

    def new_sketch(self, component_name: str) -> Any: ...

    def fit_spline(self, sketch: Any, points: CurveSequence) -> Any: ...

    def connected_curves(self, sketch: Any, curve: Any) -> list[Any]: ...

    def offset(self, sketch: Any, curves: Sequence[Any], distance: float) -> list[Any]: ...

    def add_circle(self, sketch: Any, center: CurvePoint, radius: float) -> Any: ...

    def delete(self, entities: Any) -> None: ...


@dataclass(eq=False)
class SketchCurve:
    """Closed curve stored as a dense polyline (last point repeats the first)."""

    id: int
    kind: str
    points: np.ndarray

    @property
    def radii(self) -> np.ndarray:
        return np.hypot(self.points[:, 0], self.points[:, 1])


@dataclass
class Sketch:
    """Named container of curves, one per gear component."""

    name: str
    curves: dict[int, SketchCurve] = field(default_factory=dict)

    def __contains__(self, curve: object) -> bool:
        return isinstance(curve, SketchCurve) and self.curves.get(curve.id) is curve


def _close(loop: np.ndarray) -> np.ndarray:
    return np.vstack([loop, loop[:1]])


def _open_loop(points: np.ndarray) -> np.ndarray:
    """Drop the closing duplicate and any repeated consecutive points."""
    loop = np.asarray(points, dtype=np.float64)[:-1]
    chords = np.hypot(*np.diff(_close(loop), axis=0).T)
    return loop[chords > MIN_CHORD]


def fit_closed_spline(points: np.ndarray, n_samples: int = N_CURVE_SAMPLES) -> np.ndarray:
    """Fit a periodic cubic spline through a closed point loop and resample it.

    The loop is parameterized by cumulative chord length.

    Args:
        points: (n, 2) samples whose last point repeats the first.
        n_samples: Number of distinct samples on the fitted curve.

    Returns:
        (n_samples + 1, 2) closed polyline.
    """
    loop = _open_loop(points)
    if len(loop) < 3:
        raise ValueError(f"Need at least 3 distinct points to fit a spline, got {len(loop)}")

    closed = _close(loop)
    chords = np.hypot(*np.diff(closed, axis=0).T)
    s = np.concatenate([[0.0], np.cumsum(chords)])

    cs = CubicSpline(s, closed, axis=0, bc_type="periodic")
    dense = cs(np.linspace(0.0, s[-1], n_samples + 1))
    dense[-1] = dense[0]
    return dense


def offset_closed_curve(points: np.ndarray, distance: float) -> np.ndarray:
    """Parallel curve of a closed polyline.

    Each vertex moves along its unit normal. Positive distance is outward
    regardless of winding; negative is inward.

    Args:
        points: (n, 2) closed polyline.
        distance: Signed offset distance.

    Returns:
        (n, 2) closed polyline.
    """
    loop = _open_loop(points)
    if len(loop) < 3:
        raise ValueError("Cannot offset a curve with fewer than 3 distinct points")

    tangent = np.roll(loop, -1, axis=0) - np.roll(loop, 1, axis=0)
    tangent /= np.hypot(tangent[:, 0], tangent[:, 1])[:, None]

    # Right-hand normal points outward for a counter-clockwise loop
    normal = np.column_stack([tangent[:, 1], -tangent[:, 0]])
    if signed_area(loop) < 0:
        normal = -normal

    return _close(loop + distance * normal)


def circle_points(
    center: CurvePoint, radius: float, n_samples: int = N_CURVE_SAMPLES
) -> np.ndarray:
    """Counter-clockwise closed polyline of a circle."""
    t = np.linspace(0.0, 2.0 * np.pi, n_samples + 1)
    pts = np.column_stack([center.x + radius * np.cos(t), center.y + radius * np.sin(t)])
    pts[-1] = pts[0]
    return pts


class LocalGeometryKernel:
    """In-process geometry kernel backed by numpy/scipy.

    Splines need at least three distinct points, so a step size of 180 degrees
    or more cannot be fitted.
    """

    def __init__(self, n_samples: int = N_CURVE_SAMPLES) -> None:
        """Initialize the kernel.

        Args:
            n_samples: Samples per fitted spline, offset and circle.
        """
        self.n_samples = n_samples
        self.sketches: list[Sketch] = []
        self._ids = itertools.count(1)

    def _owner(self, curve: SketchCurve) -> Sketch:
        for sketch in self.sketches:
            if curve in sketch:
                return sketch
        raise KeyError(f"Curve {getattr(curve, 'id', curve)!r} is not in any sketch")

    def _add(self, sketch: Sketch, kind: str, points: np.ndarray) -> SketchCurve:
        curve = SketchCurve(id=next(self._ids), kind=kind, points=points)
        sketch.curves[curve.id] = curve
        return curve

    def new_sketch(self, component_name: str) -> Sketch:
        sketch = Sketch(name=component_name)
        self.sketches.append(sketch)
        logger.debug("Created sketch '%s'", component_name)
        return sketch

    def fit_spline(self, sketch: Sketch, points: CurveSequence) -> SketchCurve:
        """Fit a closed spline through an ordered point loop.

        Raises:
            ValueError: If the sequence does not close on itself.
        """
        if not points.is_closed:
            raise ValueError(f"Point sequence '{points.name}' is not a closed loop")
        return self._add(sketch, "spline", fit_closed_spline(points.points, self.n_samples))

    def connected_curves(self, sketch: Sketch, curve: SketchCurve) -> list[SketchCurve]:
        # Every curve in the local kernel is a single closed entity
        if curve not in sketch:
            raise KeyError(f"Curve {curve.id} does not belong to sketch '{sketch.name}'")
        return [curve]

    def offset(
        self, sketch: Sketch, curves: Sequence[SketchCurve], distance: float
    ) -> list[SketchCurve]:
        """Offset closed curves; positive distance is outward."""
        result = []
        for curve in curves:
            if curve not in sketch:
                raise KeyError(f"Curve {curve.id} does not belong to sketch '{sketch.name}'")
            result.append(self._add(sketch, "offset", offset_closed_curve(curve.points, distance)))
        return result

    def add_circle(self, sketch: Sketch, center: CurvePoint, radius: float) -> SketchCurve:
        if radius <= 0:
            raise ValueError(f"Circle radius must be > 0, got {radius}")
        return self._add(sketch, "circle", circle_points(center, radius, self.n_samples))

    def delete(self, entities: SketchCurve | Iterable[SketchCurve]) -> None:
        """Remove curves from their sketches; repeated entries are removed once."""
        if isinstance(entities, SketchCurve):
            entities = [entities]

        unique = {id(curve): curve for curve in entities}

        owned = [(self._owner(curve), curve) for curve in unique.values()]
        for sketch, curve in owned:
            del sketch.curves[curve.id]
        logger.debug("Deleted %d curve(s)", len(owned))
