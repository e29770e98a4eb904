"""Tests for the local geometry kernel."""

import numpy as np
import pytest

from cyclogear.core.types import CurvePoint, CurveSequence
from cyclogear.gear.analysis import arc_length, signed_area
from cyclogear.gear.curves import sample_frame_curve, sample_sun_curve
from cyclogear.gear.kernel import (
    LocalGeometryKernel,
    circle_points,
    fit_closed_spline,
    offset_closed_curve,
)


def _circle_sequence(radius: float, n: int = 72) -> CurveSequence:
    pts = circle_points(CurvePoint(0.0, 0.0), radius, n)
    theta = np.linspace(0.0, 360.0, n + 1)
    return CurveSequence(name="circle", theta_deg=theta, points=pts)


def test_circle_points_are_closed_and_ccw():
    pts = circle_points(CurvePoint(1.0, -2.0), 0.5, 360)
    np.testing.assert_array_equal(pts[0], pts[-1])
    np.testing.assert_allclose(np.hypot(pts[:, 0] - 1.0, pts[:, 1] + 2.0), 0.5, atol=1e-12)
    assert signed_area(pts) > 0
    assert arc_length(pts) == pytest.approx(2 * np.pi * 0.5, rel=1e-4)


def test_spline_passes_through_samples():
    seq = _circle_sequence(2.0, 72)
    dense = fit_closed_spline(seq.points, n_samples=720)

    assert dense.shape == (721, 2)
    np.testing.assert_array_equal(dense[0], dense[-1])
    np.testing.assert_allclose(dense[::10], seq.points, atol=1e-9)
    np.testing.assert_allclose(np.hypot(dense[:, 0], dense[:, 1]), 2.0, atol=1e-4)


def test_spline_needs_three_points():
    pts = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 0.0]])
    with pytest.raises(ValueError, match="3 distinct points"):
        fit_closed_spline(pts)


@pytest.mark.parametrize("distance, expected", [(0.5, 1.5), (-0.25, 0.75)])
def test_offset_circle(distance, expected):
    pts = circle_points(CurvePoint(0.0, 0.0), 1.0, 360)
    out = offset_closed_curve(pts, distance)
    np.testing.assert_allclose(np.hypot(out[:, 0], out[:, 1]), expected, atol=1e-9)


def test_offset_direction_independent_of_winding():
    """Positive distance is outward for clockwise loops too."""
    pts = circle_points(CurvePoint(0.0, 0.0), 1.0, 360)[::-1]
    assert signed_area(pts) < 0
    out = offset_closed_curve(pts, 0.5)
    np.testing.assert_allclose(np.hypot(out[:, 0], out[:, 1]), 1.5, atol=1e-9)


def test_sun_outward_offset_grows_every_point(derived, default_config):
    dense = fit_closed_spline(sample_sun_curve(derived, default_config).points)
    out = offset_closed_curve(dense, default_config.planet_radius)

    np.testing.assert_allclose(np.hypot(*(out - dense).T), default_config.planet_radius)
    assert np.all(np.hypot(out[:, 0], out[:, 1]) > np.hypot(dense[:, 0], dense[:, 1]))


def test_frame_inward_offset_shrinks_every_point(derived, default_config):
    dense = fit_closed_spline(sample_frame_curve(derived, default_config).points)
    out = offset_closed_curve(dense, -default_config.planet_radius)

    assert np.all(np.hypot(out[:, 0], out[:, 1]) < np.hypot(dense[:, 0], dense[:, 1]))


def test_fit_spline_rejects_open_sequence():
    kernel = LocalGeometryKernel()
    sketch = kernel.new_sketch("open")
    seq = CurveSequence(
        name="open",
        theta_deg=[0.0, 90.0, 180.0],
        points=[[1.0, 0.0], [0.0, 1.0], [-1.0, 0.0]],
    )
    with pytest.raises(ValueError, match="not a closed loop"):
        kernel.fit_spline(sketch, seq)


def test_curve_sequence_shape_checked():
    with pytest.raises(ValueError, match="shape"):
        CurveSequence(name="bad", theta_deg=[0.0], points=[1.0, 2.0])
    with pytest.raises(ValueError, match="mismatch"):
        CurveSequence(name="bad", theta_deg=[0.0, 1.0], points=[[1.0, 2.0]])


def test_kernel_offset_and_delete():
    kernel = LocalGeometryKernel(n_samples=180)
    sketch = kernel.new_sketch("sun gear")

    spline = kernel.fit_spline(sketch, _circle_sequence(1.0))
    connected = kernel.connected_curves(sketch, spline)
    assert connected == [spline]

    (offset,) = kernel.offset(sketch, connected, 0.5)
    assert offset.kind == "offset"
    np.testing.assert_allclose(offset.radii, 1.5, atol=1e-3)

    # The spline appears twice; it is removed once
    kernel.delete([*connected, spline])
    assert list(sketch.curves.values()) == [offset]


def test_delete_unknown_curve_leaves_sketch_untouched():
    kernel = LocalGeometryKernel(n_samples=90)
    sketch = kernel.new_sketch("planet gear")
    circle = kernel.add_circle(sketch, CurvePoint(0.0, 0.0), 1.0)

    other = LocalGeometryKernel(n_samples=90)
    stranger = other.add_circle(other.new_sketch("x"), CurvePoint(0.0, 0.0), 1.0)

    with pytest.raises(KeyError):
        kernel.delete([circle, stranger])
    assert circle in sketch


def test_connected_curves_checks_sketch():
    kernel = LocalGeometryKernel(n_samples=90)
    a = kernel.new_sketch("a")
    b = kernel.new_sketch("b")
    circle = kernel.add_circle(a, CurvePoint(0.0, 0.0), 1.0)

    with pytest.raises(KeyError):
        kernel.connected_curves(b, circle)
    with pytest.raises(KeyError):
        kernel.offset(b, [circle], 0.1)


def test_add_circle_rejects_non_positive_radius():
    kernel = LocalGeometryKernel()
    sketch = kernel.new_sketch("planet gear")
    with pytest.raises(ValueError):
        kernel.add_circle(sketch, CurvePoint(0.0, 0.0), 0.0)
