"""Core types for gearbox configuration and generated curves.

This module defines the canonical types that form the interface
between the numeric core and the geometry kernel.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .constants import (
    CLOSURE_TOL,
    DEFAULT_CONTRACTION,
    DEFAULT_NUMBER_OF_PLANETS,
    DEFAULT_PLANET_ORBIT_RADIUS,
    DEFAULT_PLANET_RADIUS,
    DEFAULT_PLANET_SHAFT_RADIUS,
    DEFAULT_STEP_SIZE_DEG,
)


class InvalidConfiguration(ValueError):
    """Raised when a gearbox configuration cannot produce a valid profile."""


@dataclass(frozen=True)
class GearboxConfig:
    """User-defined gearbox dimensions.

    Attributes:
        planet_orbit_radius: Distance of the planet orbit center from the origin.
        planet_radius: Planet gear radius, also the tooth profile offset.
        number_of_planets: Lobe count of the sun and frame profiles.
        contraction: Reduction of the eccentricity, gives tooth clearance.
        planet_shaft_radius: Radius of the planet shaft bore.
        step_size_deg: Angular resolution of the sampled curves (degrees).
    """

    planet_orbit_radius: float = DEFAULT_PLANET_ORBIT_RADIUS
    planet_radius: float = DEFAULT_PLANET_RADIUS
    number_of_planets: int = DEFAULT_NUMBER_OF_PLANETS
    contraction: float = DEFAULT_CONTRACTION
    planet_shaft_radius: float = DEFAULT_PLANET_SHAFT_RADIUS
    step_size_deg: float = DEFAULT_STEP_SIZE_DEG


@dataclass(frozen=True)
class DerivedParameters:
    """Constants derived once from a GearboxConfig.

    Attributes:
        sun_reduction_ratio: number_of_planets - 1.
        frame_reduction_ratio: number_of_planets + 1.
        default_eccentricity: Planet eccentricity with no contraction applied.
        sun_root_radius: Circle the eccentricity circle rolls along for the sun.
        frame_root_radius: Same for the frame.
        true_eccentricity: Eccentricity after contraction.
    """

    sun_reduction_ratio: int
    frame_reduction_ratio: int
    default_eccentricity: float
    sun_root_radius: float
    frame_root_radius: float
    true_eccentricity: float

    @property
    def sun_base_radius(self) -> float:
        """Radius of the circle traced by the sun curve's base point."""
        return self.sun_root_radius + self.default_eccentricity

    @property
    def frame_base_radius(self) -> float:
        """Radius of the circle traced by the frame curve's base point."""
        return self.frame_root_radius - self.default_eccentricity


@dataclass(frozen=True)
class CurvePoint:
    """2D point in a gear's local sketch plane."""

    x: float
    y: float


@dataclass
class CurveSequence:
    """Ordered samples of one profile curve.

    Attributes:
        name: Profile name ("sun" or "frame").
        theta_deg: Sample angles (degrees), shape (n,).
        points: Cartesian samples, shape (n, 2).
    """

    name: str
    theta_deg: np.ndarray
    points: np.ndarray

    def __post_init__(self) -> None:
        self.theta_deg = np.asarray(self.theta_deg, dtype=np.float64)
        self.points = np.asarray(self.points, dtype=np.float64)
        if self.points.ndim != 2 or self.points.shape[1] != 2:
            raise ValueError(f"points must have shape (n, 2), got {self.points.shape}")
        if len(self.theta_deg) != len(self.points):
            raise ValueError(
                f"theta/points length mismatch: {len(self.theta_deg)} vs {len(self.points)}"
            )

    @property
    def n_points(self) -> int:
        """Number of samples, closing duplicate included."""
        return len(self.points)

    @property
    def radii(self) -> np.ndarray:
        """Distance of every sample from the origin."""
        return np.hypot(self.points[:, 0], self.points[:, 1])

    @property
    def min_radius(self) -> float:
        return float(np.min(self.radii))

    @property
    def max_radius(self) -> float:
        return float(np.max(self.radii))

    @property
    def mean_radius(self) -> float:
        # Closing duplicate excluded so the first sample is not counted twice
        return float(np.mean(self.radii[:-1]))

    @property
    def is_closed(self) -> bool:
        """True when the first and last samples coincide."""
        if self.n_points < 2:
            return False
        gap = float(np.hypot(*(self.points[-1] - self.points[0])))
        return gap <= CLOSURE_TOL * max(1.0, self.max_radius)

    def to_points(self) -> list[CurvePoint]:
        """Convert to a list of CurvePoint."""
        return [CurvePoint(float(x), float(y)) for x, y in self.points]
