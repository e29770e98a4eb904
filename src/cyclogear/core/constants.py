"""Core constants for cyclogear.

This module defines package-wide invariants such as:
- Default gearbox dimensions (host sketch length units)
- Angle conventions for curve sampling
- Numerical tolerances
"""

from __future__ import annotations

import math

# Default gearbox dimensions
DEFAULT_PLANET_ORBIT_RADIUS = 1.9
DEFAULT_PLANET_RADIUS = 0.5
DEFAULT_NUMBER_OF_PLANETS = 10
DEFAULT_CONTRACTION = 0.05  # applied to sun and frame eccentricity
DEFAULT_PLANET_SHAFT_RADIUS = 0.2
DEFAULT_STEP_SIZE_DEG = 1.0

# Angles
FULL_TURN_DEG = 360.0
DEG_TO_RAD = math.pi / 180.0

# Tolerances
ANGLE_TOL_DEG = 1e-9
CLOSURE_TOL = 1e-9
ECCENTRICITY_TOL = 1e-12  # relative; true eccentricity below this is degenerate

# Minimum lobe count; a single planet gives a non-orbiting sun curve
MIN_NUMBER_OF_PLANETS = 2

# Distinct samples needed to fit a closed spline through a profile
MIN_PROFILE_SAMPLES = 3

# Component names used for the generated sketches
SUN_COMPONENT = "sun gear"
PLANET_COMPONENT = "planet gear"
FRAME_COMPONENT = "frame"
