"""cyclogear: sketch geometry for cycloidal (eccentric) planetary gearboxes."""

import logging

from .core import GearboxConfig, InvalidConfiguration
from .gear import build_gearbox, derive, frame_point, sun_point

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "GearboxConfig",
    "InvalidConfiguration",
    "build_gearbox",
    "derive",
    "frame_point",
    "sun_point",
]
