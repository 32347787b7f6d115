"""
Scanner Registration Package

A Python package for registering scanner reports into one global frame.
Each scanner reports integer beacon positions in its own frame; the package
recovers, for every scanner, one of the 24 axis-aligned rotations and an integer
translation by matching beacons shared between overlapping scanners, then fuses
all beacons into a single map.
"""

__version__ = "0.1.0"

from .geometry import *
from .alignment import *
from .preprocessing import *
from .pipeline import *
from .utils import *

__all__ = [
    "geometry",
    "alignment",
    "preprocessing",
    "pipeline",
    "utils",
]
