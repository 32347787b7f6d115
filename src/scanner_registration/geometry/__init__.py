"""
Geometry Module

Integer points, raw scanner reports and the catalog of the 24 axis-aligned
rotations.
"""

from .points import Point, ORIGIN, points_to_array, array_to_points, max_pairwise_distance
from .rotations import Axis, Sign, AxisSign, RotationMatrix, IDENTITY, ROTATIONS, enumerate_rotations
from .scanner import Scanner

__all__ = [
    "Point",
    "ORIGIN",
    "points_to_array",
    "array_to_points",
    "max_pairwise_distance",
    "Axis",
    "Sign",
    "AxisSign",
    "RotationMatrix",
    "IDENTITY",
    "ROTATIONS",
    "enumerate_rotations",
    "Scanner",
]
