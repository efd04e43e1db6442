"""
Mathematical utilities for orientation estimation.
"""

from .utils import normalize_angle, wrap_degrees
from .rotation import identity, multiply, from_orientation, rotation_from_vector, to_euler
from .constants import *

__all__ = [
    "normalize_angle",
    "wrap_degrees",
    "identity",
    "multiply",
    "from_orientation",
    "rotation_from_vector",
    "to_euler",
]
