"""
Angle utility functions.
"""

import math


def normalize_angle(angle):
    """
    Normalize angle to the (-pi, pi] range.

    Args:
        angle (float): Angle in radians

    Returns:
        float: Normalized angle in (-pi, pi]
    """
    if not math.isfinite(angle):
        return angle
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def wrap_degrees(degrees):
    """Wrap an integer angle in degrees to [0, 360)."""
    return degrees % 360

