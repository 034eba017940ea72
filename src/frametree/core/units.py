"""Angle conversion utilities.

Tree files store rotations in radians. These helpers are used for display.
"""

import math


def rad_to_deg(value: float | int) -> float:
    """Convert radians to degrees."""
    return float(value) * 180.0 / math.pi


__all__ = [
    "rad_to_deg",
]
