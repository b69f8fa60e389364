"""
Utility functions for ephemcore.

Provides angle normalization helpers compatible with the pyswisseph API.
"""

import math


def difdeg2n(p1: float, p2: float) -> float:
    """
    Calculate distance in degrees p1 - p2 normalized to [-180;180].

    Compatible with pyswisseph's swe.difdeg2n() function.

    Args:
        p1: First angle in degrees
        p2: Second angle in degrees

    Returns:
        Normalized difference in range [-180, 180]

    Examples:
        >>> difdeg2n(10, 20)
        -10.0
        >>> difdeg2n(350, 10)
        -20.0
        >>> difdeg2n(180, 0)
        180.0
    """
    diff = (p1 - p2) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def difrad2n(p1: float, p2: float) -> float:
    """Distance in radians p1 - p2 normalized to [-pi;pi]."""
    diff = (p1 - p2) % (2 * math.pi)
    if diff > math.pi:
        diff -= 2 * math.pi
    return diff


def degnorm(x: float) -> float:
    """Normalize an angle to [0, 360)."""
    y = x % 360.0
    if y >= 360.0:
        y -= 360.0
    return y


def radnorm(x: float) -> float:
    """Normalize an angle to [0, 2*pi)."""
    y = x % (2 * math.pi)
    if y >= 2 * math.pi:
        y -= 2 * math.pi
    return y
