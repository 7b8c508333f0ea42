"""
Membership functions for fuzzy matching.

Each function maps a value and shape parameters to a membership degree
in [0, 1]. Shape parameters that violate their ordering raise
InvalidShapeParameters instead of being clamped.
"""

import math
from typing import Callable, Dict

from .errors import InvalidShapeParameters


def triangular(x: float, a: float, b: float, c: float) -> float:
    """
    Triangular membership: rises from a to the peak b, falls to c.

    Args:
        x: Input value
        a: Left foot
        b: Peak
        c: Right foot

    Returns:
        Membership degree (0-1)

    Raises:
        InvalidShapeParameters: If not a <= b <= c
    """
    if not a <= b <= c:
        raise InvalidShapeParameters(
            f"Triangular membership requires a <= b <= c, got a={a}, b={b}, c={c}"
        )
    if x == b:
        return 1.0
    if x <= a or x > c:
        return 0.0
    if x < b:
        return (x - a) / (b - a)
    return (c - x) / (c - b)


def trapezoidal(x: float, a: float, b: float, c: float, d: float) -> float:
    """
    Trapezoidal membership: rises a to b, plateau b to c, falls c to d.

    Args:
        x: Input value
        a: Left foot
        b: Left shoulder
        c: Right shoulder
        d: Right foot

    Returns:
        Membership degree (0-1)

    Raises:
        InvalidShapeParameters: If not a <= b <= c <= d
    """
    if not a <= b <= c <= d:
        raise InvalidShapeParameters(
            f"Trapezoidal membership requires a <= b <= c <= d, "
            f"got a={a}, b={b}, c={c}, d={d}"
        )
    if b <= x <= c:
        return 1.0
    if x <= a or x > d:
        return 0.0
    if x < b:
        return (x - a) / (b - a)
    return (d - x) / (d - c)


def gaussian(x: float, mean: float, sigma: float) -> float:
    """
    Gaussian membership centred on mean.

    Raises:
        InvalidShapeParameters: If sigma <= 0
    """
    if sigma <= 0:
        raise InvalidShapeParameters(f"Gaussian membership requires sigma > 0, got {sigma}")
    return math.exp(-0.5 * ((x - mean) / sigma) ** 2)


def simple(x: float, target: float, fuzzy_factor: float) -> float:
    """Linear decay away from target; the denominator never drops below 1."""
    max_diff = max(target * fuzzy_factor, 1)
    return max(0.0, 1 - abs(x - target) / max_diff)


# Shape builders: (value, target, fuzzy_factor) -> degree.
# The spread uses |target| so negative targets still yield ordered shapes.
def _triangular_around(x: float, target: float, fuzzy_factor: float) -> float:
    spread = abs(target) * fuzzy_factor
    return triangular(x, target - spread, target, target + spread)


def _trapezoidal_around(x: float, target: float, fuzzy_factor: float) -> float:
    spread = abs(target) * fuzzy_factor
    return trapezoidal(
        x,
        target - spread,
        target - spread / 2,
        target + spread / 2,
        target + spread,
    )


def _gaussian_around(x: float, target: float, fuzzy_factor: float) -> float:
    return gaussian(x, target, abs(target) * fuzzy_factor)


MEMBERSHIP_KINDS: Dict[str, Callable[[float, float, float], float]] = {
    "simple": simple,
    "triangular": _triangular_around,
    "trapezoidal": _trapezoidal_around,
    "gaussian": _gaussian_around,
}


def membership_around(kind: str, x: float, target: float, fuzzy_factor: float) -> float:
    """
    Evaluate the named membership kind with its shape derived from target.

    Args:
        kind: One of 'simple', 'triangular', 'trapezoidal', 'gaussian'
        x: Candidate value
        target: Ideal value
        fuzzy_factor: Width of the shape relative to target

    Returns:
        Membership degree (0-1)

    Raises:
        ValueError: If kind is unknown
        InvalidShapeParameters: If the derived shape is degenerate
    """
    func = MEMBERSHIP_KINDS.get(kind)
    if func is None:
        raise ValueError(
            f"Unknown membership kind: {kind}. "
            f"Available kinds: {', '.join(MEMBERSHIP_KINDS.keys())}"
        )
    return func(x, target, fuzzy_factor)
