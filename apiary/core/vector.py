"""
core/vector.py

Plain 2D vector helpers over numpy arrays.

Positions, velocities and forces are all float64 arrays of shape (2,).
Everything here returns a new array; in-place accumulation is left
to the caller (``acc += force``).
"""

from __future__ import annotations
import math
import numpy as np


def vec(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    """Build a 2D vector."""
    return np.array([x, y], dtype=np.float64)


def magnitude(v: np.ndarray) -> float:
    return float(np.hypot(v[0], v[1]))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def set_mag(v: np.ndarray, mag: float) -> np.ndarray:
    """
    Rescale `v` to length `mag`.

    A zero vector has no direction and stays zero.
    A negative `mag` flips the direction.
    """
    length = magnitude(v)
    if length == 0.0:
        return np.zeros(2)
    return v * (mag / length)


def limit(v: np.ndarray, max_mag: float) -> np.ndarray:
    """Clamp the length of `v` to at most `max_mag`."""
    if max_mag <= 0:
        return np.zeros(2)
    length = magnitude(v)
    if length <= max_mag:
        return np.array(v, dtype=np.float64)
    return v * (max_mag / length)


def heading(v: np.ndarray) -> float:
    """Angle of `v` in radians, 0 for a zero vector."""
    if v[0] == 0.0 and v[1] == 0.0:
        return 0.0
    return math.atan2(v[1], v[0])


def from_angle(theta: float) -> np.ndarray:
    return vec(math.cos(theta), math.sin(theta))


def constrain(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def map_range(
    value: float,
    start1: float,
    stop1: float,
    start2: float,
    stop2: float,
) -> float:
    """
    Linearly re-map `value` from [start1, stop1] onto [start2, stop2].

    The result is clamped to the target range, so values outside the
    source range saturate instead of extrapolating. Either range may
    run backwards (e.g. 1000 -> 0 mapped onto 100 -> 1).
    """
    span = stop1 - start1
    if span == 0:
        return float(start2)
    mapped = start2 + (value - start1) * (stop2 - start2) / span
    low, high = min(start2, stop2), max(start2, stop2)
    return float(constrain(mapped, low, high))
