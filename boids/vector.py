"""2D vector helpers on numpy arrays.

Vectors are ``np.ndarray`` of shape ``(2,)``. Helpers that reduce over
components work along the last axis, so they also accept stacked ``(N, 2)``
arrays. Arithmetic and dot products are plain numpy.
"""

import math
import numpy as np

from .errors import DegenerateVectorError

EPS = 1e-9


def vec2(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    """Build a float64 2D vector."""
    return np.array([x, y], dtype=np.float64)


def magnitude(v: np.ndarray):
    """Euclidean norm along the last axis."""
    return np.linalg.norm(v, axis=-1)


def distance(a: np.ndarray, b: np.ndarray):
    return magnitude(np.asarray(a) - np.asarray(b))


def normalize(v: np.ndarray) -> np.ndarray:
    """
    Unit vector in the direction of ``v``.

    Raises:
        DegenerateVectorError: if ``v`` has (near) zero length.
    """
    mag = float(np.linalg.norm(v))
    if mag < EPS:
        raise DegenerateVectorError(f"cannot normalize zero-length vector {v!r}")
    return v / mag


def normalize_or_zero(v: np.ndarray) -> np.ndarray:
    """Like ``normalize`` but a zero vector comes back as zero."""
    try:
        return normalize(v)
    except DegenerateVectorError:
        return np.zeros_like(v, dtype=np.float64)


def clamp_length(v: np.ndarray, max_len: float) -> np.ndarray:
    """
    Scale ``v`` down so that its length is at most ``max_len``.

    Direction is preserved and vectors already short enough are returned
    unchanged (as a copy). Works row-wise on ``(N, 2)`` input.
    """
    v = np.array(v, dtype=np.float64)
    mag = np.linalg.norm(v, axis=-1, keepdims=True)
    # Divide only where the limit is exceeded, so zero rows never hit 0/0
    too_long = mag > max_len
    scale = np.divide(max_len, mag, out=np.ones_like(mag), where=too_long)
    return v * scale


def heading_angle(v: np.ndarray) -> float:
    """Angle of ``v`` in radians, 0.0 for a zero vector."""
    if abs(v[0]) < EPS and abs(v[1]) < EPS:
        return 0.0
    return math.atan2(v[1], v[0])
