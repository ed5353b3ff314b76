"""Steering rules.

Every rule is a pure function returning a 2D acceleration contribution. The
flock weights and sums them, then clamps the total to its ``max_force``.
Rules never divide by a zero length: degenerate directions contribute zero.
"""

import numpy as np

from .errors import DegenerateVectorError
from .vector import normalize


def separation(position: np.ndarray, neighbor_positions: np.ndarray, too_close: float) -> np.ndarray:
    """
    Push away from neighbours closer than ``too_close``.

    Each close neighbour adds a unit vector pointing away from it, divided by
    the distance, so nearer neighbours push harder. The result is averaged
    over the neighbours that contributed.
    """
    steer = np.zeros(2)
    count = 0

    for other in neighbor_positions:
        away = position - other
        dist = float(np.linalg.norm(away))
        if dist >= too_close:
            continue
        try:
            steer += normalize(away) / dist
        except DegenerateVectorError:
            # Stacked on top of each other: no direction to flee in
            continue
        count += 1

    if count == 0:
        return steer
    return steer / count


def alignment(velocity: np.ndarray, neighbor_velocities: np.ndarray) -> np.ndarray:
    """Steer toward the average neighbour velocity."""
    if len(neighbor_velocities) == 0:
        return np.zeros(2)
    return neighbor_velocities.mean(axis=0) - velocity


def cohesion(position: np.ndarray, neighbor_positions: np.ndarray) -> np.ndarray:
    """Steer toward the neighbours' centroid."""
    if len(neighbor_positions) == 0:
        return np.zeros(2)
    return neighbor_positions.mean(axis=0) - position


def border_avoidance(
    position: np.ndarray,
    arena_size: np.ndarray,
    border_thickness: float,
    margin: float
) -> np.ndarray:
    """
    Calculate an inward push near the playable edges.

    The playable region is ``[border, size - border]`` on each axis. Inside
    ``margin`` of a playable edge the push ramps up linearly and saturates at
    1 halfway through the margin; past the edge it stays at 1.

    Args:
        position: Agent position
        arena_size: Arena (width, height)
        border_thickness: Width of the border strip along every edge
        margin: Distance from the playable edge where turning starts

    Returns:
        Per-axis push in [-1, 1]
    """
    steer = np.zeros(2)

    for i in range(2):
        low = border_thickness
        high = arena_size[i] - border_thickness

        to_low = position[i] - low
        to_high = high - position[i]

        if to_low < margin:
            steer[i] += _push_strength(margin - to_low, margin)
        if to_high < margin:
            steer[i] -= _push_strength(margin - to_high, margin)

    return steer


def _push_strength(penetration: float, margin: float) -> float:
    if margin <= 0:
        # No ramp: full push once the playable edge is crossed
        return 1.0 if penetration > 0 else 0.0
    return min(penetration / margin * 2.0, 1.0)


def pointer_interaction(position: np.ndarray, pointer, radius: float) -> np.ndarray:
    """
    Flee from the pointer when it comes within ``radius``.

    The push points from the pointer to the agent and falls off linearly from
    1 at the pointer to 0 at ``radius``. A missing pointer contributes zero.
    The caller's weight picks the sign: negative weights turn this into
    attraction.
    """
    if pointer is None:
        return np.zeros(2)

    away = position - np.asarray(pointer, dtype=np.float64)
    dist = float(np.linalg.norm(away))
    if dist >= radius:
        return np.zeros(2)

    try:
        return normalize(away) * (1.0 - dist / radius)
    except DegenerateVectorError:
        return np.zeros(2)
