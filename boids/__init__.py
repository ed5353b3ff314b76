"""2D flocking simulation core."""

from .boid import Boid
from .errors import ConstructionError, DegenerateVectorError
from .flock import Flock
from .neighbors import SpatialGrid, neighbors_within

__all__ = [
    "Boid",
    "ConstructionError",
    "DegenerateVectorError",
    "Flock",
    "SpatialGrid",
    "neighbors_within",
]
