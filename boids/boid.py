"""Individual boid entity with position, velocity and derived heading."""

import numpy as np
from dataclasses import dataclass, field
from typing import Tuple

from .vector import heading_angle, magnitude


@dataclass
class Boid:
    """
    A single boid (bird-oid object) in the simulation.

    The flock keeps its agents as packed arrays; a ``Boid`` is a detached copy
    of one row, handed out for inspection and never written back.

    Attributes:
        position: 2D position in simulation space
        velocity: 2D velocity, its direction is the rendered heading
        color: RGB color tuple (0-1 range)
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    color: Tuple[float, float, float] = (1.0, 1.0, 1.0)

    @property
    def speed(self) -> float:
        return float(magnitude(self.velocity))

    @property
    def heading(self) -> float:
        """Heading in radians, measured from +x; 0.0 when at rest."""
        return heading_angle(self.velocity)
