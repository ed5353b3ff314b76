"""Flock management: two-phase simulation step and triangle emission."""

import math
import numpy as np
from numba import njit

from config import boids as config
from rendering.primitives import PrimitiveType

from .boid import Boid
from .errors import ConstructionError
from .neighbors import SpatialGrid, neighbors_within
from .rules import alignment, border_avoidance, cohesion, pointer_interaction, separation
from .vector import clamp_length

NEIGHBOR_STRATEGIES = ("brute_force", "grid")

# Set by the constructor arguments, not by params
_NOT_OVERRIDABLE = {"count"}

# Tunables that must not be negative
_NON_NEGATIVE = (
    "max_speed", "min_speed", "max_force",
    "perception_radius", "separation_radius",
    "separation_weight", "alignment_weight", "cohesion_weight",
    "border_margin", "border_weight", "pointer_radius", "size",
)


# ============================================================================
# NUMBA JIT-COMPILED VERTEX BUILDING
# ============================================================================

@njit(cache=True)
def build_triangles(
    positions: np.ndarray,
    velocities: np.ndarray,
    colors: np.ndarray,
    vertices: np.ndarray,
    vert_colors: np.ndarray,
    length: float,
    half_width: float,
    num_boids: int
):
    """One triangle per boid, tip pointing along the velocity."""
    for i in range(num_boids):
        px, py = positions[i, 0], positions[i, 1]

        # Velocity -> forward direction, +x when at rest
        vx, vy = velocities[i, 0], velocities[i, 1]
        speed = math.sqrt(vx * vx + vy * vy)
        if speed < 0.0001:
            fx, fy = 1.0, 0.0
        else:
            fx, fy = vx / speed, vy / speed

        # Right-hand perpendicular
        rx, ry = -fy, fx

        # Centroid sits on the boid position
        tip_x = px + fx * length * (2.0 / 3.0)
        tip_y = py + fy * length * (2.0 / 3.0)
        back_x = px - fx * length / 3.0
        back_y = py - fy * length / 3.0

        base = i * 3
        vertices[base, 0] = tip_x
        vertices[base, 1] = tip_y
        vertices[base + 1, 0] = back_x + rx * half_width
        vertices[base + 1, 1] = back_y + ry * half_width
        vertices[base + 2, 0] = back_x - rx * half_width
        vertices[base + 2, 1] = back_y - ry * half_width

        for v in range(3):
            vert_colors[base + v, 0] = colors[i, 0]
            vert_colors[base + v, 1] = colors[i, 1]
            vert_colors[base + v, 2] = colors[i, 2]


# ============================================================================
# FLOCK CLASS
# ============================================================================

class Flock:
    """
    A fixed-size flock in a rectangular arena.

    Agents are stored as packed arrays; indices never change after
    construction. Each ``update`` first computes every agent's steering force
    against a snapshot of the previous frame, then integrates all agents at
    once, so the result does not depend on agent order.

    Args:
        count: Number of boids, must be positive
        arena_size: Arena extent, a scalar for a square or (width, height)
        params: Overrides for ``config.boids.FLOCK`` keys
        seed: Seed for the default random generator
        rng: A ``numpy.random.Generator`` to draw initial state from;
            takes precedence over ``seed``
    """

    def __init__(self, count: int, arena_size, params: dict = None,
                 seed: int = None, rng: np.random.Generator = None):
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count <= 0:
            raise ConstructionError(f"boid count must be a positive integer, got {count!r}")

        self._configure(arena_size, params)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        width, height = self.arena_size
        positions = self.rng.uniform(0.0, 1.0, size=(count, 2)) * np.array([width, height])
        angles = self.rng.uniform(0.0, 2.0 * np.pi, size=count)
        speeds = self.rng.uniform(0.5 * self.max_speed, self.max_speed, size=count)
        velocities = np.stack([np.cos(angles), np.sin(angles)], axis=1) * speeds[:, None]

        self._set_state(positions, velocities, self._generate_colors(count))

    @classmethod
    def from_state(cls, positions, velocities, arena_size, params: dict = None, colors=None):
        """
        Build a flock from an explicit snapshot.

        Velocities longer than ``max_speed`` are clamped. Colors default to
        white.
        """
        positions = np.array(positions, dtype=np.float64)
        velocities = np.array(velocities, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2 or len(positions) == 0:
            raise ConstructionError(f"positions must be a non-empty (N, 2) array, got shape {positions.shape}")
        if velocities.shape != positions.shape:
            raise ConstructionError(
                f"velocities shape {velocities.shape} does not match positions shape {positions.shape}"
            )

        flock = cls.__new__(cls)
        flock._configure(arena_size, params)
        flock.rng = np.random.default_rng()

        if colors is None:
            colors = np.ones((len(positions), 3))
        flock._set_state(positions, clamp_length(velocities, flock.max_speed), np.array(colors, dtype=np.float64))
        return flock

    # ------------------------------------------------------------------ setup

    def _configure(self, arena_size, params):
        self.arena_size = self._parse_extent(arena_size)
        if np.any(self.arena_size <= 0):
            raise ConstructionError(f"arena dimensions must be positive, got {tuple(self.arena_size)}")

        params = dict(params or {})
        unknown = sorted(set(params) - (set(config.FLOCK) - _NOT_OVERRIDABLE))
        if unknown:
            raise ConstructionError(f"unknown flock parameters: {', '.join(unknown)}")
        self.params = {**config.FLOCK, **params}
        p = self.params

        for key in _NON_NEGATIVE:
            if p[key] < 0:
                raise ConstructionError(f"{key} must not be negative, got {p[key]}")
        if p["min_speed"] > p["max_speed"]:
            raise ConstructionError(
                f"min_speed ({p['min_speed']}) exceeds max_speed ({p['max_speed']})"
            )
        if p["neighbor_strategy"] not in NEIGHBOR_STRATEGIES:
            raise ConstructionError(
                f"neighbor_strategy must be one of {NEIGHBOR_STRATEGIES}, got {p['neighbor_strategy']!r}"
            )

        self.max_speed = float(p["max_speed"])
        self.min_speed = float(p["min_speed"])
        self.max_force = float(p["max_force"])
        self.perception_radius = float(p["perception_radius"])
        self.separation_radius = float(p["separation_radius"])
        self.separation_weight = float(p["separation_weight"])
        self.alignment_weight = float(p["alignment_weight"])
        self.cohesion_weight = float(p["cohesion_weight"])
        self.border_margin = float(p["border_margin"])
        self.border_weight = float(p["border_weight"])
        self.pointer_radius = float(p["pointer_radius"])
        self.pointer_weight = float(p["pointer_weight"])
        self.triangle_length = float(p["size"])
        self.triangle_half_width = float(p["size"]) * 0.25

        self._grid = None
        if p["neighbor_strategy"] == "grid" and self.perception_radius > 0:
            self._grid = SpatialGrid(self.perception_radius, self.arena_size)

    def _set_state(self, positions, velocities, colors):
        self._positions = np.ascontiguousarray(positions, dtype=np.float64)
        self._velocities = np.ascontiguousarray(velocities, dtype=np.float64)
        self._colors = np.ascontiguousarray(colors, dtype=np.float64)
        self._forces = np.zeros_like(self._positions)

        # Vertex data (float32 for GPU)
        self.verts_per_boid = 3
        self._vertices = np.zeros((self.num_boids * self.verts_per_boid, 2), dtype=np.float32)
        self._vert_colors = np.zeros((self.num_boids * self.verts_per_boid, 3), dtype=np.float32)

    @staticmethod
    def _parse_extent(arena_size) -> np.ndarray:
        extent = np.asarray(arena_size, dtype=np.float64)
        if extent.ndim == 0:
            return np.array([float(extent), float(extent)])
        if extent.shape != (2,):
            raise ConstructionError(f"arena size must be a scalar or (width, height), got {arena_size!r}")
        return extent.copy()

    def _generate_colors(self, count: int) -> np.ndarray:
        """Shuffled rainbow, one hue per boid."""
        hues = np.linspace(0.0, 1.0, count, endpoint=False)
        self.rng.shuffle(hues)

        s = float(self.params["color_saturation"])
        v = np.full(count, float(self.params["color_value"]))
        h6 = hues * 6.0
        sector = np.floor(h6).astype(np.int64) % 6
        f = h6 - np.floor(h6)
        p = v * (1.0 - s)
        q = v * (1.0 - s * f)
        t = v * (1.0 - s * (1.0 - f))

        r = np.choose(sector, [v, q, p, p, t, v])
        g = np.choose(sector, [t, v, v, q, p, p])
        b = np.choose(sector, [p, p, t, v, v, q])
        return np.stack([r, g, b], axis=1)

    # ------------------------------------------------------------ read access

    @property
    def num_boids(self) -> int:
        return len(self._positions)

    def __len__(self) -> int:
        return self.num_boids

    @property
    def positions(self) -> np.ndarray:
        return self._positions.copy()

    @property
    def velocities(self) -> np.ndarray:
        return self._velocities.copy()

    @property
    def colors(self) -> np.ndarray:
        return self._colors.copy()

    @property
    def applied_forces(self) -> np.ndarray:
        """Clamped forces used by the most recent ``update``."""
        return self._forces.copy()

    @property
    def boids(self) -> tuple:
        return tuple(
            Boid(position=self._positions[i].copy(),
                 velocity=self._velocities[i].copy(),
                 color=tuple(float(c) for c in self._colors[i]))
            for i in range(self.num_boids)
        )

    # ------------------------------------------------------------- simulation

    def update(self, dt: float, arena_size=None, border_thickness: float = 0.0, pointer=None):
        """
        Advance the flock by one tick.

        Args:
            dt: Elapsed seconds; non-positive values leave the flock untouched
            arena_size: Current arena extent, ``None`` keeps the previous one
            border_thickness: Width of the border strip on every edge
            pointer: Pointer position in simulation space, or ``None``
        """
        if dt <= 0:
            return

        if arena_size is not None:
            extent = self._parse_extent(arena_size)
            if not np.array_equal(extent, self.arena_size):
                self.arena_size = extent
                if self._grid is not None:
                    self._grid.resize(extent)

        if pointer is not None:
            pointer = np.asarray(pointer, dtype=np.float64)

        # Compute phase reads only this snapshot
        positions = self._positions.copy()
        velocities = self._velocities.copy()

        self._forces = self._compute_forces(
            positions, velocities, self.arena_size, float(border_thickness), pointer
        )
        self._integrate(self._forces, float(dt))

    def _compute_forces(self, positions, velocities, arena_size, border_thickness, pointer) -> np.ndarray:
        forces = np.zeros_like(positions)
        radius = self.perception_radius

        if self._grid is not None:
            self._grid.rebuild(positions)

        for i in range(len(positions)):
            if self._grid is not None:
                idx = self._grid.query(i, radius)
            else:
                idx = neighbors_within(positions, i, radius)

            pos_i = positions[i]
            neighbor_positions = positions[idx]

            total = (
                self.separation_weight * separation(pos_i, neighbor_positions, self.separation_radius)
                + self.alignment_weight * alignment(velocities[i], velocities[idx])
                + self.cohesion_weight * cohesion(pos_i, neighbor_positions)
                + self.border_weight * border_avoidance(pos_i, arena_size, border_thickness, self.border_margin)
                + self.pointer_weight * pointer_interaction(pos_i, pointer, self.pointer_radius)
            )
            forces[i] = clamp_length(total, self.max_force)

        return forces

    def _integrate(self, forces: np.ndarray, dt: float):
        velocities = clamp_length(self._velocities + forces * dt, self.max_speed)

        if self.min_speed > 0:
            speed = np.linalg.norm(velocities, axis=1, keepdims=True)
            # Braking against the motion may pass through zero speed
            not_braking = np.einsum("ij,ij->i", velocities, forces)[:, None] >= 0
            slow = (speed > 0) & (speed < self.min_speed) & not_braking
            scale = np.divide(self.min_speed, speed, out=np.ones_like(speed), where=slow)
            velocities = velocities * scale

        self._velocities = velocities
        self._positions = self._positions + velocities * dt

    # -------------------------------------------------------------- rendering

    def build_vertices(self):
        """Return ``(vertices, colors)`` for one triangle per boid."""
        build_triangles(
            self._positions,
            self._velocities,
            self._colors,
            self._vertices,
            self._vert_colors,
            self.triangle_length,
            self.triangle_half_width,
            self.num_boids
        )
        return self._vertices, self._vert_colors

    def draw(self, context, renderer, camera):
        """Submit the flock's triangles to ``renderer``; reads state only."""
        vertices, colors = self.build_vertices()
        renderer.draw(context, vertices, colors, PrimitiveType.TRIANGLES, camera)


def warmup():
    """Compile the jitted kernels ahead of the first frame."""
    flock = Flock(16, 200.0, params={"neighbor_strategy": "grid"}, seed=0)
    flock.update(1 / 60, border_thickness=10.0, pointer=(100.0, 100.0))
    flock.build_vertices()
