"""Neighbourhood queries: brute-force scan and a uniform spatial grid.

Both strategies answer the same question with the same semantics: the
indices of every *other* agent whose distance to the queried agent is
strictly below the radius, sorted ascending. Coincident agents count as
neighbours.

For the ~100 agents of the demo the brute-force scan (O(N) per query,
O(N^2) per frame) is the default; the grid pays off for larger flocks.
"""

import math
import numpy as np
from numba import njit


def neighbors_within(positions: np.ndarray, index: int, radius: float) -> np.ndarray:
    """Brute-force radius query over all agents."""
    offsets = positions - positions[index]
    dist_sq = np.einsum("ij,ij->i", offsets, offsets)
    mask = dist_sq < radius * radius
    mask[index] = False
    return np.flatnonzero(mask)


# ============================================================================
# NUMBA JIT-COMPILED SPATIAL GRID FUNCTIONS
# ============================================================================

@njit(cache=True)
def get_cell_index(x: float, y: float, cell_size: float, grid_w: int, grid_h: int) -> int:
    """Convert a 2D position to a 1D cell index, clamping to the edge cells."""
    cx = int(math.floor(x / cell_size))
    cy = int(math.floor(y / cell_size))

    cx = max(0, min(cx, grid_w - 1))
    cy = max(0, min(cy, grid_h - 1))

    return cx + cy * grid_w


@njit(cache=True)
def assign_cells(
    positions: np.ndarray,
    cell_indices: np.ndarray,
    cell_size: float,
    grid_w: int,
    grid_h: int,
    num_boids: int
):
    """Assign each boid to a cell."""
    for i in range(num_boids):
        cell_indices[i] = get_cell_index(
            positions[i, 0], positions[i, 1], cell_size, grid_w, grid_h
        )


@njit(cache=True)
def build_cell_lists(
    cell_indices: np.ndarray,
    sorted_indices: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    num_boids: int,
    num_cells: int
):
    """Build cell start indices and counts after sorting."""
    for i in range(num_cells):
        cell_starts[i] = -1
        cell_counts[i] = 0

    for i in range(num_boids):
        cell = cell_indices[sorted_indices[i]]
        if cell_starts[cell] == -1:
            cell_starts[cell] = i
        cell_counts[cell] += 1


@njit(cache=True)
def query_cells(
    positions: np.ndarray,
    sorted_indices: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    index: int,
    radius: float,
    cell_size: float,
    grid_w: int,
    grid_h: int,
    out: np.ndarray
) -> int:
    """Write neighbour indices of ``index`` into ``out``; return how many."""
    px = positions[index, 0]
    py = positions[index, 1]
    radius_sq = radius * radius
    cell_range = int(math.ceil(radius / cell_size))

    home = get_cell_index(px, py, cell_size, grid_w, grid_h)
    cx = home % grid_w
    cy = home // grid_w

    found = 0
    for dcy in range(-cell_range, cell_range + 1):
        ncy = cy + dcy
        if ncy < 0 or ncy >= grid_h:
            continue

        for dcx in range(-cell_range, cell_range + 1):
            ncx = cx + dcx
            if ncx < 0 or ncx >= grid_w:
                continue

            cell_idx = ncx + ncy * grid_w
            start = cell_starts[cell_idx]
            if start == -1:
                continue

            for k in range(cell_counts[cell_idx]):
                j = sorted_indices[start + k]
                if j == index:
                    continue

                dx = positions[j, 0] - px
                dy = positions[j, 1] - py
                if dx * dx + dy * dy < radius_sq:
                    out[found] = j
                    found += 1

    return found


class SpatialGrid:
    """
    Uniform bucket grid over the arena, rebuilt from a snapshot every frame.

    Agents that stray outside the arena are filed under the nearest edge cell,
    so the query never misses them.
    """

    def __init__(self, cell_size: float, arena_size):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = float(cell_size)
        self.resize(arena_size)
        self._positions = np.zeros((0, 2), dtype=np.float64)
        self._cell_indices = np.zeros(0, dtype=np.int32)
        self._sorted_indices = np.zeros(0, dtype=np.int32)
        self._out = np.zeros(0, dtype=np.int64)

    def resize(self, arena_size):
        width, height = arena_size
        self.grid_w = max(1, int(math.ceil(width / self.cell_size)))
        self.grid_h = max(1, int(math.ceil(height / self.cell_size)))
        self.num_cells = self.grid_w * self.grid_h
        self._cell_starts = np.full(self.num_cells, -1, dtype=np.int32)
        self._cell_counts = np.zeros(self.num_cells, dtype=np.int32)

    def rebuild(self, positions: np.ndarray):
        """Bucket a positions snapshot; queries read this snapshot only."""
        self._positions = np.ascontiguousarray(positions, dtype=np.float64)
        num_boids = len(self._positions)

        if len(self._cell_indices) != num_boids:
            self._cell_indices = np.zeros(num_boids, dtype=np.int32)
            self._out = np.zeros(num_boids, dtype=np.int64)

        assign_cells(
            self._positions, self._cell_indices,
            self.cell_size, self.grid_w, self.grid_h,
            num_boids
        )

        self._sorted_indices = np.argsort(self._cell_indices, kind="stable").astype(np.int32)

        build_cell_lists(
            self._cell_indices, self._sorted_indices,
            self._cell_starts, self._cell_counts,
            num_boids, self.num_cells
        )

    def query(self, index: int, radius: float) -> np.ndarray:
        found = query_cells(
            self._positions,
            self._sorted_indices,
            self._cell_starts,
            self._cell_counts,
            index,
            float(radius),
            self.cell_size,
            self.grid_w,
            self.grid_h,
            self._out
        )
        return np.sort(self._out[:found])
