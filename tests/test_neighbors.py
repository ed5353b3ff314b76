import numpy as np
import pytest

from boids.neighbors import SpatialGrid, neighbors_within


def test_brute_force_uses_strict_radius_and_excludes_self():
    positions = np.array([
        [0.0, 0.0],
        [10.0, 0.0],    # exactly on the radius: excluded
        [0.0, 9.99],
        [50.0, 50.0],
    ])
    result = neighbors_within(positions, 0, 10.0)
    assert result.tolist() == [2]


def test_coincident_agents_are_neighbors():
    positions = np.array([[5.0, 5.0], [5.0, 5.0]])
    assert neighbors_within(positions, 0, 1.0).tolist() == [1]
    assert neighbors_within(positions, 1, 1.0).tolist() == [0]


def test_lone_agent_has_no_neighbors():
    positions = np.array([[5.0, 5.0]])
    assert len(neighbors_within(positions, 0, 100.0)) == 0


class TestSpatialGrid:

    def test_matches_brute_force(self, rng):
        positions = rng.uniform(0.0, 1000.0, size=(300, 2))
        grid = SpatialGrid(60.0, (1000.0, 1000.0))
        grid.rebuild(positions)

        for i in range(len(positions)):
            expected = neighbors_within(positions, i, 60.0)
            np.testing.assert_array_equal(grid.query(i, 60.0), expected)

    def test_agents_outside_the_arena_are_still_found(self):
        positions = np.array([
            [-30.0, 500.0],
            [20.0, 500.0],
            [1030.0, 1040.0],
            [990.0, 990.0],
        ])
        grid = SpatialGrid(60.0, (1000.0, 1000.0))
        grid.rebuild(positions)

        assert grid.query(0, 60.0).tolist() == [1]
        assert grid.query(2, 70.0).tolist() == [3]

    def test_radius_larger_than_cell(self, rng):
        positions = rng.uniform(0.0, 400.0, size=(80, 2))
        grid = SpatialGrid(25.0, (400.0, 400.0))
        grid.rebuild(positions)

        for i in range(len(positions)):
            np.testing.assert_array_equal(grid.query(i, 90.0), neighbors_within(positions, i, 90.0))

    def test_resize_changes_cell_layout(self):
        grid = SpatialGrid(50.0, (100.0, 100.0))
        assert grid.num_cells == 4
        grid.resize((200.0, 100.0))
        assert (grid.grid_w, grid.grid_h) == (4, 2)

    def test_rejects_non_positive_cell_size(self):
        with pytest.raises(ValueError):
            SpatialGrid(0.0, (100.0, 100.0))
