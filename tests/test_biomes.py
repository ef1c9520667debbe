"""Tests for the terrain decision cascade and the post-processing passes."""

import numpy as np
import pytest

from map_generator.biomes import (
    apply_coastal_swamps,
    apply_sparse_hills,
    classify_cell,
    classify_terrain,
    ocean_neighbor_mask,
)
from map_generator.terrain import TerrainType as T

from conftest import grid_from_rows


class TestClassificationCascade:
    """Test single-cell classification against the threshold table."""

    @pytest.mark.parametrize("elevation, moisture, latitude, north, expected", [
        # Ocean
        (0.40, 0.40, 0.0, 0.0, T.OCEAN),
        (0.4599, 0.90, 0.5, 0.5, T.OCEAN),
        # Coastal band
        (0.46, 0.50, 0.0, 0.0, T.PRAIRIE),
        (0.50, 0.80, 0.0, 0.0, T.SWAMP),
        (0.50, 0.10, 0.0, 0.0, T.DESERT),
        (0.50, 0.72, 0.0, 0.0, T.PRAIRIE),
        # Lowlands
        (0.58, 0.15, 0.0, 0.0, T.DESERT),
        (0.58, 0.30, 0.0, 0.0, T.PRAIRIE),
        (0.58, 0.80, 0.1, 0.5, T.JUNGLE),
        (0.58, 0.60, 0.1, 0.5, T.GRASSLAND),
        (0.58, 0.60, 0.5, 0.5, T.FOREST),
        (0.58, 0.45, 0.5, 0.5, T.GRASSLAND),
        # Uplands
        (0.63, 0.50, 0.8, 1.0, T.TUNDRA),
        (0.63, 0.70, 0.8, 1.0, T.HILL),
        (0.63, 0.50, 0.2, 0.5, T.HILL),
        # Highlands
        (0.70, 0.50, 0.9, 0.9, T.ARCTIC),
        (0.70, 0.60, 0.9, 0.9, T.MOUNTAIN),
        (0.70, 0.50, 0.9, 0.7, T.MOUNTAIN),
        (0.70, 0.50, 0.8, 0.1, T.ARCTIC),
        (0.70, 0.50, 0.5, 0.1, T.MOUNTAIN),
        (1.00, 0.90, 0.0, 0.5, T.MOUNTAIN),
    ])
    def test_cascade(self, elevation, moisture, latitude, north, expected):
        assert classify_cell(elevation, moisture, latitude, north) is expected

    def test_constant_inputs_are_all_ocean(self):
        shape = (6, 9)
        grid = classify_terrain(
            np.full(shape, 0.40), np.full(shape, 0.40), np.zeros(shape), np.zeros(shape)
        )
        assert grid.dtype == np.uint8
        assert np.all(grid == T.OCEAN)

    def test_grid_matches_cell_rule(self):
        rng = np.random.default_rng(3)
        e, m, lat, north = (rng.uniform(0.0, 1.0, (8, 8)) for _ in range(4))
        grid = classify_terrain(e, m, lat, north)
        for (row, col), value in np.ndenumerate(grid):
            assert value == classify_cell(e[row, col], m[row, col], lat[row, col], north[row, col])

    def test_every_cell_has_a_known_category(self):
        rng = np.random.default_rng(11)
        grid = classify_terrain(*(rng.uniform(0.0, 1.0, (20, 20)) for _ in range(4)))
        assert set(np.unique(grid)) <= {int(t) for t in T}

    def test_custom_thresholds(self):
        levels = {"sea": 0.9, "coast": 0.95, "lowland": 0.97, "upland": 0.98}
        assert classify_cell(0.8, 0.5, 0.0, 0.0, terrain_levels=levels) is T.OCEAN


class TestSparseHills:
    """Test the scattered hill pass."""

    @pytest.fixture
    def snapshot(self):
        return grid_from_rows([
            "GPF~",
            "DSTM",
            "AJGP",
        ])

    def test_peaks_become_hills(self, snapshot):
        elevation = np.full(snapshot.shape, 0.55)
        noise = np.full(snapshot.shape, 0.9)
        result = apply_sparse_hills(snapshot, elevation, noise)
        assert result.tolist() == grid_from_rows([
            "HHH~",
            "DSTM",
            "AHHH",
        ]).tolist()

    def test_snapshot_not_modified(self, snapshot):
        original = snapshot.copy()
        apply_sparse_hills(snapshot, np.full(snapshot.shape, 0.55), np.full(snapshot.shape, 0.9))
        assert np.array_equal(snapshot, original)

    @pytest.mark.parametrize("elevation, noise", [
        (0.55, 0.84),   # noise must exceed the threshold
        (0.49, 0.90),   # too close to sea level
        (0.85, 0.90),   # too high
    ])
    def test_conditions(self, snapshot, elevation, noise):
        result = apply_sparse_hills(snapshot, np.full(snapshot.shape, elevation), np.full(snapshot.shape, noise))
        assert np.array_equal(result, snapshot)


class TestCoastalSwamps:
    """Test the coastal swamp pass."""

    @pytest.fixture
    def snapshot(self):
        return grid_from_rows([
            "GGG",
            "~GG",
            "GMA",
        ])

    def test_ocean_neighbor_mask_is_four_connected(self, snapshot):
        mask = ocean_neighbor_mask(snapshot)
        assert mask.tolist() == [
            [True, False, False],
            [False, True, False],
            [True, False, False],
        ]

    def test_map_edge_is_not_ocean(self):
        mask = ocean_neighbor_mask(grid_from_rows(["GG", "GG"]))
        assert not mask.any()

    def test_wet_coast_becomes_swamp(self, snapshot):
        moisture = np.full(snapshot.shape, 0.8)
        noise = np.full(snapshot.shape, 0.9)
        result = apply_coastal_swamps(snapshot, moisture, noise)
        assert result.tolist() == grid_from_rows([
            "SGG",
            "~SG",
            "SMA",
        ]).tolist()

    def test_fixed_terrain_never_changes(self):
        snapshot = grid_from_rows(["~M", "A~"])
        result = apply_coastal_swamps(snapshot, np.full((2, 2), 0.9), np.full((2, 2), 0.95))
        assert np.array_equal(result, snapshot)

    @pytest.mark.parametrize("moisture, noise", [(0.7, 0.9), (0.8, 0.80)])
    def test_conditions(self, snapshot, moisture, noise):
        result = apply_coastal_swamps(snapshot, np.full(snapshot.shape, moisture), np.full(snapshot.shape, noise))
        assert np.array_equal(result, snapshot)

    def test_new_swamps_do_not_spread(self):
        # Swamp only depends on ocean in the snapshot, never on cells this pass turned.
        snapshot = grid_from_rows(["~GGG"])
        result = apply_coastal_swamps(snapshot, np.full((1, 4), 0.8), np.full((1, 4), 0.9))
        assert result.tolist() == grid_from_rows(["~SGG"]).tolist()
