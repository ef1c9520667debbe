"""Tests for the permutation table, Perlin field and fractal combinator."""

import numpy as np
import pytest

from map_generator.noise import (
    PERMUTATION_SIZE,
    PerlinNoise2D,
    build_permutation,
    fractal_noise,
)


class TestPermutation:
    """Test the seeded Fisher-Yates shuffle."""

    def test_golden_prefix(self):
        table = build_permutation(123456789)
        assert table[:10].tolist() == [250, 78, 27, 217, 40, 0, 222, 218, 81, 230]

    @pytest.mark.parametrize("seed", [0, 1, -1, 7, 123456789, -304489766, 2 ** 31 - 1])
    def test_is_bijection(self, seed):
        table = build_permutation(seed)
        assert table.shape == (PERMUTATION_SIZE,)
        assert sorted(table.tolist()) == list(range(PERMUTATION_SIZE))

    def test_deterministic(self):
        assert np.array_equal(build_permutation(5), build_permutation(5))
        assert not np.array_equal(build_permutation(5), build_permutation(6))


class TestPerlinNoise2D:
    """Test sampling of the gradient noise field."""

    @pytest.fixture
    def field(self):
        return PerlinNoise2D(123456789)

    @pytest.mark.parametrize("x, y, expected", [
        (0.5, 0.5, 0.5),
        (0.0, 0.0, 0.5),
        (3.7, 1.2, 0.6196682796799999),
        (-2.3, 10.9, 0.35873220175999987),
        (100.25, 200.75, 0.24107885360717773),
        (17.31, -4.77, 0.19473742921692544),
    ])
    def test_golden_samples(self, field, x, y, expected):
        assert field.sample(x, y) == pytest.approx(expected, abs=1e-12)

    def test_integer_lattice_is_midpoint(self, field):
        # Every gradient contribution vanishes on lattice points.
        for x, y in [(1, 2), (-5, 3), (255, 256)]:
            assert field.sample(x, y) == 0.5

    def test_bounded(self, field):
        rng = np.random.default_rng(0)
        xs = rng.uniform(-1000.0, 1000.0, 5000)
        ys = rng.uniform(-1000.0, 1000.0, 5000)
        values = field(xs, ys)
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_scalar_and_grid_agree(self, field):
        xs, ys = np.meshgrid(np.linspace(-3.0, 9.0, 17), np.linspace(0.1, 7.3, 13))
        grid = field.sample_grid(xs, ys)
        assert grid.shape == xs.shape
        for (row, col), value in np.ndenumerate(grid):
            assert value == field.sample(xs[row, col], ys[row, col])

    def test_call_dispatch(self, field):
        assert isinstance(field(3.7, 1.2), float)
        assert field(np.array([3.7]), np.array([1.2])).shape == (1,)

    def test_broadcasting(self, field):
        values = field(np.arange(4.0)[np.newaxis, :] + 0.3, np.arange(3.0)[:, np.newaxis] + 0.6)
        assert values.shape == (3, 4)

    def test_injected_permutation(self):
        identity = np.arange(PERMUTATION_SIZE)
        field = PerlinNoise2D(permutation_table=identity)
        assert np.array_equal(field.permutation, identity)
        assert 0.0 <= field.sample(1.3, 2.7) <= 1.0

    def test_permutation_is_a_copy(self, field):
        table = field.permutation
        table[:] = 0
        assert sorted(field.permutation.tolist()) == list(range(PERMUTATION_SIZE))

    @pytest.mark.parametrize("table", [
        np.arange(255),
        np.zeros(PERMUTATION_SIZE, dtype=int),
        np.arange(1, PERMUTATION_SIZE + 1),
    ])
    def test_invalid_permutation_rejected(self, table):
        with pytest.raises(ValueError):
            PerlinNoise2D(permutation_table=table)


class TestFractalNoise:
    """Test octave summation."""

    @pytest.fixture
    def field(self):
        return PerlinNoise2D(7)

    def test_single_octave_is_one_sample(self, field):
        assert fractal_noise(field, 3.0, 4.0, 0.1, octaves=1) == field.sample(3.0 * 0.1, 4.0 * 0.1)

    @pytest.mark.parametrize("octaves", [1, 2, 5, 15])
    def test_bounded(self, field, octaves):
        xs, ys = np.meshgrid(np.arange(40.0), np.arange(30.0))
        values = fractal_noise(field, xs, ys, 0.08, octaves=octaves)
        assert values.min() >= -1e-9
        assert values.max() <= 1.0 + 1e-9

    def test_constant_field(self):
        values = fractal_noise(lambda x, y: np.full(np.broadcast(x, y).shape, 0.4),
                               np.zeros((2, 3)), np.zeros((2, 3)), 0.1)
        assert np.allclose(values, 0.4)

    def test_records_octave_scales(self):
        seen = []

        def recording(x, y):
            seen.append(x)
            return 0.5

        fractal_noise(recording, 1.0, 1.0, 0.25, octaves=4)
        assert seen == [0.25, 0.5, 1.0, 2.0]

    def test_requires_an_octave(self, field):
        with pytest.raises(ValueError):
            fractal_noise(field, 1.0, 1.0, 0.1, octaves=0)
