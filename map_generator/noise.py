# map_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides the seeded 2D gradient (Perlin) noise field and the
fractal combinator that sums several octaves of it.

Data Contract:
---------------
- Inputs:
    - A 32-bit seed, or a pre-shuffled permutation of 0..255.
    - x, y: scalar floats or NumPy arrays of coordinates.
    - base_scale, octaves: Standard fractal parameters.
- Outputs:
    - Noise values in [0, 1], scalar or with the broadcast shape of x and y.
- Side Effects: None. A field never changes after construction.
- Invariants: Scalar and array evaluation perform the same floating point
  operations in the same order, so both paths return identical values.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .rng import Mulberry32

PERMUTATION_SIZE = 256

# The eight compass directions, picked by the low three bits of a corner hash.
_GRADIENT_VECTORS = np.array([
    [1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0],
    [1.0, 1.0], [-1.0, 1.0], [1.0, -1.0], [-1.0, -1.0],
])


@njit
def _lerp(a, b, t):
    "Linear interpolation."
    return a + t * (b - a)


@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _gradient(h, x, y):
    """Calculates the dot product between a corner's gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h & 7]
    # Use explicit indexing for Numba compatibility
    return g[0] * x + g[1] * y


@njit
def _sample(perm, x, y):
    """Single noise sample in [0, 1]. `perm` is the 512-entry doubled table."""
    x_floor = np.floor(x)
    y_floor = np.floor(y)

    xi = int(x_floor) & 255
    yi = int(y_floor) & 255

    xf = x - x_floor
    yf = y - y_floor

    u = _fade(xf)
    v = _fade(yf)

    aa = perm[xi + perm[yi]]
    ab = perm[xi + perm[yi + 1]]
    ba = perm[xi + 1 + perm[yi]]
    bb = perm[xi + 1 + perm[yi + 1]]

    x1 = _lerp(_gradient(aa, xf, yf), _gradient(ba, xf - 1, yf), u)
    x2 = _lerp(_gradient(ab, xf, yf - 1), _gradient(bb, xf - 1, yf - 1), u)

    # Remap from roughly [-1, 1] to [0, 1] and clamp.
    value = _lerp(x1, x2, v) * 0.5 + 0.5
    if value < 0.0:
        value = 0.0
    if value > 1.0:
        value = 1.0
    return value


@njit
def _sample_flat(perm, xs, ys):
    """
    Evaluates the noise over flat coordinate arrays.
    This function is JIT-compiled with Numba; the explicit loop compiles to
    efficient machine code.
    """
    count = xs.shape[0]
    out = np.empty(count)
    for i in range(count):
        out[i] = _sample(perm, xs[i], ys[i])
    return out


def build_permutation(seed: int) -> np.ndarray:
    """
    Shuffles the identity permutation of 0..255 with a Fisher-Yates pass driven
    by a Mulberry32 generator seeded with `seed`.
    """
    rng = Mulberry32(seed)
    p = list(range(PERMUTATION_SIZE))
    for i in range(PERMUTATION_SIZE - 1, 0, -1):
        j = int(rng.draw() * (i + 1))
        p[i], p[j] = p[j], p[i]
    return np.array(p, dtype=np.uint8)


def _validate_permutation(permutation) -> np.ndarray:
    table = np.asarray(permutation)
    if table.shape != (PERMUTATION_SIZE,):
        raise ValueError(f"Permutation table must have {PERMUTATION_SIZE} entries, got shape {table.shape}.")
    if not np.array_equal(np.sort(table), np.arange(PERMUTATION_SIZE)):
        raise ValueError("Permutation table must be a bijection of 0..255.")
    return table.astype(np.uint8)


class PerlinNoise2D:
    """
    A 2D gradient noise field owning its permutation table.

    The field is callable: `field(x, y)` accepts scalars or NumPy arrays and
    returns values in [0, 1].
    """
    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, permutation_table: np.ndarray = None):
        """
        Args:
            seed (int): Seed for the Fisher-Yates shuffle. Ignored when a
                permutation table is injected.
            permutation_table (np.ndarray, optional): A pre-computed
                permutation of 0..255. If None, one is shuffled from the seed.
        """
        if permutation_table is not None:
            self._permutation = _validate_permutation(permutation_table)
        else:
            self._permutation = build_permutation(seed)

        # Doubled so that corner lookups never need to wrap.
        self._perm = np.concatenate([self._permutation, self._permutation]).astype(np.int64)

    @property
    def permutation(self) -> np.ndarray:
        """A copy of the 256-entry permutation."""
        return self._permutation.copy()

    def sample(self, x: float, y: float) -> float:
        """Noise value at a single point."""
        return float(_sample(self._perm, float(x), float(y)))

    def sample_grid(self, x, y) -> np.ndarray:
        """Noise values for coordinate arrays (broadcast against each other)."""
        xs, ys = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
        flat = _sample_flat(self._perm, np.ascontiguousarray(xs).ravel(), np.ascontiguousarray(ys).ravel())
        return flat.reshape(xs.shape)

    def __call__(self, x, y):
        if np.ndim(x) == 0 and np.ndim(y) == 0:
            return self.sample(x, y)
        return self.sample_grid(x, y)


def fractal_noise(noise_fn, x, y, base_scale: float,
                  octaves: int = DEFAULTS.FRACTAL_OCTAVES,
                  persistence: float = DEFAULTS.FRACTAL_PERSISTENCE,
                  lacunarity: float = DEFAULTS.FRACTAL_LACUNARITY):
    """
    Sums `octaves` samples of `noise_fn`, starting at `base_scale` with unit
    amplitude; each octave multiplies the frequency by `lacunarity` and the
    amplitude by `persistence`. The sum is divided by the total amplitude, so
    the result stays in the range of a single sample.

    `noise_fn` is any callable (x, y) -> value; x and y may be arrays.
    """
    if octaves < 1:
        raise ValueError(f"At least one octave is required, got {octaves}.")

    total = 0.0
    amplitude = 1.0
    total_amplitude = 0.0
    scale = base_scale

    for _ in range(octaves):
        total = total + noise_fn(x * scale, y * scale) * amplitude
        total_amplitude += amplitude
        amplitude *= persistence
        scale *= lacunarity

    return total / total_amplitude
