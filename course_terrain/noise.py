# course_terrain/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides 2D simplex noise driven by a seeded permutation table.
The kernels are pure, stateless functions; NoiseField simply binds one
permutation table to them.

Data Contract:
---------------
- Inputs:
    - p: A 512-entry permutation table (256 shuffled values, duplicated).
    - x, y: Scalars or NumPy arrays of coordinates.
- Outputs:
    - Noise values in approximately [-1, 1].
- Side Effects: None.
- Invariants: Given the same seed and coordinates, the output is bit-identical.
  The shape of the output array matches the shape of input x and y.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS

# The twelve classic gradient directions; only their x/y components are used in 2D.
_GRADIENT_VECTORS = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
], dtype=np.float64)

# Skew/unskew factors between the square grid and the simplex lattice.
_F2 = 0.5 * (np.sqrt(3.0) - 1.0)
_G2 = (3.0 - np.sqrt(3.0)) / 6.0

_OUTPUT_SCALE = DEFAULTS.SIMPLEX_OUTPUT_SCALE


def build_permutation_table(seed: int) -> np.ndarray:
    """Shuffles 0..255 with the seed and duplicates it to 512 entries for wrap-free lookups."""
    p = np.arange(DEFAULTS.PERMUTATION_SIZE, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.concatenate([p, p])


@njit
def _corner(gi, dx, dy):
    """Contribution of one simplex corner: (0.5 - r^2)^4 * dot(grad, d), zero outside the kernel."""
    t = 0.5 - dx * dx - dy * dy
    if t < 0.0:
        return 0.0
    t *= t
    return t * t * (_GRADIENT_VECTORS[gi, 0] * dx + _GRADIENT_VECTORS[gi, 1] * dy)


@njit
def simplex_2d(p, xin, yin):
    """Evaluates one 2D simplex noise sample."""
    s = (xin + yin) * _F2
    i = int(np.floor(xin + s))
    j = int(np.floor(yin + s))
    t = (i + j) * _G2
    x0 = xin - (i - t)
    y0 = yin - (j - t)

    # Which of the two triangles of the skewed cell the point falls in.
    if x0 > y0:
        i1, j1 = 1, 0
    else:
        i1, j1 = 0, 1

    x1 = x0 - i1 + _G2
    y1 = y0 - j1 + _G2
    x2 = x0 - 1.0 + 2.0 * _G2
    y2 = y0 - 1.0 + 2.0 * _G2

    ii = i & 255
    jj = j & 255
    gi0 = p[ii + p[jj]] % 12
    gi1 = p[ii + i1 + p[jj + j1]] % 12
    gi2 = p[ii + 1 + p[jj + 1]] % 12

    n0 = _corner(gi0, x0, y0)
    n1 = _corner(gi1, x1, y1)
    n2 = _corner(gi2, x2, y2)
    return _OUTPUT_SCALE * (n0 + n1 + n2)


@njit
def simplex_noise_2d(p, x, y):
    """
    Evaluates simplex noise over 2D coordinate arrays.
    This function is JIT-compiled with Numba; explicit loops compile to
    efficient machine code.
    """
    rows, cols = x.shape
    total_noise = np.zeros((rows, cols))
    for r in range(rows):
        for c in range(cols):
            total_noise[r, c] = simplex_2d(p, x[r, c], y[r, c])
    return total_noise


class NoiseField:
    """A seeded 2D noise source. Safe to share: it holds no mutable state."""

    def __init__(self, seed: int, permutation_table: np.ndarray = None):
        self.seed = seed
        if permutation_table is not None:
            self._p = np.array(permutation_table, dtype=np.int64)
        else:
            self._p = build_permutation_table(seed)
        self._p.flags.writeable = False

    @property
    def permutation_table(self) -> np.ndarray:
        return self._p

    def sample(self, x: float, y: float) -> float:
        return float(simplex_2d(self._p, float(x), float(y)))

    def sample_grid(self, x_coords: np.ndarray, y_coords: np.ndarray) -> np.ndarray:
        x = np.ascontiguousarray(x_coords, dtype=np.float64)
        y = np.ascontiguousarray(y_coords, dtype=np.float64)
        if x.shape != y.shape:
            raise ValueError(f"Coordinate arrays differ in shape: {x.shape} vs {y.shape}")
        if x.ndim != 2:
            flat = simplex_noise_2d(self._p, x.reshape(1, -1), y.reshape(1, -1))
            return flat.reshape(x.shape)
        return simplex_noise_2d(self._p, x, y)
