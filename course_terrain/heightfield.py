# course_terrain/heightfield.py

"""
================================================================================
HEIGHTFIELD GENERATOR
================================================================================
Builds the terrain elevation grid from layered simplex noise plus radial and
valley shaping.

Data Contract:
---------------
- Inputs:
    - config (GenerationConfig): seed, map_size and segments are used.
    - logger: A configured Python logging object for runtime messages.
- Outputs:
    - HeightGrid with (segments + 1) x (segments + 1) samples, every value >= 0.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same seed and coordinates, heights are bit-identical.
  No vertex depends on another, so the whole grid is evaluated vectorised.
================================================================================
"""

import logging
import time

import numpy as np

from . import config as DEFAULTS
from .models import GenerationConfig, HeightGrid
from .noise import NoiseField


class HeightfieldGenerator:
    """Turns a GenerationConfig into a HeightGrid."""

    def __init__(self, logger: logging.Logger = None, noise_field: NoiseField = None):
        self.logger = logger or logging.getLogger(__name__)
        self._noise = noise_field

    def _noise_for(self, seed: int) -> NoiseField:
        if self._noise is not None and self._noise.seed == seed:
            return self._noise
        self.logger.debug(f"Building noise permutation table for seed {seed}.")
        self._noise = NoiseField(seed)
        return self._noise

    @staticmethod
    def get_coordinate_grid(map_size: float, segments: int) -> tuple[np.ndarray, np.ndarray]:
        """World (x, z) of every grid vertex; rows run along z, columns along x."""
        half = map_size / 2
        axis = np.linspace(-half, half, segments + 1)
        return np.meshgrid(axis, axis)

    def get_elevation(self, noise: NoiseField, x_coords: np.ndarray, z_coords: np.ndarray, half_size: float) -> np.ndarray:
        """
        Elevation at arbitrary world coordinates:
        fractal relief + central bump + plateau - valleys, clamped at zero.
        """
        # 1. Fractal summation of the relief octaves.
        scale = DEFAULTS.TERRAIN_NOISE_SCALE
        height = np.zeros_like(x_coords, dtype=np.float64)
        for frequency, weight in zip(DEFAULTS.TERRAIN_OCTAVE_FREQUENCIES, DEFAULTS.TERRAIN_OCTAVE_WEIGHTS):
            height += noise.sample_grid(x_coords * scale * frequency, z_coords * scale * frequency) * weight

        # 2. Gentle rise towards the map centre.
        distance_from_center = np.sqrt(x_coords * x_coords + z_coords * z_coords)
        height += np.exp(-distance_from_center / half_size) * DEFAULTS.CENTRAL_BUMP_HEIGHT

        # 3. Flat bonus in the innermost ring.
        plateau_mask = distance_from_center < half_size * DEFAULTS.PLATEAU_RADIUS_FACTOR
        height[plateau_mask] += DEFAULTS.PLATEAU_HEIGHT

        # 4. Carve valleys where the low-frequency sample dips below the threshold.
        valley_scale = DEFAULTS.VALLEY_NOISE_SCALE
        valley_noise = noise.sample_grid(x_coords * valley_scale, z_coords * valley_scale)
        valley_mask = valley_noise < DEFAULTS.VALLEY_THRESHOLD
        height[valley_mask] -= DEFAULTS.VALLEY_DEPTH * np.abs(valley_noise[valley_mask])

        # 5. Negative relief is clamped away.
        return np.maximum(height, DEFAULTS.MIN_TERRAIN_HEIGHT)

    def generate(self, config: GenerationConfig) -> HeightGrid:
        segments = config.segments
        if config.map_size <= 0:
            self.logger.warning(f"Map size {config.map_size} is not positive; returning a flat grid.")
            return HeightGrid(np.zeros((segments + 1, segments + 1)), config.map_size, segments)

        start_time = time.perf_counter()
        noise = self._noise_for(config.seed)
        x_grid, z_grid = self.get_coordinate_grid(config.map_size, segments)
        heights = self.get_elevation(noise, x_grid, z_grid, config.half_size)

        elapsed = time.perf_counter() - start_time
        self.logger.info(
            f"Heightfield {segments + 1}x{segments + 1} generated in {elapsed:.2f}s "
            f"(min {heights.min():.2f}, max {heights.max():.2f})"
        )
        return HeightGrid(heights, config.map_size, segments)
