# course_terrain/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the color constants and functions for turning a
generated course into an orienteering-style RGB preview: a terrain class
ramp, contour lines, and overlays for water, roads, rocks and checkpoints.

It is a pure, stateless utility with no dependency on an image library;
callers hand the resulting arrays to Pillow (or any other sink).

Data Contract:
---------------
- Outputs are uint8 arrays of shape (rows, cols, 3). Rows run along world z,
  columns along world x, matching HeightGrid.heights.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS
from .checkpoints import CheckpointState, checkpoint_state
from .models import WorldData

# --- Terrain Class IDs ---
TERRAIN_ID_LOWLAND = 0
TERRAIN_ID_OPEN = 1
TERRAIN_ID_HIGHLAND = 2

# --- Default Color Mappings ---
COLOR_MAP_TERRAIN = {
    "lowland": (201, 226, 160),
    "open": (255, 255, 255),
    "highland": (239, 222, 190),
}

COLOR_MAP_FEATURES = {
    "contour": (141, 110, 99),
    "water": (33, 150, 243),
    "road": (121, 85, 72),
    "path": (141, 110, 99),
    "rock": (93, 64, 55),
    "cliff": (0, 0, 0),
}

COLOR_MAP_CHECKPOINT = {
    CheckpointState.COLLECTED: (76, 175, 80),
    CheckpointState.CURRENT: (255, 152, 0),
    CheckpointState.NOT_REACHED: (244, 67, 54),
}

# Contours are drawn every CONTOUR_STEP_SMALL units on small maps, else every CONTOUR_STEP_LARGE.
CONTOUR_STEP_SMALL = 5.0
CONTOUR_STEP_LARGE = 10.0
CONTOUR_SMALL_MAP_SIZE = 200.0
CONTOUR_MAX_HEIGHT = 50.0

CHECKPOINT_MARKER_RADIUS_PX = 3


def create_terrain_lut() -> np.ndarray:
    """A LUT where the index is the terrain class ID and the value is the RGB color."""
    return np.array([
        COLOR_MAP_TERRAIN["lowland"],
        COLOR_MAP_TERRAIN["open"],
        COLOR_MAP_TERRAIN["highland"],
    ], dtype=np.uint8)


def calculate_terrain_class_map(heights: np.ndarray) -> np.ndarray:
    """Integer terrain class per sample, using the navigation-hint height bands."""
    conditions = [heights < DEFAULTS.LOWLAND_HEIGHT, heights > DEFAULTS.HIGHLAND_HEIGHT]
    choices = [TERRAIN_ID_LOWLAND, TERRAIN_ID_HIGHLAND]
    return np.select(conditions, choices, default=TERRAIN_ID_OPEN).astype(np.uint8)


def get_terrain_color_array(class_map: np.ndarray, terrain_lut: np.ndarray) -> np.ndarray:
    return terrain_lut[class_map]


def get_elevation_color_array(heights: np.ndarray, max_height: float = DEFAULTS.PREVIEW_MAX_HEIGHT) -> np.ndarray:
    """Grayscale RGB array; heights at or above max_height render white."""
    normalized = np.clip(heights / max_height, 0.0, 1.0) if max_height > 0 else np.zeros_like(heights)
    gray_values = (normalized * 255).astype(np.uint8)
    return np.stack([gray_values] * 3, axis=-1)


def contour_step(map_size: float) -> float:
    return CONTOUR_STEP_SMALL if map_size <= CONTOUR_SMALL_MAP_SIZE else CONTOUR_STEP_LARGE


def calculate_contour_mask(heights: np.ndarray, step: float) -> np.ndarray:
    """True where a contour level falls between a sample and its right or lower neighbour."""
    bands = np.floor(np.minimum(heights, CONTOUR_MAX_HEIGHT) / step)
    mask = np.zeros(heights.shape, dtype=bool)
    mask[:, :-1] |= bands[:, :-1] != bands[:, 1:]
    mask[:-1, :] |= bands[:-1, :] != bands[1:, :]
    return mask


def _segment_distance_grid(x_grid: np.ndarray, z_grid: np.ndarray, p1, p2) -> np.ndarray:
    """Vectorised point-to-segment distance over a coordinate grid."""
    dx = p2[0] - p1[0]
    dz = p2[1] - p1[1]
    len_sq = dx * dx + dz * dz
    if len_sq == 0:
        return np.hypot(x_grid - p1[0], z_grid - p1[1])
    t = np.clip(((x_grid - p1[0]) * dx + (z_grid - p1[1]) * dz) / len_sq, 0.0, 1.0)
    return np.hypot(x_grid - (p1[0] + t * dx), z_grid - (p1[1] + t * dz))


def get_course_color_array(world: WorldData, current_index: int = 0) -> np.ndarray:
    """
    Renders the full orienteering preview of a course: terrain classes,
    contours, water, roads, cliffs, rocks and checkpoints (in that order).
    """
    grid = world.height_grid
    heights = grid.heights
    colors = get_terrain_color_array(calculate_terrain_class_map(heights), create_terrain_lut())

    if grid.map_size <= 0:
        return colors

    colors[calculate_contour_mask(heights, contour_step(grid.map_size))] = COLOR_MAP_FEATURES["contour"]

    half = grid.half_size
    axis = np.linspace(-half, half, grid.segments + 1)
    x_grid, z_grid = np.meshgrid(axis, axis)
    # Thin features are widened to at least one sample so they stay visible.
    min_half_width = grid.map_size / grid.segments / 2

    for river in world.rivers:
        mask = _segment_distance_grid(x_grid, z_grid, river.p1, river.p2) < max(river.width / 2, min_half_width)
        colors[mask] = COLOR_MAP_FEATURES["water"]
    for pool in world.pools:
        mask = np.hypot(x_grid - pool.center[0], z_grid - pool.center[1]) < pool.radius
        colors[mask] = COLOR_MAP_FEATURES["water"]
    for road in world.roads:
        mask = _segment_distance_grid(x_grid, z_grid, road.p1, road.p2) < max(road.width / 2, min_half_width)
        colors[mask] = COLOR_MAP_FEATURES["path" if road.kind == "path" else "road"]

    def to_index(x, z):
        col = int(round((x + half) / grid.map_size * grid.segments))
        row = int(round((z + half) / grid.map_size * grid.segments))
        return min(max(row, 0), grid.segments), min(max(col, 0), grid.segments)

    for cliff in world.cliffs:
        colors[to_index(cliff.position[0], cliff.position[2])] = COLOR_MAP_FEATURES["cliff"]
    for obj in world.objects:
        if obj.kind == "rock":
            colors[to_index(obj.position[0], obj.position[2])] = COLOR_MAP_FEATURES["rock"]

    r = CHECKPOINT_MARKER_RADIUS_PX
    rows, cols = np.ogrid[:heights.shape[0], :heights.shape[1]]
    for index, checkpoint in enumerate(world.checkpoints):
        row, col = to_index(checkpoint.position[0], checkpoint.position[2])
        marker = (rows - row) ** 2 + (cols - col) ** 2 <= r * r
        state = checkpoint_state(world.checkpoints, index, current_index)
        colors[marker] = COLOR_MAP_CHECKPOINT[state]

    return colors
