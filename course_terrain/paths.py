# course_terrain/paths.py

"""
================================================================================
PATH NETWORK BUILDER
================================================================================
Lays out the linear and pooled features of a course: radial roads, the park
path chain, edge-to-edge rivers and, on the swamp map, pooled water.

Data Contract:
---------------
- Inputs:
    - config (GenerationConfig): seed, map_size and map_variant are used.
    - grid (HeightGrid): queried only for each feature's placement elevation.
- Outputs:
    - Lists of LineFeature / CircularFeature, in creation order.
- Side Effects: Logs messages using the provided logger.
- Invariants: Every LineFeature is already extended by width/2 past both of
  its raw endpoints, so exclusion checks only need the segment itself.
  Roads and rivers draw from separate seeded streams.
================================================================================
"""

import logging
import math

import numpy as np

from . import config as DEFAULTS
from .models import CircularFeature, GenerationConfig, HeightGrid, LineFeature

# Border sides a river can enter from; it leaves through the opposite one.
RIVER_SIDES = ('north', 'east', 'south', 'west')


def make_line_feature(x1: float, z1: float, x2: float, z2: float, width: float,
                      kind: str, elevation: float = 0.0) -> LineFeature:
    """Builds a LineFeature whose endpoints are pushed out by half the width."""
    angle = math.atan2(z2 - z1, x2 - x1)
    ex = math.cos(angle) * width / 2
    ez = math.sin(angle) * width / 2
    return LineFeature(
        p1=(x1 - ex, z1 - ez),
        p2=(x2 + ex, z2 + ez),
        width=width,
        kind=kind,
        elevation=elevation,
    )


class PathNetworkBuilder:
    """Produces road and water features for one course."""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    def _line(self, grid: HeightGrid, x1, z1, x2, z2, width, kind, lift) -> LineFeature:
        elevation = grid.height_at((x1 + x2) / 2, (z1 + z2) / 2) + lift
        return make_line_feature(x1, z1, x2, z2, width, kind, elevation)

    def build_roads(self, config: GenerationConfig, grid: HeightGrid) -> list[LineFeature]:
        size = config.map_size
        if size <= 0:
            return []
        half = config.half_size
        rng = np.random.default_rng(config.seed + DEFAULTS.ROAD_SEED_OFFSET)

        roads = []
        road_count = min(DEFAULTS.MAX_ROADS, int(size // DEFAULTS.MAP_SIZE_PER_ROAD))
        road_length = half * DEFAULTS.ROAD_LENGTH_FACTOR
        for i in range(road_count):
            angle = (i / road_count) * 2 * math.pi
            width = float(rng.uniform(*DEFAULTS.ROAD_WIDTH_RANGE))
            x1, z1 = math.cos(angle) * -road_length, math.sin(angle) * -road_length
            x2, z2 = math.cos(angle) * road_length, math.sin(angle) * road_length
            roads.append(self._line(grid, x1, z1, x2, z2, width, "road", DEFAULTS.ROAD_ELEVATION_LIFT))

        if config.map_variant in DEFAULTS.PARK_PATH_VARIANTS:
            roads.extend(self.build_park_paths(config, grid))

        self.logger.info(f"Built {len(roads)} road/path segments ({road_count} radial roads).")
        return roads

    def build_park_paths(self, config: GenerationConfig, grid: HeightGrid) -> list[LineFeature]:
        """The fixed footpath chain through the southern half of the park maps."""
        half = config.half_size
        points = [(fx * half, fz * half) for fx, fz in DEFAULTS.PARK_PATH_POINTS]
        return [
            self._line(grid, x1, z1, x2, z2, DEFAULTS.PARK_PATH_WIDTH, "path", DEFAULTS.ROAD_ELEVATION_LIFT)
            for (x1, z1), (x2, z2) in zip(points, points[1:])
        ]

    def build_rivers(self, config: GenerationConfig, grid: HeightGrid) -> tuple[list[LineFeature], list[CircularFeature]]:
        size = config.map_size
        if size <= 0:
            return [], []
        rng = np.random.default_rng(config.seed + DEFAULTS.RIVER_SEED_OFFSET)

        if config.map_variant in DEFAULTS.POOL_VARIANTS:
            pools = self._build_pools(config, grid, rng)
            self.logger.info(f"Built {len(pools)} swamp pools.")
            return [], pools

        half = config.half_size
        rivers = []
        river_count = min(DEFAULTS.MAX_RIVERS, int(size // DEFAULTS.MAP_SIZE_PER_RIVER))
        for _ in range(river_count):
            side = RIVER_SIDES[int(rng.integers(0, len(RIVER_SIDES)))]
            entry = float(rng.uniform(-half, half))
            exit_ = float(rng.uniform(-half, half))
            if side == 'north':
                x1, z1, x2, z2 = entry, -half, exit_, half
            elif side == 'east':
                x1, z1, x2, z2 = half, entry, -half, exit_
            elif side == 'south':
                x1, z1, x2, z2 = entry, half, exit_, -half
            else:
                x1, z1, x2, z2 = -half, entry, half, exit_
            width = float(rng.uniform(*DEFAULTS.RIVER_WIDTH_RANGE))
            rivers.append(self._line(grid, x1, z1, x2, z2, width, "river", DEFAULTS.WATER_ELEVATION_LIFT))

        self.logger.info(f"Built {len(rivers)} rivers.")
        return rivers, []

    def _build_pools(self, config: GenerationConfig, grid: HeightGrid, rng: np.random.Generator) -> list[CircularFeature]:
        half = config.half_size
        pools = []
        for _ in range(DEFAULTS.POOL_COUNT):
            x = float(rng.uniform(-half, half))
            z = float(rng.uniform(-half, half))
            radius = float(rng.uniform(*DEFAULTS.POOL_RADIUS_RANGE))
            elevation = grid.height_at(x, z) + DEFAULTS.WATER_ELEVATION_LIFT
            pools.append(CircularFeature(center=(x, z), radius=radius, kind="pool", elevation=elevation))
        return pools
