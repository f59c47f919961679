# course_terrain/generator.py

"""
================================================================================
CORE COURSE GENERATOR
================================================================================
This module contains the CourseGenerator class, which runs the generation
pipeline in order (terrain, path network, objects, checkpoints), and the pure
query functions that gameplay code calls against the finished WorldData.

Data Contract:
---------------
- Inputs:
    - config (GenerationConfig): validated before anything is generated.
    - logger: A configured Python logging object for runtime messages.
- Outputs:
    - WorldData: heights, roads, rivers, pools, objects, cliffs, checkpoints.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same configuration, the output is deterministic.
  Query functions never mutate the world.
================================================================================
"""

import logging
import math
import time
from typing import Sequence

import numpy as np

from . import config as DEFAULTS
from .checkpoints import CheckpointPlanner, advance_checkpoint
from .geometry import bearing, distance_to_segment, height_query, slope
from .heightfield import HeightfieldGenerator
from .models import GenerationConfig, WorldData
from .noise import NoiseField
from .paths import PathNetworkBuilder
from .placement import ExclusionZones, SpatialFeaturePlacer

__all__ = [
    "CourseGenerator",
    "generate_world",
    "query_height",
    "query_distance_to_nearest_road",
    "query_distance_to_nearest_river",
    "is_on_road",
    "is_on_river",
    "compute_bearing",
    "compute_slope",
    "classify_position",
    "advance_checkpoint",
]


class CourseGenerator:
    """
    Generates a complete course from a GenerationConfig.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, logger: logging.Logger = None, permutation_table: np.ndarray = None):
        """
        Initializes the course generator.

        Args:
            logger (logging.Logger): The logger instance for all output.
            permutation_table (np.ndarray, optional): A pre-computed noise
                permutation table. If None, one is generated from each seed.
        """
        self.logger = logger or logging.getLogger(__name__)
        self._permutation_table = permutation_table
        self.heightfield = HeightfieldGenerator(self.logger)
        self.paths = PathNetworkBuilder(self.logger)
        self.placer = SpatialFeaturePlacer(self.logger)
        self.planner = CheckpointPlanner(self.logger)

    def generate(self, config: GenerationConfig) -> WorldData:
        config.validate()
        self.logger.info(
            f"Generating course '{config.map_variant}' with seed {config.seed} "
            f"({config.map_size:g}x{config.map_size:g} m, {config.segments} segments, "
            f"{config.checkpoint_count} checkpoints)"
        )
        start_time = time.perf_counter()

        if self._permutation_table is not None:
            self.logger.debug("Using injected permutation table.")
            self.heightfield = HeightfieldGenerator(
                self.logger, NoiseField(config.seed, self._permutation_table)
            )

        # 1. Terrain
        grid = self.heightfield.generate(config)

        # 2. Path network
        roads = self.paths.build_roads(config, grid)
        rivers, pools = self.paths.build_rivers(config, grid)
        exclusions = ExclusionZones(roads, rivers, pools)

        # 3. Objects and landmarks
        objects, stats = self.placer.place_all(config, exclusions, grid)
        cliffs = self.placer.place_cliffs(config, grid)

        # 4. Checkpoints
        checkpoints = self.planner.plan(config, exclusions, grid)

        elapsed = time.perf_counter() - start_time
        self.logger.info(f"Course generated in {elapsed:.2f}s.")
        return WorldData(
            config=config,
            height_grid=grid,
            roads=tuple(roads),
            rivers=tuple(rivers),
            pools=tuple(pools),
            objects=tuple(objects),
            cliffs=tuple(cliffs),
            checkpoints=checkpoints,
            placement_stats=stats,
        )


def generate_world(config: GenerationConfig, logger: logging.Logger = None) -> WorldData:
    return CourseGenerator(logger).generate(config)


def query_height(world: WorldData, x: float, z: float) -> float:
    return height_query(world.height_grid, x, z)


def query_distance_to_nearest_road(world: WorldData, x: float, z: float) -> float:
    """Distance to the nearest road or path centreline; inf on a road-less map."""
    return min((distance_to_segment((x, z), road.p1, road.p2) for road in world.roads), default=math.inf)


def query_distance_to_nearest_river(world: WorldData, x: float, z: float) -> float:
    """
    Distance to the nearest water: river centrelines and pool edges
    (0 inside a pool). inf when the map has no water.
    """
    distances = [distance_to_segment((x, z), river.p1, river.p2) for river in world.rivers]
    for pool in world.pools:
        distances.append(max(0.0, math.hypot(x - pool.center[0], z - pool.center[1]) - pool.radius))
    return min(distances, default=math.inf)


def is_on_road(world: WorldData, x: float, z: float) -> bool:
    return ExclusionZones(roads=world.roads).on_road(x, z)


def is_on_river(world: WorldData, x: float, z: float) -> bool:
    return ExclusionZones(rivers=world.rivers, pools=world.pools).on_water(x, z)


def compute_bearing(origin: Sequence[float], target: Sequence[float]) -> float:
    return bearing(origin, target)


def compute_slope(world: WorldData, x: float, z: float) -> float:
    return slope(world.height_grid.height_at, x, z)


def classify_position(world: WorldData, x: float, z: float) -> str:
    """Coarse terrain class for navigation hints, checked in priority order."""
    height = query_height(world, x, z)
    if height > DEFAULTS.HIGHLAND_HEIGHT:
        return "highland"
    if height < DEFAULTS.LOWLAND_HEIGHT:
        return "lowland"
    if is_on_road(world, x, z):
        return "road"
    if is_on_river(world, x, z):
        return "river"
    return "open"
