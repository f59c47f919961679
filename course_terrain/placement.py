# course_terrain/placement.py

"""
================================================================================
SPATIAL FEATURE PLACER
================================================================================
Scatters vegetation, rocks and debris over the course by rejection sampling
against the exclusion zones of the path network, and sets the cliff
landmarks of the mountain maps.

Data Contract:
---------------
- Inputs:
    - config (GenerationConfig), exclusions (ExclusionZones), grid (HeightGrid).
- Outputs:
    - Lists of PlacedObject / Cliff plus per-class PlacementStats.
- Side Effects: Logs messages using the provided logger.
- Invariants: Every placed object lies at least width/2 from every line
  feature and at least radius from every pool centre. Every sampling loop
  is bounded by an attempt counter; an exhausted instance is skipped, so the
  placed count may fall short of the requested count.
================================================================================
"""

import logging
import math
from typing import Iterable, Optional

import numpy as np

from . import config as DEFAULTS
from .geometry import distance_to_segment
from .models import (CircularFeature, Cliff, GenerationConfig, HeightGrid,
                     LineFeature, PlacedObject, PlacementStats)


class ExclusionZones:
    """The regions around roads and water where nothing may be placed."""

    def __init__(self, roads: Iterable[LineFeature] = (), rivers: Iterable[LineFeature] = (),
                 pools: Iterable[CircularFeature] = ()):
        self.roads = tuple(roads)
        self.rivers = tuple(rivers)
        self.pools = tuple(pools)

    def on_road(self, x: float, z: float) -> bool:
        return any(distance_to_segment((x, z), road.p1, road.p2) < road.width / 2 for road in self.roads)

    def on_water(self, x: float, z: float) -> bool:
        for river in self.rivers:
            if distance_to_segment((x, z), river.p1, river.p2) < river.width / 2:
                return True
        for pool in self.pools:
            if math.hypot(x - pool.center[0], z - pool.center[1]) < pool.radius:
                return True
        return False

    def contains(self, x: float, z: float) -> bool:
        return self.on_road(x, z) or self.on_water(x, z)


def class_count(kind: str, map_size: float) -> int:
    """How many instances of an object class a map of this size asks for."""
    if map_size <= 0:
        return 0
    object_class = DEFAULTS.OBJECT_CLASSES[kind]
    basis = map_size * map_size if object_class["basis"] == "area" else map_size
    return int(min(object_class["cap"], basis // object_class["divisor"]))


def sample_free_point(rng: np.random.Generator, half_size: float, exclusions: ExclusionZones,
                      max_attempts: int) -> Optional[tuple[float, float]]:
    """
    Draws uniform points in the square until one falls outside every
    exclusion zone. Returns None once max_attempts draws have been rejected.
    """
    for _ in range(max_attempts):
        x = float(rng.uniform(-half_size, half_size))
        z = float(rng.uniform(-half_size, half_size))
        if not exclusions.contains(x, z):
            return x, z
    return None


class SpatialFeaturePlacer:
    """Best-effort object scatter for one course."""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    def _make_object(self, kind: str, x: float, z: float, ground: float, rng: np.random.Generator) -> PlacedObject:
        variant = None
        y = ground
        if kind == "tree":
            variant = DEFAULTS.TREE_SPECIES[int(rng.integers(0, len(DEFAULTS.TREE_SPECIES)))]
            scale = float(rng.uniform(*DEFAULTS.TREE_SCALE_RANGE))
        elif kind == "rock":
            # Rocks are sized, not scaled; they rest on the ground by their size.
            scale = float(rng.uniform(*DEFAULTS.ROCK_SIZE_RANGE))
            y = ground + scale
        elif kind == "fallen_tree":
            scale = float(rng.uniform(*DEFAULTS.FALLEN_TREE_RADIUS_RANGE))
            y = ground + scale
        elif kind == "bush":
            scale = float(rng.uniform(*DEFAULTS.BUSH_SCALE_RANGE))
        else:
            scale = float(rng.uniform(*DEFAULTS.GRASS_SCALE_RANGE))
        rotation_y = float(rng.uniform(0.0, 2 * math.pi))
        return PlacedObject(kind=kind, position=(x, y, z), rotation_y=rotation_y, scale=scale, variant=variant)

    def place(self, kind: str, count: int, config: GenerationConfig, exclusions: ExclusionZones,
              grid: HeightGrid, rng: np.random.Generator = None,
              stats: PlacementStats = None) -> list[PlacedObject]:
        """
        Places up to `count` objects of one class. Instances whose attempts
        run out are skipped and counted in `stats`.
        """
        if kind not in DEFAULTS.OBJECT_CLASSES:
            raise ValueError(f"Unknown object class '{kind}'")
        if stats is None:
            stats = PlacementStats()
        if count <= 0 or config.map_size <= 0:
            return []
        if rng is None:
            rng = np.random.default_rng(config.seed + DEFAULTS.OBJECT_SEED_OFFSET)

        half = config.half_size
        max_attempts = DEFAULTS.OBJECT_CLASSES[kind]["max_attempts"]
        placed = []
        for _ in range(count):
            stats.requested += 1
            point = sample_free_point(rng, half, exclusions, max_attempts)
            if point is None:
                stats.skipped += 1
                continue
            x, z = point
            placed.append(self._make_object(kind, x, z, grid.height_at(x, z), rng))
            stats.placed += 1

        if stats.skipped:
            self.logger.debug(f"Skipped {stats.skipped} of {stats.requested} '{kind}' instances after exhausting attempts.")
        return placed

    def place_all(self, config: GenerationConfig, exclusions: ExclusionZones,
                  grid: HeightGrid) -> tuple[list[PlacedObject], dict]:
        """Runs every object class in a fixed order from one seeded stream."""
        rng = np.random.default_rng(config.seed + DEFAULTS.OBJECT_SEED_OFFSET)
        objects = []
        all_stats = {}
        for kind in DEFAULTS.PLACEMENT_ORDER:
            stats = PlacementStats()
            count = class_count(kind, config.map_size)
            objects.extend(self.place(kind, count, config, exclusions, grid, rng=rng, stats=stats))
            all_stats[kind] = stats

        summary = ", ".join(f"{kind}={s.placed}/{s.requested}" for kind, s in all_stats.items())
        self.logger.info(f"Placed {len(objects)} objects ({summary}).")
        return objects, all_stats

    def place_cliffs(self, config: GenerationConfig, grid: HeightGrid) -> list[Cliff]:
        """Rock walls on a ring around the centre of the mountain maps."""
        if config.map_variant not in DEFAULTS.CLIFF_VARIANTS or config.map_size <= 0:
            return []
        rng = np.random.default_rng(config.seed + DEFAULTS.CLIFF_SEED_OFFSET)
        distance = config.half_size * DEFAULTS.CLIFF_RING_FACTOR
        cliffs = []
        for _ in range(int(config.map_size // DEFAULTS.MAP_SIZE_PER_CLIFF)):
            height = float(rng.uniform(*DEFAULTS.CLIFF_HEIGHT_RANGE))
            width = float(rng.uniform(*DEFAULTS.CLIFF_WIDTH_RANGE))
            depth = float(rng.uniform(*DEFAULTS.CLIFF_DEPTH_RANGE))
            angle = float(rng.uniform(0.0, 2 * math.pi))
            x = math.cos(angle) * distance
            z = math.sin(angle) * distance
            cliffs.append(Cliff(
                position=(x, grid.height_at(x, z) + height / 2, z),
                width=width,
                height=height,
                depth=depth,
                rotation_y=angle + math.pi / 2,
            ))
        self.logger.info(f"Placed {len(cliffs)} cliffs.")
        return cliffs
