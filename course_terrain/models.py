# course_terrain/models.py

"""
================================================================================
COURSE DATA MODEL
================================================================================
Plain data entities produced by the generation pipeline. Rendering and
gameplay code project these into their own structures; nothing in here knows
about a scene graph.

Data Contract:
---------------
- GenerationConfig is the only shape meant to be persisted (to_dict/from_dict).
- Everything except Checkpoint.collected is immutable once published.
- HeightGrid stores its samples in a read-only NumPy array.
================================================================================
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from typing import Optional

import numpy as np

from . import config as DEFAULTS
from .geometry import height_query


class ConfigError(ValueError):
    """Raised when a generation configuration is rejected before generation."""


@dataclass(frozen=True)
class GenerationConfig:
    seed: int = DEFAULTS.DEFAULT_SEED
    map_size: float = DEFAULTS.DEFAULT_MAP_SIZE
    segments: int = DEFAULTS.DEFAULT_SEGMENTS
    checkpoint_count: int = DEFAULTS.DEFAULT_CHECKPOINT_COUNT
    map_variant: str = DEFAULTS.DEFAULT_MAP_VARIANT

    @property
    def half_size(self) -> float:
        return self.map_size / 2

    @property
    def difficulty(self) -> str:
        return DEFAULTS.MAP_PRESETS[self.map_variant]['difficulty']

    def validate(self) -> "GenerationConfig":
        """
        Rejects configurations that cannot describe a course. A zero map size
        or checkpoint count is valid: generation degrades to empty outputs.
        """
        if isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer)):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        if isinstance(self.segments, bool) or not isinstance(self.segments, (int, np.integer)):
            raise ConfigError(f"segments must be an integer, got {self.segments!r}")
        if isinstance(self.checkpoint_count, bool) or not isinstance(self.checkpoint_count, (int, np.integer)):
            raise ConfigError(f"checkpoint_count must be an integer, got {self.checkpoint_count!r}")
        if not isinstance(self.map_size, (int, float, np.number)) or not math.isfinite(self.map_size):
            raise ConfigError(f"map_size must be a finite number, got {self.map_size!r}")
        if self.map_size < 0:
            raise ConfigError(f"map_size must not be negative, got {self.map_size}")
        if self.segments < 1:
            raise ConfigError(f"segments must be at least 1, got {self.segments}")
        if self.checkpoint_count < 0:
            raise ConfigError(f"checkpoint_count must not be negative, got {self.checkpoint_count}")
        if self.map_variant not in DEFAULTS.MAP_PRESETS:
            known = ", ".join(sorted(DEFAULTS.MAP_PRESETS))
            raise ConfigError(f"Unknown map_variant '{self.map_variant}' (known: {known})")
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GenerationConfig":
        """Builds and validates a config, falling back to defaults for missing keys."""
        unknown = set(data) - {'seed', 'map_size', 'segments', 'checkpoint_count', 'map_variant'}
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(
            seed=data.get('seed', DEFAULTS.DEFAULT_SEED),
            map_size=data.get('map_size', DEFAULTS.DEFAULT_MAP_SIZE),
            segments=data.get('segments', DEFAULTS.DEFAULT_SEGMENTS),
            checkpoint_count=data.get('checkpoint_count', DEFAULTS.DEFAULT_CHECKPOINT_COUNT),
            map_variant=data.get('map_variant', DEFAULTS.DEFAULT_MAP_VARIANT),
        ).validate()

    @classmethod
    def from_preset(cls, variant: str, seed: int = DEFAULTS.DEFAULT_SEED) -> "GenerationConfig":
        """Builds the config of one of the catalogued maps."""
        preset = DEFAULTS.MAP_PRESETS.get(variant)
        if preset is None:
            raise ConfigError(f"Unknown map preset '{variant}'")
        size = preset['size']
        return cls(
            seed=seed,
            map_size=size,
            segments=int(min(DEFAULTS.MAX_SEGMENTS, size)),
            checkpoint_count=preset['checkpoints'],
            map_variant=variant,
        ).validate()


@dataclass(frozen=True)
class HeightGrid:
    """
    Elevation samples over a square domain centred on the origin.
    heights[row, col]: row runs along world z, col along world x.
    """
    heights: np.ndarray
    map_size: float
    segments: int

    def __post_init__(self):
        heights = np.array(self.heights, dtype=np.float64)
        heights.flags.writeable = False
        object.__setattr__(self, 'heights', heights)

    @property
    def half_size(self) -> float:
        return self.map_size / 2

    def height_at(self, x: float, z: float) -> float:
        return height_query(self, x, z)


@dataclass(frozen=True)
class LineFeature:
    p1: tuple[float, float]
    p2: tuple[float, float]
    width: float
    kind: str
    elevation: float = 0.0

    @property
    def midpoint(self) -> tuple[float, float]:
        return ((self.p1[0] + self.p2[0]) / 2, (self.p1[1] + self.p2[1]) / 2)


@dataclass(frozen=True)
class CircularFeature:
    center: tuple[float, float]
    radius: float
    kind: str = "pool"
    elevation: float = 0.0


@dataclass(frozen=True)
class PlacedObject:
    kind: str
    position: tuple[float, float, float]
    rotation_y: float
    scale: float
    variant: Optional[str] = None


@dataclass(frozen=True)
class Cliff:
    position: tuple[float, float, float]
    width: float
    height: float
    depth: float
    rotation_y: float


@dataclass
class Checkpoint:
    id: int
    position: tuple[float, float, float]
    collected: bool = False
    difficulty: float = 1.0


@dataclass
class PlacementStats:
    requested: int = 0
    placed: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class WorldData:
    config: GenerationConfig
    height_grid: HeightGrid
    roads: tuple[LineFeature, ...] = ()
    rivers: tuple[LineFeature, ...] = ()
    pools: tuple[CircularFeature, ...] = ()
    objects: tuple[PlacedObject, ...] = ()
    cliffs: tuple[Cliff, ...] = ()
    checkpoints: list[Checkpoint] = field(default_factory=list)
    placement_stats: dict = field(default_factory=dict)
