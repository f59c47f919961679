# course_terrain/checkpoints.py

"""
================================================================================
CHECKPOINT PLANNER
================================================================================
Plans the ordered checkpoint course on an outward spiral and owns the capture
state machine used during a run.

Data Contract:
---------------
- Inputs:
    - config (GenerationConfig), exclusions (ExclusionZones), grid (HeightGrid).
- Outputs:
    - Exactly config.checkpoint_count Checkpoint objects, ids 1..N.
- Side Effects: Logs messages using the provided logger. advance_checkpoint
  flips Checkpoint.collected; nothing else mutates a published checkpoint.
- Invariants: The planned ring radius never decreases along the course. A
  checkpoint that cannot avoid the exclusion zones falls back to a single
  unconstrained draw, so the count is always met.
================================================================================
"""

import logging
import math
from enum import Enum
from typing import Sequence

import numpy as np

from . import config as DEFAULTS
from .geometry import planar_distance
from .models import Checkpoint, GenerationConfig, HeightGrid
from .placement import ExclusionZones


class CheckpointState(Enum):
    NOT_REACHED = "not_reached"
    CURRENT = "current"
    COLLECTED = "collected"


def target_radius(index: int, total: int, half_size: float) -> float:
    """Spiral radius of checkpoint `index` of `total`; grows with the index."""
    progress = index / total
    inner = DEFAULTS.CHECKPOINT_INNER_FRACTION
    return half_size * DEFAULTS.CHECKPOINT_RING_FACTOR * (inner + (1 - inner) * progress)


def checkpoint_difficulty(index: int, total: int, map_difficulty: str) -> float:
    """Per-checkpoint difficulty rating, rising along the course up to the maximum."""
    base = DEFAULTS.BASE_CHECKPOINT_DIFFICULTY.get(map_difficulty, 1.0)
    progression = DEFAULTS.CHECKPOINT_DIFFICULTY_PROGRESSION * index / total if total else 0.0
    return min(base + progression, DEFAULTS.MAX_CHECKPOINT_DIFFICULTY)


class CheckpointPlanner:
    """Places the course checkpoints for one world."""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    def plan(self, config: GenerationConfig, exclusions: ExclusionZones, grid: HeightGrid) -> list[Checkpoint]:
        total = config.checkpoint_count
        if total <= 0 or config.map_size <= 0:
            return []

        rng = np.random.default_rng(config.seed + DEFAULTS.CHECKPOINT_SEED_OFFSET)
        half = config.half_size
        jitter = half * DEFAULTS.CHECKPOINT_JITTER_FACTOR
        checkpoints = []
        fallbacks = 0

        for i in range(total):
            angle = (i / total) * 2 * math.pi
            radius = target_radius(i, total, half)
            position = None
            for _ in range(DEFAULTS.CHECKPOINT_MAX_ATTEMPTS):
                x = math.cos(angle) * radius + float(rng.uniform(-jitter, jitter))
                z = math.sin(angle) * radius + float(rng.uniform(-jitter, jitter))
                if not exclusions.contains(x, z):
                    position = (x, z)
                    break

            if position is None:
                fallbacks += 1
                position = (float(rng.uniform(-half, half)), float(rng.uniform(-half, half)))
                self.logger.warning(
                    f"Checkpoint {i + 1}: no free spot near the spiral after "
                    f"{DEFAULTS.CHECKPOINT_MAX_ATTEMPTS} attempts, using an unconstrained position."
                )

            x, z = position
            checkpoints.append(Checkpoint(
                id=i + 1,
                position=(x, grid.height_at(x, z), z),
                difficulty=checkpoint_difficulty(i, total, config.difficulty),
            ))

        self.logger.info(f"Planned {len(checkpoints)} checkpoints ({fallbacks} fallback positions).")
        return checkpoints


def checkpoint_state(checkpoints: Sequence[Checkpoint], index: int, current_index: int) -> CheckpointState:
    if checkpoints[index].collected:
        return CheckpointState.COLLECTED
    if index == current_index:
        return CheckpointState.CURRENT
    return CheckpointState.NOT_REACHED


def advance_checkpoint(checkpoints: Sequence[Checkpoint], current_index: int, player_pos: Sequence[float],
                       capture_radius: float = DEFAULTS.CAPTURE_RADIUS) -> tuple[int, bool]:
    """
    Collects the current checkpoint if the player is within the capture
    radius on the ground plane. Returns (new_index, just_collected); after
    the last capture the index equals len(checkpoints).
    """
    if current_index < 0:
        raise ValueError(f"Checkpoint index must not be negative, got {current_index}")
    if current_index >= len(checkpoints):
        return current_index, False

    checkpoint = checkpoints[current_index]
    if not checkpoint.collected and planar_distance(player_pos, checkpoint.position) < capture_radius:
        checkpoint.collected = True
        return current_index + 1, True
    return current_index, False


def is_course_complete(checkpoints: Sequence[Checkpoint], current_index: int) -> bool:
    return current_index >= len(checkpoints)
