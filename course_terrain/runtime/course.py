# course_terrain/runtime/course.py

"""
================================================================================
COURSE RUN
================================================================================
This module provides the CourseRun class, the runtime authority over a
generated course: it advances checkpoints from the player's position, keeps
the run clock and distance tally, and scores the finished run.

It owns no rendering and no input handling; the host loop calls
update(player_pos, dt) once per fixed step.

Data Contract:
---------------
- Inputs (on initialization):
    - world (WorldData): A generated course.
- Public Methods:
    - update(player_pos, dt): Advances time, distance and checkpoints.
    - navigation_hint(player_pos, heading): Directions to the current checkpoint.
    - elevation_profile(player_pos, heading): Heights on a ring around the player.
    - result(): Score and medal of the run.
    - final_stats(): Elapsed time, distance, average speed and route efficiency.
- Side Effects: Flips Checkpoint.collected through advance_checkpoint and
  logs checkpoint events.
================================================================================
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .. import config as DEFAULTS
from ..checkpoints import advance_checkpoint, is_course_complete
from ..generator import classify_position
from ..geometry import bearing, compass_point, elevation_ring, planar, planar_distance, relative_direction
from ..models import Checkpoint, WorldData
from .clock import RunClock


@dataclass(frozen=True)
class CheckpointEvent:
    checkpoint_id: int
    elapsed_seconds: float
    course_complete: bool


@dataclass(frozen=True)
class NavigationHint:
    checkpoint_id: int
    bearing: float
    compass: str
    direction: str
    distance: float
    terrain: str


@dataclass(frozen=True)
class FinalStats:
    elapsed_seconds: float
    distance: float
    average_speed_kmh: float
    route_efficiency: int


def training_level(distance: float) -> int:
    """Training level reached after covering `distance` metres."""
    level = 1
    for candidate, threshold in sorted(DEFAULTS.TRAINING_LEVEL_DISTANCES.items()):
        if distance > threshold:
            level = candidate
    return level


def score_run(elapsed_seconds: float, checkpoint_count: int, level: int) -> tuple[int, str]:
    """
    Scores a finished run against a par of three minutes per checkpoint plus
    a training bonus. Returns (score in [0, 100], medal).
    """
    par_seconds = checkpoint_count * DEFAULTS.SECONDS_PER_CHECKPOINT_PAR
    if par_seconds > 0:
        time_score = max(0.0, 100 - (elapsed_seconds / par_seconds) * 100)
    else:
        time_score = 0.0
    score = min(100, round(time_score + level * DEFAULTS.TRAINING_LEVEL_BONUS))

    if score >= DEFAULTS.MEDAL_THRESHOLDS['gold']:
        medal = 'gold'
    elif score >= DEFAULTS.MEDAL_THRESHOLDS['silver']:
        medal = 'silver'
    else:
        medal = 'bronze'
    return score, medal


def route_efficiency(start: Optional[Sequence[float]], end: Optional[Sequence[float]], distance: float,
                     waypoint_count: int) -> int:
    """
    Straight-line distance from start to end as a percentage of the distance
    actually covered, capped at 100. Fewer than two waypoints, or no distance
    covered, count as a perfect route.
    """
    if waypoint_count < 2 or start is None or end is None or distance <= 0:
        return DEFAULTS.MAX_ROUTE_EFFICIENCY
    straight = planar_distance(start, end)
    return min(DEFAULTS.MAX_ROUTE_EFFICIENCY, round(straight / distance * 100))


class CourseRun:
    """Tracks one player's progress around a course."""

    def __init__(self, world: WorldData, logger: logging.Logger = None, clock: RunClock = None,
                 capture_radius: float = DEFAULTS.CAPTURE_RADIUS):
        self.world = world
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or RunClock()
        self.capture_radius = capture_radius

        self.current_index = 0
        self.distance_travelled = 0.0
        self.training_level = 1
        self._first_position: Optional[tuple[float, float]] = None
        self._last_position: Optional[tuple[float, float]] = None
        self._waypoint_count = 0

    @property
    def checkpoints(self) -> list[Checkpoint]:
        return self.world.checkpoints

    @property
    def current_checkpoint(self) -> Optional[Checkpoint]:
        if self.is_complete:
            return None
        return self.checkpoints[self.current_index]

    @property
    def is_complete(self) -> bool:
        return is_course_complete(self.checkpoints, self.current_index)

    def update(self, player_pos: Sequence[float], dt: float) -> Optional[CheckpointEvent]:
        """
        Advances the run by one step. Returns a CheckpointEvent when a
        checkpoint was captured during this step.
        """
        if self.is_complete:
            return None

        self.clock.update(dt)
        position = planar(player_pos)
        if self._last_position is not None:
            self.distance_travelled += planar_distance(self._last_position, position)
        else:
            self._first_position = position
        self._last_position = position
        self._waypoint_count += 1

        # Training levels only ever go up.
        self.training_level = max(self.training_level, training_level(self.distance_travelled))

        new_index, collected = advance_checkpoint(
            self.checkpoints, self.current_index, player_pos, self.capture_radius
        )
        if not collected:
            return None

        checkpoint = self.checkpoints[self.current_index]
        self.current_index = new_index
        event = CheckpointEvent(
            checkpoint_id=checkpoint.id,
            elapsed_seconds=self.clock.elapsed_seconds,
            course_complete=self.is_complete,
        )
        self.logger.info(
            f"Checkpoint {checkpoint.id}/{len(self.checkpoints)} collected at {self.clock.format_elapsed()}"
        )
        if event.course_complete:
            self.clock.pause()
            self.logger.info(f"Course complete in {self.clock.format_elapsed()}.")
        return event

    def navigation_hint(self, player_pos: Sequence[float], heading: float) -> Optional[NavigationHint]:
        """Directions from the player to the current checkpoint, or None when the course is done."""
        checkpoint = self.current_checkpoint
        if checkpoint is None:
            return None
        target_bearing = bearing(player_pos, checkpoint.position)
        x, z = planar(player_pos)
        return NavigationHint(
            checkpoint_id=checkpoint.id,
            bearing=target_bearing,
            compass=compass_point(target_bearing),
            direction=relative_direction(target_bearing, heading),
            distance=planar_distance(player_pos, checkpoint.position),
            terrain=classify_position(self.world, x, z),
        )

    def elevation_profile(self, player_pos: Sequence[float], heading: float) -> list[float]:
        """Terrain heights on a ring around the player, starting straight ahead."""
        x, z = planar(player_pos)
        radius = min(DEFAULTS.ELEVATION_RING_MAX_RADIUS, self.world.config.map_size / 5)
        return elevation_ring(self.world.height_grid.height_at, x, z, heading, radius)

    def result(self) -> tuple[int, str]:
        return score_run(self.clock.elapsed_seconds, len(self.checkpoints), self.training_level)

    def final_stats(self) -> FinalStats:
        """Time, distance, average speed and route efficiency of the run so far."""
        elapsed = self.clock.elapsed_seconds
        if elapsed > 0:
            average_speed = self.distance_travelled / elapsed * DEFAULTS.MPS_TO_KMH
        else:
            average_speed = 0.0
        return FinalStats(
            elapsed_seconds=elapsed,
            distance=self.distance_travelled,
            average_speed_kmh=average_speed,
            route_efficiency=route_efficiency(
                self._first_position, self._last_position, self.distance_travelled, self._waypoint_count
            ),
        )
