# course_terrain/__init__.py

# Public API of the course generation core.

from .models import ConfigError, GenerationConfig, WorldData
from .generator import (
    CourseGenerator,
    advance_checkpoint,
    classify_position,
    compute_bearing,
    compute_slope,
    generate_world,
    is_on_river,
    is_on_road,
    query_distance_to_nearest_river,
    query_distance_to_nearest_road,
    query_height,
)

__all__ = [
    "ConfigError",
    "GenerationConfig",
    "WorldData",
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
