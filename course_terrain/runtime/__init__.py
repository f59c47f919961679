# course_terrain/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# We can also use it to define the public API of the package.

from .clock import RunClock
from .course import (CheckpointEvent, CourseRun, FinalStats, NavigationHint, route_efficiency, score_run,
                     training_level)

__all__ = ["RunClock", "CourseRun", "CheckpointEvent", "FinalStats", "NavigationHint", "route_efficiency",
           "score_run", "training_level"]
