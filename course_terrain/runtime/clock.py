# course_terrain/runtime/clock.py

"""
================================================================================
RUN CLOCK
================================================================================
This module provides a self-contained, data-only class for tracking the
elapsed time of a course run. It is driven by the host's fixed-step loop and
knows nothing about rendering.

Data Contract:
---------------
- Inputs (on initialization):
    - time_scale (float): 1 = real-time. 0 = paused.
- Public Methods:
    - update(real_delta_time): Advances the clock.
    - set_speed(new_scale): Changes the speed of time.
    - pause() / resume(): Freezes and unfreezes the clock.
    - format_elapsed(): Returns the elapsed time as "MM:SS".
- Public Properties:
    - elapsed_seconds (float), minute, second (read-only integers).
- Side Effects: None.
- Invariants: The clock's state depends only on the accumulated scaled time,
  not on the frequency of updates.
================================================================================
"""

class RunClock:
    """Manages the elapsed time of one run."""

    def __init__(self, time_scale: float = 1.0):
        self.time_scale = max(0.0, time_scale)
        self.paused = False
        self._total_seconds_elapsed = 0.0

        self.minute = 0
        self.second = 0

    @property
    def elapsed_seconds(self) -> float:
        return self._total_seconds_elapsed

    def update(self, real_delta_time: float):
        """
        Advances the clock by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.
        """
        if self.paused or self.time_scale <= 0 or real_delta_time <= 0:
            return

        self._total_seconds_elapsed += real_delta_time * self.time_scale
        self._recalculate_time()

    def _recalculate_time(self):
        self.minute = int(self._total_seconds_elapsed // 60)
        self.second = int(self._total_seconds_elapsed % 60)

    def set_speed(self, new_scale: float):
        """
        Sets the speed of the run clock.
        0 = paused, 1 = real-time, > 1 = fast-forward.
        """
        self.time_scale = max(0.0, new_scale)

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def reset(self):
        self._total_seconds_elapsed = 0.0
        self._recalculate_time()

    def format_elapsed(self) -> str:
        """Returns the elapsed time as a zero-padded "MM:SS" string."""
        return f"{self.minute:02d}:{self.second:02d}"
