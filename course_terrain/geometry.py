# course_terrain/geometry.py

"""
================================================================================
NAVIGATION GEOMETRY
================================================================================
Pure, stateless geometry used by placement, gameplay collision checks and
navigation hints.

Conventions:
---------------
- World plane is (x, z); y is elevation.
- Points are (x, z) pairs. Where a full (x, y, z) position is passed, only
  its x and z components are used.
- Bearings are compass-style degrees in [0, 360); 0 points along +z and
  90 along +x.
- Side Effects: None.
================================================================================
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Sequence

from . import config as DEFAULTS

if TYPE_CHECKING:
    from .models import HeightGrid

HeightFn = Callable[[float, float], float]


def planar(point: Sequence[float]) -> tuple[float, float]:
    """Reduces an (x, z) or (x, y, z) point to its (x, z) plane coordinates."""
    if len(point) == 3:
        return float(point[0]), float(point[2])
    return float(point[0]), float(point[1])


def planar_distance(a: Sequence[float], b: Sequence[float]) -> float:
    ax, az = planar(a)
    bx, bz = planar(b)
    return math.hypot(bx - ax, bz - az)


def distance_to_segment(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    """
    Ground-plane distance from p to the segment ab; world (x, y, z) points are
    reduced with planar(). The projection parameter is clamped to [0, 1]; a
    degenerate segment reduces to point distance.
    """
    px, pz = planar(p)
    ax, az = planar(a)
    bx, bz = planar(b)
    dx = bx - ax
    dz = bz - az
    len_sq = dx * dx + dz * dz
    if len_sq == 0:
        return math.hypot(px - ax, pz - az)

    t = ((px - ax) * dx + (pz - az) * dz) / len_sq
    t = min(1.0, max(0.0, t))
    return math.hypot(px - (ax + t * dx), pz - (az + t * dz))


def bearing(origin: Sequence[float], target: Sequence[float]) -> float:
    """Compass bearing from origin to target: atan2(dx, dz) in degrees, in [0, 360)."""
    ox, oz = planar(origin)
    tx, tz = planar(target)
    angle = math.degrees(math.atan2(tx - ox, tz - oz))
    angle %= 360.0
    # -0.0 and tiny negatives can round up to exactly 360.0 after the modulo.
    if angle >= 360.0:
        angle = 0.0
    return angle


def slope(height_fn: HeightFn, x: float, z: float) -> float:
    """Terrain inclination in degrees from central differences at +-0.5 units."""
    offset = DEFAULTS.SLOPE_SAMPLE_OFFSET
    span = 2 * offset
    dx = (height_fn(x + offset, z) - height_fn(x - offset, z)) / span
    dz = (height_fn(x, z + offset) - height_fn(x, z - offset)) / span
    return math.degrees(math.atan(math.hypot(dx, dz)))


def height_query(grid: "HeightGrid", x: float, z: float) -> float:
    """
    O(1) nearest-sample lookup. Returns 0 outside the grid (or for an empty
    domain); no interpolation.
    """
    size = grid.map_size
    if size <= 0:
        return 0.0
    half = size / 2
    u = (x + half) / size
    v = (z + half) / size
    if u < 0 or u > 1 or v < 0 or v > 1:
        return 0.0

    segments = grid.segments
    col = min(segments, int(round(u * segments)))
    row = min(segments, int(round(v * segments)))
    return float(grid.heights[row, col])


def compass_point(bearing_degrees: float) -> str:
    """Names the nearest of the eight compass points (N, NE, ... NW)."""
    index = int(round((bearing_degrees % 360.0) / 45.0)) % 8
    return DEFAULTS.COMPASS_POINTS[index]


def relative_direction(target_bearing: float, heading: float) -> str:
    """Where the target lies relative to the observer's heading, in 45-degree sectors."""
    relative = (target_bearing - heading) % 360.0
    index = int((relative + 22.5) // 45.0) % 8
    return DEFAULTS.RELATIVE_DIRECTIONS[index]


def elevation_ring(height_fn: HeightFn, x: float, z: float, heading: float,
                   radius: float, steps: int = DEFAULTS.ELEVATION_RING_STEPS) -> list[float]:
    """
    Samples terrain heights on a circle around (x, z), starting straight
    ahead and turning clockwise. Returns steps + 1 heights (the ring is closed).
    """
    heading_rad = math.radians(heading)
    profile = []
    for i in range(steps + 1):
        angle = heading_rad + (i / steps) * 2 * math.pi
        profile.append(height_fn(x + math.sin(angle) * radius, z + math.cos(angle) * radius))
    return profile
