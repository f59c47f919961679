import math

import numpy as np
import pytest

from course_terrain.geometry import (bearing, compass_point, distance_to_segment, elevation_ring,
                                     height_query, planar_distance, relative_direction, slope)
from course_terrain.models import HeightGrid


def test_degenerate_segment_is_point_distance():
    assert distance_to_segment((3.0, 4.0), (0.0, 0.0), (0.0, 0.0)) == pytest.approx(5.0)


def test_segment_distance_clamps_to_endpoints():
    a, b = (0.0, 0.0), (10.0, 0.0)
    assert distance_to_segment((5.0, 2.0), a, b) == pytest.approx(2.0)
    assert distance_to_segment((-3.0, 4.0), a, b) == pytest.approx(5.0)
    assert distance_to_segment((13.0, -4.0), a, b) == pytest.approx(5.0)


@pytest.mark.parametrize("target, expected", [
    ((0.0, 0.0, 10.0), 0.0),
    ((10.0, 0.0, 0.0), 90.0),
    ((0.0, 0.0, -10.0), 180.0),
    ((-10.0, 0.0, 0.0), 270.0),
    ((5.0, 0.0, 5.0), 45.0),
])
def test_bearing_follows_compass_convention(target, expected):
    assert bearing((0.0, 0.0, 0.0), target) == pytest.approx(expected)


def test_bearing_is_always_in_range():
    rng = np.random.default_rng(0)
    for _ in range(200):
        a = tuple(rng.uniform(-100, 100, 2))
        b = tuple(rng.uniform(-100, 100, 2))
        assert 0.0 <= bearing(a, b) < 360.0
    assert bearing((1.0, 1.0), (1.0, 1.0)) == 0.0


def test_planar_distance_ignores_elevation():
    assert planar_distance((0.0, 100.0, 0.0), (3.0, -50.0, 4.0)) == pytest.approx(5.0)
    assert planar_distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)


def test_slope_of_flat_and_inclined_planes():
    assert slope(lambda x, z: 7.0, 1.0, 2.0) == 0.0
    assert slope(lambda x, z: x, 0.0, 0.0) == pytest.approx(45.0)
    assert slope(lambda x, z: math.sqrt(3) * z, 0.0, 0.0) == pytest.approx(60.0)


def test_height_query_picks_the_nearest_sample():
    heights = np.arange(9, dtype=float).reshape(3, 3)
    grid = HeightGrid(heights, map_size=10.0, segments=2)
    assert height_query(grid, -5.0, -5.0) == 0.0
    assert height_query(grid, 0.0, 0.0) == 4.0
    assert height_query(grid, 5.0, 0.0) == 5.0
    assert height_query(grid, 0.0, 5.0) == 7.0
    assert height_query(grid, 1.0, -4.0) == 1.0


def test_height_query_is_zero_outside_the_domain():
    grid = HeightGrid(np.ones((3, 3)), map_size=10.0, segments=2)
    assert height_query(grid, 5.01, 0.0) == 0.0
    assert height_query(grid, 0.0, -6.0) == 0.0
    assert height_query(HeightGrid(np.ones((3, 3)), map_size=0.0, segments=2), 0.0, 0.0) == 0.0


@pytest.mark.parametrize("angle, name", [(0, 'N'), (44, 'NE'), (90, 'E'), (200, 'S'), (300, 'NW'), (350, 'N')])
def test_compass_point(angle, name):
    assert compass_point(angle) == name


@pytest.mark.parametrize("target, heading, expected", [
    (0.0, 0.0, 'ahead'),
    (90.0, 0.0, 'right'),
    (270.0, 0.0, 'left'),
    (180.0, 0.0, 'behind'),
    (10.0, 350.0, 'ahead'),
    (45.0, 0.0, 'ahead-right'),
    (300.0, 0.0, 'ahead-left'),
])
def test_relative_direction(target, heading, expected):
    assert relative_direction(target, heading) == expected


def test_elevation_ring_is_closed_and_starts_ahead():
    ring = elevation_ring(lambda x, z: z, 0.0, 0.0, heading=0.0, radius=10.0, steps=4)
    assert len(ring) == 5
    assert ring[0] == pytest.approx(10.0)
    assert ring[2] == pytest.approx(-10.0)
    assert ring[-1] == pytest.approx(ring[0])


def test_segment_distance_ignores_elevation_of_world_points():
    a, b = (-10.0, 0.0), (10.0, 0.0)
    assert distance_to_segment((0.0, 100.0, 0.0), a, b) == pytest.approx(0.0)
    assert distance_to_segment((0.0, 100.0, 3.0), a, b) == pytest.approx(3.0)
    assert distance_to_segment((0.0, 7.0, 4.0), (-10.0, 2.0, 0.0), (10.0, 9.0, 0.0)) == pytest.approx(4.0)
