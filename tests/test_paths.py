import math

import pytest

from course_terrain import config as DEFAULTS
from course_terrain.models import GenerationConfig
from course_terrain.paths import PathNetworkBuilder, make_line_feature


def segment_length(feature):
    return math.hypot(feature.p2[0] - feature.p1[0], feature.p2[1] - feature.p1[1])


def test_line_features_are_extended_by_half_width():
    feature = make_line_feature(0.0, 0.0, 10.0, 0.0, 4.0, "road")
    assert feature.p1 == pytest.approx((-2.0, 0.0))
    assert feature.p2 == pytest.approx((12.0, 0.0))


def test_radial_roads(flat_grid):
    config = GenerationConfig(seed=5, map_size=300.0, segments=16)
    roads = PathNetworkBuilder().build_roads(config, flat_grid(300.0, 16, 2.0))
    assert len(roads) == 3
    for road in roads:
        assert road.kind == "road"
        assert 4.0 <= road.width <= 8.0
        assert segment_length(road) == pytest.approx(2 * 0.8 * 150.0 + road.width)
        # Every road runs through the map centre.
        assert road.midpoint == pytest.approx((0.0, 0.0), abs=1e-9)
        assert road.elevation == pytest.approx(2.0 + DEFAULTS.ROAD_ELEVATION_LIFT)


def test_road_count_is_capped(flat_grid):
    config = GenerationConfig(seed=5, map_size=1000.0, segments=16)
    assert len(PathNetworkBuilder().build_roads(config, flat_grid(1000.0))) == DEFAULTS.MAX_ROADS


def test_park_maps_get_footpaths(flat_grid):
    config = GenerationConfig.from_preset('forest_park', seed=2)
    roads = PathNetworkBuilder().build_roads(config, flat_grid(200.0))
    paths = [road for road in roads if road.kind == "path"]
    assert len(roads) == 2 + 4
    assert len(paths) == 4
    assert all(path.width == DEFAULTS.PARK_PATH_WIDTH for path in paths)


def test_rivers_cross_the_map(flat_grid):
    config = GenerationConfig(seed=9, map_size=500.0, segments=16)
    rivers, pools = PathNetworkBuilder().build_rivers(config, flat_grid(500.0))
    assert pools == []
    assert len(rivers) == 2
    for river in rivers:
        assert river.kind == "river"
        assert 3.0 <= river.width <= 10.0
        # Entry and exit lie on opposite borders, so the river spans the whole map.
        spans = (abs(river.p2[0] - river.p1[0]), abs(river.p2[1] - river.p1[1]))
        assert max(spans) >= 500.0


def test_swamp_has_pools_instead_of_rivers(flat_grid):
    config = GenerationConfig.from_preset('swamp_area', seed=4)
    rivers, pools = PathNetworkBuilder().build_rivers(config, flat_grid(500.0))
    assert rivers == []
    assert len(pools) == DEFAULTS.POOL_COUNT
    for pool in pools:
        assert 10.0 <= pool.radius <= 30.0
        assert -250.0 <= pool.center[0] <= 250.0
        assert -250.0 <= pool.center[1] <= 250.0


def test_small_maps_have_no_network(flat_grid):
    config = GenerationConfig(seed=1, map_size=50.0, segments=16)
    builder = PathNetworkBuilder()
    assert builder.build_roads(config, flat_grid(50.0)) == []
    assert builder.build_rivers(config, flat_grid(50.0)) == ([], [])


def test_zero_size_map_is_empty(flat_grid):
    config = GenerationConfig(seed=1, map_size=0.0, segments=16)
    builder = PathNetworkBuilder()
    assert builder.build_roads(config, flat_grid(0.0)) == []
    assert builder.build_rivers(config, flat_grid(0.0)) == ([], [])


def test_network_is_deterministic(flat_grid):
    config = GenerationConfig(seed=77, map_size=600.0, segments=16)
    builder = PathNetworkBuilder()
    grid = flat_grid(600.0)
    assert builder.build_roads(config, grid) == builder.build_roads(config, grid)
    assert builder.build_rivers(config, grid) == builder.build_rivers(config, grid)
