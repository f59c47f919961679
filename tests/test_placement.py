import math

import pytest

from course_terrain.geometry import distance_to_segment
from course_terrain.models import CircularFeature, GenerationConfig, PlacementStats
from course_terrain.paths import make_line_feature
from course_terrain.placement import ExclusionZones, SpatialFeaturePlacer, class_count


@pytest.fixture
def crossing_roads():
    return [
        make_line_feature(-50.0, 0.0, 50.0, 0.0, 6.0, "road"),
        make_line_feature(0.0, -50.0, 0.0, 50.0, 6.0, "road"),
    ]


def test_objects_stay_off_crossing_roads(crossing_roads, flat_grid):
    config = GenerationConfig(seed=21, map_size=100.0, segments=16)
    exclusions = ExclusionZones(roads=crossing_roads)
    trees = SpatialFeaturePlacer().place("tree", 500, config, exclusions, flat_grid(100.0))
    assert trees
    for tree in trees:
        x, _, z = tree.position
        assert abs(z) >= 3.0
        assert abs(x) >= 3.0
        for road in crossing_roads:
            assert distance_to_segment((x, z), road.p1, road.p2) >= road.width / 2


def test_objects_stay_out_of_pools(flat_grid):
    config = GenerationConfig(seed=3, map_size=100.0, segments=16)
    pool = CircularFeature(center=(10.0, -10.0), radius=20.0)
    bushes = SpatialFeaturePlacer().place("bush", 200, config, ExclusionZones(pools=[pool]), flat_grid(100.0))
    for bush in bushes:
        x, _, z = bush.position
        assert math.hypot(x - 10.0, z + 10.0) >= 20.0


def test_objects_lie_inside_the_map(flat_grid):
    config = GenerationConfig(seed=4, map_size=80.0, segments=16)
    rocks = SpatialFeaturePlacer().place("rock", 100, config, ExclusionZones(), flat_grid(80.0))
    assert len(rocks) == 100
    for rock in rocks:
        assert -40.0 <= rock.position[0] <= 40.0
        assert -40.0 <= rock.position[2] <= 40.0


def test_exhausted_instances_are_skipped(flat_grid):
    config = GenerationConfig(seed=5, map_size=100.0, segments=16)
    everything = ExclusionZones(pools=[CircularFeature(center=(0.0, 0.0), radius=1000.0)])
    stats = PlacementStats()
    placed = SpatialFeaturePlacer().place("tree", 10, config, everything, flat_grid(100.0), stats=stats)
    assert placed == []
    assert stats == PlacementStats(requested=10, placed=0, skipped=10)


def test_per_class_attributes(flat_grid):
    config = GenerationConfig(seed=6, map_size=100.0, segments=16)
    placer = SpatialFeaturePlacer()
    grid = flat_grid(100.0, 16, 4.0)
    exclusions = ExclusionZones()

    for tree in placer.place("tree", 20, config, exclusions, grid):
        assert tree.variant in ('pine', 'oak', 'birch', 'spruce', 'poplar', 'willow')
        assert 0.5 <= tree.scale <= 1.5
        assert tree.position[1] == 4.0
        assert 0.0 <= tree.rotation_y <= 2 * math.pi

    for rock in placer.place("rock", 20, config, exclusions, grid):
        assert 0.3 <= rock.scale <= 2.3
        assert rock.position[1] == pytest.approx(4.0 + rock.scale)

    for log in placer.place("fallen_tree", 20, config, exclusions, grid):
        assert 0.2 <= log.scale <= 0.5
        assert log.position[1] == pytest.approx(4.0 + log.scale)


def test_unknown_class_is_rejected(flat_grid):
    config = GenerationConfig(seed=6, map_size=100.0, segments=16)
    with pytest.raises(ValueError):
        SpatialFeaturePlacer().place("castle", 1, config, ExclusionZones(), flat_grid())


@pytest.mark.parametrize("kind, size, expected", [
    ("tree", 100.0, 100),
    ("tree", 500.0, 500),
    ("rock", 500.0, 200),
    ("rock", 100.0, 20),
    ("fallen_tree", 500.0, 50),
    ("fallen_tree", 100.0, 10),
    ("bush", 200.0, 40),
    ("grass", 500.0, 1000),
    ("grass", 0.0, 0),
])
def test_class_counts(kind, size, expected):
    assert class_count(kind, size) == expected


def test_place_all_reports_every_class(flat_grid):
    config = GenerationConfig(seed=8, map_size=60.0, segments=16)
    objects, stats = SpatialFeaturePlacer().place_all(config, ExclusionZones(), flat_grid(60.0))
    assert set(stats) == {"tree", "rock", "fallen_tree", "bush", "grass"}
    assert sum(s.placed for s in stats.values()) == len(objects)
    assert stats["tree"].requested == class_count("tree", 60.0)


def test_place_all_is_deterministic(crossing_roads, flat_grid):
    config = GenerationConfig(seed=8, map_size=100.0, segments=16)
    exclusions = ExclusionZones(roads=crossing_roads)
    first, _ = SpatialFeaturePlacer().place_all(config, exclusions, flat_grid())
    second, _ = SpatialFeaturePlacer().place_all(config, exclusions, flat_grid())
    assert first == second


def test_cliffs_only_on_mountain_maps(flat_grid):
    placer = SpatialFeaturePlacer()
    mountain = GenerationConfig.from_preset('mountain_pass', seed=1)
    cliffs = placer.place_cliffs(mountain, flat_grid(400.0))
    assert len(cliffs) == 2
    for cliff in cliffs:
        assert math.hypot(cliff.position[0], cliff.position[2]) == pytest.approx(0.6 * 200.0)
        assert 20.0 <= cliff.width <= 50.0
        assert cliff.position[1] == pytest.approx(cliff.height / 2)

    assert placer.place_cliffs(GenerationConfig.from_preset('forest_park'), flat_grid(200.0)) == []


def test_exclusion_zone_queries(crossing_roads):
    zones = ExclusionZones(roads=crossing_roads, pools=[CircularFeature(center=(30.0, 30.0), radius=5.0)])
    assert zones.on_road(10.0, 1.0)
    assert not zones.on_road(10.0, 10.0)
    assert zones.on_water(32.0, 31.0)
    assert zones.contains(0.0, 0.0)
    assert not zones.contains(20.0, -20.0)
