import logging

import numpy as np
import pytest

from course_terrain.models import GenerationConfig, HeightGrid, WorldData


@pytest.fixture
def logger():
    return logging.getLogger("course_terrain.tests")


@pytest.fixture
def flat_grid():
    def make(map_size=100.0, segments=16, height=0.0):
        return HeightGrid(np.full((segments + 1, segments + 1), height), map_size, segments)
    return make


@pytest.fixture
def make_world(flat_grid):
    def make(height=0.0, map_size=100.0, **features):
        config = GenerationConfig(seed=1, map_size=map_size, segments=16, checkpoint_count=0)
        return WorldData(config=config, height_grid=flat_grid(map_size, 16, height), **features)
    return make


@pytest.fixture(scope="session")
def baseline_world():
    from course_terrain.generator import generate_world
    return generate_world(GenerationConfig(seed=42, map_size=500.0, segments=128, checkpoint_count=5))
