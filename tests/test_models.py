import dataclasses

import numpy as np
import pytest

from course_terrain import config as DEFAULTS
from course_terrain.models import ConfigError, GenerationConfig, HeightGrid


def test_defaults_are_valid():
    config = GenerationConfig().validate()
    assert config.seed == DEFAULTS.DEFAULT_SEED
    assert config.half_size == DEFAULTS.DEFAULT_MAP_SIZE / 2
    assert config.difficulty == 'beginner'


@pytest.mark.parametrize("overrides", [
    {"map_size": -10.0},
    {"map_size": float("nan")},
    {"segments": 0},
    {"checkpoint_count": -1},
    {"map_variant": "atlantis"},
    {"seed": 1.5},
    {"segments": True},
])
def test_invalid_configs_are_rejected(overrides):
    with pytest.raises(ConfigError):
        GenerationConfig(**overrides).validate()


def test_config_errors_are_value_errors():
    assert issubclass(ConfigError, ValueError)


def test_from_dict_fills_defaults_and_rejects_unknown_keys():
    config = GenerationConfig.from_dict({"seed": 5, "map_size": 250})
    assert config.seed == 5
    assert config.map_size == 250
    assert config.segments == DEFAULTS.DEFAULT_SEGMENTS
    with pytest.raises(ConfigError):
        GenerationConfig.from_dict({"seed": 5, "octaves": 4})


def test_to_dict_round_trip():
    config = GenerationConfig(seed=3, map_size=120.0, segments=40, checkpoint_count=2, map_variant='small_detailed')
    assert GenerationConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize("variant", sorted(DEFAULTS.MAP_PRESETS))
def test_every_preset_builds_a_valid_config(variant):
    config = GenerationConfig.from_preset(variant, seed=10)
    preset = DEFAULTS.MAP_PRESETS[variant]
    assert config.map_size == preset['size']
    assert config.checkpoint_count == preset['checkpoints']
    assert 1 <= config.segments <= DEFAULTS.MAX_SEGMENTS


def test_unknown_preset():
    with pytest.raises(ConfigError):
        GenerationConfig.from_preset('moon_base')


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        GenerationConfig().seed = 4


def test_height_grid_copies_and_freezes_its_samples():
    source = np.zeros((3, 3))
    grid = HeightGrid(source, map_size=10.0, segments=2)
    source[1, 1] = 9.0
    assert grid.height_at(0.0, 0.0) == 0.0
    assert not grid.heights.flags.writeable
