# generate_course.py

"""
================================================================================
OFFLINE COURSE GENERATOR SCRIPT
================================================================================
This script is a command-line tool for generating orienteering courses ahead
of time. For every seed it writes the raw heightfield, a JSON description of
all course features, and an orienteering-style PNG preview.

Usage:
    python generate_course.py --preset forest_park --seed 42
    python generate_course.py --config path/to/your/config.json --count 10
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import dataclasses
import time
import numpy as np
from PIL import Image
from tqdm import tqdm

from course_terrain.generator import CourseGenerator
from course_terrain.models import ConfigError, GenerationConfig, WorldData
from course_terrain import color_maps
from course_terrain import config as DEFAULTS

CONFIG_SECTION = 'course_generation_parameters'
DEFAULT_OUTPUT_DIR = 'generated_courses'


def save_preview(color_array: np.ndarray, file_path: str) -> str:
    """
    Saves a preview image with Pillow, palettizing it when it uses few
    enough colors. Returns the storage mode used.
    """
    img = Image.fromarray(color_array)
    colors = img.getcolors(257)
    if colors and len(colors) <= 256:
        img.quantize(colors=256).save(file_path, 'PNG')
        return 'palettized'
    img.save(file_path, 'PNG')
    return 'full'


def world_to_features(world: WorldData) -> dict:
    """Serializable description of everything in a course except the heights."""
    return {
        'config': world.config.to_dict(),
        'roads': [dataclasses.asdict(road) for road in world.roads],
        'rivers': [dataclasses.asdict(river) for river in world.rivers],
        'pools': [dataclasses.asdict(pool) for pool in world.pools],
        'objects': [dataclasses.asdict(obj) for obj in world.objects],
        'cliffs': [dataclasses.asdict(cliff) for cliff in world.cliffs],
        'checkpoints': [dataclasses.asdict(cp) for cp in world.checkpoints],
        'placement_stats': {kind: dataclasses.asdict(s) for kind, s in world.placement_stats.items()},
    }


def save_course(world: WorldData, output_dir: str) -> str:
    """Writes heights.npy, features.json and preview.png for one course."""
    cfg = world.config
    course_dir = os.path.join(output_dir, f"{cfg.map_variant}_seed_{cfg.seed}")
    os.makedirs(course_dir, exist_ok=True)

    np.save(os.path.join(course_dir, "heights.npy"), world.height_grid.heights)
    with open(os.path.join(course_dir, "features.json"), 'w') as f:
        json.dump(world_to_features(world), f, indent=2)
    save_preview(color_maps.get_course_color_array(world), os.path.join(course_dir, "preview.png"))
    return course_dir


def load_parameters(config_path: str = None, preset: str = None, seed: int = None) -> dict:
    """
    Merges generation parameters: preset first, then the JSON config file,
    then an explicit seed.
    """
    params = {}
    if preset is not None:
        params.update(GenerationConfig.from_preset(preset).to_dict())
    if config_path is not None:
        with open(config_path, 'r') as f:
            config = json.load(f)
        params.update(config.get(CONFIG_SECTION, {}))
    if seed is not None:
        params['seed'] = seed
    return params


def generate_courses(params: dict, count: int, output_dir: str, logger: logging.Logger) -> list[str]:
    base = GenerationConfig.from_dict(params)
    generator = CourseGenerator(logger)
    saved = []
    for offset in tqdm(range(count), desc="Generating Courses", disable=count < 2):
        config = dataclasses.replace(base, seed=base.seed + offset)
        world = generator.generate(config)
        saved.append(save_course(world, output_dir))
    return saved


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Offline course generator for the orienteering terrain core.")
    parser.add_argument("--config", type=str, help="Path to a JSON configuration file.")
    parser.add_argument("--preset", type=str, choices=sorted(DEFAULTS.MAP_PRESETS), help="Start from a catalogued map.")
    parser.add_argument("--seed", type=int, help="Master seed; overrides the config file.")
    parser.add_argument("--count", type=int, default=1, help="Number of consecutive seeds to generate.")
    parser.add_argument("--output", type=str, default=DEFAULT_OUTPUT_DIR, help="Directory to write courses into.")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("CourseGenerator")

    # 2. --- Load Configuration ---
    if args.config:
        logger.info(f"Loading configuration from: {args.config}")
    try:
        params = load_parameters(args.config, args.preset, args.seed)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1
    except ConfigError as e:
        logger.critical(f"Invalid preset: {e}")
        return 1

    if args.count < 1:
        logger.critical(f"--count must be at least 1, got {args.count}")
        return 1

    # 3. --- Generate ---
    start_time = time.perf_counter()
    try:
        saved = generate_courses(params, args.count, args.output, logger)
    except ConfigError as e:
        logger.critical(f"Invalid course configuration: {e}")
        return 1

    logger.info(f"Generated {len(saved)} course(s) in {time.perf_counter() - start_time:.2f} seconds.")
    logger.info(f"Courses saved to: {args.output}")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
