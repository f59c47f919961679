# course_terrain/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the course
generator. Every magic number used by the terrain, path, placement and
checkpoint stages lives here so that the generation code reads as a recipe.

DO NOT MODIFY THIS FILE FOR A SPECIFIC COURSE.
Instead, build a GenerationConfig (or pass a JSON file to generate_course.py).
================================================================================
"""

# --- Seeds ---
DEFAULT_SEED = 1337
# Large prime numbers used to offset seeds for the different random streams,
# ensuring they are unique but deterministic from the master seed.
ROAD_SEED_OFFSET = 12347
RIVER_SEED_OFFSET = 98761
OBJECT_SEED_OFFSET = 54321
CLIFF_SEED_OFFSET = 25391
CHECKPOINT_SEED_OFFSET = 71389

# --- Default Map ---
DEFAULT_MAP_SIZE = 500.0
DEFAULT_SEGMENTS = 128
MAX_SEGMENTS = 128
DEFAULT_CHECKPOINT_COUNT = 5
DEFAULT_MAP_VARIANT = 'default'

# --- Terrain Relief ---
# Fractal summation of three octaves: frequency doubles, weight halves.
TERRAIN_NOISE_SCALE = 0.005
TERRAIN_OCTAVE_FREQUENCIES = (1.0, 2.0, 4.0)
TERRAIN_OCTAVE_WEIGHTS = (20.0, 10.0, 5.0)

# Gentle rise towards the middle of the map.
CENTRAL_BUMP_HEIGHT = 10.0
# Flat bonus within the innermost fraction of the half-size.
PLATEAU_RADIUS_FACTOR = 0.3
PLATEAU_HEIGHT = 3.0

# Valleys are carved where a separate low-frequency sample dips below the threshold.
VALLEY_NOISE_SCALE = 0.003
VALLEY_THRESHOLD = -0.3
VALLEY_DEPTH = 5.0

MIN_TERRAIN_HEIGHT = 0.0

# --- Simplex Noise ---
PERMUTATION_SIZE = 256
SIMPLEX_OUTPUT_SCALE = 70.0

# --- Roads & Paths ---
MAX_ROADS = 5
MAP_SIZE_PER_ROAD = 100.0
ROAD_LENGTH_FACTOR = 0.8       # Fraction of the half-size each radial road reaches
ROAD_WIDTH_RANGE = (4.0, 8.0)
ROAD_ELEVATION_LIFT = 0.02

PARK_PATH_VARIANTS = ('small_detailed', 'forest_park')
PARK_PATH_WIDTH = 3.0
# Path chain as fractions of the half-size, (x, z).
PARK_PATH_POINTS = (
    (-0.4, -0.6),
    (-0.2, -0.4),
    (0.0, -0.5),
    (0.2, -0.3),
    (0.4, -0.5),
)

# --- Rivers & Pools ---
MAX_RIVERS = 3
MAP_SIZE_PER_RIVER = 200.0
RIVER_WIDTH_RANGE = (3.0, 10.0)
WATER_ELEVATION_LIFT = 0.01

POOL_VARIANTS = ('swamp_area',)
POOL_COUNT = 5
POOL_RADIUS_RANGE = (10.0, 30.0)

# --- Object Placement ---
# Each class: cap on the count, how the count scales with the map
# ('area' divides size^2, 'side' divides size), the divisor, and the
# number of rejection-sampling attempts per instance.
OBJECT_CLASSES = {
    "tree":        {"cap": 500,  "basis": "area", "divisor": 100.0, "max_attempts": 100},
    "rock":        {"cap": 200,  "basis": "area", "divisor": 500.0, "max_attempts": 50},
    "fallen_tree": {"cap": 50,   "basis": "side", "divisor": 10.0,  "max_attempts": 50},
    "bush":        {"cap": 100,  "basis": "side", "divisor": 5.0,   "max_attempts": 50},
    # Ground cover tolerates overlap; the cap only guarantees termination.
    "grass":       {"cap": 1000, "basis": "area", "divisor": 10.0,  "max_attempts": 10000},
}
PLACEMENT_ORDER = ("tree", "rock", "fallen_tree", "bush", "grass")

TREE_SPECIES = ('pine', 'oak', 'birch', 'spruce', 'poplar', 'willow')
TREE_SCALE_RANGE = (0.5, 1.5)
ROCK_SIZE_RANGE = (0.3, 2.3)
FALLEN_TREE_RADIUS_RANGE = (0.2, 0.5)
BUSH_SCALE_RANGE = (0.3, 0.7)
GRASS_SCALE_RANGE = (0.5, 1.0)

# --- Cliffs ---
CLIFF_VARIANTS = ('mountain_pass', 'large_wilderness')
MAP_SIZE_PER_CLIFF = 200.0
CLIFF_RING_FACTOR = 0.6
CLIFF_WIDTH_RANGE = (20.0, 50.0)
CLIFF_HEIGHT_RANGE = (10.0, 30.0)
CLIFF_DEPTH_RANGE = (5.0, 15.0)

# --- Checkpoints ---
CHECKPOINT_MAX_ATTEMPTS = 100
CHECKPOINT_RING_FACTOR = 0.7
CHECKPOINT_INNER_FRACTION = 0.3
CHECKPOINT_JITTER_FACTOR = 0.1
CAPTURE_RADIUS = 8.0

MAX_CHECKPOINT_DIFFICULTY = 5.0
CHECKPOINT_DIFFICULTY_PROGRESSION = 0.5
BASE_CHECKPOINT_DIFFICULTY = {
    'beginner': 1.0,
    'advanced': 2.0,
    'expert': 3.0,
}

# --- Navigation Geometry ---
SLOPE_SAMPLE_OFFSET = 0.5
COMPASS_POINTS = ('N', 'NE', 'E', 'SE', 'S', 'SW', 'W', 'NW')
RELATIVE_DIRECTIONS = (
    'ahead', 'ahead-right', 'right', 'behind-right',
    'behind', 'behind-left', 'left', 'ahead-left',
)
ELEVATION_RING_STEPS = 50
ELEVATION_RING_MAX_RADIUS = 100.0

# Terrain classes used by navigation hints (heights in world units).
HIGHLAND_HEIGHT = 15.0
LOWLAND_HEIGHT = 2.0

# --- Run Scoring ---
SECONDS_PER_CHECKPOINT_PAR = 180.0
TRAINING_LEVEL_BONUS = 5
MPS_TO_KMH = 3.6
MAX_ROUTE_EFFICIENCY = 100
MEDAL_THRESHOLDS = {
    'gold': 80,
    'silver': 60,
}
# Distance (m) that must be exceeded to reach each training level.
TRAINING_LEVEL_DISTANCES = {
    2: 1000.0,
    3: 3000.0,
    4: 7000.0,
}

# --- Map Presets ---
# The variant catalogue of the training simulation. 'default' has no
# variant-specific features.
MAP_PRESETS = {
    'default': {
        'size': DEFAULT_MAP_SIZE, 'checkpoints': DEFAULT_CHECKPOINT_COUNT,
        'difficulty': 'beginner', 'terrain': 'hilly',
    },
    'small_detailed': {
        'size': 100.0, 'checkpoints': 3,
        'difficulty': 'beginner', 'terrain': 'hilly',
    },
    'forest_park': {
        'size': 200.0, 'checkpoints': 5,
        'difficulty': 'beginner', 'terrain': 'flat',
    },
    'hilly_terrain': {
        'size': 300.0, 'checkpoints': 7,
        'difficulty': 'advanced', 'terrain': 'hilly',
    },
    'mountain_pass': {
        'size': 400.0, 'checkpoints': 8,
        'difficulty': 'expert', 'terrain': 'mountainous',
    },
    'swamp_area': {
        'size': 500.0, 'checkpoints': 10,
        'difficulty': 'expert', 'terrain': 'flat',
    },
    'large_wilderness': {
        'size': 1000.0, 'checkpoints': 15,
        'difficulty': 'expert', 'terrain': 'varied',
    },
}

# --- Preview Rendering ---
PREVIEW_MAX_HEIGHT = 40.0
