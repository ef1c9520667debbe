# map_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the map
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC GAME.
Instead, pass a configuration dictionary to the MapGenerator instance.

Every biome threshold below is part of the terrain contract: changing one
changes the terrain distribution of every seed.
================================================================================
"""

# --- Seeding ---
DEFAULT_SEED = 123456789

# --- Map Dimensions (in tiles) ---
DEFAULT_MAP_WIDTH = 32
DEFAULT_MAP_HEIGHT = 32

# --- Fractal Noise ---
# Amplitude halves per octave, so octaves past ~6 barely register. The full
# count is kept so existing seeds keep producing the same maps.
FRACTAL_OCTAVES = 15
FRACTAL_PERSISTENCE = 0.5
FRACTAL_LACUNARITY = 2.0

# Base frequencies, in noise units per tile.
ELEVATION_NOISE_SCALE = 0.08
MOISTURE_NOISE_SCALE = 0.1

# Coordinate offset that decorrelates the moisture field from elevation while
# reusing the same permutation table.
MOISTURE_COORD_OFFSET = 100.0

# Relief is pushed up towards the top edge of the map.
NORTH_ELEVATION_BIAS = 0.05

# --- Elevation Bands (normalized 0.0 to 1.0) ---
TERRAIN_LEVELS = {
    "sea": 0.46,
    "coast": 0.54,
    "lowland": 0.62,
    "upland": 0.64,
    # Everything above "upland" is highland.
}

# --- Biome Thresholds (moisture, latitude and northness, all in [0, 1]) ---
BIOME_THRESHOLDS = {
    # Coastal band
    "coast_swamp_min_moisture": 0.72,
    "coast_desert_max_moisture": 0.25,

    # Lowlands
    "lowland_desert_max_moisture": 0.20,
    "lowland_prairie_max_moisture": 0.40,
    "tropical_max_latitude": 0.3,
    "jungle_min_moisture": 0.75,
    "forest_min_moisture": 0.50,

    # Uplands
    "tundra_min_latitude": 0.65,
    "tundra_max_moisture": 0.60,

    # Highlands: the northern arctic rule
    "arctic_north_split": 0.6,
    "arctic_north_moisture": 0.65,
    "arctic_far_north": 0.8,
    "arctic_far_north_moisture": 0.55,
    # Highlands: the polar arctic rule (south of the split)
    "arctic_polar_min_latitude": 0.7,
    "arctic_polar_max_moisture": 0.6,
}

# --- Post-processing: sparse hills ---
SPARSE_HILL_COORD_OFFSET = 200.0
SPARSE_HILL_NOISE_SCALE = 0.18
SPARSE_HILL_THRESHOLD = 0.84
SPARSE_HILL_MIN_ELEVATION_MARGIN = 0.03  # above sea level
SPARSE_HILL_MAX_ELEVATION = 0.85

# --- Post-processing: coastal swamps ---
COASTAL_SWAMP_COORD_OFFSET = 300.0
COASTAL_SWAMP_NOISE_SCALE = 0.22
COASTAL_SWAMP_THRESHOLD = 0.80
COASTAL_SWAMP_MIN_MOISTURE = 0.7

# --- Game Setup ---
PLAYER_NAMES = ("Blue Empire", "Red Empire")
# Players who see the whole map from the start. Everyone else explores it
# through their units.
INITIAL_EXPLORERS = (1,)
# Preferred starting corners, as (x, y) offsets from the top-left and the
# bottom-right corner respectively.
START_CORNER_OFFSET = 5
UNIT_MAX_MOVES = 2
