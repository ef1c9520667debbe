# map_generator/biomes.py

"""
================================================================================
BIOME CLASSIFICATION
================================================================================
This module maps per-cell climate samples to terrain categories.

Classification happens in three steps, each a pure function of whole grids:
  1. An ordered decision cascade over (elevation, moisture, latitude, north).
  2. Sparse hills: scattered hills on ordinary land, driven by a separate
     high-frequency noise sample.
  3. Coastal swamps: wet land cells touching the ocean may turn into swamp.

Steps 2 and 3 read a finished snapshot of the previous step and return a new
grid, so no cell ever observes a half-updated neighbourhood.

Data Contract:
---------------
- Inputs: NumPy float arrays of identical (or broadcastable) shape, values in
  [0, 1]. Threshold dictionaries default to `config.TERRAIN_LEVELS` and
  `config.BIOME_THRESHOLDS`.
- Outputs: uint8 arrays of `TerrainType` IDs.
- Side Effects: None. Input grids are never modified.
================================================================================
"""
import numpy as np
from scipy.ndimage import binary_dilation, generate_binary_structure

from . import config as DEFAULTS
from .terrain import TerrainType

_OCEAN = int(TerrainType.OCEAN)
_DESERT = int(TerrainType.DESERT)
_PRAIRIE = int(TerrainType.PRAIRIE)
_GRASSLAND = int(TerrainType.GRASSLAND)
_FOREST = int(TerrainType.FOREST)
_HILL = int(TerrainType.HILL)
_MOUNTAIN = int(TerrainType.MOUNTAIN)
_TUNDRA = int(TerrainType.TUNDRA)
_ARCTIC = int(TerrainType.ARCTIC)
_SWAMP = int(TerrainType.SWAMP)
_JUNGLE = int(TerrainType.JUNGLE)

# Terrain that the post-processing passes never rewrite.
_FIXED_TERRAIN = (_OCEAN, _MOUNTAIN, _ARCTIC)
# Land that keeps its identity even when the sparse hill noise peaks.
_HILL_RESISTANT_TERRAIN = (_SWAMP, _DESERT, _TUNDRA)

# North, south, east and west neighbours only.
_FOUR_NEIGHBORHOOD = generate_binary_structure(2, 1)


def classify_terrain(elevation, moisture, latitude, north,
                     terrain_levels: dict = None, biome_thresholds: dict = None) -> np.ndarray:
    """
    Runs the terrain decision cascade over whole grids.

    `np.select` picks the first condition that holds, which reproduces the
    short-circuit order of the cascade:
      ocean < coastal band < lowlands < uplands < highlands.
    """
    levels = terrain_levels if terrain_levels is not None else DEFAULTS.TERRAIN_LEVELS
    t = biome_thresholds if biome_thresholds is not None else DEFAULTS.BIOME_THRESHOLDS

    elevation, moisture, latitude, north = np.broadcast_arrays(
        *(np.asarray(a, dtype=np.float64) for a in (elevation, moisture, latitude, north))
    )

    # --- 1. Coastal band ---
    coastal = np.select(
        [moisture > t["coast_swamp_min_moisture"], moisture < t["coast_desert_max_moisture"]],
        [_SWAMP, _DESERT],
        default=_PRAIRIE,
    )

    # --- 2. Lowlands: dry first, then the tropical or temperate rule ---
    tropical = latitude < t["tropical_max_latitude"]
    lowland = np.select(
        [
            moisture < t["lowland_desert_max_moisture"],
            moisture < t["lowland_prairie_max_moisture"],
            tropical & (moisture > t["jungle_min_moisture"]),
            tropical,
            moisture > t["forest_min_moisture"],
        ],
        [_DESERT, _PRAIRIE, _JUNGLE, _GRASSLAND, _FOREST],
        default=_GRASSLAND,
    )

    # --- 3. Uplands ---
    upland = np.where(
        (latitude > t["tundra_min_latitude"]) & (moisture < t["tundra_max_moisture"]),
        _TUNDRA,
        _HILL,
    )

    # --- 4. Highlands ---
    northern = north > t["arctic_north_split"]
    northern_arctic = (
        northern
        & (moisture < t["arctic_north_moisture"])
        & (north > t["arctic_far_north"])
        & (moisture < t["arctic_far_north_moisture"])
    )
    polar_arctic = (
        ~northern
        & (latitude > t["arctic_polar_min_latitude"])
        & (moisture < t["arctic_polar_max_moisture"])
    )
    highland = np.where(northern_arctic | polar_arctic, _ARCTIC, _MOUNTAIN)

    terrain = np.select(
        [
            elevation < levels["sea"],
            elevation < levels["coast"],
            elevation < levels["lowland"],
            elevation < levels["upland"],
        ],
        [_OCEAN, coastal, lowland, upland],
        default=highland,
    )
    return terrain.astype(np.uint8)


def classify_cell(elevation: float, moisture: float, latitude: float, north: float,
                  terrain_levels: dict = None, biome_thresholds: dict = None) -> TerrainType:
    """Classifies a single cell with the same cascade as `classify_terrain`."""
    grid = classify_terrain(
        np.atleast_1d(elevation), np.atleast_1d(moisture),
        np.atleast_1d(latitude), np.atleast_1d(north),
        terrain_levels, biome_thresholds,
    )
    return TerrainType(int(grid[0]))


def apply_sparse_hills(snapshot: np.ndarray, elevation: np.ndarray, hill_noise: np.ndarray,
                       sea_level: float = DEFAULTS.TERRAIN_LEVELS["sea"],
                       threshold: float = DEFAULTS.SPARSE_HILL_THRESHOLD,
                       min_margin: float = DEFAULTS.SPARSE_HILL_MIN_ELEVATION_MARGIN,
                       max_elevation: float = DEFAULTS.SPARSE_HILL_MAX_ELEVATION) -> np.ndarray:
    """
    Scatters hills over ordinary land where the hill noise peaks, away from
    the shoreline and below the high peaks.
    """
    eligible = (
        ~np.isin(snapshot, _FIXED_TERRAIN)
        & ~np.isin(snapshot, _HILL_RESISTANT_TERRAIN)
        & (hill_noise > threshold)
        & (elevation > sea_level + min_margin)
        & (elevation < max_elevation)
    )
    result = snapshot.copy()
    result[eligible] = _HILL
    return result


def ocean_neighbor_mask(snapshot: np.ndarray) -> np.ndarray:
    """
    True for non-ocean cells with at least one ocean cell among their four
    direct neighbours. Cells outside the grid never count as ocean.
    """
    ocean = snapshot == _OCEAN
    return binary_dilation(ocean, structure=_FOUR_NEIGHBORHOOD) & ~ocean


def apply_coastal_swamps(snapshot: np.ndarray, moisture: np.ndarray, swamp_noise: np.ndarray,
                         min_moisture: float = DEFAULTS.COASTAL_SWAMP_MIN_MOISTURE,
                         threshold: float = DEFAULTS.COASTAL_SWAMP_THRESHOLD) -> np.ndarray:
    """Turns wet coastal land into swamp where the swamp noise peaks."""
    eligible = (
        ~np.isin(snapshot, _FIXED_TERRAIN)
        & (moisture > min_moisture)
        & ocean_neighbor_mask(snapshot)
        & (swamp_noise > threshold)
    )
    result = snapshot.copy()
    result[eligible] = _SWAMP
    return result
