# map_generator/generator.py

"""
================================================================================
CORE MAP GENERATOR
================================================================================
This module contains the main MapGenerator class, responsible for turning a
seed into a finished grid of terrain categories.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of generation parameters which can override
      the internal defaults. Expected keys include 'seed', 'map_width', etc.
      'seed' may be an integer or a raw seed token (string).
    - logger: A configured Python logging object for runtime messages.
    - noise_field (optional): Any callable (x, y) -> [0, 1] that accepts
      NumPy arrays. Replaces the seeded Perlin field (used by tests).
- Outputs (from methods):
    - NumPy uint8 arrays of TerrainType IDs, shape (height, width).
    - A runtime GameMap wrapping such a grid.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same seed, dimensions and configuration, the output
  is identical, cell for cell.
================================================================================
"""

import logging
import time
from typing import NamedTuple

import numpy as np

from . import config as DEFAULTS
from . import biomes
from .noise import PerlinNoise2D, fractal_noise
from .rng import parse_seed, to_int32
from .runtime.game_map import GameMap
from .terrain import TerrainType


class CellSamples(NamedTuple):
    """Per-cell inputs of the classifier, each of shape (height, width)."""
    elevation: np.ndarray
    moisture: np.ndarray
    latitude: np.ndarray
    north: np.ndarray


def _resolve_seed(raw_seed) -> int:
    if raw_seed is None or isinstance(raw_seed, str):
        return parse_seed(raw_seed)
    return to_int32(int(raw_seed))


class MapGenerator:
    """
    Generates terrain grids from a seed.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config: dict, logger: logging.Logger, noise_field=None):
        """
        Initializes the map generator.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.
            noise_field (callable, optional): A pre-built noise field. If None,
                a Perlin field is built from the seed.
        """
        self.logger = logger
        self.user_config = config
        self.logger.info("MapGenerator initializing...")

        # --- Consolidate Configuration ---
        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
            'map_width': self.user_config.get('map_width', DEFAULTS.DEFAULT_MAP_WIDTH),
            'map_height': self.user_config.get('map_height', DEFAULTS.DEFAULT_MAP_HEIGHT),

            'fractal_octaves': self.user_config.get('fractal_octaves', DEFAULTS.FRACTAL_OCTAVES),
            'fractal_persistence': self.user_config.get('fractal_persistence', DEFAULTS.FRACTAL_PERSISTENCE),
            'fractal_lacunarity': self.user_config.get('fractal_lacunarity', DEFAULTS.FRACTAL_LACUNARITY),
            'elevation_noise_scale': self.user_config.get('elevation_noise_scale', DEFAULTS.ELEVATION_NOISE_SCALE),
            'moisture_noise_scale': self.user_config.get('moisture_noise_scale', DEFAULTS.MOISTURE_NOISE_SCALE),
            'moisture_coord_offset': self.user_config.get('moisture_coord_offset', DEFAULTS.MOISTURE_COORD_OFFSET),
            'north_elevation_bias': self.user_config.get('north_elevation_bias', DEFAULTS.NORTH_ELEVATION_BIAS),

            'terrain_levels': self.user_config.get('terrain_levels', DEFAULTS.TERRAIN_LEVELS),
            'biome_thresholds': self.user_config.get('biome_thresholds', DEFAULTS.BIOME_THRESHOLDS),

            'sparse_hill_coord_offset': self.user_config.get('sparse_hill_coord_offset', DEFAULTS.SPARSE_HILL_COORD_OFFSET),
            'sparse_hill_noise_scale': self.user_config.get('sparse_hill_noise_scale', DEFAULTS.SPARSE_HILL_NOISE_SCALE),
            'sparse_hill_threshold': self.user_config.get('sparse_hill_threshold', DEFAULTS.SPARSE_HILL_THRESHOLD),
            'sparse_hill_min_elevation_margin': self.user_config.get('sparse_hill_min_elevation_margin', DEFAULTS.SPARSE_HILL_MIN_ELEVATION_MARGIN),
            'sparse_hill_max_elevation': self.user_config.get('sparse_hill_max_elevation', DEFAULTS.SPARSE_HILL_MAX_ELEVATION),

            'coastal_swamp_coord_offset': self.user_config.get('coastal_swamp_coord_offset', DEFAULTS.COASTAL_SWAMP_COORD_OFFSET),
            'coastal_swamp_noise_scale': self.user_config.get('coastal_swamp_noise_scale', DEFAULTS.COASTAL_SWAMP_NOISE_SCALE),
            'coastal_swamp_threshold': self.user_config.get('coastal_swamp_threshold', DEFAULTS.COASTAL_SWAMP_THRESHOLD),
            'coastal_swamp_min_moisture': self.user_config.get('coastal_swamp_min_moisture', DEFAULTS.COASTAL_SWAMP_MIN_MOISTURE),
        }

        # --- Public Properties for easy access ---
        self.seed = _resolve_seed(self.settings['seed'])
        self.settings['seed'] = self.seed

        # --- Initialize Noise ---
        if noise_field is not None:
            self._noise = noise_field
            self.logger.debug("Initialized with injected noise field.")
        else:
            self.logger.debug("No noise field provided, building one from seed.")
            self._noise = PerlinNoise2D(self.seed)

        self.logger.info(f"MapGenerator initialized with seed: {self.seed}")
        self.logger.info(
            f"Default map dimensions: {self.settings['map_width']}x{self.settings['map_height']} tiles"
        )

    def _resolve_dimensions(self, width: int = None, height: int = None) -> tuple:
        width = self.settings['map_width'] if width is None else width
        height = self.settings['map_height'] if height is None else height
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"Map dimensions must be positive, got {width}x{height}.")
        return int(width), int(height)

    @staticmethod
    def _coordinate_grids(width: int, height: int) -> tuple:
        """Tile coordinate arrays of shape (height, width): x varies along rows."""
        xs, ys = np.meshgrid(np.arange(width, dtype=np.float64), np.arange(height, dtype=np.float64))
        return xs, ys

    @staticmethod
    def _latitude_and_north(width: int, height: int) -> tuple:
        """
        Latitude is 0 on the equator row (the vertical centre) and 1 on the
        top and bottom rows. North is 1 on the top row and 0 on the bottom row.
        """
        rows = np.arange(height, dtype=np.float64)
        if height > 1:
            center = (height - 1) / 2
            latitude = np.abs(rows - center) / center
            north = 1.0 - rows / (height - 1)
        else:
            # A single row is both the equator and the top edge.
            latitude = np.zeros(1)
            north = np.ones(1)

        shape = (height, width)
        return (
            np.broadcast_to(latitude[:, np.newaxis], shape),
            np.broadcast_to(north[:, np.newaxis], shape),
        )

    def _fractal(self, x: np.ndarray, y: np.ndarray, base_scale: float) -> np.ndarray:
        return fractal_noise(
            self._noise, x, y, base_scale,
            octaves=self.settings['fractal_octaves'],
            persistence=self.settings['fractal_persistence'],
            lacunarity=self.settings['fractal_lacunarity'],
        )

    def sample_fields(self, width: int = None, height: int = None) -> CellSamples:
        """
        Computes the per-cell elevation, moisture, latitude and north factors.
        """
        width, height = self._resolve_dimensions(width, height)
        xs, ys = self._coordinate_grids(width, height)
        latitude, north = self._latitude_and_north(width, height)

        # 1. Elevation, nudged upwards towards the north edge.
        elevation = self._fractal(xs, ys, self.settings['elevation_noise_scale'])
        elevation = np.minimum(elevation + self.settings['north_elevation_bias'] * north, 1.0)

        # 2. Moisture reuses the same field at shifted coordinates.
        offset = self.settings['moisture_coord_offset']
        moisture = self._fractal(xs + offset, ys + offset, self.settings['moisture_noise_scale'])

        return CellSamples(elevation, moisture, latitude, north)

    def _detail_noise(self, width: int, height: int, offset: float, scale: float) -> np.ndarray:
        """A single high-frequency noise sample per cell, on shifted coordinates."""
        xs, ys = self._coordinate_grids(width, height)
        return np.asarray(self._noise((xs + offset) * scale, (ys + offset) * scale))

    def generate_terrain(self, width: int = None, height: int = None) -> np.ndarray:
        """
        Generates the terrain grid (uint8 TerrainType IDs, shape (height, width)).
        """
        width, height = self._resolve_dimensions(width, height)
        start_time = time.perf_counter()

        # 1. Per-cell climate samples.
        samples = self.sample_fields(width, height)

        # 2. Decision cascade over the whole grid.
        first_pass = biomes.classify_terrain(
            samples.elevation, samples.moisture, samples.latitude, samples.north,
            terrain_levels=self.settings['terrain_levels'],
            biome_thresholds=self.settings['biome_thresholds'],
        )

        # 3. Sparse hills, reading the finished first pass.
        hill_noise = self._detail_noise(
            width, height,
            self.settings['sparse_hill_coord_offset'],
            self.settings['sparse_hill_noise_scale'],
        )
        with_hills = biomes.apply_sparse_hills(
            first_pass, samples.elevation, hill_noise,
            sea_level=self.settings['terrain_levels']['sea'],
            threshold=self.settings['sparse_hill_threshold'],
            min_margin=self.settings['sparse_hill_min_elevation_margin'],
            max_elevation=self.settings['sparse_hill_max_elevation'],
        )

        # 4. Coastal swamps, reading the finished hill pass.
        swamp_noise = self._detail_noise(
            width, height,
            self.settings['coastal_swamp_coord_offset'],
            self.settings['coastal_swamp_noise_scale'],
        )
        terrain = biomes.apply_coastal_swamps(
            with_hills, samples.moisture, swamp_noise,
            min_moisture=self.settings['coastal_swamp_min_moisture'],
            threshold=self.settings['coastal_swamp_threshold'],
        )

        duration = time.perf_counter() - start_time
        self.logger.info(f"Generated {width}x{height} terrain in {duration:.3f} seconds.")
        self._log_distribution(terrain)
        return terrain

    def generate_map(self, width: int = None, height: int = None) -> GameMap:
        """Generates terrain and wraps it in a runtime GameMap."""
        return GameMap(self.generate_terrain(width, height))

    def _log_distribution(self, terrain: np.ndarray):
        counts = np.bincount(terrain.ravel(), minlength=len(TerrainType))
        summary = ", ".join(
            f"{t.display_name}: {counts[t]}" for t in TerrainType if counts[t]
        )
        self.logger.debug(f"Terrain distribution: {summary}")
