# preview_map.py

"""
================================================================================
MAP PREVIEW SCRIPT
================================================================================
This script is a command-line tool for inspecting the map produced by a seed
without starting the viewer. It prints one glyph per tile and can also save
a PNG image of the terrain colors.

Usage:
    python preview_map.py --seed ma_carte --width 32 --height 32 --png map.png
================================================================================
"""
import os
import sys
import logging
import argparse
import numpy as np
from PIL import Image

# Add project root to Python path to allow importing from map_generator
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from map_generator.generator import MapGenerator
from map_generator import terrain
from map_generator import config as DEFAULTS


def save_terrain_png(terrain_grid: np.ndarray, file_path: str, pixels_per_tile: int = 8):
    """Saves the terrain grid as an RGB PNG, each tile a square block of pixels."""
    lut = terrain.create_terrain_color_lut()
    # Pillow works with (height, width, channels) arrays, the grid's own layout.
    img_data = lut[terrain_grid]
    img_data = np.repeat(np.repeat(img_data, pixels_per_tile, axis=0), pixels_per_tile, axis=1)
    Image.fromarray(img_data).save(file_path, 'PNG')


def preview_map(seed_token, width: int, height: int, png_path: str = None, pixels_per_tile: int = 8):
    """
    Generates the map for a seed token and prints it; optionally saves a PNG.
    """
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
    logger = logging.getLogger("Preview")

    # 2. --- Generate ---
    generator = MapGenerator(
        config={'seed': seed_token, 'map_width': width, 'map_height': height},
        logger=logger
    )
    terrain_grid = generator.generate_terrain()

    # 3. --- Output ---
    print(terrain.render_ascii(terrain_grid))
    if png_path:
        save_terrain_png(terrain_grid, png_path, pixels_per_tile)
        logger.info(f"Terrain image saved to: {png_path}")


# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Preview the terrain generated for a seed.")
    parser.add_argument("--seed", type=str, default=None, help="Seed token: a number or any text.")
    parser.add_argument("--width", type=int, default=DEFAULTS.DEFAULT_MAP_WIDTH, help="Map width in tiles.")
    parser.add_argument("--height", type=int, default=DEFAULTS.DEFAULT_MAP_HEIGHT, help="Map height in tiles.")
    parser.add_argument("--png", type=str, default=None, help="Optional path of a PNG image to write.")
    parser.add_argument("--pixels-per-tile", type=int, default=8, help="PNG block size of one tile.")
    args = parser.parse_args()

    preview_map(args.seed, args.width, args.height, args.png, args.pixels_per_tile)
