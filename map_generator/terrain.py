# map_generator/terrain.py

"""
================================================================================
TERRAIN CATEGORIES & COLOR MAPPING
================================================================================
This module defines the closed set of terrain categories a map cell can hold,
together with their gameplay properties (movement cost, passability) and the
colors used to draw them.

It is designed to be a pure, stateless utility with no dependencies on Pygame,
allowing it to be used by both the interactive viewer and the preview tool.
================================================================================
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Tuple

import numpy as np


class TerrainType(IntEnum):
    """Terrain category of a map cell. The integer value is the grid ID."""
    OCEAN = 0
    DESERT = 1
    PRAIRIE = 2
    GRASSLAND = 3
    FOREST = 4
    HILL = 5
    MOUNTAIN = 6
    TUNDRA = 7
    ARCTIC = 8
    SWAMP = 9
    JUNGLE = 10

    @property
    def movement_cost(self) -> int:
        return TERRAIN_INFO[self].movement_cost

    @property
    def passability(self) -> "Passability":
        return TERRAIN_INFO[self].passability

    @property
    def is_passable(self) -> bool:
        return TERRAIN_INFO[self].passability is not Passability.IMPASSABLE

    @property
    def display_name(self) -> str:
        return TERRAIN_INFO[self].display_name


class Passability(Enum):
    LAND = "land"
    WATER = "water"
    IMPASSABLE = "impassable"


@dataclass(frozen=True)
class TerrainInfo:
    display_name: str
    movement_cost: int
    passability: Passability
    color: Tuple[int, int, int]
    glyph: str


# --- Default Terrain Table ---
TERRAIN_INFO: Dict[TerrainType, TerrainInfo] = {
    TerrainType.OCEAN: TerrainInfo("Ocean", 2, Passability.WATER, (26, 102, 255), "~"),
    TerrainType.DESERT: TerrainInfo("Desert", 1, Passability.LAND, (240, 230, 140), "D"),
    TerrainType.PRAIRIE: TerrainInfo("Prairie", 1, Passability.LAND, (154, 205, 50), "P"),
    TerrainType.GRASSLAND: TerrainInfo("Grassland", 1, Passability.LAND, (34, 139, 34), "G"),
    TerrainType.FOREST: TerrainInfo("Forest", 2, Passability.LAND, (0, 100, 0), "F"),
    TerrainType.HILL: TerrainInfo("Hills", 2, Passability.LAND, (139, 105, 60), "H"),
    TerrainType.MOUNTAIN: TerrainInfo("Mountains", 3, Passability.IMPASSABLE, (112, 128, 144), "M"),
    TerrainType.TUNDRA: TerrainInfo("Tundra", 1, Passability.LAND, (190, 200, 180), "T"),
    TerrainType.ARCTIC: TerrainInfo("Arctic", 2, Passability.LAND, (255, 255, 255), "A"),
    TerrainType.SWAMP: TerrainInfo("Swamp", 2, Passability.LAND, (70, 110, 90), "S"),
    TerrainType.JUNGLE: TerrainInfo("Jungle", 2, Passability.LAND, (20, 80, 30), "J"),
}

# Color for cells without a known terrain (should never appear in a generated map).
COLOR_UNKNOWN = (85, 85, 85)


def terrain_from_glyph(glyph: str) -> TerrainType:
    """Reverse lookup of the single-character glyph used by text renderings."""
    for terrain, info in TERRAIN_INFO.items():
        if info.glyph == glyph:
            return terrain
    raise ValueError(f"Unknown terrain glyph {glyph!r}.")


# --- Color Lookup Table (LUT) Generation ---
def create_terrain_color_lut() -> np.ndarray:
    """Creates a LUT where the index is the terrain ID and the value is the RGB color."""
    return np.array([TERRAIN_INFO[t].color for t in TerrainType], dtype=np.uint8)


def render_ascii(terrain_grid: np.ndarray) -> str:
    """One line of glyphs per map row."""
    glyphs = [TERRAIN_INFO[t].glyph for t in TerrainType]
    return "\n".join("".join(glyphs[cell] for cell in row) for row in terrain_grid)
