# map_generator/runtime/game_map.py

"""
================================================================================
GAME MAP
================================================================================
This module wraps a generated terrain grid in the query interface the rest of
the game talks to: bounds-checked tile lookup, neighbour enumeration and the
per-tile overlays (cities, exploration) that change during play.

Data Contract:
---------------
- Inputs (on initialization):
    - terrain_grid (np.ndarray): TerrainType IDs, shape (height, width).
- Public Methods:
    - get_tile(x, y): The Tile at (x, y), or None outside the map.
    - in_bounds(x, y), neighbors4(x, y), terrain_counts().
- Side Effects: None. The terrain of a tile never changes after construction;
  only its city owner and exploration set do.
================================================================================
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

import numpy as np

from ..terrain import TerrainType


@dataclass
class Tile:
    """One map cell and its mutable overlays."""
    x: int
    y: int
    terrain: TerrainType
    city_owner: Optional[int] = None
    explored_by: Set[int] = field(default_factory=set)

    def __post_init__(self):
        if not isinstance(self.terrain, TerrainType):
            raise TypeError(f"Tile terrain must be a TerrainType, got {type(self.terrain).__name__}.")

    @property
    def movement_cost(self) -> int:
        return self.terrain.movement_cost

    @property
    def is_passable(self) -> bool:
        return self.terrain.is_passable

    @property
    def has_city(self) -> bool:
        return self.city_owner is not None


class GameMap:
    """A rectangular grid of tiles, addressed as (x, y) with y growing southwards."""

    def __init__(self, terrain_grid: np.ndarray):
        grid = np.asarray(terrain_grid)
        if grid.ndim != 2 or grid.size == 0:
            raise ValueError(f"Terrain grid must be a non-empty 2D array, got shape {grid.shape}.")

        self._terrain_grid = grid.astype(np.uint8)
        self.height, self.width = self._terrain_grid.shape
        self._tiles: List[List[Tile]] = [
            [Tile(x, y, TerrainType(int(self._terrain_grid[y, x]))) for x in range(self.width)]
            for y in range(self.height)
        ]

    @property
    def terrain_grid(self) -> np.ndarray:
        """A copy of the underlying terrain IDs."""
        return self._terrain_grid.copy()

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self._tiles[y][x]

    def neighbors4(self, x: int, y: int) -> List[Tile]:
        """The (up to four) tiles sharing an edge with (x, y)."""
        candidates = ((x, y - 1), (x + 1, y), (x, y + 1), (x - 1, y))
        return [self._tiles[ny][nx] for nx, ny in candidates if self.in_bounds(nx, ny)]

    def __iter__(self) -> Iterator[Tile]:
        for row in self._tiles:
            yield from row

    def terrain_counts(self) -> Dict[TerrainType, int]:
        return dict(Counter(tile.terrain for tile in self))
