# map_generator/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# It also defines the public API of the simulation layer.

from .game_map import GameMap, Tile
from .units import Unit, UnitAction, UnitType
from .game import GameState, Player

__all__ = ["GameMap", "Tile", "Unit", "UnitAction", "UnitType", "GameState", "Player"]
