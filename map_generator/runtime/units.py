# map_generator/runtime/units.py

"""
================================================================================
UNITS
================================================================================
Units are the movable pieces of the game. A unit knows its position, owner and
move points, and decides on its own whether a given tile is affordable.
Adjacency is not checked here: callers (see `GameState.try_move`) reject
non-adjacent destinations before asking the unit.
================================================================================
"""
import logging
from enum import Enum
from typing import Optional, Tuple

from .. import config as DEFAULTS
from .game_map import Tile


class UnitAction(Enum):
    FOUND_CITY = "found_city"
    ATTACK = "attack"


class UnitType(Enum):
    SETTLER = "settler"
    WARRIOR = "warrior"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def actions(self) -> Tuple[UnitAction, ...]:
        return _UNIT_ACTIONS[self]


_UNIT_ACTIONS = {
    UnitType.SETTLER: (UnitAction.FOUND_CITY,),
    UnitType.WARRIOR: (UnitAction.ATTACK,),
}


class Unit:
    """A single unit on the map."""

    def __init__(self, unit_id: int, x: int, y: int, owner: int, unit_type: UnitType,
                 max_moves: int = DEFAULTS.UNIT_MAX_MOVES):
        self.logger = logging.getLogger(__name__)
        self.unit_id = unit_id
        self.x = x
        self.y = y
        self.owner = owner
        self.unit_type = unit_type
        self.max_moves = max_moves
        self.moves = max_moves

    def __repr__(self):
        return (f"Unit(id={self.unit_id}, {self.unit_type.value}, owner={self.owner}, "
                f"at=({self.x}, {self.y}), moves={self.moves}/{self.max_moves})")

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def distance_to(self, x: int, y: int) -> int:
        """Manhattan distance to (x, y)."""
        return abs(self.x - x) + abs(self.y - y)

    def is_adjacent_to(self, x: int, y: int) -> bool:
        return self.distance_to(x, y) == 1

    def can_move_to(self, tile: Optional[Tile]) -> bool:
        """True if `tile` exists, is passable and its cost fits the remaining moves."""
        if tile is None:
            return False
        if not tile.is_passable:
            return False
        return tile.movement_cost <= self.moves

    def move_to(self, tile: Optional[Tile]) -> bool:
        """Moves onto `tile` and pays its movement cost. Returns False if not allowed."""
        if not self.can_move_to(tile):
            self.logger.debug(f"{self!r} cannot enter {tile!r}")
            return False
        self.x, self.y = tile.x, tile.y
        self.moves -= tile.movement_cost
        return True

    def refresh(self):
        """Restores all move points (start of the owner's turn)."""
        self.moves = self.max_moves
