# map_generator/runtime/game.py

"""
================================================================================
GAME STATE
================================================================================
This module holds the simulation context of a match: the map, the players,
their units and the turn counter. It is deliberately free of any rendering
or input state (hover, selection, camera), which belongs to the viewer.

Data Contract:
---------------
- Inputs (on initialization):
    - game_map (GameMap): The map the match is played on.
    - player_names (optional): One name per player, in turn order.
    - initial_explorers (optional): Player IDs that start with the whole map
      explored.
- Public Methods:
    - from_seed(seed_token, config): Generates a map and sets up a new match.
    - try_move, attack, build_city: Player actions. Each returns True when the
      action was carried out and False when it was illegal.
    - end_turn(): Hands control to the next player.
- Side Effects: Logs actions via `logging.getLogger(__name__)`.
- Invariants: At most one unit stands on a tile after a move. Units of a
  player are only refreshed at the end of that player's turn.
================================================================================
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .. import config as DEFAULTS
from ..terrain import Passability
from .game_map import GameMap, Tile
from .units import Unit, UnitAction, UnitType

# Unit types every player starts with, in placement order.
STARTING_UNIT_TYPES = (UnitType.SETTLER, UnitType.WARRIOR)


@dataclass
class Player:
    player_id: int
    name: str


class GameState:
    """The simulation context of one match."""

    def __init__(self, game_map: GameMap, player_names: Iterable[str] = DEFAULTS.PLAYER_NAMES,
                 initial_explorers: Iterable[int] = DEFAULTS.INITIAL_EXPLORERS):
        self.logger = logging.getLogger(__name__)
        self.map = game_map
        self.players: List[Player] = [Player(i + 1, name) for i, name in enumerate(player_names)]
        if not self.players:
            raise ValueError("A game needs at least one player.")

        self.turn = 1
        self.current_player_index = 0
        self.units: List[Unit] = []
        self._next_unit_id = 1

        explorers = set(initial_explorers)
        for tile in self.map:
            tile.explored_by.update(explorers)

    @classmethod
    def from_seed(cls, seed_token: Optional[str] = None, config: dict = None,
                  logger: logging.Logger = None) -> "GameState":
        """
        Generates a map from a raw seed token and sets up a new match with the
        starting units placed.
        """
        # Imported here: the generator itself depends on this package.
        from ..generator import MapGenerator

        logger = logger or logging.getLogger(__name__)
        generator_config = dict(config or {})
        generator_config['seed'] = seed_token
        generator = MapGenerator(generator_config, logger)

        game = cls(generator.generate_map())
        game.add_starting_units()
        return game

    # --- Queries ---

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        return self.map.get_tile(x, y)

    def get_unit_at(self, x: int, y: int) -> Optional[Unit]:
        return next((u for u in self.units if u.x == x and u.y == y), None)

    def units_of(self, player_id: int) -> List[Unit]:
        return [u for u in self.units if u.owner == player_id]

    # --- Setup ---

    def add_unit(self, x: int, y: int, owner: int, unit_type: UnitType,
                 max_moves: int = DEFAULTS.UNIT_MAX_MOVES) -> Unit:
        unit = Unit(self._next_unit_id, x, y, owner, unit_type, max_moves)
        self._next_unit_id += 1
        self.units.append(unit)
        self.reveal_around(unit)
        return unit

    def start_positions(self) -> List[Tuple[int, int]]:
        """Preferred start corners: one near the top-left, one near the bottom-right."""
        offset = DEFAULTS.START_CORNER_OFFSET
        corners = [(offset, offset), (self.map.width - 1 - offset, self.map.height - 1 - offset)]
        return [
            (min(max(x, 0), self.map.width - 1), min(max(y, 0), self.map.height - 1))
            for x, y in corners
        ]

    def find_start_tile(self, x: int, y: int) -> Optional[Tile]:
        """
        The unoccupied land tile closest (Manhattan distance) to (x, y).
        Ties are broken by row, then column, so placement is deterministic.
        """
        occupied = {u.position for u in self.units}
        candidates = [
            tile for tile in self.map
            if tile.terrain.passability is Passability.LAND and (tile.x, tile.y) not in occupied
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda t: (abs(t.x - x) + abs(t.y - y), t.y, t.x))

    def add_starting_units(self):
        for player, (x, y) in zip(self.players, self.start_positions()):
            for unit_type in STARTING_UNIT_TYPES:
                tile = self.find_start_tile(x, y)
                if tile is None:
                    self.logger.warning(f"No free land tile left for {player.name}'s {unit_type.value}.")
                    continue
                unit = self.add_unit(tile.x, tile.y, player.player_id, unit_type)
                self.logger.info(f"{player.name} starts with a {unit_type.value} at {unit.position}.")

    def reveal_around(self, unit: Unit, radius: int = 1):
        """Marks the tiles within `radius` (in both axes) of a unit as explored by its owner."""
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                tile = self.map.get_tile(unit.x + dx, unit.y + dy)
                if tile is not None:
                    tile.explored_by.add(unit.owner)

    # --- Actions ---

    def try_move(self, unit: Unit, x: int, y: int) -> bool:
        """Moves `unit` one step to (x, y). Adjacency is checked before cost."""
        if not unit.is_adjacent_to(x, y):
            self.logger.debug(f"Rejected move of {unit!r} to non-adjacent ({x}, {y}).")
            return False
        if self.get_unit_at(x, y) is not None:
            self.logger.debug(f"Rejected move of {unit!r} onto occupied ({x}, {y}).")
            return False
        if not unit.move_to(self.get_tile(x, y)):
            return False
        self.reveal_around(unit)
        return True

    def attack(self, attacker: Unit, x: int, y: int) -> bool:
        """
        Resolves an attack on the unit at (x, y). The target must be an
        adjacent enemy and the attacker needs a move left; the target is
        destroyed and the attacker spends one move.
        """
        target = self.get_unit_at(x, y)
        if UnitAction.ATTACK not in attacker.unit_type.actions:
            self.logger.debug(f"{attacker!r} cannot attack.")
            return False
        if target is None or target.owner == attacker.owner:
            self.logger.debug(f"No enemy at ({x}, {y}) for {attacker!r}.")
            return False
        if not attacker.is_adjacent_to(x, y) or attacker.moves < 1:
            self.logger.debug(f"{attacker!r} cannot reach {target!r}.")
            return False

        self.units.remove(target)
        attacker.moves -= 1
        self.logger.info(f"{attacker!r} destroyed {target!r}.")
        return True

    def build_city(self, unit: Unit) -> bool:
        """Founds a city on the settler's tile. The settler is consumed."""
        if UnitAction.FOUND_CITY not in unit.unit_type.actions:
            self.logger.debug(f"{unit!r} cannot found a city.")
            return False
        tile = self.get_tile(unit.x, unit.y)
        if tile is None or tile.has_city:
            self.logger.debug(f"No city can be founded at {unit.position}.")
            return False

        tile.city_owner = unit.owner
        self.units.remove(unit)
        self.logger.info(f"Player {unit.owner} founded a city at {unit.position}.")
        return True

    def end_turn(self):
        """Refreshes the current player's units and passes control on."""
        for unit in self.units_of(self.current_player.player_id):
            unit.refresh()

        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        if self.current_player_index == 0:
            self.turn += 1
        self.logger.info(f"Turn {self.turn}: {self.current_player.name} to play.")
