"""Tests for the viewer's side panel text."""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'examples', 'iso_viewer')))

from hud import describe_tile

from map_generator.runtime import Tile
from map_generator.terrain import TerrainType


class TestDescribeTile:
    """Test hover text under fog of war."""

    def test_no_tile(self):
        assert describe_tile(None, 1) == "Tile: -"

    def test_explored_tile(self):
        tile = Tile(3, 4, TerrainType.FOREST, explored_by={1})
        assert describe_tile(tile, 1) == "(3, 4) Forest, cost 2"

    def test_city_shown(self):
        tile = Tile(0, 0, TerrainType.PRAIRIE, city_owner=2, explored_by={1})
        assert describe_tile(tile, 1) == "(0, 0) Prairie, cost 1 (city)"

    def test_unexplored_tile_hides_terrain(self):
        tile = Tile(3, 4, TerrainType.MOUNTAIN, city_owner=1, explored_by={1})
        text = describe_tile(tile, 2)
        assert text == "(3, 4) Unknown"
        assert "Mountains" not in text
        assert "cost" not in text
        assert "city" not in text
