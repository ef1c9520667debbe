"""Shared fixtures and helpers for the map generator tests."""

import logging

import numpy as np
import pytest

from map_generator.terrain import terrain_from_glyph


def grid_from_rows(rows):
    """Builds a uint8 terrain grid from rows of single-character glyphs."""
    return np.array([[terrain_from_glyph(c) for c in row] for row in rows], dtype=np.uint8)


@pytest.fixture
def logger():
    return logging.getLogger("map_generator.tests")
