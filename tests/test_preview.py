"""Tests for the command-line preview tool."""

import numpy as np
from PIL import Image

import preview_map

from conftest import grid_from_rows


class TestPreview:
    """Test ASCII and PNG output."""

    def test_prints_ascii_map(self, capsys):
        preview_map.preview_map("123456789", 16, 12)
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 12
        assert lines[0] == "GPPPPPPPPGGFFPP~"

    def test_png(self, tmp_path):
        path = tmp_path / "map.png"
        preview_map.preview_map("7", 6, 4, png_path=str(path), pixels_per_tile=3)
        with Image.open(path) as image:
            assert image.size == (18, 12)

    def test_png_colors(self, tmp_path):
        path = tmp_path / "tiles.png"
        preview_map.save_terrain_png(grid_from_rows(["~M"]), str(path), pixels_per_tile=2)
        with Image.open(path) as image:
            pixels = np.asarray(image.convert("RGB"))
        assert tuple(pixels[0, 0]) == (26, 102, 255)
        assert tuple(pixels[1, 3]) == (112, 128, 144)
