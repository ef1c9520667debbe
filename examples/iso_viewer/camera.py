# examples/iso_viewer/camera.py

import math

class IsoCamera:
    """
    Projects map coordinates onto the screen as a 2:1 isometric diamond grid.

    Tile (0, 0) sits at the top centre of the screen; x runs down-right and y
    runs down-left. Panning moves the whole projection by a pixel offset.
    """
    def __init__(self, config: dict):
        self.config = config
        self.screen_width = config['display']['screen_width']
        self.tile_width = config['camera']['tile_width']
        self.tile_height = config['camera']['tile_height']

        self.offset_x = config['camera'].get('initial_offset_x', 0)
        self.offset_y = config['camera'].get('initial_offset_y', 0)

    @property
    def half_width(self):
        return self.tile_width / 2

    @property
    def half_height(self):
        return self.tile_height / 2

    def iso_to_screen(self, x, y):
        """Screen position of the centre of tile (x, y)."""
        screen_x = (x - y) * self.half_width + self.screen_width / 2 + self.offset_x
        screen_y = (x + y) * self.half_height + self.offset_y
        return screen_x, screen_y

    def screen_to_iso(self, screen_x, screen_y):
        """The tile whose diamond contains the screen point. May lie outside the map."""
        cx = (screen_x - self.screen_width / 2 - self.offset_x) / self.half_width
        cy = (screen_y - self.offset_y) / self.half_height
        # Diamonds are centred on their projected point, hence the half-tile shift.
        iso_x = math.floor((cy + cx) / 2 + 0.5)
        iso_y = math.floor((cy - cx) / 2 + 0.5)
        return iso_x, iso_y

    def pan(self, dx, dy):
        self.offset_x += dx
        self.offset_y += dy
