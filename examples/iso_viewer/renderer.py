# examples/iso_viewer/renderer.py

import logging

import pygame

from map_generator.terrain import COLOR_UNKNOWN, TERRAIN_INFO

# --- Colors ---
BACKGROUND_COLOR = (10, 10, 20)
GRID_LINE_COLOR = (0, 0, 0)
HOVER_OUTLINE_COLOR = (255, 255, 0)
SELECTION_OUTLINE_COLOR = (0, 255, 255)
ATTACK_OUTLINE_COLOR = (255, 80, 80)
PLAYER_COLORS = {1: (74, 192, 255), 2: (255, 85, 85)}
UNIT_BORDER_COLOR = (0, 0, 0)


class IsoRenderer:
    """Draws a GameState as isometric diamonds with a pygame surface as target."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.font = pygame.font.SysFont(None, 16)
        self.logger.info("IsoRenderer initialized.")

    def _diamond(self, camera, x, y):
        cx, cy = camera.iso_to_screen(x, y)
        hw, hh = camera.half_width, camera.half_height
        return [(cx, cy - hh), (cx + hw, cy), (cx, cy + hh), (cx - hw, cy)]

    def _is_visible(self, screen, points):
        width, height = screen.get_size()
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return max(xs) >= 0 and min(xs) <= width and max(ys) >= 0 and min(ys) <= height

    def draw(self, screen, camera, game, viewer_player_id, hover=None, selected=None, attack_mode=False):
        """
        Renders the whole scene.

        Args:
            viewer_player_id (int): Tiles this player has not explored are drawn
                in the unknown color.
            hover (Tile, optional): Tile under the mouse.
            selected (Unit, optional): The selected unit.
        """
        screen.fill(BACKGROUND_COLOR)

        # Flat diamonds never overlap, so plain row order is enough.
        for tile in game.map:
            points = self._diamond(camera, tile.x, tile.y)
            if not self._is_visible(screen, points):
                continue
            if viewer_player_id in tile.explored_by:
                color = TERRAIN_INFO[tile.terrain].color
            else:
                color = COLOR_UNKNOWN
            pygame.draw.polygon(screen, color, points)
            pygame.draw.polygon(screen, GRID_LINE_COLOR, points, 1)

            if tile.has_city:
                self._draw_city(screen, camera, tile)

        if hover is not None:
            outline = ATTACK_OUTLINE_COLOR if attack_mode else HOVER_OUTLINE_COLOR
            pygame.draw.polygon(screen, outline, self._diamond(camera, hover.x, hover.y), 2)

        for unit in game.units:
            self._draw_unit(screen, camera, unit)

        if selected is not None:
            pygame.draw.polygon(screen, SELECTION_OUTLINE_COLOR, self._diamond(camera, selected.x, selected.y), 2)

    def _draw_city(self, screen, camera, tile):
        cx, cy = camera.iso_to_screen(tile.x, tile.y)
        size = camera.half_height
        rect = pygame.Rect(0, 0, size, size)
        rect.center = (int(cx), int(cy - size / 2))
        pygame.draw.rect(screen, PLAYER_COLORS.get(tile.city_owner, COLOR_UNKNOWN), rect)
        pygame.draw.rect(screen, UNIT_BORDER_COLOR, rect, 1)

    def _draw_unit(self, screen, camera, unit):
        cx, cy = camera.iso_to_screen(unit.x, unit.y)
        center = (int(cx), int(cy - camera.half_height / 2))
        radius = int(camera.half_height / 2)
        pygame.draw.circle(screen, PLAYER_COLORS.get(unit.owner, COLOR_UNKNOWN), center, radius)
        pygame.draw.circle(screen, UNIT_BORDER_COLOR, center, radius, 1)

        # One-letter badge: S for settlers, W for warriors.
        label = self.font.render(unit.unit_type.display_name[0], True, UNIT_BORDER_COLOR)
        screen.blit(label, label.get_rect(center=center))
