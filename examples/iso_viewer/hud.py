# examples/iso_viewer/hud.py

UNKNOWN_TILE_TEXT = "Unknown"


def describe_tile(tile, viewer_player_id):
    """
    Side panel text for a hovered tile. Tiles the viewer has not explored
    show nothing but their coordinates.
    """
    if tile is None:
        return "Tile: -"
    if viewer_player_id not in tile.explored_by:
        return f"({tile.x}, {tile.y}) {UNKNOWN_TILE_TEXT}"

    city = " (city)" if tile.has_city else ""
    return f"({tile.x}, {tile.y}) {tile.terrain.display_name}, cost {tile.movement_cost}{city}"
