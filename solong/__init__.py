"""Tile-based puzzle game: map loading, game rules, XPM sprites and a pygame window."""

__version__ = "1.0.0"
__all__ = ["app", "colors", "game", "mapfile", "xpm"]