"""A tile-based puzzle game: map validation, game state, an XPM reader and a pygame window."""

__version__ = "0.1.0"
__all__ = ["colors", "xpm", "mapcheck", "game", "display"]