"""Game logic for a grid-based tower defense: maps, waves, turrets, effects, scores and scenes."""

__version__ = "0.1.0"