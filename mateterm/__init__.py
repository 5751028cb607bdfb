"""Terminal profiles: typed properties, colour palettes, fonts and an in-memory settings store."""

__version__ = "0.1.0"
__all__ = ["colors", "fonts", "properties", "settings", "profile"]