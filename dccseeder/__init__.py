"""Build a catalog of crawler numbers from Dungeon Crawler Carl EPUBs."""

__version__ = "0.1.0"
