"""Split tall page images at blank horizontal bands."""

__version__ = "1.0.0"
