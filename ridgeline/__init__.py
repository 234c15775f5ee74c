"""Ridgeline - edit recorded GPS tracks: title, color and group."""

__version__ = "1.0.0"
__description__ = "Terminal editor for recorded GPS track metadata"

from ridgeline.cli import app, main

__all__ = ["app", "main", "__version__"]
