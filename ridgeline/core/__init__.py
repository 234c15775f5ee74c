"""Core functionality modules for Ridgeline."""

__all__ = [
    "colors",
    "config",
    "manager",
    "track_form",
]
