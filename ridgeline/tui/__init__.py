"""Textual screens for Ridgeline."""
