"""Curved travel-route overlays with viewport-stable screen-space geometry."""

__all__ = [
    "core",
    "geometry",
    "routing",
    "data",
    "assets",
    "cli",
    "mapview",
]
