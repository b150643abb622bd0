"""Textured raycasting maze explorer: .cub scene parsing, XPM textures and a pygame view."""

__version__ = "0.1.0"
__all__ = ["colors", "game", "player", "raycast", "scene", "textutil", "validate", "xpm"]