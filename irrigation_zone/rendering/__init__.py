"""
Rendering Layer
===============

Bounded Context: Drawing engine output onto images (stateless).
"""

from irrigation_zone.rendering.visualizer import ZoneVisualizer, DEFAULT_TOOL_COLORS
from irrigation_zone.rendering.image import read_image, write_image

__all__ = [
    "ZoneVisualizer",
    "DEFAULT_TOOL_COLORS",
    "read_image",
    "write_image",
]
