"""
Layout Module

Layered (longest-path) and grid node placement.
"""

from .layered import LayeredLayout, LayoutResult, compute_layers, layout
from .grid import grid_layout

__all__ = [
    "LayeredLayout",
    "LayoutResult",
    "compute_layers",
    "layout",
    "grid_layout",
]
