"""
Grid Layout

Resets nodes onto a fixed grid in insertion order, ignoring edges.
"""

from typing import List, Optional, Sequence

from ..config.loader import LayoutSettings
from ..graph.model import Node


def grid_layout(nodes: Sequence[Node], settings: Optional[LayoutSettings] = None) -> List[Node]:
    """
    Place node i at column i % columns, row i // columns.

    Args:
        nodes: Node records in insertion order
        settings: Spacing, column count and origin offset

    Returns:
        New node records; only positions differ from the input
    """
    settings = settings or LayoutSettings()
    cols = settings.grid_columns
    return [
        node.with_position(
            (i % cols) * settings.horizontal_spacing + settings.grid_origin,
            (i // cols) * settings.vertical_spacing + settings.grid_origin,
        )
        for i, node in enumerate(nodes)
    ]
