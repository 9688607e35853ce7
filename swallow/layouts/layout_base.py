"""
Window Layout Geometry

Per-window geometry reported to the host after a layout change.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Hashable, Optional

from ..geometry import Area, LayoutDirection, WindowEdges
from .layout_tree import LayoutTree

__all__ = ["LayoutGeometry", "LayoutDirection", "calculate_geometry"]


@dataclass
class LayoutGeometry:
    """Calculated geometry for a window in a layout."""

    x: int
    y: int
    width: int
    height: int
    tiled_edges: WindowEdges = WindowEdges.NONE

    @property
    def area(self) -> Area:
        return Area(self.x, self.y, self.width, self.height)


def calculate_geometry(
    tree: LayoutTree, area: Optional[Area] = None
) -> Dict[Hashable, LayoutGeometry]:
    """
    Calculate window positions and sizes.

    Args:
        tree: Layout to report
        area: Frame to fit the layout into (defaults to the tree's own frame,
            the tree itself is never modified)

    Returns:
        Dictionary mapping window ids to their calculated geometry
    """
    if area is not None and area != tree.frame:
        tree = tree.copy()
        tree.relayout(area)

    frame = tree.frame
    result = {}
    for node in tree.windows():
        a = node.area
        result[node.window_id] = LayoutGeometry(
            a.x, a.y, a.width, a.height, a.touching_edges(frame)
        )
    return result
