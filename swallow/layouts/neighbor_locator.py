"""
Neighbor Locator

Finds the subtree bordering a window in a given direction.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from ..geometry import Direction
from .layout_tree import LayoutTree


@dataclass
class AdjacentSubtree:
    """The neighbor found for a window, and where it sits in the tree."""

    ancestor: int  # split holding both the focus branch and the neighbor
    adjacent: int  # neighbor subtree, next to the branch in the direction
    branch: int  # child of the ancestor that contains the focus
    index: int  # position of the branch in the ancestor's children
    direction: Direction


def locate(
    tree: LayoutTree, node_id: int, direction: "Direction | str"
) -> Optional[AdjacentSubtree]:
    """
    Find the nearest subtree bordering a node in a direction.

    Walks up from the node to the first split of the direction's orientation
    in which the node's branch has a sibling on that side.

    Returns:
        The located neighbor, or None when the node touches the frame edge
    """
    direction = Direction.parse(direction)
    branch = tree.node(node_id)
    for ancestor in tree.parent_chain(node_id):
        index = ancestor.children.index(branch.node_id)
        if ancestor.direction is direction.axis:
            neighbor = index + direction.step
            if 0 <= neighbor < len(ancestor.children):
                return AdjacentSubtree(
                    ancestor=ancestor.node_id,
                    adjacent=ancestor.children[neighbor],
                    branch=branch.node_id,
                    index=index,
                    direction=direction,
                )
        branch = ancestor
    return None


def available_directions(tree: LayoutTree) -> Dict[Direction, AdjacentSubtree]:
    """Directions in which the focused window has a neighbor."""
    focus = tree.focused_window
    if focus is None:
        return {}
    found = {}
    for direction in Direction:
        located = locate(tree, focus.node_id, direction)
        if located is not None:
            found[direction] = located
    return found
