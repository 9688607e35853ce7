"""
Disambiguation Policy

Decides which part of a located neighbor is removed by a swallow, and which
retained sibling takes over its space.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..geometry import Area, LayoutDirection
from .layout_tree import LayoutTree, SplitNode
from .neighbor_locator import AdjacentSubtree


class PartialPolicy(Enum):
    """What to do when the neighbor's children only partly face the focus."""

    AGGRESSIVE = "aggressive"  # remove the whole split
    LEADING = "leading"  # remove the child facing the focus's leading corner

    @classmethod
    def parse(cls, value: "str | PartialPolicy") -> "PartialPolicy":
        if isinstance(value, PartialPolicy):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid partial policy: {value!r}. Use aggressive or leading"
            ) from None


@dataclass
class Resolution:
    """Outcome of the policy for one swallow."""

    remove: int  # subtree taken out of the tree
    heir: int  # sibling absorbing the freed extent
    keep: Optional[int] = None  # retained neighbor part that was resized, if any
    ambiguous: bool = False  # the neighbor only partly faced the focus


def resolve(
    tree: LayoutTree,
    located: AdjacentSubtree,
    focus_area: Area,
    aggressive: bool = False,
    partial_policy: PartialPolicy = PartialPolicy.AGGRESSIVE,
) -> Resolution:
    """
    Pick what a swallow removes from the located neighbor.

    Aggressive mode takes the whole neighbor and hands it to the focus
    branch. Otherwise the walk goes down the neighbor toward the window
    directly opposite the focus, and only that window goes; its sibling in
    the same split takes over its space.

    Args:
        tree: Layout being swallowed
        located: Neighbor found by the locator
        focus_area: Area of the focused window
        aggressive: Remove the entire neighbor
        partial_policy: Treatment of neighbors that only partly face the focus

    Returns:
        Resolution naming the subtree to remove and its heir
    """
    if aggressive:
        return Resolution(remove=located.adjacent, heir=located.branch)

    direction = located.direction
    cross = direction.axis.perpendicular
    node = tree.node(located.adjacent)
    ambiguous = False
    while isinstance(node, SplitNode):
        if node.direction is direction.axis:
            # In line with the swallow: only the nearest child borders the focus
            child_id = node.children[0] if direction.step > 0 else node.children[-1]
        else:
            child_id, partial = _opposite_child(
                tree, node, focus_area, cross, partial_policy
            )
            ambiguous = ambiguous or partial
            if child_id is None:
                break
        node = tree.node(child_id)

    if node.node_id == located.adjacent:
        return Resolution(remove=node.node_id, heir=located.branch, ambiguous=ambiguous)

    parent = tree.nodes[node.parent]
    index = parent.children.index(node.node_id)
    heir = parent.children[index + 1] if index + 1 < len(parent.children) else parent.children[index - 1]
    return Resolution(remove=node.node_id, heir=heir, keep=heir, ambiguous=ambiguous)


def _opposite_child(
    tree: LayoutTree,
    split: SplitNode,
    focus_area: Area,
    cross: LayoutDirection,
    partial_policy: PartialPolicy,
) -> Tuple[Optional[int], bool]:
    """
    Child of a perpendicular split that faces the focus.

    A child spanning the whole focus edge wins, then the first child lying
    within the focus edge. Anything else is a partial overlap.

    Returns:
        Tuple of (child id or None to remove the whole split, partial flag)
    """
    focus_start, focus_end = focus_area.span(cross)
    inside = None
    for child_id in split.children:
        start, end = tree.rectangle_of(child_id).span(cross)
        if start <= focus_start and focus_end <= end:
            return child_id, False
        if inside is None and focus_start <= start and end <= focus_end:
            inside = child_id
    if inside is not None:
        return inside, False

    if partial_policy is PartialPolicy.LEADING:
        for child_id in split.children:
            start, end = tree.rectangle_of(child_id).span(cross)
            if start <= focus_start < end:
                return child_id, True
    return None, True
