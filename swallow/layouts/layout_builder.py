"""
Layout Builder

Reconstructs a split tree from plain window rectangles, as read from a host
or a layout description, by repeatedly cutting the frame along lines that no
window straddles.
"""

from __future__ import annotations
from typing import Hashable, List, Mapping, Optional, Tuple

from ..errors import LayoutError
from ..geometry import Area, LayoutDirection, bounding_area
from .layout_tree import LayoutTree, Node

Item = Tuple[Hashable, Area]

# Columns are tried before rows when both cuts are possible
CUT_ORDER = (LayoutDirection.HORIZONTAL, LayoutDirection.VERTICAL)


def build_tree(
    areas: Mapping[Hashable, Area],
    frame: Optional[Area] = None,
    focus: Optional[Hashable] = None,
) -> LayoutTree:
    """
    Build a layout tree from window rectangles.

    Args:
        areas: Map of window id to the area it occupies
        frame: Frame the windows tile (defaults to their bounding area)
        focus: Window to focus (defaults to the first window in layout order)

    Returns:
        A validated LayoutTree

    Raises:
        LayoutError: The rectangles overlap, leave gaps, or cannot be
            divided into splits
    """
    if not areas:
        raise LayoutError("Cannot build a layout without windows")
    if frame is None:
        frame = bounding_area(areas.values())

    for window_id, area in areas.items():
        if area.width <= 0 or area.height <= 0:
            raise LayoutError(f"Window {window_id!r} has an empty area {area}")
        if not frame.contains(area):
            raise LayoutError(f"Window {window_id!r} at {area} lies outside {frame}")
    if sum(area.size for area in areas.values()) != frame.size:
        raise LayoutError("Windows do not tile the frame exactly")

    tree = LayoutTree()
    _build(tree, list(areas.items()), frame, None)
    if focus is None:
        focus = tree.windows()[0].window_id
    tree.set_focus(focus)
    tree.relayout(frame)
    return tree


def _build(tree: LayoutTree, items: List[Item], region: Area, parent: Optional[int]) -> Node:
    if len(items) == 1:
        window_id, area = items[0]
        if area != region:
            raise LayoutError(
                f"Window {window_id!r} at {area} does not fill its region {region}"
            )
        return tree.add_window(window_id, area, parent)

    for axis in CUT_ORDER:
        groups = _cut(items, region, axis)
        if len(groups) > 1:
            break
    else:
        names = ", ".join(repr(window_id) for window_id, _ in items)
        raise LayoutError(f"Windows {names} cannot be divided by a straight cut")

    split = tree.add_split(axis, region, parent)
    for start, end, group in groups:
        _build(tree, group, region.with_span(axis, start, end - start), split.node_id)
    return split


def _cut(items: List[Item], region: Area, axis: LayoutDirection) -> List[Tuple[int, int, List[Item]]]:
    """Group items between the cut lines along an axis."""
    ordered = sorted(items, key=lambda item: item[1].start(axis))
    region_start, region_end = region.span(axis)
    groups = []
    current: List[Item] = []
    group_start = reach = region_start
    for item in ordered:
        start, end = item[1].span(axis)
        if current and start >= reach:
            groups.append((group_start, reach, current))
            current = []
            group_start = reach
        if not current and start != group_start:
            raise LayoutError(f"Gap before window {item[0]!r} in {region}")
        current.append(item)
        reach = max(reach, end)
    groups.append((group_start, reach, current))
    if reach != region_end:
        raise LayoutError(f"Windows do not reach the end of {region}")
    return groups
