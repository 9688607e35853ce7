"""
Swallow Executor

Grows the focused window into the space of its neighbor in a direction.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional

from ..errors import InvariantViolation, NoNeighborInDirection, NoOtherWindow
from ..geometry import Area, Direction
from .disambiguation import PartialPolicy, resolve
from .layout_tree import LayoutTree, SplitNode
from .neighbor_locator import locate


@dataclass
class SwallowOutcome:
    """What a successful swallow changed."""

    direction: Direction
    aggressive: bool
    focus: Hashable
    removed: List[Hashable] = field(default_factory=list)
    resized: List[Hashable] = field(default_factory=list)
    ambiguous: bool = False
    geometry: Dict[Hashable, Area] = field(default_factory=dict)


class SwallowExecutor:
    """
    Performs swallows on a layout tree.

    Every swallow is computed on a scratch copy of the tree and only swapped
    in after the invariants and the total area check pass, so a failed
    swallow leaves the tree exactly as it was.
    """

    def __init__(
        self,
        partial_policy: PartialPolicy = PartialPolicy.AGGRESSIVE,
        debug: bool = False,
    ):
        """Initialize swallow executor.

        Args:
            partial_policy: Treatment of neighbors that only partly face the focus
            debug: Print a line for every swallow
        """
        self.partial_policy = PartialPolicy.parse(partial_policy)
        self.debug = debug

    def swallow(
        self,
        tree: LayoutTree,
        direction: "Direction | str",
        aggressive: bool = False,
        focus: Optional[Hashable] = None,
    ) -> SwallowOutcome:
        """
        Swallow the neighbor of the focused window.

        Args:
            tree: Layout to modify
            direction: Side of the focused window to swallow
            aggressive: Remove the whole neighboring branch instead of the
                single window facing the focus
            focus: Window to swallow from (defaults to the tree's focus)

        Returns:
            SwallowOutcome describing the change

        Raises:
            NoOtherWindow: The layout holds a single window
            NoNeighborInDirection: The focus touches the frame edge there
            InvariantViolation: The mutation would break the layout
        """
        direction = Direction.parse(direction)
        if len(tree) <= 1:
            raise NoOtherWindow()

        scratch = tree.copy()
        if focus is not None:
            scratch.set_focus(focus)
        focused = scratch.focused_window
        if focused is None:
            raise InvariantViolation("Layout has no focused window")

        # Merge same-orientation nesting above the focus so the heir is the
        # branch directly beside the neighbor
        for split in scratch.parent_chain(focused.node_id):
            scratch.flatten(split.node_id)

        located = locate(scratch, focused.node_id, direction)
        if located is None:
            raise NoNeighborInDirection(direction)

        # A neighbor split in line with the swallow is merged into the ancestor
        # so that only its nearest child faces the focus
        while True:
            adjacent = scratch.node(located.adjacent)
            if not (isinstance(adjacent, SplitNode) and adjacent.direction is direction.axis):
                break
            scratch.flatten(adjacent.node_id)
            located = locate(scratch, focused.node_id, direction)

        before = scratch.geometry()
        total = scratch.total_area()
        resolution = resolve(
            scratch, located, focused.area, aggressive, self.partial_policy
        )
        removed = [n.window_id for n in scratch.windows(resolution.remove)]
        scratch.replace_subtree(resolution.remove, None, heir=resolution.heir)

        if scratch.total_area() != total:
            raise InvariantViolation(
                f"Swallow changed the covered area from {total} to {scratch.total_area()}"
            )
        scratch.validate()
        tree.swap(scratch)

        after = tree.geometry()
        resized = [wid for wid, area in after.items() if before[wid] != area]
        if self.debug:
            print(
                f"SwallowExecutor: {focused.window_id!r} swallowed {direction.value}, "
                f"removed {removed}, resized {resized}"
                + (" (partial neighbor)" if resolution.ambiguous else "")
            )

        return SwallowOutcome(
            direction=direction,
            aggressive=aggressive,
            focus=focused.window_id,
            removed=removed,
            resized=resized,
            ambiguous=resolution.ambiguous,
            geometry=after,
        )
