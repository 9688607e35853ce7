"""
Layout Tree

Arena of window and split nodes describing how a frame is tiled.

Nodes live in a dict keyed by node id and point to their parent by id, so
subtrees can be detached and spliced without ownership cycles. A split keeps
one integer weight per child: the child's extent along the split axis.
Whenever a split's area changes the weights are rescaled to sum exactly to
the new extent and the child areas are re-derived top-down.
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterator, List, Optional

from ..errors import InvariantViolation, LayoutError
from ..geometry import Area, LayoutDirection


@dataclass
class Node:
    """Common part of windows and splits."""

    node_id: int
    area: Area
    parent: Optional[int] = None


@dataclass
class WindowNode(Node):
    """Leaf node holding a host window."""

    window_id: Hashable = None


@dataclass
class SplitNode(Node):
    """Internal node dividing its area among ordered children."""

    direction: LayoutDirection = LayoutDirection.HORIZONTAL
    children: List[int] = field(default_factory=list)
    weights: List[int] = field(default_factory=list)


def distribute(weights: List[int], total: int) -> List[int]:
    """Scale weights so they sum exactly to ``total``, keeping proportions."""
    weight_sum = sum(weights)
    if weight_sum <= 0:
        raise InvariantViolation(f"Cannot distribute {total} over weights {weights}")
    if weight_sum == total:
        return list(weights)

    # Round the cumulative edges rather than each part so nothing is lost
    result = []
    accumulated = 0
    previous_edge = 0
    for weight in weights:
        accumulated += weight
        edge = (accumulated * total + weight_sum // 2) // weight_sum
        result.append(edge - previous_edge)
        previous_edge = edge
    return result


class LayoutTree:
    """
    Binary-or-wider tree of splits and windows tiling one frame.

    Invariants checked by validate():
    - children of a split tile its area exactly, in order along its axis
    - every split has at least two children
    - exactly one window is focused
    """

    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self.root: Optional[int] = None
        self.focus: Optional[int] = None
        self.window_index: Dict[Hashable, int] = {}
        self._next_id = 1

    @classmethod
    def single(cls, window_id: Hashable, area: Area) -> "LayoutTree":
        """Create a layout holding one focused window."""
        tree = cls()
        node = tree.add_window(window_id, area)
        tree.focus = node.node_id
        tree.validate()
        return tree

    def __len__(self) -> int:
        return len(self.window_index)

    def __repr__(self) -> str:
        return f"LayoutTree(windows={self.window_ids()}, focus={self.focus})"

    # Construction

    def _allocate(self) -> int:
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def _attach(self, node: Node, parent: Optional[int], weight: Optional[int]):
        self.nodes[node.node_id] = node
        if parent is None:
            if self.root is None:
                self.root = node.node_id
            return
        split = self.nodes[parent]
        if not isinstance(split, SplitNode):
            raise LayoutError(f"Node {parent} is not a split")
        if weight is None:
            weight = node.area.extent(split.direction)
        split.children.append(node.node_id)
        split.weights.append(weight)

    def add_window(
        self,
        window_id: Hashable,
        area: Area,
        parent: Optional[int] = None,
        weight: Optional[int] = None,
    ) -> WindowNode:
        """
        Add a window node.

        Args:
            window_id: Host identity of the window
            area: Area the window occupies
            parent: Split to append the window to (None for a root or detached node)
            weight: Extent along the parent axis (defaults to the area's extent)

        Returns:
            The new window node
        """
        if window_id in self.window_index:
            raise LayoutError(f"Duplicate window id: {window_id!r}")
        node = WindowNode(self._allocate(), area, parent, window_id=window_id)
        self._attach(node, parent, weight)
        self.window_index[window_id] = node.node_id
        return node

    def add_split(
        self,
        direction: LayoutDirection,
        area: Area,
        parent: Optional[int] = None,
        weight: Optional[int] = None,
    ) -> SplitNode:
        """Add an empty split node; children are appended with parent=split.node_id."""
        node = SplitNode(self._allocate(), area, parent, direction=direction)
        self._attach(node, parent, weight)
        return node

    # Queries

    def node(self, node_id: int) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise LayoutError(f"Unknown node: {node_id}") from None

    def node_for(self, window_id: Hashable) -> WindowNode:
        """Window node for a host window id."""
        if window_id not in self.window_index:
            raise LayoutError(f"Unknown window: {window_id!r}")
        return self.nodes[self.window_index[window_id]]

    def rectangle_of(self, node_id: int) -> Area:
        return self.node(node_id).area

    def parent_chain(self, node_id: int) -> List[SplitNode]:
        """Ancestor splits of a node, nearest first."""
        chain = []
        parent = self.node(node_id).parent
        while parent is not None:
            split = self.nodes[parent]
            chain.append(split)
            parent = split.parent
        return chain

    def descendants(self, node_id: int) -> Iterator[Node]:
        """Node and all nodes below it, in pre-order."""
        stack = [node_id]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            if isinstance(node, SplitNode):
                stack.extend(reversed(node.children))

    def windows(self, node_id: Optional[int] = None) -> List[WindowNode]:
        """Windows below a node (the whole tree by default), in layout order."""
        if node_id is None:
            node_id = self.root
        if node_id is None:
            return []
        return [n for n in self.descendants(node_id) if isinstance(n, WindowNode)]

    def window_ids(self) -> List[Hashable]:
        return [n.window_id for n in self.windows()]

    @property
    def focused_window(self) -> Optional[WindowNode]:
        node = self.nodes.get(self.focus) if self.focus is not None else None
        return node if isinstance(node, WindowNode) else None

    def set_focus(self, window_id: Hashable):
        self.focus = self.node_for(window_id).node_id

    @property
    def frame(self) -> Area:
        """Area of the whole layout."""
        return self.rectangle_of(self.root)

    def geometry(self) -> Dict[Hashable, Area]:
        """Map of window id to its current area."""
        return {n.window_id: n.area for n in self.windows()}

    def total_area(self) -> int:
        return sum(n.area.size for n in self.windows())

    def copy(self) -> "LayoutTree":
        """Independent scratch copy with the same node ids."""
        return copy.deepcopy(self)

    def swap(self, other: "LayoutTree"):
        """Take over the state of another tree (used to commit a scratch copy)."""
        self.nodes = other.nodes
        self.root = other.root
        self.focus = other.focus
        self.window_index = other.window_index
        self._next_id = other._next_id

    def to_dict(self, node_id: Optional[int] = None) -> Dict[str, Any]:
        """Dump a subtree in i3/Sway tree format."""
        node = self.node(self.root if node_id is None else node_id)
        rect = {
            "x": node.area.x,
            "y": node.area.y,
            "width": node.area.width,
            "height": node.area.height,
        }
        if isinstance(node, WindowNode):
            return {
                "id": node.node_id,
                "name": str(node.window_id),
                "type": "con",
                "rect": rect,
                "focused": node.node_id == self.focus,
                "nodes": [],
            }
        layout = "splith" if node.direction is LayoutDirection.HORIZONTAL else "splitv"
        return {
            "id": node.node_id,
            "name": None,
            "type": "con",
            "layout": layout,
            "rect": rect,
            "focused": False,
            "nodes": [self.to_dict(child) for child in node.children],
        }

    # Mutation

    def _apply_area(self, node_id: int, area: Area):
        """Give a node its area and re-derive the areas below it."""
        node = self.nodes[node_id]
        node.area = area
        if not isinstance(node, SplitNode):
            return
        axis = node.direction
        node.weights = distribute(node.weights, area.extent(axis))
        offset = area.start(axis)
        for child_id, weight in zip(node.children, node.weights):
            self._apply_area(child_id, area.with_span(axis, offset, weight))
            offset += weight

    def _discard(self, node_id: int):
        for node in list(self.descendants(node_id)):
            del self.nodes[node.node_id]
            if isinstance(node, WindowNode):
                del self.window_index[node.window_id]

    def _collapse(self, split_id: int):
        """Replace a split left with a single child by that child."""
        split = self.nodes.get(split_id)
        if not isinstance(split, SplitNode) or len(split.children) != 1:
            return
        child = self.nodes[split.children[0]]
        child.parent = split.parent
        if split.parent is None:
            self.root = child.node_id
        else:
            grandparent = self.nodes[split.parent]
            grandparent.children[grandparent.children.index(split_id)] = child.node_id
        del self.nodes[split_id]
        self._apply_area(child.node_id, split.area)
        # A promoted split never nests inside a split of its own orientation
        self.flatten(child.node_id)

    def replace_subtree(
        self,
        old_id: int,
        new_id: Optional[int] = None,
        heir: Optional[int] = None,
    ):
        """
        Substitute or remove a subtree.

        Args:
            old_id: Node to take out of its parent split
            new_id: Detached node to put in its place, or None to remove it
            heir: Sibling that absorbs the freed extent on removal. Without an
                heir the remaining children grow in proportion to their size.

        Raises:
            InvariantViolation: The root or the focused window would be
                removed, or the result does not tile the frame
        """
        old = self.node(old_id)
        if old.parent is None:
            raise InvariantViolation("Cannot replace the root of the layout")
        removed = {n.node_id for n in self.descendants(old_id)}
        if self.focus in removed:
            raise InvariantViolation("Cannot remove the focused window")

        parent = self.nodes[old.parent]
        index = parent.children.index(old_id)
        if new_id is not None:
            new = self.node(new_id)
            if new.parent is not None or new_id == self.root:
                raise InvariantViolation(f"Replacement node {new_id} is still attached")
            parent.children[index] = new_id
            new.parent = parent.node_id
        else:
            weight = parent.weights[index]
            del parent.children[index]
            del parent.weights[index]
            if heir is not None:
                if heir not in parent.children:
                    raise InvariantViolation(
                        f"Node {heir} is not a sibling of node {old_id}"
                    )
                parent.weights[parent.children.index(heir)] += weight

        self._discard(old_id)
        self._apply_area(parent.node_id, parent.area)
        self._collapse(parent.node_id)
        self.validate()

    def split(
        self,
        window_id: Hashable,
        new_window_id: Hashable,
        direction: LayoutDirection,
        after: bool = True,
        ratio: float = 0.5,
    ) -> WindowNode:
        """
        Split a window and place a new window next to it.

        Args:
            window_id: Window to split
            new_window_id: Identity of the new window
            direction: HORIZONTAL puts the new window beside, VERTICAL below/above
            after: Put the new window right of/below the existing one
            ratio: Fraction of the extent the existing window keeps

        Returns:
            The new window node
        """
        target = self.node_for(window_id)
        extent = target.area.extent(direction)
        if extent < 2:
            raise LayoutError(f"Window {window_id!r} is too small to split")
        kept = min(max(int(extent * ratio), 1), extent - 1)
        weights = [kept, extent - kept]

        parent = self.nodes.get(target.parent) if target.parent is not None else None
        if isinstance(parent, SplitNode) and parent.direction is direction:
            # Same orientation as the parent: become a sibling instead of nesting
            index = parent.children.index(target.node_id)
            new = self.add_window(new_window_id, target.area)
            new.parent = parent.node_id
            insert_at = index + 1 if after else index
            parent.weights[index] = kept
            parent.children.insert(insert_at, new.node_id)
            parent.weights.insert(insert_at, extent - kept)
            self._apply_area(parent.node_id, parent.area)
        else:
            split = SplitNode(
                self._allocate(), target.area, target.parent, direction=direction
            )
            self.nodes[split.node_id] = split
            if parent is None:
                self.root = split.node_id
            else:
                parent.children[parent.children.index(target.node_id)] = split.node_id
            new = self.add_window(new_window_id, target.area)
            new.parent = split.node_id
            target.parent = split.node_id
            if after:
                split.children = [target.node_id, new.node_id]
            else:
                split.children = [new.node_id, target.node_id]
                weights.reverse()
            split.weights = weights
            self._apply_area(split.node_id, split.area)

        self.validate()
        return new

    def flatten(self, split_id: int) -> bool:
        """
        Splice a split into its parent when both have the same orientation.

        Geometry is unchanged. Returns True when the split was merged.
        """
        split = self.node(split_id)
        if not isinstance(split, SplitNode) or split.parent is None:
            return False
        parent = self.nodes[split.parent]
        if parent.direction is not split.direction:
            return False
        index = parent.children.index(split_id)
        parent.children[index : index + 1] = split.children
        parent.weights[index : index + 1] = split.weights
        for child_id in split.children:
            self.nodes[child_id].parent = parent.node_id
        del self.nodes[split_id]
        self._apply_area(parent.node_id, parent.area)
        return True

    def relayout(self, area: Area):
        """Fit the whole layout into a new frame area."""
        if self.root is None:
            raise InvariantViolation("Layout has no root")
        self._apply_area(self.root, area)
        self.validate()

    # Invariants

    def validate(self):
        """
        Check the tree invariants.

        Raises:
            InvariantViolation: Describing the first broken invariant
        """
        if self.root is None or self.root not in self.nodes:
            raise InvariantViolation("Layout has no root")
        if self.nodes[self.root].parent is not None:
            raise InvariantViolation("Root node has a parent")

        seen = set()
        windows = {}
        stack = [self.root]
        while stack:
            node = self.nodes[stack.pop()]
            seen.add(node.node_id)
            if node.area.width <= 0 or node.area.height <= 0:
                raise InvariantViolation(f"Node {node.node_id} has empty area {node.area}")
            if isinstance(node, WindowNode):
                windows[node.window_id] = node.node_id
                continue
            if len(node.children) < 2:
                raise InvariantViolation(
                    f"Split {node.node_id} has {len(node.children)} child(ren)"
                )
            if len(node.weights) != len(node.children):
                raise InvariantViolation(f"Split {node.node_id} weights out of sync")

            axis = node.direction
            cursor = node.area.start(axis)
            for child_id, weight in zip(node.children, node.weights):
                child = self.nodes.get(child_id)
                if child is None or child.parent != node.node_id:
                    raise InvariantViolation(
                        f"Child {child_id} of split {node.node_id} is not linked to it"
                    )
                expected = node.area.with_span(axis, cursor, weight)
                if child.area != expected:
                    raise InvariantViolation(
                        f"Child {child_id} of split {node.node_id} occupies "
                        f"{child.area}, expected {expected}"
                    )
                cursor += weight
                stack.append(child_id)
            if cursor != node.area.end(axis):
                raise InvariantViolation(
                    f"Children of split {node.node_id} do not fill its area"
                )

        if seen != set(self.nodes):
            raise InvariantViolation(
                f"Unreachable nodes: {sorted(set(self.nodes) - seen)}"
            )
        if windows != self.window_index:
            raise InvariantViolation("Window index out of sync with the tree")
        if self.focused_window is None:
            raise InvariantViolation("Exactly one window must be focused")
