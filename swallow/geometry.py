"""
Geometry Primitives

Areas, edges, split orientations and swallow directions shared by the
layout tree and the swallow logic.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntFlag, auto
from typing import Iterable, Tuple


class WindowEdges(IntFlag):
    """Window edge flags."""

    NONE = 0
    TOP = 1
    BOTTOM = 2
    LEFT = 4
    RIGHT = 8


class LayoutDirection(Enum):
    """Split direction for layouts."""

    HORIZONTAL = auto()  # Windows arranged left-to-right
    VERTICAL = auto()  # Windows arranged top-to-bottom

    @property
    def perpendicular(self) -> "LayoutDirection":
        if self is LayoutDirection.HORIZONTAL:
            return LayoutDirection.VERTICAL
        return LayoutDirection.HORIZONTAL


class Direction(Enum):
    """Direction in which the focused window swallows its neighbor."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def axis(self) -> LayoutDirection:
        """Orientation of the splits that can hold a neighbor in this direction."""
        if self in (Direction.UP, Direction.DOWN):
            return LayoutDirection.VERTICAL
        return LayoutDirection.HORIZONTAL

    @property
    def step(self) -> int:
        """Index offset from a child to its neighbor in this direction."""
        if self in (Direction.UP, Direction.LEFT):
            return -1
        return 1

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """
        Parse a direction name.

        Accepts the full names (case-insensitive) and the short forms
        u, d, l and r.
        """
        if isinstance(value, Direction):
            return value
        name = str(value).strip().lower()
        name = {"u": "up", "d": "down", "l": "left", "r": "right"}.get(name, name)
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"Invalid direction: {value!r}. Use up, down, left or right"
            ) from None


@dataclass
class Area:
    """Area with position and dimensions."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def size(self) -> int:
        return self.width * self.height

    def start(self, axis: LayoutDirection) -> int:
        return self.x if axis is LayoutDirection.HORIZONTAL else self.y

    def end(self, axis: LayoutDirection) -> int:
        return self.right if axis is LayoutDirection.HORIZONTAL else self.bottom

    def extent(self, axis: LayoutDirection) -> int:
        return self.width if axis is LayoutDirection.HORIZONTAL else self.height

    def span(self, axis: LayoutDirection) -> Tuple[int, int]:
        """Start and end coordinates along an axis."""
        return self.start(axis), self.end(axis)

    def with_span(self, axis: LayoutDirection, start: int, extent: int) -> "Area":
        """Copy of this area moved and resized along one axis."""
        if axis is LayoutDirection.HORIZONTAL:
            return Area(start, self.y, extent, self.height)
        return Area(self.x, start, self.width, extent)

    def contains(self, other: "Area") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def touching_edges(self, frame: "Area") -> WindowEdges:
        """Edges of this area that lie on the border of ``frame``."""
        edges = WindowEdges.NONE
        if self.y == frame.y:
            edges |= WindowEdges.TOP
        if self.bottom == frame.bottom:
            edges |= WindowEdges.BOTTOM
        if self.x == frame.x:
            edges |= WindowEdges.LEFT
        if self.right == frame.right:
            edges |= WindowEdges.RIGHT
        return edges


def bounding_area(areas: Iterable[Area]) -> Area:
    """Smallest area containing all given areas."""
    areas = list(areas)
    if not areas:
        return Area()
    left = min(a.x for a in areas)
    top = min(a.y for a in areas)
    right = max(a.right for a in areas)
    bottom = max(a.bottom for a in areas)
    return Area(left, top, right - left, bottom - top)
