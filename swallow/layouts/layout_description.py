"""
Layout Descriptions

Loads layouts from ASCII grids and renders layouts back to grids.

Each uppercase letter names one window and every cell it appears in belongs
to that window:

    AB
    A*C

is window A filling the left column (focused, marked by the trailing *),
B top right and C bottom right. Spaces and box-drawing characters are
ignored, so grids can be drawn with borders.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Tuple

from ..errors import LayoutError
from ..geometry import Area
from .layout_builder import build_tree
from .layout_tree import LayoutTree, WindowNode

SEPARATORS = set(" \t│─┼├┤┬┴┌┐└┘|-+")
FOCUS_MARKER = "*"


@dataclass
class LoadedLayout:
    """A loaded tree plus the registry of window names used in the grid."""

    tree: LayoutTree
    names: Dict[str, Hashable] = field(default_factory=dict)

    def window(self, name: str) -> WindowNode:
        return self.tree.node_for(self.names[name])

    def area(self, name: str) -> Area:
        return self.window(name).area

    def focus(self, name: str):
        self.tree.set_focus(self.names[name])

    def render(self, scale: Tuple[int, int] = (1, 1), mark_focus: bool = False) -> str:
        return render_layout(self.tree, scale, mark_focus)


def parse_grid(text: str) -> Tuple[List[List[str]], Optional[str]]:
    """
    Split a grid description into rows of window letters.

    Returns:
        Tuple of (rows, focused letter or None)
    """
    rows = []
    focus = None
    for line in text.splitlines():
        cells: List[str] = []
        for char in line:
            if char in SEPARATORS:
                continue
            if char == FOCUS_MARKER:
                if not cells:
                    raise LayoutError("Focus marker must follow a window letter")
                if focus is not None and focus != cells[-1]:
                    raise LayoutError(f"Focus marked on both {focus} and {cells[-1]}")
                focus = cells[-1]
                continue
            if not ("A" <= char <= "Z"):
                raise LayoutError(f"Unexpected character {char!r} in layout")
            cells.append(char)
        if cells:
            rows.append(cells)

    if not rows:
        raise LayoutError("Layout description is empty")
    if any(len(row) != len(rows[0]) for row in rows):
        raise LayoutError("All layout rows must have the same number of cells")
    return rows, focus


def load_layout(
    text: str,
    scale: Tuple[int, int] = (1, 1),
    focus: Optional[str] = None,
) -> LoadedLayout:
    """
    Build a layout tree from an ASCII grid.

    Args:
        text: Grid description
        scale: Width and height of one grid cell
        focus: Letter of the window to focus (overrides a * marker)

    Returns:
        LoadedLayout whose window ids are the letters themselves
    """
    rows, marked = parse_grid(text)
    cell_width, cell_height = scale

    bounds: Dict[str, List[int]] = {}
    for row_index, row in enumerate(rows):
        for col_index, letter in enumerate(row):
            box = bounds.setdefault(letter, [col_index, row_index, col_index, row_index])
            box[0] = min(box[0], col_index)
            box[1] = min(box[1], row_index)
            box[2] = max(box[2], col_index)
            box[3] = max(box[3], row_index)

    areas = {}
    for letter, (left, top, right, bottom) in bounds.items():
        for row in rows[top : bottom + 1]:
            if any(cell != letter for cell in row[left : right + 1]):
                raise LayoutError(f"Window {letter} is not rectangular")
        areas[letter] = Area(
            left * cell_width,
            top * cell_height,
            (right - left + 1) * cell_width,
            (bottom - top + 1) * cell_height,
        )

    chosen = focus or marked
    if chosen is not None and chosen not in areas:
        raise LayoutError(f"Focus window {chosen} is not in the layout")

    frame = Area(0, 0, len(rows[0]) * cell_width, len(rows) * cell_height)
    tree = build_tree(areas, frame, focus=chosen)
    return LoadedLayout(tree, {letter: letter for letter in areas})


def render_layout(
    tree: LayoutTree, scale: Tuple[int, int] = (1, 1), mark_focus: bool = False
) -> str:
    """
    Render a layout as an ASCII grid, one character per cell.

    With mark_focus the top-left cell of the focused window is followed by
    the focus marker, so the output loads back with the same focus.
    """
    frame = tree.frame
    cell_width, cell_height = scale
    grid = [
        ["?"] * (frame.width // cell_width) for _ in range(frame.height // cell_height)
    ]
    for node in tree.windows():
        label = str(node.window_id)
        if len(label) != 1:
            raise LayoutError(f"Window id {label!r} cannot be rendered as one cell")
        area = node.area
        top = (area.y - frame.y) // cell_height
        left = (area.x - frame.x) // cell_width
        for row in range(top, (area.bottom - frame.y) // cell_height):
            for col in range(left, (area.right - frame.x) // cell_width):
                grid[row][col] = label
        if mark_focus and node.node_id == tree.focus:
            grid[top][left] = label + FOCUS_MARKER
    return "\n".join("".join(row) for row in grid)
