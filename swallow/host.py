"""
Host Adapter

The window system side of a swallow: where window rectangles are read from
and where the final layout is committed.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Hashable, List, Optional

from .geometry import Area

if TYPE_CHECKING:
    from .layouts.layout_base import LayoutGeometry
    from .layouts.layout_tree import LayoutTree


class WindowHost(ABC):
    """Abstract base class for hosts whose windows can be swallowed."""

    @abstractmethod
    def frame_area(self) -> Area:
        """Area tiled by the host's windows."""
        pass

    @abstractmethod
    def window_geometry(self) -> Dict[Hashable, Area]:
        """Current area of every window, keyed by window id."""
        pass

    @abstractmethod
    def focused_window(self) -> Hashable:
        """Id of the focused window."""
        pass

    @abstractmethod
    def commit_layout(
        self, geometry: Dict[Hashable, "LayoutGeometry"], removed: List[Hashable]
    ):
        """
        Apply a new layout in one step.

        Args:
            geometry: New geometry of every remaining window
            removed: Windows swallowed by the change, to be deleted
        """
        pass


class StaticHost(WindowHost):
    """In-memory host holding plain window rectangles."""

    def __init__(
        self,
        frame: Area,
        windows: Dict[Hashable, Area],
        focused: Optional[Hashable] = None,
    ):
        self.frame = frame
        self.windows = dict(windows)
        self.focused = focused if focused is not None else next(iter(self.windows))
        self.deleted: List[Hashable] = []
        self.commits = 0

    @classmethod
    def from_tree(cls, tree: "LayoutTree") -> "StaticHost":
        """Host mirroring the current state of a layout tree."""
        return cls(tree.frame, tree.geometry(), tree.focused_window.window_id)

    def frame_area(self) -> Area:
        return self.frame

    def window_geometry(self) -> Dict[Hashable, Area]:
        return dict(self.windows)

    def focused_window(self) -> Hashable:
        return self.focused

    def commit_layout(
        self, geometry: Dict[Hashable, "LayoutGeometry"], removed: List[Hashable]
    ):
        for window_id in removed:
            self.windows.pop(window_id, None)
            self.deleted.append(window_id)
        for window_id, geom in geometry.items():
            self.windows[window_id] = geom.area
        self.commits += 1
