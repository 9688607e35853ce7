"""
Directional window swallowing for split layouts

Lets the focused window take over the space of a neighboring window, or of
a whole neighboring branch, in a chosen direction instead of leaving the
freed space to whichever sibling the split order dictates.

This package provides:
- A layout tree of splits and windows with strict tiling invariants
- Neighbor location, disambiguation and the swallow itself
- A controller wiring swallow commands to a host over the event bus
- ASCII layout descriptions for fixtures and the demo CLI

Example usage:
    from pubsub import pub
    from swallow import SwallowController, StaticHost, load_layout

    loaded = load_layout("AB\\nAC")
    controller = SwallowController(pub, StaticHost.from_tree(loaded.tree))
    controller.snapshot()
    controller.swallow("right")

Or run directly:
    python -m swallow layout.txt right
"""

__version__ = "0.1.0"
__author__ = "pinpox"

from .geometry import Area, Direction, LayoutDirection, WindowEdges

from .errors import (
    SwallowError,
    NoOtherWindow,
    NoNeighborInDirection,
    StaleLayout,
    InvariantViolation,
    LayoutError,
)

from .layouts import (
    LayoutTree,
    WindowNode,
    SplitNode,
    LayoutGeometry,
    calculate_geometry,
    build_tree,
    LoadedLayout,
    load_layout,
    render_layout,
    AdjacentSubtree,
    locate,
    PartialPolicy,
    resolve,
    SwallowExecutor,
    SwallowOutcome,
)

from .config import SwallowConfig
from .host import WindowHost, StaticHost
from .swallow_controller import SwallowController, SwallowResult

from . import topics

__all__ = [
    # Version
    "__version__",
    # Geometry
    "Area",
    "Direction",
    "LayoutDirection",
    "WindowEdges",
    # Errors
    "SwallowError",
    "NoOtherWindow",
    "NoNeighborInDirection",
    "StaleLayout",
    "InvariantViolation",
    "LayoutError",
    # Layouts
    "LayoutTree",
    "WindowNode",
    "SplitNode",
    "LayoutGeometry",
    "calculate_geometry",
    "build_tree",
    "LoadedLayout",
    "load_layout",
    "render_layout",
    "AdjacentSubtree",
    "locate",
    "PartialPolicy",
    "resolve",
    "SwallowExecutor",
    "SwallowOutcome",
    # Controller
    "SwallowConfig",
    "WindowHost",
    "StaticHost",
    "SwallowController",
    "SwallowResult",
    # Event topics
    "topics",
]
