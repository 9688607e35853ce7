"""
Layout System

Provides the split layout tree and the swallow algorithm.
"""

from .layout_tree import (
    LayoutTree,
    Node,
    WindowNode,
    SplitNode,
)
from .layout_base import LayoutGeometry, LayoutDirection, calculate_geometry
from .layout_builder import build_tree
from .layout_description import LoadedLayout, load_layout, render_layout
from .neighbor_locator import AdjacentSubtree, locate, available_directions
from .disambiguation import PartialPolicy, Resolution, resolve
from .swallow_executor import SwallowExecutor, SwallowOutcome

__all__ = [
    # Tree
    "LayoutTree",
    "Node",
    "WindowNode",
    "SplitNode",
    "LayoutGeometry",
    "LayoutDirection",
    "calculate_geometry",
    # Building and fixtures
    "build_tree",
    "LoadedLayout",
    "load_layout",
    "render_layout",
    # Swallowing
    "AdjacentSubtree",
    "locate",
    "available_directions",
    "PartialPolicy",
    "Resolution",
    "resolve",
    "SwallowExecutor",
    "SwallowOutcome",
]
