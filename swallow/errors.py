"""
Swallow Errors

Error kinds reported by the swallow operation. The layout code raises them;
SwallowController turns them into SwallowResult values and bus events.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .geometry import Direction


class SwallowError(Exception):
    """Base class for errors reported by a swallow."""

    kind = "swallow_error"
    default_message = "Swallow failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class NoOtherWindow(SwallowError):
    """The layout holds a single window, there is nothing to swallow."""

    kind = "no_other_window"
    default_message = "No other window to swallow"


class NoNeighborInDirection(SwallowError):
    """The focused window already touches the frame edge in that direction."""

    kind = "no_neighbor_in_direction"
    default_message = "No window in that direction"

    def __init__(self, direction: Optional["Direction"] = None):
        self.direction = direction
        message = None
        if direction is not None:
            message = f"No window {direction.value} of the focused window"
        super().__init__(message)


class StaleLayout(SwallowError):
    """Host windows changed since the layout snapshot was taken."""

    kind = "stale_layout"
    default_message = "Host layout changed since the snapshot, rebuild and retry"


class InvariantViolation(SwallowError):
    """A layout mutation broke the tree invariants (internal bug)."""

    kind = "invariant_violation"
    default_message = "Layout invariant violated"


class LayoutError(ValueError):
    """Window rectangles or a layout description cannot form a split tree."""
