"""
Event Topics for swallow

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>
"""

# Command events (imperative - tell components to do something)
# These are triggered by user input (keybinds) or IPC commands

CMD_SWALLOW = "cmd.swallow"
"""Command: Swallow the neighbor of the focused window.
Params: direction (Direction or name), aggressive (optional bool)"""

CMD_SNAPSHOT = "cmd.snapshot"
"""Command: Rebuild the layout tree from the host's current windows."""

# Layout notifications

LAYOUT_SNAPSHOT = "layout.snapshot"
"""Published when a new layout snapshot was taken. Params: tree"""

LAYOUT_SWALLOWED = "layout.swallowed"
"""Published after a swallow was applied to the host. Params: outcome"""

SWALLOW_FAILED = "layout.swallow_failed"
"""Published when a swallow was refused or failed. Params: error"""
