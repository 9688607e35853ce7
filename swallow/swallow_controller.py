"""
Swallow Controller

Connects the swallow algorithm to a host and to the event bus.
"""

from __future__ import annotations
import argparse
import json
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pubsub import pub

from . import topics
from .config import SwallowConfig
from .errors import LayoutError, StaleLayout, SwallowError
from .geometry import Direction
from .host import StaticHost, WindowHost
from .layouts import (
    SwallowExecutor,
    build_tree,
    calculate_geometry,
    load_layout,
    render_layout,
)

if TYPE_CHECKING:
    from .layouts import LayoutTree, SwallowOutcome

USAGE = "Usage: swallow <up|down|left|right> [aggressive]"


def debug_event_logger(topic=pub.AUTO_TOPIC, **kwargs):
    """Log all events published on the event bus."""
    timestamp = time.strftime("%H:%M:%S")
    topic_name = topic.getName()
    data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
    print(f"[{timestamp}] EVENT: {topic_name} | {data_str}")


@dataclass
class SwallowResult:
    """Result of a swallow command, success or the error that stopped it."""

    success: bool
    error: Optional[SwallowError] = None
    outcome: Optional["SwallowOutcome"] = None

    @property
    def kind(self) -> str:
        return "ok" if self.success else self.error.kind

    def to_reply(self) -> Dict[str, Any]:
        """Reply entry in i3 RUN_COMMAND format."""
        if self.success:
            return {"success": True}
        return {"success": False, "error": str(self.error)}


class SwallowController:
    """Runs swallow commands against a host.

    This component subscribes to swallow command events and keeps a snapshot
    of the host's layout. It publishes LAYOUT_SNAPSHOT, LAYOUT_SWALLOWED and
    SWALLOW_FAILED events.

    Responsibilities:
    - CMD_SNAPSHOT: Rebuild the layout tree from the host
    - CMD_SWALLOW: Swallow in a direction and commit the result to the host
    - Refuse to act on a snapshot the host no longer matches
    """

    def __init__(self, bus, host: WindowHost, config: Optional[SwallowConfig] = None):
        """Initialize swallow controller.

        Args:
            bus: Event bus instance (Pypubsub)
            host: Host to read windows from and commit layouts to
            config: Swallow configuration
        """
        self.bus = bus
        self.host = host
        self.config = config or SwallowConfig()
        self.executor = SwallowExecutor(
            partial_policy=self.config.partial_policy, debug=self.config.debug
        )
        self.tree: Optional[LayoutTree] = None

        if self.config.debug:
            pub.subscribe(debug_event_logger, pub.ALL_TOPICS)

        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to swallow command events."""
        pub.subscribe(self._on_swallow, topics.CMD_SWALLOW)
        pub.subscribe(self._on_snapshot, topics.CMD_SNAPSHOT)

    def _on_swallow(self, direction, aggressive=None):
        """Handle CMD_SWALLOW command."""
        self.swallow(direction, aggressive)

    def _on_snapshot(self):
        """Handle CMD_SNAPSHOT command."""
        self.snapshot()

    def snapshot(self) -> "LayoutTree":
        """Rebuild the layout tree from the host's current windows.

        Raises:
            LayoutError: The host's windows do not form a split layout
        """
        self.tree = build_tree(
            self.host.window_geometry(),
            self.host.frame_area(),
            focus=self.host.focused_window(),
        )
        if self.config.debug:
            print(f"SwallowController: Snapshot of {len(self.tree)} windows")
        pub.sendMessage(topics.LAYOUT_SNAPSHOT, tree=self.tree)
        return self.tree

    def swallow(self, direction, aggressive: Optional[bool] = None) -> SwallowResult:
        """Swallow the neighbor of the host's focused window.

        Args:
            direction: Direction or direction name
            aggressive: Remove the whole neighboring branch (defaults to config)

        Returns:
            SwallowResult; errors are reported in it, never raised

        Raises:
            ValueError: The direction name is invalid
        """
        direction = Direction.parse(direction)
        if aggressive is None:
            aggressive = self.config.aggressive

        try:
            scratch = self._checked_snapshot()
            outcome = self.executor.swallow(scratch, direction, aggressive)
        except SwallowError as error:
            if self.config.debug:
                print(f"SwallowController: swallow {direction.value} failed: {error}")
            pub.sendMessage(topics.SWALLOW_FAILED, error=error)
            return SwallowResult(success=False, error=error)

        self.host.commit_layout(calculate_geometry(scratch), outcome.removed)
        self.tree = scratch
        pub.sendMessage(topics.LAYOUT_SWALLOWED, outcome=outcome)
        return SwallowResult(success=True, outcome=outcome)

    def _checked_snapshot(self) -> "LayoutTree":
        """Scratch copy of the snapshot, after checking it against the host."""
        if self.tree is None:
            raise StaleLayout("No layout snapshot taken yet")

        live = self.host.window_geometry()
        known = self.tree.geometry()
        if set(live) != set(known):
            added = sorted(map(repr, set(live) - set(known)))
            gone = sorted(map(repr, set(known) - set(live)))
            raise StaleLayout(
                f"Host windows changed since the snapshot (added: {added}, removed: {gone})"
            )
        if self.config.check_stale_geometry:
            if self.host.frame_area() != self.tree.frame or live != known:
                raise StaleLayout("Host geometry changed since the snapshot")

        scratch = self.tree.copy()
        focused = self.host.focused_window()
        try:
            scratch.set_focus(focused)
        except LayoutError:
            raise StaleLayout(f"Focused window {focused!r} is not in the snapshot") from None
        return scratch

    def run_command(self, command: str) -> List[Dict[str, Any]]:
        """Execute a swallow command string.

        Args:
            command: Command such as "swallow left" or "swallow up aggressive"

        Returns:
            List with command result
        """
        parts = command.split()
        if not parts or parts[0] != "swallow":
            return [{"success": False, "error": f"Unknown command: {command}"}]
        if len(parts) not in (2, 3) or (
            len(parts) == 3 and parts[2] not in ("aggressive", "--aggressive")
        ):
            return [{"success": False, "error": USAGE}]

        try:
            direction = Direction.parse(parts[1])
        except ValueError as e:
            return [{"success": False, "error": str(e)}]

        aggressive = True if len(parts) == 3 else None
        return [self.swallow(direction, aggressive).to_reply()]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point: swallow windows in an ASCII layout and print it."""
    parser = argparse.ArgumentParser(
        prog="python -m swallow",
        description="Swallow neighboring windows in an ASCII layout.",
    )
    parser.add_argument("layout", help="File holding the layout grid, or - for stdin")
    parser.add_argument(
        "directions",
        nargs="+",
        type=Direction.parse,
        help="Directions to swallow in, in order (up, down, left, right)",
    )
    parser.add_argument(
        "-a", "--aggressive", action="store_true", help="Swallow whole branches"
    )
    parser.add_argument("-f", "--focus", help="Letter of the window to focus")
    parser.add_argument(
        "--tree", action="store_true", help="Also print the final tree as JSON"
    )
    args = parser.parse_args(argv)

    text = sys.stdin.read() if args.layout == "-" else Path(args.layout).read_text()
    try:
        loaded = load_layout(text, focus=args.focus)
    except LayoutError as e:
        print(f"Invalid layout: {e}", file=sys.stderr)
        return 2

    overrides = {"aggressive": True} if args.aggressive else {}
    controller = SwallowController(
        bus=pub,
        host=StaticHost.from_tree(loaded.tree),
        config=SwallowConfig.from_env(**overrides),
    )
    controller.snapshot()

    for direction in args.directions:
        result = controller.swallow(direction)
        if not result.success:
            print(f"swallow {direction.value}: {result.error}", file=sys.stderr)
            return 1

    print(render_layout(controller.tree))
    if args.tree:
        print(json.dumps(controller.tree.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
