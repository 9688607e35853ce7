"""
Unit tests for the swallow controller, its configuration and the CLI.
"""

import json

import pytest
from swallow import topics
from swallow.config import SwallowConfig, parse_flag
from swallow.errors import NoNeighborInDirection, StaleLayout
from swallow.geometry import Area
from swallow.host import StaticHost
from swallow.layouts import PartialPolicy
from swallow.swallow_controller import SwallowController, SwallowResult, main


@pytest.fixture
def stack(layout):
    return layout(
        """
        AB
        AC
        """,
        scale=(100, 100),
    )


@pytest.fixture
def controller(bus, stack, host_for):
    controller = SwallowController(bus, host_for(stack), SwallowConfig(debug=False))
    controller.snapshot()
    return controller


@pytest.mark.unit
class TestSwallowController:
    """Test swallowing against a host."""

    def test_snapshot_matches_host(self, controller):
        assert controller.tree.geometry() == controller.host.window_geometry()
        assert controller.tree.focused_window.window_id == "A"

    def test_swallow_commits_to_host(self, controller):
        """The host gets the new geometry and deletes swallowed windows."""
        result = controller.swallow("right")

        assert result.success is True
        assert result.kind == "ok"
        assert result.outcome.removed == ["B"]
        assert controller.host.deleted == ["B"]
        assert controller.host.commits == 1
        assert controller.host.window_geometry() == {
            "A": Area(0, 0, 100, 200),
            "C": Area(100, 0, 100, 200),
        }

    def test_consecutive_swallows(self, controller):
        """The committed layout is the next snapshot."""
        controller.swallow("right")
        result = controller.swallow("right")

        assert result.success is True
        assert controller.host.window_geometry() == {"A": Area(0, 0, 200, 200)}
        assert controller.host.deleted == ["B", "C"]

    def test_error_reported_not_raised(self, controller):
        result = controller.swallow("left")

        assert result.success is False
        assert isinstance(result.error, NoNeighborInDirection)
        assert result.kind == "no_neighbor_in_direction"
        assert controller.host.commits == 0

    def test_invalid_direction_raises(self, controller):
        with pytest.raises(ValueError):
            controller.swallow("diagonal")

    def test_host_focus_followed(self, controller):
        """Focus changes on the host do not make the snapshot stale."""
        controller.host.focused = "C"

        result = controller.swallow("up")

        assert result.success is True
        assert controller.host.deleted == ["B"]

    def test_aggressive_from_config(self, bus, stack, host_for):
        controller = SwallowController(
            bus, host_for(stack), SwallowConfig(aggressive=True, debug=False)
        )
        controller.snapshot()

        result = controller.swallow("right")

        assert sorted(result.outcome.removed) == ["B", "C"]

    def test_argument_overrides_config(self, bus, stack, host_for):
        controller = SwallowController(
            bus, host_for(stack), SwallowConfig(aggressive=True, debug=False)
        )
        controller.snapshot()

        result = controller.swallow("right", aggressive=False)

        assert result.outcome.removed == ["B"]


@pytest.mark.unit
class TestStaleLayout:
    """Test refusing to act on an outdated snapshot."""

    def test_no_snapshot(self, bus, stack, host_for):
        controller = SwallowController(bus, host_for(stack), SwallowConfig(debug=False))

        result = controller.swallow("right")

        assert isinstance(result.error, StaleLayout)

    def test_window_added(self, controller):
        controller.host.windows["D"] = Area(200, 0, 10, 10)

        result = controller.swallow("right")

        assert result.kind == "stale_layout"
        assert "'D'" in str(result.error)
        assert controller.host.commits == 0

    def test_window_removed(self, controller):
        del controller.host.windows["C"]

        result = controller.swallow("right")

        assert result.kind == "stale_layout"

    def test_geometry_changed(self, controller):
        controller.host.windows["B"] = Area(100, 0, 100, 150)
        controller.host.windows["C"] = Area(100, 150, 100, 50)

        result = controller.swallow("right")

        assert result.kind == "stale_layout"

    def test_geometry_check_disabled(self, bus, stack, host_for):
        controller = SwallowController(
            bus,
            host_for(stack),
            SwallowConfig(check_stale_geometry=False, debug=False),
        )
        controller.snapshot()
        controller.host.windows["B"] = Area(100, 0, 100, 150)

        result = controller.swallow("right")

        assert result.success is True

    def test_rebuild_after_stale(self, controller):
        """Taking a fresh snapshot clears the stale state."""
        controller.host.windows["B"] = Area(100, 0, 100, 150)
        controller.host.windows["C"] = Area(100, 150, 100, 50)
        assert controller.swallow("right").kind == "stale_layout"

        controller.snapshot()

        assert controller.swallow("right").success is True


@pytest.mark.unit
class TestControllerEvents:
    """Test events published on the bus."""

    def test_swallowed_event(self, controller, bus):
        received = []

        def on_swallowed(outcome):
            received.append(outcome)

        bus.subscribe(on_swallowed, topics.LAYOUT_SWALLOWED)
        controller.swallow("right")

        assert len(received) == 1
        assert received[0].removed == ["B"]

    def test_failed_event(self, controller, bus):
        received = []

        def on_failed(error):
            received.append(error)

        bus.subscribe(on_failed, topics.SWALLOW_FAILED)
        controller.swallow("up")

        assert len(received) == 1
        assert received[0].kind == "no_neighbor_in_direction"

    def test_snapshot_event(self, controller, bus):
        received = []

        def on_snapshot(tree):
            received.append(tree)

        bus.subscribe(on_snapshot, topics.LAYOUT_SNAPSHOT)
        controller.snapshot()

        assert received == [controller.tree]

    def test_commands_over_bus(self, controller, bus):
        """CMD_SNAPSHOT and CMD_SWALLOW drive the controller."""
        bus.sendMessage(topics.CMD_SNAPSHOT)
        bus.sendMessage(topics.CMD_SWALLOW, direction="right", aggressive=True)

        assert controller.host.window_geometry() == {"A": Area(0, 0, 200, 200)}


@pytest.mark.unit
class TestRunCommand:
    """Test i3-style command replies."""

    def test_success(self, controller):
        assert controller.run_command("swallow right") == [{"success": True}]

    def test_aggressive_keyword(self, controller):
        controller.run_command("swallow r aggressive")

        assert list(controller.host.window_geometry()) == ["A"]

    def test_refused(self, controller):
        reply = controller.run_command("swallow left")

        assert reply == [
            {"success": False, "error": "No window left of the focused window"}
        ]

    @pytest.mark.parametrize(
        "command",
        ["swallow", "swallow left now", "swallow left aggressive extra"],
    )
    def test_usage(self, controller, command):
        reply = controller.run_command(command)

        assert reply[0]["success"] is False
        assert reply[0]["error"].startswith("Usage:")

    def test_bad_direction(self, controller):
        reply = controller.run_command("swallow sideways")

        assert reply[0]["success"] is False
        assert "Invalid direction" in reply[0]["error"]

    def test_unknown_command(self, controller):
        reply = controller.run_command("focus left")

        assert reply == [{"success": False, "error": "Unknown command: focus left"}]

    def test_result_reply(self):
        error = StaleLayout()

        assert SwallowResult(success=False, error=error).to_reply() == {
            "success": False,
            "error": StaleLayout.default_message,
        }


@pytest.mark.unit
class TestStaticHost:
    """Test the in-memory host."""

    def test_defaults_focus_to_first_window(self):
        host = StaticHost(Area(0, 0, 2, 1), {"A": Area(0, 0, 1, 1), "B": Area(1, 0, 1, 1)})

        assert host.focused_window() == "A"
        assert host.frame_area() == Area(0, 0, 2, 1)

    def test_window_geometry_is_a_copy(self, stack, host_for):
        host = host_for(stack)
        host.window_geometry().clear()

        assert len(host.window_geometry()) == 3


@pytest.mark.unit
class TestSwallowConfig:
    """Test configuration parsing."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SWALLOW_DEBUG", raising=False)
        config = SwallowConfig()

        assert config.aggressive is False
        assert config.partial_policy is PartialPolicy.AGGRESSIVE
        assert config.check_stale_geometry is True
        assert config.debug is False

    def test_policy_name_parsed(self):
        assert SwallowConfig(partial_policy="leading").partial_policy is PartialPolicy.LEADING

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            SwallowConfig(partial_policy="sometimes")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SWALLOW_AGGRESSIVE", "yes")
        monkeypatch.setenv("SWALLOW_PARTIAL_POLICY", "LEADING")
        monkeypatch.setenv("SWALLOW_DEBUG", "0")

        config = SwallowConfig.from_env()

        assert config.aggressive is True
        assert config.partial_policy is PartialPolicy.LEADING
        assert config.debug is False

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("SWALLOW_AGGRESSIVE", "1")

        assert SwallowConfig.from_env(aggressive=False).aggressive is False

    @pytest.mark.parametrize(
        "value,expected",
        [("1", True), ("True", True), (" on ", True), ("0", False), ("", False), (None, False)],
    )
    def test_parse_flag(self, value, expected):
        assert parse_flag(value) is expected


@pytest.mark.unit
class TestMain:
    """Test the command line entry point."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch, bus):
        for name in ("SWALLOW_AGGRESSIVE", "SWALLOW_PARTIAL_POLICY", "SWALLOW_DEBUG"):
            monkeypatch.delenv(name, raising=False)

    @pytest.fixture
    def layout_file(self, tmp_path):
        path = tmp_path / "layout.txt"
        path.write_text("AB\nAC\n")
        return str(path)

    def test_swallow(self, layout_file, capsys):
        assert main([layout_file, "right"]) == 0

        assert capsys.readouterr().out == "AC\nAC\n"

    def test_aggressive(self, layout_file, capsys):
        assert main([layout_file, "r", "--aggressive"]) == 0

        assert capsys.readouterr().out == "AA\nAA\n"

    def test_focus_and_several_directions(self, layout_file, capsys):
        assert main([layout_file, "-f", "C", "up", "left"]) == 0

        assert capsys.readouterr().out == "CC\nCC\n"

    def test_tree_output(self, layout_file, capsys):
        assert main([layout_file, "right", "--tree"]) == 0

        lines = capsys.readouterr().out.split("\n", 2)
        assert lines[:2] == ["AC", "AC"]
        assert json.loads(lines[2])["layout"] == "splith"

    def test_refused_swallow(self, layout_file, capsys):
        assert main([layout_file, "left"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "swallow left: No window left of the focused window" in captured.err

    def test_invalid_layout(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text("AB\nBA\n")

        assert main([str(path), "right"]) == 2
        assert "Invalid layout" in capsys.readouterr().err

    def test_invalid_direction(self, layout_file):
        with pytest.raises(SystemExit):
            main([layout_file, "forward"])
