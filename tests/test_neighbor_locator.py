"""
Unit tests for neighbor location and disambiguation.
"""

import pytest
from swallow.geometry import Direction
from swallow.layouts import PartialPolicy, available_directions, locate, resolve


def _locate_from_focus(loaded, direction):
    tree = loaded.tree
    return locate(tree, tree.focused_window.node_id, direction)


@pytest.mark.unit
class TestLocate:
    """Test finding the subtree next to a window."""

    def test_neighbor_split(self, layout):
        """From a left column, the neighbor to the right is the whole stack."""
        loaded = layout(
            """
            AB
            AC
            """
        )

        located = _locate_from_focus(loaded, "right")

        assert located.ancestor == loaded.tree.root
        assert located.adjacent == loaded.window("B").parent
        assert located.branch == loaded.window("A").node_id
        assert located.index == 0
        assert located.direction is Direction.RIGHT

    def test_frame_edge(self, layout):
        loaded = layout(
            """
            AB
            AC
            """
        )

        assert _locate_from_focus(loaded, "left") is None
        assert _locate_from_focus(loaded, "up") is None
        assert _locate_from_focus(loaded, "down") is None

    def test_nearest_ancestor_wins(self, layout):
        """The vertical split holding A and C is nearer than the root."""
        loaded = layout(
            """
            AB
            CD
            """
        )

        down = _locate_from_focus(loaded, "down")
        right = _locate_from_focus(loaded, "right")

        assert down.adjacent == loaded.window("C").node_id
        assert down.ancestor == loaded.window("A").parent
        assert right.adjacent == loaded.window("B").parent
        assert right.branch == loaded.window("A").parent

    def test_walks_past_perpendicular_splits(self, layout):
        """C looks left through its vertical split to the root."""
        loaded = layout(
            """
            AB
            AC*
            """
        )

        located = _locate_from_focus(loaded, Direction.LEFT)

        assert located.adjacent == loaded.window("A").node_id
        assert located.branch == loaded.window("C").parent
        assert located.index == 1

    def test_available_directions(self, layout):
        loaded = layout(
            """
            AB
            AC*
            """
        )

        found = available_directions(loaded.tree)

        assert set(found) == {Direction.UP, Direction.LEFT}
        assert found[Direction.UP].adjacent == loaded.window("B").node_id


@pytest.mark.unit
class TestResolve:
    """Test choosing what a swallow removes."""

    def test_default_removes_facing_window(self, layout):
        loaded = layout(
            """
            AB
            AC
            """
        )
        located = _locate_from_focus(loaded, "right")

        resolution = resolve(loaded.tree, located, loaded.area("A"))

        assert resolution.remove == loaded.window("B").node_id
        assert resolution.heir == loaded.window("C").node_id
        assert resolution.keep == loaded.window("C").node_id
        assert resolution.ambiguous is False

    def test_aggressive_removes_whole_neighbor(self, layout):
        loaded = layout(
            """
            AB
            AC
            """
        )
        located = _locate_from_focus(loaded, "right")

        resolution = resolve(loaded.tree, located, loaded.area("A"), aggressive=True)

        assert resolution.remove == located.adjacent
        assert resolution.heir == loaded.window("A").node_id
        assert resolution.keep is None

    def test_last_child_inherits_from_previous(self, layout):
        """When the removed window is last in its split, the previous sibling grows."""
        loaded = layout(
            """
            BCA
            DDA
            """,
            focus="A",
        )
        located = _locate_from_focus(loaded, "left")

        resolution = resolve(loaded.tree, located, loaded.area("A"))

        assert resolution.remove == loaded.window("C").node_id
        assert resolution.heir == loaded.window("B").node_id

    def test_in_line_split_uses_nearest_child(self, layout):
        """Inside a split along the swallow axis only the nearest child faces the focus."""
        loaded = layout(
            """
            ABC
            ADD
            """
        )
        located = _locate_from_focus(loaded, "right")

        resolution = resolve(loaded.tree, located, loaded.area("A"))

        assert resolution.remove == loaded.window("B").node_id
        assert resolution.heir == loaded.window("C").node_id

    def test_partial_neighbor(self, layout):
        """Neither B nor C spans or fits within A's edge."""
        loaded = layout(
            """
            XB
            A*B
            AC
            YC
            """
        )
        located = _locate_from_focus(loaded, "right")
        focus_area = loaded.area("A")

        whole = resolve(loaded.tree, located, focus_area)
        leading = resolve(
            loaded.tree, located, focus_area, partial_policy=PartialPolicy.LEADING
        )

        assert whole.remove == located.adjacent
        assert whole.ambiguous is True
        assert leading.remove == loaded.window("B").node_id
        assert leading.heir == loaded.window("C").node_id
        assert leading.ambiguous is True


@pytest.mark.unit
class TestPartialPolicy:
    """Test partial policy parsing."""

    def test_parse(self):
        assert PartialPolicy.parse("LEADING") is PartialPolicy.LEADING
        assert PartialPolicy.parse(PartialPolicy.AGGRESSIVE) is PartialPolicy.AGGRESSIVE

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            PartialPolicy.parse("random")
