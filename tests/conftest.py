"""
Shared pytest fixtures for swallow tests.
"""

import textwrap

import pytest
from pubsub import pub

from swallow import topics
from swallow.geometry import Area
from swallow.host import StaticHost
from swallow.layouts import load_layout


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a real host")


@pytest.fixture
def layout():
    """Factory fixture loading ASCII layouts into a LoadedLayout context.

    Each context holds the tree and the letter -> window registry for one
    test and is released when the test ends.
    """
    contexts = []

    def factory(text, **kwargs):
        context = load_layout(textwrap.dedent(text).strip("\n"), **kwargs)
        contexts.append(context)
        return context

    yield factory
    for context in contexts:
        context.names.clear()
    contexts.clear()


@pytest.fixture
def bus():
    """Event bus, cleaned of listeners and swallow topics after the test."""
    yield pub
    pub.unsubAll()
    manager = pub.getDefaultTopicMgr()
    roots = {value.split(".")[0] for key, value in vars(topics).items() if key.isupper()}
    for name in roots:
        if manager.getTopic(name, okIfNone=True) is not None:
            manager.delTopic(name)


@pytest.fixture
def host_for():
    """Factory fixture for a StaticHost mirroring a loaded layout."""

    def factory(loaded):
        return StaticHost.from_tree(loaded.tree)

    return factory


@pytest.fixture
def standard_area():
    """Standard 1920x1080 area for layout tests."""
    return Area(0, 0, 1920, 1080)


@pytest.fixture
def small_area():
    """Small 800x600 area for layout tests."""
    return Area(0, 0, 800, 600)
