"""
Shared pytest fixtures for panegrid tests.
"""

import itertools

import pytest
from pubsub import pub

from panegrid.config import ContainerConfig
from panegrid.container import ContainerStateMachine
from panegrid.model import ContainerState, GridPosition, Layout, Tab, Window


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O")


@pytest.fixture(autouse=True)
def clean_bus():
    """Drop every pub/sub listener a test registered."""
    yield
    pub.unsubAll()


@pytest.fixture
def id_factory():
    """Deterministic ids: id1, id2, ..."""
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


@pytest.fixture
def machine(id_factory):
    """State machine over a 1200x1000 viewport."""
    return ContainerStateMachine(
        ContainerConfig(width=1200, height=1000), id_factory=id_factory
    )


@pytest.fixture
def make_tabs():
    """Factory fixture for tabs with ids equal to their labels."""

    def make(*ids):
        return tuple(Tab(id=tab_id, label=tab_id, cluster="test") for tab_id in ids)

    return make


@pytest.fixture
def make_window():
    """Factory fixture for windows: make_window(id, tab_id, rows, columns)."""

    def make(window_id, tab_id, rows, columns):
        return Window(
            id=window_id,
            tab_id=tab_id,
            position=GridPosition(
                row_start=rows[0],
                row_end=rows[1],
                column_start=columns[0],
                column_end=columns[1],
            ),
        )

    return make


@pytest.fixture
def make_state():
    """Factory fixture for states from tabs, windows and track sizes."""

    def make(tabs=(), windows=(), rows=(1000,), columns=(1200,)):
        return ContainerState(
            tabs=tuple(tabs),
            windows=tuple(windows),
            layout=Layout(rows=tuple(rows), columns=tuple(columns)),
        )

    return make
