"""
Unit tests for tab/window binding.
"""

import pytest
from panegrid.assignment import (
    assign_tab_to_window,
    find_window_index,
    find_window_index_for_tab,
)
from panegrid.errors import NotFoundError


@pytest.fixture
def bound(make_tabs, make_window):
    """Tabs a, b, c; window w1 shows a, window w2 shows b."""
    tabs = make_tabs("a", "b", "c")
    windows = (
        make_window("w1", "a", (1, 2), (1, 2)),
        make_window("w2", "b", (1, 2), (2, 3)),
    )
    return tabs, windows


def bindings(windows):
    return {window.id: window.tab_id for window in windows}


@pytest.mark.unit
class TestAssignTabToWindow:
    """Test assignment and swap-on-conflict."""

    def test_assign_unbound_tab(self, bound):
        tabs, windows = bound
        result = assign_tab_to_window(tabs, windows, "c", "w1")

        assert bindings(result) == {"w1": "c", "w2": "b"}

    def test_assign_bound_tab_swaps(self, bound):
        """The window losing the tab takes over the target window's tab."""
        tabs, windows = bound
        result = assign_tab_to_window(tabs, windows, "b", "w1")

        assert bindings(result) == {"w1": "b", "w2": "a"}

    def test_positions_untouched(self, bound):
        tabs, windows = bound
        result = assign_tab_to_window(tabs, windows, "b", "w1")

        assert [w.position for w in result] == [w.position for w in windows]

    def test_already_assigned_is_noop(self, bound):
        tabs, windows = bound
        assert assign_tab_to_window(tabs, windows, "a", "w1") == windows

    def test_idempotent(self, bound):
        tabs, windows = bound
        once = assign_tab_to_window(tabs, windows, "b", "w1")
        twice = assign_tab_to_window(tabs, once, "b", "w1")

        assert once == twice

    def test_missing_window(self, bound):
        tabs, windows = bound
        with pytest.raises(NotFoundError):
            assign_tab_to_window(tabs, windows, "c", "w9")

    def test_missing_tab(self, bound):
        tabs, windows = bound
        with pytest.raises(NotFoundError):
            assign_tab_to_window(tabs, windows, "zzz", "w1")


@pytest.mark.unit
def test_window_lookups(bound):
    _, windows = bound
    assert find_window_index(windows, "w2") == 1
    assert find_window_index(windows, "w9") == -1
    assert find_window_index_for_tab(windows, "a") == 0
    assert find_window_index_for_tab(windows, "c") == -1
