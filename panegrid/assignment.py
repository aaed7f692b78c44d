"""
Window Assignment

Binds tabs to windows. A window always shows exactly one tab and a tab is
shown by at most one window.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Sequence, Tuple

from .errors import NotFoundError
from .model import Tab, Window
from .tabs import find_tab_index


def find_window_index(windows: Sequence[Window], window_id: str) -> int:
    """Index of a window by id, or -1 if absent."""
    for i, window in enumerate(windows):
        if window.id == window_id:
            return i
    return -1


def find_window_index_for_tab(windows: Sequence[Window], tab_id: str) -> int:
    """Index of the window bound to a tab, or -1 if the tab has none."""
    for i, window in enumerate(windows):
        if window.tab_id == tab_id:
            return i
    return -1


def assign_tab_to_window(
    tabs: Sequence[Tab], windows: Sequence[Window], tab_id: str, window_id: str
) -> Tuple[Window, ...]:
    """
    Show ``tab_id`` in ``window_id``.

    If the tab is already shown by another window, that window takes over
    the tab the target window was showing, so no window is left without a
    tab.

    Returns:
        New windows tuple (the input unchanged if already assigned)
    """
    target = find_window_index(windows, window_id)
    if target == -1:
        raise NotFoundError(f"window {window_id} not found")
    if find_tab_index(tabs, tab_id) == -1:
        raise NotFoundError(f"tab {tab_id} not found")

    if windows[target].tab_id == tab_id:
        return tuple(windows)

    updated = list(windows)
    current = find_window_index_for_tab(windows, tab_id)
    if current != -1:
        # Swap bindings with the window currently showing the tab
        updated[current] = replace(windows[current], tab_id=windows[target].tab_id)
    updated[target] = replace(windows[target], tab_id=tab_id)
    return tuple(updated)
