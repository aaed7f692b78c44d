"""
Tab Registry

Ordered tab collection: insertion, removal and reordering. All functions
take the current tab tuple and return a new one.
"""

from __future__ import annotations
from typing import Any, Optional, Sequence, Tuple

from .errors import NotFoundError, OutOfRangeError
from .model import ReorderStrategy, Tab

DEFAULT_LABEL_TEMPLATE = "Tab {n}"


def find_tab_index(tabs: Sequence[Tab], tab_id: str) -> int:
    """Index of a tab by id, or -1 if absent."""
    for i, tab in enumerate(tabs):
        if tab.id == tab_id:
            return i
    return -1


def _require_index(tabs: Sequence[Tab], tab_id: str) -> int:
    index = find_tab_index(tabs, tab_id)
    if index == -1:
        raise NotFoundError(f"tab {tab_id} not found")
    return index


def add_tab(
    tabs: Sequence[Tab],
    tab_id: str,
    cluster: str,
    icon: Any = None,
    label: Optional[str] = None,
    label_template: str = DEFAULT_LABEL_TEMPLATE,
) -> Tuple[Tuple[Tab, ...], Tab]:
    """
    Append a new tab.

    Args:
        tabs: Current tabs
        tab_id: Fresh id for the new tab (must not be in use)
        cluster: Opaque context key
        icon: Opaque icon reference (blob, URL or inline node)
        label: Display label; defaults to ``label_template`` with the 1-based
            position of the new tab

    Returns:
        Tuple of (new tabs, created tab)
    """
    assert find_tab_index(tabs, tab_id) == -1, f"tab id {tab_id} already in use"

    tab = Tab(
        id=tab_id,
        label=label or label_template.format(n=len(tabs) + 1),
        cluster=cluster,
        icon=icon,
    )
    return tuple(tabs) + (tab,), tab


def remove_tab(tabs: Sequence[Tab], tab_id: str) -> Tuple[Tab, ...]:
    """Remove a tab. Bound windows are the caller's concern."""
    index = _require_index(tabs, tab_id)
    return tuple(tabs[:index]) + tuple(tabs[index + 1 :])


def reorder_tab(
    tabs: Sequence[Tab], tab_id: str, old_position: int, new_position: int
) -> Tuple[Tab, ...]:
    """
    Move a tab from ``old_position`` to ``new_position``.

    Positions are drop slots in the list before the move, so a forward move
    lands one index earlier once the tab has been taken out.
    """
    count = len(tabs)
    for position in (old_position, new_position):
        if position < 0 or position >= count:
            raise OutOfRangeError(
                f"position {position} outside tab range [0, {count})"
            )

    _require_index(tabs, tab_id)
    if tabs[old_position].id != tab_id:
        raise OutOfRangeError(f"tab {tab_id} is not at position {old_position}")

    reordered = list(tabs)
    tab = reordered.pop(old_position)

    # Removal shifted everything after old_position down by one
    target = new_position - 1 if new_position > old_position else new_position
    reordered.insert(target, tab)
    return tuple(reordered)


def reorder_tabs_by_id(
    tabs: Sequence[Tab], tab_id1: str, tab_id2: str, strategy: ReorderStrategy
) -> Tuple[Tab, ...]:
    """
    Reorder two tabs relative to each other.

    SWAP exchanges their positions. SHIFT takes the first tab out and
    reinserts it at the second tab's original index.
    """
    index1 = _require_index(tabs, tab_id1)
    index2 = _require_index(tabs, tab_id2)

    reordered = list(tabs)
    if strategy == ReorderStrategy.SWAP:
        reordered[index1], reordered[index2] = reordered[index2], reordered[index1]
    elif strategy == ReorderStrategy.SHIFT:
        tab = reordered.pop(index1)
        reordered.insert(index2, tab)
    else:
        raise OutOfRangeError(f"unsupported reorder strategy: {strategy}")
    return tuple(reordered)
