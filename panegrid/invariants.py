"""
State Invariants

Structural checks every reachable ContainerState must pass.
"""

from __future__ import annotations
from typing import List

from .model import ContainerState


def find_violations(state: ContainerState) -> List[str]:
    """
    Check a state for structural corruption.

    Returns:
        Human-readable descriptions of every violated invariant (empty if
        the state is consistent)
    """
    problems = []
    rows = len(state.layout.rows)
    columns = len(state.layout.columns)

    tab_ids = [tab.id for tab in state.tabs]
    if len(set(tab_ids)) != len(tab_ids):
        problems.append(f"duplicate tab ids: {tab_ids}")

    window_ids = [window.id for window in state.windows]
    if len(set(window_ids)) != len(window_ids):
        problems.append(f"duplicate window ids: {window_ids}")

    bound = [window.tab_id for window in state.windows]
    if len(set(bound)) != len(bound):
        problems.append(f"tab shown by more than one window: {bound}")

    if rows < 1 or columns < 1:
        problems.append(f"grid needs at least one row and column, has {rows}x{columns}")

    if any(size <= 0 for size in state.layout.rows + state.layout.columns):
        problems.append(f"non-positive track size in {state.layout}")

    known_tabs = set(tab_ids)
    for window in state.windows:
        if window.tab_id not in known_tabs:
            problems.append(f"window {window.id} shows missing tab {window.tab_id}")

        pos = window.position
        if not 1 <= pos.row_start < pos.row_end <= rows + 1:
            problems.append(f"window {window.id} rows {pos} outside 1..{rows + 1}")
        if not 1 <= pos.column_start < pos.column_end <= columns + 1:
            problems.append(
                f"window {window.id} columns {pos} outside 1..{columns + 1}"
            )

    return problems
