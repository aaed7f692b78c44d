"""
Randomized operation sequences checking the state invariants.
"""

import random

import pytest
from panegrid.config import ContainerConfig
from panegrid.container import ContainerStateMachine
from panegrid.invariants import find_violations
from panegrid.model import (
    IdType,
    PriorityAnchor,
    Redistribution,
    ReorderStrategy,
)


def random_step(machine, rng):
    """Apply one random command, valid or not. Returns the new viewport on resize."""
    state = machine.state
    tab_ids = [tab.id for tab in state.tabs] + ["ghost"]
    window_ids = [window.id for window in state.windows] + ["ghost"]
    redistribution = rng.choice(list(Redistribution))
    priorities = rng.choice([None, PriorityAnchor.FIRST, PriorityAnchor.LAST, (0,)])

    op = rng.randrange(9)
    if op == 0:
        machine.add_tab(rng.choice(["prod", "staging"]))
    elif op == 1:
        machine.remove_tab(rng.choice(tab_ids))
    elif op == 2:
        count = len(state.tabs) + 1
        machine.reorder_tab(
            rng.choice(tab_ids), rng.randrange(count), rng.randrange(count)
        )
    elif op == 3:
        machine.reorder_tabs_by_id(
            rng.choice(tab_ids), rng.choice(tab_ids), rng.choice(list(ReorderStrategy))
        )
    elif op in (4, 5):
        machine.add_window(
            rng.choice(tab_ids),
            rng.randint(1, len(state.layout.rows) + 1),
            redistribution,
            priorities,
        )
    elif op == 6:
        id_type = rng.choice(list(IdType))
        targets = window_ids if id_type == IdType.WINDOW else tab_ids
        machine.remove_window(rng.choice(targets), id_type, redistribution, priorities)
    elif op == 7:
        machine.assign_tab_to_window(rng.choice(tab_ids), rng.choice(window_ids))
    else:
        viewport = (rng.randint(400, 2400), rng.randint(300, 1600))
        machine.handle_browser_resize(*viewport)
        if machine.last_error is None:
            return viewport
    return None


@pytest.mark.unit
@pytest.mark.parametrize("seed", range(12))
def test_random_sequences_keep_invariants(seed):
    """No orphaned windows, no duplicate ids or bindings, totals conserved."""
    rng = random.Random(seed)
    machine = ContainerStateMachine(ContainerConfig(width=2400, height=1600))
    width, height = 2400, 1600

    for _ in range(150):
        viewport = random_step(machine, rng)
        if viewport is not None:
            width, height = viewport
        state = machine.state

        assert find_violations(state) == []

        tab_ids = {tab.id for tab in state.tabs}
        assert all(window.tab_id in tab_ids for window in state.windows)

        assert state.layout.width == width
        assert state.layout.height == height


@pytest.mark.unit
def test_assignment_idempotent_on_random_states():
    rng = random.Random(99)
    machine = ContainerStateMachine()
    for _ in range(40):
        random_step(machine, rng)
    for _ in range(3):
        machine.add_tab("extra")
        machine.add_window(machine.state.tabs[-1].id, 1)

    for tab in machine.state.tabs:
        for window in machine.state.windows:
            once = machine.assign_tab_to_window(tab.id, window.id)
            twice = machine.assign_tab_to_window(tab.id, window.id)
            assert once == twice
