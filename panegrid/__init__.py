"""
panegrid - Pane and Grid Layout Engine

A state machine for tabbed content shown in a tiling grid of windows.

This package provides:
- Immutable tab, window and grid layout value types
- Track redistribution (even and priority strategies)
- Tab ordering, tab/window binding and grid track editing
- A container state machine driven by method calls, command dicts or
  pub/sub command events

Example usage:
    from panegrid import ContainerStateMachine, ContainerConfig

    machine = ContainerStateMachine(ContainerConfig(width=1600, height=900))
    state = machine.add_tab(cluster="prod")
    state = machine.add_window(state.tabs[-1].id, row=1)

Or drive it with JSON lines:
    python -m panegrid
"""

__version__ = "0.1.0"

from .model import (
    Tab,
    GridPosition,
    Window,
    Layout,
    ContainerState,
    Redistribution,
    PriorityAnchor,
    ReorderStrategy,
    IdType,
)

from .errors import (
    LayoutError,
    NotFoundError,
    OutOfRangeError,
    LengthMismatchError,
    InvalidSizeError,
    AlreadyBoundError,
    UnknownCommandError,
)

from .tracks import MIN_TRACK_SIZE, redistribute
from .config import ContainerConfig
from .container import ContainerStateMachine
from .invariants import find_violations

from . import topics

__all__ = [
    # Version
    "__version__",
    # Model
    "Tab",
    "GridPosition",
    "Window",
    "Layout",
    "ContainerState",
    "Redistribution",
    "PriorityAnchor",
    "ReorderStrategy",
    "IdType",
    # Errors
    "LayoutError",
    "NotFoundError",
    "OutOfRangeError",
    "LengthMismatchError",
    "InvalidSizeError",
    "AlreadyBoundError",
    "UnknownCommandError",
    # Tracks
    "MIN_TRACK_SIZE",
    "redistribute",
    # Container
    "ContainerConfig",
    "ContainerStateMachine",
    "find_violations",
    # Event topics
    "topics",
]
