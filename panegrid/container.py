"""
Container State Machine

The public surface of the layout engine. Holds the current ContainerState
and turns UI commands into new states.
"""

from __future__ import annotations
import logging
import uuid
from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from pubsub import pub

from . import topics
from . import grid
from .assignment import assign_tab_to_window, find_window_index_for_tab
from .commands import parse_command
from .config import ContainerConfig
from .errors import LayoutError
from .invariants import find_violations
from .model import (
    ContainerState,
    IdType,
    Priorities,
    Redistribution,
    ReorderStrategy,
)
from .tabs import add_tab, remove_tab, reorder_tab, reorder_tabs_by_id

logger = logging.getLogger(__name__)


class ContainerStateMachine:
    """
    Owns the tab/window/grid state of one container.

    Every operation builds a new immutable ContainerState from the current
    one. A rejected operation logs a warning, publishes COMMAND_REJECTED and
    leaves the state untouched; an accepted one publishes STATE_CHANGED.

    With ``subscribe=True`` the machine also listens on the CMD_* topics, so
    a UI can drive it purely through the event bus.
    """

    def __init__(
        self,
        config: Optional[ContainerConfig] = None,
        state: Optional[ContainerState] = None,
        id_factory: Optional[Callable[[], str]] = None,
        subscribe: bool = False,
    ):
        """Initialize the state machine.

        Args:
            config: Engine configuration (defaults to ContainerConfig())
            state: Starting state; an empty grid filling the configured
                viewport if omitted
            id_factory: Generates tab and window ids
            subscribe: Listen for command events on the bus
        """
        self.config = config or ContainerConfig()
        self.state = state or ContainerState.initial(
            self.config.width, self.config.height
        )
        self.last_error: Optional[LayoutError] = None
        self._new_id = id_factory or (lambda: uuid.uuid4().hex)

        if self.config.debug_events:
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        if subscribe:
            self._setup_subscriptions()

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        logger.debug("EVENT: %s | %s", topic.getName(), data_str)

    def _setup_subscriptions(self):
        """Subscribe to the command events the container handles."""
        pub.subscribe(self._on_add_tab, topics.CMD_ADD_TAB)
        pub.subscribe(self._on_remove_tab, topics.CMD_REMOVE_TAB)
        pub.subscribe(self._on_reorder_tab, topics.CMD_REORDER_TAB)
        pub.subscribe(self._on_reorder_tabs_by_id, topics.CMD_REORDER_TABS_BY_ID)
        pub.subscribe(self._on_resize_columns, topics.CMD_RESIZE_COLUMNS)
        pub.subscribe(self._on_resize_rows, topics.CMD_RESIZE_ROWS)
        pub.subscribe(self._on_add_window, topics.CMD_ADD_WINDOW)
        pub.subscribe(self._on_remove_window, topics.CMD_REMOVE_WINDOW)
        pub.subscribe(self._on_assign_tab_to_window, topics.CMD_ASSIGN_TAB_TO_WINDOW)
        pub.subscribe(self._on_browser_resize, topics.CMD_BROWSER_RESIZE)

    def _fresh_id(self, taken: Iterable[str]) -> str:
        taken = set(taken)
        while True:
            new_id = self._new_id()
            if new_id not in taken:
                return new_id

    def _apply(
        self, command: str, mutate: Callable[[ContainerState], ContainerState]
    ) -> ContainerState:
        """Run one command against the current state, all or nothing."""
        try:
            new_state = mutate(self.state)
        except LayoutError as e:
            return self._reject(command, e)

        if __debug__:
            violations = find_violations(new_state)
            assert not violations, f"{command} corrupted the state: {violations}"

        self.last_error = None
        if new_state == self.state:
            logger.debug("%s left the state unchanged", command)
            return self.state

        self.state = new_state
        logger.debug(
            "%s: %d tabs, %d windows, %dx%d tracks",
            command,
            len(new_state.tabs),
            len(new_state.windows),
            len(new_state.layout.rows),
            len(new_state.layout.columns),
        )
        pub.sendMessage(topics.STATE_CHANGED, state=new_state, command=command)
        return new_state

    def _reject(self, command: str, error: LayoutError) -> ContainerState:
        self.last_error = error
        logger.warning("%s rejected (%s): %s", command, error.kind, error)
        pub.sendMessage(topics.COMMAND_REJECTED, command=command, error=error)
        return self.state

    # Tab operations

    def add_tab(
        self, cluster: str, icon: Any = None, label: Optional[str] = None
    ) -> ContainerState:
        """Open a tab at the end of the tab list. The new tab is ``state.tabs[-1]``."""

        def mutate(state):
            tab_id = self._fresh_id(tab.id for tab in state.tabs)
            tabs, _ = add_tab(
                state.tabs, tab_id, cluster, icon, label, self.config.label_template
            )
            return replace(state, tabs=tabs)

        return self._apply("add_tab", mutate)

    def remove_tab(self, tab_id: str) -> ContainerState:
        """Close a tab, together with the window showing it."""

        def mutate(state):
            tabs = remove_tab(state.tabs, tab_id)
            if find_window_index_for_tab(state.windows, tab_id) != -1:
                state = grid.remove_window(
                    state, tab_id, IdType.TAB, min_size=self.config.min_track_size
                )
            return replace(state, tabs=tabs)

        return self._apply("remove_tab", mutate)

    def reorder_tab(
        self, tab_id: str, old_position: int, new_position: int
    ) -> ContainerState:
        """Move a tab between 0-based positions of the tab list."""
        return self._apply(
            "reorder_tab",
            lambda state: replace(
                state,
                tabs=reorder_tab(state.tabs, tab_id, old_position, new_position),
            ),
        )

    def reorder_tabs_by_id(
        self, tab_id1: str, tab_id2: str, strategy: ReorderStrategy
    ) -> ContainerState:
        """Swap two tabs, or shift the first to the second's position."""
        return self._apply(
            "reorder_tabs_by_id",
            lambda state: replace(
                state,
                tabs=reorder_tabs_by_id(state.tabs, tab_id1, tab_id2, strategy),
            ),
        )

    # Track operations

    def resize_columns(self, sizes: Sequence[int]) -> ContainerState:
        """Commit new column sizes, e.g. at the end of a drag."""
        return self._apply(
            "resize_columns",
            lambda state: replace(
                state, layout=grid.resize_columns(state.layout, sizes)
            ),
        )

    def resize_rows(self, sizes: Sequence[int]) -> ContainerState:
        """Commit new row sizes."""
        return self._apply(
            "resize_rows",
            lambda state: replace(state, layout=grid.resize_rows(state.layout, sizes)),
        )

    def handle_browser_resize(self, width: int, height: int) -> ContainerState:
        """Fit the tracks to a resized viewport without moving any window."""
        return self._apply(
            "handle_browser_resize",
            lambda state: replace(
                state, layout=grid.fit_to_viewport(state.layout, width, height)
            ),
        )

    # Window operations

    def add_window(
        self,
        tab_id: str,
        row: int,
        redistribution: Redistribution = Redistribution.EVEN,
        priorities: Optional[Priorities] = None,
    ) -> ContainerState:
        """Show a tab in a new window. The new window is ``state.windows[-1]``."""

        def mutate(state):
            window_id = self._fresh_id(window.id for window in state.windows)
            new_state, _ = grid.add_window(
                state,
                window_id,
                tab_id,
                row,
                redistribution,
                priorities,
                self.config.min_track_size,
            )
            return new_state

        return self._apply("add_window", mutate)

    def remove_window(
        self,
        target: str,
        id_type: IdType = IdType.WINDOW,
        redistribution: Redistribution = Redistribution.EVEN,
        priorities: Optional[Priorities] = None,
    ) -> ContainerState:
        """Close a window, addressed by window id or by the id of its tab."""
        return self._apply(
            "remove_window",
            lambda state: grid.remove_window(
                state,
                target,
                id_type,
                redistribution,
                priorities,
                self.config.min_track_size,
            ),
        )

    def assign_tab_to_window(self, tab_id: str, window_id: str) -> ContainerState:
        """Show a tab in an existing window, swapping if it is shown elsewhere."""
        return self._apply(
            "assign_tab_to_window",
            lambda state: replace(
                state,
                windows=assign_tab_to_window(
                    state.tabs, state.windows, tab_id, window_id
                ),
            ),
        )

    # Command dispatch

    def execute(self, command: Mapping[str, Any]) -> ContainerState:
        """
        Run a command given as a dict, e.g. one decoded from JSON.

        Example:
            machine.execute({"command": "add_window", "tab_id": "a", "row": 1})
        """
        name = str(command.get("command", "")) if isinstance(command, Mapping) else ""
        try:
            method, kwargs = parse_command(command)
        except LayoutError as e:
            return self._reject(name or "<unknown>", e)
        return getattr(self, method)(**kwargs)

    # Command event handlers
    def _on_add_tab(self, cluster, icon=None, label=None):
        """Handle CMD_ADD_TAB command."""
        self.execute(
            {"command": "add_tab", "cluster": cluster, "icon": icon, "label": label}
        )

    def _on_remove_tab(self, tab_id):
        """Handle CMD_REMOVE_TAB command."""
        self.execute({"command": "remove_tab", "tab_id": tab_id})

    def _on_reorder_tab(self, tab_id, old_position, new_position):
        """Handle CMD_REORDER_TAB command."""
        self.execute(
            {
                "command": "reorder_tab",
                "tab_id": tab_id,
                "old_position": old_position,
                "new_position": new_position,
            }
        )

    def _on_reorder_tabs_by_id(self, tab_id1, tab_id2, strategy):
        """Handle CMD_REORDER_TABS_BY_ID command."""
        self.execute(
            {
                "command": "reorder_tabs_by_id",
                "tab_id1": tab_id1,
                "tab_id2": tab_id2,
                "strategy": strategy,
            }
        )

    def _on_resize_columns(self, sizes):
        """Handle CMD_RESIZE_COLUMNS command."""
        self.execute({"command": "resize_columns", "sizes": sizes})

    def _on_resize_rows(self, sizes):
        """Handle CMD_RESIZE_ROWS command."""
        self.execute({"command": "resize_rows", "sizes": sizes})

    def _on_add_window(self, tab_id, row, redistribution="even", priorities=None):
        """Handle CMD_ADD_WINDOW command."""
        self.execute(
            {
                "command": "add_window",
                "tab_id": tab_id,
                "row": row,
                "redistribution": redistribution,
                "priorities": priorities,
            }
        )

    def _on_remove_window(
        self, target, id_type="window", redistribution="even", priorities=None
    ):
        """Handle CMD_REMOVE_WINDOW command."""
        self.execute(
            {
                "command": "remove_window",
                "target": target,
                "id_type": id_type,
                "redistribution": redistribution,
                "priorities": priorities,
            }
        )

    def _on_assign_tab_to_window(self, tab_id, window_id):
        """Handle CMD_ASSIGN_TAB_TO_WINDOW command."""
        self.execute(
            {"command": "assign_tab_to_window", "tab_id": tab_id, "window_id": window_id}
        )

    def _on_browser_resize(self, width, height):
        """Handle CMD_BROWSER_RESIZE command."""
        self.execute({"command": "handle_browser_resize", "width": width, "height": height})
