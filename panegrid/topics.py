"""
Event Topics for panegrid

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>
"""

# State notifications
STATE_CHANGED = "container.state_changed"
"""Published after a command changed the state. Params: state, command"""

COMMAND_REJECTED = "container.command_rejected"
"""Published when a command was refused. Params: command, error"""

# Command events (imperative - tell the container to do something)
# These are triggered by the UI layer: tab strip, drag handles, viewport

# Tab commands
CMD_ADD_TAB = "cmd.add_tab"
"""Command: Open a tab. Requires cluster; optional icon, label."""

CMD_REMOVE_TAB = "cmd.remove_tab"
"""Command: Close a tab and its window. Requires tab_id."""

CMD_REORDER_TAB = "cmd.reorder_tab"
"""Command: Move a tab. Requires tab_id, old_position, new_position."""

CMD_REORDER_TABS_BY_ID = "cmd.reorder_tabs_by_id"
"""Command: Swap or shift two tabs. Requires tab_id1, tab_id2, strategy."""

# Track commands
CMD_RESIZE_COLUMNS = "cmd.resize_columns"
"""Command: Commit new column sizes. Requires sizes."""

CMD_RESIZE_ROWS = "cmd.resize_rows"
"""Command: Commit new row sizes. Requires sizes."""

# Window commands
CMD_ADD_WINDOW = "cmd.add_window"
"""Command: Open a window for a tab. Requires tab_id, row."""

CMD_REMOVE_WINDOW = "cmd.remove_window"
"""Command: Close a window. Requires target; optional id_type."""

CMD_ASSIGN_TAB_TO_WINDOW = "cmd.assign_tab_to_window"
"""Command: Show a tab in a window. Requires tab_id, window_id."""

# Viewport
CMD_BROWSER_RESIZE = "cmd.browser_resize"
"""Command: The outer viewport changed size. Requires width, height."""
