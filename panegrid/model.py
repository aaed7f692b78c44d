"""
Container State Model

Immutable value types for tabs, windows and the shared grid layout.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class Redistribution(Enum):
    """Strategy for reallocating pixel space across tracks."""

    EVEN = "even"
    PRIORITY = "priority"


class PriorityAnchor(Enum):
    """Named track designations for priority redistribution."""

    FIRST = "first"
    LAST = "last"


class ReorderStrategy(Enum):
    """How two tabs are reordered relative to each other."""

    SWAP = "swap"
    SHIFT = "shift"


class IdType(Enum):
    """Which identifier a window removal target refers to."""

    TAB = "tab"
    WINDOW = "window"


# Either a named anchor or explicit 0-based track indices
Priorities = Union[PriorityAnchor, Tuple[int, ...]]


@dataclass(frozen=True)
class Tab:
    """A logical content context, visible or not."""

    id: str
    label: str
    cluster: str
    icon: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "cluster": self.cluster,
            "icon": self.icon if isinstance(self.icon, (str, type(None))) else repr(self.icon),
        }


@dataclass(frozen=True)
class GridPosition:
    """
    Cell span of a window in the shared grid.

    Values are 1-based grid lines, end-exclusive: a window with
    ``column_start=2, column_end=3`` occupies exactly the second column track.
    """

    row_start: int
    row_end: int
    column_start: int
    column_end: int

    def shift_rows(self, delta: int) -> GridPosition:
        """Move the span up or down by ``delta`` row tracks."""
        return replace(
            self, row_start=self.row_start + delta, row_end=self.row_end + delta
        )

    def shift_columns(self, delta: int) -> GridPosition:
        """Move the span left or right by ``delta`` column tracks."""
        return replace(
            self,
            column_start=self.column_start + delta,
            column_end=self.column_end + delta,
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "rowStart": self.row_start,
            "rowEnd": self.row_end,
            "columnStart": self.column_start,
            "columnEnd": self.column_end,
        }


@dataclass(frozen=True)
class Window:
    """A visible pane bound to exactly one tab."""

    id: str
    tab_id: str
    position: GridPosition

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "tabId": self.tab_id,
            "position": self.position.to_dict(),
        }


@dataclass(frozen=True)
class Layout:
    """Row and column track sizes in pixels, shared by all windows."""

    rows: Tuple[int, ...]
    columns: Tuple[int, ...]

    @property
    def width(self) -> int:
        return sum(self.columns)

    @property
    def height(self) -> int:
        return sum(self.rows)

    def to_dict(self) -> Dict[str, List[int]]:
        return {"rows": list(self.rows), "columns": list(self.columns)}


@dataclass(frozen=True)
class ContainerState:
    """Aggregate root: every command maps one ContainerState to the next."""

    tabs: Tuple[Tab, ...] = ()
    windows: Tuple[Window, ...] = ()
    layout: Layout = field(default_factory=lambda: Layout(rows=(1,), columns=(1,)))

    @classmethod
    def initial(cls, width: int, height: int) -> ContainerState:
        """Empty state with one row and one column filling the viewport."""
        return cls(layout=Layout(rows=(height,), columns=(width,)))

    def get_tab(self, tab_id: str) -> Optional[Tab]:
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        return None

    def get_window(self, window_id: str) -> Optional[Window]:
        for window in self.windows:
            if window.id == window_id:
                return window
        return None

    def window_for_tab(self, tab_id: str) -> Optional[Window]:
        """Get the window currently showing a tab, if any."""
        for window in self.windows:
            if window.tab_id == tab_id:
                return window
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot for renderers and JSON output."""
        return {
            "tabs": [tab.to_dict() for tab in self.tabs],
            "windows": [window.to_dict() for window in self.windows],
            "layout": self.layout.to_dict(),
        }
