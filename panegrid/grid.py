"""
Grid Track Editor

Adds and removes row/column tracks, keeps window spans consistent with the
track lists and hands freed or claimed space to the track allocator.

Track numbers are 1-based. Window spans use end-exclusive grid lines, so
the last line of an axis with ``n`` tracks is ``n + 1``.
"""

from __future__ import annotations
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .assignment import find_window_index, find_window_index_for_tab
from .errors import (
    AlreadyBoundError,
    InvalidSizeError,
    LengthMismatchError,
    NotFoundError,
    OutOfRangeError,
)
from .model import (
    ContainerState,
    GridPosition,
    IdType,
    Layout,
    Priorities,
    Redistribution,
    Window,
)
from .tabs import find_tab_index
from .tracks import MIN_TRACK_SIZE, distribute_evenly, redistribute


def mean_track_size(tracks: Sequence[int]) -> int:
    """Floor of the mean track size."""
    return sum(tracks) // len(tracks)


def add_column(
    columns: Sequence[int],
    windows: Sequence[Window],
    new_width: int,
    track: int,
    redistribution: Redistribution = Redistribution.EVEN,
    priorities: Optional[Priorities] = None,
    min_size: int = MIN_TRACK_SIZE,
) -> Tuple[Tuple[int, ...], Tuple[Window, ...]]:
    """
    Insert a column so it becomes column ``track``, keeping the total width.

    Windows at or right of the insertion point move one column right; windows
    spanning across it grow by one column.
    """
    if track < 1 or track > len(columns) + 1:
        raise OutOfRangeError(
            f"column {track} outside insertion range [1, {len(columns) + 1}]"
        )

    total_width = sum(columns)
    widened = list(columns)
    widened.insert(track - 1, new_width)

    # The new column's space is carved out of the existing total
    resized = redistribute(widened, total_width, redistribution, priorities, min_size)

    moved = []
    for window in windows:
        pos = window.position
        if pos.column_start >= track:
            pos = pos.shift_columns(1)
        elif pos.column_end > track:
            pos = replace(pos, column_end=pos.column_end + 1)
        moved.append(replace(window, position=pos) if pos != window.position else window)

    return tuple(resized), tuple(moved)


def add_row(
    rows: Sequence[int],
    windows: Sequence[Window],
    new_height: int,
    track: int,
    redistribution: Redistribution = Redistribution.EVEN,
    priorities: Optional[Priorities] = None,
    min_size: int = MIN_TRACK_SIZE,
) -> Tuple[Tuple[int, ...], Tuple[Window, ...]]:
    """Insert a row so it becomes row ``track``, keeping the total height."""
    if track < 1 or track > len(rows) + 1:
        raise OutOfRangeError(
            f"row {track} outside insertion range [1, {len(rows) + 1}]"
        )

    total_height = sum(rows)
    heightened = list(rows)
    heightened.insert(track - 1, new_height)
    resized = redistribute(
        heightened, total_height, redistribution, priorities, min_size
    )

    moved = []
    for window in windows:
        pos = window.position
        if pos.row_start >= track:
            pos = pos.shift_rows(1)
        elif pos.row_end > track:
            pos = replace(pos, row_end=pos.row_end + 1)
        moved.append(replace(window, position=pos) if pos != window.position else window)

    return tuple(resized), tuple(moved)


def remove_row(
    rows: Sequence[int],
    windows: Sequence[Window],
    track: int,
    redistribution: Redistribution = Redistribution.EVEN,
    priorities: Optional[Priorities] = None,
    min_size: int = MIN_TRACK_SIZE,
) -> Tuple[Tuple[int, ...], Tuple[Window, ...]]:
    """
    Delete row ``track`` and give its height back to the remaining rows.

    Windows below the row move up by one. Windows spanning the row lose it
    from their span; windows lying only in the row are moved to the row
    above it (or the new first row).
    """
    if track < 1 or track > len(rows):
        raise OutOfRangeError(f"row {track} outside track range [1, {len(rows)}]")
    if len(rows) == 1:
        raise LengthMismatchError("cannot remove the only row of the grid")

    total_height = sum(rows)
    remaining = list(rows)
    del remaining[track - 1]
    resized = redistribute(
        remaining, total_height, redistribution, priorities, min_size
    )

    moved = []
    for window in windows:
        pos = window.position
        if pos.row_start > track:
            pos = pos.shift_rows(-1)
        elif pos.row_start <= track < pos.row_end:
            if pos.row_end - pos.row_start > 1:
                pos = replace(pos, row_end=pos.row_end - 1)
            else:
                row_start = max(1, track - 1)
                pos = replace(pos, row_start=row_start, row_end=row_start + 1)
        moved.append(replace(window, position=pos) if pos != window.position else window)

    return tuple(resized), tuple(moved)


def remove_column(
    columns: Sequence[int],
    windows: Sequence[Window],
    track: int,
    redistribution: Redistribution = Redistribution.EVEN,
    priorities: Optional[Priorities] = None,
    min_size: int = MIN_TRACK_SIZE,
) -> Tuple[Tuple[int, ...], Tuple[Window, ...]]:
    """
    Delete column ``track`` and give its width back to the remaining columns.

    Windows right of the column move left by one and windows spanning it
    lose it from their span. The column must not be the only column any
    window occupies.
    """
    if track < 1 or track > len(columns):
        raise OutOfRangeError(
            f"column {track} outside track range [1, {len(columns)}]"
        )
    if len(columns) == 1:
        raise LengthMismatchError("cannot remove the only column of the grid")

    total_width = sum(columns)
    remaining = list(columns)
    del remaining[track - 1]
    resized = redistribute(
        remaining, total_width, redistribution, priorities, min_size
    )

    moved = []
    for window in windows:
        pos = window.position
        if pos.column_start > track:
            pos = pos.shift_columns(-1)
        elif pos.column_start <= track < pos.column_end:
            if pos.column_end - pos.column_start == 1:
                raise OutOfRangeError(
                    f"column {track} is the only column of window {window.id}"
                )
            pos = replace(pos, column_end=pos.column_end - 1)
        moved.append(replace(window, position=pos) if pos != window.position else window)

    return tuple(resized), tuple(moved)


def add_window(
    state: ContainerState,
    window_id: str,
    tab_id: str,
    row: int,
    redistribution: Redistribution = Redistribution.EVEN,
    priorities: Optional[Priorities] = None,
    min_size: int = MIN_TRACK_SIZE,
) -> Tuple[ContainerState, Window]:
    """
    Open a window for a tab in a newly appended column.

    The new column starts at the mean column width and the columns are
    redistributed back to the previous total width. A ``row`` past the last
    row track appends a row the same way and places the window there.

    Returns:
        Tuple of (new state, created window)
    """
    if find_tab_index(state.tabs, tab_id) == -1:
        raise NotFoundError(f"tab {tab_id} not found")
    if find_window_index_for_tab(state.windows, tab_id) != -1:
        raise AlreadyBoundError(f"tab {tab_id} is already assigned to a window")
    if row < 1:
        raise OutOfRangeError(f"row {row} must be 1 or greater")
    assert find_window_index(state.windows, window_id) == -1, (
        f"window id {window_id} already in use"
    )

    layout = state.layout
    columns, windows = add_column(
        layout.columns,
        state.windows,
        mean_track_size(layout.columns),
        len(layout.columns) + 1,
        redistribution,
        priorities,
        min_size,
    )

    rows = layout.rows
    if row > len(rows):
        rows, windows = add_row(
            rows,
            windows,
            mean_track_size(rows),
            len(rows) + 1,
            redistribution,
            priorities,
            min_size,
        )
        row = len(rows)

    window = Window(
        id=window_id,
        tab_id=tab_id,
        position=GridPosition(
            row_start=row,
            row_end=row + 1,
            column_start=len(columns),
            column_end=len(columns) + 1,
        ),
    )
    new_state = replace(
        state,
        windows=windows + (window,),
        layout=Layout(rows=tuple(rows), columns=columns),
    )
    return new_state, window


def _occupies_row(window: Window, row: int) -> bool:
    return window.position.row_start <= row < window.position.row_end


def _occupies_column(window: Window, column: int) -> bool:
    return window.position.column_start <= column < window.position.column_end


def remove_window(
    state: ContainerState,
    target: str,
    id_type: IdType = IdType.WINDOW,
    redistribution: Redistribution = Redistribution.EVEN,
    priorities: Optional[Priorities] = None,
    min_size: int = MIN_TRACK_SIZE,
) -> ContainerState:
    """
    Close a window and hand its space to its neighbours.

    A window covering its whole row, or the last window left in its row,
    takes the row with it: the row track is deleted and the remaining rows
    share its height. Otherwise the window directly before it in the row
    widens to cover the freed columns, or the window directly after it when
    there is none before. The only row of the grid is never deleted.

    Columns of the removed span that no remaining window covers afterwards
    are deleted and their width goes back to the other columns.
    """
    if id_type == IdType.WINDOW:
        index = find_window_index(state.windows, target)
    else:
        index = find_window_index_for_tab(state.windows, target)
    if index == -1:
        raise NotFoundError(f"window for {id_type.value} {target} not found")

    removed = state.windows[index].position
    survivors: List[Window] = list(state.windows[:index] + state.windows[index + 1 :])
    rows = state.layout.rows
    row = removed.row_start

    full_span = (
        removed.column_start == 1
        and removed.column_end == len(state.layout.columns) + 1
    )
    shared = any(_occupies_row(window, row) for window in survivors)

    if (full_span or not shared) and len(rows) > 1:
        rows, windows = remove_row(
            rows, survivors, row, redistribution, priorities, min_size
        )
    else:
        _absorb(survivors, removed)
        windows = tuple(survivors)

    # Drop the freed columns no other window still covers, right to left so
    # lower track numbers stay valid
    columns = state.layout.columns
    for track in range(removed.column_end - 1, removed.column_start - 1, -1):
        if len(columns) == 1:
            break
        if not any(_occupies_column(window, track) for window in windows):
            columns, windows = remove_column(
                columns, windows, track, redistribution, priorities, min_size
            )

    return replace(
        state,
        windows=windows,
        layout=Layout(rows=tuple(rows), columns=tuple(columns)),
    )


def _absorb(survivors: List[Window], removed: GridPosition):
    """Widen the same-row neighbour before (or else after) a removed span."""
    row = removed.row_start
    same_row = [
        i for i, window in enumerate(survivors) if window.position.row_start == row
    ]
    before = [
        i for i in same_row
        if survivors[i].position.column_end == removed.column_start
    ]
    after = [
        i for i in same_row
        if survivors[i].position.column_start == removed.column_end
    ]

    if before:
        i = before[0]
        survivors[i] = replace(
            survivors[i],
            position=replace(survivors[i].position, column_end=removed.column_end),
        )
    elif after:
        i = after[0]
        survivors[i] = replace(
            survivors[i],
            position=replace(
                survivors[i].position, column_start=removed.column_start
            ),
        )


def _validate_sizes(current: Sequence[int], sizes: Sequence[int], axis: str):
    if len(sizes) != len(current):
        raise LengthMismatchError(
            f"{axis} sizes must match the {len(current)} {axis} in the layout, "
            f"got {len(sizes)}"
        )
    if any(size <= 0 for size in sizes):
        raise InvalidSizeError(f"{axis} sizes must be positive: {list(sizes)}")


def resize_columns(layout: Layout, sizes: Sequence[int]) -> Layout:
    """Replace the column sizes verbatim, e.g. when a drag-resize commits."""
    _validate_sizes(layout.columns, sizes, "columns")
    return replace(layout, columns=tuple(sizes))


def resize_rows(layout: Layout, sizes: Sequence[int]) -> Layout:
    """Replace the row sizes verbatim."""
    _validate_sizes(layout.rows, sizes, "rows")
    return replace(layout, rows=tuple(sizes))


def fit_to_viewport(layout: Layout, width: int, height: int) -> Layout:
    """Spread the viewport width over the columns and its height over the rows."""
    if width <= 0 or height <= 0:
        raise InvalidSizeError(f"viewport must be positive, got {width}x{height}")
    return Layout(
        rows=tuple(distribute_evenly(len(layout.rows), height)),
        columns=tuple(distribute_evenly(len(layout.columns), width)),
    )
