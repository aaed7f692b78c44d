"""
Command Parsing

Turns loosely typed command dicts (decoded JSON, bus payloads) into a
ContainerStateMachine method name and typed keyword arguments.

Both the snake_case method names and the camelCase names used by UI layers
are accepted, e.g. ``{"command": "addWindow", "tabId": "a", "row": 1}``.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Tuple, Type

from .errors import UnknownCommandError
from .model import IdType, PriorityAnchor, Redistribution, ReorderStrategy

# camelCase command name -> method name
COMMAND_ALIASES = {
    "addTab": "add_tab",
    "removeTab": "remove_tab",
    "reorderTab": "reorder_tab",
    "reorderTabsByID": "reorder_tabs_by_id",
    "resizeColumns": "resize_columns",
    "resizeRows": "resize_rows",
    "addWindow": "add_window",
    "removeWindow": "remove_window",
    "assignTabToWindow": "assign_tab_to_window",
    "handleBrowserResize": "handle_browser_resize",
}

# camelCase / legacy field name -> keyword argument
FIELD_ALIASES = {
    "tabId": "tab_id",
    "tabId1": "tab_id1",
    "tabId2": "tab_id2",
    "windowId": "window_id",
    "windowID": "window_id",
    "oldIndex": "old_position",
    "newIndex": "new_position",
    "oldPosition": "old_position",
    "newPosition": "new_position",
    "idType": "id_type",
    "id": "target",
}


def _as_str(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise UnknownCommandError(f"{field} must be a string, got {value!r}")
    return value


def _as_int(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnknownCommandError(f"{field} must be an integer, got {value!r}")
    return value


def _as_int_list(field: str, value: Any) -> List[int]:
    if not isinstance(value, (list, tuple)):
        raise UnknownCommandError(f"{field} must be a list of integers, got {value!r}")
    return [_as_int(field, item) for item in value]


def _as_enum(enum_type: Type[Enum]) -> Callable[[str, Any], Enum]:
    def convert(field: str, value: Any) -> Enum:
        try:
            return enum_type(value)
        except ValueError:
            choices = ", ".join(member.value for member in enum_type)
            raise UnknownCommandError(
                f"{field} must be one of {choices}, got {value!r}"
            )

    return convert


def _as_priorities(field: str, value: Any):
    if isinstance(value, (PriorityAnchor, str)):
        return _as_enum(PriorityAnchor)(field, value)
    return tuple(_as_int_list(field, value))


def _as_any(field: str, value: Any) -> Any:
    return value


# method name -> [(keyword, converter, required)]
COMMAND_SCHEMAS: Dict[str, List[Tuple[str, Callable[[str, Any], Any], bool]]] = {
    "add_tab": [
        ("cluster", _as_str, True),
        ("icon", _as_any, False),
        ("label", _as_str, False),
    ],
    "remove_tab": [("tab_id", _as_str, True)],
    "reorder_tab": [
        ("tab_id", _as_str, True),
        ("old_position", _as_int, True),
        ("new_position", _as_int, True),
    ],
    "reorder_tabs_by_id": [
        ("tab_id1", _as_str, True),
        ("tab_id2", _as_str, True),
        ("strategy", _as_enum(ReorderStrategy), True),
    ],
    "resize_columns": [("sizes", _as_int_list, True)],
    "resize_rows": [("sizes", _as_int_list, True)],
    "add_window": [
        ("tab_id", _as_str, True),
        ("row", _as_int, True),
        ("redistribution", _as_enum(Redistribution), False),
        ("priorities", _as_priorities, False),
    ],
    "remove_window": [
        ("target", _as_str, True),
        ("id_type", _as_enum(IdType), False),
        ("redistribution", _as_enum(Redistribution), False),
        ("priorities", _as_priorities, False),
    ],
    "assign_tab_to_window": [
        ("tab_id", _as_str, True),
        ("window_id", _as_str, True),
    ],
    "handle_browser_resize": [
        ("width", _as_int, True),
        ("height", _as_int, True),
    ],
}


def parse_command(data: Mapping[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Validate a command dict.

    Args:
        data: Mapping with a "command" key plus the command's fields.
            Optional fields may be missing or None.

    Returns:
        Tuple of (method name, keyword arguments)

    Raises:
        UnknownCommandError: unknown command, missing/unexpected field or
            badly typed value
    """
    if not isinstance(data, Mapping):
        raise UnknownCommandError(f"command must be an object, got {data!r}")

    name = data.get("command")
    if not isinstance(name, str):
        raise UnknownCommandError(f"command name must be a string, got {name!r}")
    method = COMMAND_ALIASES.get(name, name)
    if method not in COMMAND_SCHEMAS:
        raise UnknownCommandError(f"Unknown command: {name}")

    fields = {}
    for key, value in data.items():
        if key != "command":
            fields[FIELD_ALIASES.get(key, key)] = value

    schema = COMMAND_SCHEMAS[method]
    expected = {keyword for keyword, _, _ in schema}
    unexpected = sorted(set(fields) - expected)
    if unexpected:
        raise UnknownCommandError(
            f"unexpected fields for {method}: {', '.join(unexpected)}"
        )

    kwargs = {}
    for keyword, convert, required in schema:
        value = fields.get(keyword)
        if value is None:
            if required:
                raise UnknownCommandError(f"{method} requires {keyword}")
            continue
        kwargs[keyword] = convert(keyword, value)

    return method, kwargs
