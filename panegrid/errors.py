"""
Layout Errors

Failures raised by the layout components. The container state machine
catches every LayoutError, logs it and keeps the previous state.
"""


class LayoutError(Exception):
    """Base class for rejected layout commands."""

    kind = "LayoutError"


class NotFoundError(LayoutError):
    """A referenced tab or window id does not exist."""

    kind = "NotFound"


class OutOfRangeError(LayoutError):
    """An index lies outside the valid range."""

    kind = "OutOfRange"


class LengthMismatchError(LayoutError):
    """A size list does not match the current track count."""

    kind = "LengthMismatch"


class InvalidSizeError(LayoutError):
    """A track size or total is not positive or too small to split."""

    kind = "InvalidSize"


class AlreadyBoundError(LayoutError):
    """The tab already has a window."""

    kind = "AlreadyBound"


class UnknownCommandError(LayoutError):
    """A command dict names no known operation or has malformed arguments."""

    kind = "UnknownCommand"
