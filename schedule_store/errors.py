"""
Exceptions raised by schedule_store.

A command that points at a semester, course or lecture that does not exist
is NOT an error (it is a no-op). These exceptions only cover callers that
break the command/state contract itself.
"""


class ScheduleStoreError(Exception):
    """Base class for all schedule_store errors."""

    pass


class MalformedCommandError(ScheduleStoreError, ValueError):
    """Raised when a known command tag is missing a required field or has a field of the wrong shape."""

    pass


class UnknownCommandError(ScheduleStoreError, TypeError):
    """Raised when apply() receives something that is neither a command nor a command mapping."""

    pass


class InvalidStateError(ScheduleStoreError, ValueError):
    """Raised when a state mapping cannot be converted into a ScheduleState."""

    pass
