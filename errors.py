# errors.py


class HabitError(Exception):
    """Base class for recoverable habit tracker errors."""


class InvalidArgument(HabitError, ValueError):
    """Bad caller input: empty name, non-positive target, unknown filter."""


class NotFound(HabitError, LookupError):
    """No habit with the given id, or display position out of range."""


class InvalidState(HabitError, RuntimeError):
    """The habit cannot answer the query in its current state."""
