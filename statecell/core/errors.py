"""
Exception types for the state container.
"""


class InvalidRequestError(Exception):
    """Raised when a dispatched action is not a plain record with a valid type."""
    pass


class ReentrantDispatchError(Exception):
    """Raised when the raw store dispatch is entered while a dispatch is in progress."""
    pass


class NotReadyError(Exception):
    """Raised when the store is read or subscribed to while its reducer is executing."""
    pass


class UndefinedStateError(Exception):
    """Raised when a reducer returns None instead of a state."""
    pass


class UndefinedSliceStateError(UndefinedStateError):
    """Raised when a child reducer of combine_reducers() returns None."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class MiddlewareConstructionError(Exception):
    """Raised when middleware dispatches before the middleware chain is built."""
    pass
