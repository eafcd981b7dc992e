"""
Stock middleware.

- thunk: dispatch functions that receive (dispatch, get_state)
- logger / create_logger: log actions and resulting state
"""

from .logger import create_logger, logger
from .thunk import thunk, with_extra_argument

__all__ = [
    "create_logger",
    "logger",
    "thunk",
    "with_extra_argument",
]
