"""
Replay a recorded sequence of actions into a store.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
