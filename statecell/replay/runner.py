"""
Replay runner: feed a sequence of actions through a store.

Replay goes through the store's public dispatch, so middleware applies.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Store state after the last applied action
        applied: Number of actions dispatched
        notifications: Number of listener notifications observed
    """
    state: Any
    applied: int
    notifications: int


def replay(store: Any, actions: Iterable[Any], until: Optional[int] = None) -> ReplayResult:
    """
    Dispatch actions in order.

    Args:
        store: Store (or augmented store) to dispatch into
        actions: Actions to dispatch
        until: Stop after this many actions (None = all)

    Returns:
        ReplayResult with final state and counts
    """
    notifications = 0

    def count() -> None:
        nonlocal notifications
        notifications += 1

    unsubscribe = store.subscribe(count)
    applied = 0
    try:
        for action in actions:
            if until is not None and applied >= until:
                break
            store.dispatch(action)
            applied += 1
    finally:
        unsubscribe()

    return ReplayResult(state=store.get_state(), applied=applied, notifications=notifications)
