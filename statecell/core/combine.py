"""
combine_reducers: build one root reducer from per-key slice reducers.

Each slice reducer owns one key of a dict-shaped state. A slice that does not
recognize an action must hand back the slice it was given, which is what lets
the root reducer return the very same state object when nothing changed.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Set

from ..config import Settings, load_settings
from .actions import ActionTypes, action_type_of, describe_type
from .errors import UndefinedSliceStateError

logger = logging.getLogger(__name__)

Reducer = Callable[[Any, Any], Any]


def _assert_reducer_shape(reducers: Mapping[str, Reducer]) -> None:
    for key, reducer in reducers.items():
        initial_state = reducer(None, {"type": ActionTypes.INIT})
        if initial_state is None:
            raise UndefinedSliceStateError(
                key,
                f'The slice reducer for key "{key}" returned None during initialization. '
                f"If the state passed to the reducer is None, it must explicitly return "
                f"the initial state.",
            )

        probe = ActionTypes.probe_unknown_action()
        if reducer(None, {"type": probe}) is None:
            raise UndefinedSliceStateError(
                key,
                f'The slice reducer for key "{key}" returned None when probed with a random '
                f'type. Don\'t try to handle "{ActionTypes.INIT}" or other "@@statecell/*" '
                f"actions; return the current state for any unknown action.",
            )


def _unexpected_keys(state: Any, reducer_keys: Set[str], action: Any, seen: Set[str]) -> None:
    if action_type_of(action) == ActionTypes.REPLACE:
        return

    unexpected = [k for k in state.keys() if k not in reducer_keys and k not in seen]
    for key in unexpected:
        seen.add(key)
    if unexpected:
        logger.warning(
            "Unexpected keys %s found in previous state; expected one of %s. "
            "Unexpected keys will be ignored.",
            unexpected,
            sorted(reducer_keys),
        )


def combine_reducers(
    reducers: Mapping[str, Reducer],
    settings: Optional[Settings] = None,
) -> Reducer:
    """
    Combine slice reducers into a single root reducer.

    Every slice reducer is probed at construction time with the INIT action
    and with a random unknown action; returning None for either fails fast.

    Args:
        reducers: Mapping of state key -> slice reducer
        settings: Controls unexpected-key warnings (default: from environment)

    Returns:
        Root reducer over dict-shaped state

    Raises:
        TypeError: If reducers is not a mapping or a value is not callable
        UndefinedSliceStateError: If a slice reducer returns None on probing
    """
    if not isinstance(reducers, Mapping):
        raise TypeError(f"combine_reducers() expects a mapping of reducers, got {describe_type(reducers)}")

    final_reducers: Dict[str, Reducer] = {}
    for key, reducer in reducers.items():
        if not callable(reducer):
            raise TypeError(f'No reducer provided for key "{key}" (got {describe_type(reducer)})')
        final_reducers[key] = reducer

    _assert_reducer_shape(final_reducers)

    settings = settings or load_settings()
    reducer_keys = set(final_reducers)
    if not reducer_keys and settings.warn_unexpected_keys:
        logger.warning("combine_reducers() received no slice reducers; state will always be empty")
    seen_unexpected: Set[str] = set()

    def combination(state: Any, action: Any) -> Any:
        if state is None:
            state = {}
        elif not isinstance(state, Mapping):
            raise TypeError(
                f"The previous state received by the root reducer has unexpected type "
                f"{describe_type(state)}; expected a mapping with keys {sorted(reducer_keys)}"
            )

        if settings.warn_unexpected_keys:
            _unexpected_keys(state, reducer_keys, action, seen_unexpected)

        has_changed = False
        next_state: Dict[str, Any] = {}
        for key, reducer in final_reducers.items():
            previous_slice = state.get(key)
            next_slice = reducer(previous_slice, action)
            if next_slice is None:
                raise UndefinedSliceStateError(
                    key,
                    f'When called with an action of type {action_type_of(action)!r}, the slice '
                    f'reducer for key "{key}" returned None. To ignore an action, you must '
                    f"explicitly return the previous state.",
                )
            next_state[key] = next_slice
            has_changed = has_changed or next_slice is not previous_slice

        has_changed = has_changed or len(final_reducers) != len(state)
        return next_state if has_changed else state

    return combination
