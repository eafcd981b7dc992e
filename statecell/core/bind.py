"""
bind_action_creators: wrap action creators so calling them dispatches.
"""

from functools import wraps
from typing import Any, Callable, Dict, Mapping, Union

from .actions import describe_type

ActionCreator = Callable[..., Any]


def _bind(creator: ActionCreator, dispatch: Callable[[Any], Any]) -> ActionCreator:
    @wraps(creator)
    def bound(*args: Any, **kwargs: Any) -> Any:
        return dispatch(creator(*args, **kwargs))

    return bound


def bind_action_creators(
    creators: Union[ActionCreator, Mapping[str, ActionCreator]],
    dispatch: Callable[[Any], Any],
) -> Union[ActionCreator, Dict[str, ActionCreator]]:
    """
    Turn action creators into functions that dispatch what they create.

    Args:
        creators: A single action creator or a mapping of name -> creator
        dispatch: Dispatch function, usually store.dispatch

    Returns:
        A bound function (same signature, returns dispatch's result) or a dict
        of bound functions with the same keys

    Raises:
        TypeError: If creators is neither a function nor a mapping of functions,
            or dispatch is not callable
    """
    if not callable(dispatch):
        raise TypeError(f"bind_action_creators() expected dispatch to be a function, got {describe_type(dispatch)}")

    if callable(creators):
        return _bind(creators, dispatch)

    if not isinstance(creators, Mapping):
        raise TypeError(
            f"bind_action_creators() expected a mapping or a function, but instead "
            f"received: '{describe_type(creators)}'."
        )

    bound: Dict[str, ActionCreator] = {}
    for key, creator in creators.items():
        if not callable(creator):
            raise TypeError(f'Action creator for key "{key}" must be a function, got {describe_type(creator)}')
        bound[key] = _bind(creator, dispatch)
    return bound
