"""
Thunk middleware: dispatch functions instead of actions.

A dispatched callable is invoked with (dispatch, get_state) - plus the extra
argument when one is configured - and its return value is returned from
dispatch. It never reaches the reducer.
"""

from typing import Any, Callable

from ..core.middleware import Dispatch, MiddlewareAPI

_NO_EXTRA = object()


def _create_thunk_middleware(extra_argument: Any = _NO_EXTRA) -> Callable[[MiddlewareAPI], Callable[[Dispatch], Dispatch]]:
    def middleware(api: MiddlewareAPI) -> Callable[[Dispatch], Dispatch]:
        def link(next_dispatch: Dispatch) -> Dispatch:
            def handle(action: Any) -> Any:
                if callable(action):
                    if extra_argument is _NO_EXTRA:
                        return action(api.dispatch, api.get_state)
                    return action(api.dispatch, api.get_state, extra_argument)
                return next_dispatch(action)

            return handle

        return link

    return middleware


thunk = _create_thunk_middleware()


def with_extra_argument(extra_argument: Any) -> Callable[[MiddlewareAPI], Callable[[Dispatch], Dispatch]]:
    """Thunk middleware that passes extra_argument as the third thunk argument."""
    return _create_thunk_middleware(extra_argument)
