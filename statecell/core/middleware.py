"""
apply_middleware: turn a list of middleware into a store enhancer.

Middleware shape:
    middleware(api) -> link
    link(next_dispatch) -> handler
    handler(action) -> result

The first middleware is outermost: it sees each action first and the result
last. The innermost next_dispatch is the raw store dispatch.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .actions import describe_type
from .compose import compose
from .errors import MiddlewareConstructionError

logger = logging.getLogger(__name__)

Dispatch = Callable[..., Any]
Middleware = Callable[["MiddlewareAPI"], Callable[[Dispatch], Dispatch]]


@dataclass(frozen=True)
class MiddlewareAPI:
    """
    Capabilities handed to each middleware.

    Fields:
        get_state: Reads the store state
        dispatch: Dispatches through the whole middleware chain
    """
    get_state: Callable[[], Any]
    dispatch: Dispatch


class AugmentedStore:
    """
    Store facade whose dispatch runs through a middleware chain.

    Everything except dispatch is delegated to the wrapped store, so state and
    listeners are shared. The wrapped store itself keeps its raw dispatch.
    """

    def __init__(self, store: Any, dispatch: Dispatch) -> None:
        self._store = store
        self.dispatch = dispatch

    @property
    def inner(self) -> Any:
        return self._store

    def get_state(self) -> Any:
        return self._store.get_state()

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._store.subscribe(listener)

    def replace_reducer(self, next_reducer: Callable[[Any, Any], Any]) -> None:
        self._store.replace_reducer(next_reducer)

    def observable(self) -> Any:
        return self._store.observable()

    def __getattr__(self, name: str) -> Any:
        # Capabilities added by inner enhancers.
        return getattr(self._store, name)


def _checked_link(link: Callable[[Dispatch], Dispatch], index: int) -> Callable[[Dispatch], Dispatch]:
    def build(next_dispatch: Dispatch) -> Dispatch:
        handler = link(next_dispatch)
        if not callable(handler):
            raise TypeError(
                f"Middleware at position {index} must return a handler function from "
                f"link(next_dispatch), got {describe_type(handler)}"
            )
        return handler

    return build


def apply_middleware(*middlewares: Middleware) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Build a store enhancer that routes dispatch through middlewares.

    Must be the outermost enhancer when composed with others:
    compose(apply_middleware(...), other_enhancer). Enhancers applied outside it
    wrap a store whose dispatch is not augmented.

    Raises:
        TypeError: If a middleware, or anything it returns, is not callable
    """
    for index, middleware in enumerate(middlewares):
        if not callable(middleware):
            raise TypeError(
                f"Middleware at position {index} must be a function, got {describe_type(middleware)}"
            )

    def enhancer(create_store: Callable[..., Any]) -> Callable[..., Any]:
        def create_augmented_store(reducer: Callable[[Any, Any], Any], preloaded_state: Any = None) -> AugmentedStore:
            store = create_store(reducer, preloaded_state)
            chain_dispatch: Optional[Dispatch] = None

            def dispatch(action: Any, *args: Any, **kwargs: Any) -> Any:
                if chain_dispatch is None:
                    raise MiddlewareConstructionError(
                        "Dispatching while constructing your middleware is not allowed. "
                        "Other middleware would not be applied to this dispatch."
                    )
                return chain_dispatch(action, *args, **kwargs)

            api = MiddlewareAPI(get_state=store.get_state, dispatch=dispatch)

            chain: List[Callable[[Dispatch], Dispatch]] = []
            for index, middleware in enumerate(middlewares):
                link = middleware(api)
                if not callable(link):
                    raise TypeError(
                        f"Middleware at position {index} must return a function of next_dispatch, "
                        f"got {describe_type(link)}"
                    )
                chain.append(_checked_link(link, index))

            chain_dispatch = compose(*chain)(store.dispatch)
            logger.debug("Middleware chain built with %d link(s)", len(chain))
            return AugmentedStore(store, chain_dispatch)

        return create_augmented_store

    return enhancer
