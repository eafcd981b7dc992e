"""
Store: the single owner of application state.

The store holds the current state and the reducer, runs every dispatched
action through the reducer and notifies subscribers. It is the only place
where the current state reference is reassigned.
"""

import uuid
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..logging_config import get_logger
from .actions import ActionTypes, action_type_of, describe_type, is_plain_object, is_valid_action_type
from .errors import InvalidRequestError, NotReadyError, ReentrantDispatchError, UndefinedStateError
from .observable import StoreObservable

Reducer = Callable[[Any, Any], Any]
Listener = Callable[[], None]
Unsubscribe = Callable[[], None]
StoreCreator = Callable[..., Any]
StoreEnhancer = Callable[[StoreCreator], StoreCreator]


class StorePhase(Enum):
    """
    Dispatch state machine.

    IDLE accepts dispatches. REDUCING and NOTIFYING together form the
    Dispatching state: no dispatch may start in either of them.
    """
    IDLE = "idle"
    REDUCING = "reducing"
    NOTIFYING = "notifying"


class Store:
    """
    State container.

    Usage:
        store = create_store(counter)
        unsubscribe = store.subscribe(lambda: print(store.get_state()))
        store.dispatch({"type": "inc"})
    """

    def __init__(self, reducer: Reducer, preloaded_state: Any = None) -> None:
        if not callable(reducer):
            raise TypeError(f"Expected the root reducer to be a function, got {describe_type(reducer)}")

        self.store_id = uuid.uuid4().hex[:12]
        self._log = get_logger(__name__, store_id=self.store_id)
        self._reducer = reducer
        self._state = preloaded_state
        self._phase = StorePhase.IDLE
        self._listeners: Dict[int, Listener] = {}
        self._next_token = 0

        self.dispatch({"type": ActionTypes.INIT})
        self._log.debug("Store created")

    @property
    def phase(self) -> StorePhase:
        return self._phase

    @property
    def is_dispatching(self) -> bool:
        return self._phase is not StorePhase.IDLE

    def get_state(self) -> Any:
        """
        Return the current state reference.

        Raises:
            NotReadyError: If called while the reducer is executing
        """
        if self._phase is StorePhase.REDUCING:
            raise NotReadyError(
                "get_state() may not be called while the reducer is executing. "
                "The reducer has already received the state as an argument."
            )
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        Register a zero-argument listener called after every dispatch.

        The same listener may be registered more than once; each registration
        is independent.

        Returns:
            Idempotent unsubscribe callable

        Raises:
            TypeError: If listener is not callable
            NotReadyError: If called while the reducer is executing
        """
        if not callable(listener):
            raise TypeError(f"Expected the listener to be a function, got {describe_type(listener)}")
        if self._phase is StorePhase.REDUCING:
            raise NotReadyError("subscribe() may not be called while the reducer is executing.")

        token = self._next_token
        self._next_token += 1
        self._listeners[token] = listener

        def unsubscribe() -> None:
            if token not in self._listeners:
                return
            if self._phase is StorePhase.REDUCING:
                raise NotReadyError("Listeners may not be unsubscribed while the reducer is executing.")
            del self._listeners[token]

        return unsubscribe

    def dispatch(self, action: Any) -> Any:
        """
        Run an action through the reducer and notify listeners.

        Listeners registered before this call are notified in registration
        order. Listeners added during notification wait for the next dispatch;
        listeners removed during notification are skipped if not yet called.

        Returns:
            The action, unchanged

        Raises:
            InvalidRequestError: If action is not a plain record with a valid type
            ReentrantDispatchError: If a dispatch is already in progress
            UndefinedStateError: If the reducer returns None; the state is kept
        """
        if not is_plain_object(action):
            hint = ""
            if callable(action):
                hint = " Dispatching functions requires middleware such as statecell.interceptors.thunk."
            raise InvalidRequestError(
                f"Actions must be plain records. Instead, the actual type was: "
                f"'{describe_type(action)}'.{hint}"
            )
        action_type = action_type_of(action)
        if action_type is None:
            raise InvalidRequestError('Actions may not have an undefined "type" field.')
        if not is_valid_action_type(action_type):
            raise InvalidRequestError(
                f'Action "type" must be a str or Enum member. Instead, the actual type was: '
                f"'{describe_type(action_type)}'."
            )
        if self._phase is not StorePhase.IDLE:
            raise ReentrantDispatchError(
                f"Cannot dispatch {action_type!r} while another dispatch is in progress "
                f"({self._phase.value})."
            )

        try:
            self._phase = StorePhase.REDUCING
            next_state = self._reducer(self._state, action)
            if next_state is None:
                raise UndefinedStateError(
                    f"The reducer returned None for action {action_type!r}. To ignore an "
                    f"action, return the previous state; None is not a valid state."
                )
            self._state = next_state

            self._phase = StorePhase.NOTIFYING
            snapshot: List[Tuple[int, Listener]] = list(self._listeners.items())
            for token, listener in snapshot:
                if token in self._listeners:
                    listener()
        finally:
            self._phase = StorePhase.IDLE

        return action

    def replace_reducer(self, next_reducer: Reducer) -> None:
        """
        Swap the reducer and dispatch the REPLACE action.

        Raises:
            TypeError: If next_reducer is not callable
            ReentrantDispatchError: If called during a dispatch
        """
        if not callable(next_reducer):
            raise TypeError(f"Expected the next reducer to be a function, got {describe_type(next_reducer)}")
        if self._phase is not StorePhase.IDLE:
            raise ReentrantDispatchError("replace_reducer() may not be called during a dispatch.")

        self._reducer = next_reducer
        self._log.debug("Reducer replaced")
        # Raw dispatch: internal actions bypass any middleware.
        Store.dispatch(self, {"type": ActionTypes.REPLACE})

    def observable(self) -> StoreObservable:
        """Minimal push-stream view of the state (see StoreObservable)."""
        return StoreObservable(self)


def create_store(
    reducer: Reducer,
    preloaded_state: Any = None,
    enhancer: Optional[StoreEnhancer] = None,
) -> Any:
    """
    Create a store, optionally through a store enhancer.

    Args:
        reducer: Root reducer (state, action) -> state
        preloaded_state: Initial state handed to the reducer instead of None
        enhancer: (create_store) -> create_store, e.g. apply_middleware(...)

    Returns:
        Store, or whatever store object the enhancer builds

    Raises:
        TypeError: If reducer or enhancer is not callable
    """
    if enhancer is not None:
        if not callable(enhancer):
            raise TypeError(f"Expected the enhancer to be a function, got {describe_type(enhancer)}")
        return enhancer(create_store)(reducer, preloaded_state)

    return Store(reducer, preloaded_state)
