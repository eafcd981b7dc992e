"""
Reducer: pure state transition functions.

A reducer must be:
- Pure (no side effects, no I/O)
- Synchronous
- Total (None state -> initial state; unknown action -> same state object)
"""

from typing import Any, Callable, Dict

from .actions import action_type_of, is_valid_action_type

# Handler signature: (current_state, action) -> new_state
Handler = Callable[[Any, Any], Any]


class HandlerReducer:
    """
    Registry of per-type handlers that behaves as a reducer.

    Usage:
        counter = HandlerReducer(0)
        counter.register("inc", lambda state, action: state + 1)

        @counter.on("dec")
        def dec(state, action):
            return state - 1

        store = create_store(counter)
    """

    def __init__(self, initial_state: Any) -> None:
        if initial_state is None:
            raise ValueError("HandlerReducer initial_state must not be None")
        self.initial_state = initial_state
        self._handlers: Dict[Any, Handler] = {}

    def register(self, action_type: Any, handler: Handler) -> None:
        """
        Register action handler.

        Args:
            action_type: Action type (str or Enum member), or an action creator
                from create_action()
            handler: Pure function (current_state, action) -> new_state
        """
        action_type = getattr(action_type, "type", action_type)
        if not is_valid_action_type(action_type):
            raise TypeError(f"Action type must be a str or Enum member, got {type(action_type).__name__}")
        if not callable(handler):
            raise TypeError("Handler must be callable")
        self._handlers[action_type] = handler

    def on(self, action_type: Any) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""
        def decorator(handler: Handler) -> Handler:
            self.register(action_type, handler)
            return handler

        return decorator

    def handles(self, action_type: Any) -> bool:
        return action_type in self._handlers

    def __call__(self, state: Any, action: Any) -> Any:
        if state is None:
            state = self.initial_state
        handler = self._handlers.get(action_type_of(action))
        if handler is None:
            return state
        return handler(state, action)
