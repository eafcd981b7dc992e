"""
Minimal push-stream interop for stores.

Any object with an optional ``next(state)`` method can observe a store. This
keeps third-party stream libraries decoupled from the store: they only need
``subscribe(observer) -> Subscription``.
"""

from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .store import Store


class Subscription:
    """Handle returned by StoreObservable.subscribe()."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe: Optional[Callable[[], None]] = unsubscribe

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def unsubscribe(self) -> None:
        """Stop receiving states. Calling it again has no effect."""
        if self._unsubscribe is None:
            return
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        unsubscribe()


class StoreObservable:
    """
    Push-stream view of a store's state.

    The current state is pushed to a new observer immediately, then again
    after every dispatch.
    """

    def __init__(self, store: "Store") -> None:
        self._store = store

    def subscribe(self, observer: Any) -> Subscription:
        """
        Push states to observer.next().

        Raises:
            TypeError: If observer is None
        """
        if observer is None:
            raise TypeError("Expected the observer to be an object, got None")

        store = self._store

        def observe_state() -> None:
            on_next = getattr(observer, "next", None)
            if callable(on_next):
                on_next(store.get_state())

        observe_state()
        return Subscription(store.subscribe(observe_state))

    def observable(self) -> "StoreObservable":
        return self
