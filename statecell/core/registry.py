"""
ReducerRegistry: add and remove slice reducers on a live store.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from ..config import Settings
from .combine import combine_reducers

logger = logging.getLogger(__name__)

Reducer = Callable[[Any, Any], Any]


class ReducerRegistry:
    """
    Keeps the slice reducers of a store and rebuilds its root reducer.

    Usage:
        registry = ReducerRegistry({"session": session})
        store = create_store(registry.root_reducer())
        registry.inject(store, "todos", todos)  # state["todos"] now exists
        registry.eject(store, "todos")          # state["todos"] is dropped
    """

    def __init__(
        self,
        reducers: Optional[Mapping[str, Reducer]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._reducers: Dict[str, Reducer] = dict(reducers or {})
        self._settings = settings

    @property
    def keys(self) -> list:
        return list(self._reducers)

    def root_reducer(self) -> Reducer:
        """combine_reducers() over the currently registered slices."""
        return combine_reducers(self._reducers, settings=self._settings)

    def _install(self, store: Any, reducers: Dict[str, Reducer]) -> None:
        # Registered slices only change once the store accepted the new root.
        root = combine_reducers(reducers, settings=self._settings)
        store.replace_reducer(root)
        self._reducers = reducers

    def inject(self, store: Any, key: str, reducer: Reducer) -> bool:
        """
        Register a slice reducer and install the new root reducer on store.

        Returns:
            False if the same reducer was already registered under key
        """
        if self._reducers.get(key) is reducer:
            return False
        self._install(store, {**self._reducers, key: reducer})
        logger.debug("Injected reducer for key %r", key)
        return True

    def eject(self, store: Any, key: str) -> bool:
        """
        Remove a slice reducer and install the new root reducer on store.

        Returns:
            False if no reducer was registered under key
        """
        if key not in self._reducers:
            return False
        self._install(store, {k: r for k, r in self._reducers.items() if k != key})
        logger.debug("Ejected reducer for key %r", key)
        return True
