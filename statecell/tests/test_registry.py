"""
Tests for reducer injection through replace_reducer.
"""

import pytest

from statecell.config import Settings
from statecell.core.errors import ReentrantDispatchError, UndefinedSliceStateError
from statecell.core.registry import ReducerRegistry
from statecell.core.store import create_store
from statecell.tests.reducers import counter, todos


def test_inject_adds_slice():
    registry = ReducerRegistry({"count": counter})
    store = create_store(registry.root_reducer())
    store.dispatch({"type": "inc"})

    assert registry.inject(store, "todos", todos)
    store.dispatch({"type": "todos/added", "payload": "a"})

    assert store.get_state() == {"count": 1, "todos": ("a",)}
    assert registry.keys == ["count", "todos"]


def test_inject_same_reducer_twice_is_noop():
    registry = ReducerRegistry({"count": counter})
    store = create_store(registry.root_reducer())
    calls = []
    store.subscribe(lambda: calls.append(1))

    assert not registry.inject(store, "count", counter)
    assert calls == []


def test_eject_drops_slice():
    registry = ReducerRegistry({"count": counter, "todos": todos}, settings=Settings(warn_unexpected_keys=False))
    store = create_store(registry.root_reducer())

    assert registry.eject(store, "todos")
    assert not registry.eject(store, "todos")

    assert store.get_state() == {"count": 0}


def test_injection_notifies_listeners():
    registry = ReducerRegistry({"count": counter})
    store = create_store(registry.root_reducer())
    seen = []
    store.subscribe(lambda: seen.append(store.get_state()))

    registry.inject(store, "todos", todos)

    assert seen == [{"count": 0, "todos": ()}]


def test_failed_inject_leaves_registry_unchanged():
    """A slice that fails the init probe is never registered."""
    registry = ReducerRegistry({"count": counter})
    store = create_store(registry.root_reducer())

    with pytest.raises(UndefinedSliceStateError) as excinfo:
        registry.inject(store, "bad", lambda state, action: state)

    assert excinfo.value.key == "bad"
    assert registry.keys == ["count"]
    assert store.get_state() == {"count": 0}

    assert registry.inject(store, "todos", todos)
    assert registry.keys == ["count", "todos"]
    assert store.get_state() == {"count": 0, "todos": ()}


def test_failed_eject_keeps_slice():
    """If the store refuses the new root reducer the slice stays registered."""
    registry = ReducerRegistry({"count": counter, "todos": todos})
    store = create_store(registry.root_reducer())

    def listener():
        with pytest.raises(ReentrantDispatchError):
            registry.eject(store, "todos")

    unsubscribe = store.subscribe(listener)
    store.dispatch({"type": "inc"})
    unsubscribe()

    assert registry.keys == ["count", "todos"]
    assert registry.eject(store, "todos")
    assert registry.keys == ["count"]
