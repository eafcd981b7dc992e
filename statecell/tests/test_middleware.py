"""
Tests for apply_middleware and the stock middleware.
"""

import logging

import pytest

from statecell.core.actions import action_type_of
from statecell.core.compose import compose
from statecell.core.errors import InvalidRequestError, MiddlewareConstructionError, ReentrantDispatchError
from statecell.core.middleware import AugmentedStore, MiddlewareAPI, apply_middleware
from statecell.core.store import Store, create_store
from statecell.interceptors import create_logger, thunk, with_extra_argument
from statecell.tests.reducers import counter


def tagging(name, calls):
    def middleware(api):
        def link(next_dispatch):
            def handle(action):
                calls.append(f"{name}:before")
                result = next_dispatch(action)
                calls.append(f"{name}:after")
                return result
            return handle
        return link
    return middleware


def recording_reducer(seen):
    def reducer(state, action):
        seen.append(action_type_of(action))
        return counter(state, action)
    return reducer


def test_first_middleware_is_outermost():
    """m1 sees the action first and the result last."""
    calls = []
    store = create_store(counter, enhancer=apply_middleware(tagging("m1", calls), tagging("m2", calls)))

    store.dispatch({"type": "inc"})

    assert calls == ["m1:before", "m2:before", "m2:after", "m1:after"]
    assert store.get_state() == 1


def test_no_middleware_keeps_raw_dispatch():
    store = create_store(counter, enhancer=apply_middleware())

    assert store.dispatch({"type": "inc"}) == {"type": "inc"}
    assert store.get_state() == 1


def test_middleware_receives_api():
    """Each middleware gets a MiddlewareAPI bound to the store."""
    apis = []

    def capture(api):
        apis.append(api)
        return lambda next_dispatch: next_dispatch

    store = create_store(counter, 7, apply_middleware(capture))

    assert len(apis) == 1
    assert isinstance(apis[0], MiddlewareAPI)
    assert apis[0].get_state() == 7
    apis[0].dispatch({"type": "inc"})
    assert store.get_state() == 8


def test_api_dispatch_runs_through_whole_chain():
    """api.dispatch goes back through the outermost middleware."""
    calls = []

    def doubler(api):
        def link(next_dispatch):
            def handle(action):
                if action_type_of(action) == "double":
                    api.dispatch({"type": "inc"})
                    api.dispatch({"type": "inc"})
                    return "doubled"
                return next_dispatch(action)
            return handle
        return link

    store = create_store(counter, enhancer=apply_middleware(tagging("outer", calls), doubler))

    assert store.dispatch({"type": "double"}) == "doubled"
    assert store.get_state() == 2
    # outer wraps the original dispatch and both nested ones.
    assert calls.count("outer:before") == 3


def test_middleware_can_swallow_actions():
    """Not calling next_dispatch discards the action."""
    seen = []

    def drop_all(api):
        return lambda next_dispatch: (lambda action: None)

    store = create_store(recording_reducer(seen), enhancer=apply_middleware(drop_all))
    seen.clear()
    store.dispatch({"type": "inc"})

    assert store.get_state() == 0
    assert seen == []


def test_middleware_can_transform_result():
    def wrap_result(api):
        return lambda next_dispatch: (lambda action: {"dispatched": next_dispatch(action)})

    store = create_store(counter, enhancer=apply_middleware(wrap_result))
    action = {"type": "inc"}

    assert store.dispatch(action) == {"dispatched": action}


def test_dispatch_during_middleware_construction_fails():
    def eager(api):
        api.dispatch({"type": "inc"})
        return lambda next_dispatch: next_dispatch

    with pytest.raises(MiddlewareConstructionError):
        create_store(counter, enhancer=apply_middleware(eager))


def test_middleware_shape_validated_at_build_time():
    """Non-callable middleware or links fail before any dispatch."""
    with pytest.raises(TypeError):
        apply_middleware("not middleware")

    with pytest.raises(TypeError):
        create_store(counter, enhancer=apply_middleware(lambda api: None))

    with pytest.raises(TypeError):
        create_store(counter, enhancer=apply_middleware(lambda api: (lambda next_dispatch: 42)))


def test_middleware_error_propagates():
    def failing(api):
        def link(next_dispatch):
            def handle(action):
                raise RuntimeError("middleware failed")
            return handle
        return link

    store = create_store(counter, enhancer=apply_middleware(failing))

    with pytest.raises(RuntimeError, match="middleware failed"):
        store.dispatch({"type": "inc"})
    assert store.get_state() == 0


def test_augmented_store_shares_state_with_inner_store():
    store = create_store(counter, enhancer=apply_middleware(thunk))

    assert isinstance(store, AugmentedStore)
    assert isinstance(store.inner, Store)

    calls = []
    store.subscribe(lambda: calls.append(store.get_state()))
    store.inner.dispatch({"type": "inc"})
    store.dispatch({"type": "inc"})

    assert calls == [1, 2]
    assert store.store_id == store.inner.store_id


def test_thunk_never_reaches_reducer():
    """Function actions are handled by thunk and never reduced."""
    seen = []
    store = create_store(recording_reducer(seen), enhancer=apply_middleware(thunk))
    seen.clear()

    def load(dispatch, get_state):
        return ("loaded", get_state())

    assert store.dispatch(load) == ("loaded", 0)
    assert seen == []


def test_thunk_can_dispatch_plain_actions():
    """Dispatch from inside a thunk sits above the raw store and is allowed."""
    store = create_store(counter, enhancer=apply_middleware(thunk))

    def increment_twice(dispatch, get_state):
        dispatch({"type": "inc"})
        dispatch({"type": "inc"})
        return get_state()

    assert store.dispatch(increment_twice) == 2


def test_thunk_dispatch_from_listener_still_reentrant():
    """Reaching the raw dispatch from a listener fails even through middleware."""
    store = create_store(counter, enhancer=apply_middleware(thunk))
    fired = []

    def listener():
        if not fired:
            fired.append(True)
            store.dispatch({"type": "inc"})

    store.subscribe(listener)

    with pytest.raises(ReentrantDispatchError):
        store.dispatch({"type": "inc"})


def test_thunk_with_extra_argument():
    store = create_store(counter, enhancer=apply_middleware(with_extra_argument({"api": "client"})))

    def fetch(dispatch, get_state, extra):
        return extra["api"]

    assert store.dispatch(fetch) == "client"


def test_logger_and_thunk_pipeline(caplog):
    """[logger, thunk]: plain actions come back unchanged, thunks skip the reducer."""
    seen = []
    store = create_store(
        recording_reducer(seen),
        enhancer=apply_middleware(create_logger(name="statecell.tests.actions"), thunk),
    )
    seen.clear()

    with caplog.at_level(logging.INFO, logger="statecell.tests.actions"):
        action = {"type": "inc"}
        assert store.dispatch(action) is action
        assert store.dispatch(lambda dispatch, get_state: "thunked") == "thunked"

    assert seen == ["inc"]
    messages = [r.getMessage() for r in caplog.records if r.name == "statecell.tests.actions"]
    assert messages[0] == "dispatching inc"
    assert messages[1].startswith("next state after inc")
    assert messages[1].endswith(": 1")
    assert messages[2] == "dispatching <function>"


def test_logger_without_state(caplog):
    store = create_store(
        counter,
        enhancer=apply_middleware(create_logger(name="statecell.tests.quiet", log_state=False)),
    )

    with caplog.at_level(logging.INFO, logger="statecell.tests.quiet"):
        store.dispatch({"type": "inc"})

    messages = [r.getMessage() for r in caplog.records if r.name == "statecell.tests.quiet"]
    assert messages[0] == "dispatching inc"
    assert messages[1].startswith("dispatched inc")


def recording_enhancer(recorded):
    """Enhancer that wraps dispatch to record every action type it sees."""
    def enhancer(create):
        def create_recording(reducer, preloaded_state=None):
            store = create(reducer, preloaded_state)

            def dispatch(action):
                recorded.append(action_type_of(action))
                return store.dispatch(action)

            return AugmentedStore(store, dispatch)
        return create_recording
    return enhancer


def test_apply_middleware_outermost_reaches_inner_enhancers():
    """With apply_middleware outermost, thunk dispatches pass through inner enhancers."""
    recorded = []
    store = create_store(counter, enhancer=compose(apply_middleware(thunk), recording_enhancer(recorded)))

    store.dispatch(lambda dispatch, get_state: dispatch({"type": "inc"}))

    assert recorded == ["inc"]
    assert store.get_state() == 1


def test_misordered_enhancers_bypass_outer_dispatch():
    """An enhancer applied outside apply_middleware is skipped by api.dispatch."""
    recorded = []
    store = create_store(counter, enhancer=compose(recording_enhancer(recorded), apply_middleware(thunk)))

    store.dispatch(lambda dispatch, get_state: dispatch({"type": "inc"}))

    assert "inc" not in recorded
    assert store.get_state() == 1


def test_inner_store_reference_keeps_raw_dispatch():
    """Code holding the un-augmented store does not get middleware features."""
    captured = []

    def capturing(create):
        def create_captured(reducer, preloaded_state=None):
            store = create(reducer, preloaded_state)
            captured.append(store)
            return store
        return create_captured

    store = create_store(counter, enhancer=compose(apply_middleware(thunk), capturing))

    assert store.dispatch(lambda dispatch, get_state: "ok") == "ok"
    with pytest.raises(InvalidRequestError):
        captured[0].dispatch(lambda dispatch, get_state: "ok")
