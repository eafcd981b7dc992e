"""
statecell - Predictable State Container

A single controlled state cell, a dispatch pipeline that middleware can wrap,
and reducer combinators.
"""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    Action,
    ActionTypes,
    AugmentedStore,
    HandlerReducer,
    InvalidRequestError,
    MiddlewareAPI,
    MiddlewareConstructionError,
    NotReadyError,
    ReducerRegistry,
    ReentrantDispatchError,
    Store,
    StoreObservable,
    StorePhase,
    Subscription,
    UndefinedSliceStateError,
    UndefinedStateError,
    action_type_of,
    apply_middleware,
    bind_action_creators,
    combine_reducers,
    compose,
    create_action,
    create_store,
    is_action,
    is_plain_object,
)

__all__ = [
    "Action",
    "ActionTypes",
    "AugmentedStore",
    "HandlerReducer",
    "InvalidRequestError",
    "MiddlewareAPI",
    "MiddlewareConstructionError",
    "NotReadyError",
    "ReducerRegistry",
    "ReentrantDispatchError",
    "Store",
    "StoreObservable",
    "StorePhase",
    "Subscription",
    "UndefinedSliceStateError",
    "UndefinedStateError",
    "action_type_of",
    "apply_middleware",
    "bind_action_creators",
    "combine_reducers",
    "compose",
    "create_action",
    "create_store",
    "is_action",
    "is_plain_object",
]
