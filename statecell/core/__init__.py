"""
Core state container primitives.

This module provides:
- Store: Single owner of state, dispatch, subscriptions
- compose: Right-to-left function composition
- apply_middleware: Dispatch pipeline as a store enhancer
- combine_reducers: Root reducer built from slice reducers
- bind_action_creators: Self-dispatching action creators
- Action / create_action: Flux-standard action records
- HandlerReducer / ReducerRegistry: Reducer building and code splitting
"""

from .actions import Action, ActionTypes, action_type_of, create_action, is_action, is_plain_object
from .bind import bind_action_creators
from .combine import combine_reducers
from .compose import compose
from .errors import (
    InvalidRequestError,
    MiddlewareConstructionError,
    NotReadyError,
    ReentrantDispatchError,
    UndefinedSliceStateError,
    UndefinedStateError,
)
from .middleware import AugmentedStore, MiddlewareAPI, apply_middleware
from .observable import StoreObservable, Subscription
from .reducer import HandlerReducer
from .registry import ReducerRegistry
from .store import Store, StorePhase, create_store

__all__ = [
    "Action",
    "ActionTypes",
    "action_type_of",
    "create_action",
    "is_action",
    "is_plain_object",
    "bind_action_creators",
    "combine_reducers",
    "compose",
    "InvalidRequestError",
    "MiddlewareConstructionError",
    "NotReadyError",
    "ReentrantDispatchError",
    "UndefinedSliceStateError",
    "UndefinedStateError",
    "AugmentedStore",
    "MiddlewareAPI",
    "apply_middleware",
    "StoreObservable",
    "Subscription",
    "HandlerReducer",
    "ReducerRegistry",
    "Store",
    "StorePhase",
    "create_store",
]
