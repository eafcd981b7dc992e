"""
Action model and action guards.

Actions are immutable records describing a requested state change. The only
required field is the ``type`` discriminator; everything else is payload.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional


def _random_suffix() -> str:
    return ".".join(uuid.uuid4().hex[:6])


class ActionTypes:
    """
    Internal action types dispatched by the store itself.

    Reducers must treat all of these as unknown and return the state they
    were given.
    """
    INIT = f"@@statecell/INIT{_random_suffix()}"
    REPLACE = "@@statecell/REPLACE"

    @staticmethod
    def probe_unknown_action() -> str:
        """Fresh random action type used to probe reducers for the identity law."""
        return f"@@statecell/PROBE_UNKNOWN_ACTION{_random_suffix()}"


@dataclass(frozen=True)
class Action:
    """
    Immutable flux-standard action.

    Fields:
        type: Discriminator (str or Enum member)
        payload: Request-specific data
        meta: Extra information not part of the payload
        error: True when payload is an error
    """
    type: Any
    payload: Any = None
    meta: Any = None
    error: bool = False


def is_plain_object(obj: Any) -> bool:
    """True for records the store accepts as actions: mappings and Action instances."""
    return isinstance(obj, (Mapping, Action))


def is_valid_action_type(value: Any) -> bool:
    """True for discriminators that stay stable across serialization."""
    return isinstance(value, (str, Enum))


def action_type_of(action: Any) -> Any:
    """
    Read the discriminator of an action.

    Returns:
        The ``type`` value, or None if the action has none
    """
    if isinstance(action, Mapping):
        return action.get("type")
    return getattr(action, "type", None)


def is_action(obj: Any) -> bool:
    """Type guard: plain record with a valid discriminator."""
    return is_plain_object(obj) and is_valid_action_type(action_type_of(obj))


def describe_type(value: Any) -> str:
    """Short type name used in error messages."""
    if value is None:
        return "None"
    if callable(value) and not isinstance(value, type):
        return "function"
    return type(value).__name__


def create_action(action_type: Any, prepare: Optional[Callable[..., Any]] = None) -> Callable[..., Action]:
    """
    Build an action creator for a single discriminator.

    Without ``prepare`` the creator takes an optional payload. With ``prepare``
    the creator's arguments are passed to it and its return value becomes the
    payload.

    Example:
        added = create_action("todos/added")
        added("buy milk")  # Action(type="todos/added", payload="buy milk")
        added.type         # "todos/added"
    """
    if not is_valid_action_type(action_type):
        raise TypeError(
            f"Action type must be a str or Enum member, got {describe_type(action_type)}"
        )

    if prepare is None:
        def creator(payload: Any = None) -> Action:
            return Action(type=action_type, payload=payload)
    else:
        def creator(*args: Any, **kwargs: Any) -> Action:
            return Action(type=action_type, payload=prepare(*args, **kwargs))

    creator.type = action_type  # type: ignore[attr-defined]
    return creator
