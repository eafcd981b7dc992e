"""
Canonical JSON rendering of state and actions.

Used wherever state has to be displayed or fingerprinted: the logger
middleware, replay summaries and the CLI.
"""

import dataclasses
import hashlib
import json
from enum import Enum
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested state to a JSON-compatible canonical form.

    Rules:
    - mapping keys stringified and sorted
    - tuples and lists converted to lists
    - sets and frozensets converted to sorted lists
    - dataclass instances converted to dicts
    - Enum members replaced by their values
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return canonicalize({f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)})
    if isinstance(obj, Enum):
        return canonicalize(obj.value)
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((canonicalize(x) for x in obj), key=repr)
    return obj


def canonical_json_str(obj: Any) -> str:
    """
    Deterministic JSON string.

    Values JSON cannot represent fall back to repr().
    """
    canon = canonicalize(obj)
    return json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=repr)


def state_digest(state: Any) -> str:
    """SHA-256 hex digest of the canonical JSON of state."""
    return hashlib.sha256(canonical_json_str(state).encode("utf-8")).hexdigest()
