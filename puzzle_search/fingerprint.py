"""
State Fingerprinting.

Turns a state into a hashable key for the visited table. Four strategies
(see DuplicateCheck):

    none        no key, no dedup
    unordered   compact JSON of the normalized state tree, container
                iteration order kept. Fast, but two equal frozensets built in
                a different order can serialize differently -> false miss
                (redundant work only)
    canonical   canonical JSON of the normalized state tree, sets and maps
                sorted. Slower, equal states always give equal keys
    digest      64-bit builtin hash. Fastest and smallest, but a collision
                makes the engine prune a distinct (possibly solving) state.
                This risk is NOT mitigated by the engine

Every key is built from the state's VALUE, never from its identity: the
mutate/undo drivers fingerprint one live object at every position, so an
address-based key would make all positions look alike. Plain objects are
walked through their instance attributes (__dict__ / __slots__). States that
expose no fields at all (e.g. a bare object()) raise TypeError.

Use benchmark.py to compare the strategies on a concrete problem.
"""

from __future__ import annotations
import dataclasses
import json
from enum import Enum
from typing import Any, Callable, Hashable, Mapping, Optional

import numpy as np

from .config import DuplicateCheck
from .errors import SearchConfigError

Fingerprint = Callable[[Any], Hashable]


def canonical_json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def unordered_fingerprint(state: Any) -> Hashable:
    """Order-preserving JSON key (numpy arrays: shape + raw bytes)."""
    if isinstance(state, np.ndarray):
        return (state.shape, state.tobytes())
    return json.dumps(_normalize(state, sort=False), ensure_ascii=False, separators=(",", ":"))


def canonical_fingerprint(state: Any) -> str:
    """
    Stable key: equal states always produce the same string.

    Normalization:
        - sets/frozensets: elements sorted by their canonical text
        - mappings: (key, value) pairs sorted by canonical key text
        - dataclasses / NamedTuples / plain objects: field maps tagged with
          the type name
        - numpy arrays: nested lists; numpy scalars: Python scalars

    Raises:
        TypeError: State (or a part of it) has no fields to normalize
    """
    return canonical_json_dumps(_normalize(state))


def digest_fingerprint(state: Any) -> int:
    """
    64-bit hash of the state.

    Types with their own __hash__ (tuples, frozen dataclasses, ...) use it.
    Unhashable states and plain objects, whose inherited hash is their
    identity, hash their canonical key instead.
    """
    if isinstance(state, np.ndarray):
        return hash((state.shape, state.dtype.str, state.tobytes()))
    if type(state).__hash__ not in (None, object.__hash__):
        try:
            return hash(state)
        except TypeError:
            pass  # e.g. a tuple holding a list
    return hash(canonical_fingerprint(state))


def make_fingerprint(strategy: DuplicateCheck) -> Optional[Fingerprint]:
    """
    Resolve a DuplicateCheck into a fingerprint function.

    Returns:
        Callable state -> key, or None for DuplicateCheck.NONE

    Raises:
        SearchConfigError: Unknown strategy
    """
    if strategy is DuplicateCheck.NONE:
        return None
    if strategy is DuplicateCheck.UNORDERED:
        return unordered_fingerprint
    if strategy is DuplicateCheck.CANONICAL:
        return canonical_fingerprint
    if strategy is DuplicateCheck.DIGEST:
        return digest_fingerprint
    raise SearchConfigError(f"Unknown duplicate check {strategy}")


def _normalize(obj: Any, sort: bool = True) -> Any:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, Enum):
        return {"__enum__": f"{type(obj).__name__}.{obj.name}"}
    if isinstance(obj, (bytes, bytearray)):
        return {"__bytes__": bytes(obj).hex()}
    if isinstance(obj, type):
        raise TypeError(f"Cannot fingerprint class {obj.__name__}")
    if dataclasses.is_dataclass(obj):
        tree = {f.name: _normalize(getattr(obj, f.name), sort) for f in dataclasses.fields(obj)}
        tree["__type__"] = type(obj).__name__
        return tree
    if isinstance(obj, tuple) and hasattr(obj, "_fields"):
        tree = {name: _normalize(value, sort) for name, value in zip(obj._fields, obj)}
        tree["__type__"] = type(obj).__name__
        return tree
    if isinstance(obj, Mapping):
        pairs = [[_normalize(k, sort), _normalize(v, sort)] for k, v in obj.items()]
        if sort:
            pairs.sort(key=lambda pair: canonical_json_dumps(pair[0]))
        return {"__map__": pairs}
    if isinstance(obj, (set, frozenset)):
        items = [_normalize(item, sort) for item in obj]
        if sort:
            items.sort(key=canonical_json_dumps)
        return {"__set__": items}
    if isinstance(obj, (list, tuple)):
        return [_normalize(item, sort) for item in obj]

    fields = _instance_fields(obj)
    if fields is None:
        raise TypeError(f"Cannot fingerprint {type(obj).__name__} object: no instance fields")
    tree = {name: _normalize(value, sort) for name, value in fields.items()}
    tree["__type__"] = type(obj).__name__
    return tree


def _instance_fields(obj: Any) -> Optional[dict]:
    """Attributes from __dict__ and every __slots__ in the MRO, None if neither exists."""
    fields = dict(vars(obj)) if hasattr(obj, "__dict__") else None
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or not hasattr(obj, name):
                continue
            if fields is None:
                fields = {}
            fields[name] = getattr(obj, name)
    return fields
