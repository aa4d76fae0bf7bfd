"""JSON serialization paths.

Two entry points:

``stable_json_dumps`` / ``stable_json_dump``
    Canonical output for CLI and API artifacts (sorted keys, trailing
    newline, ``Path`` -> POSIX, dataclasses -> dicts).

``structural_dumps``
    The opaque-object fallback of the normalizer. Strict: circular
    references and values with no JSON shape raise ``SerializationFailure``
    instead of being coerced, so the caller can substitute its placeholder.
    Set members are emitted in a stable order.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import asdict, fields, is_dataclass
from datetime import date, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import IO, Any, Callable
from uuid import UUID

from pydantic import BaseModel

from safe_display.errors import SerializationFailure


def _to_builtin(obj: Any) -> Any:
    """Convert common non-JSON types into JSON-safe builtins."""
    if obj is None:
        return None
    if isinstance(obj, (str, int, bool, float)):
        return obj
    if isinstance(obj, PurePath):
        return obj.as_posix()
    if isinstance(obj, Enum):
        return _to_builtin(obj.value)
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_builtin(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v) for v in obj]
    # Fall back to string (keeps CLI output resilient)
    return str(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    """Canonical JSON: sorted keys, UTF-8 text, newline at EOF."""
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
    )
    return s + "\n"


def stable_json_dump(obj: Any, fp: IO[str], *, indent: int | None = 2) -> None:
    fp.write(stable_json_dumps(obj, indent=indent))


# ── structural serialization ────────────────────────────────────────


def _structural_default(obj: Any) -> Any:
    """``json.dumps`` hook: one shallow step per call.

    Returning shallow containers keeps ``json``'s own circular-reference
    markers in charge of cycle detection.
    """
    if isinstance(obj, (date, time)):
        return obj.isoformat()
    if isinstance(obj, (Decimal, UUID)):
        return str(obj)
    if isinstance(obj, PurePath):
        return obj.as_posix()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        # Set iteration order depends on hash randomization.
        return sorted(obj, key=_member_key)
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).decode("utf-8", errors="replace")
    if issubclass(type(obj), BaseModel):
        return obj.model_dump(mode="json")
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in fields(obj)}
    if isinstance(obj, Mapping):
        return dict(obj)
    raise TypeError(f"{type(obj).__name__} has no structural JSON form")


def _member_key(member: Any) -> str:
    return json.dumps(member, default=_structural_default, ensure_ascii=False, sort_keys=True)


def structural_dumps(
    obj: Any,
    *,
    object_fields: Callable[[Any], Mapping[str, Any] | None] | None = None,
) -> str:
    """Serialize *obj* to compact JSON or raise ``SerializationFailure``.

    *object_fields* is consulted for values with no built-in JSON form; it
    returns their fields as a mapping, or ``None`` when they have none.
    """

    def _default(o: Any) -> Any:
        try:
            return _structural_default(o)
        except TypeError:
            found = object_fields(o) if object_fields is not None else None
            if not found:
                raise
            return dict(found)

    try:
        return json.dumps(obj, default=_default, ensure_ascii=False)
    except Exception as e:
        raise SerializationFailure(str(e)) from e
