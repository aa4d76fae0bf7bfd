"""Identity/type classifier.

``classify`` assigns every value exactly one ``Category``. The checks run in
a fixed order and the first match wins:

1. ``None`` or a jinja2 undefined            -> NULLISH
2. carries the ``__html__`` marker           -> UI_ELEMENT
3. ``datetime.date`` (and ``datetime``)      -> DATE
4. list / tuple / set / frozenset            -> ARRAY
5. str, bytes, numbers, UUID, Enum, callable -> PRIMITIVE
6. has a non-empty identifier field          -> IDENTIFIED_RECORD
7. anything else                             -> OPAQUE

Field access works uniformly over mappings, attribute objects (dataclasses,
pydantic models, namespaces) and SQLAlchemy mapped instances and rows. Mapped
instances are read through their loaded state only, so classifying a
detached or expired instance never triggers a lazy load.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import fields as dataclass_fields
from dataclasses import is_dataclass
from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID

from jinja2 import Undefined
from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.engine import Row
from sqlalchemy.orm import InstanceState

from safe_display.core.config import NormalizeConfig, get_default_config
from safe_display.model import Category

ARRAY_TYPES = (list, tuple, set, frozenset)
SCALAR_TYPES = (str, bytes, bytearray, numbers.Number, UUID, Enum)

_MISSING = object()


def is_nullish(value: Any) -> bool:
    return value is None or isinstance(value, Undefined)


def is_ui_element(value: Any) -> bool:
    """True for framework-built markup (``markupsafe.Markup`` and friends)."""
    if isinstance(value, type) or is_nullish(value):
        return False
    return callable(_safe_getattr(value, "__html__"))


def is_present(value: Any) -> bool:
    """Non-empty test used for identifiers and label fields."""
    if value is _MISSING or is_nullish(value):
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (bytes, bytearray, Mapping) + ARRAY_TYPES):
        return len(value) > 0
    return True


def _safe_getattr(obj: Any, name: str) -> Any:
    # Properties and __getattr__ hooks on arbitrary objects may raise anything.
    try:
        return getattr(obj, name, _MISSING)
    except Exception:
        return _MISSING


def _instance_state(obj: Any) -> Any:
    if isinstance(obj, (Mapping, type)):
        return None
    # Proxies may raise anything from __getattr__ during inspection.
    try:
        state = sa_inspect(obj, raiseerr=False)
    except Exception:
        return None
    return state if isinstance(state, InstanceState) else None


def field_value(value: Any, name: str) -> Any:
    """Raw field lookup; ``None`` when the field is absent or not loaded."""
    if isinstance(value, Row):
        value = value._mapping
    if isinstance(value, Mapping):
        candidate = value.get(name, _MISSING)
    else:
        state = _instance_state(value)
        if state is not None and name in state.mapper.attrs:
            candidate = state.dict.get(name, _MISSING)
        else:
            candidate = _safe_getattr(value, name)
    return None if candidate is _MISSING else candidate


def field_names(value: Any) -> list[str]:
    """Public field names of a record, in declaration order where known."""
    if isinstance(value, Row):
        return list(value._mapping.keys())
    if isinstance(value, Mapping):
        return [str(k) for k in value.keys()]
    state = _instance_state(value)
    if state is not None:
        return [attr.key for attr in state.mapper.column_attrs if attr.key in state.dict]
    if is_dataclass(value) and not isinstance(value, type):
        return [f.name for f in dataclass_fields(value)]
    if issubclass(type(value), BaseModel):
        return list(type(value).model_fields)
    try:
        attrs = vars(value)
    except TypeError:
        return []
    return [k for k in attrs if not k.startswith("__")]


def get_field(value: Any, *names: str) -> Any:
    """Return the first present field among *names*, or ``None``."""
    for name in names:
        candidate = field_value(value, name)
        if is_present(candidate):
            return candidate
    return None


def record_identifier(value: Any, id_fields: tuple[str, ...] = ("id", "_id")) -> Any:
    """Return the record's identifier, or ``None`` when it has none.

    Falls back to the persistent primary-key identity for SQLAlchemy mapped
    instances whose key column is not named like an identifier field.
    """
    ident = get_field(value, *id_fields)
    if ident is not None:
        return ident
    state = _instance_state(value)
    if state is None or state.identity is None:
        return None
    key = state.identity
    if len(key) == 1:
        return key[0] if is_present(key[0]) else None
    return ",".join(str(part) for part in key)


def classify(value: Any, *, config: NormalizeConfig | None = None) -> Category:
    """Classify *value*. Never raises."""
    cfg = config or get_default_config()

    if is_nullish(value):
        return Category.NULLISH
    if is_ui_element(value):
        return Category.UI_ELEMENT
    if isinstance(value, date):
        return Category.DATE
    if isinstance(value, ARRAY_TYPES):
        return Category.ARRAY
    if isinstance(value, SCALAR_TYPES) or callable(value):
        return Category.PRIMITIVE
    if record_identifier(value, cfg.id_fields) is not None:
        return Category.IDENTIFIED_RECORD
    return Category.OPAQUE
