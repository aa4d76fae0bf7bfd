"""Identified-record resolver — picks one human-readable label per record.

Precedence (first applicable wins):

1. ``displayName`` / ``display_name``, then ``name``
2. first name AND last name -> ``"<first> <last>"``
3. ``code``
4. the identifier, coerced to a string

Partial name data never produces a label: a first name without a last name
(or the reverse) falls through to ``code`` / identifier.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping
from typing import Any

from safe_display.core.classify import get_field, record_identifier
from safe_display.core.config import NormalizeConfig, get_default_config
from safe_display.errors import MalformedRecord

logger = logging.getLogger(__name__)

DISPLAY_NAME_FIELDS = ("displayName", "display_name", "name")
FIRST_NAME_FIELDS = ("firstName", "first_name")
LAST_NAME_FIELDS = ("lastName", "last_name")
CODE_FIELDS = ("code",)


def _label_text(value: Any) -> str | None:
    """Accept non-empty strings and numbers as label sources; ignore the rest."""
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, numbers.Number) and not isinstance(value, bool):
        return str(value)
    return None


def _field_text(record: Any, names: tuple[str, ...]) -> str | None:
    return _label_text(get_field(record, *names))


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def person_name(record: Any) -> str | None:
    """``"<first> <last>"`` when both halves are present, else ``None``."""
    first = _field_text(record, FIRST_NAME_FIELDS)
    last = _field_text(record, LAST_NAME_FIELDS)
    if first is None or last is None:
        return None
    return collapse_whitespace(f"{first} {last}")


def _stringify_identifier(ident: Any) -> str:
    # Extended-JSON MongoDB ids arrive as {"$oid": "..."}.
    if isinstance(ident, Mapping) and "$oid" in ident:
        ident = ident["$oid"]
    if isinstance(ident, str):
        return ident
    try:
        return str(ident)
    except Exception as e:
        raise MalformedRecord(f"identifier of type {type(ident).__name__} is not stringifiable") from e


def identifier_text(ident: Any, *, config: NormalizeConfig | None = None) -> str:
    """Coerce an identifier with the most permissive conversion available."""
    cfg = config or get_default_config()
    try:
        return _stringify_identifier(ident)
    except MalformedRecord as e:
        logger.debug(f"{e}; retrying with repr()")
    try:
        return repr(ident)
    except Exception:
        logger.debug("repr() failed too; using placeholder")
        return cfg.placeholder


def resolve_label(record: Any, *, config: NormalizeConfig | None = None) -> str:
    """Return the single best label for *record*. Total: always a ``str``."""
    cfg = config or get_default_config()

    label = _field_text(record, DISPLAY_NAME_FIELDS)
    if label is not None:
        return label

    label = person_name(record)
    if label is not None:
        return label

    label = _field_text(record, CODE_FIELDS)
    if label is not None:
        return label

    ident = record_identifier(record, cfg.id_fields)
    if ident is None:
        return cfg.placeholder
    return identifier_text(ident, config=cfg)
