"""Normalizer — the recursive value-to-display-string conversion.

``normalize`` composes the classifier and the record resolver. It is pure,
synchronous and idempotent on strings. Array recursion is capped by
``NormalizeConfig.max_depth``; a segment nested deeper than that (including a
list that contains itself) becomes the placeholder instead of overflowing the
stack.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any

from safe_display.core.classify import classify, field_names, field_value, is_ui_element
from safe_display.core.config import NormalizeConfig, get_default_config
from safe_display.core.resolve import resolve_label
from safe_display.errors import DepthExceeded, SerializationFailure
from safe_display.model import Category
from safe_display.utils.json_norm import structural_dumps

logger = logging.getLogger(__name__)

FUNCTION_PLACEHOLDER = "[Function]"


def format_date(value: date, config: NormalizeConfig) -> str:
    """Short date form; ``M/D/YYYY`` unless ``date_format`` is configured."""
    if config.date_format:
        return value.strftime(config.date_format)
    return f"{value.month}/{value.day}/{value.year}"


def primitive_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, Enum):
        return primitive_text(value.value)
    if callable(value):
        return FUNCTION_PLACEHOLDER
    return str(value)


def object_fields(value: Any) -> dict[str, Any] | None:
    """Own fields of a plain attribute object, or ``None`` when it has none."""
    names = field_names(value)
    if not names:
        return None
    return {name: field_value(value, name) for name in names}


def opaque_text(value: Any, config: NormalizeConfig) -> str:
    try:
        return structural_dumps(value, object_fields=object_fields)
    except SerializationFailure as e:
        logger.debug(f"Structural serialization of {type(value).__name__} failed: {e}")
        return config.placeholder


def _guarded(value: Any, config: NormalizeConfig, depth: int) -> Any:
    try:
        return _normalize(value, config, depth)
    except DepthExceeded as e:
        logger.debug(f"{e}; substituting placeholder")
        return config.placeholder


def _segment(item: Any, config: NormalizeConfig, depth: int) -> str:
    out = _guarded(item, config, depth)
    # A framework element inside a joined list contributes its markup text.
    if is_ui_element(out):
        return str(out.__html__())
    return out


def _normalize(value: Any, config: NormalizeConfig, depth: int) -> Any:
    category = classify(value, config=config)

    if category is Category.NULLISH:
        return ""
    if category is Category.UI_ELEMENT:
        return value
    if category is Category.PRIMITIVE:
        return primitive_text(value)
    if category is Category.DATE:
        return format_date(value, config)
    if category is Category.ARRAY:
        if depth >= config.max_depth:
            raise DepthExceeded(depth)
        segments = [_segment(item, config, depth + 1) for item in value]
        if isinstance(value, (set, frozenset)):
            # Unordered: sort so the text does not depend on hash seeds.
            segments.sort()
        return config.separator.join(segments)
    if category is Category.IDENTIFIED_RECORD:
        return resolve_label(value, config=config)
    return opaque_text(value, config)


def normalize(value: Any, *, config: NormalizeConfig | None = None) -> Any:
    """Convert *value* into a display-safe string.

    Returns the value itself, unchanged, when it is a UI framework element;
    callers that need a plain ``str`` in every case should use
    ``normalize_text``.
    """
    return _guarded(value, config or get_default_config(), 0)


def normalize_text(value: Any, *, config: NormalizeConfig | None = None) -> str:
    """``normalize`` that also flattens UI elements to their markup string."""
    return _segment(value, config or get_default_config(), 0)
