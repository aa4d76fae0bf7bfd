"""Display adapter — the render-boundary entry point."""
from __future__ import annotations

from typing import Any

from safe_display.core.classify import is_nullish, is_ui_element
from safe_display.core.config import NormalizeConfig
from safe_display.core.normalize import normalize


def display(
    value: Any,
    fallback: str = "",
    *,
    config: NormalizeConfig | None = None,
) -> Any:
    """Render-boundary adapter.

    - nullish (``None``, jinja2 undefined) -> *fallback*
    - UI framework element -> returned unchanged
    - anything else -> ``normalize(value)``
    """
    if is_nullish(value):
        return fallback
    if is_ui_element(value):
        return value
    return normalize(value, config=config)
