"""Entity-specific labels built on the canonical resolver.

Students, teachers and subjects use ``resolve_label`` as-is. Classes add
their section and stream to the name ("Form 2 A Science").
"""
from __future__ import annotations

from typing import Any

from safe_display.core.classify import get_field
from safe_display.core.config import NormalizeConfig
from safe_display.core.resolve import DISPLAY_NAME_FIELDS, collapse_whitespace, person_name
from safe_display.ui.adapter import display


def full_name(record: Any) -> str:
    """``"<first> <last>"`` when both are present, else ``""``."""
    return person_name(record) or ""


def class_label(record: Any, *, config: NormalizeConfig | None = None) -> Any:
    name = get_field(record, *DISPLAY_NAME_FIELDS)
    if not isinstance(name, str):
        return display(record, config=config)

    parts = [name]
    for key in ("section", "stream"):
        extra = get_field(record, key)
        if isinstance(extra, (str, int)) and not isinstance(extra, bool):
            parts.append(str(extra))
    return collapse_whitespace(" ".join(parts))
