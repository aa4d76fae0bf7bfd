"""Table rows — flatten records into ``{column: display string}`` dicts.

Every cell goes through ``display``, so nested records show their labels,
lists are joined and dates are formatted. Without an explicit column list
the row also carries:

- ``id``: the identifier as text (``_id`` documents included)
- ``full_name``: for people, and for classes (name + section + stream)
"""
from __future__ import annotations

from typing import Any, Iterable

from safe_display.core.classify import field_names, field_value, get_field, is_ui_element, record_identifier
from safe_display.core.config import NormalizeConfig, get_default_config
from safe_display.core.resolve import identifier_text
from safe_display.ui.adapter import display
from safe_display.ui.labels import class_label, full_name


def _cell(value: Any, fallback: str, config: NormalizeConfig) -> str:
    out = display(value, fallback, config=config)
    if is_ui_element(out) and not isinstance(out, str):
        return str(out.__html__())
    return out


def _is_class_record(record: Any) -> bool:
    return get_field(record, "name") is not None and get_field(record, "section", "stream") is not None


def safe_row(
    record: Any,
    fields: Iterable[str] | None = None,
    *,
    fallback: str = "",
    config: NormalizeConfig | None = None,
) -> dict[str, str]:
    cfg = config or get_default_config()

    if fields is not None:
        return {name: _cell(field_value(record, name), fallback, cfg) for name in fields}

    row = {name: _cell(field_value(record, name), fallback, cfg) for name in field_names(record)}

    ident = record_identifier(record, cfg.id_fields)
    if ident is not None:
        row["id"] = identifier_text(ident, config=cfg)

    person = full_name(record)
    if person:
        row["full_name"] = person
    elif _is_class_record(record):
        row["full_name"] = class_label(record, config=cfg)
    return row


def safe_rows(
    records: Iterable[Any],
    fields: Iterable[str] | None = None,
    *,
    fallback: str = "",
    config: NormalizeConfig | None = None,
) -> list[dict[str, str]]:
    columns = list(fields) if fields is not None else None
    return [safe_row(r, columns, fallback=fallback, config=config) for r in records]
