"""
UI-facing helpers.

``display`` is the one entry point templates and views should call for any
value of uncertain shape. Everything it returns is either a plain string or
a framework element passed through untouched, so no live record, list or
arbitrary object ever reaches a render target.

These functions are pure (no filesystem, no network) so they can be used by:
  - jinja2 templates (see ``safe_display.ui.jinja``)
  - the CLI and the web API
  - tests / experiments
"""
from __future__ import annotations

from safe_display.ui.adapter import display
from safe_display.ui.labels import class_label, full_name
from safe_display.ui.rows import safe_row, safe_rows

__all__ = ["class_label", "display", "full_name", "safe_row", "safe_rows"]
