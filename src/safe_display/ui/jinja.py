"""jinja2 wiring for the display adapter.

``install_jinja`` is called explicitly on an environment before its
templates are loaded::

    install_jinja(app.jinja_env)              # Flask
    install_jinja(templates.env)              # FastAPI Jinja2Templates

It registers the ``display``, ``normalize``, ``label``, ``class_label`` and
``full_name`` filters, and by default sets ``Environment.finalize`` so that
every ``{{ expression }}`` result passes through ``display``. Nothing in
jinja2 itself is patched.
"""
from __future__ import annotations

import logging
from typing import Any

from jinja2 import Environment

from safe_display.core.classify import classify
from safe_display.core.config import NormalizeConfig
from safe_display.core.normalize import normalize_text
from safe_display.core.resolve import resolve_label
from safe_display.model import Category
from safe_display.ui.adapter import display
from safe_display.ui.labels import class_label, full_name

logger = logging.getLogger(__name__)

FILTER_NAMES = ("display", "normalize", "label", "class_label", "full_name")


def make_filters(config: NormalizeConfig | None = None) -> dict[str, Any]:
    def _display(value: Any, fallback: str = "") -> Any:
        return display(value, fallback, config=config)

    def _normalize(value: Any) -> str:
        return normalize_text(value, config=config)

    def _label(value: Any, fallback: str = "") -> Any:
        # Like display, but never shows the JSON dump of an opaque object.
        category = classify(value, config=config)
        if category is Category.IDENTIFIED_RECORD:
            return resolve_label(value, config=config)
        if category is Category.OPAQUE:
            return fallback
        return display(value, fallback, config=config)

    def _class_label(value: Any) -> Any:
        return class_label(value, config=config)

    return {
        "display": _display,
        "normalize": _normalize,
        "label": _label,
        "class_label": _class_label,
        "full_name": full_name,
    }


def install_jinja(
    env: Environment,
    *,
    finalize: bool = True,
    config: NormalizeConfig | None = None,
) -> Environment:
    """Register the display filters on *env* (and its output finalizer)."""
    env.filters.update(make_filters(config))

    if finalize:
        if env.finalize is not None:
            logger.warning("Replacing an existing Environment.finalize with the display adapter")

        def _finalize(value: Any) -> Any:
            return display(value, config=config)

        env.finalize = _finalize
        # Templates compiled before this point were generated without the finalizer.
        if env.cache is not None:
            env.cache.clear()
    return env
