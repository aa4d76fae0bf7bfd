"""Configuration dataclasses and their loader.

Layering, lowest to highest precedence:

1. dataclass defaults
2. ``safe_display.yaml`` (``normalize:`` and ``audit:`` sections)
3. ``SAFE_DISPLAY_*`` environment variables (normalizer settings only)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from safe_display.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "safe_display.yaml"
CONFIG_PATH_ENV = "SAFE_DISPLAY_CONFIG"
ENV_PREFIX = "SAFE_DISPLAY_"

_DEFAULT_HELPER_PATTERNS: tuple[str, ...] = (
    r"^safe_?render",
    r"^render_?safe",
    r"^safe_?stringify",
    r"^stringify_?obj(ect)?$",
    r"^obj(ect)?_?to_?(str|string|display)$",
    r"^safe_?display$",
    r"^transform_?data$",
)

_DEFAULT_ALLOWED_FILTERS: tuple[str, ...] = (
    "display",
    "normalize",
    "label",
    "class_label",
    "full_name",
    "safe",
)


@dataclass(frozen=True)
class NormalizeConfig:
    """Knobs for ``normalize``/``display``."""

    date_format: str | None = None   # strftime pattern; None = M/D/YYYY
    placeholder: str = "[Object]"
    separator: str = ", "
    max_depth: int = 32
    id_fields: tuple[str, ...] = ("id", "_id")


@dataclass(frozen=True)
class AuditConfig:
    """Render-boundary audit settings."""

    helper_patterns: tuple[str, ...] = _DEFAULT_HELPER_PATTERNS
    allowed_modules: tuple[str, ...] = ()
    framework_modules: tuple[str, ...] = ("jinja2", "markupsafe", "flask")
    allowed_filters: tuple[str, ...] = _DEFAULT_ALLOWED_FILTERS
    allowed_calls: tuple[str, ...] = ("display", "normalize", "url_for", "csrf_token")
    template_exts: tuple[str, ...] = (".html", ".jinja", ".jinja2", ".j2")
    raw_output_budget: int | None = None


# ── coercion helpers ────────────────────────────────────────────────


def _opt_str(raw: Any) -> str | None:
    if raw is None or raw == "":
        return None
    return str(raw)


def _positive_int(raw: Any) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"expected an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigError(f"expected a positive integer, got {value}")
    return value


def _opt_int(raw: Any) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"expected an integer, got {raw!r}") from e


def _str_tuple(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        return tuple(p.strip() for p in raw.split(",") if p.strip())
    if isinstance(raw, (list, tuple)):
        return tuple(str(p) for p in raw)
    raise ConfigError(f"expected a list of strings, got {raw!r}")


_NORMALIZE_COERCE: dict[str, Callable[[Any], Any]] = {
    "date_format": _opt_str,
    "placeholder": str,
    "separator": str,
    "max_depth": _positive_int,
    "id_fields": _str_tuple,
}

_AUDIT_COERCE: dict[str, Callable[[Any], Any]] = {
    "helper_patterns": _str_tuple,
    "allowed_modules": _str_tuple,
    "framework_modules": _str_tuple,
    "allowed_filters": _str_tuple,
    "allowed_calls": _str_tuple,
    "template_exts": _str_tuple,
    "raw_output_budget": _opt_int,
}


def _apply(cfg: Any, data: Mapping[str, Any], coerce: dict[str, Callable[[Any], Any]], *, source: str) -> Any:
    known = {f.name for f in fields(cfg)}
    changes: dict[str, Any] = {}
    for key, raw in data.items():
        if key not in known:
            raise ConfigError(f"{source}: unknown setting '{key}'")
        changes[key] = coerce[key](raw)
    return replace(cfg, **changes) if changes else cfg


def _env_overrides() -> dict[str, str]:
    out: dict[str, str] = {}
    for name in _NORMALIZE_COERCE:
        env_value = os.getenv(ENV_PREFIX + name.upper())
        if env_value is not None:
            out[name] = env_value
    return out


# ── file loading ────────────────────────────────────────────────────


def _resolve_path(path: str | Path | None) -> Path | None:
    if path is not None:
        p = Path(path)
        if not p.is_file():
            raise ConfigError(f"config file not found: {p}")
        return p
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return _resolve_path(env_path)
    candidate = Path.cwd() / DEFAULT_CONFIG_FILE
    return candidate if candidate.is_file() else None


def read_config_file(path: str | Path | None = None) -> dict[str, Any]:
    """Return the parsed YAML document, or ``{}`` when no file applies."""
    p = _resolve_path(path)
    if p is None:
        return {}
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{p}: invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{p}: top level must be a mapping")
    logger.debug(f"Loaded config from {p}")
    return data


def _section(doc: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = doc.get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{name}' section must be a mapping")
    return section


def load_config(path: str | Path | None = None) -> NormalizeConfig:
    """Build the normalizer config from defaults, YAML and environment."""
    doc = read_config_file(path)
    cfg = _apply(NormalizeConfig(), _section(doc, "normalize"), _NORMALIZE_COERCE, source="normalize")
    return _apply(cfg, _env_overrides(), _NORMALIZE_COERCE, source="environment")


def load_audit_config(path: str | Path | None = None) -> AuditConfig:
    """Build the audit config from defaults and the YAML ``audit:`` section."""
    doc = read_config_file(path)
    return _apply(AuditConfig(), _section(doc, "audit"), _AUDIT_COERCE, source="audit")


@lru_cache(maxsize=1)
def get_default_config() -> NormalizeConfig:
    """Process-wide config used when callers pass ``config=None``.

    Cached; call ``get_default_config.cache_clear()`` after changing the
    environment.
    """
    return load_config()
