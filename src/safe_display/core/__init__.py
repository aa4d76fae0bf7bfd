"""Classifier, record resolver and normalizer."""

from safe_display.core.classify import classify, get_field, record_identifier
from safe_display.core.config import (
    AuditConfig,
    NormalizeConfig,
    get_default_config,
    load_audit_config,
    load_config,
)
from safe_display.core.normalize import normalize, normalize_text
from safe_display.core.resolve import resolve_label

__all__ = [
    "AuditConfig",
    "NormalizeConfig",
    "classify",
    "get_default_config",
    "get_field",
    "load_audit_config",
    "load_config",
    "normalize",
    "normalize_text",
    "record_identifier",
    "resolve_label",
]
