"""Enums shared across the normalizer, the UI layer and the audit gates."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """What the classifier decided a value is. Checked in declaration order."""

    NULLISH = "nullish"
    UI_ELEMENT = "ui_element"
    DATE = "date"
    ARRAY = "array"
    PRIMITIVE = "primitive"
    IDENTIFIED_RECORD = "identified_record"
    OPAQUE = "opaque"


class Severity(str, Enum):
    """Audit finding severity."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RuleType(str, Enum):
    """Canonical render-boundary audit rule families."""

    DUPLICATE_NORMALIZER = "duplicate_normalizer"
    RENDER_PATCH = "render_patch"
    LOG_SUPPRESSION = "log_suppression"
    RAW_OUTPUT = "raw_output"
