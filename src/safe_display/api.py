"""
safe_display.api
================

Programmatic entrypoints used by the CLI and the web service.

Goals:
  - No argparse / HTTP dependencies
  - Stable, JSON-friendly outputs

Non-goals:
  - Owning persistence — callers fetch the records they want displayed
  - Owning presentation — callers decide where the text goes

Usage::

    from safe_display.api import display_value, display_rows, audit_project

    display_value({"id": "s1", "firstName": "Jane", "lastName": "Doe"})
    # {"text": "Jane Doe", "category": "identified_record"}

    report = audit_project("path/to/app")
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any, Iterable

from safe_display.contracts.load import validate_instance
from safe_display.core.classify import classify
from safe_display.core.config import AuditConfig, NormalizeConfig, load_audit_config
from safe_display.core.discover import discover_files
from safe_display.governance import (
    DuplicateNormalizerAnalyzer,
    LogSuppressionAnalyzer,
    RawOutputAnalyzer,
    RenderPatchAnalyzer,
)
from safe_display.model.finding import Finding
from safe_display.ui import display, safe_rows

logger = logging.getLogger(__name__)

REPORT_SCHEMA = "audit_report.schema.json"
REPORT_SCHEMA_VERSION = "audit_report_v1"


def display_value(
    value: Any,
    fallback: str = "",
    *,
    config: NormalizeConfig | None = None,
) -> dict[str, str]:
    """Display *value* and report how it was classified.

    UI elements are flattened to their markup text so the result is always
    JSON-friendly.
    """
    category = classify(value, config=config)
    text = display(value, fallback, config=config)
    if not isinstance(text, str):
        text = str(text.__html__())
    return {"text": str(text), "category": category.value}


def display_rows(
    records: Iterable[Any],
    fields: Iterable[str] | None = None,
    *,
    fallback: str = "",
    config: NormalizeConfig | None = None,
) -> list[dict[str, str]]:
    """Flatten *records* into display-string rows."""
    return safe_rows(records, fields, fallback=fallback, config=config)


def _analyzers(cfg: AuditConfig) -> list[Any]:
    return [
        DuplicateNormalizerAnalyzer(
            helper_patterns=cfg.helper_patterns,
            allowed_modules=cfg.allowed_modules,
        ),
        RenderPatchAnalyzer(framework_modules=cfg.framework_modules),
        LogSuppressionAnalyzer(),
        RawOutputAnalyzer(
            allowed_filters=cfg.allowed_filters,
            allowed_calls=cfg.allowed_calls,
            extensions=cfg.template_exts,
            budget=cfg.raw_output_budget,
        ),
    ]


def _summary(files_scanned: int, findings: list[Finding]) -> dict[str, Any]:
    return {
        "files_scanned": files_scanned,
        "total_findings": len(findings),
        "by_type": dict(sorted(Counter(f.type.value for f in findings).items())),
        "by_severity": dict(sorted(Counter(f.severity.value for f in findings).items())),
    }


def audit_project(
    root: str | Path,
    *,
    config: AuditConfig | None = None,
    config_path: str | Path | None = None,
) -> dict[str, Any]:
    """Run every render-boundary gate over *root* and return the report dict.

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    """
    target = Path(root).resolve()
    if not target.exists():
        raise FileNotFoundError(f"path does not exist: {target}")

    cfg = config or load_audit_config(config_path)
    extensions = tuple(sorted({".py", *(e.lower() for e in cfg.template_exts)}))
    files = discover_files(target, extensions=extensions)
    logger.info(f"Auditing {len(files)} files under {target}")

    findings: list[Finding] = []
    for analyzer in _analyzers(cfg):
        found = analyzer.run(target, files)
        logger.debug(f"{analyzer.id}: {len(found)} finding(s)")
        findings.extend(found)

    findings.sort(key=lambda f: (f.location.path, f.location.line_start, f.type.value, f.finding_id))
    return {
        "schema_version": REPORT_SCHEMA_VERSION,
        "root": target.as_posix(),
        "summary": _summary(len(files), findings),
        "findings": [f.to_dict() for f in findings],
    }


def validate_report(report: dict[str, Any]) -> None:
    """Validate an audit report against the bundled schema.

    Raises
    ------
    jsonschema.ValidationError
        If validation fails.
    """
    validate_instance(report, REPORT_SCHEMA)
