"""Raw-output gate — template expressions that bypass the display adapter.

Scans jinja templates line by line for ``{{ ... }}`` output expressions.
An expression is fine when it is a literal, when its filter chain includes
an allowed filter (``display``, ``normalize``, ``label``, ...), or when it
is a call to an allowed helper (``url_for(...)``). Anything else hands the
raw value to the renderer.

Supports:

*  **Budget mode** — MEDIUM while the count is within budget, HIGH above it.
*  **Fail-on-any** — no budget; every match is MEDIUM.

Rule
----
GOV-RAW-OUTPUT
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from safe_display.core.config import AuditConfig
from safe_display.core.discover import relative_path
from safe_display.model import RuleType, Severity
from safe_display.model.finding import Finding, Location, assign_finding_ids, make_fingerprint

logger = logging.getLogger(__name__)

RULE_ID = "GOV-RAW-OUTPUT"

_OUTPUT_RE = re.compile(r"\{\{-?(.*?)-?\}\}")
_FILTER_RE = re.compile(r"\|\s*([A-Za-z_]\w*)")
_CALL_RE = re.compile(r"^([A-Za-z_]\w*)\s*\(")
_LITERAL_RE = re.compile(r"""^(?:'[^']*'|"[^"]*"|-?\d+(?:\.\d+)?|true|false|none|True|False|None)$""")
_STRING_RE = re.compile(r"'[^']*'|\"[^\"]*\"")


class RawOutputAnalyzer:
    """Finds unfiltered ``{{ expression }}`` output in templates.

    Conforms to the ``Analyzer`` protocol (``id``, ``version``, ``run()``).

    Parameters
    ----------
    allowed_filters:
        Filter names that route a value through the display adapter.
    allowed_calls:
        Global helpers whose result is already display text.
    extensions:
        Template file extensions to scan.
    budget:
        Maximum number of matches before severity escalates to HIGH.
        *None* means no budget (all matches are MEDIUM).
    """

    id: str = "raw_output"
    version: str = "1.0.0"

    def __init__(
        self,
        *,
        allowed_filters: tuple[str, ...] | list[str] | None = None,
        allowed_calls: tuple[str, ...] | list[str] | None = None,
        extensions: tuple[str, ...] | list[str] | None = None,
        budget: int | None = None,
    ) -> None:
        defaults = AuditConfig()
        self._filters = frozenset(allowed_filters if allowed_filters is not None else defaults.allowed_filters)
        self._calls = frozenset(allowed_calls if allowed_calls is not None else defaults.allowed_calls)
        self._extensions = frozenset(extensions if extensions is not None else defaults.template_exts)
        self._budget = budget

    def is_safe_expression(self, expr: str) -> bool:
        expr = expr.strip()
        if not expr or _LITERAL_RE.match(expr):
            return True
        # Pipes inside string literals are not filters.
        unquoted = _STRING_RE.sub("''", expr)
        if any(name in self._filters for name in _FILTER_RE.findall(unquoted)):
            return True
        call = _CALL_RE.match(unquoted)
        return bool(call and call.group(1) in self._calls)

    # ------------------------------------------------------------------

    def run(self, root: Path, files: list[Path]) -> list[Finding]:
        findings: list[Finding] = []

        for path in files:
            if path.suffix.lower() not in self._extensions:
                continue
            try:
                lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
            except OSError as e:
                logger.debug(f"Skipping unreadable template {path}: {e}")
                continue

            rel = relative_path(path, root)

            for line_no, line_text in enumerate(lines, start=1):
                for m in _OUTPUT_RE.finditer(line_text):
                    expr = m.group(1).strip()
                    if self.is_safe_expression(expr):
                        continue
                    snippet = m.group(0)
                    findings.append(
                        Finding(
                            finding_id="",
                            type=RuleType.RAW_OUTPUT,
                            severity=Severity.MEDIUM,
                            confidence=0.60,
                            message=f"'{expr}' is rendered without the display filter",
                            location=Location(path=rel, line_start=line_no, line_end=line_no),
                            fingerprint=make_fingerprint(RULE_ID, rel, str(line_no), snippet),
                            snippet=snippet,
                            metadata={"rule_id": RULE_ID, "expression": expr},
                        )
                    )

        # Budget escalation: over budget → HIGH
        if self._budget is not None and len(findings) > self._budget:
            for f in findings:
                object.__setattr__(f, "severity", Severity.HIGH)

        return assign_finding_ids(findings, "raw")
