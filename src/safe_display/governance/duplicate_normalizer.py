"""Duplicate-normalizer gate — finds hand-rolled stringify / safe-render helpers.

Every private copy of "turn this object into display text" drifts from the
others (field precedence, date format, fallback text). This gate flags any
function whose name looks like such a helper so it can be replaced with a
call to ``safe_display.display``.

Rule
----
GOV-DUP-NORMALIZER
    ``def`` / ``async def`` whose name matches one of the helper patterns,
    outside the allowed modules.
"""

from __future__ import annotations

import ast
import fnmatch
import logging
import re
from pathlib import Path

from safe_display.core.config import AuditConfig
from safe_display.core.discover import relative_path
from safe_display.model import RuleType, Severity
from safe_display.model.finding import Finding, Location, assign_finding_ids, make_fingerprint

logger = logging.getLogger(__name__)

RULE_ID = "GOV-DUP-NORMALIZER"


class DuplicateNormalizerAnalyzer:
    """Scans Python sources for duplicate display-normalizer helpers.

    Conforms to the ``Analyzer`` protocol (``id``, ``version``, ``run()``).
    """

    id: str = "duplicate_normalizer"
    version: str = "1.0.0"

    def __init__(
        self,
        *,
        helper_patterns: tuple[str, ...] | list[str] | None = None,
        allowed_modules: tuple[str, ...] | list[str] | None = None,
    ) -> None:
        defaults = AuditConfig()
        raw = helper_patterns if helper_patterns is not None else defaults.helper_patterns
        self._patterns = [re.compile(p, re.IGNORECASE) for p in raw]
        self._allowed = tuple(allowed_modules if allowed_modules is not None else defaults.allowed_modules)

    def _is_allowed(self, rel: str) -> bool:
        return any(fnmatch.fnmatch(rel, pat) for pat in self._allowed)

    def run(self, root: Path, files: list[Path]) -> list[Finding]:
        findings: list[Finding] = []

        for path in files:
            if path.suffix != ".py":
                continue
            rel = relative_path(path, root)
            if self._is_allowed(rel):
                continue
            try:
                source = path.read_text(encoding="utf-8", errors="replace")
                tree = ast.parse(source, filename=str(path))
            except SyntaxError:
                logger.debug(f"Skipping unparsable file {rel}")
                continue

            for node in ast.walk(tree):
                if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                    continue
                matched = next((p for p in self._patterns if p.search(node.name)), None)
                if matched is None:
                    continue

                snippet = f"def {node.name}(...)"
                findings.append(
                    Finding(
                        finding_id="",
                        type=RuleType.DUPLICATE_NORMALIZER,
                        severity=Severity.MEDIUM,
                        confidence=0.85,
                        message=(
                            f"'{node.name}' duplicates the shared display normalizer; "
                            f"call safe_display.display instead"
                        ),
                        location=Location(
                            path=rel,
                            line_start=node.lineno,
                            line_end=getattr(node, "end_lineno", node.lineno) or node.lineno,
                        ),
                        fingerprint=make_fingerprint(RULE_ID, rel, node.name, snippet),
                        snippet=snippet,
                        metadata={
                            "rule_id": RULE_ID,
                            "function": node.name,
                            "pattern": matched.pattern,
                        },
                    )
                )

        return assign_finding_ids(findings, "dup")
