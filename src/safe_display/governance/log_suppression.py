"""Log-suppression gate — detects warnings and logs being silenced globally.

Filtering a known render warning out of the output also hides the next
genuine regression. The cause (raw objects at the render boundary) is
removed instead.

Rule
----
GOV-LOG-SUPPRESS
    ``warnings.filterwarnings("ignore", ...)``,
    ``warnings.simplefilter("ignore")`` or ``logging.disable(...)``.
    Test modules (``test_*.py``, ``*_test.py``, ``conftest.py``) are skipped.
"""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from safe_display.core.discover import relative_path
from safe_display.model import RuleType, Severity
from safe_display.model.finding import Finding, Location, assign_finding_ids, make_fingerprint

logger = logging.getLogger(__name__)

RULE_ID = "GOV-LOG-SUPPRESS"

_WARNING_FILTERS = frozenset({"filterwarnings", "simplefilter"})


def _call_name(node: ast.Call) -> str | None:
    func = node.func
    if isinstance(func, ast.Attribute):
        base = func.value.id if isinstance(func.value, ast.Name) else None
        return f"{base}.{func.attr}" if base else func.attr
    if isinstance(func, ast.Name):
        return func.id
    return None


def _action(node: ast.Call) -> object:
    for kw in node.keywords:
        if kw.arg == "action" and isinstance(kw.value, ast.Constant):
            return kw.value.value
    if node.args and isinstance(node.args[0], ast.Constant):
        return node.args[0].value
    return None


def _is_suppression(node: ast.Call) -> str | None:
    name = _call_name(node)
    if name is None:
        return None
    short = name.rsplit(".", 1)[-1]
    if short in _WARNING_FILTERS and _action(node) == "ignore":
        return name
    if name == "logging.disable":
        return name
    return None


def _is_test_module(path: Path) -> bool:
    stem = path.stem
    return stem.startswith("test_") or stem.endswith("_test") or stem == "conftest"


class LogSuppressionAnalyzer:
    """Finds global warning filters and logging shutdowns.

    Conforms to the ``Analyzer`` protocol (``id``, ``version``, ``run()``).
    """

    id: str = "log_suppression"
    version: str = "1.0.0"

    def __init__(self, *, skip_tests: bool = True) -> None:
        self._skip_tests = skip_tests

    def run(self, root: Path, files: list[Path]) -> list[Finding]:
        findings: list[Finding] = []

        for path in files:
            if path.suffix != ".py":
                continue
            if self._skip_tests and _is_test_module(path):
                continue
            rel = relative_path(path, root)
            try:
                source = path.read_text(encoding="utf-8", errors="replace")
                tree = ast.parse(source, filename=str(path))
            except SyntaxError:
                logger.debug(f"Skipping unparsable file {rel}")
                continue

            lines = source.splitlines()
            for node in ast.walk(tree):
                if not isinstance(node, ast.Call):
                    continue
                name = _is_suppression(node)
                if name is None:
                    continue
                snippet = lines[node.lineno - 1].strip() if node.lineno <= len(lines) else name
                findings.append(
                    Finding(
                        finding_id="",
                        type=RuleType.LOG_SUPPRESSION,
                        severity=Severity.MEDIUM,
                        confidence=0.80,
                        message=f"'{name}' silences output globally; fix the warning's cause instead",
                        location=Location(
                            path=rel,
                            line_start=node.lineno,
                            line_end=getattr(node, "end_lineno", node.lineno) or node.lineno,
                        ),
                        fingerprint=make_fingerprint(RULE_ID, rel, name, snippet),
                        snippet=snippet,
                        metadata={"rule_id": RULE_ID, "call": name},
                    )
                )

        return assign_finding_ids(findings, "ls")
