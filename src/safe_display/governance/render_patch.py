"""Render-patch gate — detects monkey-patching of template framework internals.

Globally replacing framework functions to intercept every render is order
dependent (it must run before the first render) and invisible to readers.
The display adapter is wired in explicitly instead
(``safe_display.ui.jinja.install_jinja``).

Rule
----
GOV-RENDER-PATCH
    Assignment, augmented assignment or ``setattr()`` whose target is an
    attribute reached through an imported framework module or name, e.g.
    ``jinja2.Environment.finalize = f`` or ``Markup.__str__ = f``.
"""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from safe_display.core.config import AuditConfig
from safe_display.core.discover import relative_path
from safe_display.model import RuleType, Severity
from safe_display.model.finding import Finding, Location, assign_finding_ids, make_fingerprint

logger = logging.getLogger(__name__)

RULE_ID = "GOV-RENDER-PATCH"


def _dotted_parts(node: ast.AST) -> list[str] | None:
    """``a.b.c`` -> ``["a", "b", "c"]``; ``None`` for anything else."""
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    parts.append(node.id)
    return list(reversed(parts))


def _framework_aliases(tree: ast.AST, modules: tuple[str, ...]) -> dict[str, str]:
    """Map local names to the framework objects they were imported as."""
    aliases: dict[str, str] = {}
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name.split(".")[0] not in modules:
                    continue
                if alias.asname:
                    aliases[alias.asname] = alias.name
                else:
                    top = alias.name.split(".")[0]
                    aliases[top] = top
        elif isinstance(node, ast.ImportFrom):
            if not node.module or node.module.split(".")[0] not in modules:
                continue
            for alias in node.names:
                aliases[alias.asname or alias.name] = f"{node.module}.{alias.name}"
    return aliases


class RenderPatchAnalyzer:
    """Finds writes onto framework module attributes.

    Conforms to the ``Analyzer`` protocol (``id``, ``version``, ``run()``).
    """

    id: str = "render_patch"
    version: str = "1.0.0"

    def __init__(self, *, framework_modules: tuple[str, ...] | list[str] | None = None) -> None:
        modules = framework_modules if framework_modules is not None else AuditConfig().framework_modules
        self._modules = tuple(modules)

    def _patched_target(self, node: ast.AST, aliases: dict[str, str]) -> str | None:
        parts = _dotted_parts(node)
        if not parts or len(parts) < 2 or parts[0] not in aliases:
            return None
        return ".".join([aliases[parts[0]], *parts[1:]])

    def _targets(self, node: ast.AST, aliases: dict[str, str]) -> list[str]:
        if isinstance(node, ast.Assign):
            candidates: list[ast.AST] = []
            for t in node.targets:
                candidates.extend(t.elts if isinstance(t, ast.Tuple) else [t])
            return [d for d in (self._patched_target(c, aliases) for c in candidates) if d]
        if isinstance(node, (ast.AugAssign, ast.AnnAssign)):
            d = self._patched_target(node.target, aliases)
            return [d] if d else []
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "setattr"
            and len(node.args) >= 2
        ):
            parts = _dotted_parts(node.args[0])
            name = node.args[1]
            if parts and parts[0] in aliases and isinstance(name, ast.Constant) and isinstance(name.value, str):
                return [".".join([aliases[parts[0]], *parts[1:], name.value])]
        return []

    def run(self, root: Path, files: list[Path]) -> list[Finding]:
        findings: list[Finding] = []

        for path in files:
            if path.suffix != ".py":
                continue
            rel = relative_path(path, root)
            try:
                source = path.read_text(encoding="utf-8", errors="replace")
                tree = ast.parse(source, filename=str(path))
            except SyntaxError:
                logger.debug(f"Skipping unparsable file {rel}")
                continue

            aliases = _framework_aliases(tree, self._modules)
            if not aliases:
                continue

            lines = source.splitlines()
            for node in ast.walk(tree):
                for target in self._targets(node, aliases):
                    snippet = lines[node.lineno - 1].strip() if node.lineno <= len(lines) else target
                    findings.append(
                        Finding(
                            finding_id="",
                            type=RuleType.RENDER_PATCH,
                            severity=Severity.HIGH,
                            confidence=0.95,
                            message=(
                                f"'{target}' is patched globally; wire the display "
                                f"adapter in with install_jinja() instead"
                            ),
                            location=Location(
                                path=rel,
                                line_start=node.lineno,
                                line_end=getattr(node, "end_lineno", node.lineno) or node.lineno,
                            ),
                            fingerprint=make_fingerprint(RULE_ID, rel, target, snippet),
                            snippet=snippet,
                            metadata={"rule_id": RULE_ID, "target": target},
                        )
                    )

        return assign_finding_ids(findings, "rp")
