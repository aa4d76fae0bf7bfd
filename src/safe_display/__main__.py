"""CLI entry-point for safe_display.

Usage:
    python -m safe_display show <file.json|-> [--fallback TEXT] [--json]
    python -m safe_display rows <file.json|-> [--fields NAME ...] [--fallback TEXT]
    python -m safe_display [--config FILE] audit <path> [--budget N] [--json]
    python -m safe_display validate <report.json>
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from safe_display import __version__
from safe_display.errors import ConfigError
from safe_display.utils.exit_codes import ExitCode
from safe_display.utils.json_norm import stable_json_dump


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="safe-display",
        description="Display-safe text for records, lists and arbitrary values.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log debug output to stderr.",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to safe_display.yaml (default: ./safe_display.yaml if present).",
    )
    sub = p.add_subparsers(dest="command")

    # ── show ────────────────────────────────────────────────────────
    show_p = sub.add_parser("show", help="Display a JSON value as text.")
    show_p.add_argument("input", help="JSON file, or '-' for stdin.")
    show_p.add_argument("--fallback", default="", help="Text for null input.")
    show_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print {text, category} JSON instead of the bare text.",
    )

    # ── rows ────────────────────────────────────────────────────────
    rows_p = sub.add_parser("rows", help="Flatten a JSON array of records into display rows.")
    rows_p.add_argument("input", help="JSON file, or '-' for stdin.")
    rows_p.add_argument("--fields", nargs="*", default=None, help="Columns to keep, in order.")
    rows_p.add_argument("--fallback", default="", help="Text for null cells.")

    # ── audit ───────────────────────────────────────────────────────
    audit_p = sub.add_parser("audit", help="Render-boundary audit of a source tree.")
    audit_p.add_argument("audit_path", type=Path, help="Root directory (or single file) to audit.")
    audit_p.add_argument(
        "--budget",
        type=int,
        default=None,
        help="Raw template outputs allowed before severity escalates.",
    )
    audit_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the full audit report JSON to stdout.",
    )

    # ── validate ────────────────────────────────────────────────────
    val_p = sub.add_parser("validate", help="Validate an audit report JSON file.")
    val_p.add_argument("report", type=Path)

    return p


def _read_json(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _handle_show(args: argparse.Namespace) -> int:
    from safe_display.api import display_value
    from safe_display.core.config import load_config

    cfg = load_config(args.config)
    value = _read_json(args.input)
    result = display_value(value, args.fallback, config=cfg)
    if args.json_out:
        stable_json_dump(result, sys.stdout)
    else:
        print(result["text"])
    return ExitCode.SUCCESS


def _handle_rows(args: argparse.Namespace) -> int:
    from safe_display.api import display_rows
    from safe_display.core.config import load_config

    cfg = load_config(args.config)
    data = _read_json(args.input)
    if not isinstance(data, list):
        print("error: rows input must be a JSON array of records", file=sys.stderr)
        return ExitCode.ERROR
    stable_json_dump(display_rows(data, args.fields, fallback=args.fallback, config=cfg), sys.stdout)
    return ExitCode.SUCCESS


def _handle_audit(args: argparse.Namespace) -> int:
    from safe_display.api import audit_project
    from safe_display.core.config import load_audit_config

    target: Path = args.audit_path.resolve()
    if not target.exists():
        print(f"error: path does not exist: {target}", file=sys.stderr)
        return ExitCode.ERROR

    cfg = load_audit_config(args.config)
    if args.budget is not None:
        cfg = replace(cfg, raw_output_budget=args.budget)
    report = audit_project(target, config=cfg)
    findings = report["findings"]

    if args.json_out:
        stable_json_dump(report, sys.stdout)
    elif not findings:
        print("No render-boundary violations found.", file=sys.stderr)
    else:
        print(f"\n  {len(findings)} render-boundary violation(s):\n", file=sys.stderr)
        for f in findings:
            sev = f["severity"].upper()
            loc = f"{f['location']['path']}:{f['location']['line_start']}"
            print(f"    [{sev}]  {loc}  {f['message']}", file=sys.stderr)
        print("", file=sys.stderr)

    return ExitCode.VIOLATION if findings else ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    import jsonschema

    from safe_display.api import validate_report

    try:
        validate_report(_read_json(str(args.report)))
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    print("OK")
    return ExitCode.SUCCESS


_HANDLERS = {
    "show": _handle_show,
    "rows": _handle_rows,
    "audit": _handle_audit,
    "validate": _handle_validate,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = ok, 1 = violations, 2 = error)."""
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    handler = _HANDLERS.get(args.command)
    if handler is None:
        print("error: use one of: " + ", ".join(_HANDLERS), file=sys.stderr)
        return ExitCode.ERROR

    try:
        return int(handler(args))
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
