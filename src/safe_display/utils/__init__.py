"""Shared utilities for safe_display."""

from safe_display.utils.exit_codes import ExitCode
from safe_display.utils.json_norm import stable_json_dump, stable_json_dumps, structural_dumps

__all__ = [
    "ExitCode",
    "stable_json_dump",
    "stable_json_dumps",
    "structural_dumps",
]
