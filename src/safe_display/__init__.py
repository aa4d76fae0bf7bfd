"""safe_display — turn any application value into display-safe text."""

__all__ = [
    "__version__",
    "Category",
    "NormalizeConfig",
    "classify",
    "display",
    "normalize",
    "resolve_label",
    # Programmatic engine entrypoints
    "audit_project",
    "display_rows",
    "display_value",
]
__version__ = "0.1.0"

from safe_display.core import NormalizeConfig, classify, normalize, resolve_label  # noqa: E402, F401
from safe_display.model import Category  # noqa: E402, F401
from safe_display.ui import display  # noqa: E402, F401

from safe_display.api import (  # noqa: E402, F401
    audit_project,
    display_rows,
    display_value,
)
