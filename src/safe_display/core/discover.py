"""File discovery — find audit targets respecting exclusion patterns."""

from __future__ import annotations

from pathlib import Path

# Default exclusion prefixes (relative to scan root).
_DEFAULT_EXCLUDES = frozenset(
    {
        ".git",
        ".github",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        "dist",
        "build",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
    }
)

_MAX_FILE_BYTES = 2_000_000  # 2 MB safety limit


def discover_files(
    root: Path,
    *,
    extensions: tuple[str, ...] = (".py",),
    exclude: list[str] | None = None,
) -> list[Path]:
    """Recursively find files under *root* with one of *extensions*.

    Parameters
    ----------
    root:
        Directory to scan, or a single file.
    extensions:
        Lower-case suffixes to include.
    exclude:
        Directory basenames to skip.  Merged with built-in defaults.

    Returns
    -------
    Sorted list of absolute ``Path`` objects.
    """
    if root.is_file():
        return [root.resolve()] if root.suffix.lower() in extensions else []

    skip = _DEFAULT_EXCLUDES | set(exclude or [])
    results: list[Path] = []
    for p in root.rglob("*"):
        if p.suffix.lower() not in extensions:
            continue
        # Skip any path whose parents include an excluded directory.
        if any(part in skip for part in p.relative_to(root).parts):
            continue
        try:
            if not p.is_file() or p.stat().st_size > _MAX_FILE_BYTES:
                continue
        except OSError:
            continue
        results.append(p.resolve())

    return sorted(set(results))



def relative_path(path: Path, root: Path) -> str:
    """POSIX path of *path* relative to *root* (a directory or the file itself)."""
    base = root.parent if root.is_file() else root
    try:
        return path.relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.relative_to(base).as_posix()
