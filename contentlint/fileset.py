"""
File discovery for contentlint

Expands glob patterns into an ordered, deduplicated list of files.
"""

import os
import pathlib
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import ConfigError

EXCLUDE_PREFIX = "!"
RECURSIVE = "**"


def _split_anchor(pattern: str, root: pathlib.Path) -> Tuple[pathlib.Path, str]:
    """Return the directory to glob from and the pattern relative to it."""
    path = pathlib.PurePath(pattern)
    if path.is_absolute():
        return pathlib.Path(path.anchor), pattern[len(path.anchor):]
    return root, pattern


def normalize_pattern(pattern: str) -> str:
    """
    Rewrite a pattern so it selects files the same way on every Python.

    A trailing ``**`` component matches every file below it, as in the
    Actions glob syntax; pathlib alone would match only directories there.

    Raises:
        ConfigError: ``**`` appears inside a larger path component.
    """
    parts = pattern.replace(os.sep, "/").split("/")
    for part in parts:
        if RECURSIVE in part and part != RECURSIVE:
            raise ConfigError(
                f"Invalid pattern '{pattern}': '**' can only be an entire path component"
            )
    if parts[-1] == RECURSIVE:
        return pattern + "/*"
    return pattern


def expand_pattern(pattern: str, root: Optional[pathlib.Path] = None) -> Iterator[pathlib.Path]:
    """Yield the files matched by one glob pattern, in sorted order."""
    base, relative = _split_anchor(pattern, root or pathlib.Path.cwd())
    if not relative:
        return
    relative = normalize_pattern(relative)
    try:
        matches = sorted(base.glob(relative))
    except ValueError as exc:
        raise ConfigError(f"Invalid pattern '{pattern}': {exc}") from exc
    for match in matches:
        if match.is_file():
            yield match


def _display_path(path: pathlib.Path, root: pathlib.Path) -> str:
    if not path.is_absolute():
        return str(path)
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _identity(path: pathlib.Path, root: pathlib.Path) -> str:
    return os.path.normcase(os.path.realpath(root / path))


def resolve_patterns(
    patterns: Sequence[str],
    root: Optional[pathlib.Path] = None,
    unmatched: Optional[List[str]] = None,
) -> List[str]:
    """
    Resolve patterns to files, preserving first-match order.

    A file matched by several patterns is listed once. Directories never
    match. A pattern starting with ``!`` removes files matched by earlier
    patterns. Blank patterns are ignored.

    Args:
        patterns: Glob patterns, relative to root or absolute
        root: Base directory for relative patterns (defaults to cwd)
        unmatched: If given, patterns that matched nothing are appended to it

    Returns:
        Paths relative to root where possible
    """
    root = root or pathlib.Path.cwd()
    files: Dict[str, str] = {}

    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue

        exclude = pattern.startswith(EXCLUDE_PREFIX)
        if exclude:
            pattern = pattern[len(EXCLUDE_PREFIX):].strip()

        matched = False
        for path in expand_pattern(pattern, root):
            matched = True
            key = _identity(path, root)
            if exclude:
                files.pop(key, None)
            elif key not in files:
                files[key] = _display_path(path, root)

        if not matched and unmatched is not None:
            unmatched.append(raw.strip())

    return list(files.values())
