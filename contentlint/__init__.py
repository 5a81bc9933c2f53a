"""
contentlint - byte and text level conformance checks for source files

Validates that files are UTF-8, use Unix line endings, end with exactly one
newline and carry no trailing whitespace. Built to gate merges in CI.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("contentlint")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0.dev0"

from .config import CheckConfig, ConfigError, load_config
from .decoder import EncodingError, FileContent, decode
from .engine import CheckEngine, run
from .fileset import resolve_patterns
from .findings import FileOutcome, Finding, Outcome, RunOutcome
from .lines import LineIndex, split_lines

__all__ = [
    "CheckConfig",
    "CheckEngine",
    "ConfigError",
    "EncodingError",
    "FileContent",
    "FileOutcome",
    "Finding",
    "LineIndex",
    "Outcome",
    "RunOutcome",
    "decode",
    "load_config",
    "resolve_patterns",
    "run",
    "split_lines",
]
