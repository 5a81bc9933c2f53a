"""
Check engine for contentlint

Runs the enabled checks over every resolved path and rolls the findings up
into per-file and per-run outcomes.
"""

import pathlib
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from .checks import Check, encoding_finding, get_checks, read_error_finding
from .config import CheckConfig
from .decoder import EncodingError, FileContent, read_bytes
from .findings import FileOutcome, Finding, RunOutcome


class CheckEngine:
    """
    Applies a fixed, ordered set of checks to files.

    Policy per file:
      - a read error or invalid UTF-8 ends the file's analysis;
      - every other check runs regardless of what earlier checks found.
    """

    def __init__(
        self,
        config: CheckConfig,
        checks: Optional[Sequence[Check]] = None,
        root: Optional[pathlib.Path] = None,
    ):
        self.config = config
        self.root = root
        self.checks: List[Check] = list(checks) if checks is not None else get_checks(config)

    def check_file(self, path: str) -> FileOutcome:
        """Read, decode and check a single file."""
        try:
            data = read_bytes(self.root / path if self.root else path)
        except OSError as exc:
            return FileOutcome(path, (read_error_finding(path, exc),))

        try:
            content = FileContent.from_bytes(path, data)
        except EncodingError:
            if not self.config.check_utf8:
                return FileOutcome(path, skipped=True)
            return FileOutcome(path, (encoding_finding(path),))

        findings: List[Finding] = []
        for check in self.checks:
            findings.extend(check.check(content))
        return FileOutcome(path, tuple(findings))

    def run(self, paths: Iterable[str]) -> RunOutcome:
        """Check every path; results keep the order of ``paths``."""
        paths = list(paths)
        workers = min(self.config.jobs, len(paths))

        if workers <= 1:
            return RunOutcome(tuple(self.check_file(p) for p in paths))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return RunOutcome(tuple(executor.map(self.check_file, paths)))


def run(paths: Iterable[str], config: CheckConfig, root: Optional[pathlib.Path] = None) -> RunOutcome:
    """Check ``paths`` (relative to ``root`` if given) with the checks enabled in ``config``."""
    return CheckEngine(config, root=root).run(paths)
