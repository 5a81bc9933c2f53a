"""
Result records for contentlint

Findings are the violations reported by checks; Outcomes roll them up per
file and per run.
"""

import enum
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple


class Outcome(enum.Enum):
    OK = "ok"
    ERROR = "error"

    @classmethod
    def combine(cls, outcomes: Iterable["Outcome"]) -> "Outcome":
        """Logical OR of errors; an empty set of outcomes is OK."""
        return cls.ERROR if any(o is cls.ERROR for o in outcomes) else cls.OK


@dataclass(frozen=True)
class Finding:
    """A single violation found in one file."""

    file: str
    rule: str
    kind: str
    message: str
    line: Optional[int] = None

    @property
    def title(self) -> str:
        """Machine-stable identifier, e.g. ``single-trailing-newline/extra``."""
        return f"{self.rule}/{self.kind}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result: Dict[str, Any] = {
            "file": self.file,
            "title": self.title,
            "rule": self.rule,
            "kind": self.kind,
            "message": self.message,
        }
        if self.line is not None:
            result["line"] = self.line
        return result

    def get_relative_file(self, base_path: Optional[pathlib.Path] = None) -> str:
        """Get file path relative to base_path for cleaner display."""
        if not base_path:
            base_path = pathlib.Path.cwd()

        try:
            file_path = pathlib.Path(self.file)
            if file_path.is_absolute():
                return str(file_path.relative_to(base_path))
        except (ValueError, OSError):
            pass

        return self.file


@dataclass(frozen=True)
class FileOutcome:
    """All findings for one file, in check order."""

    path: str
    findings: Tuple[Finding, ...] = ()
    skipped: bool = False

    @property
    def outcome(self) -> Outcome:
        return Outcome.ERROR if self.findings else Outcome.OK


@dataclass(frozen=True)
class RunOutcome:
    """Per-file results of one engine run, in path-set order."""

    files: Tuple[FileOutcome, ...] = ()

    @property
    def outcome(self) -> Outcome:
        return Outcome.combine(f.outcome for f in self.files)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @property
    def findings(self) -> List[Finding]:
        return [finding for f in self.files for finding in f.findings]

    def failed_files(self) -> List[FileOutcome]:
        return [f for f in self.files if f.outcome is Outcome.ERROR]
