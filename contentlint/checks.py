"""
Content checks for contentlint

Each check inspects one decoded file and returns its findings. The engine
decides which checks run; a check never consults configuration itself.
"""

from typing import List

from .config import CheckConfig
from .decoder import FileContent
from .findings import Finding
from .lines import split_lines

ENCODING_RULE = "utf8"
IO_RULE = "io"


class Check:
    """Base class for content checks."""

    rule: str = ""
    description: str = ""

    def check(self, content: FileContent) -> List[Finding]:
        """Check a decoded file and return its findings."""
        raise NotImplementedError

    def finding(self, content: FileContent, kind: str, message: str, line: int) -> Finding:
        return Finding(file=content.path, rule=self.rule, kind=kind, message=message, line=line)


class UnixLineEndingCheck(Check):
    """Flags the first carriage return in a file. Always enabled."""

    rule = "unix-line-endings"
    description = "Lines must end with LF only"

    def check(self, content: FileContent) -> List[Finding]:
        # Only the first occurrence is reported.
        offset = content.text.find("\r")
        if offset == -1:
            return []
        return [self.finding(
            content,
            "carriage-return",
            "Carriage return found; use Unix (LF) line endings",
            content.index.line_of(offset),
        )]


class SingleTrailingNewlineCheck(Check):
    """Requires non-empty files to end with exactly one newline."""

    rule = "single-trailing-newline"
    description = "Non-empty files must end with exactly one newline"

    def check(self, content: FileContent) -> List[Finding]:
        data = content.data
        if not data:
            return []

        line = content.index.end_line
        if data[-1:] != b"\n":
            return [self.finding(content, "missing", "File does not end with a newline", line)]
        if data[-2:] == b"\n\n":
            return [self.finding(content, "extra", "File ends with more than one newline", line)]
        return []


class TrailingWhitespaceCheck(Check):
    """Flags every line that ends in whitespace."""

    rule = "trailing-whitespace"
    description = "Lines must not end with whitespace"

    def check(self, content: FileContent) -> List[Finding]:
        findings = []
        for line_num, line in enumerate(split_lines(content.text), 1):
            if line != line.rstrip():
                findings.append(self.finding(
                    content, "trailing-whitespace", "Line has trailing whitespace", line_num
                ))
        return findings


def encoding_finding(path: str) -> Finding:
    """File-global finding for content that is not valid UTF-8."""
    return Finding(
        file=path,
        rule=ENCODING_RULE,
        kind="invalid-encoding",
        message="File is not valid UTF-8",
    )


def read_error_finding(path: str, error: OSError) -> Finding:
    """File-global finding for a file that could not be read."""
    reason = error.strerror or str(error)
    return Finding(
        file=path,
        rule=IO_RULE,
        kind="unreadable",
        message=f"Could not read file: {reason}",
    )


def get_checks(config: CheckConfig) -> List[Check]:
    """Return the checks enabled by ``config``, in the order they run."""
    checks: List[Check] = [UnixLineEndingCheck()]
    if config.check_single_trailing_newline:
        checks.append(SingleTrailingNewlineCheck())
    if config.check_trailing_whitespace:
        checks.append(TrailingWhitespaceCheck())
    return checks


RULE_DESCRIPTIONS = {
    ENCODING_RULE: "Files must be valid UTF-8",
    IO_RULE: "Files must be readable",
    UnixLineEndingCheck.rule: UnixLineEndingCheck.description,
    SingleTrailingNewlineCheck.rule: SingleTrailingNewlineCheck.description,
    TrailingWhitespaceCheck.rule: TrailingWhitespaceCheck.description,
}
