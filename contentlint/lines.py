"""
Line addressing for contentlint

Only ``\\n`` ends a line. Byte 0x0A never appears inside a multi-byte UTF-8
sequence, so counting newlines over raw bytes or over decoded text gives the
same line numbers; checks may use whichever form is handier.
"""

import bisect
from typing import List


def split_lines(text: str) -> List[str]:
    """
    Split text into logical lines on ``\\n``.

    The empty segment after a final newline is not a line, and empty text has
    no lines. ``str.splitlines`` is not used because it also breaks on ``\\r``,
    form feeds and the Unicode line separators.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class LineIndex:
    """Maps character offsets to 1-based line numbers."""

    def __init__(self, text: str):
        self._newlines: List[int] = []
        pos = text.find("\n")
        while pos != -1:
            self._newlines.append(pos)
            pos = text.find("\n", pos + 1)
        self._length = len(text)

    @property
    def newline_count(self) -> int:
        return len(self._newlines)

    @property
    def end_line(self) -> int:
        """Line number of the position just past the last character."""
        return self.newline_count + 1

    def line_of(self, offset: int) -> int:
        """
        Return the 1-based line containing ``offset``.

        The line is one plus the number of newlines strictly before the
        offset, so a newline character belongs to the line it terminates.
        """
        if offset < 0 or offset > self._length:
            raise IndexError(f"offset {offset} outside text of length {self._length}")
        return bisect.bisect_left(self._newlines, offset) + 1
