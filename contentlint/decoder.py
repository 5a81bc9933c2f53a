"""
Byte decoding for contentlint

Validates raw file bytes as UTF-8 and wraps the result in a FileContent value
that the checks consume.
"""

import pathlib
from dataclasses import dataclass, field
from typing import Union

from .lines import LineIndex


class EncodingError(ValueError):
    """Raised when a byte sequence is not well-formed UTF-8."""


def decode(data: bytes) -> str:
    """
    Decode ``data`` as strict UTF-8.

    Python's strict codec already rejects overlong forms, encoded surrogates,
    truncated sequences and stray continuation bytes, so a successful decode
    always re-encodes to the same bytes.

    Raises:
        EncodingError: the bytes are not well-formed UTF-8. The error does not
            point at an offset; invalid encoding is reported per file.
    """
    try:
        return data.decode("utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise EncodingError("file is not valid UTF-8") from exc


def read_bytes(path: Union[str, pathlib.Path]) -> bytes:
    """Read a whole file into memory."""
    with open(path, "rb") as fh:
        return fh.read()


@dataclass(frozen=True)
class FileContent:
    """Decoded contents of one file, owned by a single check pass."""

    path: str
    data: bytes = field(repr=False)
    text: str = field(repr=False)
    index: LineIndex = field(repr=False)

    @classmethod
    def from_bytes(cls, path: str, data: bytes) -> "FileContent":
        """Validate ``data`` and build the line index. Raises EncodingError."""
        text = decode(data)
        return cls(path=path, data=data, text=text, index=LineIndex(text))
