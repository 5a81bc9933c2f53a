import pathlib

import pytest

from contentlint.decoder import FileContent


def _write_file(root: pathlib.Path, rel_path: str, data: bytes) -> pathlib.Path:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def write():
    return _write_file


@pytest.fixture
def content():
    def make(data: bytes, path: str = "sample.txt") -> FileContent:
        return FileContent.from_bytes(path, data)
    return make
