"""Shared pytest fixtures."""

import errno
import io
import os
from pathlib import Path
from typing import Callable, Iterator

import pytest

from finddups.config.settings import reset_settings
from finddups.detector.models import FileIdentity, SizeBucket


class FakeFile:
    """In-memory file that reports seeks, reads and closes to its FakeFS."""

    def __init__(self, fs: "FakeFS", path: str, data: bytes) -> None:
        self.fs = fs
        self.path = path
        self._buffer = io.BytesIO(data)
        fs.open_files.add(path)

    def seek(self, pos: int, whence: int = io.SEEK_SET) -> int:
        if self.path in self.fs.fail_seek:
            raise OSError(errno.EIO, "Input/output error")
        self.fs.seeks.append((self.path, pos))
        return self._buffer.seek(pos, whence)

    def read(self, size: int = -1) -> bytes:
        if self.path in self.fs.fail_read:
            raise OSError(errno.EIO, "Input/output error")
        data = self._buffer.read(size)
        self.fs.bytes_read += len(data)
        return data

    def close(self) -> None:
        self.fs.open_files.discard(self.path)
        self._buffer.close()

    def __enter__(self) -> "FakeFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class FakeFS:
    """Opener over in-memory file contents, recording all file access."""

    def __init__(self, files: dict[str, bytes]) -> None:
        self.files = files
        self.opened: list[str] = []
        self.open_files: set[str] = set()
        self.seeks: list[tuple[str, int]] = []
        self.bytes_read = 0
        self.fail_seek: set[str] = set()
        self.fail_read: set[str] = set()

    def __call__(self, path: str) -> FakeFile:
        if path not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        self.opened.append(path)
        return FakeFile(self, path, self.files[path])

    def identity(self, path: str) -> FileIdentity:
        """Identity with a distinct inode per path."""
        return FileIdentity(path, 1, list(self.files).index(path) + 1)

    def bucket(self, *paths: str) -> SizeBucket:
        """Bucket holding the given paths in order."""
        bucket = SizeBucket(len(self.files[paths[0]]))
        for path in paths:
            bucket.add(self.identity(path))
        return bucket


@pytest.fixture
def fake_fs() -> Callable[[dict[str, bytes]], FakeFS]:
    """Factory for in-memory file systems."""
    return FakeFS


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], str]:
    """Create a file under tmp_path and return its path."""

    def _write(name: str, content: bytes) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return str(path)

    return _write


@pytest.fixture
def sample_tree(write_file: Callable[[str, bytes], str], tmp_path: Path) -> Path:
    """Directory with two duplicates, a same-size distinct file and a smaller copy."""
    x = bytes(range(100))
    y = bytes(reversed(range(100)))
    write_file("a", x)
    write_file("b", x)
    write_file("c", y)
    write_file("d", x[:50])
    return tmp_path


@pytest.fixture
def identity_of() -> Callable[[str], FileIdentity]:
    """FileIdentity of a real file."""

    def _identity(path: str) -> FileIdentity:
        st = os.stat(path)
        return FileIdentity(path, st.st_dev, st.st_ino)

    return _identity


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from FINDDUPS_* variables and cached settings."""
    for key in list(os.environ):
        if key.startswith("FINDDUPS_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()
