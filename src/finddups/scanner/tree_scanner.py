"""Local directory tree scanner."""

import os
import stat
from dataclasses import dataclass
from typing import Iterable, Iterator

from ..common.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScannedFile:
    """A regular file found during traversal."""

    path: str
    size: int
    device_id: int
    inode_id: int


class TreeScanner:
    """Walks directory trees and reports every regular file.

    Symbolic links are never followed. Unreadable directories and vanished
    entries are logged and counted in ``errors``; they do not stop the scan.
    """

    def __init__(self, min_size: int = 0) -> None:
        """Initialize tree scanner.

        Args:
            min_size: Minimum file size in bytes
        """
        self.min_size = min_size
        self.errors = 0
        self.files_seen = 0

    def scan_files(self, roots: Iterable[str]) -> Iterator[ScannedFile]:
        """Scan each root in turn.

        Args:
            roots: Directories (or regular files) to scan

        Yields:
            ScannedFile instances, in sorted name order within each directory
        """
        for root in roots:
            try:
                st = os.stat(root, follow_symlinks=False)
            except OSError as e:
                self._report(root, e)
                continue

            if stat.S_ISDIR(st.st_mode):
                yield from self._walk(root)
            elif stat.S_ISREG(st.st_mode):
                yield from self._visit(root, st)

    def _walk(self, root: str) -> Iterator[ScannedFile]:
        # Depth-first with an explicit stack; tree depth is not bounded by
        # the interpreter's recursion limit.
        stack = [iter(self._list(root))]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            try:
                st = os.stat(entry.path, follow_symlinks=False)
            except OSError as e:
                self._report(entry.path, e)
                continue

            if stat.S_ISDIR(st.st_mode):
                stack.append(iter(self._list(entry.path)))
            elif stat.S_ISREG(st.st_mode):
                yield from self._visit(entry.path, st)

    def _list(self, directory: str) -> list[os.DirEntry]:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._report(directory, e)
            return []

    def _visit(self, path: str, st: os.stat_result) -> Iterator[ScannedFile]:
        self.files_seen += 1
        if st.st_size < self.min_size:
            return
        yield ScannedFile(
            path=path,
            size=st.st_size,
            device_id=st.st_dev,
            inode_id=st.st_ino,
        )

    def _report(self, path: str, error: OSError) -> None:
        self.errors += 1
        logger.warning(f"Cannot access {path}: {error.strerror or error}")
