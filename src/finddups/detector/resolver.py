"""Pairwise content comparison of same-size files."""

from typing import BinaryIO, Callable, Iterator, Optional

from ..common.constants import DEFAULT_CHUNK_SIZE
from ..common.exceptions import FileOpenError, FileReadError, FileSeekError
from ..common.logging import get_logger
from .ledger import ComparisonLedger
from .models import DuplicateGroup, FileIdentity, SizeBucket
from .size_index import SizeIndex

logger = get_logger(__name__)

Opener = Callable[[str], BinaryIO]


def _open_binary(path: str) -> BinaryIO:
    return open(path, "rb")


class DuplicateResolver:
    """Turns size buckets into groups of byte-identical files.

    Within a bucket, files are compared pairwise in arrival order. Results of
    earlier comparisons are kept in a ComparisonLedger and used to skip pairs
    that must differ, or to seek past a prefix already known to match.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        opener: Optional[Opener] = None,
    ) -> None:
        """Initialize resolver.

        Args:
            chunk_size: Bytes read from each file per comparison step
            opener: Callable opening a path for binary reading
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self.opener = opener or _open_binary

    def resolve(
        self, index: SizeIndex, largest_first: bool = True
    ) -> Iterator[DuplicateGroup]:
        """Drain an index and yield its duplicate groups.

        Args:
            index: Populated size index; emptied as buckets are resolved
            largest_first: Resolve larger sizes first

        Yields:
            DuplicateGroup instances, numbered from 1

        Raises:
            ComparisonError: If a file cannot be opened, seeked or read
        """
        group_id = 0
        for bucket in index.drain_ordered(largest_first=largest_first):
            for files in self.resolve_bucket(bucket):
                group_id += 1
                yield DuplicateGroup(group_id=group_id, size=bucket.size, files=files)

    def resolve_bucket(self, bucket: SizeBucket) -> list[list[FileIdentity]]:
        """Find the groups of identical files in one bucket.

        Args:
            bucket: Files sharing one size

        Returns:
            Lists of identical files, each with at least two members
        """
        if bucket.count < 2:
            return []

        if bucket.size == 0:
            # Empty files are trivially identical
            return [list(bucket.files)]

        logger.debug(f"Comparing {bucket.count} files of size {bucket.size}")
        return self._compare_all(bucket.files)

    def _compare_all(self, files: list[FileIdentity]) -> list[list[FileIdentity]]:
        cnt = len(files)
        ledger = ComparisonLedger(cnt)
        grouped = [False] * cnt
        groups: list[list[FileIdentity]] = []

        for i in range(cnt - 1):
            if grouped[i]:
                continue

            matches: list[FileIdentity] = []
            for j in range(i + 1, cnt):
                if grouped[j]:
                    continue

                max_to_skip = ledger.infer(i, j)
                if max_to_skip is None:
                    logger.debug(
                        f"Skipping comparison of {files[i].path} and {files[j].path} "
                        "because of prefix length difference"
                    )
                    continue

                if self._same_content(files[i], files[j], ledger, i, j, max_to_skip):
                    if not grouped[i]:
                        matches.append(files[i])
                    matches.append(files[j])
                    grouped[i] = grouped[j] = True

            if matches:
                groups.append(matches)

        return groups

    def _same_content(
        self,
        fi: FileIdentity,
        fj: FileIdentity,
        ledger: ComparisonLedger,
        i: int,
        j: int,
        offset: int,
    ) -> bool:
        """Compare two files from offset on, recording progress in the ledger."""
        ledger.record(i, j, offset)

        with self._open(fi) as fh_i, self._open(fj) as fh_j:
            if offset > 0:
                logger.debug(
                    f"Skipping ahead {offset} in {fi.path} and {fj.path} "
                    "because of prefix inferences"
                )
                self._seek(fh_i, fi, offset)
                self._seek(fh_j, fj, offset)

            while True:
                chunk_i = self._read(fh_i, fi)
                chunk_j = self._read(fh_j, fj)

                if len(chunk_i) != len(chunk_j) or chunk_i != chunk_j:
                    return False

                ledger.extend(i, j, len(chunk_i))

                if not chunk_i:
                    return True

    def _open(self, identity: FileIdentity) -> BinaryIO:
        try:
            return self.opener(identity.path)
        except OSError as e:
            raise FileOpenError(identity.path) from e

    def _seek(self, handle: BinaryIO, identity: FileIdentity, offset: int) -> None:
        try:
            handle.seek(offset)
        except OSError as e:
            raise FileSeekError(identity.path) from e

    def _read(self, handle: BinaryIO, identity: FileIdentity) -> bytes:
        try:
            return handle.read(self.chunk_size)
        except OSError as e:
            raise FileReadError(identity.path) from e
