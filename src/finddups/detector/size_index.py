"""In-memory index of files bucketed by size."""

from typing import Iterator, Optional

from ..common.logging import get_logger
from .models import FileIdentity, SizeBucket

logger = get_logger(__name__)


class SizeIndex:
    """Buckets file identities by size so only same-size files are compared.

    Buckets are kept in a dict keyed by size; sizes are put in order once,
    when the index is drained.
    """

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._buckets: dict[int, SizeBucket] = {}
        self.file_count = 0
        self.hard_links_skipped = 0

    def insert(self, identity: FileIdentity, size: int) -> bool:
        """File an identity under its size.

        A file sharing (device_id, inode_id) with one already in the bucket
        is a hard link to it and is discarded.

        Args:
            identity: File to record
            size: File size in bytes

        Returns:
            True if the identity was recorded, False if it was discarded
        """
        if size < 0:
            raise ValueError(f"Negative size {size} for {identity.path}")

        bucket = self._buckets.get(size)
        if bucket is None:
            bucket = self._buckets[size] = SizeBucket(size)

        if not bucket.add(identity):
            self.hard_links_skipped += 1
            logger.debug(f"Skipping hard link {identity.path}")
            return False

        self.file_count += 1
        return True

    def drain_ordered(self, largest_first: bool = True) -> Iterator[SizeBucket]:
        """Yield every bucket once, removing each as it is yielded.

        Args:
            largest_first: Yield buckets by descending size if True,
                ascending otherwise

        Yields:
            SizeBucket instances
        """
        for size in sorted(self._buckets, reverse=largest_first):
            bucket = self._buckets.pop(size)
            self.file_count -= bucket.count
            yield bucket

    def bucket(self, size: int) -> Optional[SizeBucket]:
        """Get the bucket for a size, if any file of that size was recorded."""
        return self._buckets.get(size)

    def candidate_count(self) -> int:
        """Number of files sharing their size with at least one other file."""
        return sum(b.count for b in self._buckets.values() if b.count > 1)

    def __contains__(self, size: object) -> bool:
        return size in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
