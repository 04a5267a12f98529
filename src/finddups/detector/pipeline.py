"""Duplicate detection pipeline: size bucketing, then content comparison."""

from typing import Iterable

from ..common.constants import DEFAULT_CHUNK_SIZE
from ..common.logging import get_logger
from .models import DuplicateGroup, FileIdentity, TraversalRecord
from .resolver import DuplicateResolver
from .size_index import SizeIndex

logger = get_logger(__name__)


class DetectionPipeline:
    """Orchestrates duplicate detection over a stream of traversal results."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        largest_first: bool = True,
    ) -> None:
        """Initialize detection pipeline.

        Args:
            chunk_size: Bytes read from each file per comparison step
            largest_first: Report groups of larger files first
        """
        self.size_index = SizeIndex()
        self.resolver = DuplicateResolver(chunk_size=chunk_size)
        self.largest_first = largest_first

    def add_file(self, path: str, size: int, device_id: int, inode_id: int) -> bool:
        """Record one regular file found by traversal.

        Returns:
            False if the file is a hard link to one already recorded
        """
        return self.size_index.insert(FileIdentity(path, device_id, inode_id), size)

    def add_scanned(self, files: Iterable[TraversalRecord]) -> int:
        """Record every file from a traversal.

        Returns:
            Number of files recorded (hard links excluded)
        """
        added = 0
        for f in files:
            if self.add_file(f.path, f.size, f.device_id, f.inode_id):
                added += 1
        return added

    def detect_duplicates(self) -> list[DuplicateGroup]:
        """Resolve all recorded files into duplicate groups.

        The index is consumed; a pipeline detects duplicates once.

        Returns:
            List of duplicate groups

        Raises:
            ComparisonError: If a file cannot be read; no groups are returned
        """
        logger.info(
            f"Resolving {self.size_index.file_count} files in "
            f"{len(self.size_index)} size groups "
            f"({self.size_index.candidate_count()} share a size, "
            f"{self.size_index.hard_links_skipped} hard links skipped)"
        )

        duplicate_groups = list(
            self.resolver.resolve(self.size_index, largest_first=self.largest_first)
        )

        total_files = sum(g.count for g in duplicate_groups)
        logger.info(
            f"Detection complete: {total_files} files in "
            f"{len(duplicate_groups)} duplicate groups"
        )
        return duplicate_groups
