"""Data models for file identities, size buckets and duplicate groups."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class FileIdentity:
    """A regular file seen during traversal."""

    path: str
    device_id: int
    inode_id: int

    @property
    def key(self) -> tuple[int, int]:
        """Identity of the underlying file; equal for hard links."""
        return (self.device_id, self.inode_id)


@dataclass
class SizeBucket:
    """All distinct files of one size, in arrival order."""

    size: int
    files: list[FileIdentity] = field(default_factory=list)
    _keys: set[tuple[int, int]] = field(
        default_factory=set, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self._keys = {f.key for f in self.files}

    def add(self, identity: FileIdentity) -> bool:
        """Append a file unless the bucket already holds a hard link to it.

        Returns:
            True if the file was added, False if it was a hard link
        """
        if identity.key in self._keys:
            return False
        self._keys.add(identity.key)
        self.files.append(identity)
        return True

    @property
    def count(self) -> int:
        """Number of distinct files in the bucket."""
        return len(self.files)


@dataclass
class DuplicateGroup:
    """Files of one size whose contents are byte-identical."""

    group_id: int
    size: int
    files: list[FileIdentity]

    @property
    def count(self) -> int:
        """Number of duplicate files in this group."""
        return len(self.files)

    @property
    def total_size(self) -> int:
        """Total size of all duplicates in this group."""
        return self.size * len(self.files)

    @property
    def wasted_size(self) -> int:
        """Wasted space (size of all duplicates except one)."""
        return self.size * (len(self.files) - 1)

    @property
    def paths(self) -> list[str]:
        """Member paths in group order."""
        return [f.path for f in self.files]


class TraversalRecord(Protocol):
    """What traversal reports for one regular file."""

    path: str
    size: int
    device_id: int
    inode_id: int
