"""Confirmed common-prefix bookkeeping for one size bucket."""

from typing import Optional


class ComparisonLedger:
    """Matrix of confirmed common-prefix lengths between file pairs.

    Entry (i, j), i < j, holds how many leading bytes of files i and j have
    been confirmed identical. Pairs never compared hold None, which is not
    the same as a comparison that confirmed zero bytes.
    """

    def __init__(self, count: int) -> None:
        """Initialize an empty ledger.

        Args:
            count: Number of files in the bucket
        """
        self.count = count
        self._rows: list[list[Optional[int]]] = [
            [None] * count for _ in range(count)
        ]

    def _check(self, i: int, j: int) -> None:
        if not 0 <= i < j < self.count:
            raise IndexError(f"Invalid ledger pair ({i}, {j}) for {self.count} files")

    def get(self, i: int, j: int) -> Optional[int]:
        """Get the confirmed prefix length of pair (i, j), or None."""
        self._check(i, j)
        return self._rows[i][j]

    def record(self, i: int, j: int, length: int) -> None:
        """Set the confirmed prefix length of pair (i, j)."""
        self._check(i, j)
        self._rows[i][j] = length

    def extend(self, i: int, j: int, nbytes: int) -> int:
        """Add freshly confirmed bytes to pair (i, j).

        Returns:
            The new confirmed prefix length
        """
        self._check(i, j)
        length = (self._rows[i][j] or 0) + nbytes
        self._rows[i][j] = length
        return length

    def infer(self, i: int, j: int) -> Optional[int]:
        """Use earlier rows to bound the comparison of files i and j.

        Every earlier file pr compared with both i and j tells how far each
        of them agreed with pr. Lengths only grow by whole matching chunks,
        so unequal lengths mean i and j part ways from pr at different
        chunks and cannot be identical. Equal lengths mean i and j share
        that prefix with pr, and hence with each other.

        Returns:
            None if i and j are known to differ, otherwise the number of
            leading bytes already known to be identical (0 if unknown)
        """
        self._check(i, j)
        max_to_skip = 0
        for row in self._rows[:i]:
            len_i = row[i]
            len_j = row[j]
            if len_i is None or len_j is None:
                continue
            if len_i != len_j:
                return None
            max_to_skip = max(max_to_skip, len_i)
        return max_to_skip
