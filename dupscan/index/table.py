# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The duplicate index: a fixed-size hash table of recency-ordered chains.

Every scanned file is hashed by its base name into one of `table_size`
buckets. A bucket holds a chain, which is a plain list of FileRecords kept
sorted by modification time, newest first. Files called "photo.jpg" in ten
different directories therefore all sit in one chain, and the head of that
chain is the most recently touched copy.

Lifecycle is explicit and has two states:

    Uninitialized --initialize()--> Ready --release()--> Uninitialized

Inserts, lookups and enumeration are only valid while Ready. Calling them
in the wrong state raises NotInitializedError instead of failing on a
missing bucket array. The table never resizes; pick table_size for the
expected number of distinct names.

Ordering within a chain: a new record goes immediately before the first
record that is strictly older than it, or at the tail if there is none.
Records with equal timestamps therefore stay in insertion order.
"""

import bisect
from typing import Iterator, Optional

from dupscan.config.schema import DEFAULT_TABLE_SIZE
from dupscan.index.exceptions import (
    AllocationError,
    AlreadyInitializedError,
    NotInitializedError,
)
from dupscan.index.hasher import bucket_for
from dupscan.index.models import Chain, FileGroup, FileRecord
from dupscan.logging.logger import get_logger

_Bucket = Optional[list[FileRecord]]


def _newest_first(record: FileRecord) -> float:
    return -record.modified_at


class DuplicateIndex:
    """
    Groups files by base name, newest first.

    Usage:
        index = DuplicateIndex(table_size=4096)
        index.initialize()
        index.insert("/a/photo.jpg", 100.0)
        index.insert("/b/photo.jpg", 200.0)
        index.find("photo.jpg")   # (/b/photo.jpg @200, /a/photo.jpg @100)
        index.release()

    Or as a context manager, which initializes on enter and releases on exit.

    With strict_names (the default) find() and groups() only return records
    whose base name equals the one asked for, so two names that happen to
    collide in the same bucket are kept apart. With strict_names=False they
    return the whole bucket, colliding names included.

    `count` is read as a property (`index.count`, or `len(index)`), not
    called. It is zero whenever the index is uninitialized.
    """

    def __init__(self, table_size: int = DEFAULT_TABLE_SIZE, strict_names: bool = True) -> None:
        if table_size < 1:
            raise ValueError(f"table_size must be >= 1, got {table_size}")
        self._table_size = table_size
        self._strict_names = strict_names
        self._buckets: Optional[list[_Bucket]] = None
        self._count = 0

    @property
    def table_size(self) -> int:
        return self._table_size

    @property
    def strict_names(self) -> bool:
        return self._strict_names

    @property
    def is_ready(self) -> bool:
        """True between a successful initialize() and the matching release()."""
        return self._buckets is not None

    @property
    def count(self) -> int:
        """Number of records inserted since initialize(). Zero when uninitialized."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __enter__(self) -> "DuplicateIndex":
        self.initialize()
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self.is_ready:
            self.release()

    def _require_ready(self, operation: str) -> list[_Bucket]:
        if self._buckets is None:
            raise NotInitializedError(operation)
        return self._buckets

    def initialize(self) -> None:
        """
        Allocate `table_size` empty buckets.

        Raises:
            AlreadyInitializedError: If the index is already Ready.
            AllocationError: If the bucket array can't be allocated. The index
                             stays uninitialized.
        """
        if self._buckets is not None:
            raise AlreadyInitializedError(
                f"Duplicate index is already initialized with {self._table_size} buckets"
            )

        # Sizes past sys.maxsize overflow instead of running out of memory.
        try:
            buckets: list[_Bucket] = [None] * self._table_size
        except (MemoryError, OverflowError) as err:
            raise AllocationError(
                f"Cannot allocate {self._table_size} buckets for the duplicate index"
            ) from err

        self._buckets = buckets
        self._count = 0
        get_logger("dupscan.index").debug(
            "Duplicate index initialized",
            extra={"table_size": self._table_size, "strict_names": self._strict_names},
        )

    def insert(self, path: str, modified_at: float) -> int:
        """
        Record a file and return the bucket it landed in.

        The chain for that bucket stays sorted newest first. Nothing is ever
        replaced or merged: inserting the same path and timestamp twice
        stores two records.

        Raises:
            NotInitializedError: If called before initialize(). Count is unchanged.
            AllocationError: If the record can't be allocated. Count is unchanged.
        """
        buckets = self._require_ready("insert")

        try:
            record = FileRecord(path=path, modified_at=modified_at)
        except MemoryError as err:
            raise AllocationError(f"Cannot allocate a record for {path}") from err

        bucket = bucket_for(record.name, self._table_size)
        chain = buckets[bucket]
        if chain is None:
            chain = buckets[bucket] = []

        # bisect_right on the negated time lands after every record that is
        # as new or newer, i.e. before the first strictly older one.
        position = bisect.bisect_right(chain, -modified_at, key=_newest_first)
        chain.insert(position, record)
        self._count += 1
        return bucket

    def find(self, name: str) -> Chain:
        """
        Return every record filed under `name`, newest first.

        `name` must be a base name ("photo.jpg", not "/a/photo.jpg"). An
        unknown name gives an empty tuple, not an error. The index is not
        modified.

        Raises:
            NotInitializedError: If the index is not Ready.
        """
        buckets = self._require_ready("find")
        chain = buckets[bucket_for(name, self._table_size)]
        if not chain:
            return ()
        if self._strict_names:
            return tuple(record for record in chain if record.name == name)
        return tuple(chain)

    def enumerate_all(self) -> Iterator[tuple[int, Chain]]:
        """
        Lazily yield (bucket_index, chain) for every bucket in ascending order.

        Empty buckets yield an empty tuple. Each call returns a fresh
        iterator, so the sequence can be walked again as long as nothing is
        inserted in between.

        Raises:
            NotInitializedError: Immediately, if the index is not Ready.
        """
        buckets = self._require_ready("enumerate")
        return self._iter_buckets(buckets)

    @staticmethod
    def _iter_buckets(buckets: list[_Bucket]) -> Iterator[tuple[int, Chain]]:
        for bucket_index, chain in enumerate(buckets):
            yield bucket_index, tuple(chain) if chain else ()

    def groups(self) -> Iterator[FileGroup]:
        """
        Yield one FileGroup per non-empty chain, in bucket order.

        With strict_names a bucket holding colliding names is split into one
        group per name, in order of first appearance in the chain. Each split
        group keeps the chain's newest-first order.

        Raises:
            NotInitializedError: Immediately, if the index is not Ready.
        """
        buckets = self._require_ready("enumerate")
        return self._iter_groups(buckets)

    def _iter_groups(self, buckets: list[_Bucket]) -> Iterator[FileGroup]:
        for bucket_index, chain in self._iter_buckets(buckets):
            if not chain:
                continue
            if not self._strict_names:
                yield FileGroup(bucket=bucket_index, name=chain[0].name, records=chain)
                continue

            by_name: dict[str, list[FileRecord]] = {}
            for record in chain:
                by_name.setdefault(record.name, []).append(record)
            for name, records in by_name.items():
                yield FileGroup(bucket=bucket_index, name=name, records=tuple(records))

    def release(self) -> None:
        """
        Drop every record and chain, then the bucket array itself.

        Afterwards the index is uninitialized with a count of zero and can be
        initialized again.

        Raises:
            NotInitializedError: If the index is already uninitialized. No work is done.
        """
        buckets = self._require_ready("release")
        released = self._count

        for chain in buckets:
            if chain:
                chain.clear()

        self._buckets = None
        self._count = 0
        get_logger("dupscan.index").debug(
            "Duplicate index released",
            extra={"records_released": released},
        )
