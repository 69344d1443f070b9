# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Recursive directory walker that feeds the duplicate index.

Starting from a root path, every entry is stat-ed (following symlinks).
Directories are descended into, regular files are inserted into the index
with their mtime, and everything else (sockets, FIFOs, devices) is skipped.

The walk never aborts because of a single bad entry. Anything that can go
wrong per entry is turned into a ScanError, logged as a warning, counted,
and the walk moves on to the next sibling:
  - InaccessibleEntryError: stat or listing failed (permissions, broken link)
  - PathTooLongError: the joined path would exceed max_path_length
  - AllocationError from the index: the record couldn't be stored

Directory listings are sorted so the same tree always produces the same
insert order. The walk uses an explicit stack, so tree depth is bounded
by max_path_length rather than by Python's recursion limit.
"""

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, NamedTuple, Optional, Union

from dupscan.config.schema import DEFAULT_MAX_PATH_LENGTH
from dupscan.index.exceptions import AllocationError
from dupscan.index.table import DuplicateIndex
from dupscan.logging.logger import get_logger

_SELF_OR_PARENT = (".", "..")


class ScanError(Exception):
    """Base for recoverable per-entry scan failures."""

    def __init__(self, path: Union[str, Path], message: str) -> None:
        super().__init__(message)
        self.path = str(path)


class InaccessibleEntryError(ScanError):
    """An entry could not be stat-ed or a directory could not be listed."""

    def __init__(self, path: Union[str, Path], reason: OSError) -> None:
        super().__init__(path, f"Can't access {path}: {reason.strerror or reason}")
        self.reason = reason


class PathTooLongError(ScanError):
    """The full path of an entry would be longer than the configured maximum."""

    def __init__(self, path: Union[str, Path], limit: int) -> None:
        super().__init__(path, f"Path of {path} exceeds the {limit} character limit")
        self.limit = limit


class ScanStats(NamedTuple):
    """What one or more scans did."""

    files_indexed: int
    directories_scanned: int
    entries_skipped: int


@dataclass
class _Counters:
    files: int = 0
    directories: int = 0
    skipped: int = 0

    def freeze(self) -> ScanStats:
        return ScanStats(
            files_indexed=self.files,
            directories_scanned=self.directories,
            entries_skipped=self.skipped,
        )


# A directory's identity on disk, used to spot symlink loops.
_DirKey = tuple[int, int]


def _stat_entry(path: Path) -> os.stat_result:
    try:
        return path.stat()
    except OSError as err:
        raise InaccessibleEntryError(path, err) from err


def _list_directory(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as err:
        raise InaccessibleEntryError(directory, err) from err


def _check_path_length(directory: Path, name: str, max_path_length: int) -> None:
    # Counts the separator and a terminator.
    if len(str(directory)) + len(name) + 2 > max_path_length:
        raise PathTooLongError(directory / name, max_path_length)


def scan_tree(
    root: Union[str, Path],
    index: DuplicateIndex,
    max_path_length: int = DEFAULT_MAX_PATH_LENGTH,
) -> ScanStats:
    """
    Walk one root and insert every regular file beneath it into the index.

    `root` may itself be a file, in which case just that file is indexed.
    A root that can't be accessed is logged and skipped like any other entry.

    Returns:
        ScanStats for this root.

    Raises:
        NotInitializedError: If the index is not Ready. This is a caller bug,
                             not a per-entry problem, so it is not swallowed.
    """
    logger = get_logger("dupscan.scan")
    counters = _Counters()

    stack: list[tuple[Path, frozenset[_DirKey]]] = [(Path(root), frozenset())]
    while stack:
        path, ancestors = stack.pop()

        try:
            entry_stat = _stat_entry(path)
        except ScanError as err:
            logger.warning("Skipping entry", extra={"path": err.path, "error": str(err)})
            counters.skipped += 1
            continue

        if stat.S_ISDIR(entry_stat.st_mode):
            key = (entry_stat.st_dev, entry_stat.st_ino)
            if key in ancestors:
                logger.warning(
                    "Skipping directory already on the walk path",
                    extra={"path": str(path)},
                )
                counters.skipped += 1
                continue

            logger.info("Scanning directory", extra={"path": str(path)})
            try:
                children = _list_directory(path)
            except ScanError as err:
                logger.warning("Skipping entry", extra={"path": err.path, "error": str(err)})
                counters.skipped += 1
                continue
            counters.directories += 1

            child_ancestors = ancestors | {key}
            pending: list[tuple[Path, frozenset[_DirKey]]] = []
            for child in children:
                if child.name in _SELF_OR_PARENT:
                    continue
                try:
                    _check_path_length(path, child.name, max_path_length)
                except ScanError as err:
                    logger.warning("Skipping entry", extra={"path": err.path, "error": str(err)})
                    counters.skipped += 1
                    continue
                pending.append((child, child_ancestors))

            # Reversed so the sorted listing is popped in order.
            stack.extend(reversed(pending))

        elif stat.S_ISREG(entry_stat.st_mode):
            try:
                index.insert(str(path), entry_stat.st_mtime)
            except AllocationError as err:
                logger.warning(
                    "File couldn't be logged",
                    extra={"path": str(path), "error": str(err)},
                )
                counters.skipped += 1
                continue
            counters.files += 1

        else:
            logger.debug("Skipping non-regular file", extra={"path": str(path)})
            counters.skipped += 1

    stats = counters.freeze()
    logger.debug("Finished scanning root", extra={"root": str(root), **stats._asdict()})
    return stats


def scan_roots(
    roots: Iterable[Union[str, Path]],
    index: DuplicateIndex,
    max_path_length: int = DEFAULT_MAX_PATH_LENGTH,
    on_root: Optional[Callable[[Union[str, Path]], None]] = None,
) -> ScanStats:
    """
    Scan several roots in order and return the summed stats.

    `on_root` is called with each root just before it is walked.
    """
    totals = _Counters()
    for root in roots:
        if on_root is not None:
            on_root(root)
        stats = scan_tree(root, index, max_path_length)
        totals.files += stats.files_indexed
        totals.directories += stats.directories_scanned
        totals.skipped += stats.entries_skipped
    return totals.freeze()
