# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Value types stored in and returned by the duplicate index."""

from dataclasses import dataclass, field
from typing import NamedTuple

from dupscan.index.hasher import base_name


@dataclass(frozen=True)
class FileRecord:
    """
    One scanned file: its full path and last-modified time.

    `name` is derived from the path at construction so lookups can confirm
    an exact base-name match after hashing without re-splitting paths.
    """

    path: str
    modified_at: float
    name: str = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", base_name(self.path))


Chain = tuple[FileRecord, ...]


class FileGroup(NamedTuple):
    """All records sharing one base name, most recently modified first."""

    bucket: int
    name: str
    records: Chain

    @property
    def size(self) -> int:
        return len(self.records)
