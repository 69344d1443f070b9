# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Plain-text rendering of duplicate groups.

This is user-facing output, so it goes to the output stream the caller hands
in (stdout from the CLI) rather than through the JSON logger. A group looks
like:

    FILE (x3): photo.jpg
    	1:	Tue Oct 14 09:12:44 2026        /b/photo.jpg
    	2:	Mon Oct 13 17:03:10 2026        /a/photo.jpg
    	3:	Sun Jan  4 11:00:00 2026        /c/photo.jpg

followed by a blank line. Times are local, in ctime() format.
"""

import time
from typing import Iterable, TextIO

from dupscan.index.models import FileRecord
from dupscan.index.table import DuplicateIndex

NO_MATCH_MESSAGE = "Sorry, no match found!"


def format_timestamp(modified_at: float) -> str:
    """Render a POSIX timestamp the way ctime() does, without the newline."""
    return time.ctime(modified_at)


def format_group(name: str, records: Iterable[FileRecord]) -> str:
    """Render one group. Returns "" for an empty group."""
    members = list(records)
    if not members:
        return ""

    lines = [f"FILE (x{len(members)}): {name:<64}"]
    for sequence, record in enumerate(members, start=1):
        lines.append(
            f"\t{sequence}:\t{format_timestamp(record.modified_at):<32}{record.path:<32}"
        )
    return "\n".join(lines) + "\n\n"


def write_search(index: DuplicateIndex, name: str, out: TextIO) -> int:
    """
    Print the group matching `name`, or the no-match message.

    Returns the number of records printed.
    """
    records = index.find(name)
    if not records:
        out.write(f"{NO_MATCH_MESSAGE}\n")
        return 0

    # Without strict names a bucket can mix names; the head names the group.
    out.write(format_group(records[0].name, records))
    return len(records)


def write_all_groups(index: DuplicateIndex, out: TextIO) -> int:
    """Print every non-empty group in bucket order. Returns the number of groups."""
    printed = 0
    for group in index.groups():
        out.write(format_group(group.name, group.records))
        printed += 1
    return printed
