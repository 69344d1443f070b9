# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
What the host imposes on a scan.

The walker is shaped by two things it can't control: how the OS encodes
filenames that aren't valid text (these hash through surrogate escapes), and
how long a path the OS will actually stat. Both are captured once at startup
so the log says what the scan ran against.
"""

import os
import platform
import sys
from pathlib import Path
from typing import NamedTuple, Optional, Union


class ScanEnvironment(NamedTuple):
    """Host facts that affect how a tree is walked and hashed."""

    python_version: str
    platform: str
    filesystem_encoding: str
    path_max: Optional[int]


def os_path_max(root: Union[str, Path] = ".") -> Optional[int]:
    """
    Longest path the filesystem holding `root` accepts, or None if unknown.

    Only POSIX exposes this through pathconf. Windows and filesystems that
    don't report a limit give None.
    """
    if not hasattr(os, "pathconf"):
        return None
    try:
        limit = os.pathconf(root, "PC_PATH_MAX")
    except (OSError, ValueError):
        return None
    return limit if limit > 0 else None


def get_scan_environment(root: Union[str, Path] = ".") -> ScanEnvironment:
    return ScanEnvironment(
        python_version=platform.python_version(),
        platform=platform.system(),
        filesystem_encoding=sys.getfilesystemencoding(),
        path_max=os_path_max(root),
    )
