# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for dupscan.

Usage:
    dupscan <dir1> <dir2> ... <dirN>
    dupscan --config configs/dupscan.yaml ~/Pictures /mnt/backup
    dupscan --search photo.jpg ~/Pictures
    dupscan --all --table-size 4096 ./project

Without --search or --all, an interactive menu runs after the scan.
"""

import argparse
import sys
from typing import Optional, Sequence

from dupscan.cli.commands import handle_scan


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Directories are optional here so handle_scan can print usage."""
    parser = argparse.ArgumentParser(
        prog="dupscan",
        description="Group same-named files across directory trees, newest first.",
    )
    parser.add_argument(
        "directories",
        nargs="*",
        metavar="DIR",
        help="Directories to scan recursively.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides config).",
    )
    parser.add_argument(
        "--table-size",
        type=_positive_int,
        default=None,
        dest="table_size",
        help="Number of hash buckets in the duplicate index (overrides config).",
    )
    parser.add_argument(
        "--search",
        type=str,
        default=None,
        metavar="NAME",
        help="Print the group for NAME and exit instead of prompting.",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        default=False,
        help="Print every group and exit instead of prompting.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to."""
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(handle_scan(args))


if __name__ == "__main__":
    main()
