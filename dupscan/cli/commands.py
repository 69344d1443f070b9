# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The scan command: load config, build the index, walk, query, tear down.

Normal output (progress lines, the scan summary, the menu and query
results) goes to stdout. Diagnostics go through the structured logger on
stderr.
"""

import argparse
import logging
import sys
from functools import partial
from pathlib import Path
from typing import Optional, TextIO, Union

from dupscan.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, USER_ERROR
from dupscan.cli.prompt import PROGRAM_NAME, run_prompt
from dupscan.config.exceptions import ConfigError
from dupscan.config.loader import resolve_config
from dupscan.config.schema import DupScanConfig
from dupscan.index.exceptions import DuplicateIndexError, NotInitializedError
from dupscan.index.table import DuplicateIndex
from dupscan.logging.logger import get_logger
from dupscan.runtime.bootstrap import bootstrap
from dupscan.scan.report import write_all_groups, write_search
from dupscan.scan.walker import scan_roots

USAGE = (
    "(Type/Drag) in directories to scan delimited by spaces.\n"
    f"\tI.E: {PROGRAM_NAME} <dir1> <dir2> ... <dirN>\n"
)


def _load_and_bootstrap(
    args: argparse.Namespace,
) -> tuple[int, Optional[DupScanConfig], logging.Logger]:
    """
    Shared setup: resolve config (defaults, file, flags), then run bootstrap.

    Returns (exit_code, config, logger). If exit_code is not SUCCESS, the
    caller should return it immediately.
    """
    try:
        config = resolve_config(
            Path(args.config) if args.config is not None else None,
            table_size=args.table_size,
            log_level=args.log_level,
        )
    except ConfigError as err:
        # Bootstrap hasn't run, so configure the logger from the flag alone.
        logger = get_logger("dupscan", log_level=args.log_level or "INFO")
        logger.error("Configuration error", extra={"error": str(err)})
        return CONFIG_ERROR, None, logger

    try:
        logger = bootstrap(config)
    except (OSError, ValueError) as err:
        logger = get_logger("dupscan", log_level="INFO")
        logger.error("Bootstrap failed", extra={"error": str(err)})
        return CONFIG_ERROR, None, logger

    return SUCCESS, config, logger


def _announce_root(stdout: TextIO, directory: Union[str, Path]) -> None:
    stdout.write(f"{PROGRAM_NAME}: Scanning top-level directory {directory}\n")


def _run_queries(
    args: argparse.Namespace,
    index: DuplicateIndex,
    config: DupScanConfig,
    stdin: TextIO,
    stdout: TextIO,
) -> None:
    """One-shot queries from flags, or the interactive prompt when none were given."""
    if args.search is None and not args.all:
        run_prompt(index, stdin, stdout, config.scan.max_name_length)
        return

    if args.all:
        write_all_groups(index, stdout)
    if args.search is not None:
        name = args.search[: config.scan.max_name_length]
        stdout.write(f"\nSearching for {name}\n")
        write_search(index, name, stdout)


def handle_scan(
    args: argparse.Namespace,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Scan every directory in args.directories, then answer queries about duplicates."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    if not args.directories:
        stdout.write(f"{PROGRAM_NAME}: {USAGE}")
        return USER_ERROR

    exit_code, config, logger = _load_and_bootstrap(args)
    if exit_code != SUCCESS or config is None:
        return exit_code

    index = DuplicateIndex(
        table_size=config.index.table_size,
        strict_names=config.index.strict_names,
    )
    try:
        index.initialize()
    except DuplicateIndexError as err:
        logger.error("Couldn't start up the file table", extra={"error": str(err)})
        return RUNTIME_ERROR

    try:
        stats = scan_roots(
            args.directories,
            index,
            config.scan.max_path_length,
            on_root=partial(_announce_root, stdout),
        )
        logger.debug("All top-level directories done", extra=stats._asdict())

        stdout.write(f"{PROGRAM_NAME}: Finished scanning ({index.count} files found).\n")
        _run_queries(args, index, config, stdin, stdout)
    finally:
        try:
            index.release()
        except NotInitializedError as err:
            logger.error("Problem releasing the file table", extra={"error": str(err)})

    return SUCCESS
