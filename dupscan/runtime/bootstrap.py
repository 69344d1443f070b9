# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for dupscan.

The one-time setup that happens before the index is allocated:
  1. Configure the root `dupscan` logger from the resolved config
  2. Log a startup line describing the scan environment
  3. Warn if max_path_length promises paths the OS won't stat

After bootstrap, every module's `get_logger("dupscan.<area>")` writes
structured JSON to stderr at the configured level.
"""

import logging
from pathlib import Path

from dupscan.config.schema import DupScanConfig
from dupscan.logging.logger import ROOT_LOGGER_NAME, get_logger
from dupscan.runtime.environment import get_scan_environment


def bootstrap(config: DupScanConfig) -> logging.Logger:
    """
    Run the bootstrap sequence and return the configured root logger.

    Command-line overrides are already merged into `config` by
    resolve_config, so the log level here is final.

    Raises:
        ValueError: Unknown log level name.
        OSError: The log file can't be opened.
    """
    global_config = config.global_config
    log_file = Path(global_config.log_file) if global_config.log_file is not None else None
    logger = get_logger(ROOT_LOGGER_NAME, log_level=global_config.log_level, log_file=log_file)

    environment = get_scan_environment()
    logger.debug("dupscan bootstrap complete", extra=environment._asdict())

    if environment.path_max is not None and config.scan.max_path_length > environment.path_max:
        logger.warning(
            "max_path_length is above the OS path limit",
            extra={
                "max_path_length": config.scan.max_path_length,
                "path_max": environment.path_max,
            },
        )
    return logger
