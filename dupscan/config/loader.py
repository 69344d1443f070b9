# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config resolution for a dupscan run.

A run's settings come from three layers, later ones winning:
  1. Built-in defaults (DupScanConfig.defaults())
  2. An optional YAML file given with --config
  3. Command-line flags (--table-size, --log-level)

The YAML file replaces the defaults wholesale; pydantic fills in any section
it leaves out. Flags are merged into the raw mapping before validation, so an
override goes through the same schema checks as a value read from disk.

Any failure stops the run before the index is allocated or a single directory
is touched.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from dupscan.config.exceptions import ConfigLoadError, ConfigValidationError
from dupscan.config.schema import DupScanConfig


def _read_mapping(config_path: Path) -> dict[str, Any]:
    """
    Parse a YAML file that must hold a top-level mapping.

    Raises:
        ConfigLoadError: Missing path, directory, unreadable file, bad YAML,
                         or a document that isn't a mapping.
    """
    if not config_path.is_file():
        problem = "is not a file" if config_path.exists() else "does not exist"
        raise ConfigLoadError(f"Config path {config_path} {problem}")

    try:
        with config_path.open(encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"{config_path} must hold a YAML mapping with a 'global' section, "
            f"got {type(parsed).__name__}"
        )
    return parsed


def _validate(raw: dict[str, Any], source: str) -> DupScanConfig:
    try:
        return DupScanConfig.model_validate(raw)
    except ValidationError as err:
        raise ConfigValidationError(f"Config validation failed for {source}:\n{err}") from err


def _override(raw: dict[str, Any], section: str, key: str, value: Any) -> None:
    current = raw.get(section)
    if current is None:
        raw[section] = {key: value}
    elif isinstance(current, dict):
        raw[section] = {**current, key: value}
    # A malformed section is left alone so validation reports it as written.


def resolve_config(
    config_path: Optional[Path] = None,
    table_size: Optional[int] = None,
    log_level: Optional[str] = None,
) -> DupScanConfig:
    """
    Build the frozen config a scan runs with.

    Args:
        config_path: YAML file to load. None means built-in defaults.
        table_size: Replaces index.table_size when given.
        log_level: Replaces global.log_level when given.

    Raises:
        ConfigLoadError: The file couldn't be read or parsed.
        ConfigValidationError: The file or an override fails the schema.
    """
    if config_path is None:
        raw = DupScanConfig.defaults().model_dump(by_alias=True)
        source = "built-in defaults"
    else:
        raw = _read_mapping(config_path)
        source = str(config_path)

    if table_size is None and log_level is None:
        return _validate(raw, source)

    merged = dict(raw)
    if table_size is not None:
        _override(merged, "index", "table_size", table_size)
    if log_level is not None:
        _override(merged, "global", "log_level", log_level)
    return _validate(merged, f"{source} with command-line overrides")