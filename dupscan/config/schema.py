# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for dupscan.

Each config section is a frozen pydantic model. Frozen means the settings the
scan started with are the settings it finishes with; nothing reconfigures the
index halfway through a walk.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

CONFIG_VERSION = "1.0.0"

DEFAULT_TABLE_SIZE = 512_000
DEFAULT_MAX_PATH_LENGTH = 4096
DEFAULT_MAX_NAME_LENGTH = 255


class GlobalConfig(BaseModel):
    """Cross-cutting settings: schema version and where diagnostics go."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path that mirrors the stderr diagnostics",
    )


class IndexConfig(BaseModel):
    """
    Shape of the duplicate index.

    The table never resizes, so table_size trades memory for collision rate
    for the whole run. strict_names controls whether lookups confirm the base
    name after hashing or return the raw bucket.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    table_size: int = Field(
        default=DEFAULT_TABLE_SIZE,
        ge=1,
        description="Number of buckets in the fixed-size hash table",
    )
    strict_names: bool = Field(
        default=True,
        description="Filter lookups by exact base name after hashing",
    )


class ScanConfig(BaseModel):
    """Limits applied while walking directory trees and reading queries."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    max_path_length: int = Field(
        default=DEFAULT_MAX_PATH_LENGTH,
        ge=2,
        description="Entries whose full path would exceed this are skipped",
    )
    max_name_length: int = Field(
        default=DEFAULT_MAX_NAME_LENGTH,
        ge=1,
        description="Longest name token accepted by the interactive search",
    )


class DupScanConfig(BaseModel):
    """
    Top-level config container.

    Only `global:` is required in YAML. The index and scan sections fall back
    to their defaults when omitted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    index: IndexConfig = Field(default_factory=IndexConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)

    @classmethod
    def defaults(cls) -> "DupScanConfig":
        """The configuration used when no --config file is given."""
        return cls.model_validate({"global": {"config_version": CONFIG_VERSION}})
