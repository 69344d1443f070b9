# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for dupscan tests.

Fixtures here are available to every test file automatically.
We keep them minimal, only the stuff that multiple test modules need.
"""

import logging
import os
import textwrap
from pathlib import Path
from typing import Callable, Iterator

import pytest

from dupscan.index.table import DuplicateIndex


@pytest.fixture(autouse=True)
def _reset_dupscan_loggers() -> Iterator[None]:
    """
    Drop handlers attached during a test so the next test's get_logger call
    binds a fresh stderr handler to that test's captured stream.
    """
    yield
    for name in list(logging.Logger.manager.loggerDict):
        if name == "dupscan" or name.startswith("dupscan."):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.propagate = True
            logger.setLevel(logging.NOTSET)


@pytest.fixture()
def index() -> Iterator[DuplicateIndex]:
    """A small Ready index, released afterwards if the test left it Ready."""
    idx = DuplicateIndex(table_size=1024)
    idx.initialize()
    yield idx
    if idx.is_ready:
        idx.release()


@pytest.fixture()
def make_file() -> Callable[[Path, float], Path]:
    """Create a file (and its parents) with a fixed mtime."""

    def _make(path: Path, mtime: float) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(path.name, encoding="utf-8")
        os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture()
def photo_tree(tmp_path: Path, make_file: Callable[[Path, float], Path]) -> Path:
    """
    A tree with one duplicated name across three directories and one unique file:

        root/a/photo.jpg   mtime 100
        root/b/photo.jpg   mtime 200
        root/c/d/photo.jpg mtime 50
        root/c/notes.txt   mtime 10
    """
    root = tmp_path / "root"
    make_file(root / "a" / "photo.jpg", 100.0)
    make_file(root / "b" / "photo.jpg", 200.0)
    make_file(root / "c" / "d" / "photo.jpg", 50.0)
    make_file(root / "c" / "notes.txt", 10.0)
    return root


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation, plus a small table."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          log_level: "DEBUG"
        index:
          table_size: 64
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (missing required field)."""
    config_content = textwrap.dedent("""\
        global:
          log_level: "INFO"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
