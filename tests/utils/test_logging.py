# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the structured JSON logger.

We verify:
  - output is valid JSON on stderr, nothing on stdout
  - all mandatory fields are present (ts, level, module, msg)
  - log levels filter correctly
  - extra context fields get merged into the JSON
  - child loggers inherit the root dupscan configuration
"""

import json
from pathlib import Path

import pytest

from dupscan.logging.logger import get_logger


class TestJsonOutput:
    def test_output_is_valid_json_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("dupscan.test.json", log_level="INFO")
        logger.info("hello")
        captured = capsys.readouterr()

        assert captured.out == ""
        parsed = json.loads(captured.err.strip())
        assert isinstance(parsed, dict)

    def test_mandatory_fields_are_present(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("dupscan.test.fields", log_level="INFO")
        logger.info("test message")
        parsed = json.loads(capsys.readouterr().err.strip())

        assert "ts" in parsed
        assert parsed["level"] == "INFO"
        assert parsed["module"] == "dupscan.test.fields"
        assert parsed["msg"] == "test message"

    def test_extra_fields_are_included(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("dupscan.test.extra", log_level="DEBUG")
        logger.warning("Skipping entry", extra={"path": "/x/y", "error": "denied"})
        parsed = json.loads(capsys.readouterr().err.strip())

        assert parsed["path"] == "/x/y"
        assert parsed["error"] == "denied"


class TestLogLevelFiltering:
    def test_debug_messages_hidden_at_info_level(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("dupscan.test.level_filter", log_level="INFO")
        logger.debug("this should not appear")
        assert capsys.readouterr().err.strip() == ""

    def test_reconfiguring_updates_level_without_stacking(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        get_logger("dupscan.test.reconfigure", log_level="WARNING")
        logger = get_logger("dupscan.test.reconfigure", log_level="DEBUG")
        logger.debug("once")

        assert len(logger.handlers) == 1
        assert capsys.readouterr().err.count("once") == 1


class TestHierarchy:
    def test_child_inherits_root_configuration(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        get_logger("dupscan", log_level="WARNING")
        child = get_logger("dupscan.scan")
        child.info("hidden")
        child.warning("shown")

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["module"] == "dupscan.scan"


class TestFileOutput:
    def test_logs_are_written_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "test.log"
        logger = get_logger("dupscan.test.file_output", log_level="INFO", log_file=log_file)
        logger.info("file log test")

        content = log_file.read_text(encoding="utf-8")
        assert json.loads(content.strip())["msg"] == "file log test"


class TestInvalidLogLevel:
    def test_invalid_level_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("dupscan.test.invalid", log_level="INVALID")
