# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the plain-text group rendering."""

import io
import time

from dupscan.index.models import FileRecord
from dupscan.index.table import DuplicateIndex
from dupscan.scan.report import (
    NO_MATCH_MESSAGE,
    format_group,
    write_all_groups,
    write_search,
)


class TestFormatGroup:
    def test_header_and_members(self) -> None:
        records = [FileRecord("/b/photo.jpg", 200.0), FileRecord("/a/photo.jpg", 100.0)]
        text = format_group("photo.jpg", records)
        lines = text.split("\n")

        assert lines[0].startswith("FILE (x2): photo.jpg")
        assert lines[1].startswith(f"\t1:\t{time.ctime(200.0)}")
        assert "/b/photo.jpg" in lines[1]
        assert lines[2].startswith(f"\t2:\t{time.ctime(100.0)}")
        assert "/a/photo.jpg" in lines[2]
        assert text.endswith("\n\n")

    def test_empty_group_renders_nothing(self) -> None:
        assert format_group("photo.jpg", []) == ""


class TestWriteSearch:
    def test_prints_matching_chain(self, index: DuplicateIndex) -> None:
        index.insert("/a/photo.jpg", 100.0)
        index.insert("/b/photo.jpg", 200.0)
        out = io.StringIO()

        printed = write_search(index, "photo.jpg", out)

        assert printed == 2
        text = out.getvalue()
        assert text.index("/b/photo.jpg") < text.index("/a/photo.jpg")

    def test_prints_no_match_message(self, index: DuplicateIndex) -> None:
        index.insert("/a/photo.jpg", 100.0)
        out = io.StringIO()

        assert write_search(index, "nonexistent.txt", out) == 0
        assert out.getvalue() == f"{NO_MATCH_MESSAGE}\n"


class TestWriteAllGroups:
    def test_prints_one_block_per_name(self, index: DuplicateIndex) -> None:
        index.insert("/a/photo.jpg", 100.0)
        index.insert("/b/photo.jpg", 200.0)
        index.insert("/c/notes.txt", 5.0)
        out = io.StringIO()

        assert write_all_groups(index, out) == 2
        text = out.getvalue()
        assert "FILE (x2): photo.jpg" in text
        assert "FILE (x1): notes.txt" in text

    def test_empty_index_prints_nothing(self, index: DuplicateIndex) -> None:
        out = io.StringIO()
        assert write_all_groups(index, out) == 0
        assert out.getvalue() == ""
