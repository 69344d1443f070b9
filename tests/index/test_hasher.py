# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hasher tests.

FNV-1a has published test vectors, so the raw hash is checked against them.
Bucket mapping is checked for range, determinism and the empty-name case.
"""

import os

import pytest

from dupscan.index.hasher import FNV_OFFSET_BASIS, base_name, bucket_for, fnv1a_32


class TestFnv1a:
    def test_empty_input_is_offset_basis(self) -> None:
        assert fnv1a_32(b"") == 0x811C9DC5

    def test_known_vector_single_byte(self) -> None:
        assert fnv1a_32(b"a") == 0xE40C292C

    def test_known_vector_word(self) -> None:
        assert fnv1a_32(b"foobar") == 0xBF9CF968

    def test_result_fits_in_32_bits(self) -> None:
        assert 0 <= fnv1a_32(b"x" * 10_000) <= 0xFFFFFFFF


class TestBucketFor:
    @pytest.mark.parametrize("table_size", [1, 2, 7, 1024, 512_000])
    def test_bucket_is_in_range(self, table_size: int) -> None:
        for name in ["photo.jpg", "README.md", "a", "IMG_0001.JPG", "ünïcødé.txt"]:
            assert 0 <= bucket_for(name, table_size) < table_size

    def test_same_name_same_bucket(self) -> None:
        assert bucket_for("photo.jpg", 512_000) == bucket_for("photo.jpg", 512_000)

    def test_empty_name_does_not_crash(self) -> None:
        assert bucket_for("", 1000) == FNV_OFFSET_BASIS % 1000

    def test_table_size_of_one_maps_everything_to_zero(self) -> None:
        assert bucket_for("anything", 1) == 0

    def test_zero_table_size_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            bucket_for("photo.jpg", 0)

    def test_undecodable_name_still_hashes(self) -> None:
        name = b"bad\xffname".decode("utf-8", errors="surrogateescape")
        assert 0 <= bucket_for(name, 97) < 97


class TestBaseName:
    def test_strips_directories(self) -> None:
        assert base_name("/a/b/photo.jpg") == "photo.jpg"

    def test_plain_name_is_unchanged(self) -> None:
        assert base_name("photo.jpg") == "photo.jpg"

    def test_trailing_separator_gives_empty_name(self) -> None:
        assert base_name("/a/b/") == ""

    @pytest.mark.skipif(os.name != "nt", reason="backslash only splits on Windows")
    def test_windows_separators(self) -> None:
        assert base_name("C:\\Users\\me\\photo.jpg") == "photo.jpg"

    @pytest.mark.skipif(os.name == "nt", reason="backslash is a separator on Windows")
    def test_backslash_is_part_of_a_posix_name(self) -> None:
        assert base_name("/a/x\\photo.jpg") == "x\\photo.jpg"
