# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Bucket hashing for the duplicate index.

File names are mapped to buckets with 32-bit FNV-1a: start from the offset
basis, then for every byte XOR it in and multiply by the FNV prime, keeping
only the low 32 bits. The result is reduced modulo the table size.

FNV-1a is not cryptographic and doesn't need to be. It is fast, has no
state, and spreads short similar strings ("IMG_0001.jpg", "IMG_0002.jpg")
across the table well enough for a fixed-size index.
"""

import os.path

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
_UINT32_MASK = 0xFFFFFFFF


def fnv1a_32(data: bytes) -> int:
    """Compute the 32-bit FNV-1a hash of raw bytes."""
    accumulator = FNV_OFFSET_BASIS
    for byte in data:
        accumulator ^= byte
        accumulator = (accumulator * FNV_PRIME) & _UINT32_MASK
    return accumulator


def bucket_for(name: str, table_size: int) -> int:
    """
    Map a base name to a bucket index in [0, table_size).

    Names are hashed as UTF-8, with surrogate escapes kept so that
    undecodable filenames from the OS still hash to a stable bucket.
    The empty name hashes to FNV_OFFSET_BASIS % table_size.
    """
    if table_size < 1:
        raise ValueError(f"table_size must be >= 1, got {table_size}")
    digest = fnv1a_32(name.encode("utf-8", errors="surrogateescape"))
    return abs(digest % table_size)


def base_name(path: str) -> str:
    """
    Return the final component of a path.

    Everything after the last separator is the name, so "/a/b/photo.jpg"
    gives "photo.jpg" and a trailing separator gives "". Separators are the
    host's: on POSIX a backslash is an ordinary filename character, on
    Windows both slashes split.
    """
    return os.path.basename(path)
