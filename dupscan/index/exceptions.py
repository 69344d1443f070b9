# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised by the duplicate index.

Every lifecycle violation is raised as one of these rather than crashing
on a None bucket array, so callers can report it and carry on.
"""


class DuplicateIndexError(Exception):
    """Base for all duplicate index errors."""


class AllocationError(DuplicateIndexError):
    """
    Raised when the bucket array or a file record cannot be allocated.
    Fatal when it happens at initialize, skip-the-record during a scan.
    """


class NotInitializedError(DuplicateIndexError):
    """Raised when an operation needs a Ready index but the index is uninitialized."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: duplicate index is not initialized")
        self.operation = operation


class AlreadyInitializedError(DuplicateIndexError):
    """Raised when initialize is called on an index that is already Ready."""
