"""Exception types raised by covgap."""

from __future__ import annotations


class CovgapError(Exception):
    """Base exception for covgap errors."""


class CoverageParseError(CovgapError):
    """Raised when a coverage export cannot be deserialized."""


class MalformedInputError(CovgapError):
    """Raised when one file's coverage data is structurally invalid."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize with the offending file path and a description.

        Args:
            path: File path as it appears in the coverage data.
            message: What is wrong with the file's data.
        """
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
