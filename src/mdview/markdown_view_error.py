"""Exception classes for markdown view operations."""

from typing import Dict


class MarkdownViewError(Exception):
    """Base class for markdown view exceptions."""

    def __init__(self, message: str, details: Dict | None = None) -> None:
        """
        Initialize markdown view error.

        Args:
            message: Error message
            details: Optional dictionary of additional error details
        """
        super().__init__(message)
        self.details = details or {}


class MarkdownParseError(MarkdownViewError):
    """Exception raised when markdown text cannot be parsed into a document tree."""


class NoMatchingRendererError(MarkdownViewError):
    """Exception raised when no block renderer accepts a flattened block."""
