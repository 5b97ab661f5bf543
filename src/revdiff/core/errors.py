"""Exceptions raised inside the diff core; caught at the normalizer and pipeline boundary"""

from typing import Any


class DiffError(Exception):
    """Base exception for diff operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


class MalformedPatchError(DiffError):
    """Provider patch cannot be parsed or does not match its declared path."""


class ContentFetchError(DiffError):
    """A before/after blob could not be fetched."""


class DiffSizeError(DiffError):
    """Input exceeds the configured size limits."""


class BinaryContentError(DiffError):
    """Input is binary; line differencing does not apply."""
