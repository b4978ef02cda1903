"""Error kinds surfaced by the document generation pipeline."""

from __future__ import annotations

from typing import Optional


class GenerationError(RuntimeError):
    """Base class for failures that abort a generation run."""


class ParseFailure(GenerationError):
    """Raised when a source file cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class IOFailure(GenerationError):
    """Raised when the rule store or output document cannot be read/written."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class ValidationFailure(GenerationError):
    """Raised for invalid run inputs, before any pipeline work begins."""
