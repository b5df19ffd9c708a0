"""Exceptions raised before a comparison can start."""

from pathlib import Path


class CheckerError(Exception):
    """Base exception for openapi-checker errors."""


class BadSpecificationError(CheckerError):
    """Raised when an API description can not be read or resolved."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Error in {path}: {reason}")
        self.path = path
        self.reason = reason
