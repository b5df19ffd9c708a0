"""Severity classification for missing paths and operations."""

from enum import Enum

from openapi_checker.config import CompareOptions


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class SuppressionPolicy:
    """Downgrades a missing path or operation to a warning when it is allow-listed.

    Only missing paths and missing operations consult the allow-list. Every
    other discrepancy is an error once reached.
    """

    def __init__(self, options: CompareOptions | None = None):
        self.options = options or CompareOptions()

    def is_suppressed(self, key: str) -> bool:
        return key.lower() in self.options.not_implemented

    def classify(self, key: str) -> Severity:
        """Classify a normalized key: a path, or '<verb> <path>'."""
        return Severity.WARNING if self.is_suppressed(key) else Severity.ERROR

    @staticmethod
    def path_key(path: str) -> str:
        return path.lower()

    @staticmethod
    def operation_key(verb: str, path: str) -> str:
        return f"{verb.lower()} {path.lower()}"
