"""Comparison result model."""

from pydantic import BaseModel

from .policy import Severity


class CompareResult(BaseModel):
    """Warnings and errors, in the order the comparison produced them."""

    warnings: list[str] = []
    errors: list[str] = []

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def record(self, severity: Severity, message: str) -> None:
        if severity == Severity.WARNING:
            self.warnings.append(message)
        else:
            self.errors.append(message)
