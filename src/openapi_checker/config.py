"""Comparison options and the not-implemented allow-list file."""

from pathlib import Path

from pydantic import BaseModel, field_validator


class CompareOptions(BaseModel):
    """Options for a comparison run.

    `not_implemented` holds lower-cased paths ("/pets") and operations
    ("post /pets") whose absence is reported as a warning.
    """

    not_implemented: frozenset[str] = frozenset()

    @field_validator("not_implemented", mode="before")
    @classmethod
    def _lower(cls, value):
        return frozenset(str(entry).strip().lower() for entry in value or ())


def load_not_implemented(file_path: Path | None) -> set[str]:
    """Read a newline-delimited allow-list, one path or 'verb path' per line.

    Blank lines and lines starting with '#' are skipped.
    """
    if file_path is None:
        return set()

    entries = set()
    for line in file_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.add(line.lower())
    return entries
