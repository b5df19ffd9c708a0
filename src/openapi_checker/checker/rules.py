"""Matching rules shared by the comparison engine."""

from typing import Iterable, TypeVar

T = TypeVar("T")


def paths_equal(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def names_equal(a: str, b: str) -> bool:
    """Parameter and property names match case-insensitively."""
    return a.lower() == b.lower()


def type_compatible(actual: str, declared: str) -> bool:
    """Check an implementation type against the declared reference type.

    A declared 'number' accepts an actual 'integer', never the other way
    around. An empty declared type (combinator schema) accepts anything.
    """
    if not declared:
        return True
    return actual == declared or (declared == "number" and actual == "integer")


def find_path(path: str, paths: Iterable[str]) -> str | None:
    """Return the first key of `paths` equal to `path`, ignoring case."""
    return next((p for p in paths if paths_equal(p, path)), None)


def find_named(name: str, items: dict[str, T]) -> T | None:
    """Look up a mapping entry by case-insensitive name."""
    if name in items:
        return items[name]
    return next((value for key, value in items.items() if names_equal(key, name)), None)
