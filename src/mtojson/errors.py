"""Exception hierarchy for mtojson.

Running out of buffer capacity is not an exception: ``generate_json``
reports it by returning ``0``.
"""

from __future__ import annotations


class MtojsonError(Exception):
    """Base class for all mtojson errors."""


class TreeError(MtojsonError, TypeError):
    """A tree node does not match its declared type tag."""


class NestingTooDeep(MtojsonError):
    """The tree nests objects/arrays deeper than the configured limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"tree nesting exceeds max_depth={limit}")
        self.limit = limit


class TreeLoadError(MtojsonError, ValueError):
    """A tree document could not be turned into entries."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path or '<root>'}: {message}")
        self.path = path
