"""Exception types raised by the product store and its collaborators."""

from __future__ import annotations


class ProductError(Exception):
    """Base class for weather product errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClassMismatch(ProductError):
    """Raised when a bulletin belongs to a different product class than the store."""

    def __init__(self, expected: str, received: str) -> None:
        super().__init__(f"Cannot import different product types: {received} (store holds {expected})")
        self.expected = expected
        self.received = received


IncompatibleProduct = ClassMismatch


class MalformedTimestamp(ProductError, ValueError):
    """Raised when a DDHHMM field cannot be turned into a legal calendar time."""

    def __init__(self, time_field: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed timestamp {time_field!r}{detail}")
        self.time_field = time_field


class SourceUnreadable(ProductError):
    """Raised when an import source cannot be fetched."""

    def __init__(self, source: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot import {source}{detail}")
        self.source = source


__all__ = [
    "ClassMismatch",
    "IncompatibleProduct",
    "MalformedTimestamp",
    "ProductError",
    "SourceUnreadable",
]
