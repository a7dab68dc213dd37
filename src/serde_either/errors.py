"""Typed errors for serde_either."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from serde_either.value import Unexpected


class SerdeEitherError(Exception):
    """Base exception for all serde_either errors."""


class ShapeMismatchError(SerdeEitherError):
    """Raised when a value's top-level shape is not accepted by an either-type."""

    def __init__(self, unexpected: Unexpected, expected: str) -> None:
        """Initialize with the offending value's description and the accepted shapes."""
        self.unexpected = unexpected
        self.expected = expected
        super().__init__(f"invalid type: {unexpected}, expected {expected}")


class InvalidValueError(SerdeEitherError):
    """Raised when a value has an accepted shape but cannot be read as its payload."""

    def __init__(self, unexpected: Unexpected, expected: str) -> None:
        """Initialize with the offending value's description and what was expected."""
        self.unexpected = unexpected
        self.expected = expected
        super().__init__(f"invalid value: {unexpected}, expected {expected}")
