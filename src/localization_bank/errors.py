"""
Error types raised while loading a localization bank.

Parsing errors describe a record whose shape does not match what the bank
expects. They are never recovered locally: a failing record aborts the
load of its source.
"""

from __future__ import annotations


class ParsingError(Exception):
    """Base class for record conversion failures.

    Attributes:
        key: Bank key of the offending record, once known.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.key = key

    def __str__(self) -> str:
        if self.key is None:
            return self.message
        return f"[{self.key}] {self.message}"


class MismatchTypeError(ParsingError):
    """A source value did not have the type expected at an attribute."""

    def __init__(self, attribute: str, expected_type: str, key: str | None = None) -> None:
        self.attribute = attribute
        self.expected_type = expected_type
        super().__init__(
            f"Mismatch type for attribute '{attribute}', expected '{expected_type}'",
            key=key,
        )


class MissingAttributeError(ParsingError):
    """A required attribute is absent (e.g. a language without fallback)."""

    def __init__(self, attribute: str, reason: str, key: str | None = None) -> None:
        self.attribute = attribute
        self.reason = reason
        super().__init__(
            f'Missing attribute \'{attribute}\' for "{reason}"',
            key=key,
        )


class SourceError(Exception):
    """Raised when a data file cannot be read or is not valid YAML."""
