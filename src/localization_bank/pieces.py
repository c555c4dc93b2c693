"""
Pieces: the smallest units of localized text.

A piece is either literal text (``Raw``) or the key of another bank record
whose display string is substituted at resolution time (``Ref``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import MismatchTypeError


@dataclass(frozen=True)
class Piece:
    """A fragment of text. Use ``Raw`` or ``Ref``."""
    content: str

    @property
    def is_reference(self) -> bool:
        return False


@dataclass(frozen=True)
class Raw(Piece):
    """Literal text, used as is."""


@dataclass(frozen=True)
class Ref(Piece):
    """Key of another bank record."""

    @property
    def is_reference(self) -> bool:
        return True


@dataclass(frozen=True)
class TaggedValue:
    """A source value carrying an explicit tag (e.g. YAML ``!ref key``).

    Any tagged string fragment is read as a cross-reference; the tag name
    itself is kept only for diagnostics.
    """
    tag: str
    value: Any


def piece_from_value(value: Any) -> Piece:
    """Convert one raw fragment value into a Piece.

    Raises:
        MismatchTypeError: If the value is neither a plain string nor a
            tagged string.
    """
    if isinstance(value, Piece):
        return value
    if isinstance(value, str):
        return Raw(value)
    if isinstance(value, TaggedValue):
        if isinstance(value.value, str):
            return Ref(value.value)
        raise MismatchTypeError("tagged value", "string")
    raise MismatchTypeError("string value", "string")
