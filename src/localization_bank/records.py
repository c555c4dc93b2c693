"""
Localized records and their conversion from raw source entries.

A raw entry maps each language to a mapping from game to a list of
fragments. The empty game key holds the language's fallback text, which
is mandatory.
"""

from __future__ import annotations

import logging
import sys
from bisect import bisect_left
from dataclasses import dataclass, field
from operator import itemgetter
from typing import Any, Iterator, Mapping

from pydantic import BaseModel, Field, ValidationError

from .errors import MismatchTypeError, MissingAttributeError, ParsingError
from .pieces import piece_from_value
from .targets import FALLBACK_GAME, Game, Language
from .text import Text

logger = logging.getLogger("localization-bank")

BankKey = str
BankTag = str

# pydantic error types → type names reported in MismatchTypeError
_EXPECTED_TYPES: dict[str, str] = {
    "string_type": "string",
    "dict_type": "mapping",
    "list_type": "list",
    "model_type": "mapping",
    "model_attributes_type": "mapping",
}


class RawRecord(BaseModel):
    """Shape of one bank entry as read from the source document."""
    text: dict[str, dict[str, list[Any]]] = Field(
        ..., description="Language → game → list of fragments"
    )
    tag: list[str] | None = Field(default=None, description="Free-form tags")


@dataclass
class LanguageRecord:
    """Texts of one record for one language.

    Attributes:
        fallback: Text used for every game without an override.
        games: Per-game overrides, unique and sorted by game.
    """
    fallback: Text
    games: tuple[tuple[Game, Text], ...] = ()

    def __post_init__(self) -> None:
        self.games = tuple(sorted(self.games, key=itemgetter(0)))
        names = [game for game, _ in self.games]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate game overrides: {names}")
        if FALLBACK_GAME in names:
            raise ValueError("The fallback game key cannot be an override")

    def get(self, game: str) -> Text | None:
        """Return the override for ``game``, or None."""
        idx = bisect_left(self.games, game, key=itemgetter(0))
        if idx < len(self.games) and self.games[idx][0] == game:
            return self.games[idx][1]
        return None

    def text_for(self, game: str) -> Text:
        """Return the override for ``game``, falling back to the fallback text."""
        if game == FALLBACK_GAME:
            return self.fallback
        override = self.get(game)
        return override if override is not None else self.fallback

    def texts(self) -> Iterator[Text]:
        yield self.fallback
        for _, text in self.games:
            yield text


@dataclass
class Record:
    """A bank entry: texts per language, plus optional tags."""
    text: dict[Language, LanguageRecord] = field(default_factory=dict)
    tag: tuple[BankTag, ...] | None = None

    def texts(self) -> Iterator[Text]:
        """Iterate over every Text of the record, across languages and games."""
        for language_record in self.text.values():
            yield from language_record.texts()


def _validation_to_parsing_error(error: ValidationError) -> ParsingError:
    """Translate the first pydantic error into the bank's error taxonomy."""
    details = error.errors()[0]
    attribute = ".".join(str(part) for part in details.get("loc", ()))
    if details.get("type") == "missing":
        return MissingAttributeError(attribute, "required")
    expected = _EXPECTED_TYPES.get(details.get("type", ""), details.get("type", "value"))
    return MismatchTypeError(attribute, expected)


def _parse_language(games: Mapping[str, list[Any]]) -> LanguageRecord:
    fallback: Text | None = None
    overrides: list[tuple[Game, Text]] = []
    for game, fragments in games.items():
        text = Text(piece_from_value(fragment) for fragment in fragments)
        if game == FALLBACK_GAME:
            fallback = text
        else:
            overrides.append((sys.intern(game), text))

    if fallback is None:
        raise MissingAttributeError(FALLBACK_GAME, "fallback")

    kept = [(game, text) for game, text in overrides if text != fallback]
    if len(kept) != len(overrides):
        logger.debug(f"Dropped {len(overrides) - len(kept)} override(s) identical to fallback")
    return LanguageRecord(fallback=fallback, games=tuple(kept))


def parse_record(raw: RawRecord | Mapping[str, Any]) -> Record:
    """Convert one raw entry into a Record.

    Args:
        raw: A ``RawRecord`` or a mapping with ``text`` and optional ``tag``.

    Returns:
        The validated Record.

    Raises:
        MismatchTypeError: If a value does not have the expected type.
        MissingAttributeError: If a language has no fallback, or ``text`` is missing.
    """
    if not isinstance(raw, RawRecord):
        if not isinstance(raw, Mapping):
            raise MismatchTypeError("record", "mapping")
        try:
            raw = RawRecord.model_validate(dict(raw))
        except ValidationError as e:
            raise _validation_to_parsing_error(e) from e

    text: dict[Language, LanguageRecord] = {}
    for language, games in raw.text.items():
        text[sys.intern(language)] = _parse_language(games)

    tag = tuple(raw.tag) if raw.tag is not None else None
    return Record(text=text, tag=tag)
