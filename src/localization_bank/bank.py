"""
Localized bank: records keyed by bank key, and the query layer that
projects them into (key, language, game, text) tuples.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from .errors import MismatchTypeError, ParsingError
from .loader import read_yaml
from .records import BankKey, BankTag, Record, parse_record
from .targets import FALLBACK_GAME, Game, Language
from .text import Text

logger = logging.getLogger("localization-bank")

RecordTuple = tuple[BankKey, Language, Game, Text]
LanguageFilter = Callable[[Language], bool]
TagFilter = Callable[[tuple[BankTag, ...] | None], bool]


def accept_all(_: Any) -> bool:
    return True


class LocalizedBank:
    """Ordered collection of records, keyed by unique bank key.

    Keys are fixed after construction; ``replace`` swaps the whole content.

    Example:
        >>> bank = LocalizedBank.from_raw({
        ...     "title": {"text": {"en": {"": ["F"], "gameA": ["A"]}}},
        ... })
        >>> [(k, l, g, t.render({})) for k, l, g, t in bank.records(filter_game=["gameA", "gameB"])]
        [('title', 'en', 'gameA', 'A'), ('title', 'en', 'gameB', 'F')]
    """

    def __init__(self, records: Mapping[BankKey, Record] | None = None) -> None:
        self._records: dict[BankKey, Record] = {}
        self._set_records(records or {})

    def _set_records(self, records: Mapping[BankKey, Record]) -> None:
        self._records = {key: records[key] for key in sorted(records)}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_all(raw_data: Mapping[str, Any] | None) -> dict[BankKey, Record]:
        if raw_data is None:
            return {}
        if not isinstance(raw_data, Mapping):
            raise MismatchTypeError("bank", "mapping")

        parsed: dict[BankKey, Record] = {}
        for key, raw in raw_data.items():
            key = str(key)
            try:
                parsed[key] = parse_record(raw)
            except ParsingError as e:
                e.key = key
                logger.error(f"Failed to parse bank record: {e}")
                raise
        return parsed

    @classmethod
    def from_raw(cls, raw_data: Mapping[str, Any] | None) -> LocalizedBank:
        """Build a bank from a parsed source document (key → raw entry).

        Any parsing failure aborts the whole load.

        Raises:
            ParsingError: With ``key`` set to the offending record.
        """
        bank = cls(cls._parse_all(raw_data))
        logger.debug(f"Bank built with {len(bank)} records")
        return bank

    @classmethod
    def load(cls, path: Path) -> LocalizedBank:
        """Load a bank from a YAML file.

        Raises:
            SourceError: If the file cannot be read or is not valid YAML.
            ParsingError: If a record is malformed.
        """
        bank = cls.from_raw(read_yaml(path))
        logger.info(f"Loaded {len(bank)} bank records from {path}")
        return bank

    def replace(self, raw_data: Mapping[str, Any] | None) -> None:
        """Replace every record with those parsed from ``raw_data``.

        The current content is kept if parsing fails.
        """
        parsed = self._parse_all(raw_data)
        self._set_records(parsed)
        logger.debug(f"Bank replaced with {len(self._records)} records")

    # ------------------------------------------------------------------
    # Mapping access
    # ------------------------------------------------------------------

    def keys(self) -> Iterator[BankKey]:
        return iter(self._records)

    def items(self) -> Iterator[tuple[BankKey, Record]]:
        return iter(self._records.items())

    def get(self, key: str) -> Record | None:
        return self._records.get(key)

    def __getitem__(self, key: str) -> Record:
        return self._records[key]

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[BankKey]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def records(
        self,
        filter_language: LanguageFilter = accept_all,
        filter_game: list[Game] | None = None,
        filter_tag: TagFilter = accept_all,
    ) -> list[RecordTuple]:
        """Project the bank into (key, language, game, text) tuples.

        Args:
            filter_language: Called per language of each surviving record.
            filter_game: None to emit the fallback (game ``""``) followed by
                every override. Otherwise a list of games, sorted in place;
                exactly one tuple is emitted per requested game, using the
                override when there is one and the fallback otherwise.
            filter_tag: Called once per record with its tags (None if untagged).

        Returns:
            Tuples in bank key order, then language order.
        """
        if filter_game is not None:
            filter_game.sort()

        result: list[RecordTuple] = []
        for key, record in self._records.items():
            if not filter_tag(record.tag):
                continue
            for language, language_record in record.text.items():
                if not filter_language(language):
                    continue
                overrides = language_record.games
                if filter_game is None:
                    result.append((key, language, FALLBACK_GAME, language_record.fallback))
                    result.extend((key, language, game, text) for game, text in overrides)
                    continue
                for game in filter_game:
                    override = language_record.get(game)
                    if override is None:
                        override = language_record.fallback
                    result.append((key, language, game, override))
        return result

    def references(self) -> dict[BankKey, set[BankKey]]:
        """Map each key to the set of keys referenced by any of its texts."""
        return {
            key: {ref for text in record.texts() for ref in text.get_references()}
            for key, record in self._records.items()
        }

    def uncache_all(self) -> None:
        """Clear the actualized string of every text in the bank."""
        for record in self._records.values():
            for text in record.texts():
                text.uncache()

    def __repr__(self) -> str:
        return f"LocalizedBank(records={len(self._records)})"
