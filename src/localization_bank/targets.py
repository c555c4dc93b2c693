"""
Bidirectional game ↔ language association index.

The index keeps two mirrored, sorted lists: each game with the sorted
languages it targets, and each language with the sorted games it is
targeted by. Languages declared under the reserved empty game key are
"free languages": known, but associated with no game.

Lookups by an unknown game or language are not errors; they return every
known language or game respectively.
"""

from __future__ import annotations

import logging
import sys
from bisect import bisect_left
from operator import itemgetter
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Mapping, TypeVar

from .errors import MismatchTypeError
from .loader import read_yaml

logger = logging.getLogger("localization-bank")

Game = str
Language = str

#: Game key reserved for fallback texts and, in the targets file, for free languages.
FALLBACK_GAME: Game = ""

T = TypeVar("T")

_first = itemgetter(0)


def _find(entries: list[tuple[str, T]], name: str) -> tuple[int, bool]:
    """Return the sorted position of ``name`` and whether it is present."""
    idx = bisect_left(entries, name, key=_first)
    return idx, idx < len(entries) and entries[idx][0] == name


def _insert_or_modify(
    entries: list[tuple[str, T]],
    name: str,
    create: Callable[[], T],
    modify: Callable[[T], None],
) -> None:
    """Modify the entry for ``name`` in place, or insert a new one at its sorted position."""
    idx, found = _find(entries, name)
    if found:
        modify(entries[idx][1])
    else:
        entries.insert(idx, (name, create()))


def _insort_unique(values: list[str], value: str) -> int | None:
    """Insert ``value`` into a sorted list unless present; return its position if inserted."""
    idx = bisect_left(values, value)
    if idx < len(values) and values[idx] == value:
        return None
    values.insert(idx, value)
    return idx


def _remove_sorted(values: list[str], value: str) -> int | None:
    """Remove ``value`` from a sorted list; return its former position, or None if absent."""
    idx = bisect_left(values, value)
    if idx < len(values) and values[idx] == value:
        del values[idx]
        return idx
    return None


class AssociationIndex:
    """Sorted, mirrored index of which languages each game targets.

    Args:
        game_to_languages: Mapping from game to the languages it targets.
        free_languages: Languages known without any game association.

    Example:
        >>> index = AssociationIndex({"gameB": ["fr", "en"], "gameA": ["en"]}, ["ja"])
        >>> list(index.games())
        ['gameA', 'gameB']
        >>> index.games_by_language("en")
        ['gameA', 'gameB']
        >>> index.games_by_language("ja")
        []
        >>> index.languages_by_game("unknown")
        ['en', 'fr', 'ja']
    """

    def __init__(
        self,
        game_to_languages: Mapping[str, Iterable[str]] | None = None,
        free_languages: Iterable[str] = (),
    ) -> None:
        self._games: list[tuple[Game, list[Language]]] = []
        self._languages: list[tuple[Language, list[Game]]] = []

        by_language: dict[Language, list[Game]] = {}
        for game in sorted(game_to_languages or {}):
            languages = sorted({sys.intern(str(lang)) for lang in game_to_languages[game]})
            game = sys.intern(str(game))
            for lang in languages:
                by_language.setdefault(lang, []).append(game)
            self._games.append((game, languages))

        for lang in free_languages:
            by_language.setdefault(sys.intern(str(lang)), [])

        # games were visited in sorted order, so each game list is already sorted
        self._languages = sorted(by_language.items(), key=_first)

        logger.debug(
            f"Association index built: {len(self._games)} games, "
            f"{len(self._languages)} languages"
        )

    # ------------------------------------------------------------------
    # Construction from source data
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> AssociationIndex:
        """Build the index from a parsed targets document.

        The document maps each game to a list of languages. The reserved
        empty key lists the free languages.

        Raises:
            MismatchTypeError: If the document or a language list has the wrong shape.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise MismatchTypeError("targets", "mapping")

        game_to_languages: dict[str, list[str]] = {}
        free_languages: list[str] = []
        for game, languages in data.items():
            if languages is None:
                languages = []
            if not isinstance(languages, (list, tuple, set, frozenset)):
                raise MismatchTypeError(f"targets.{game}", "list of languages")
            for lang in languages:
                if not isinstance(lang, str):
                    raise MismatchTypeError(f"targets.{game}", "string")
            if game == FALLBACK_GAME or game is None:
                free_languages.extend(languages)
            else:
                game_to_languages[str(game)] = list(languages)
        return cls(game_to_languages, free_languages)

    @classmethod
    def load(cls, path: Path) -> AssociationIndex:
        """Load the index from a YAML targets file.

        Raises:
            SourceError: If the file cannot be read or is not valid YAML.
            MismatchTypeError: If the document has the wrong shape.
        """
        index = cls.from_mapping(read_yaml(path))
        logger.info(f"Loaded targets from {path}")
        return index

    def to_mapping(self) -> dict[str, list[str]]:
        """Inverse of ``from_mapping``: games to languages, free languages under ``""``."""
        data: dict[str, list[str]] = {}
        free = [lang for lang, games in self._languages if not games]
        if free:
            data[FALLBACK_GAME] = free
        for game, languages in self._games:
            data[game] = list(languages)
        return data

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def games(self) -> Iterator[Game]:
        """Iterate over all known games in sorted order."""
        return (game for game, _ in self._games)

    def languages(self) -> Iterator[Language]:
        """Iterate over all known languages in sorted order."""
        return (lang for lang, _ in self._languages)

    def has_game(self, game: str) -> bool:
        return _find(self._games, game)[1]

    def has_language(self, language: str) -> bool:
        return _find(self._languages, language)[1]

    def games_by_language(self, language: str) -> list[Game]:
        """Sorted games associated with ``language``.

        An unknown language implicitly covers every known game.
        """
        idx, found = _find(self._languages, language)
        if not found:
            return list(self.games())
        return list(self._languages[idx][1])

    def languages_by_game(self, game: str) -> list[Language]:
        """Sorted languages associated with ``game``.

        An unknown game implicitly covers every known language.
        """
        idx, found = _find(self._games, game)
        if not found:
            return list(self.languages())
        return list(self._games[idx][1])

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_target(self, language: str, game: str) -> None:
        """Associate a language with a game, creating either one if needed.

        Idempotent. Both sides of the index stay sorted.
        """
        language = sys.intern(language)
        game = sys.intern(game)
        _insert_or_modify(
            self._games,
            game,
            lambda: [language],
            lambda languages: _insort_unique(languages, language),
        )
        _insert_or_modify(
            self._languages,
            language,
            lambda: [game],
            lambda games: _insort_unique(games, game),
        )

    def remove_association(self, game: str, language: str) -> int | None:
        """Remove the association between a game and a language.

        Does not remove any games or languages: a game left without
        languages stays known, a language left without games becomes free.

        Returns:
            The former position of the language in the game's language
            list, or None if the two were not associated.
        """
        game_idx, game_found = _find(self._games, game)
        lang_idx, lang_found = _find(self._languages, language)
        if not (game_found and lang_found):
            return None

        position = _remove_sorted(self._games[game_idx][1], language)
        if position is not None:
            _remove_sorted(self._languages[lang_idx][1], game)
            logger.debug(f"Removed association {game!r} ↔ {language!r}")
        return position

    def remove_game(self, game: str) -> list[Language]:
        """Remove a game and all of its associations.

        Does not remove any languages.

        Returns:
            The languages the game was associated with.
        """
        idx, found = _find(self._games, game)
        if not found:
            return []

        _, languages = self._games.pop(idx)
        for lang in languages:
            lang_idx, lang_found = _find(self._languages, lang)
            if lang_found:
                _remove_sorted(self._languages[lang_idx][1], game)
        logger.debug(f"Removed game {game!r} ({len(languages)} associations)")
        return languages

    def remove_language(self, language: str) -> list[Game]:
        """Remove a language and all of its associations.

        Does not remove any games.

        Returns:
            The games the language was associated with.
        """
        idx, found = _find(self._languages, language)
        if not found:
            return []

        _, games = self._languages.pop(idx)
        for game in games:
            game_idx, game_found = _find(self._games, game)
            if game_found:
                _remove_sorted(self._games[game_idx][1], language)
        logger.debug(f"Removed language {language!r} ({len(games)} associations)")
        return games

    def __repr__(self) -> str:
        return f"AssociationIndex(games={len(self._games)}, languages={len(self._languages)})"
