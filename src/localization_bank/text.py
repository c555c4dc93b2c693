"""
Text: an ordered sequence of pieces with a cached actualized string.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from .pieces import Piece, Ref


class Text:
    """The smallest unit of exported localization.

    Each (bank key, language, game) triple maps to one Text. The actualized
    string is computed by ``cache`` and kept until ``uncache`` is called;
    it is never invalidated implicitly, even if the lookup used to build it
    changes afterwards.

    Example:
        >>> text = Text([Raw("Hello, "), Ref("player_name")])
        >>> text.cache({"player_name": "Ada"})
        'Hello, Ada'
        >>> list(text.get_references())
        ['player_name']
    """

    __slots__ = ("_pieces", "_actualized")

    def __init__(self, pieces: Iterable[Piece]) -> None:
        self._pieces: tuple[Piece, ...] = tuple(pieces)
        self._actualized: str | None = None

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return self._pieces

    @property
    def actualized(self) -> str | None:
        """The cached display string, or None if not cached."""
        return self._actualized

    @property
    def is_cached(self) -> bool:
        return self._actualized is not None

    def get_references(self) -> Iterator[str]:
        """Yield the key of every reference piece, in piece order."""
        return (piece.content for piece in self._pieces if isinstance(piece, Ref))

    def render(self, resolved_lookup: Mapping[str, str]) -> str:
        """Concatenate the pieces without touching the cache.

        References missing from ``resolved_lookup`` are rendered as their
        own key.
        """
        parts = []
        for piece in self._pieces:
            if isinstance(piece, Ref):
                parts.append(resolved_lookup.get(piece.content, piece.content))
            else:
                parts.append(piece.content)
        return "".join(parts)

    def cache(self, resolved_lookup: Mapping[str, str]) -> str:
        """Actualize and cache the display string.

        Does nothing if a string is already cached.

        Args:
            resolved_lookup: Reference key to already-resolved display string.

        Returns:
            The cached actualized string.
        """
        if self._actualized is None:
            self._actualized = self.render(resolved_lookup)
        return self._actualized

    def uncache(self) -> None:
        """Drop the cached string so the next ``cache`` recomputes it."""
        self._actualized = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self._pieces == other._pieces

    def __hash__(self) -> int:
        return hash(self._pieces)

    def __repr__(self) -> str:
        return f"Text({list(self._pieces)!r}, actualized={self._actualized!r})"
