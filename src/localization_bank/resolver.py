"""
Whole-bank reference resolution.

``Text.cache`` performs a single substitution pass from a lookup of
already-resolved strings. This module builds that lookup for one target
(language, game) by resolving references depth-first across the bank.
"""

from __future__ import annotations

import logging
from typing import Iterator

from .bank import LocalizedBank, RecordTuple, TagFilter, accept_all
from .records import BankKey
from .targets import FALLBACK_GAME
from .text import Text

logger = logging.getLogger("localization-bank.resolver")


class BankResolver:
    """Resolves every bank key to its display string for a target.

    A key resolves to the text of its record for the target language,
    using the game override when there is one and the fallback otherwise.
    Keys with no text in that language stay unresolved, so references to
    them render as the raw key.

    A reference that closes a cycle is left unresolved and a warning is
    logged. Resolution never raises.

    Results are memoized per target until ``invalidate`` is called.
    """

    def __init__(self, bank: LocalizedBank) -> None:
        self._bank = bank
        self._resolved: dict[tuple[str, str], dict[BankKey, str]] = {}

    def _text_for(self, key: BankKey, language: str, game: str) -> Text | None:
        record = self._bank.get(key)
        if record is None:
            return None
        language_record = record.text.get(language)
        if language_record is None:
            return None
        return language_record.text_for(game)

    def _resolve_key(
        self,
        root: BankKey,
        language: str,
        game: str,
        resolved: dict[BankKey, str],
    ) -> None:
        """Resolve ``root`` and everything it references into ``resolved``.

        Walks depth-first with an explicit stack, so long reference chains
        do not hit the interpreter's recursion limit. A key is rendered once
        all of its references are resolved or known to be unresolvable.
        """
        if root in resolved:
            return
        root_text = self._text_for(root, language, game)
        if root_text is None:
            return

        visiting: set[BankKey] = {root}
        stack: list[tuple[BankKey, Text, Iterator[BankKey]]] = [
            (root, root_text, root_text.get_references())
        ]
        while stack:
            key, text, refs = stack[-1]
            for ref in refs:
                if ref in resolved:
                    continue
                if ref in visiting:
                    logger.warning(
                        f"Reference cycle through '{ref}' for target ({language!r}, {game!r}); "
                        f"leaving it unresolved"
                    )
                    continue
                ref_text = self._text_for(ref, language, game)
                if ref_text is None:
                    continue
                visiting.add(ref)
                stack.append((ref, ref_text, ref_text.get_references()))
                break
            else:
                stack.pop()
                visiting.discard(key)
                resolved[key] = text.render(resolved)

    def resolve(self, language: str, game: str = FALLBACK_GAME) -> dict[BankKey, str]:
        """Build the resolved lookup for a target.

        Args:
            language: Target language.
            game: Target game; ``""`` selects fallback texts only.

        Returns:
            Bank key → display string, for every key with a text in ``language``.
        """
        target = (language, game)
        if target not in self._resolved:
            resolved: dict[BankKey, str] = {}
            for key in self._bank.keys():
                self._resolve_key(key, language, game, resolved)
            self._resolved[target] = resolved
            logger.debug(f"Resolved {len(resolved)} keys for target ({language!r}, {game!r})")
        return dict(self._resolved[target])

    def invalidate(self) -> None:
        """Forget every memoized target, e.g. after the bank was replaced."""
        self._resolved.clear()

    def cache_all(
        self,
        language: str,
        game: str = FALLBACK_GAME,
        filter_tag: TagFilter = accept_all,
    ) -> list[RecordTuple]:
        """Actualize the texts selected for a target.

        Texts are shared between games (a fallback serves every game without
        an override), so each selected text is uncached before being cached
        with the lookup of this target.

        Returns:
            The (key, language, game, text) tuples that were cached.
        """
        lookup = self.resolve(language, game)
        selected = self._bank.records(
            filter_language=lambda lang: lang == language,
            filter_game=[game],
            filter_tag=filter_tag,
        )
        for _, _, _, text in selected:
            text.uncache()
            text.cache(lookup)
        return selected

    def dangling_references(self) -> dict[BankKey, list[BankKey]]:
        """Map each key to the referenced keys that are not in the bank."""
        dangling: dict[BankKey, list[BankKey]] = {}
        for key, refs in self._bank.references().items():
            missing = sorted(ref for ref in refs if ref not in self._bank)
            if missing:
                dangling[key] = missing
        return dangling
