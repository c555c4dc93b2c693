"""
One-shot loading of a localization workspace: targets, bank and resolver.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from .bank import LocalizedBank
from .config import BankSettings
from .resolver import BankResolver
from .targets import AssociationIndex

logger = logging.getLogger("localization-bank")


@dataclass
class Workspace:
    """Everything loaded from a data directory."""
    settings: BankSettings
    targets: AssociationIndex
    bank: LocalizedBank
    resolver: BankResolver

    def targets_for(self, language: str) -> list[str]:
        """Games to export for ``language``, per the association index."""
        return self.targets.games_by_language(language)


def load_workspace(settings: BankSettings) -> Workspace:
    """Load the targets and bank files named by ``settings``.

    Raises:
        SourceError: If a file cannot be read or is not valid YAML.
        ParsingError: If the bank or the targets document is malformed.
    """
    start = time.monotonic()
    targets = AssociationIndex.load(settings.targets_path)
    bank = LocalizedBank.load(settings.bank_path)
    resolver = BankResolver(bank)

    for key, missing in resolver.dangling_references().items():
        logger.warning(f"Record '{key}' references unknown keys: {', '.join(missing)}")

    load_ms = (time.monotonic() - start) * 1000
    logger.info(
        "Workspace loaded in %.0fms: %d records, %d games, %d languages",
        load_ms,
        len(bank),
        len(list(targets.games())),
        len(list(targets.languages())),
    )
    return Workspace(settings=settings, targets=targets, bank=bank, resolver=resolver)
