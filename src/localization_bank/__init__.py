"""
Localization bank - localized text records for multiple games and languages,
with cross-record references resolved into display strings on demand.
"""

from .bank import LocalizedBank
from .config import BankSettings, configure_logging, load_settings
from .errors import MismatchTypeError, MissingAttributeError, ParsingError, SourceError
from .pieces import Piece, Raw, Ref, TaggedValue
from .records import LanguageRecord, RawRecord, Record, parse_record
from .resolver import BankResolver
from .targets import FALLBACK_GAME, AssociationIndex
from .text import Text
from .workspace import Workspace, load_workspace

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("localization-bank")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    "AssociationIndex",
    "BankResolver",
    "BankSettings",
    "FALLBACK_GAME",
    "LanguageRecord",
    "LocalizedBank",
    "MismatchTypeError",
    "MissingAttributeError",
    "ParsingError",
    "Piece",
    "Raw",
    "RawRecord",
    "Record",
    "Ref",
    "SourceError",
    "TaggedValue",
    "Text",
    "Workspace",
    "configure_logging",
    "load_settings",
    "load_workspace",
    "parse_record",
]
