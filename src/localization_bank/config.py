"""
Settings and logging setup.

Settings come from the environment, optionally seeded from a ``.env`` file:

    LOCBANK_DATA_DIR       directory holding the data files (default: cwd)
    LOCBANK_TARGETS_FILE   targets file name (default: targets.yaml)
    LOCBANK_BANK_FILE      bank file name (default: bank.yaml)
    LOCBANK_LOG_LEVEL      logging level name (default: INFO)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("localization-bank")

DEFAULT_TARGETS_FILE = "targets.yaml"
DEFAULT_BANK_FILE = "bank.yaml"


class BankSettings(BaseModel):
    """Where the data files live and how verbose logging is."""
    data_dir: Path = Field(default_factory=Path.cwd, description="Directory holding the data files")
    targets_file: str = Field(default=DEFAULT_TARGETS_FILE, description="Game ↔ language targets file")
    bank_file: str = Field(default=DEFAULT_BANK_FILE, description="Localized bank file")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def targets_path(self) -> Path:
        return self.data_dir / self.targets_file

    @property
    def bank_path(self) -> Path:
        return self.data_dir / self.bank_file


def load_settings(env_file: Path | None = None) -> BankSettings:
    """Read settings from the environment, after loading ``.env`` if present."""
    if not load_dotenv(dotenv_path=env_file):
        logger.warning("No .env file found, using the process environment only")

    data_dir = os.getenv("LOCBANK_DATA_DIR")
    settings = BankSettings(
        data_dir=Path(data_dir).resolve() if data_dir else Path.cwd(),
        targets_file=os.getenv("LOCBANK_TARGETS_FILE", DEFAULT_TARGETS_FILE),
        bank_file=os.getenv("LOCBANK_BANK_FILE", DEFAULT_BANK_FILE),
        log_level=os.getenv("LOCBANK_LOG_LEVEL", "INFO"),
    )
    logger.debug(f"📂 Data path: {settings.data_dir}")
    return settings


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts embedding the bank."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logging.getLogger("localization-bank").setLevel(level)
