"""
Pytest configuration and fixtures for localization-bank tests.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add src directory to Python path to allow importing localization_bank
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


BANK_YAML = """\
player_name:
  text:
    en:
      "": ["Traveler"]
      gameA: ["Hero"]
    fr:
      "": ["Voyageur"]
greeting:
  text:
    en:
      "": ["Hello, ", !ref player_name, "!"]
    fr:
      "": ["Bonjour, ", !ref player_name, " !"]
  tag: [ui, dialogue]
farewell:
  text:
    en:
      "": ["Bye, ", !ref missing_key]
"""

TARGETS = {
    "": ["ja"],
    "gameA": ["en", "fr"],
    "gameB": ["en"],
}


@pytest.fixture
def bank_file(tmp_path: Path) -> Path:
    """A YAML bank file with references and tags."""
    path = tmp_path / "bank.yaml"
    path.write_text(BANK_YAML, encoding="utf-8")
    return path


@pytest.fixture
def targets_file(tmp_path: Path) -> Path:
    """A YAML targets file with one free language."""
    path = tmp_path / "targets.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(TARGETS, f, allow_unicode=True)
    return path
