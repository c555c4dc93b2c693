"""Tests for loader.py: YAML reading with reference tags."""

from pathlib import Path

import pytest

from localization_bank.errors import SourceError
from localization_bank.loader import parse_yaml, read_yaml
from localization_bank.pieces import TaggedValue


class TestParseYaml:

    def test_ref_tag(self) -> None:
        data = parse_yaml('en: ["Hi ", !ref name]')
        assert data == {"en": ["Hi ", TaggedValue(tag="ref", value="name")]}

    def test_any_local_tag(self) -> None:
        data = parse_yaml("- !key other")
        assert data == [TaggedValue(tag="key", value="other")]

    def test_tagged_scalar_is_a_string(self) -> None:
        data = parse_yaml("- !ref 42")
        assert data[0].value == "42"

    def test_tagged_sequence_kept(self) -> None:
        data = parse_yaml("- !ref [a, b]")
        assert data[0] == TaggedValue(tag="ref", value=["a", "b"])

    def test_standard_tags_unaffected(self) -> None:
        assert parse_yaml("- !!str 42") == ["42"]

    def test_plain_values(self) -> None:
        assert parse_yaml("a: [x, 3]") == {"a": ["x", 3]}

    def test_yes_no_words_stay_strings(self) -> None:
        assert parse_yaml('"": [No, Yes, On, Off, y, n]') == {"": ["No", "Yes", "On", "Off", "y", "n"]}

    def test_language_code_no_as_key(self) -> None:
        assert parse_yaml("no:\n  \"\": [Nei]\n") == {"no": {"": ["Nei"]}}

    def test_true_false_are_booleans(self) -> None:
        assert parse_yaml("[true, False, TRUE, false]") == [True, False, True, False]

    def test_empty_document(self) -> None:
        assert parse_yaml("") is None

    def test_invalid_yaml(self) -> None:
        with pytest.raises(SourceError, match="Invalid YAML"):
            parse_yaml("a: [b")

    def test_python_tags_rejected(self) -> None:
        with pytest.raises(SourceError):
            parse_yaml("!!python/object:os.system {}")


class TestReadYaml:

    def test_read(self, bank_file: Path) -> None:
        data = read_yaml(bank_file)
        fragments = data["greeting"]["text"]["en"][""]
        assert fragments == ["Hello, ", TaggedValue("ref", "player_name"), "!"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceError, match="Cannot read file"):
            read_yaml(tmp_path / "missing.yaml")

    def test_error_names_the_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("a: [b", encoding="utf-8")
        with pytest.raises(SourceError, match="broken.yaml"):
            read_yaml(path)
