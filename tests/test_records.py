"""
Tests for record parsing: fragment conversion, mandatory fallback, tags.
"""

import pytest

from localization_bank.errors import MismatchTypeError, MissingAttributeError, ParsingError
from localization_bank.pieces import Raw, Ref, TaggedValue
from localization_bank.records import LanguageRecord, RawRecord, Record, parse_record
from localization_bank.text import Text


def ref(key: str) -> TaggedValue:
    return TaggedValue(tag="ref", value=key)


class TestParseRecord:
    """Test converting raw entries into records."""

    def test_fallback_and_override(self) -> None:
        record = parse_record({"text": {"en": {"": ["F"], "gameA": ["A"]}}})
        en = record.text["en"]
        assert en.fallback == Text([Raw("F")])
        assert en.games == (("gameA", Text([Raw("A")])),)

    def test_fragments_become_pieces(self) -> None:
        record = parse_record({"text": {"en": {"": ["Hello, ", ref("name"), "!"]}}})
        assert record.text["en"].fallback.pieces == (Raw("Hello, "), Ref("name"), Raw("!"))

    def test_multiple_languages_keep_source_order(self) -> None:
        record = parse_record({"text": {"fr": {"": ["b"]}, "en": {"": ["a"]}}})
        assert list(record.text) == ["fr", "en"]

    def test_overrides_sorted_by_game(self) -> None:
        record = parse_record({"text": {"en": {"gameC": ["c"], "": ["F"], "gameA": ["a"]}}})
        assert [game for game, _ in record.text["en"].games] == ["gameA", "gameC"]

    def test_override_identical_to_fallback_is_dropped(self) -> None:
        record = parse_record({"text": {"en": {"": ["F"], "gameA": ["F"], "gameB": ["B"]}}})
        assert [game for game, _ in record.text["en"].games] == ["gameB"]

    def test_empty_fragment_list(self) -> None:
        record = parse_record({"text": {"en": {"": []}}})
        assert record.text["en"].fallback.pieces == ()

    def test_tags_pass_through(self) -> None:
        record = parse_record({"text": {"en": {"": ["F"]}}, "tag": ["ui", "menu"]})
        assert record.tag == ("ui", "menu")

    def test_untagged(self) -> None:
        record = parse_record({"text": {"en": {"": ["F"]}}})
        assert record.tag is None

    def test_accepts_raw_record_model(self) -> None:
        raw = RawRecord(text={"en": {"": ["F"]}}, tag=["ui"])
        record = parse_record(raw)
        assert isinstance(record, Record)
        assert record.tag == ("ui",)

    def test_no_languages(self) -> None:
        record = parse_record({"text": {}})
        assert record.text == {}


class TestFallbackMandatory:
    """A language without the empty game key fails."""

    def test_missing_fallback(self) -> None:
        with pytest.raises(MissingAttributeError) as exc_info:
            parse_record({"text": {"en": {"gameA": ["A"]}}})
        assert exc_info.value.attribute == ""
        assert exc_info.value.reason == "fallback"
        assert str(exc_info.value) == 'Missing attribute \'\' for "fallback"'

    def test_missing_fallback_in_second_language(self) -> None:
        with pytest.raises(MissingAttributeError):
            parse_record({"text": {"en": {"": ["F"]}, "fr": {"gameA": ["A"]}}})

    def test_adding_fallback_fixes_the_entry(self) -> None:
        entry = {"text": {"en": {"gameA": ["A"]}}}
        with pytest.raises(MissingAttributeError):
            parse_record(entry)
        entry["text"]["en"][""] = ["F"]
        record = parse_record(entry)
        assert record.text["en"].fallback == Text([Raw("F")])


class TestMismatchType:
    """Fragments and shapes of the wrong type fail."""

    def test_number_fragment(self) -> None:
        with pytest.raises(MismatchTypeError) as exc_info:
            parse_record({"text": {"en": {"": ["a", 3]}}})
        assert exc_info.value.attribute == "string value"
        assert exc_info.value.expected_type == "string"
        assert str(exc_info.value) == "Mismatch type for attribute 'string value', expected 'string'"

    def test_tagged_mapping_fragment(self) -> None:
        with pytest.raises(MismatchTypeError) as exc_info:
            parse_record({"text": {"en": {"": [TaggedValue("ref", {"a": 1})]}}})
        assert exc_info.value.attribute == "tagged value"

    def test_fragments_not_a_list(self) -> None:
        with pytest.raises(MismatchTypeError) as exc_info:
            parse_record({"text": {"en": {"": None}}})
        assert exc_info.value.expected_type == "list"
        assert exc_info.value.attribute.startswith("text.en")

    def test_games_not_a_mapping(self) -> None:
        with pytest.raises(MismatchTypeError) as exc_info:
            parse_record({"text": {"en": ["F"]}})
        assert exc_info.value.expected_type == "mapping"

    def test_tag_not_strings(self) -> None:
        with pytest.raises(MismatchTypeError) as exc_info:
            parse_record({"text": {"en": {"": ["F"]}}, "tag": [1]})
        assert exc_info.value.attribute == "tag.0"

    def test_record_not_a_mapping(self) -> None:
        with pytest.raises(MismatchTypeError) as exc_info:
            parse_record(["F"])
        assert exc_info.value.attribute == "record"

    def test_missing_text(self) -> None:
        with pytest.raises(MissingAttributeError) as exc_info:
            parse_record({"tag": ["ui"]})
        assert exc_info.value.attribute == "text"

    def test_errors_share_a_base(self) -> None:
        with pytest.raises(ParsingError):
            parse_record({"text": {"en": {"": [None]}}})


class TestLanguageRecord:
    """Test override lookup on a language record."""

    @pytest.fixture
    def language_record(self) -> LanguageRecord:
        return LanguageRecord(
            fallback=Text([Raw("F")]),
            games=(("gameC", Text([Raw("C")])), ("gameA", Text([Raw("A")]))),
        )

    def test_games_sorted_on_construction(self, language_record: LanguageRecord) -> None:
        assert [game for game, _ in language_record.games] == ["gameA", "gameC"]

    def test_get(self, language_record: LanguageRecord) -> None:
        assert language_record.get("gameC") == Text([Raw("C")])
        assert language_record.get("gameB") is None

    def test_text_for_falls_back(self, language_record: LanguageRecord) -> None:
        assert language_record.text_for("gameA") == Text([Raw("A")])
        assert language_record.text_for("gameB") is language_record.fallback
        assert language_record.text_for("") is language_record.fallback

    def test_duplicate_games_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            LanguageRecord(
                fallback=Text([]),
                games=(("gameA", Text([])), ("gameA", Text([Raw("x")]))),
            )

    def test_texts(self, language_record: LanguageRecord) -> None:
        assert [t.render({}) for t in language_record.texts()] == ["F", "A", "C"]
