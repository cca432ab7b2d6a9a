"""
Tests for query resolution and the three-phase conversion.
"""

import pytest

from credit_converter.common.config import DEFAULT_RESPONSE
from credit_converter.engine import (
    ConversionReport,
    answer_how_many_credits,
    answer_how_much,
    build_numeral_mapping,
    build_unit_mapping,
    convert,
    format_credits,
)
from credit_converter.statements import classify_lines


SAMPLE_TEXT = """glob is I
prok is V
pish is X
tegj is L
glob glob Silver is 34 Credits
glob prok Gold is 57800 Credits
pish pish Iron is 3910 Credits
how much is pish tegj glob glob ?
how many Credits is glob prok Silver ?
how many Credits is glob prok Gold ?
how many Credits is glob prok Iron ?

how much wood could a woodchuck chuck if a woodchuck could chuck wood ?
"""

SAMPLE_ANSWERS = [
    "pish tegj glob glob is 42",
    "glob prok Silver is 68 Credits",
    "glob prok Gold is 57800 Credits",
    "glob prok Iron is 782 Credits",
    DEFAULT_RESPONSE,
]


@pytest.fixture
def numeral_mapping():
    return {"glob": "I", "prok": "V", "pish": "X", "tegj": "L"}


# =============================================================================
# Formatting
# =============================================================================


class TestFormatCredits:
    """Shortest decimal form without a trailing .0"""

    @pytest.mark.parametrize("value, expected", [
        (86.0, "86"),
        (57800.0, "57800"),
        (195.5, "195.5"),
        (0.1, "0.1"),
        (1.0 / 3.0, "0.3333333333333333"),
        (1e22, "10000000000000000000000"),
    ])
    def test_values(self, value, expected):
        assert format_credits(value) == expected


# =============================================================================
# How much
# =============================================================================


class TestAnswerHowMuch:
    """"how much is ... ?" queries."""

    def test_example_42(self, numeral_mapping):
        assert answer_how_much(numeral_mapping, "how much is pish tegj glob glob ?") == "pish tegj glob glob is 42"

    def test_example_8(self):
        mapping = {"bla": "I", "blub": "V", "blubber": "L"}
        assert answer_how_much(mapping, "how much is blub bla bla bla ?") == "blub bla bla bla is 8"

    def test_invalid_numeral(self):
        mapping = {"bla": "I", "blub": "V", "blubber": "L"}
        assert answer_how_much(mapping, "how much is blub blubber ?") == (
            "I don't know how to interpret this number: blub blubber -> VL"
        )

    def test_unknown_tokens_dropped(self, numeral_mapping):
        warnings = []
        answer = answer_how_much(numeral_mapping, "how much is pish bla glob ?", warnings)
        assert answer == "pish glob is 11"
        assert warnings == ["bla could not be translated."]

    def test_reserved_tokens_not_reported(self, numeral_mapping):
        warnings = []
        answer_how_much(numeral_mapping, "how much is  glob ?", warnings)
        assert warnings == []

    def test_nothing_translatable(self, numeral_mapping):
        assert answer_how_much(numeral_mapping, "how much is bla ?") == (
            "I don't know how to interpret this number:  -> "
        )

    def test_idempotent(self, numeral_mapping):
        question = "how much is pish tegj glob glob ?"
        assert answer_how_much(numeral_mapping, question) == answer_how_much(numeral_mapping, question)


# =============================================================================
# How many Credits
# =============================================================================


class TestAnswerHowManyCredits:
    """"how many Credits is ... ?" queries."""

    def test_silver_86(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Silver": 21.5}, "how many Credits is glob prok Silver ?")
        assert answer == "glob prok Silver is 86 Credits"

    def test_gold_57800(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Gold": 14450.0}, "how many Credits is glob prok Gold ?")
        assert answer == "glob prok Gold is 57800 Credits"

    def test_iron_782(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Iron": 195.5}, "how many Credits is glob prok Iron ?")
        assert answer == "glob prok Iron is 782 Credits"

    def test_fractional_result(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Dirt": 0.5}, "how many Credits is prok Dirt ?")
        assert answer == "prok Dirt is 2.5 Credits"

    def test_untranslatable_amount(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Iron": 195.5}, "how many Credits is bla prok Iron ?")
        assert answer == "Not everything could be translated to roman numerals: bla prok"

    def test_unknown_unit(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Iron": 195.5}, "how many Credits is glob prok Fish ?")
        assert answer == "This unit is unkown to me: Fish"

    def test_invalid_amount_with_known_unit(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Iron": 195.5}, "how many Credits is prok pish Iron ?")
        assert answer == DEFAULT_RESPONSE

    def test_missing_amount(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Iron": 195.5}, "how many Credits is Iron ?")
        assert answer == DEFAULT_RESPONSE

    def test_malformed_prefix(self, numeral_mapping):
        answer = answer_how_many_credits(numeral_mapping, {"Iron": 195.5}, "how many Credits is?")
        assert answer == DEFAULT_RESPONSE

    def test_idempotent(self, numeral_mapping):
        units = {"Silver": 21.5}
        question = "how many Credits is glob prok Silver ?"
        first = answer_how_many_credits(numeral_mapping, units, question)
        assert answer_how_many_credits(numeral_mapping, units, question) == first


# =============================================================================
# Mappings
# =============================================================================


class TestMappings:
    """Folding definitions in input order."""

    def test_later_numeral_definition_wins(self):
        statements = classify_lines(["glob is I", "glob is V"])
        assert build_numeral_mapping(statements) == {"glob": "V"}

    def test_unit_conflict_notice(self, numeral_mapping):
        statements = classify_lines([
            "glob prok Silver is 86 Credits",
            "glob glob Silver is 34 Credits",
        ])
        notices = []
        units = build_unit_mapping(statements, numeral_mapping, notices)
        assert units == {"Silver": 17.0}
        assert notices == ['"Silver" has ambiguous value. Old: 21.5, new 17. Using new definition.']

    def test_same_rate_is_silent(self, numeral_mapping):
        statements = classify_lines([
            "glob prok Silver is 86 Credits",
            "glob prok Silver is 86 Credits",
        ])
        notices = []
        assert build_unit_mapping(statements, numeral_mapping, notices) == {"Silver": 21.5}
        assert notices == []

    def test_not_understood_notice(self, numeral_mapping):
        statements = classify_lines(["bla prok Silver is 86 Credits"])
        notices = []
        assert build_unit_mapping(statements, numeral_mapping, notices) == {}
        assert notices == ["I don't understand this statement about units: bla prok Silver is 86 Credits"]


# =============================================================================
# Full conversion
# =============================================================================


class TestConvert:
    """Three-phase batch over a whole input."""

    def test_sample(self):
        report = convert(SAMPLE_TEXT)
        assert isinstance(report, ConversionReport)
        assert report.answers == SAMPLE_ANSWERS
        assert report.notices == []
        assert report.numeral_mapping == {"glob": "I", "prok": "V", "pish": "X", "tegj": "L"}
        assert report.unit_mapping == {"Silver": 17.0, "Gold": 14450.0, "Iron": 195.5}

    def test_reordered_input(self):
        """Unit definitions before numeral definitions still resolve."""
        lines = SAMPLE_TEXT.splitlines()
        reordered = lines[4:7] + lines[7:] + lines[:4]
        report = convert("\n".join(reordered))
        assert report.answers == SAMPLE_ANSWERS

    def test_unrecognized_interleaved(self):
        text = "glob is I\nhello there\nhow much is glob glob ?\nwhat ?\n"
        report = convert(text)
        assert report.answers == [DEFAULT_RESPONSE, "glob glob is 2", DEFAULT_RESPONSE]

    def test_output_lines_order(self):
        text = "glob is I\nbla Silver is 5 Credits\nhow much is glob ?\n"
        report = convert(text)
        assert list(report.output_lines()) == [
            "I don't understand this statement about units: bla Silver is 5 Credits",
            "glob is 1",
        ]

    def test_warnings_collected(self):
        report = convert("glob is I\nhow much is glob bla ?\n")
        assert report.answers == ["glob is 1"]
        assert report.warnings == ["bla could not be translated."]

    def test_empty_input(self):
        report = convert("")
        assert report.answers == []
        assert list(report.output_lines()) == []

    def test_windows_line_endings(self):
        report = convert("glob is I\r\nprok is V\r\nhow much is prok glob ?\r\n")
        assert report.answers == ["prok glob is 6"]
