"""Resolve queries against the numeral and unit mappings of an input.

The conversion is a strict three-phase batch:
1. Classify every non-empty line of the input
2. Fold all numeral definitions into the numeral mapping, then fold all unit
   definitions into the unit mapping (unit rates need decoded amounts, so the
   numeral mapping has to be complete first, whatever the line order)
3. Answer every query and unrecognized statement in input order

Definitions produce no answers. A unit definition can produce a notice when
it cannot be understood or when it changes the rate of an already known unit.
"""
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional

import numpy as np

from .common.config import (
    DEFAULT_RESPONSE,
    HOW_MANY_CREDITS_PREFIX,
    QUESTION_MARK,
    RESERVED_QUERY_TOKENS,
)
from .common.roman_numerals import RomanNumeralError, convert_roman_to_int
from .extraction import numeral_pair, translate_tokens, unit_rate
from .statements import Statement, StatementKind, classify_lines


@dataclass
class ConversionReport:
    """Everything produced by converting one input.

    Attributes:
        numeral_mapping: Final alien token -> Roman letter mapping
        unit_mapping: Final unit name -> Credits per unit mapping
        notices: Messages about unit definitions, in input order
        answers: One line per query or unrecognized statement, in input order
        warnings: Diagnostics about tokens that could not be translated
    """
    numeral_mapping: dict[str, str] = field(default_factory=dict)
    unit_mapping: dict[str, float] = field(default_factory=dict)
    notices: list[str] = field(default_factory=list)
    answers: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def output_lines(self) -> Iterator[str]:
        """Yield the lines meant for standard output: notices, then answers."""
        yield from self.notices
        yield from self.answers


def format_credits(value: float) -> str:
    """Format a float as its shortest decimal form, dropping a trailing ".0".

    Example:
        >>> format_credits(86.0)
        '86'
        >>> format_credits(195.5)
        '195.5'
    """
    return np.format_float_positional(value, trim="-")


def build_numeral_mapping(statements: list[Statement]) -> dict[str, str]:
    """Fold numeral definitions into a token -> Roman letter mapping.

    A later definition of the same token replaces the earlier one without
    any notice.
    """
    numeral_mapping = {}
    for statement in statements:
        if statement.kind != StatementKind.NUMERAL_DEFINITION:
            continue
        pair = numeral_pair(statement.text)
        if pair is not None:
            token, letter = pair
            numeral_mapping[token] = letter
    return numeral_mapping


def build_unit_mapping(
    statements: list[Statement],
    numeral_mapping: Mapping[str, str],
    notices: Optional[list[str]] = None,
) -> dict[str, float]:
    """Fold unit definitions into a unit name -> Credits per unit mapping.

    Args:
        statements: Classified statements in input order
        numeral_mapping: Complete alien token -> Roman letter mapping
        notices: Optional list that receives a message for every unit
                 definition that cannot be understood and for every unit
                 whose rate is redefined to a different value

    Returns:
        dict[str, float]: Credits per unit, the last definition winning
    """
    if notices is None:
        notices = []

    unit_mapping = {}
    for statement in statements:
        if statement.kind != StatementKind.UNIT_DEFINITION:
            continue

        rate = unit_rate(numeral_mapping, statement.text)
        if rate is None:
            notices.append(f"I don't understand this statement about units: {statement.text}")
            continue

        unit, value = rate
        old_value = unit_mapping.get(unit)
        if old_value is not None and old_value != value:
            notices.append(
                f'"{unit}" has ambiguous value. Old: {format_credits(old_value)}, '
                f'new {format_credits(value)}. Using new definition.'
            )
        unit_mapping[unit] = value
    return unit_mapping


def answer_how_much(
    numeral_mapping: Mapping[str, str],
    question: str,
    warnings: Optional[list[str]] = None,
) -> str:
    """Answer a question like "how much is pish tegj glob glob ?".

    Reserved words ("how", "much", "is", "?") are ignored. Tokens without a
    numeral mapping are left out of both the echoed phrase and the numeral;
    each of them is reported in warnings.

    Args:
        numeral_mapping: Alien token -> Roman letter
        question: The trimmed query line
        warnings: Optional list that receives untranslatable-token messages

    Returns:
        str: "<tokens> is <value>", or an explanation if the translated
        letters do not form a valid Roman numeral

    Example:
        >>> answer_how_much({"pish": "X", "tegj": "L", "glob": "I"}, "how much is pish tegj glob glob ?")
        'pish tegj glob glob is 42'
    """
    if warnings is None:
        warnings = []

    echoed = []
    letters = []
    for word in question.split(" "):
        if word in numeral_mapping:
            echoed.append(word)
            letters.append(numeral_mapping[word])
        elif word and word not in RESERVED_QUERY_TOKENS:
            warnings.append(f"{word} could not be translated.")

    phrase = " ".join(echoed)
    numeral = "".join(letters)
    try:
        value = convert_roman_to_int(numeral)
    except RomanNumeralError:
        return f"I don't know how to interpret this number: {phrase} -> {numeral}"
    return f"{phrase} is {value}"


def answer_how_many_credits(
    numeral_mapping: Mapping[str, str],
    unit_mapping: Mapping[str, float],
    question: str,
) -> str:
    """Answer a question like "how many Credits is glob prok Silver ?".

    The last word before the question mark is the unit, the words before it
    are the amount. Every amount word must have a numeral mapping.

    Args:
        numeral_mapping: Alien token -> Roman letter
        unit_mapping: Unit name -> Credits per unit
        question: The trimmed query line

    Returns:
        str: "<amount> <unit> is <credits> Credits", or one of the messages
        for untranslatable amounts, unknown units and malformed questions

    Example:
        >>> answer_how_many_credits({"glob": "I", "prok": "V"}, {"Iron": 195.5}, "how many Credits is glob prok Iron ?")
        'glob prok Iron is 782 Credits'
    """
    prefix = HOW_MANY_CREDITS_PREFIX + " "
    if not question.startswith(prefix) or not question.endswith(QUESTION_MARK):
        return DEFAULT_RESPONSE

    # "glob prok Silver ?" -> ["glob", "prok"], "Silver"
    remainder = question[len(prefix):].strip()
    remainder = remainder[:-len(QUESTION_MARK)].rstrip()
    *amount, unit = remainder.split(" ")
    amount_phrase = " ".join(amount)

    letters = translate_tokens(numeral_mapping, amount)
    if len(letters) != len(amount):
        return f"Not everything could be translated to roman numerals: {amount_phrase}"

    if unit not in unit_mapping:
        return f"This unit is unkown to me: {unit}"

    try:
        value = convert_roman_to_int("".join(letters))
    except RomanNumeralError:
        return DEFAULT_RESPONSE

    credits = format_credits(float(value) * unit_mapping[unit])
    return f"{amount_phrase} {unit} is {credits} Credits"


def answer_statement(
    statement: Statement,
    numeral_mapping: Mapping[str, str],
    unit_mapping: Mapping[str, float],
    warnings: Optional[list[str]] = None,
) -> Optional[str]:
    """Produce the output line for a single statement.

    Returns:
        Optional[str]: The answer, or None for definitions (they are not answered)
    """
    if statement.kind == StatementKind.HOW_MUCH_QUERY:
        return answer_how_much(numeral_mapping, statement.text, warnings)
    if statement.kind == StatementKind.HOW_MANY_CREDITS_QUERY:
        return answer_how_many_credits(numeral_mapping, unit_mapping, statement.text)
    if statement.kind == StatementKind.UNRECOGNIZED:
        return DEFAULT_RESPONSE
    return None


def convert(text: str) -> ConversionReport:
    """Run the full conversion over a complete input text.

    Args:
        text: The whole input, newline-delimited

    Returns:
        ConversionReport with the final mappings, the unit notices, one
        answer per query or unrecognized statement and the warnings

    Example:
        >>> report = convert("glob is I\\nprok is V\\nhow much is prok glob ?\\n")
        >>> report.answers
        ['prok glob is 6']
    """
    report = ConversionReport()

    # Phase 1: classification
    statements = classify_lines(text.split("\n"))

    # Phase 2: numeral definitions first, unit definitions need them
    report.numeral_mapping = build_numeral_mapping(statements)
    report.unit_mapping = build_unit_mapping(statements, report.numeral_mapping, report.notices)

    # Phase 3: answers in input order
    for statement in statements:
        answer = answer_statement(statement, report.numeral_mapping, report.unit_mapping, report.warnings)
        if answer is not None:
            report.answers.append(answer)

    return report
