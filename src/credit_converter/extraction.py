"""Extract structured values from definition statements.

Numeral definitions yield an (alien token, Roman letter) pair. Unit
definitions yield the unit name, the alien amount tokens in front of it and
the stated number of Credits, which together give the Credit rate of one unit.

All extractors return None when the line does not follow the grammar, so
they can safely be called on any text.
"""
from typing import Mapping, Optional

from .common.roman_numerals import RomanNumeralError, convert_roman_to_int
from .statements import NUMERAL_DEFINITION_PATTERN, UNIT_DEFINITION_PATTERN


def numeral_pair(line: str) -> Optional[tuple[str, str]]:
    """Extract the alien token and its Roman letter from a numeral definition.

    Example:
        >>> numeral_pair("glob is I")
        ('glob', 'I')
        >>> numeral_pair("pish is A") is None
        True
    """
    match = NUMERAL_DEFINITION_PATTERN.fullmatch(line)
    if match is None:
        return None
    return match.group("token"), match.group("letter")


def _unit_tokens(line: str) -> Optional[list[str]]:
    """Return the token group of a unit definition split on single spaces."""
    match = UNIT_DEFINITION_PATTERN.fullmatch(line)
    if match is None:
        return None

    tokens = match.group("tokens").split(" ")
    # At least one amount token has to precede the unit name
    if len(tokens) < 2:
        return None
    return tokens


def unit_name(line: str) -> Optional[str]:
    """Extract the unit name, i.e. the last token before " is ".

    Example:
        >>> unit_name("glob prok Iron is 782 Credits")
        'Iron'
    """
    tokens = _unit_tokens(line)
    if tokens is None:
        return None
    return tokens[-1]


def amount_tokens(line: str) -> Optional[list[str]]:
    """Extract the alien amount tokens that precede the unit name.

    Example:
        >>> amount_tokens("glob prok Iron is 782 Credits")
        ['glob', 'prok']
    """
    tokens = _unit_tokens(line)
    if tokens is None:
        return None
    return tokens[:-1]


def credit_amount(line: str) -> Optional[int]:
    """Extract the number of Credits stated in a unit definition.

    Example:
        >>> credit_amount("glob prok Iron is 782 Credits")
        782
    """
    match = UNIT_DEFINITION_PATTERN.fullmatch(line)
    if match is None:
        return None
    return int(match.group("credits"))


def translate_tokens(numeral_mapping: Mapping[str, str], tokens: list[str]) -> list[str]:
    """Map alien tokens to Roman letters, dropping tokens that have no mapping."""
    return [numeral_mapping[token] for token in tokens if token in numeral_mapping]


def amount_value(numeral_mapping: Mapping[str, str], tokens: list[str]) -> Optional[int]:
    """Decode a sequence of alien tokens into an integer.

    Args:
        numeral_mapping: Alien token -> Roman letter
        tokens: Alien tokens in reading order

    Returns:
        Optional[int]: Value of the concatenated Roman letters, or None if a
        token is unmapped or the letters do not form a canonical numeral

    Example:
        >>> amount_value({"glob": "I", "prok": "V"}, ["glob", "prok"])
        4
        >>> amount_value({"glob": "I"}, ["glob", "bla"]) is None
        True
    """
    letters = translate_tokens(numeral_mapping, tokens)
    if len(letters) != len(tokens):
        return None

    try:
        return convert_roman_to_int("".join(letters))
    except RomanNumeralError:
        return None


def unit_rate(numeral_mapping: Mapping[str, str], line: str) -> Optional[tuple[str, float]]:
    """Compute the Credit rate of one unit from a unit definition.

    The rate is the stated number of Credits divided by the decoded amount.

    Args:
        numeral_mapping: Alien token -> Roman letter, fully populated
        line: A unit definition such as "glob prok Iron is 782 Credits"

    Returns:
        Optional[tuple[str, float]]: (unit name, Credits per unit), or None if
        the line is not a unit definition or its amount cannot be decoded

    Example:
        >>> unit_rate({"glob": "I", "prok": "V"}, "glob prok Iron is 782 Credits")
        ('Iron', 195.5)
    """
    name = unit_name(line)
    tokens = amount_tokens(line)
    credits = credit_amount(line)
    if name is None or tokens is None or credits is None:
        return None

    amount = amount_value(numeral_mapping, tokens)
    if amount is None:
        return None

    return name, credits / amount
