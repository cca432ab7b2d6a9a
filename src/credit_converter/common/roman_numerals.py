"""Roman numeral conversion utilities for the credit converter package.

This module provides bidirectional conversion between canonical Roman numerals
and integers in the classical range 1..3999. Alien numeral tokens are mapped to
single Roman letters, so every quantity in a statement or query ends up as a
Roman numeral string that has to be decoded here.

Only canonical spellings are accepted: a string is valid if and only if
encoding its computed value gives back the very same string. "IIII", "VX" or
"CMCD" therefore fail even though a naive left-to-right sum would give them a
value.
"""
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, model_validator

from .config import MAX_ROMAN_VALUE, MIN_ROMAN_VALUE


# Weights of the seven Roman letters, read-only for the lifetime of the process
ROMAN_VALUES = MappingProxyType({
    "I": 1,
    "V": 5,
    "X": 10,
    "L": 50,
    "C": 100,
    "D": 500,
    "M": 1000,
})

# Spelling of each decimal digit (0-9) per place, using subtractive pairs for 4 and 9
HUNDREDS = ("", "C", "CC", "CCC", "CD", "D", "DC", "DCC", "DCCC", "CM")
TENS = ("", "X", "XX", "XXX", "XL", "L", "LX", "LXX", "LXXX", "XC")
UNITS = ("", "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX")


class RomanNumeralError(ValueError):
    """Base class for all Roman numeral conversion failures."""


class OutOfRangeError(RomanNumeralError):
    """Raised when an integer cannot be written as a Roman numeral.

    Attributes:
        value: The rejected value
    """

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"{value!r} cannot be converted. Only integers from "
            f"{MIN_ROMAN_VALUE} to {MAX_ROMAN_VALUE} can be represented"
        )


class InvalidNumeralError(RomanNumeralError):
    """Raised when a string is not a canonical Roman numeral.

    Attributes:
        numeral: The rejected string
        reason: Short description of what is wrong with it
    """

    def __init__(self, numeral: str, reason: str):
        self.numeral = numeral
        self.reason = reason
        super().__init__(f"Invalid string for roman numeral: {numeral!r} ({reason})")


class RomanNumeral(BaseModel):
    """A value in 1..3999 together with its canonical Roman spelling.

    Instances are immutable. Construction validates that the representation is
    exactly what convert_int_to_roman produces for the value, so an instance
    can never hold a non-canonical spelling.

    Attributes:
        value: Integer value of the numeral
        representation: Canonical Roman numeral string

    Example:
        >>> numeral = parse_roman("XLII")
        >>> numeral.value
        42
        >>> str(numeral)
        'XLII'
    """
    model_config = ConfigDict(frozen=True)

    value: int
    representation: str

    @model_validator(mode="after")
    def check_canonical(self) -> "RomanNumeral":
        if convert_int_to_roman(self.value) != self.representation:
            raise ValueError(
                f"{self.representation!r} is not the canonical spelling of {self.value}"
            )
        return self

    def __str__(self) -> str:
        return self.representation

    def __int__(self) -> int:
        return self.value


def convert_int_to_roman(num: int) -> str:
    """Convert an integer to an upper-case canonical Roman numeral string.

    The value is split into its thousands, hundreds, tens and units digits.
    Thousands become repeated "M"; every other digit is looked up in the
    spelling table of its place. The segments are concatenated from the
    largest place to the smallest.

    Args:
        num: Integer to convert, 1 <= num <= 3999

    Returns:
        Canonical Roman numeral string

    Raises:
        OutOfRangeError: If num is not an integer or lies outside 1..3999

    Examples:
        >>> convert_int_to_roman(42)
        'XLII'
        >>> convert_int_to_roman(1903)
        'MCMIII'
        >>> convert_int_to_roman(3999)
        'MMMCMXCIX'
    """
    # bool is an int subclass but True is not a quantity
    if not isinstance(num, int) or isinstance(num, bool):
        raise OutOfRangeError(num)
    if num < MIN_ROMAN_VALUE or num > MAX_ROMAN_VALUE:
        raise OutOfRangeError(num)

    thousands, rest = divmod(num, 1000)
    hundreds, rest = divmod(rest, 100)
    tens, units = divmod(rest, 10)

    return "M" * thousands + HUNDREDS[hundreds] + TENS[tens] + UNITS[units]


def convert_roman_to_int(roman: str) -> int:
    """Convert a canonical Roman numeral string to an integer.

    Each letter is replaced by its weight. Walking from left to right, a
    weight is subtracted when the next weight is strictly larger and added
    otherwise; the last letter is always added. The result must lie in
    1..3999 and must re-encode to the input string verbatim.

    Args:
        roman: Roman numeral string, upper case, without surrounding whitespace

    Returns:
        Integer value of the Roman numeral

    Raises:
        InvalidNumeralError: If the string is empty, contains a character that
            is not a Roman letter, sums outside 1..3999 or is not canonical

    Examples:
        >>> convert_roman_to_int("XLII")
        42
        >>> convert_roman_to_int("MCMXCIV")
        1994
    """
    if not roman:
        raise InvalidNumeralError(roman, "empty string")

    for char in roman:
        if char not in ROMAN_VALUES:
            raise InvalidNumeralError(roman, f"invalid character {char!r}")

    weights = [ROMAN_VALUES[char] for char in roman]

    int_value = 0
    for i, weight in enumerate(weights):
        # Subtractive notation: a smaller weight in front of a larger one
        if i + 1 < len(weights) and weight < weights[i + 1]:
            int_value -= weight
        else:
            int_value += weight

    if int_value < MIN_ROMAN_VALUE or int_value > MAX_ROMAN_VALUE:
        raise InvalidNumeralError(roman, f"value {int_value} out of range")

    # The round trip through the encoder rejects every non-canonical spelling
    if convert_int_to_roman(int_value) != roman:
        raise InvalidNumeralError(roman, "not in canonical form")

    return int_value


def parse_roman(roman: str) -> RomanNumeral:
    """Decode a Roman numeral string into a RomanNumeral.

    Args:
        roman: Roman numeral string

    Returns:
        RomanNumeral holding the value and the (canonical) input string

    Raises:
        InvalidNumeralError: If the string is not a canonical Roman numeral
    """
    return RomanNumeral(value=convert_roman_to_int(roman), representation=roman)


def to_roman(num: int) -> RomanNumeral:
    """Encode an integer into a RomanNumeral.

    Raises:
        OutOfRangeError: If num lies outside 1..3999
    """
    return RomanNumeral(value=num, representation=convert_int_to_roman(num))
