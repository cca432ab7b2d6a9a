"""Classify input lines into the five kinds of statements.

Every non-empty line of the input is either a definition (an alien numeral
token or an alien unit), one of the two supported questions, or something
nobody understands. The checks run in a fixed priority order because the
patterns overlap: "how much is ... ?" would, for instance, also be a valid
prefix of a line that is not a question at all.

Grammar (whole line, after trimming):
    <token> is <I|V|X|L|C|D|M>                 numeral definition
    <token> <token>... is <digits> Credits     unit definition
    how many Credits is ... ?                  credit query (case-sensitive prefix)
    how much is ... ?                          quantity query (case-insensitive prefix)
"""
import re
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from .common.config import (
    CREDITS_SUFFIX,
    HOW_MANY_CREDITS_PREFIX,
    HOW_MUCH_PREFIX,
    IS_PHRASE,
    QUESTION_MARK,
)


# Matches: glob is I
# \w is Unicode-aware, so alien tokens may use any word characters
NUMERAL_DEFINITION_PATTERN = re.compile(
    r'(?P<token>\w+)'           # the alien token
    + re.escape(IS_PHRASE) +
    r'(?P<letter>[IVXLCDM])'    # exactly one Roman letter
)

# Matches: glob prok Gold is 57800 Credits
UNIT_DEFINITION_PATTERN = re.compile(
    r'(?P<tokens>[\w ]+)'       # amount tokens followed by the unit name
    + re.escape(IS_PHRASE) +
    r'(?P<credits>\d+)'         # Credits as a decimal integer
    + re.escape(CREDITS_SUFFIX)
)


class StatementKind(Enum):
    """The five kinds of input statements."""
    NUMERAL_DEFINITION = "NumeralDefinition"
    UNIT_DEFINITION = "UnitDefinition"
    HOW_MUCH_QUERY = "HowMuchQuery"
    HOW_MANY_CREDITS_QUERY = "HowManyCreditsQuery"
    UNRECOGNIZED = "Unrecognized"


class Statement(BaseModel):
    """A trimmed input line and its classification.

    Attributes:
        text: The line with leading and trailing whitespace removed
        kind: Classification of the line
        line_number: 1-based line number in the original input
    """
    model_config = ConfigDict(frozen=True)

    text: str
    kind: StatementKind
    line_number: int = 0

    @property
    def is_definition(self) -> bool:
        return self.kind in (StatementKind.NUMERAL_DEFINITION, StatementKind.UNIT_DEFINITION)


def is_numeral_definition(line: str) -> bool:
    """Return True for lines like "glob is I"."""
    return NUMERAL_DEFINITION_PATTERN.fullmatch(line) is not None


def is_unit_definition(line: str) -> bool:
    """Return True for lines like "glob prok Gold is 57800 Credits".

    The token group in front of " is " needs at least one amount token and the
    unit name, so "Gold is 57800 Credits" is not a unit definition.
    """
    match = UNIT_DEFINITION_PATTERN.fullmatch(line)
    if match is None:
        return False
    return len(match.group("tokens").split(" ")) >= 2


def is_how_many_credits_query(line: str) -> bool:
    """Return True for lines like "how many Credits is glob prok Silver ?".

    The prefix check is case-sensitive, unlike is_how_much_query.
    """
    return line.startswith(HOW_MANY_CREDITS_PREFIX) and line.endswith(QUESTION_MARK)


def is_how_much_query(line: str) -> bool:
    """Return True for lines like "how much is pish tegj glob glob ?".

    The prefix check ignores case, so "How much is ... ?" is accepted too.
    """
    return line.lower().startswith(HOW_MUCH_PREFIX) and line.endswith(QUESTION_MARK)


def classify_statement(line: str) -> StatementKind:
    """Decide which kind of statement a trimmed, non-empty line is.

    The first matching check wins:
    1. numeral definition
    2. unit definition
    3. "how many Credits is" query
    4. "how much is" query
    5. anything else is unrecognized

    Args:
        line: A single line without surrounding whitespace

    Returns:
        StatementKind of the line
    """
    if is_numeral_definition(line):
        return StatementKind.NUMERAL_DEFINITION
    if is_unit_definition(line):
        return StatementKind.UNIT_DEFINITION
    if is_how_many_credits_query(line):
        return StatementKind.HOW_MANY_CREDITS_QUERY
    if is_how_much_query(line):
        return StatementKind.HOW_MUCH_QUERY
    return StatementKind.UNRECOGNIZED


def classify_lines(lines: Iterable[str]) -> list[Statement]:
    """Trim and classify every line of an input, skipping blank lines.

    Args:
        lines: Raw input lines, with or without line endings

    Returns:
        list[Statement]: One statement per non-empty line, in input order

    Example:
        >>> [s.kind.value for s in classify_lines(["glob is I", "", "hello ?"])]
        ['NumeralDefinition', 'Unrecognized']
    """
    statements = []
    for line_number, raw_line in enumerate(lines, start=1):
        text = raw_line.strip()

        # Blank lines are neither classified nor answered
        if not text:
            continue

        statements.append(Statement(text=text, kind=classify_statement(text), line_number=line_number))
    return statements
