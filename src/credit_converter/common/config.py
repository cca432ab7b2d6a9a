"""Configuration constants for the credit converter package.

This module contains the fixed phrases of the statement grammar, the
response templates and the numeric bounds used across the package:
- Literal phrases that identify definitions and queries
- Default response for statements nobody understands
- Bounds of the classical Roman numeral range

Environment Variables:
    CREDIT_CONVERTER_QUIET: Set to "1" to suppress warnings on standard error
"""
import os

# Warnings about untranslatable tokens are written to stderr unless quiet mode is on
CREDIT_CONVERTER_QUIET = os.getenv("CREDIT_CONVERTER_QUIET", "0") == "1"

# Input handling
# A path of "-" (or no path at all) means the input is read from standard input
STDIN_PATH = "-"
INPUT_ENCODING = "utf-8"

# Roman numeral bounds (inclusive)
MIN_ROMAN_VALUE = 1
MAX_ROMAN_VALUE = 3999

# Statement grammar
# These phrases are matched verbatim, including case and spacing
IS_PHRASE = " is "
CREDITS_SUFFIX = " Credits"
HOW_MANY_CREDITS_PREFIX = "how many Credits is"
HOW_MUCH_PREFIX = "how much is"
QUESTION_MARK = "?"

# Words that carry no numeral meaning in a "how much is ... ?" query
RESERVED_QUERY_TOKENS = frozenset({"?", "how", "much", "is"})

# Response for anything that is neither a definition nor a known query
DEFAULT_RESPONSE = "I have no idea what you are talking about"
