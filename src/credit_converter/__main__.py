"""Main entry point for the credit converter package."""
import sys
import argparse
from pathlib import Path

from .common.config import CREDIT_CONVERTER_QUIET, INPUT_ENCODING, STDIN_PATH
from .common.validators import validate_file
from .engine import convert


def read_input(input_path: str) -> str:
    """Read the whole input from a file, or from stdin if the path is "-"."""
    if input_path == STDIN_PATH:
        return sys.stdin.read()

    path = Path(input_path)
    validate_file(path, "Input file")
    return path.read_text(encoding=INPUT_ENCODING)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="credit-converter",
        description="Pangalactic Credit Converter: translates alien numerals and units to Credits",
    )
    parser.add_argument(
        'input_path',
        nargs='?',
        default=STDIN_PATH,
        metavar='FILE',
        help="Input file with gathered information and queries. "
             "If set to '-' or no FILE is specified, input is read from stdin.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Convert the given input and print one line per answer."""
    args = parse_args(argv)

    # The whole input is read up front; any failure here is fatal
    try:
        text = read_input(args.input_path)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)

    report = convert(text)

    if not CREDIT_CONVERTER_QUIET:
        for warning in report.warnings:
            print(f"Warning: {warning}", file=sys.stderr)

    for line in report.output_lines():
        print(line)


if __name__ == "__main__":
    main()
