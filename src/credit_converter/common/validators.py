"""Validation utilities for the credit converter package.

This module provides reusable validation functions for input paths,
ensuring consistent error messages before any file is read.
"""
from pathlib import Path


def validate_file(path: Path, name: str = "File") -> None:
    """Validate that a path exists and is a file.

    Used by the command line interface to reject a missing or unreadable
    input path before attempting to read it.

    Args:
        path: Path object to validate
        name: Descriptive name for the file, used in error messages
              (e.g., "Input file")

    Raises:
        ValueError: If path does not exist or is not a file

    Example:
        >>> from pathlib import Path
        >>> validate_file(Path("./trade_notes.txt"), "Input file")
        # Raises ValueError if trade_notes.txt doesn't exist
    """
    if not path.is_file():
        raise ValueError(f"{name} not found: {path}")
