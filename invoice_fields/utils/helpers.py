"""
Helper Utilities Module.

This module provides small file and text helpers used by the CLI and the
evaluation harness. Functions here should be generic and reusable.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - validate_file_exists: Check that a path is a regular file
    - read_text_file: Read a document's text with tolerant decoding
    - levenshtein_ratio: Similarity of two strings in [0, 1]
"""

from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/reports")
        PosixPath('outputs/reports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the file extension from a filepath.

    Returns the extension in lowercase, including the dot.
    Returns empty string if no extension exists.

    Example:
        >>> get_file_extension("invoice.TXT")
        ".txt"
    """
    return Path(filepath).suffix.lower()


def validate_file_exists(filepath: Union[str, Path]) -> bool:
    """Check if a file exists and is a regular file."""
    path = Path(filepath)
    return path.exists() and path.is_file()


def read_text_file(filepath: Union[str, Path]) -> str:
    """
    Read a text document, replacing undecodable bytes.

    OCR dumps regularly contain stray bytes; the engine copes with any
    string, so decoding must never be the step that fails.

    Args:
        filepath: Path to the text file.

    Returns:
        File contents as a string.
    """
    with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


def levenshtein_ratio(s1: str, s2: str) -> float:
    """
    Similarity between two strings based on edit distance.

    Args:
        s1: First string.
        s2: Second string.

    Returns:
        Similarity score between 0 and 1.

    Example:
        >>> levenshtein_ratio("INV-2048", "INV-2046")
        0.875
    """
    if not s1 or not s2:
        return 0.0

    if s1 == s2:
        return 1.0

    len1, len2 = len(s1), len(s2)
    previous = list(range(len2 + 1))

    for i in range(1, len1 + 1):
        current = [i] + [0] * len2
        for j in range(1, len2 + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost
            )
        previous = current

    return 1.0 - (previous[len2] / max(len1, len2))
