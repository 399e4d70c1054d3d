"""
Utility Module for the Invoice Field Extraction Engine.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Custom exceptions
    - File and string helpers
"""

from .logger import setup_logger, setup_logger_from_config, get_logger, set_level
from .helpers import (
    ensure_directory,
    get_file_extension,
    validate_file_exists,
    read_text_file,
    levenshtein_ratio,
)

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_logger',
    'set_level',
    'ensure_directory',
    'get_file_extension',
    'validate_file_exists',
    'read_text_file',
    'levenshtein_ratio',
]
