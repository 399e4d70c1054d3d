"""
Preprocessing Module for the Invoice Field Extraction Engine.

This module turns raw document text into the two views the extractors
consume:
    - the normalized text blob (lower-cased, glyph-repaired, collapsed)
    - the ordered line sequence (original text, one entry per line)

Author: ML Engineering Team
"""

from .text_normalizer import TextNormalizer, normalize_text
from .line_splitter import split_lines

__all__ = ['TextNormalizer', 'normalize_text', 'split_lines']
