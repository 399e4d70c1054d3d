"""
Text Normalizer Module.

Turns raw OCR output into the canonical blob the pattern-based
extractors search: lower-cased, with a fixed table of OCR glyph
confusions repaired and every whitespace run collapsed to one space.

Author: ML Engineering Team
"""

import re
from typing import List, Optional, Pattern, Tuple

from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


def _rule(pattern: str, replacement: str) -> Tuple[Pattern, str]:
    return re.compile(pattern), replacement


class TextNormalizer:
    """
    Normalizes raw invoice text for pattern matching.

    Steps, in order:
        1. Lower-case the whole text.
        2. Apply GLYPH_REPAIRS in table order.
        3. Collapse whitespace runs (newlines included) and trim.

    Each step is idempotent and none of them reorders characters. The
    repair table is ordered so that no rule produces text an earlier
    rule would match. Apostrophes are dropped before the keyword repairs
    ("1nv'oice" is one word), and keyword repairs run before bar glyphs
    become spaces, because "|nvoice" is itself a keyword misread.

    Example:
        >>> TextNormalizer().normalize("TAX 1NVOICE |  No: A-1\\n")
        'tax invoice no: a-1'
    """

    GLYPH_REPAIRS: List[Tuple[Pattern, str]] = [
        # dash-like glyphs
        _rule(r"[\u2010-\u2015\u2212\ufe58\ufe63\uff0d]", "-"),
        # stray apostrophes and backticks; dropping them joins letters
        _rule(r"[\u0027\u2018\u2019\u0060\u00b4]", ""),
        # digit/bar read in place of a letter inside "invoice"
        _rule(r"(?<![a-z0-9])[i1l|!]nv[o0][i1l]ce(?![a-z0-9])", "invoice"),
        _rule(r"(?<![a-z0-9])t[o0]ta[l1](?![a-z0-9])", "total"),
        # vertical bars are column rules in OCR tables
        _rule(r"[|\u00a6\u2502]", " "),
    ]

    WHITESPACE_RE = re.compile(r"\s+")

    def normalize(self, raw_text: Optional[str]) -> str:
        """
        Normalize raw text.

        Args:
            raw_text: Full OCR/text output for one document.

        Returns:
            Normalized text; empty string for empty or missing input.
        """
        if not raw_text or not isinstance(raw_text, str):
            return ""

        text = raw_text.lower()

        for pattern, replacement in self.GLYPH_REPAIRS:
            text = pattern.sub(replacement, text)

        return self.WHITESPACE_RE.sub(" ", text).strip()


_default_normalizer = TextNormalizer()


def normalize_text(raw_text: Optional[str]) -> str:
    """Normalize text with the shared TextNormalizer."""
    return _default_normalizer.normalize(raw_text)
