"""
Line Extractor Base Module.

Helpers shared by the line-based extractors (total, subtotal, tax):
label matching on a per-line normalized view and amount reading on the
original line.

Author: ML Engineering Team
"""

from decimal import Decimal
from typing import Dict, List, Optional

from invoice_fields.parsers.normalizers import AmountNormalizer, AmountToken
from invoice_fields.preprocessing.text_normalizer import TextNormalizer
from .candidates import load_scoring_weights
from .patterns import DATEISH_RE


class LineExtractor:
    """
    Base class for extractors that walk the line sequence.

    Labels are matched against a normalized view of a single line
    (lower-cased, glyph-repaired) so "T0TAL" and "TOTAL" read the same.
    Amounts are read from the original line with any dateish substring
    blanked out first, so "Due 20/02/2026: 110.00" yields 110.00 and
    never 2026.

    Attributes:
        amount_normalizer: Shared AmountNormalizer
        weights: Scoring table (see candidates.DEFAULT_SCORING_WEIGHTS)
    """

    def __init__(self, weights: Optional[Dict[str, float]] = None) -> None:
        self.amount_normalizer = AmountNormalizer()
        self.text_normalizer = TextNormalizer()
        self.weights = weights if weights is not None else load_scoring_weights()

    def line_view(self, line: str) -> str:
        """Normalized, lower-case view of one line for label tests."""
        return self.text_normalizer.normalize(line)

    def line_tokens(self, line: str) -> List[AmountToken]:
        """Numeric tokens of a line, dates excluded."""
        return self.amount_normalizer.find_amounts(DATEISH_RE.sub(" ", line or ""))

    def line_amount(self, line: str) -> Optional[Decimal]:
        """Last non-percentage amount on the line, dates excluded."""
        return self.amount_normalizer.last_amount(DATEISH_RE.sub(" ", line or ""))

    def position_bonus(self, index: int, line_count: int) -> float:
        """Bonus growing linearly from 0 (first line) to position_bonus (last)."""
        if line_count <= 1:
            return 0.0
        return self.weights['position_bonus'] * index / (line_count - 1)
