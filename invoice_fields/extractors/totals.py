"""
Total and Subtotal Extractor Module.

Total amount is found in three phases, each tried only when the previous
one produced nothing:

    1. Fast path: the first line (top to bottom) carrying a total label
       and no tax or subtotal wording.
    2. Scored path: every total-like line, scored by label strength and
       position, resolved by highest score.
    3. Fallback: the largest plausible number outside line-item rows.

The fast path wins even when the scored path would rank a later line
higher.

Author: ML Engineering Team
"""

import re
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from config import get_config
from invoice_fields.parsers.validators import AmountValidator
from invoice_fields.utils.logger import get_logger
from .base import LineExtractor
from .candidates import Candidate, FieldKind
from .patterns import (
    INCLUSIVE_TAX_RE,
    LEADING_TOTAL_RE,
    LINE_ITEM_RE,
    LONE_TOTAL_RE,
    STRONG_TOTAL_RE,
    SUBTOTAL_RE,
    TAX_KEYWORD_RE,
)

# Initialize module logger
logger = get_logger(__name__)


class TotalAmountExtractor(LineExtractor):
    """
    Extracts the grand total from the line sequence.

    Example:
        >>> extractor = TotalAmountExtractor()
        >>> lines = ["Subtotal: 100.00", "Tax: 10.00", "Grand Total: 110.00"]
        >>> extractor.extract(lines)[0].value
        Decimal('110.00')
    """

    def __init__(self, weights: Optional[Dict[str, float]] = None) -> None:
        super().__init__(weights)
        self.amount_validator = AmountValidator()
        self.fallback_min = Decimal(str(get_config("extraction.amount.fallback_min", 1)))
        self.fallback_max = Decimal(str(get_config("extraction.amount.fallback_max", 100000000)))

    def extract(self, lines: Sequence[str]) -> List[Candidate]:
        """
        Produce total amount candidates.

        Args:
            lines: LineSequence of the document.

        Returns:
            Candidates for the resolver; empty when no phase found anything.
        """
        if not lines:
            return []

        for phase in (self.fast_path, self.scored_path, self.fallback):
            candidates = phase(lines)
            if candidates:
                logger.debug(f"Total amount found by {phase.__name__}: {len(candidates)} candidate(s)")
                return candidates

        return []

    def fast_path(self, lines: Sequence[str]) -> List[Candidate]:
        """First labeled total line, top to bottom, without tax or subtotal wording."""
        for index, line in enumerate(lines):
            view = self.line_view(line)

            if not (STRONG_TOTAL_RE.search(view) or LONE_TOTAL_RE.search(view)):
                continue
            if TAX_KEYWORD_RE.search(view) or SUBTOTAL_RE.search(view):
                continue

            amount = self.line_amount(line)
            if amount is not None and self.amount_validator.is_valid(amount):
                return [Candidate(
                    field=FieldKind.TOTAL_AMOUNT,
                    value=amount,
                    score=self.weights['strong_label'],
                    origin_index=index,
                )]

        return []

    def scored_path(self, lines: Sequence[str]) -> List[Candidate]:
        """Score every total-like line, bottom to top."""
        candidates = []
        line_count = len(lines)

        for index in range(line_count - 1, -1, -1):
            view = self.line_view(lines[index])

            if SUBTOTAL_RE.search(view):
                continue

            inclusive = INCLUSIVE_TAX_RE.search(view) is not None
            if TAX_KEYWORD_RE.search(view) and not inclusive:
                continue

            weight = self._label_weight(view, inclusive)
            if weight is None:
                continue

            amount = self.line_amount(lines[index])
            if amount is None and index + 1 < line_count:
                amount = self._continuation_amount(lines[index + 1])

            if amount is None or not self.amount_validator.is_valid(amount):
                continue

            candidates.append(Candidate(
                field=FieldKind.TOTAL_AMOUNT,
                value=amount,
                score=weight + self.position_bonus(index, line_count),
                origin_index=index,
            ))

        return candidates

    def fallback(self, lines: Sequence[str]) -> List[Candidate]:
        """Largest plausible number outside line-item rows."""
        best = None

        for index, line in enumerate(lines):
            if LINE_ITEM_RE.search(self.line_view(line)):
                continue

            for token in self.line_tokens(line):
                if token.is_percent:
                    continue
                if not self.amount_validator.is_within(token.value, self.fallback_min, self.fallback_max):
                    continue
                if best is None or token.value > best.value:
                    best = Candidate(
                        field=FieldKind.TOTAL_AMOUNT,
                        value=token.value,
                        score=0.0,
                        origin_index=index,
                    )

        return [best] if best else []

    def _label_weight(self, view: str, inclusive: bool) -> Optional[float]:
        if STRONG_TOTAL_RE.search(view):
            return self.weights['inclusive_label'] if inclusive else self.weights['strong_label']
        if LEADING_TOTAL_RE.search(view):
            return self.weights['leading_total']
        return None

    def _continuation_amount(self, next_line: str) -> Optional[Decimal]:
        # a label on one line, its value alone on the next
        view = self.line_view(next_line)
        if LONE_TOTAL_RE.search(view) or SUBTOTAL_RE.search(view) or TAX_KEYWORD_RE.search(view):
            return None
        if re.search(r"[a-z]{4,}", view):
            return None
        return self.line_amount(next_line)


class SubtotalAmountExtractor(LineExtractor):
    """
    Extracts the subtotal from the line sequence.

    The subtotal never reaches the public result; it only feeds the tax
    derivation stage.
    """

    def __init__(self, weights: Optional[Dict[str, float]] = None) -> None:
        super().__init__(weights)
        self.amount_validator = AmountValidator()

    def extract(self, lines: Sequence[str]) -> List[Candidate]:
        candidates = []
        line_count = len(lines)

        for index in range(line_count - 1, -1, -1):
            view = self.line_view(lines[index])

            if not SUBTOTAL_RE.search(view) or STRONG_TOTAL_RE.search(view):
                continue

            amount = self.line_amount(lines[index])
            if amount is None or not self.amount_validator.is_valid(amount):
                continue

            candidates.append(Candidate(
                field=FieldKind.SUBTOTAL_AMOUNT,
                value=amount,
                score=self.weights['subtotal_base'] + self.position_bonus(index, line_count),
                origin_index=index,
            ))

        return candidates
