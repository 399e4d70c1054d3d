"""
Tax Extractor Module.

Tax extraction is split in two stages. The scanner reads tax lines and
needs nothing but the line sequence. The deriver runs after total and
subtotal are resolved and turns the first usable tax line into an
amount, computing it from a rate when the line carries no amount.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence

from invoice_fields.parsers.validators import AmountValidator, TaxRateValidator
from invoice_fields.utils.logger import get_logger
from .base import LineExtractor
from .candidates import Candidate, FieldKind
from .patterns import (
    EXCLUSIVE_TAX_RE,
    INCLUSIVE_TAX_RE,
    STRONG_TOTAL_RE,
    SUBTOTAL_RE,
    TAX_IDENTIFIER_RE,
    TAX_KEYWORD_RE,
)

# Initialize module logger
logger = get_logger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class TaxLine:
    """
    A line mentioning tax.

    Attributes:
        index: Line index in the LineSequence
        amount: Last non-percentage number on the line, if any
        rate: First percentage on the line, in percent, if any
    """
    index: int
    amount: Optional[Decimal] = None
    rate: Optional[Decimal] = None


class TaxLineScanner(LineExtractor):
    """
    Collects tax lines top to bottom.

    Registration numbers ("VAT No", "GST Reg"), the "Tax Invoice" heading,
    and subtotal or total lines that merely qualify themselves with tax
    wording ("Total incl. VAT") are not tax lines.

    Example:
        >>> TaxLineScanner().scan(["Sales Tax 6.25% 9.06"])
        [TaxLine(index=0, amount=Decimal('9.06'), rate=Decimal('6.25'))]
    """

    def __init__(self, weights: Optional[Dict[str, float]] = None) -> None:
        super().__init__(weights)
        self.amount_validator = AmountValidator()

    def scan(self, lines: Sequence[str]) -> List[TaxLine]:
        tax_lines = []

        for index, line in enumerate(lines):
            if not self.is_tax_line(self.line_view(line)):
                continue

            tokens = self.line_tokens(line)
            amounts = [
                token.value for token in tokens
                if not token.is_percent and self.amount_validator.is_valid(token.value)
            ]
            rates = [token.value for token in tokens if token.is_percent]

            tax_lines.append(TaxLine(
                index=index,
                amount=amounts[-1] if amounts else None,
                rate=rates[0] if rates else None,
            ))

        return tax_lines

    def is_tax_line(self, view: str) -> bool:
        """Check whether a normalized line reports tax."""
        if not TAX_KEYWORD_RE.search(view):
            return False

        for pattern in (TAX_IDENTIFIER_RE, SUBTOTAL_RE, STRONG_TOTAL_RE,
                        INCLUSIVE_TAX_RE, EXCLUSIVE_TAX_RE):
            if pattern.search(view):
                return False

        return True


class TaxDeriver:
    """
    Turns scanned tax lines into the tax amount.

    Lines are tried in document order; the first one yielding a
    computable amount wins:
        - an explicit amount is taken as-is
        - otherwise a plausible rate derives tax from the subtotal
          (tax = subtotal x rate), or, with only a total known, from the
          total assuming it includes tax (tax = total x rate / (1 + rate))

    Example:
        >>> deriver = TaxDeriver()
        >>> deriver.resolve([TaxLine(0, None, Decimal("20"))], subtotal=Decimal("500.00"))
        Candidate(field=<FieldKind.TAX_AMOUNT: 'tax_amount'>, value=Decimal('100.00'), ...)
    """

    def __init__(self) -> None:
        self.rate_validator = TaxRateValidator()

    def resolve(
        self,
        tax_lines: Sequence[TaxLine],
        subtotal: Optional[Decimal] = None,
        total: Optional[Decimal] = None
    ) -> Optional[Candidate]:
        """
        Resolve the tax amount.

        Args:
            tax_lines: Output of TaxLineScanner.scan
            subtotal: Resolved subtotal, if any
            total: Resolved total, if any

        Returns:
            Tax candidate, or None when no line yields an amount.
        """
        for tax_line in tax_lines:
            amount = self._amount_for(tax_line, subtotal, total)
            if amount is not None:
                return Candidate(
                    field=FieldKind.TAX_AMOUNT,
                    value=amount,
                    score=0.0,
                    origin_index=tax_line.index,
                )

        return None

    def _amount_for(
        self,
        tax_line: TaxLine,
        subtotal: Optional[Decimal],
        total: Optional[Decimal]
    ) -> Optional[Decimal]:
        if tax_line.amount is not None:
            return tax_line.amount

        if tax_line.rate is None:
            return None

        is_valid, message = self.rate_validator.validate(tax_line.rate)
        if not is_valid:
            logger.debug(f"Tax rate on line {tax_line.index} discarded: {message}")
            return None

        rate = tax_line.rate / HUNDRED

        if subtotal is not None:
            derived = subtotal * rate
        elif total is not None:
            derived = total * rate / (1 + rate)
        else:
            return None

        derived = derived.quantize(CENT, rounding=ROUND_HALF_UP)
        logger.debug(f"Tax derived from {tax_line.rate}% on line {tax_line.index}: {derived}")
        return derived


def derive_tax(
    lines: Sequence[str],
    subtotal: Optional[Decimal] = None,
    total: Optional[Decimal] = None,
    weights: Optional[Dict[str, float]] = None
) -> Optional[Candidate]:
    """Scan and derive in one call."""
    return TaxDeriver().resolve(TaxLineScanner(weights).scan(lines), subtotal, total)
