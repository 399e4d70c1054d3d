"""
Invoice Number Extractor Module.

Finds the invoice number in the normalized text blob using the ordered
INVOICE_NUMBER_PATTERNS table. Priority order is the tie-break: the
first pattern that matches anywhere decides the outcome.

Author: ML Engineering Team
"""

from typing import List, Optional

from invoice_fields.parsers.validators import InvoiceNumberValidator
from invoice_fields.utils.logger import get_logger
from .candidates import Candidate, FieldKind
from .patterns import INVOICE_NUMBER_PATTERNS, PatternSpec

# Initialize module logger
logger = get_logger(__name__)


class InvoiceNumberExtractor:
    """
    Extracts the invoice number from normalized text.

    Once a labeled pattern matches, its token either passes the
    plausibility checks or the field is reported absent. The search does
    not fall through to weaker patterns.

    Example:
        >>> extractor = InvoiceNumberExtractor()
        >>> extractor.extract("acme ltd invoice no: inv-2048 date: 2026-01-20")
        [Candidate(field=<FieldKind.INVOICE_NUMBER: 'invoice_number'>, value='INV-2048', ...)]
    """

    # edge punctuation left on a token by sentence context, e.g. "(inv-1)."
    TOKEN_EDGE_CHARS = ".,;:()[]"

    def __init__(self, patterns: Optional[List[PatternSpec]] = None) -> None:
        self.patterns = patterns if patterns is not None else INVOICE_NUMBER_PATTERNS
        self.validator = InvoiceNumberValidator()

    def extract(self, normalized_text: str) -> List[Candidate]:
        """
        Produce at most one invoice number candidate.

        Args:
            normalized_text: Output of the text normalizer.

        Returns:
            A single-element list, or an empty list when not found.
        """
        if not normalized_text:
            return []

        for rank, spec in enumerate(self.patterns):
            match = spec.compiled.search(normalized_text)
            if not match:
                continue

            token = match.group(1).strip(self.TOKEN_EDGE_CHARS)
            is_valid, message = self.validator.validate(token)

            if not is_valid:
                logger.debug(f"Invoice number '{token}' under '{spec.name}' rejected: {message}")
                return []

            logger.debug(f"Invoice number '{token}' matched by '{spec.name}'")
            return [Candidate(
                field=FieldKind.INVOICE_NUMBER,
                value=token.upper(),
                score=float(len(self.patterns) - rank),
            )]

        return []
