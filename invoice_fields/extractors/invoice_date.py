"""
Invoice Date Extractor Module.

Labeled dates first, then an unlabeled sweep of the header lines, then
any dateish substring in the whole text. The first match that parses is
the answer; nothing after it is considered.

Author: ML Engineering Team
"""

from typing import Iterable, List, Optional, Sequence

from config import get_config
from invoice_fields.parsers.normalizers import DateNormalizer
from invoice_fields.preprocessing.text_normalizer import TextNormalizer
from invoice_fields.utils.logger import get_logger
from .candidates import Candidate, FieldKind
from .patterns import DATE_LABEL_PATTERNS, DATEISH_RE

# Initialize module logger
logger = get_logger(__name__)


class InvoiceDateExtractor:
    """
    Extracts the invoice date.

    Attributes:
        header_lines: How many leading lines the unlabeled sweep covers
        date_normalizer: DateNormalizer (repairs glued years, parses)

    Example:
        >>> extractor = InvoiceDateExtractor()
        >>> extractor.extract("invoice date: 20/01/2026", ["Invoice Date: 20/01/2026"])[0].value
        datetime.date(2026, 1, 20)
    """

    def __init__(self) -> None:
        self.header_lines = int(get_config("extraction.date.header_lines", 15))
        self.date_normalizer = DateNormalizer()
        self.text_normalizer = TextNormalizer()

    def extract(self, normalized_text: str, lines: Sequence[str] = ()) -> List[Candidate]:
        """
        Produce at most one invoice date candidate.

        Args:
            normalized_text: Output of the text normalizer.
            lines: Line sequence of the same document.

        Returns:
            A single-element list, or an empty list when no date parses.
        """
        for spec in DATE_LABEL_PATTERNS:
            candidate = self._first_parsed(
                match.group(1) for match in spec.compiled.finditer(normalized_text or "")
            )
            if candidate:
                logger.debug(f"Invoice date {candidate.value} matched by '{spec.name}'")
                return [candidate]

        for index, line in enumerate(lines[:self.header_lines]):
            view = self.text_normalizer.normalize(line)
            candidate = self._first_parsed(
                (match.group(0) for match in DATEISH_RE.finditer(view)), origin_index=index
            )
            if candidate:
                logger.debug(f"Invoice date {candidate.value} found on header line {index}")
                return [candidate]

        candidate = self._first_parsed(
            match.group(0) for match in DATEISH_RE.finditer(normalized_text or "")
        )
        if candidate:
            logger.debug(f"Invoice date {candidate.value} found by full-text sweep")
            return [candidate]

        return []

    def _first_parsed(
        self,
        tokens: Iterable[str],
        origin_index: Optional[int] = None
    ) -> Optional[Candidate]:
        for token in tokens:
            parsed = self.date_normalizer.normalize(token)
            if parsed is not None:
                return Candidate(
                    field=FieldKind.INVOICE_DATE,
                    value=parsed,
                    score=0.0,
                    origin_index=origin_index,
                )
        return None
