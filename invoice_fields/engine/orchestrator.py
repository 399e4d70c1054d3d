"""
Field Extraction Engine Module.

This module provides the FieldExtractionEngine class that runs the
extractors in dependency order and assembles the ExtractionResult.

Pipeline:
    1. Normalize text and split lines
    2. Invoice number and invoice date (independent)
    3. Total and subtotal (scored)
    4. Tax scan and derivation (consumes total and subtotal)
    5. Conservative merge with caller-known values

Author: ML Engineering Team
"""

from typing import Any, Callable, Mapping, Optional, Union

from invoice_fields.extractors import (
    Candidate,
    FieldKind,
    InvoiceDateExtractor,
    InvoiceNumberExtractor,
    SubtotalAmountExtractor,
    TaxDeriver,
    TaxLineScanner,
    TotalAmountExtractor,
    load_scoring_weights,
)
from invoice_fields.preprocessing import TextNormalizer, split_lines
from invoice_fields.utils.exceptions import ExtractionError
from invoice_fields.utils.logger import get_logger
from .extraction_result import ExtractionResult
from .resolver import resolve_first, resolve_scored

# Initialize module logger
logger = get_logger(__name__)

KnownFields = Union[ExtractionResult, Mapping[str, Any], None]


class FieldExtractionEngine:
    """
    Deterministic invoice field extraction.

    The engine is pure: text in, ExtractionResult out, no I/O. It holds
    only configuration read at construction time, so one instance can
    serve concurrent calls for independent documents.

    No exception escapes extract(). A stage that fails unexpectedly is
    logged, recorded in the result's warnings and leaves its field absent.

    Example:
        >>> engine = FieldExtractionEngine()
        >>> result = engine.extract("Invoice No: INV-2048\\nGrand Total: 110.00")
        >>> result.invoice_number, result.total_amount
        ('INV-2048', Decimal('110.00'))
    """

    def __init__(self) -> None:
        """Initialize the engine with all extractors."""
        weights = load_scoring_weights()

        self.text_normalizer = TextNormalizer()
        self.number_extractor = InvoiceNumberExtractor()
        self.date_extractor = InvoiceDateExtractor()
        self.total_extractor = TotalAmountExtractor(weights)
        self.subtotal_extractor = SubtotalAmountExtractor(weights)
        self.tax_scanner = TaxLineScanner(weights)
        self.tax_deriver = TaxDeriver()

        logger.debug("FieldExtractionEngine initialized")

    def extract(self, raw_text: Any, known: KnownFields = None) -> ExtractionResult:
        """
        Extract invoice fields from raw document text.

        Args:
            raw_text: OCR or text-layer output. Bytes are decoded as UTF-8
                with replacement; other non-string input is coerced.
            known: Previously known field values for the conservative
                merge (ExtractionResult or mapping).

        Returns:
            ExtractionResult with each field present or None.
        """
        result = ExtractionResult()

        try:
            text = self._coerce_text(raw_text)
            normalized = self.text_normalizer.normalize(text)
            lines = split_lines(text)
        except Exception as e:
            logger.warning(f"Could not prepare input text: {e}")
            result.add_warning(f"input: {e}")
            normalized, lines = "", []

        number = self._run_stage(
            result, FieldKind.INVOICE_NUMBER,
            lambda: resolve_first(self.number_extractor.extract(normalized))
        )
        invoice_date = self._run_stage(
            result, FieldKind.INVOICE_DATE,
            lambda: resolve_first(self.date_extractor.extract(normalized, lines))
        )
        total = self._run_stage(
            result, FieldKind.TOTAL_AMOUNT,
            lambda: resolve_scored(self.total_extractor.extract(lines))
        )
        subtotal = self._run_stage(
            result, FieldKind.SUBTOTAL_AMOUNT,
            lambda: resolve_scored(self.subtotal_extractor.extract(lines))
        )
        tax = self._run_stage(
            result, FieldKind.TAX_AMOUNT,
            lambda: self.tax_deriver.resolve(
                self.tax_scanner.scan(lines),
                subtotal=subtotal.value if subtotal else None,
                total=total.value if total else None,
            )
        )

        result.invoice_number = number.value if number else None
        result.invoice_date = invoice_date.value if invoice_date else None
        result.total_amount = total.value if total else None
        result.tax_amount = tax.value if tax else None

        logger.debug(f"Extracted {result!r}")

        if known is not None:
            try:
                result = result.merged_with(known)
            except Exception as e:
                logger.warning(f"Could not merge known values: {e}")
                result.add_warning(f"merge: {e}")

        return result

    def _run_stage(
        self,
        result: ExtractionResult,
        field: FieldKind,
        stage: Callable[[], Optional[Candidate]]
    ) -> Optional[Candidate]:
        """Run one field stage, turning unexpected failures into absence."""
        try:
            candidate = stage()
        except Exception as e:
            error = ExtractionError(field.value, str(e))
            logger.warning(str(error))
            result.add_warning(str(error))
            return None

        if candidate is None:
            logger.debug(f"{field.value}: not detected")
        return candidate

    @staticmethod
    def _coerce_text(raw_text: Any) -> str:
        if raw_text is None:
            return ""
        if isinstance(raw_text, str):
            return raw_text
        if isinstance(raw_text, (bytes, bytearray)):
            return bytes(raw_text).decode("utf-8", errors="replace")
        return str(raw_text)


_default_engine: Optional[FieldExtractionEngine] = None


def get_engine() -> FieldExtractionEngine:
    """Return the shared default engine, creating it on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = FieldExtractionEngine()
    return _default_engine


def extract_fields(raw_text: Any, known: KnownFields = None) -> ExtractionResult:
    """
    Convenience function to extract fields with the default engine.

    Args:
        raw_text: Raw document text.
        known: Previously known field values.

    Returns:
        ExtractionResult.
    """
    return get_engine().extract(raw_text, known)
