"""
Document Processor Module.

This module provides the DocumentProcessor class that takes one
InvoiceDocument through text acquisition, field extraction and status
updates.

Flow:
    1. Status -> processing
    2. Text from the cache, else from the text provider
    3. No text: status -> failed, stop
    4. Engine run, merged with the document's current values
    5. Optional suggester fills fields that are still absent
    6. Fields applied, status -> processed, date_processed stamped

Author: ML Engineering Team
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Protocol, Union

from invoice_fields.engine import ExtractionResult, FieldExtractionEngine
from invoice_fields.parsers import (
    AmountNormalizer,
    AmountValidator,
    DateNormalizer,
    InvoiceNumberValidator,
)
from invoice_fields.utils.exceptions import NoTextAvailableError
from invoice_fields.utils.logger import get_logger
from .document import InvoiceDocument, InvoiceStatus, TextSourceKind
from .text_cache import TextCache

# Initialize module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class AcquiredText:
    """Raw text for a document and where it came from."""
    text: str
    source: TextSourceKind = TextSourceKind.TEXT


class TextProvider(Protocol):
    """
    Supplies raw text for a document (OCR service, PDF text layer, file).

    Must raise NoTextAvailableError when there is nothing to read.
    """

    def acquire(self, document: InvoiceDocument) -> Union[AcquiredText, str]:
        ...


class FieldSuggester(Protocol):
    """
    Offers a structured guess for a text blob (e.g. an AI completion).

    Returns a mapping of field name to raw value; values are parsed and
    checked before use.
    """

    def suggest(self, text: str) -> Mapping[str, Any]:
        ...


class DocumentProcessor:
    """
    Runs field extraction for documents and tracks their status.

    Attributes:
        text_provider: TextProvider implementation
        engine: FieldExtractionEngine
        text_cache: Optional TextCache keyed by document id
        suggester: Optional FieldSuggester
        clock: Wall-clock source for date_processed

    Example:
        >>> processor = DocumentProcessor(FileTextProvider(), text_cache=TextCache())
        >>> document = processor.process(InvoiceDocument(id="doc-1"))
        >>> document.status
        <InvoiceStatus.PROCESSED: 'processed'>
    """

    def __init__(
        self,
        text_provider: TextProvider,
        engine: Optional[FieldExtractionEngine] = None,
        text_cache: Optional[TextCache] = None,
        suggester: Optional[FieldSuggester] = None,
        clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        self.text_provider = text_provider
        self.engine = engine or FieldExtractionEngine()
        self.text_cache = text_cache
        self.suggester = suggester
        self.clock = clock or datetime.now

        self.amount_normalizer = AmountNormalizer()
        self.amount_validator = AmountValidator()
        self.date_normalizer = DateNormalizer()
        self.number_validator = InvoiceNumberValidator()

    def process(self, document: InvoiceDocument) -> InvoiceDocument:
        """
        Process one document.

        Args:
            document: Document to process; updated in place.

        Returns:
            The same document.

        Raises:
            Exception: Any unexpected failure, after the document has been
                marked failed.
        """
        self._set_status(document, InvoiceStatus.PROCESSING)

        try:
            acquired = self._acquire_text(document)
        except NoTextAvailableError as e:
            logger.warning(f"No text for document {document.id}: {e}")
            self._set_status(document, InvoiceStatus.FAILED)
            return document
        except Exception:
            self._set_status(document, InvoiceStatus.FAILED)
            raise

        try:
            document.source = acquired.source
            result = self.engine.extract(acquired.text, known=document.known_fields())

            if self.suggester is not None and result.missing_fields:
                result = self._fill_from_suggestions(result, acquired.text)

            document.apply(result)
        except Exception:
            self._set_status(document, InvoiceStatus.FAILED)
            raise

        document.date_processed = self.clock()
        self._set_status(document, InvoiceStatus.PROCESSED)
        return document

    def _acquire_text(self, document: InvoiceDocument) -> AcquiredText:
        if self.text_cache is not None:
            cached = self.text_cache.get(document.id)
            if cached is not None:
                logger.debug(f"Text cache hit for document {document.id}")
                return cached

        acquired = self.text_provider.acquire(document)
        if isinstance(acquired, str):
            acquired = AcquiredText(text=acquired, source=document.source or TextSourceKind.TEXT)

        if not acquired.text or not acquired.text.strip():
            raise NoTextAvailableError(document.id, "provider returned empty text")

        if self.text_cache is not None:
            self.text_cache.put(document.id, acquired)

        return acquired

    def _fill_from_suggestions(self, result: ExtractionResult, text: str) -> ExtractionResult:
        """
        Fill still-absent fields from the suggester.

        Suggested values go through the same parsers and plausibility
        checks as extracted ones; anything unparseable is dropped.
        """
        try:
            suggestions = self.suggester.suggest(text) or {}
        except Exception as e:
            logger.warning(f"Field suggester failed: {e}")
            result.add_warning(f"suggester: {e}")
            return result

        parsed = {
            name: self._parse_suggestion(name, suggestions.get(name))
            for name in result.missing_fields
        }
        parsed = {name: value for name, value in parsed.items() if value is not None}

        if parsed:
            logger.info(f"Suggester filled: {', '.join(sorted(parsed))}")
            for name, value in parsed.items():
                setattr(result, name, value)

        return result

    def _parse_suggestion(self, name: str, raw: Any) -> Optional[Any]:
        if raw is None:
            return None

        raw = str(raw).strip()

        if name == 'invoice_number':
            return raw.upper() if self.number_validator.is_valid(raw) else None

        if name == 'invoice_date':
            return self.date_normalizer.normalize(raw)

        amount = self.amount_normalizer.normalize(raw)
        if amount is not None and self.amount_validator.is_valid(amount):
            return amount
        return None

    def _set_status(self, document: InvoiceDocument, status: InvoiceStatus) -> None:
        document.status = status
        logger.info(f"Document {document.id}: {status.value}")
