"""
Invoice Document Module.

The document record the processor works on: identity, where its text
came from, processing status and the four extracted fields.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from invoice_fields.engine.extraction_result import PUBLIC_FIELDS, ExtractionResult


class InvoiceStatus(Enum):
    """Processing lifecycle of a document."""
    PROCESSING = "processing"
    PROCESSED = "processed"
    REVIEWED = "reviewed"
    FAILED = "failed"


class TextSourceKind(Enum):
    """Where a document's raw text came from."""
    TEXT = "text"   # digital text layer
    OCR = "ocr"


@dataclass
class InvoiceDocument:
    """
    A document going through field extraction.

    Attributes:
        id: Stable document identity (also the text cache key)
        filename: Original file name, informational
        source: Text origin, set once text is acquired
        status: Lifecycle status
        date_processed: When extraction last completed
        invoice_number, invoice_date, total_amount, tax_amount: Fields
    """
    id: str
    filename: Optional[str] = None
    source: Optional[TextSourceKind] = None
    status: InvoiceStatus = InvoiceStatus.PROCESSING
    date_processed: Optional[datetime] = None

    invoice_number: Optional[str] = None
    invoice_date: Optional[date] = None
    total_amount: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None

    def known_fields(self) -> Dict[str, Any]:
        """Current field values, for the engine's conservative merge."""
        return {name: getattr(self, name) for name in PUBLIC_FIELDS}

    def apply(self, result: ExtractionResult) -> None:
        """
        Copy detected fields from a result onto the document.

        Absent fields never overwrite a value the document already has.
        """
        for name, value in result.extracted_fields.items():
            setattr(self, name, value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'filename': self.filename,
            'source': self.source.value if self.source else None,
            'status': self.status.value,
            'date_processed': self.date_processed.isoformat() if self.date_processed else None,
            'invoice_number': self.invoice_number,
            'invoice_date': self.invoice_date.isoformat() if self.invoice_date else None,
            'total_amount': str(self.total_amount) if self.total_amount is not None else None,
            'tax_amount': str(self.tax_amount) if self.tax_amount is not None else None,
        }
