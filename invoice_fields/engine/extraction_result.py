"""
Extraction Result Data Class.

This module defines the structured output of the field-extraction
engine. Each public field is either a typed value or None, meaning "not
confidently detected". Internal candidate scores never appear here.

Author: ML Engineering Team
"""

import json
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Union

from invoice_fields.parsers.normalizers import AmountNormalizer, DateNormalizer

PUBLIC_FIELDS = ('invoice_number', 'invoice_date', 'total_amount', 'tax_amount')
AMOUNT_FIELDS = ('total_amount', 'tax_amount')


@dataclass
class ExtractionResult:
    """
    Represents the result of invoice field extraction.

    Attributes:
        invoice_number: Invoice identifier, upper-cased
        invoice_date: Calendar date the invoice was issued
        total_amount: Grand total
        tax_amount: Tax amount, explicit or derived from a rate
        warnings: Stage failures recorded during extraction
        retained_fields: Fields carried over from caller-supplied known
            values during a conservative merge

    The result carries no timestamp, so two runs over the same text
    compare equal.

    Example:
        >>> result = ExtractionResult(
        ...     invoice_number="INV-2048",
        ...     invoice_date=date(2026, 1, 20),
        ...     total_amount=Decimal("110.00")
        ... )
        >>> result.missing_fields
        ['tax_amount']
    """
    invoice_number: Optional[str] = None
    invoice_date: Optional[date] = None
    total_amount: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None

    warnings: List[str] = field(default_factory=list)
    retained_fields: List[str] = field(default_factory=list)

    @property
    def fields(self) -> Dict[str, Any]:
        """
        Get all public fields as a dictionary.

        Returns:
            Dictionary of field names to values (None when absent).
        """
        return {name: getattr(self, name) for name in PUBLIC_FIELDS}

    @property
    def missing_fields(self) -> List[str]:
        """Fields that were not detected."""
        return [k for k, v in self.fields.items() if v is None]

    @property
    def extracted_fields(self) -> Dict[str, Any]:
        """Only fields that have values."""
        return {k: v for k, v in self.fields.items() if v is not None}

    @property
    def extraction_rate(self) -> float:
        """
        Calculate the percentage of fields successfully extracted.

        Returns:
            Extraction rate as a percentage (0-100).
        """
        return len(self.extracted_fields) / len(PUBLIC_FIELDS) * 100

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def merged_with(
        self,
        known: Union['ExtractionResult', Mapping[str, Any], None]
    ) -> 'ExtractionResult':
        """
        Conservative merge with previously known values.

        A detected field always wins. A field this result leaves absent
        keeps the known value and is listed in retained_fields. Absent
        stays absent when nothing is known.

        Args:
            known: Earlier result or a mapping of field name to value.

        Returns:
            A new ExtractionResult; neither input is modified.
        """
        merged = ExtractionResult(
            **self.fields,
            warnings=list(self.warnings),
            retained_fields=list(self.retained_fields),
        )

        if known is None:
            return merged

        if not isinstance(known, ExtractionResult):
            known = ExtractionResult.from_dict(known)

        for name in PUBLIC_FIELDS:
            known_value = getattr(known, name)
            if getattr(merged, name) is None and known_value is not None:
                setattr(merged, name, known_value)
                if name not in merged.retained_fields:
                    merged.retained_fields.append(name)

        return merged

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-friendly dictionary.

        Dates are ISO strings and amounts two-decimal strings, so no
        precision is lost through a float.
        """
        return {
            'invoice_number': self.invoice_number,
            'invoice_date': self.invoice_date.isoformat() if self.invoice_date else None,
            'total_amount': _format_amount(self.total_amount),
            'tax_amount': _format_amount(self.tax_amount),
            'warnings': list(self.warnings),
            'retained_fields': list(self.retained_fields),
            'extraction_rate': self.extraction_rate,
        }

    def to_json(self, indent: int = 2) -> str:
        """
        Convert to JSON string.

        Args:
            indent: JSON indentation level.

        Returns:
            JSON string representation.
        """
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ExtractionResult':
        """
        Create ExtractionResult from a dictionary.

        Values may already be typed or may be strings in any format the
        amount and date parsers accept. Unparseable values become None.

        Args:
            data: Dictionary with field values.

        Returns:
            ExtractionResult instance.
        """
        invoice_number = data.get('invoice_number')
        if invoice_number is not None:
            invoice_number = str(invoice_number).strip() or None

        return cls(
            invoice_number=invoice_number,
            invoice_date=_coerce_date(data.get('invoice_date')),
            total_amount=_coerce_amount(data.get('total_amount')),
            tax_amount=_coerce_amount(data.get('tax_amount')),
            warnings=list(data.get('warnings') or []),
            retained_fields=list(data.get('retained_fields') or []),
        )

    def __repr__(self) -> str:
        return (
            f"ExtractionResult("
            f"invoice={self.invoice_number}, "
            f"date={self.invoice_date}, "
            f"total={self.total_amount}, "
            f"tax={self.tax_amount}, "
            f"rate={self.extraction_rate:.0f}%)"
        )


def _format_amount(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return None
    return str(value.quantize(Decimal("0.01")))


def _coerce_amount(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        try:
            return Decimal(str(value))
        except InvalidOperation:
            return None
    return AmountNormalizer().normalize(str(value))


def _coerce_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, date):
        # datetime is a date subclass
        return value if type(value) is date else value.date()
    return DateNormalizer().normalize(str(value))
