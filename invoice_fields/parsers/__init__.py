"""
Parsers Module for the Invoice Field Extraction Engine.

This module provides:
    - Amount normalization (locale-aware separators -> Decimal)
    - Date normalization (fixed format priority -> datetime.date)
    - Plausibility validators for tokens and parsed values

Author: ML Engineering Team
"""

from .normalizers import AmountNormalizer, AmountToken, DateNormalizer
from .validators import (
    AmountValidator,
    DateValidator,
    InvoiceNumberValidator,
    TaxRateValidator,
)

__all__ = [
    'AmountNormalizer',
    'AmountToken',
    'DateNormalizer',
    'AmountValidator',
    'DateValidator',
    'InvoiceNumberValidator',
    'TaxRateValidator',
]
