"""
Extractors Module for the Invoice Field Extraction Engine.

One extractor per field, each producing zero or more Candidates:
    - InvoiceNumberExtractor: ordered labeled patterns over normalized text
    - InvoiceDateExtractor: labeled dates, then header and full-text sweeps
    - TotalAmountExtractor / SubtotalAmountExtractor: line scoring
    - TaxLineScanner / TaxDeriver: tax lines and rate-based derivation

Author: ML Engineering Team
"""

from .candidates import (
    Candidate,
    FieldKind,
    DEFAULT_SCORING_WEIGHTS,
    candidate_sort_key,
    load_scoring_weights,
)
from .patterns import PatternSpec, INVOICE_NUMBER_PATTERNS, DATE_LABEL_PATTERNS
from .invoice_number import InvoiceNumberExtractor
from .invoice_date import InvoiceDateExtractor
from .totals import TotalAmountExtractor, SubtotalAmountExtractor
from .tax import TaxLine, TaxLineScanner, TaxDeriver, derive_tax

__all__ = [
    'Candidate',
    'FieldKind',
    'DEFAULT_SCORING_WEIGHTS',
    'candidate_sort_key',
    'load_scoring_weights',
    'PatternSpec',
    'INVOICE_NUMBER_PATTERNS',
    'DATE_LABEL_PATTERNS',
    'InvoiceNumberExtractor',
    'InvoiceDateExtractor',
    'TotalAmountExtractor',
    'SubtotalAmountExtractor',
    'TaxLine',
    'TaxLineScanner',
    'TaxDeriver',
    'derive_tax',
]
