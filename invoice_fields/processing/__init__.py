"""
Processing Module for the Invoice Field Extraction Engine.

Takes documents through text acquisition and field extraction:
    - InvoiceDocument with its status lifecycle
    - DocumentProcessor (cache, provider, engine, optional suggester)
    - TextCache with a bounded freshness window
    - FileTextProvider for plain-text documents

Author: ML Engineering Team
"""

from .document import InvoiceDocument, InvoiceStatus, TextSourceKind
from .text_cache import TextCache
from .processor import AcquiredText, DocumentProcessor, FieldSuggester, TextProvider
from .providers import FileTextProvider

__all__ = [
    'InvoiceDocument',
    'InvoiceStatus',
    'TextSourceKind',
    'TextCache',
    'AcquiredText',
    'DocumentProcessor',
    'FieldSuggester',
    'TextProvider',
    'FileTextProvider',
]
