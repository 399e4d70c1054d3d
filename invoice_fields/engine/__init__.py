"""
Engine Module for the Invoice Field Extraction Engine.

This module provides:
    - FieldExtractionEngine: runs the extractors in dependency order
    - ExtractionResult: typed public output with conservative merge
    - Candidate resolution policies (scored and first-match)

Author: ML Engineering Team
"""

from .extraction_result import ExtractionResult, PUBLIC_FIELDS
from .resolver import resolve_first, resolve_scored
from .orchestrator import FieldExtractionEngine, extract_fields, get_engine

__all__ = [
    'ExtractionResult',
    'PUBLIC_FIELDS',
    'resolve_first',
    'resolve_scored',
    'FieldExtractionEngine',
    'extract_fields',
    'get_engine',
]
