"""
Invoice Field Extraction Engine.

Turns raw OCR or text-layer output of an invoice into structured fields:
invoice number, invoice date, grand total and tax amount. Extraction is
a deterministic regex and heuristic pipeline with no I/O.

Modules:
    - preprocessing: text normalization and line splitting
    - parsers: amount and date parsing, plausibility validators
    - extractors: per-field candidate extraction
    - engine: candidate resolution and the extraction orchestrator
    - processing: document status lifecycle, text cache, providers
    - evaluation: accuracy metrics against ground truth
    - utils: logging, exceptions, helpers

Architecture:
    Raw text -> Normalize / Split -> Extractors -> Resolver -> ExtractionResult
                                                                   |
                                                              Evaluation
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

from .engine import ExtractionResult, FieldExtractionEngine, extract_fields

__all__ = [
    'ExtractionResult',
    'FieldExtractionEngine',
    'extract_fields',
    'preprocessing',
    'parsers',
    'extractors',
    'engine',
    'processing',
    'evaluation',
    'utils',
]
