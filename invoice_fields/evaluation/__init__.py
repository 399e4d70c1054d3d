"""
Evaluation Module for the Invoice Field Extraction Engine.

This module measures the engine against labelled ground truth:
    - Typed field-level accuracy
    - Partial invoice number matches
    - Wrong-value and missed-value counts per field
    - Text and JSON reports

Author: ML Engineering Team
"""

from .evaluator import Evaluator
from .metrics import EvaluationResult, FieldMetrics, MetricsCalculator
from .ground_truth import GroundTruthLoader

__all__ = ['Evaluator', 'EvaluationResult', 'FieldMetrics', 'MetricsCalculator', 'GroundTruthLoader']
