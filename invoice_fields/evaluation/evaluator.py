"""
Main Evaluator Module.

This module provides the Evaluator class that pairs engine results with
ground truth records by source file and produces metrics and reports.

Author: ML Engineering Team
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from invoice_fields.utils.exceptions import EvaluationError
from invoice_fields.utils.helpers import ensure_directory
from invoice_fields.utils.logger import get_logger
from .ground_truth import GroundTruthLoader
from .metrics import EvaluationResult, MetricsCalculator, Prediction

# Initialize module logger
logger = get_logger(__name__)


class Evaluator:
    """
    Evaluator for the field-extraction engine.

    Attributes:
        metrics_calculator: MetricsCalculator instance
        ground_truth: GroundTruthLoader instance, once loaded

    Example:
        >>> evaluator = Evaluator("ground_truth.json")
        >>> result = evaluator.evaluate({"invoice_001.txt": engine.extract(text)})
        >>> print(result.print_report())
    """

    def __init__(
        self,
        ground_truth_path: Optional[Union[str, Path]] = None,
        case_sensitive: Optional[bool] = None,
        partial_match_threshold: Optional[float] = None
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            ground_truth_path: Path to ground truth file.
            case_sensitive: Whether invoice number comparison is case-sensitive.
            partial_match_threshold: Threshold for partial match scoring.
        """
        self.metrics_calculator = MetricsCalculator(
            case_sensitive=case_sensitive,
            partial_match_threshold=partial_match_threshold
        )

        self.ground_truth: Optional[GroundTruthLoader] = None
        if ground_truth_path:
            self.load_ground_truth(ground_truth_path)

        logger.debug("Evaluator initialized")

    def load_ground_truth(self, path: Union[str, Path]) -> None:
        """
        Load ground truth data from file.

        Args:
            path: Path to ground truth file.
        """
        self.ground_truth = GroundTruthLoader(path)
        validation = self.ground_truth.validate()

        if validation['invalid_records'] > 0:
            logger.warning(
                f"Ground truth has {validation['invalid_records']} incomplete records"
            )

    def evaluate(self, results: Mapping[str, Prediction]) -> EvaluationResult:
        """
        Evaluate extraction results keyed by source file.

        Files without a ground truth record are evaluated against an
        empty record, so every extracted field counts as wrong.

        Args:
            results: Mapping of source file name to ExtractionResult
                (or dictionary of field values).

        Returns:
            EvaluationResult with computed metrics.

        Raises:
            EvaluationError: If no ground truth has been loaded.
        """
        self._require_ground_truth()

        predictions = []
        ground_truth = []

        for source_file, prediction in results.items():
            record = self.ground_truth.get_by_filename(source_file)
            if record is None:
                logger.warning(f"No ground truth for: {source_file}")
                record = {}

            predictions.append(prediction)
            ground_truth.append(record)

        result = self.metrics_calculator.evaluate(predictions, ground_truth)

        logger.info(
            f"Evaluation complete: {result.overall_accuracy*100:.1f}% accuracy, "
            f"{result.overall_wrong_rate*100:.1f}% wrong on {result.total_samples} samples"
        )

        return result

    def evaluate_single(self, source_file: str, prediction: Prediction) -> Dict[str, Any]:
        """
        Evaluate a single extraction result.

        Args:
            source_file: Source file name used to find the ground truth.
            prediction: Extraction result for that file.

        Returns:
            Dictionary with per-field comparison results.
        """
        self._require_ground_truth()
        record = self.ground_truth.get_by_filename(source_file) or {}
        return self.metrics_calculator.evaluate_single(prediction, record)

    def generate_report(
        self,
        evaluation_result: EvaluationResult,
        output_path: Optional[Union[str, Path]] = None,
        format: str = 'txt'
    ) -> str:
        """
        Generate an evaluation report.

        Args:
            evaluation_result: Evaluation result to report.
            output_path: Path for report file. If None, returns string.
            format: Report format ('txt' or 'json').

        Returns:
            Report string or path to saved file.
        """
        if format == 'txt':
            report = evaluation_result.print_report()
        elif format == 'json':
            report = json.dumps(evaluation_result.to_dict(), indent=2)
        else:
            raise ValueError(f"Unsupported format: {format}")

        if output_path:
            ensure_directory(Path(output_path).parent)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(report)
            logger.info(f"Report saved to: {output_path}")
            return str(output_path)

        return report

    def _require_ground_truth(self) -> None:
        if self.ground_truth is None:
            raise EvaluationError(
                "No ground truth available. Load ground truth before evaluating."
            )
