"""
Metrics Calculator Module.

Scores engine output against labelled ground truth, one field at a time.

Every (prediction, truth) pair for a field lands in exactly one bucket:
    - correct: equal values, or absent on both sides
    - wrong:   a value was extracted and it differs from the truth
    - missed:  nothing extracted although the truth has a value

For a conservative extractor "wrong" is the costly bucket: an absence
sends the document to review, a wrong value slips through. Invoice
numbers additionally get a partial-match credit based on edit distance.

Comparison is typed: amounts compare as Decimal ("1,250.00" equals
"1250"), dates as calendar dates ("20/01/2026" equals "2026-01-20"),
invoice numbers case-insensitively unless configured otherwise.

Author: ML Engineering Team
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from config import get_config
from invoice_fields.engine.extraction_result import AMOUNT_FIELDS, PUBLIC_FIELDS, ExtractionResult
from invoice_fields.parsers.normalizers import AmountNormalizer, DateNormalizer
from invoice_fields.utils.helpers import levenshtein_ratio
from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

Prediction = Union[ExtractionResult, Mapping[str, Any]]


@dataclass
class FieldMetrics:
    """
    Outcome counts for one field across all samples.

    Attributes:
        field_name: Name of the field
        total_samples: Samples evaluated
        extracted_count: Samples where a value was extracted
        correct_count: Exact matches, correct absences included
        wrong_count: Extracted values that differ from the truth
        missing_count: Samples with nothing extracted
        partial_match_count: Partial matches, exact ones included
    """
    field_name: str
    total_samples: int = 0
    extracted_count: int = 0
    correct_count: int = 0
    wrong_count: int = 0
    missing_count: int = 0
    partial_match_count: int = 0

    def _rate(self, count: int) -> float:
        return count / self.total_samples if self.total_samples else 0.0

    @property
    def accuracy(self) -> float:
        return self._rate(self.correct_count)

    @property
    def extraction_rate(self) -> float:
        return self._rate(self.extracted_count)

    @property
    def wrong_rate(self) -> float:
        return self._rate(self.wrong_count)

    @property
    def partial_accuracy(self) -> float:
        return self._rate(self.partial_match_count)

    def record(self, extracted: bool, is_exact: bool, is_partial: bool) -> None:
        """Count one (prediction, truth) comparison."""
        self.total_samples += 1
        if extracted:
            self.extracted_count += 1
            if not is_exact:
                self.wrong_count += 1
        else:
            self.missing_count += 1
        if is_exact:
            self.correct_count += 1
        if is_partial:
            self.partial_match_count += 1

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.update(
            accuracy=self.accuracy,
            extraction_rate=self.extraction_rate,
            wrong_rate=self.wrong_rate,
            partial_accuracy=self.partial_accuracy,
        )
        return data


@dataclass
class EvaluationResult:
    """
    Complete evaluation results.

    Overall figures are means of the per-field rates.

    Attributes:
        field_metrics: Field name to FieldMetrics
        total_samples: Samples evaluated
        timestamp: When the evaluation ran
    """
    field_metrics: Dict[str, FieldMetrics] = field(default_factory=dict)
    total_samples: int = 0
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    def _mean(self, rate: str) -> float:
        if not self.field_metrics:
            return 0.0
        return sum(getattr(m, rate) for m in self.field_metrics.values()) / len(self.field_metrics)

    @property
    def overall_accuracy(self) -> float:
        return self._mean('accuracy')

    @property
    def overall_extraction_rate(self) -> float:
        return self._mean('extraction_rate')

    @property
    def overall_wrong_rate(self) -> float:
        return self._mean('wrong_rate')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overall_accuracy': self.overall_accuracy,
            'overall_extraction_rate': self.overall_extraction_rate,
            'overall_wrong_rate': self.overall_wrong_rate,
            'total_samples': self.total_samples,
            'timestamp': self.timestamp,
            'field_metrics': {name: m.to_dict() for name, m in self.field_metrics.items()},
        }

    def print_report(self) -> str:
        """Render the results as a fixed-width text table."""
        rule = "=" * 72
        row = "{:<16}{:>10}{:>12}{:>10}{:>10}{:>14}"

        lines = [
            rule,
            "FIELD EXTRACTION EVALUATION REPORT",
            rule,
            f"Timestamp: {self.timestamp}",
            f"Samples:   {self.total_samples}",
            f"Accuracy:  {self.overall_accuracy * 100:.1f}%   "
            f"Extracted: {self.overall_extraction_rate * 100:.1f}%   "
            f"Wrong: {self.overall_wrong_rate * 100:.1f}%",
            "-" * 72,
            row.format("field", "accuracy", "extracted", "wrong", "missed", "partial"),
        ]

        for name, m in self.field_metrics.items():
            lines.append(row.format(
                name,
                f"{m.accuracy * 100:.1f}%",
                f"{m.extracted_count}/{m.total_samples}",
                m.wrong_count,
                m.missing_count,
                f"{m.partial_accuracy * 100:.1f}%",
            ))

        lines.append(rule)
        return "\n".join(lines)


class MetricsCalculator:
    """
    Compares predictions with ground truth field by field.

    Attributes:
        fields: Fields to evaluate
        case_sensitive: Whether invoice number comparison is case-sensitive
        partial_match_threshold: Minimum edit-distance ratio for a partial
            invoice number match

    Example:
        >>> calculator = MetricsCalculator()
        >>> result = calculator.evaluate([engine.extract(text)], [record])
        >>> print(result.print_report())
    """

    DEFAULT_FIELDS = list(PUBLIC_FIELDS)

    def __init__(
        self,
        fields: Optional[List[str]] = None,
        case_sensitive: Optional[bool] = None,
        partial_match_threshold: Optional[float] = None
    ) -> None:
        self.fields = fields or self.DEFAULT_FIELDS
        self.case_sensitive = (
            case_sensitive if case_sensitive is not None
            else bool(get_config("evaluation.case_sensitive", False))
        )
        self.partial_match_threshold = (
            partial_match_threshold if partial_match_threshold is not None
            else float(get_config("evaluation.partial_match_threshold", 0.8))
        )

        self.amount_normalizer = AmountNormalizer()
        self.date_normalizer = DateNormalizer()

    def evaluate(
        self,
        predictions: List[Prediction],
        ground_truth: List[Mapping[str, Any]]
    ) -> EvaluationResult:
        """
        Evaluate predictions against ground truth.

        Args:
            predictions: ExtractionResults or dictionaries of field values.
            ground_truth: Ground truth dictionaries, aligned by position.

        Returns:
            EvaluationResult with computed metrics.

        Raises:
            ValueError: If predictions and ground truth lengths don't match.
        """
        if len(predictions) != len(ground_truth):
            raise ValueError(
                f"Predictions ({len(predictions)}) and ground truth "
                f"({len(ground_truth)}) must have same length"
            )

        if not predictions:
            return EvaluationResult()

        field_metrics = {name: FieldMetrics(field_name=name) for name in self.fields}

        for pred, gt in zip(predictions, ground_truth):
            for name, outcome in self.evaluate_single(pred, gt).items():
                field_metrics[name].record(
                    outcome['extracted'], outcome['exact_match'], outcome['partial_match']
                )

        logger.debug(f"Scored {len(predictions)} samples over {len(self.fields)} fields")
        return EvaluationResult(field_metrics=field_metrics, total_samples=len(predictions))

    def evaluate_single(
        self,
        prediction: Prediction,
        ground_truth: Mapping[str, Any]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Compare one prediction with its ground truth record.

        Returns:
            Field name to {'predicted', 'ground_truth', 'exact_match',
            'partial_match', 'extracted'}.
        """
        if isinstance(prediction, ExtractionResult):
            prediction = prediction.fields

        results = {}
        for name in self.fields:
            predicted = self._normalize_value(prediction.get(name), name)
            expected = self._normalize_value(ground_truth.get(name), name)
            is_exact, is_partial = self._compare_values(predicted, expected, name)

            results[name] = {
                'predicted': prediction.get(name),
                'ground_truth': ground_truth.get(name),
                'exact_match': is_exact,
                'partial_match': is_partial,
                'extracted': predicted is not None,
            }

        return results

    def _compare_values(self, predicted: Any, expected: Any, field_name: str) -> Tuple[bool, bool]:
        """Return (is_exact_match, is_partial_match) for normalized values."""
        if predicted is None or expected is None:
            # absent on both sides is a correct absence
            both_absent = predicted is None and expected is None
            return both_absent, both_absent

        if predicted == expected:
            return True, True

        if field_name == 'invoice_number':
            return False, levenshtein_ratio(predicted, expected) >= self.partial_match_threshold

        return False, False

    def _normalize_value(self, value: Any, field_name: str) -> Any:
        """
        Bring a raw value to its comparable type.

        Returns:
            Decimal for amounts, date for dates, str for invoice numbers,
            or None when empty or unparseable.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return None

        if field_name in AMOUNT_FIELDS:
            return self.amount_normalizer.normalize(str(value))

        if field_name == 'invoice_date':
            if hasattr(value, 'isoformat'):
                value = value.isoformat()[:10]
            return self.date_normalizer.normalize(str(value))

        value = ' '.join(str(value).split())
        return value if self.case_sensitive else value.lower()
