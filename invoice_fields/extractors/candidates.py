"""
Candidate Data Classes.

A Candidate is a provisional value for one field, produced by one
pattern or heuristic, carrying a unitless score and the index of the
line it came from. Scores only mean something within a single field's
candidate set.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from config import ConfigurationManager
from invoice_fields.utils.exceptions import ConfigurationError


class FieldKind(Enum):
    """Fields the engine produces candidates for."""
    INVOICE_NUMBER = "invoice_number"
    INVOICE_DATE = "invoice_date"
    TOTAL_AMOUNT = "total_amount"
    SUBTOTAL_AMOUNT = "subtotal_amount"
    TAX_AMOUNT = "tax_amount"


@dataclass(frozen=True)
class Candidate:
    """
    A scored, provisional value for one field.

    Attributes:
        field: Which field the value is for
        value: str (invoice number), date (invoice date) or Decimal (amounts)
        score: Heuristic rank, comparable within one field only
        origin_index: Line index the value came from, if line-based

    Example:
        >>> Candidate(FieldKind.TOTAL_AMOUNT, Decimal("110.00"), 10.9, 9)
    """
    field: FieldKind
    value: Any
    score: float = 0.0
    origin_index: Optional[int] = None


# Every weight used to rank total and subtotal lines lives here; settings.yaml
# may override any of them under extraction.scoring.
DEFAULT_SCORING_WEIGHTS: Dict[str, float] = {
    'strong_label': 10.0,     # "grand total", "amount due", ...
    'inclusive_label': 8.0,   # strong label qualified by "incl. vat" etc.
    'leading_total': 5.0,     # line starting with the bare word "total"
    'subtotal_base': 10.0,
    'position_bonus': 1.0,    # scaled by how close the line is to the end
}


def load_scoring_weights() -> Dict[str, float]:
    """
    Build the scoring table from defaults plus configuration overrides.

    Returns:
        Mapping of weight name to value.

    Raises:
        ConfigurationError: If a configured weight is not a number.
    """
    weights = dict(DEFAULT_SCORING_WEIGHTS)
    configured = ConfigurationManager().get_section("extraction.scoring")

    for name, value in configured.items():
        if name not in weights:
            continue
        try:
            weights[name] = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"extraction.scoring.{name}", f"not a number: {value!r}") from e

    return weights


def candidate_sort_key(candidate: Candidate) -> Tuple[float, int]:
    """
    Ordering key for scored candidates.

    Higher score first; on equal scores the candidate from the later line
    wins, since totals blocks sit near the end of invoices.
    """
    origin = candidate.origin_index if candidate.origin_index is not None else -1
    return candidate.score, origin
