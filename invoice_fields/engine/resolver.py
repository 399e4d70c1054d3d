"""
Candidate Resolver Module.

Two resolution policies:
    - resolve_scored: highest score wins, later line breaks ties
      (total, subtotal)
    - resolve_first: first candidate produced is authoritative
      (invoice number, invoice date, tax)

Author: ML Engineering Team
"""

from typing import Optional, Sequence

from invoice_fields.extractors.candidates import Candidate, candidate_sort_key


def _check_single_field(candidates: Sequence[Candidate]) -> None:
    kinds = {candidate.field for candidate in candidates}
    if len(kinds) > 1:
        names = sorted(kind.value for kind in kinds)
        raise ValueError(f"Cannot resolve candidates of different fields: {names}")


def resolve_scored(candidates: Sequence[Candidate]) -> Optional[Candidate]:
    """
    Pick the best scored candidate.

    Args:
        candidates: Candidates for one field.

    Returns:
        The winner, or None for an empty set.

    Raises:
        ValueError: If candidates belong to more than one field, since
            scores are only comparable within a field.
    """
    if not candidates:
        return None
    _check_single_field(candidates)
    return max(candidates, key=candidate_sort_key)


def resolve_first(candidates: Sequence[Candidate]) -> Optional[Candidate]:
    """Return the first candidate in production order, or None."""
    if not candidates:
        return None
    _check_single_field(candidates)
    return candidates[0]
