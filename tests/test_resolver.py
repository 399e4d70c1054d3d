from decimal import Decimal

import pytest

from invoice_fields.engine import resolve_first, resolve_scored
from invoice_fields.extractors import Candidate, FieldKind, candidate_sort_key

TOTAL = FieldKind.TOTAL_AMOUNT


def test_highest_score_wins():
    candidates = [
        Candidate(TOTAL, Decimal("100.00"), 5.0, 8),
        Candidate(TOTAL, Decimal("110.00"), 10.5, 3),
    ]
    assert resolve_scored(candidates).value == Decimal("110.00")


def test_tie_goes_to_later_line():
    candidates = [
        Candidate(TOTAL, Decimal("110.00"), 10.0, 9),
        Candidate(TOTAL, Decimal("100.00"), 10.0, 4),
    ]
    assert resolve_scored(candidates).origin_index == 9


def test_unpositioned_candidate_loses_tie():
    candidates = [
        Candidate(TOTAL, Decimal("1.00"), 2.0, None),
        Candidate(TOTAL, Decimal("2.00"), 2.0, 0),
    ]
    assert resolve_scored(candidates).value == Decimal("2.00")


@pytest.mark.parametrize("resolve", [resolve_scored, resolve_first])
def test_empty(resolve):
    assert resolve([]) is None


@pytest.mark.parametrize("resolve", [resolve_scored, resolve_first])
def test_mixed_fields_rejected(resolve):
    candidates = [
        Candidate(TOTAL, Decimal("1.00"), 1.0, 0),
        Candidate(FieldKind.TAX_AMOUNT, Decimal("1.00"), 1.0, 1),
    ]
    with pytest.raises(ValueError):
        resolve(candidates)


def test_first_ignores_score():
    candidates = [
        Candidate(FieldKind.INVOICE_NUMBER, "A-1", 1.0),
        Candidate(FieldKind.INVOICE_NUMBER, "B-2", 9.0),
    ]
    assert resolve_first(candidates).value == "A-1"


def test_sort_key():
    assert candidate_sort_key(Candidate(TOTAL, Decimal("1"), 3.5, 7)) == (3.5, 7)
    assert candidate_sort_key(Candidate(TOTAL, Decimal("1"), 3.5)) == (3.5, -1)
