import json
from datetime import date, datetime
from decimal import Decimal

import pytest

from invoice_fields.engine import ExtractionResult, PUBLIC_FIELDS


@pytest.fixture
def result():
    return ExtractionResult(
        invoice_number="INV-2048",
        invoice_date=date(2026, 1, 20),
        total_amount=Decimal("110.00"),
    )


def test_fields(result):
    assert tuple(result.fields) == PUBLIC_FIELDS
    assert result.missing_fields == ['tax_amount']
    assert result.extraction_rate == 75.0


def test_to_dict_uses_canonical_strings(result):
    data = result.to_dict()
    assert data['invoice_date'] == "2026-01-20"
    assert data['total_amount'] == "110.00"
    assert data['tax_amount'] is None
    assert json.loads(result.to_json())['invoice_number'] == "INV-2048"


def test_amount_formatting_pads_cents():
    assert ExtractionResult(total_amount=Decimal("45.5")).to_dict()['total_amount'] == "45.50"


@pytest.mark.parametrize("data, expected", [
    ({'total_amount': "1,250.00"}, Decimal("1250.00")),
    ({'total_amount': 99}, Decimal("99")),
    ({'total_amount': "n/a"}, None),
    ({'total_amount': True}, None),
])
def test_from_dict_amounts(data, expected):
    assert ExtractionResult.from_dict(data).total_amount == expected


@pytest.mark.parametrize("value, expected", [
    ("20/01/2026", date(2026, 1, 20)),
    ("2026-01-20", date(2026, 1, 20)),
    (datetime(2026, 1, 20, 9, 30), date(2026, 1, 20)),
    ("soon", None),
])
def test_from_dict_dates(value, expected):
    assert ExtractionResult.from_dict({'invoice_date': value}).invoice_date == expected


def test_from_dict_blank_number():
    assert ExtractionResult.from_dict({'invoice_number': "  "}).invoice_number is None


def test_merge_detected_value_wins(result):
    merged = result.merged_with({'invoice_number': "OLD-1", 'tax_amount': "10.00"})
    assert merged.invoice_number == "INV-2048"
    assert merged.tax_amount == Decimal("10.00")
    assert merged.retained_fields == ['tax_amount']


def test_merge_does_not_modify_inputs(result):
    known = ExtractionResult(tax_amount=Decimal("10.00"))
    result.merged_with(known)
    assert result.tax_amount is None
    assert result.retained_fields == []
    assert known.retained_fields == []


def test_merge_with_nothing_known():
    merged = ExtractionResult().merged_with(None)
    assert merged.missing_fields == list(PUBLIC_FIELDS)
    assert merged.retained_fields == []


def test_equal_results_compare_equal(result):
    assert result == ExtractionResult.from_dict(result.to_dict())


def test_repr(result):
    assert "INV-2048" in repr(result)
