import pytest

from invoice_fields.extractors import FieldKind, InvoiceNumberExtractor
from invoice_fields.preprocessing import normalize_text


def extract(raw):
    return InvoiceNumberExtractor().extract(normalize_text(raw))


@pytest.mark.parametrize("raw, expected", [
    ("INVOICE NO: INV-2048", "INV-2048"),
    ("Invoice #: A-5512", "A-5512"),
    ("Invoice Number INV/2026/0042.", "INV/2026/0042"),
    ("Invoice ID: (INV-99),", "INV-99"),
    ("Invoice Ref: X1-9", "X1-9"),
    ("Tax Invoice No. TI-77", "TI-77"),
    ("Inv # A-5512", "A-5512"),
    ("Bill No: B-778", "B-778"),
    ("Reference No. PR-00912", "PR-00912"),
    ("1NV0ICE NO: INV-1", "INV-1"),
    ("ACME Ltd\nInvoice No:\nINV-2048\nDate 20/01/2026", "INV-2048"),
])
def test_labeled_numbers(raw, expected):
    candidates = extract(raw)
    assert len(candidates) == 1
    assert candidates[0].field is FieldKind.INVOICE_NUMBER
    assert candidates[0].value == expected


def test_heading_is_not_a_label():
    assert extract("INVOICE 1912 Harvest Lane") == []


@pytest.mark.parametrize("raw", [
    "Invoice No: 5551234567",
    "Invoice No: 1912",
    "Invoice No: USD",
])
def test_implausible_token_is_absent(raw):
    assert extract(raw) == []


def test_no_fall_through_after_label_match():
    assert extract("Invoice No: 12345\nBill No: B-778") == []


def test_empty_text():
    assert InvoiceNumberExtractor().extract("") == []
