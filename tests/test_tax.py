from decimal import Decimal

import pytest

from invoice_fields.extractors import FieldKind, TaxDeriver, TaxLine, TaxLineScanner, derive_tax


@pytest.fixture
def scanner():
    return TaxLineScanner()


def test_explicit_amount_beats_rate():
    candidate = derive_tax(["Sales Tax 6.25% 9.06"], subtotal=Decimal("144.96"))
    assert candidate.field is FieldKind.TAX_AMOUNT
    assert candidate.value == Decimal("9.06")
    assert candidate.origin_index == 0


def test_rate_with_subtotal():
    candidate = derive_tax(["Subtotal: 500.00", "VAT 20%"], subtotal=Decimal("500.00"))
    assert candidate.value == Decimal("100.00")
    assert candidate.origin_index == 1


def test_rate_with_tax_inclusive_total():
    assert derive_tax(["VAT 20%"], total=Decimal("120.00")).value == Decimal("20.00")


def test_subtotal_preferred_over_total():
    candidate = derive_tax(["GST 10%"], subtotal=Decimal("100.00"), total=Decimal("110.00"))
    assert candidate.value == Decimal("10.00")


def test_derived_amount_rounds_half_up():
    assert derive_tax(["VAT 12.5%"], subtotal=Decimal("10.04")).value == Decimal("1.26")


@pytest.mark.parametrize("line", ["VAT 60%", "VAT 0%", "VAT 50.5%"])
def test_implausible_rate_is_discarded(line):
    assert derive_tax([line], subtotal=Decimal("100.00")) is None


def test_rate_without_base_yields_nothing():
    assert derive_tax(["VAT 20%"]) is None


def test_first_line_with_amount_wins():
    lines = ["VAT 5%: 2.50", "VAT 20%: 40.00"]
    assert derive_tax(lines).value == Decimal("2.50")


def test_line_without_amount_or_rate_is_passed_over():
    lines = ["Tax", "VAT 20%"]
    assert derive_tax(lines, subtotal=Decimal("100.00")).value == Decimal("20.00")


def test_no_tax_lines():
    assert derive_tax(["Grand Total: 110.00"], total=Decimal("110.00")) is None


def test_scan_skips_identifiers(scanner):
    tax_lines = scanner.scan(["TAX INVOICE", "VAT No: GB123456789", "VAT 20%"])
    assert tax_lines == [TaxLine(index=2, amount=None, rate=Decimal("20"))]


def test_scan_reads_rate_and_amount(scanner):
    assert scanner.scan(["Sales Tax 6.25% 9.06"]) == [
        TaxLine(index=0, amount=Decimal("9.06"), rate=Decimal("6.25"))
    ]


def test_scan_ignores_dates(scanner):
    assert scanner.scan(["VAT paid 20/01/2026"]) == [TaxLine(index=0)]


@pytest.mark.parametrize("view, expected", [
    ("vat 10%: 10.00", True),
    ("sales tax 9.06", True),
    ("gst: 5.00", True),
    ("total incl. vat 110.00", False),
    ("subtotal (excl. vat) 100.00", False),
    ("grand total tax 110.00", False),
    ("gst reg. 12-345-678", False),
    ("tax id 99-1234567", False),
    ("abn 51 824 753 556 gst 5.00", False),
    ("shipping 5.00", False),
])
def test_is_tax_line(scanner, view, expected):
    assert scanner.is_tax_line(view) is expected


def test_deriver_on_scanned_lines():
    deriver = TaxDeriver()
    tax_lines = [TaxLine(0), TaxLine(3, rate=Decimal("10"))]
    assert deriver.resolve(tax_lines, subtotal=Decimal("99.99")).value == Decimal("10.00")
    assert deriver.resolve([]) is None
