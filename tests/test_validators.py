from datetime import date
from decimal import Decimal

import pytest

from invoice_fields.parsers import (
    AmountValidator,
    DateValidator,
    InvoiceNumberValidator,
    TaxRateValidator,
)


@pytest.mark.parametrize("token", ["INV-2048", "A1B", "2026/INV/17", "ti/2026/17", "INV.2026.1"])
def test_plausible_invoice_numbers(token):
    assert InvoiceNumberValidator().is_valid(token)


@pytest.mark.parametrize("token", [
    "",
    "A1",             # too short
    "A" * 31 + "12",  # too long
    "1912",           # no letters
    "12345678",       # phone-like digit run
    "INVOICE",        # no digits
    "-INV1",          # must start alphanumeric
    "INV1-",          # must end alphanumeric
    "INV_1",          # underscore not an allowed separator
    "INV 1",
])
def test_implausible_invoice_numbers(token):
    assert not InvoiceNumberValidator().is_valid(token)


def test_invoice_number_messages():
    assert InvoiceNumberValidator().validate("12345678") == (
        False, "Invoice number looks like a phone or account number"
    )
    assert InvoiceNumberValidator().validate("INV-2048") == (True, "Valid invoice number")


@pytest.mark.parametrize("value, expected", [
    (date(1899, 12, 31), False),
    (date(1900, 1, 1), True),
    (date(2026, 1, 20), True),
    (date(2101, 1, 1), False),
    (None, False),
])
def test_date_validator(value, expected):
    assert DateValidator().is_valid(value) is expected


@pytest.mark.parametrize("value, expected", [
    (Decimal("-1"), False),
    (Decimal("0"), True),
    (Decimal("110.00"), True),
    (Decimal("10000000000"), False),
    (None, False),
])
def test_amount_validator(value, expected):
    assert AmountValidator().is_valid(value) is expected


def test_amount_window():
    validator = AmountValidator()
    assert validator.is_within(Decimal("1"), Decimal("1"), Decimal("10"))
    assert not validator.is_within(Decimal("0.5"), Decimal("1"), Decimal("10"))
    assert not validator.is_within(None, Decimal("1"), Decimal("10"))


@pytest.mark.parametrize("rate, expected", [
    (Decimal("0"), False),
    (Decimal("-5"), False),
    (Decimal("0.01"), True),
    (Decimal("20"), True),
    (Decimal("50"), True),
    (Decimal("50.01"), False),
])
def test_tax_rate_validator(rate, expected):
    assert TaxRateValidator().is_valid(rate) is expected
