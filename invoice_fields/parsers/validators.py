"""
Data Validators Module.

Plausibility checks applied to raw tokens and parsed values before they
are allowed to become candidates:
    - Invoice number token shape
    - Calendar date range
    - Monetary amount range
    - Tax rate range

Validators return (is_valid, message) tuples; callers that only need a
yes/no use is_valid().

Author: ML Engineering Team
"""

import re
from datetime import date
from decimal import Decimal
from typing import Tuple

from config import get_config
from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class InvoiceNumberValidator:
    """
    Validates a captured invoice number token.

    Rules:
        - length between MIN_LENGTH and MAX_LENGTH
        - not a bare run of 8+ digits (phone numbers, account numbers)
        - at least one digit and at least one letter
        - not a currency code
        - starts and ends alphanumeric; inner separators only - / .

    Example:
        >>> validator = InvoiceNumberValidator()
        >>> validator.validate("INV-2048")
        (True, 'Valid invoice number')
        >>> validator.validate("1912")
        (False, 'Invoice number needs both letters and digits')
    """

    MIN_LENGTH = 3
    MAX_LENGTH = 32

    CURRENCY_CODES = {
        'USD', 'EUR', 'GBP', 'JPY', 'INR', 'CAD', 'AUD', 'CNY', 'RUB',
        'CHF', 'NZD', 'SGD', 'HKD', 'SEK', 'NOK', 'DKK', 'ZAR', 'MXN',
        'BRL', 'PLN', 'AED', 'MYR', 'IDR', 'PHP',
    }

    SHAPE_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9\-/.]*[A-Za-z0-9])?$")
    BARE_DIGITS_RE = re.compile(r"^\d{8,}$")

    def is_valid(self, token: str) -> bool:
        valid, _ = self.validate(token)
        return valid

    def validate(self, token: str) -> Tuple[bool, str]:
        """
        Validate an invoice number token with detailed feedback.

        Args:
            token: Candidate invoice number.

        Returns:
            Tuple of (is_valid, message).
        """
        if not token:
            return False, "Invoice number is empty"

        if not self.MIN_LENGTH <= len(token) <= self.MAX_LENGTH:
            return False, f"Invoice number length {len(token)} out of bounds"

        if self.BARE_DIGITS_RE.match(token):
            return False, "Invoice number looks like a phone or account number"

        if not (re.search(r"\d", token) and re.search(r"[A-Za-z]", token)):
            return False, "Invoice number needs both letters and digits"

        if token.upper() in self.CURRENCY_CODES:
            return False, "Invoice number is a currency code"

        if not self.SHAPE_RE.match(token):
            return False, "Invoice number has invalid characters or edges"

        return True, "Valid invoice number"


class DateValidator:
    """
    Validates parsed calendar dates.

    Dates outside [min_year, max_year] are treated as OCR noise rather
    than real invoice dates.
    """

    MIN_YEAR = 1900
    MAX_YEAR = 2100

    def __init__(self) -> None:
        """Initialize the date validator."""
        self.min_year = int(get_config("extraction.date.min_year", self.MIN_YEAR))
        self.max_year = int(get_config("extraction.date.max_year", self.MAX_YEAR))

    def is_valid(self, value: date) -> bool:
        valid, _ = self.validate(value)
        return valid

    def validate(self, value: date) -> Tuple[bool, str]:
        """
        Validate a calendar date.

        Args:
            value: Parsed date.

        Returns:
            Tuple of (is_valid, message).
        """
        if value is None:
            return False, "Date is empty"

        if value.year < self.min_year:
            return False, f"Year {value.year} is too old"
        if value.year > self.max_year:
            return False, f"Year {value.year} is too far in future"

        return True, "Valid date"


class AmountValidator:
    """
    Validates monetary amounts.

    Checks for:
        - Non-negative values
        - Values under MAX_AMOUNT
        - Membership of an arbitrary [low, high] window (used by the
          permissive largest-number fallback for totals)

    Example:
        >>> validator = AmountValidator()
        >>> validator.validate(Decimal("-1"))
        (False, 'Amount cannot be negative')
    """

    MIN_AMOUNT = Decimal("0")
    MAX_AMOUNT = Decimal("1000000000")

    def is_valid(self, value: Decimal) -> bool:
        valid, _ = self.validate(value)
        return valid

    def validate(self, value: Decimal) -> Tuple[bool, str]:
        if value is None:
            return False, "Amount is empty"

        if value < self.MIN_AMOUNT:
            return False, "Amount cannot be negative"

        if value > self.MAX_AMOUNT:
            return False, f"Amount {value} exceeds maximum"

        return True, "Valid amount"

    def is_within(self, value: Decimal, low: Decimal, high: Decimal) -> bool:
        """Check low <= value <= high."""
        return value is not None and low <= value <= high


class TaxRateValidator:
    """
    Validates tax rates expressed in percent.

    Accepted range is strictly above 0 and at most max_rate_percent
    (50 by default); anything else is discarded as OCR noise.
    """

    MAX_RATE_PERCENT = Decimal("50")

    def __init__(self) -> None:
        """Initialize the tax rate validator."""
        self.max_rate = Decimal(str(
            get_config("extraction.tax.max_rate_percent", self.MAX_RATE_PERCENT)
        ))

    def is_valid(self, rate_percent: Decimal) -> bool:
        valid, _ = self.validate(rate_percent)
        return valid

    def validate(self, rate_percent: Decimal) -> Tuple[bool, str]:
        if rate_percent is None:
            return False, "Rate is empty"

        if rate_percent <= 0:
            return False, f"Rate {rate_percent}% is not positive"

        if rate_percent > self.max_rate:
            return False, f"Rate {rate_percent}% exceeds {self.max_rate}%"

        return True, "Valid rate"
