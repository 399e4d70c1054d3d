"""
Data Normalizers Module.

This module converts raw tokens into canonical typed values:
    - Monetary amounts -> decimal.Decimal
    - Dates -> datetime.date

Both normalizers return None for anything they cannot parse with
certainty. They never guess a partial value.

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from dateutil import parser as date_parser

from invoice_fields.utils.logger import get_logger
from .validators import DateValidator

# Initialize module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class AmountToken:
    """
    A numeric token found on a line.

    Attributes:
        value: Parsed decimal value
        is_percent: Whether the token is directly followed by '%'
        start: Character offset of the token within the line
    """
    value: Decimal
    is_percent: bool
    start: int


class AmountNormalizer:
    """
    Normalizes currency/amount strings to Decimal.

    Separator handling:
        - comma and dot both present: the one appearing last is the
          decimal point, the other is a thousands separator
        - only commas: a single comma is a decimal comma (European
          convention); several commas are thousands separators
        - only dots, or neither: used as-is

    Every monetary extractor goes through this one routine so locale
    handling stays consistent across totals, subtotals and tax lines.

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.normalize("$1,234.56")
        Decimal('1234.56')
        >>> normalizer.normalize("€ 1.234,56")
        Decimal('1234.56')
        >>> normalizer.normalize("n/a") is None
        True
    """

    NON_NUMERIC_RE = re.compile(r"[^\d,.]")

    # A run starting and ending with a digit, separators allowed inside
    NUMBER_TOKEN_RE = re.compile(r"\d(?:[\d,.]*\d)?")
    PERCENT_SUFFIX_RE = re.compile(r"\s*%")

    def normalize(self, amount_str: Optional[str]) -> Optional[Decimal]:
        """
        Normalize an amount string.

        Args:
            amount_str: Input amount string (e.g., "USD 1,234.56").

        Returns:
            Decimal value, or None when no amount can be read.
        """
        if amount_str is None:
            return None

        cleaned = self.NON_NUMERIC_RE.sub("", str(amount_str))
        cleaned = self._disambiguate_separators(cleaned)

        if not cleaned:
            return None

        try:
            return Decimal(cleaned)
        except InvalidOperation:
            logger.debug(f"Could not parse amount: {amount_str!r}")
            return None

    def _disambiguate_separators(self, amount_str: str) -> str:
        """
        Resolve comma/dot roles and return a plain dotted number.

        Args:
            amount_str: String containing only digits, commas and dots.

        Returns:
            String with at most the decimal dot left.
        """
        has_comma = ',' in amount_str
        has_dot = '.' in amount_str

        if has_comma and has_dot:
            if amount_str.rfind(',') > amount_str.rfind('.'):
                return amount_str.replace('.', '').replace(',', '.')
            return amount_str.replace(',', '')

        if has_comma:
            if amount_str.count(',') > 1:
                return amount_str.replace(',', '')
            return amount_str.replace('.', '').replace(',', '.')

        return amount_str

    def find_amounts(self, text: str) -> List[AmountToken]:
        """
        Find every parseable numeric token in a piece of text.

        Args:
            text: A single line (or fragment) of invoice text.

        Returns:
            Tokens in left-to-right order.
        """
        tokens = []
        if not text:
            return tokens

        for match in self.NUMBER_TOKEN_RE.finditer(text):
            value = self.normalize(match.group(0))
            if value is None:
                continue
            is_percent = self.PERCENT_SUFFIX_RE.match(text, match.end()) is not None
            tokens.append(AmountToken(value=value, is_percent=is_percent, start=match.start()))

        return tokens

    def last_amount(self, text: str) -> Optional[Decimal]:
        """
        Return the last non-percentage amount in the text.

        Amounts sit at the right edge of invoice lines; anything earlier
        on the line is a quantity, a rate or a reference.
        """
        for token in reversed(self.find_amounts(text)):
            if not token.is_percent:
                return token.value
        return None


class DateNormalizer:
    """
    Parses date tokens into calendar dates.

    Formats are tried in a fixed priority order:
        1. ISO year-month-day (dash or slash)
        2. day/month/year with slash, dash or dot
        3. textual month ("20 Jan 2026", "Jan 20, 2026")

    The first format that parses wins. Textual months are only handed to
    dateutil once a regex has confirmed that day, month name and a
    four-digit year are all present, so dateutil never fills in a
    missing part from defaults.

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("20/01/2026")
        datetime.date(2026, 1, 20)
        >>> normalizer.normalize("20/012026")
        datetime.date(2026, 1, 20)
        >>> normalizer.normalize("sometime in 2026") is None
        True
    """

    NUMERIC_FORMATS = [
        "%Y-%m-%d",
        "%Y/%m/%d",
        "%d/%m/%Y",
        "%d-%m-%Y",
        "%d.%m.%Y",
    ]

    MONTH_NAME = (
        r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
        r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
    )

    TEXTUAL_DATE_RE = re.compile(
        r"^(?:\d{1,2}[\s\-]*" + MONTH_NAME + r"\.?,?[\s\-]*\d{4}"
        r"|" + MONTH_NAME + r"\.?\s+\d{1,2},?\s+\d{4})$",
        re.IGNORECASE
    )

    # OCR drops the separator between month and year: 20/012026
    GLUED_YEAR_RE = re.compile(r"^(\d{1,2})([/\-.])(\d{2})((?:19|20)\d{2})$")

    ORDINAL_RE = re.compile(r"(\d{1,2})(?:st|nd|rd|th)\b", re.IGNORECASE)

    def __init__(self) -> None:
        """Initialize the date normalizer."""
        self.date_validator = DateValidator()

    def normalize(self, date_str: Optional[str]) -> Optional[date]:
        """
        Parse a date token into a calendar date.

        Args:
            date_str: Input date token.

        Returns:
            Parsed date, or None if no accepted format matches.
        """
        if not date_str or not isinstance(date_str, str):
            return None

        cleaned = self.repair_glued_year(self._clean_date_string(date_str))
        if not cleaned:
            return None

        parsed = self._try_numeric_formats(cleaned)
        if parsed is None:
            parsed = self._try_textual_format(cleaned)

        if parsed is None:
            logger.debug(f"Could not parse date: {date_str!r}")
            return None

        is_valid, message = self.date_validator.validate(parsed)
        if not is_valid:
            logger.debug(f"Rejected date {parsed}: {message}")
            return None

        return parsed

    def repair_glued_year(self, date_str: str) -> str:
        """
        Reinsert a separator dropped between month and year.

        Args:
            date_str: Date token, e.g. "20/012026".

        Returns:
            Repaired token ("20/01/2026"), or the input unchanged.
        """
        match = self.GLUED_YEAR_RE.match(date_str)
        if not match:
            return date_str
        day, sep, month, year = match.groups()
        return f"{day}{sep}{month}{sep}{year}"

    def _clean_date_string(self, date_str: str) -> str:
        """Collapse whitespace, drop ordinal suffixes and edge punctuation."""
        date_str = ' '.join(date_str.split())
        date_str = self.ORDINAL_RE.sub(r"\1", date_str)
        return date_str.strip(" .,;:")

    def _try_numeric_formats(self, date_str: str) -> Optional[date]:
        for fmt in self.NUMERIC_FORMATS:
            try:
                return datetime.strptime(date_str, fmt).date()
            except ValueError:
                continue
        return None

    def _try_textual_format(self, date_str: str) -> Optional[date]:
        if not self.TEXTUAL_DATE_RE.match(date_str):
            return None
        try:
            return date_parser.parse(date_str, dayfirst=True).date()
        except (ValueError, OverflowError):
            return None
