"""
Pattern Tables Module.

Ordered regex tables used by the field extractors. Each list is
evaluated in priority order, most specific first, so adding a new
invoice layout means adding one PatternSpec in the right place.

All patterns expect lower-case input (the normalized text blob, or a
line passed through the text normalizer).

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass, field
from typing import List, Pattern


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with an example of what it matches."""
    name: str
    pattern: str
    example: str
    flags: int = re.IGNORECASE
    compiled: Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))


# =============================================================================
# INVOICE NUMBER
# =============================================================================

_NUMBER_QUALIFIER = r"(?:number|num(?![a-z])\.?|no(?![a-z])\.?|id(?![a-z])|ref(?:erence)?(?![a-z])\.?|#)"
_LABEL_SEPARATOR = r"[\s:#.\-]*"
_TOKEN = r"(\S+)"

INVOICE_NUMBER_PATTERNS: List[PatternSpec] = [
    PatternSpec(
        name='invoice_number',
        pattern=r"\binvoice\s*" + _NUMBER_QUALIFIER + _LABEL_SEPARATOR + _TOKEN,
        example='invoice no: inv-2048',
    ),
    PatternSpec(
        name='inv_number',
        pattern=r"\binv\.?\s*(?:number|num(?![a-z])\.?|no(?![a-z])\.?|#)" + _LABEL_SEPARATOR + _TOKEN,
        example='inv # a-5512',
    ),
    PatternSpec(
        name='bill_number',
        pattern=r"\bbill\s*(?:number|no(?![a-z])\.?|#)" + _LABEL_SEPARATOR + _TOKEN,
        example='bill no: b-778',
    ),
    PatternSpec(
        name='reference_number',
        pattern=r"\b(?:reference|ref)\.?\s*(?:number|no(?![a-z])\.?|#)" + _LABEL_SEPARATOR + _TOKEN,
        example='reference no. pr-00912',
    ),
]


# =============================================================================
# DATES
# =============================================================================

MONTH_NAME = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

_ISO_DATE = r"\d{4}[-/]\d{1,2}[-/]\d{1,2}"
_DMY_DATE = r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{4}"
# separator between month and year lost to OCR: 20/012026
_GLUED_DATE = r"\d{1,2}[/\-.]\d{2}(?:19|20)\d{2}"
_TEXTUAL_DMY = r"\d{1,2}(?:st|nd|rd|th)?[\s\-]*" + MONTH_NAME + r"\.?,?[\s\-]*\d{4}"
_TEXTUAL_MDY = r"\b" + MONTH_NAME + r"\.?\s+\d{1,2}(?:st|nd|rd|th)?,?\s+\d{4}"

DATEISH = (
    r"(?<!\d)(?:" + "|".join([_ISO_DATE, _DMY_DATE, _GLUED_DATE, _TEXTUAL_DMY, _TEXTUAL_MDY])
    + r")(?!\d)"
)

DATEISH_RE = re.compile(DATEISH, re.IGNORECASE)

DATE_LABEL_PATTERNS: List[PatternSpec] = [
    PatternSpec(
        name='invoice_date',
        pattern=r"\binvoice\s+date" + _LABEL_SEPARATOR + "(" + DATEISH + ")",
        example='invoice date: 2026-01-20',
    ),
    PatternSpec(
        name='issue_date',
        pattern=r"\b(?:date\s+of\s+issue|issue\s+date|date\s+issued|issued\s+on|issued?)"
                + _LABEL_SEPARATOR + "(" + DATEISH + ")",
        example='date of issue 20 jan 2026',
    ),
    PatternSpec(
        name='bare_date',
        pattern=r"(?<!due )(?<!delivery )(?<!payment )(?<!expiry )\bdated?"
                + _LABEL_SEPARATOR + "(" + DATEISH + ")",
        example='date: 20/01/2026',
    ),
]


# =============================================================================
# TOTALS, SUBTOTALS AND TAX LINES
# =============================================================================

STRONG_TOTAL_RE = re.compile(
    r"\b(?:grand\s+total|total\s+amount|amount\s+due|total\s+due|invoice\s+total"
    r"|balance\s+due|amount\s+payable)\b"
)
LONE_TOTAL_RE = re.compile(r"\btotal\b")
LEADING_TOTAL_RE = re.compile(r"^\W*total\b")
SUBTOTAL_RE = re.compile(r"\bsub[\s\-]*total\b")
TAX_KEYWORD_RE = re.compile(r"\b(?:tax(?:es)?|vat|gst)\b")

INCLUSIVE_TAX_RE = re.compile(
    r"\b(?:incl(?:uding|usive)?|inc)\.?\s*(?:of\s+)?(?:sales\s+)?(?:tax(?:es)?|vat|gst)\b"
)
EXCLUSIVE_TAX_RE = re.compile(
    r"\b(?:excl(?:uding|usive)?|ex|before|pre)\.?[\s\-]*(?:of\s+)?(?:sales\s+)?(?:tax(?:es)?|vat|gst)\b"
)

# "tax invoice", "vat no", "gst reg", "tax id": identifiers, not amounts
TAX_IDENTIFIER_RE = re.compile(
    r"\b(?:tax|vat|gst)\s*(?:invoice|id(?![a-z])|no(?![a-z])|number|reg(?:istration|istered|\.)?"
    r"|#|code|exempt)|\b(?:abn|tin|ein|gstin)\b"
)

LINE_ITEM_RE = re.compile(r"\b(?:qty|quantity|unit\s+price|rate|line\s+total)\b")
