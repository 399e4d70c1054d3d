"""
Line Splitter Module.

Produces the ordered line sequence used by the position-aware
extractors (totals, subtotal, tax). Lines keep their original case,
punctuation and inner spacing; only line breaks are interpreted.

Author: ML Engineering Team
"""

import re
from typing import List, Optional

NEWLINE_RUN_RE = re.compile(r"\n+")


def split_lines(raw_text: Optional[str]) -> List[str]:
    """
    Split raw text into lines, preserving document order.

    Windows and old Mac line endings are folded to "\\n" first, then the
    text is split on runs of newlines. Zero-length pieces (which can only
    appear at either end) are dropped; whitespace-only lines are kept so
    line indexes stay faithful to the document.

    Args:
        raw_text: Full OCR/text output for one document.

    Returns:
        List of lines; index 0 is the first line of the document.

    Example:
        >>> split_lines("Invoice\\r\\n\\r\\nTotal: 10.00\\n")
        ['Invoice', 'Total: 10.00']
    """
    if not raw_text or not isinstance(raw_text, str):
        return []

    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
    return [line for line in NEWLINE_RUN_RE.split(text) if line]
