import pytest

from config import ConfigurationManager
from invoice_fields.engine import FieldExtractionEngine
from invoice_fields.preprocessing import normalize_text, split_lines


SAMPLE_INVOICE = """ACME Supplies Ltd
TAX INVOICE
Invoice No: INV-2048
Invoice Date: 20/01/2026
VAT No: GB123456789
Description            Qty   Unit Price   Line Total
Widgets                 2      50.00       100.00
Subtotal: 100.00
VAT 10%: 10.00
Grand Total: 110.00
Due Date: 20/02/2026
"""


@pytest.fixture(autouse=True)
def reset_config():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def engine():
    return FieldExtractionEngine()


@pytest.fixture
def sample_invoice():
    return SAMPLE_INVOICE


@pytest.fixture
def views():
    """Return (normalized_text, lines) for a raw text."""
    def _views(raw):
        return normalize_text(raw), split_lines(raw)
    return _views
