from datetime import date, datetime
from decimal import Decimal

import pytest

from invoice_fields.processing import (
    AcquiredText,
    DocumentProcessor,
    FileTextProvider,
    InvoiceDocument,
    InvoiceStatus,
    TextCache,
    TextSourceKind,
)
from invoice_fields.utils.exceptions import NoTextAvailableError

PROCESSED_AT = datetime(2026, 1, 21, 9, 0)


class StubProvider:
    def __init__(self, result):
        self.result = result
        self.calls = 0

    def acquire(self, document):
        self.calls += 1
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class StubSuggester:
    def __init__(self, suggestions=None, error=None):
        self.suggestions = suggestions or {}
        self.error = error

    def suggest(self, text):
        if self.error:
            raise self.error
        return self.suggestions


def make_processor(provider, **kwargs):
    return DocumentProcessor(provider, clock=lambda: PROCESSED_AT, **kwargs)


def test_processes_document(sample_invoice):
    provider = StubProvider(AcquiredText(sample_invoice, TextSourceKind.OCR))
    document = make_processor(provider).process(InvoiceDocument(id="doc-1"))

    assert document.status is InvoiceStatus.PROCESSED
    assert document.source is TextSourceKind.OCR
    assert document.date_processed == PROCESSED_AT
    assert document.invoice_number == "INV-2048"
    assert document.invoice_date == date(2026, 1, 20)
    assert document.total_amount == Decimal("110.00")
    assert document.tax_amount == Decimal("10.00")


def test_plain_string_from_provider():
    document = make_processor(StubProvider("Total: 5.00")).process(InvoiceDocument(id="doc-1"))
    assert document.source is TextSourceKind.TEXT
    assert document.total_amount == Decimal("5.00")


@pytest.mark.parametrize("result", [
    NoTextAvailableError("doc-1", "OCR returned nothing"),
    "",
    AcquiredText("   \n  "),
])
def test_no_text_marks_failed(result):
    document = make_processor(StubProvider(result)).process(InvoiceDocument(id="doc-1"))
    assert document.status is InvoiceStatus.FAILED
    assert document.date_processed is None


def test_unexpected_error_marks_failed_and_propagates():
    document = InvoiceDocument(id="doc-1")
    with pytest.raises(RuntimeError):
        make_processor(StubProvider(RuntimeError("service down"))).process(document)
    assert document.status is InvoiceStatus.FAILED


def test_cached_text_skips_provider(sample_invoice):
    provider = StubProvider(AcquiredText(sample_invoice))
    processor = make_processor(provider, text_cache=TextCache())

    processor.process(InvoiceDocument(id="doc-1"))
    processor.process(InvoiceDocument(id="doc-1"))

    assert provider.calls == 1


def test_absent_fields_keep_known_values():
    document = InvoiceDocument(id="doc-1", invoice_number="INV-9", total_amount=Decimal("1.00"))
    make_processor(StubProvider("Grand Total: 110.00")).process(document)

    assert document.invoice_number == "INV-9"
    assert document.total_amount == Decimal("110.00")


def test_suggester_fills_missing_fields_only():
    suggester = StubSuggester({
        'invoice_number': "inv-77",
        'invoice_date': "20 Jan 2026",
        'total_amount': "999.00",
        'tax_amount': "not a number",
    })
    processor = make_processor(StubProvider("Grand Total: 110.00"), suggester=suggester)
    document = processor.process(InvoiceDocument(id="doc-1"))

    assert document.invoice_number == "INV-77"
    assert document.invoice_date == date(2026, 1, 20)
    assert document.total_amount == Decimal("110.00")
    assert document.tax_amount is None


def test_suggester_failure_does_not_fail_document():
    suggester = StubSuggester(error=RuntimeError("quota exceeded"))
    processor = make_processor(StubProvider("Grand Total: 110.00"), suggester=suggester)
    document = processor.process(InvoiceDocument(id="doc-1"))

    assert document.status is InvoiceStatus.PROCESSED
    assert document.total_amount == Decimal("110.00")


def test_to_dict(sample_invoice):
    document = make_processor(StubProvider(sample_invoice)).process(InvoiceDocument(id="doc-1"))
    data = document.to_dict()
    assert data['status'] == "processed"
    assert data['invoice_date'] == "2026-01-20"
    assert data['total_amount'] == "110.00"
    assert data['date_processed'] == PROCESSED_AT.isoformat()


class TestFileTextProvider:

    def test_reads_file(self, tmp_path):
        (tmp_path / "invoice.txt").write_text("Total: 5.00", encoding="utf-8")
        provider = FileTextProvider(base_dir=tmp_path)
        acquired = provider.acquire(InvoiceDocument(id="doc-1", filename="invoice.txt"))
        assert acquired == AcquiredText("Total: 5.00", TextSourceKind.TEXT)

    def test_undecodable_bytes_are_replaced(self, tmp_path):
        path = tmp_path / "invoice.txt"
        path.write_bytes(b"Total: 5.00 \xff")
        acquired = FileTextProvider().acquire(InvoiceDocument(id="doc-1", filename=str(path)))
        assert acquired.text.startswith("Total: 5.00")

    @pytest.mark.parametrize("filename", [None, "missing.txt"])
    def test_no_file(self, tmp_path, filename):
        provider = FileTextProvider(base_dir=tmp_path)
        with pytest.raises(NoTextAvailableError):
            provider.acquire(InvoiceDocument(id="doc-1", filename=filename))

    def test_missing_file_fails_document(self, tmp_path):
        processor = make_processor(FileTextProvider(base_dir=tmp_path))
        document = processor.process(InvoiceDocument(id="doc-1", filename="missing.txt"))
        assert document.status is InvoiceStatus.FAILED
