import pytest

from invoice_fields.preprocessing import TextNormalizer, normalize_text


@pytest.mark.parametrize("raw, expected", [
    ("INVOICE No: INV-2048", "invoice no: inv-2048"),
    ("1NVOICE", "invoice"),
    ("lnv0ice", "invoice"),
    ("|nvoice #12", "invoice #12"),
    ("T0TAL: 5.00", "total: 5.00"),
    ("TOTA1 5.00", "total 5.00"),
    ("2026–01–20", "2026-01-20"),
    ("−10.00", "-10.00"),
    ("O’Brien`s", "obriens"),
    ("1nv'oice No: INV-7", "invoice no: inv-7"),
    ("T0TA’L 5.00", "total 5.00"),
    ("Qty | Price │ Total", "qty price total"),
    ("  Grand\n\n Total\t110.00  ", "grand total 110.00"),
    ("a\u00a0b", "a b"),
])
def test_normalize(raw, expected):
    assert normalize_text(raw) == expected


def test_keyword_repair_needs_word_boundaries():
    assert normalize_text("subtotal") == "subtotal"
    assert normalize_text("invoiced") == "invoiced"


@pytest.mark.parametrize("raw", [None, "", "   \n\t "])
def test_empty_input(raw):
    assert normalize_text(raw) == ""


def test_non_string_input():
    assert TextNormalizer().normalize(12345) == ""


@pytest.mark.parametrize("raw", [
    "TAX 1NVOICE |  No: A-1\n",
    "T0TAL – 110,00 ’",
    "|nv0ice || t0tal",
    "1nv'oice no: inv-7",
    "T0TA'L 5.00",
    "x'1nvoice |t0tal",
])
def test_idempotent(raw):
    once = normalize_text(raw)
    assert normalize_text(once) == once
