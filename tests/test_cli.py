import json

import pytest

import main


@pytest.fixture
def invoices(tmp_path, sample_invoice):
    directory = tmp_path / "texts"
    directory.mkdir()
    (directory / "invoice_001.txt").write_text(sample_invoice, encoding="utf-8")
    (directory / "empty.txt").write_text("", encoding="utf-8")
    (directory / "scan.pdf").write_bytes(b"%PDF-1.4")
    return directory


def test_extract_directory(invoices, tmp_path):
    output = tmp_path / "out" / "results.json"
    assert main.main(["--input", str(invoices), "--output", str(output), "--quiet"]) == 0

    documents = {doc['id']: doc for doc in json.loads(output.read_text(encoding="utf-8"))}
    assert set(documents) == {"empty.txt", "invoice_001.txt"}
    assert documents["invoice_001.txt"]['invoice_number'] == "INV-2048"
    assert documents["invoice_001.txt"]['total_amount'] == "110.00"
    assert documents["empty.txt"]['status'] == "failed"


def test_prints_json_without_output(invoices, capsys):
    assert main.main(["--input", str(invoices / "invoice_001.txt"), "--quiet"]) == 0
    documents = json.loads(capsys.readouterr().out)
    assert documents[0]['status'] == "processed"


def test_evaluation_report(invoices, tmp_path):
    gt = tmp_path / "gt.json"
    gt.write_text(json.dumps([{
        'source_file': "invoice_001.txt",
        'invoice_number': "INV-2048",
        'invoice_date': "2026-01-20",
        'total_amount': "110.00",
        'tax_amount': "10.00",
    }]), encoding="utf-8")
    report = tmp_path / "report.json"

    code = main.main([
        "--input", str(invoices / "invoice_001.txt"),
        "--output", str(tmp_path / "results.json"),
        "--evaluate", "--ground-truth", str(gt),
        "--report", str(report), "--quiet",
    ])

    assert code == 0
    assert json.loads(report.read_text(encoding="utf-8"))['overall_accuracy'] == 1.0


@pytest.mark.parametrize("argv", [
    ["--input", "does/not/exist"],
    ["--input", "scan.pdf"],
    ["--input", ".", "--evaluate"],
])
def test_error_exit_code(invoices, monkeypatch, argv):
    monkeypatch.chdir(invoices)
    assert main.main(argv + ["--quiet"]) == 1


def test_evaluation_without_report_keeps_stdout_json(invoices, tmp_path, capsys):
    gt = tmp_path / "gt.json"
    gt.write_text(json.dumps([{
        'source_file': "invoice_001.txt",
        'invoice_number': "INV-2048",
    }]), encoding="utf-8")

    code = main.main([
        "--input", str(invoices / "invoice_001.txt"),
        "--evaluate", "--ground-truth", str(gt), "--quiet",
    ])

    captured = capsys.readouterr()
    assert code == 0
    assert json.loads(captured.out)[0]['invoice_number'] == "INV-2048"
    assert "FIELD EXTRACTION EVALUATION REPORT" in captured.err
