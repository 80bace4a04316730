"""Tests for the receiptlens command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from receiptlens.cli import receipt as receipt_cli
from receiptlens.cli.main import main
from receiptlens.runtime.receipt_pipeline import OCRServiceUnavailable


def _write_json(path: Path, document: Any) -> Path:
    path.write_text(json.dumps(document))
    return path


def test_parse_prints_json(tmp_path: Path, store_a_result: dict[str, Any], capsys: pytest.CaptureFixture[str]) -> None:
    ocr_path = _write_json(tmp_path / "store_a.json", {"responses": [store_a_result]})

    exit_code = main(["parse", str(ocr_path), "--json"])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["storeName"] == "Store A"
    assert data["total"] == "5.94"
    assert [item["name"] for item in data["items"]] == ["Milk", "Bread"]


def test_parse_prints_summary(tmp_path: Path, store_a_result: dict[str, Any], capsys: pytest.CaptureFixture[str]) -> None:
    ocr_path = _write_json(tmp_path / "store_a.json", store_a_result)

    assert main(["parse", str(ocr_path)]) == 0

    out = capsys.readouterr().out
    assert "PARSED RECEIPT" in out
    assert "Total: $5.94" in out


def test_parse_without_text_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ocr_path = _write_json(tmp_path / "blank.json", {"textAnnotations": []})

    assert main(["parse", str(ocr_path)]) == 1
    assert "Could not extract receipt data" in capsys.readouterr().out


def test_parse_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(tmp_path / "nope.json")]) == 1
    assert "Error:" in capsys.readouterr().out


def test_parse_invalid_document(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ocr_path = _write_json(tmp_path / "bad.json", {"textAnnotations": "Store A"})

    assert main(["parse", str(ocr_path)]) == 1
    assert "Invalid OCR result" in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage: receiptlens" in capsys.readouterr().out


def test_scan_parses_service_result(
    tmp_path: Path,
    store_a_result: dict[str, Any],
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    image_path = tmp_path / "receipt.jpg"
    image_path.write_bytes(b"fake-jpeg")
    seen: list[tuple[Path, str]] = []

    def fake_call(path: Path, ocr_url: str) -> dict[str, Any]:
        seen.append((path, ocr_url))
        return store_a_result

    monkeypatch.setattr(receipt_cli, "call_ocr_service", fake_call)
    saved_path = tmp_path / "ocr" / "receipt.json"

    exit_code = main(["scan", str(image_path), "--ocr-url", "http://ocr.local", "--json", "--save-ocr", str(saved_path)])

    assert exit_code == 0
    assert seen == [(image_path, "http://ocr.local")]
    assert json.loads(saved_path.read_text()) == store_a_result
    out = capsys.readouterr().out
    assert '"storeName": "Store A"' in out


def test_scan_reports_unavailable_service(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    image_path = tmp_path / "receipt.jpg"
    image_path.write_bytes(b"fake-jpeg")

    def unavailable(path: Path, ocr_url: str) -> dict[str, Any]:
        raise OCRServiceUnavailable("Failed to connect to OCR service: refused")

    monkeypatch.setattr(receipt_cli, "call_ocr_service", unavailable)

    assert main(["scan", str(image_path)]) == 1
    assert "OCR service unavailable" in capsys.readouterr().out


def test_scan_unreadable_image_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    image_path = tmp_path / "r.jpg"
    image_path.write_text("this is a text file")

    assert main(["scan", str(image_path), "--ocr-url", "http://ocr.local"]) == 1
    assert "is not a readable image" in capsys.readouterr().out


def test_parse_rejects_non_string_description(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ocr_path = _write_json(tmp_path / "numbers.json", {"textAnnotations": [{"description": "S"}, {"description": 12}]})

    assert main(["parse", str(ocr_path)]) == 1
    assert "Invalid OCR result" in capsys.readouterr().out


def test_scan_missing_image(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(tmp_path / "missing.jpg")]) == 1
    assert "receipt image not found" in capsys.readouterr().out
