"""Receipt OCR parsing: geometry grouping, field extraction and formatting."""

from receiptlens.receipt.ocr_result_parser import parse_receipt

__all__ = ["parse_receipt"]
