"""Core domain models for receiptlens.

This module provides the data models shared by the parser and its callers:
- OCRToken, ReceiptLine: geometry-derived OCR structures
- ParsedReceipt, ReceiptItem: parser output

Usage:
    from receiptlens.domain import ParsedReceipt, ReceiptItem
"""

from receiptlens.domain.receipt import OCRToken, ParsedReceipt, ReceiptItem, ReceiptLine

__all__ = [
    "OCRToken",
    "ParsedReceipt",
    "ReceiptItem",
    "ReceiptLine",
]
