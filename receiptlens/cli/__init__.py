"""Command-line interface for receiptlens.

Usage:
    receiptlens parse <ocr_json>
    receiptlens parse <ocr_json> --json
    receiptlens scan <image> [--ocr-url URL] [--save-ocr PATH]
"""
