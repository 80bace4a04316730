"""receiptlens: turn OCR text annotations into structured receipts.

Usage:
    from receiptlens.receipt import parse_receipt

    receipt = parse_receipt(vision_response)
"""

__version__ = "0.1.0"
