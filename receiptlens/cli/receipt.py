"""Receipt command handlers used by the unified CLI."""

import argparse
import sys
from pathlib import Path

from receiptlens.domain.receipt import ParsedReceipt
from receiptlens.receipt.formatter import format_parsed_receipt, format_parsed_receipt_json
from receiptlens.receipt.ocr_result_parser import parse_receipt
from receiptlens.runtime import get_logger
from receiptlens.runtime.receipt_pipeline import (
    InvalidOCRResult,
    InvalidReceiptImage,
    OCRServiceUnavailable,
    call_ocr_service,
    load_ocr_result,
    save_ocr_json,
)

logger = get_logger(__name__)


def _print_receipt(receipt: ParsedReceipt, as_json: bool) -> None:
    if as_json:
        print(format_parsed_receipt_json(receipt))
    else:
        print(format_parsed_receipt(receipt))


def _print_no_data(source: Path) -> None:
    logger.error("No receipt data extracted from %s", source)
    print(f"Could not extract receipt data from {source}: no text detected.")


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse a saved OCR JSON result and print the receipt."""
    json_path = Path(args.ocr_json)
    try:
        ocr_result = load_ocr_result(json_path)
    except FileNotFoundError as e:
        logger.error("%s", e)
        print(f"Error: {e}")
        sys.exit(1)
    except InvalidOCRResult as e:
        logger.error("%s", e)
        print(f"Invalid OCR result: {e}")
        sys.exit(1)

    receipt = parse_receipt(ocr_result)
    if receipt is None:
        _print_no_data(json_path)
        sys.exit(1)

    _print_receipt(receipt, args.json)


def cmd_scan(args: argparse.Namespace) -> None:
    """Send a receipt image to the OCR service, then parse and print it."""
    receipt_path = Path(args.image)
    if not receipt_path.exists():
        logger.error("Receipt image not found: %s", receipt_path)
        print(f"Error: receipt image not found: {receipt_path}")
        sys.exit(1)

    try:
        ocr_result = call_ocr_service(receipt_path, args.ocr_url)
    except OCRServiceUnavailable as e:
        print(f"OCR service unavailable: {e}")
        print("Make sure the OCR service is running before scanning receipts.")
        sys.exit(1)
    except InvalidReceiptImage as e:
        print(f"Error: {e}")
        sys.exit(1)
    except InvalidOCRResult as e:
        logger.error("%s", e)
        print(f"Invalid OCR result: {e}")
        sys.exit(1)

    if args.save_ocr:
        saved_path = save_ocr_json(ocr_result, Path(args.save_ocr))
        print(f"OCR JSON saved to: {saved_path}")

    receipt = parse_receipt(ocr_result)
    if receipt is None:
        _print_no_data(receipt_path)
        sys.exit(1)

    _print_receipt(receipt, args.json)
