#!/usr/bin/env python3

import argparse
import logging
import os
from collections.abc import Callable, Sequence

from receiptlens.runtime import set_log_level

DEFAULT_OCR_URL = "http://localhost:8001"
OCR_URL_ENV_VAR = "RECEIPTLENS_OCR_URL"


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receiptlens",
        description="Receipt OCR parsing utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <ocr_json>           Parse a saved OCR (Vision textAnnotations) JSON file
  scan <image>               Send a receipt image to the OCR service and parse it

Environment:
  RECEIPTLENS_LOG_LEVEL      DEBUG, INFO, WARNING or ERROR (default: INFO)
  RECEIPTLENS_OCR_URL        Default OCR service URL for scan
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse a saved OCR JSON file")
    parse_parser.add_argument("ocr_json", help="Path to OCR JSON result")
    parse_parser.add_argument("--json", action="store_true", help="Print the receipt as JSON")

    scan_parser = subparsers.add_parser("scan", help="Scan a receipt image")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument(
        "--ocr-url",
        default=os.environ.get(OCR_URL_ENV_VAR, DEFAULT_OCR_URL),
        help=f"OCR service URL (default: ${OCR_URL_ENV_VAR} or {DEFAULT_OCR_URL})",
    )
    scan_parser.add_argument("--json", action="store_true", help="Print the receipt as JSON")
    scan_parser.add_argument("--save-ocr", metavar="PATH", help="Also save the raw OCR JSON to PATH")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from receiptlens.cli.receipt import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "scan":
        from receiptlens.cli.receipt import cmd_scan

        return _run_command(cmd_scan, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
