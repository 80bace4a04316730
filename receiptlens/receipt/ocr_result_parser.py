"""Parse raw OCR annotations into structured ParsedReceipt data."""

from typing import Any

from receiptlens.domain.receipt import ParsedReceipt
from receiptlens.runtime import get_logger

from .ocr_helpers import group_tokens_into_lines, tokens_from_annotations
from .ocr_parser import (
    _extract_date,
    _extract_items,
    _extract_store_name,
    _extract_summary_amounts,
    _resolve_total,
)

logger = get_logger(__name__)


def parse_receipt(ocr_result: dict[str, Any]) -> ParsedReceipt | None:
    """
    Parse an OCR result into a ParsedReceipt.

    This is a best-effort parser: any field may come back empty, and item
    names that cannot be resolved are reported as "(unknown)".

    Args:
        ocr_result: Vision-style response with 'textAnnotations'; the first
            annotation holds the full text, the rest are individual words.

    Returns:
        ParsedReceipt, or None when the OCR result holds no text at all
    """
    annotations = ocr_result.get("textAnnotations") or []
    if not annotations:
        logger.warning("No text detected in OCR result")
        return None

    full_text = annotations[0].get("description") or ""
    tokens = tokens_from_annotations(annotations[1:])
    if not tokens:
        logger.warning("OCR result has full text but no word annotations")
        return None

    lines = group_tokens_into_lines(tokens)
    logger.debug("Grouped %d tokens into %d lines", len(tokens), len(lines))

    receipt_date = _extract_date(lines, full_text)
    summary = _extract_summary_amounts(lines)
    items, candidate_prices = _extract_items(lines)
    total = _resolve_total(summary.total, lines, candidate_prices)
    store_name = _extract_store_name(full_text)

    logger.info(
        "Parsed receipt from %s: %d items, total=%s, tax=%s, date=%s",
        store_name,
        len(items),
        total,
        summary.tax,
        receipt_date,
    )
    return ParsedReceipt(
        store_name=store_name,
        date=receipt_date,
        items=tuple(items),
        tax=summary.tax,
        total=total,
    )
