"""Store/date/summary amount extraction helpers."""

import re
from dataclasses import dataclass
from decimal import Decimal

from receiptlens.domain.receipt import ReceiptLine

from .common import (
    TAX_LABEL,
    TOTAL_LABEL,
    UNKNOWN_STORE_NAME,
    _is_administrative_line,
    _last_price_like_value,
)

_MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"

# Tried in order; the first pattern that matches wins
DATE_PATTERNS = [
    # 01/05/24, 1-5-2024 (day/month order is not interpreted)
    ("numeric", re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b")),
    # 2024-01-05, 2024/1/5
    ("year_first", re.compile(r"\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b")),
    # Jan 5, 2024 / Jan. 5 2024 / January 5, 2024
    ("month_name_first", re.compile(r"\b" + _MONTH + r"\s+\d{1,2},?\s+\d{4}\b", re.IGNORECASE)),
    # 5 Jan 2024
    ("day_first", re.compile(r"\b\d{1,2}\s+" + _MONTH + r"\s+\d{4}\b", re.IGNORECASE)),
]

# Summary labels and the receipt field they fill, checked on administrative rows
SUMMARY_LABELS = [
    (TOTAL_LABEL, "total"),
    (TAX_LABEL, "tax"),
]


@dataclass(frozen=True)
class SummaryAmounts:
    """Tax/total amounts captured from administrative rows."""

    total: str | None = None
    tax: str | None = None


def _match_date(text: str) -> str | None:
    for _name, pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def _extract_date(lines: list[ReceiptLine], full_text: str) -> str | None:
    """
    Find the receipt date as written on the receipt.

    Rows are searched top to bottom first; the raw OCR text is only used
    when no row carries a date (e.g. when clustering split the date apart).
    """
    for line in lines:
        found = _match_date(line.text)
        if found:
            return found
    return _match_date(full_text)


def _extract_summary_amounts(lines: list[ReceiptLine]) -> SummaryAmounts:
    """
    Capture total and tax from administrative rows.

    Each label takes the last price on its row, and a later row overrides
    an earlier one.
    """
    captured: dict[str, str | None] = {"total": None, "tax": None}
    for line in lines:
        if not line.text.strip() or not _is_administrative_line(line.text):
            continue
        for label, field_name in SUMMARY_LABELS:
            if not label.search(line.text):
                continue
            amount = _last_price_like_value(line.text)
            if amount is not None:
                captured[field_name] = amount
    return SummaryAmounts(total=captured["total"], tax=captured["tax"])


def _resolve_total(
    summary_total: str | None,
    lines: list[ReceiptLine],
    candidate_prices: list[str],
) -> str | None:
    """
    Settle the receipt total.

    Strategy order:
    1. Total captured from an administrative row
    2. Bottom-most row labelled TOTAL/TEND that carries a price
    3. Largest price seen anywhere on the receipt (last resort; a discount
       can make an item cost more than the real total)
    """
    if summary_total is not None:
        return summary_total

    for line in reversed(lines):
        if TOTAL_LABEL.search(line.text):
            amount = _last_price_like_value(line.text)
            if amount is not None:
                return amount

    if candidate_prices:
        return f"{max(Decimal(price) for price in candidate_prices):.2f}"
    return None


def _extract_store_name(full_text: str) -> str:
    """Use the first non-blank line of the raw OCR text as the store name."""
    for line in re.split(r"\r?\n", full_text or ""):
        stripped = line.strip()
        if stripped:
            return stripped
    return UNKNOWN_STORE_NAME
