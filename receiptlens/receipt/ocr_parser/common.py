"""Shared constants and helpers for OCR receipt parsing."""

import re

# Keywords marking totals/tax/payment rows rather than purchased items
ADMINISTRATIVE_KEYWORDS = (
    "subtotal",
    "tax",
    "change",
    "tender",
    "visa",
    "mastercard",
    "account",
    "approval",
    "trans id",
    "validation",
    "no signature",
    "terminal",
    "items sold",
)

# Price-like substring, with optional thousands separators: "1,234.56"
PRICE_LIKE_PATTERN = re.compile(r"\d{1,3}(?:,\d{3})*\.\d{2}")
# A token that is nothing but a price: "$12.50", "1,020.00"
STRICT_PRICE_TOKEN = re.compile(r"^\$?\d{1,3}(?:,\d{3})*\.\d{2}$")
# Looser check used for tokens with price text glued to other characters
LOOSE_PRICE_TOKEN = re.compile(r"\d+\.\d{2}")

TOTAL_LABEL = re.compile(r"\btotal\b|\btend\b", re.IGNORECASE)
TAX_LABEL = re.compile(r"\btax\b", re.IGNORECASE)

# Backfilled names must not come from these rows
BACKFILL_EXCLUDED = re.compile(r"total|tend|change|tax", re.IGNORECASE)
# Final guard against administrative text leaking into item names
LEAKED_SUMMARY_NAME = re.compile(r"\b(?:total|tend|change|tax)\b", re.IGNORECASE)

HAS_LETTERS = re.compile(r"[A-Za-z]")

UNKNOWN_ITEM_NAME = "(unknown)"
UNKNOWN_STORE_NAME = "Unknown"


def _has_letters(text: str) -> bool:
    return bool(text) and HAS_LETTERS.search(text) is not None


def _is_administrative_line(text: str) -> bool:
    """Return True if the row describes payment/tax/total metadata."""
    lower = text.lower()
    return any(keyword in lower for keyword in ADMINISTRATIVE_KEYWORDS)


def _price_like_values(text: str) -> list[str]:
    """Return every price-like substring in text, thousands separators removed."""
    return [match.replace(",", "") for match in PRICE_LIKE_PATTERN.findall(text)]


def _last_price_like_value(text: str) -> str | None:
    """Return the last price-like substring on a line, or None."""
    values = _price_like_values(text)
    return values[-1] if values else None


def _clean_item_name(name: str) -> str:
    """Clean up an item name derived from OCR row text."""
    # Standalone SKU/UPC/phone-like digit runs
    name = re.sub(r"\b\d{5,}\b", "", name)
    name = re.sub(r"\b\d{12,}\b", "", name)
    # Single-letter register/cashier/tax codes like "MILK 2% H"
    name = re.sub(r"\s+[A-Z]\b", "", name)
    name = re.sub(r"^[\W_]+|[\W_]+$", "", name)
    name = re.sub(r"\s{2,}", " ", name)
    return name.strip()


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s{2,}", " ", text).strip()
