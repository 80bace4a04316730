"""Row-based receipt item extraction.

Items are resolved in three passes over the built rows:
1. Extraction: the rightmost price on each item row, plus a name taken from
   the tokens left of it (or from a nearby row when the row has no words)
2. Backfill: items still without a name borrow the nearest usable row above
3. Filtering: drop items whose name turned out to be summary text
"""

from dataclasses import dataclass, field

from receiptlens.domain.receipt import OCRToken, ReceiptItem, ReceiptLine
from receiptlens.runtime import get_logger

from .common import (
    BACKFILL_EXCLUDED,
    LEAKED_SUMMARY_NAME,
    LOOSE_PRICE_TOKEN,
    PRICE_LIKE_PATTERN,
    STRICT_PRICE_TOKEN,
    UNKNOWN_ITEM_NAME,
    _clean_item_name,
    _collapse_whitespace,
    _has_letters,
    _is_administrative_line,
    _price_like_values,
)

logger = get_logger(__name__)

NAME_REPAIR_LOOKBACK = 2  # Rows searched above a wordless price row during extraction
BACKFILL_LOOKBACK = 3  # Rows searched above a nameless item during backfill


@dataclass
class ItemCandidate:
    """An item whose name may still be pending."""

    line_index: int
    price: str
    name: str | None = None


@dataclass
class ItemExtraction:
    """Result of the extraction pass."""

    candidates: list[ItemCandidate] = field(default_factory=list)
    # Every price seen on item rows; the total falls back to the largest one
    candidate_prices: list[str] = field(default_factory=list)


def _token_price(token: OCRToken) -> str | None:
    """Return the price carried by a token, or None if it is not price-like."""
    text = token.text
    if not (STRICT_PRICE_TOKEN.match(text) or LOOSE_PRICE_TOKEN.search(text)):
        return None
    match = PRICE_LIKE_PATTERN.search(text)
    if match is None:
        return None
    return match.group(0).replace(",", "")


def _find_rightmost_price(line: ReceiptLine) -> tuple[OCRToken, str] | None:
    """Pick the rightmost price token; quantities and unit prices sit left of it."""
    priced: list[tuple[OCRToken, str]] = []
    for token in line.tokens:
        price = _token_price(token)
        if price is not None:
            priced.append((token, price))
    if not priced:
        return None
    priced.sort(key=lambda pair: pair[0].min_x)
    return priced[-1]


def _nearby_name_line(lines: list[ReceiptLine], index: int) -> str | None:
    """Return the nearest row above with words that is not a summary/payment row."""
    for back in range(1, NAME_REPAIR_LOOKBACK + 1):
        if index - back < 0:
            break
        previous = lines[index - back]
        if _has_letters(previous.text) and not _is_administrative_line(previous.text):
            return previous.text
    return None


def _extract_item_candidates(lines: list[ReceiptLine]) -> ItemExtraction:
    """
    Extract priced item candidates from non-administrative rows.

    Args:
        lines: Built rows, top to bottom

    Returns:
        ItemExtraction with candidates in row order and the price pool
    """
    extraction = ItemExtraction()

    for index, line in enumerate(lines):
        if not line.text.strip() or _is_administrative_line(line.text):
            continue

        rightmost = _find_rightmost_price(line)
        if rightmost is None:
            extraction.candidate_prices.extend(_price_like_values(line.text))
            continue

        price_token, price = rightmost
        extraction.candidate_prices.append(price)

        name_tokens = [token for token in line.tokens if token.max_x < price_token.min_x - 1]
        name = " ".join(token.text for token in name_tokens).strip()
        if not _has_letters(name):
            name = _nearby_name_line(lines, index) or name

        name = _clean_item_name(name)
        candidate = ItemCandidate(line_index=index, price=price, name=name if _has_letters(name) else None)
        logger.debug("Row %d: price %s, name %r", index, price, candidate.name)
        extraction.candidates.append(candidate)

    return extraction


def _backfill_name(lines: list[ReceiptLine], line_index: int) -> str | None:
    for back in range(1, BACKFILL_LOOKBACK + 1):
        index = line_index - back
        if index < 0:
            break
        text = lines[index].text
        if _has_letters(text) and not BACKFILL_EXCLUDED.search(text):
            return text.strip()
    return None


def _backfill_item_names(candidates: list[ItemCandidate], lines: list[ReceiptLine]) -> None:
    """Name pending candidates from the closest usable row above their price row."""
    for candidate in candidates:
        if candidate.name is not None:
            continue
        candidate.name = _backfill_name(lines, candidate.line_index) or UNKNOWN_ITEM_NAME
        logger.debug("Backfilled row %d name: %r", candidate.line_index, candidate.name)


def _filter_items(candidates: list[ItemCandidate]) -> list[ReceiptItem]:
    """Drop summary-text leaks and finalize the surviving candidates."""
    items: list[ReceiptItem] = []
    for candidate in candidates:
        name = candidate.name or UNKNOWN_ITEM_NAME
        if LEAKED_SUMMARY_NAME.search(name):
            logger.debug("Dropping summary-like item %r (%s)", name, candidate.price)
            continue
        if not candidate.price:
            continue
        items.append(ReceiptItem(name=_collapse_whitespace(name) or UNKNOWN_ITEM_NAME, price=candidate.price))
    return items


def _extract_items(lines: list[ReceiptLine]) -> tuple[list[ReceiptItem], list[str]]:
    """
    Extract receipt items from built rows.

    Returns:
        Tuple of (items, candidate_prices)
    """
    extraction = _extract_item_candidates(lines)
    _backfill_item_names(extraction.candidates, lines)
    return _filter_items(extraction.candidates), extraction.candidate_prices
