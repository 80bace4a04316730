"""Format ParsedReceipt data for terminal review."""

import json
from decimal import Decimal

from receiptlens.domain.receipt import ParsedReceipt, ReceiptItem

MISSING_DATE_LABEL = "Not found"
MISSING_AMOUNT = "0.00"


def _format_items_aligned(items: tuple[ReceiptItem, ...], indent: str = "  ") -> list[str]:
    """
    Format item rows with left-aligned names and right-aligned prices.

    Args:
        items: Items to format
        indent: Indentation prefix for each row

    Returns:
        List of formatted item rows, numbered from 1
    """
    if not items:
        return []

    number_width = len(str(len(items)))
    max_name_len = max(len(item.name) for item in items)
    max_price_len = max(len(item.price) for item in items)

    rows = []
    for number, item in enumerate(items, 1):
        prefix = f"{number}.".rjust(number_width + 1)
        rows.append(f"{indent}{prefix} {item.name.ljust(max_name_len)}  ${item.price.rjust(max_price_len)}")
    return rows


def _unaccounted_amount(receipt: ParsedReceipt) -> Decimal | None:
    """Return total minus (items + tax) when the receipt does not add up."""
    if receipt.total is None:
        return None
    accounted = sum((Decimal(item.price) for item in receipt.items), Decimal("0"))
    if receipt.tax is not None:
        accounted += Decimal(receipt.tax)
    diff = Decimal(receipt.total) - accounted
    return diff if diff != 0 else None


def format_parsed_receipt(receipt: ParsedReceipt) -> str:
    """Render a receipt as a human-readable summary block."""
    lines = ["=" * 60, "PARSED RECEIPT", "=" * 60]
    lines.append(f"Store: {receipt.store_name}")
    lines.append(f"Date: {receipt.date or MISSING_DATE_LABEL}")
    lines.append(f"Tax: ${receipt.tax or MISSING_AMOUNT}")
    lines.append(f"Total: ${receipt.total or MISSING_AMOUNT}")
    lines.append("")
    lines.append(f"Items ({len(receipt.items)}):")
    if receipt.items:
        lines.extend(_format_items_aligned(receipt.items))
    else:
        lines.append("  No items found")

    diff = _unaccounted_amount(receipt)
    if diff is not None:
        lines.append("")
        lines.append(f"Warning: items + tax differ from total by {diff:.2f}")
    lines.append("=" * 60)
    return "\n".join(lines)


def format_parsed_receipt_json(receipt: ParsedReceipt) -> str:
    """Render a receipt as indented JSON using the storeName/items/tax/total keys."""
    return json.dumps(receipt.to_dict(), indent=2)
