"""Data models for receipt OCR parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OCRToken:
    """A single OCR text fragment with its axis-aligned pixel bounding box."""

    text: str
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0

    @property
    def cx(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def cy(self) -> float:
        return (self.min_y + self.max_y) / 2


@dataclass(frozen=True)
class ReceiptLine:
    """A visual row of tokens, read left-to-right."""

    tokens: tuple[OCRToken, ...]
    text: str
    # Mean of member token centers, accumulated while the row was clustered.
    avg_y: float


@dataclass(frozen=True)
class ReceiptItem:
    """A purchased line item. Price is a plain decimal string like "12.50"."""

    name: str
    price: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "price": self.price}


@dataclass(frozen=True)
class ParsedReceipt:
    """Parsed receipt data."""

    store_name: str
    date: str | None = None
    items: tuple[ReceiptItem, ...] = field(default_factory=tuple)
    tax: str | None = None
    total: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the receipt with the camelCase keys consumers store and display."""
        return {
            "storeName": self.store_name,
            "date": self.date,
            "items": [item.to_dict() for item in self.items],
            "tax": self.tax,
            "total": self.total,
        }
