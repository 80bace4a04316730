"""Composable OCR receipt parser components."""

from .common import _is_administrative_line
from .fields_parser import (
    SummaryAmounts,
    _extract_date,
    _extract_store_name,
    _extract_summary_amounts,
    _resolve_total,
)
from .items_parser import _extract_items

__all__ = [
    "SummaryAmounts",
    "_extract_date",
    "_extract_items",
    "_extract_store_name",
    "_extract_summary_amounts",
    "_is_administrative_line",
    "_resolve_total",
]
