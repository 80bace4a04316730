"""Shared pytest fixtures for receiptlens tests."""

from __future__ import annotations

from typing import Any

import pytest
from ocr_builders import make_ocr_result


@pytest.fixture
def store_a_result() -> dict[str, Any]:
    """Small grocery receipt with item, subtotal, tax and total rows."""
    return make_ocr_result(
        "Store A\n",
        [
            ["Milk", "2.50"],
            ["Bread", "3.00"],
            ["SUBTOTAL", "5.50"],
            ["TAX", "0.44"],
            ["TOTAL", "5.94"],
        ],
    )
