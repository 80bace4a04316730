"""Public smoke tests for basic module wiring.

Keep these minimal and free of any real-world data.
"""

from __future__ import annotations


def test_imports() -> None:
    import receiptlens
    import receiptlens.cli.main
    import receiptlens.receipt
    import receiptlens.runtime
    import receiptlens.runtime.receipt_pipeline

    assert receiptlens is not None
    assert receiptlens.cli.main is not None
    assert receiptlens.receipt.parse_receipt is not None
    assert receiptlens.runtime is not None
    assert receiptlens.runtime.receipt_pipeline is not None
