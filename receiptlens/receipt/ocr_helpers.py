"""Pure OCR transformation helpers for receipt parsing.

Turns Vision-style text annotations into tokens, groups tokens into visual
rows and materializes row text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from receiptlens.domain.receipt import OCRToken, ReceiptLine

LINE_Y_TOLERANCE = 10  # Max pixel distance between a token center and its row's mean center


def token_from_annotation(annotation: dict[str, Any]) -> OCRToken:
    """
    Convert one OCR annotation into an axis-aligned token.

    Vertices may be missing entirely or lack x/y keys; absent coordinates
    count as 0, and an empty vertex list gives a zero-extent box.
    """
    bounding_poly = annotation.get("boundingPoly") or {}
    vertices = bounding_poly.get("vertices") or []
    text = annotation.get("description") or ""
    if not vertices:
        return OCRToken(text=text)

    xs = [vertex.get("x") or 0 for vertex in vertices]
    ys = [vertex.get("y") or 0 for vertex in vertices]
    return OCRToken(
        text=text,
        min_x=min(xs),
        max_x=max(xs),
        min_y=min(ys),
        max_y=max(ys),
    )


def tokens_from_annotations(annotations: list[dict[str, Any]]) -> list[OCRToken]:
    """Build tokens from per-word annotations (the full-text entry already removed)."""
    return [token_from_annotation(annotation) for annotation in annotations]


@dataclass
class ClusteredLine:
    """Row being accumulated by the clusterizer."""

    tokens: list[OCRToken] = field(default_factory=list)
    avg_y: float = 0.0

    def add(self, token: OCRToken) -> None:
        self.tokens.append(token)
        self.avg_y += (token.cy - self.avg_y) / len(self.tokens)


def cluster_tokens(tokens: list[OCRToken], y_tolerance: float = LINE_Y_TOLERANCE) -> list[ClusteredLine]:
    """
    Group tokens into rows by vertical proximity.

    Tokens are scanned in (cy, cx) order. A token joins the open row when its
    center is within `y_tolerance` of the row's running mean center; otherwise
    the row closes for good and a new one starts.
    """
    lines: list[ClusteredLine] = []
    for token in sorted(tokens, key=lambda t: (t.cy, t.cx)):
        current = lines[-1] if lines else None
        if current is None or abs(token.cy - current.avg_y) > y_tolerance:
            current = ClusteredLine()
            lines.append(current)
        current.add(token)
    return lines


def build_lines(clustered: list[ClusteredLine]) -> list[ReceiptLine]:
    """Order each row's tokens left-to-right and join their text."""
    built: list[ReceiptLine] = []
    for line in clustered:
        ordered = tuple(sorted(line.tokens, key=lambda t: t.min_x))
        built.append(
            ReceiptLine(
                tokens=ordered,
                text=" ".join(token.text for token in ordered),
                avg_y=line.avg_y,
            )
        )
    return built


def group_tokens_into_lines(tokens: list[OCRToken]) -> list[ReceiptLine]:
    """Cluster tokens into rows and build the row text, top to bottom."""
    return build_lines(cluster_tokens(tokens))
