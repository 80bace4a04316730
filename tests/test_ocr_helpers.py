"""Tests for OCR token normalization and row grouping."""

from ocr_builders import make_annotation
from receiptlens.domain.receipt import OCRToken
from receiptlens.receipt.ocr_helpers import (
    LINE_Y_TOLERANCE,
    ClusteredLine,
    build_lines,
    cluster_tokens,
    group_tokens_into_lines,
    token_from_annotation,
)


def _token(text: str, min_x: float, cy: float, width: float = 20, height: float = 20) -> OCRToken:
    return OCRToken(text=text, min_x=min_x, max_x=min_x + width, min_y=cy - height / 2, max_y=cy + height / 2)


def test_token_from_annotation_uses_vertex_extrema() -> None:
    annotation = {
        "description": "Milk",
        "boundingPoly": {"vertices": [{"x": 12, "y": 40}, {"x": 58, "y": 38}, {"x": 60, "y": 61}, {"x": 10, "y": 63}]},
    }

    token = token_from_annotation(annotation)

    assert token == OCRToken(text="Milk", min_x=10, max_x=60, min_y=38, max_y=63)
    assert token.cx == 35
    assert token.cy == 50.5


def test_token_from_annotation_treats_missing_coordinates_as_zero() -> None:
    annotation = {"description": "A", "boundingPoly": {"vertices": [{"x": 30}, {"y": 20}, {"x": 50, "y": 40}]}}

    token = token_from_annotation(annotation)

    assert (token.min_x, token.max_x, token.min_y, token.max_y) == (0, 50, 0, 40)


def test_token_from_annotation_without_geometry_is_zero_extent() -> None:
    assert token_from_annotation({"description": "x", "boundingPoly": {"vertices": []}}) == OCRToken(text="x")
    assert token_from_annotation({"description": "y"}) == OCRToken(text="y")
    assert token_from_annotation({}).text == ""


def test_tokens_within_tolerance_merge_into_one_line() -> None:
    lines = cluster_tokens([_token("a", 0, 100), _token("b", 50, 100 + LINE_Y_TOLERANCE)])

    assert len(lines) == 1


def test_tokens_beyond_tolerance_open_a_new_line() -> None:
    lines = cluster_tokens([_token("a", 0, 100), _token("b", 50, 100 + LINE_Y_TOLERANCE + 1)])

    assert len(lines) == 2


def test_line_center_drifts_with_running_mean() -> None:
    # 115 is 15px from the first token but only 10px from the mean (105).
    tokens = [_token("a", 0, 100), _token("b", 50, 110), _token("c", 100, 115)]

    lines = cluster_tokens(tokens)

    assert len(lines) == 1
    assert abs(lines[0].avg_y - (100 + 110 + 115) / 3) < 1e-9


def test_closed_line_is_never_reopened() -> None:
    tokens = [_token("a", 0, 100), _token("b", 0, 130), _token("c", 50, 131)]

    lines = cluster_tokens(tokens)

    assert [[t.text for t in line.tokens] for line in lines] == [["a"], ["b", "c"]]


def test_lines_are_emitted_top_to_bottom_regardless_of_input_order() -> None:
    tokens = [_token("bottom", 0, 300), _token("top", 0, 100), _token("middle", 0, 200)]

    lines = group_tokens_into_lines(tokens)

    assert [line.text for line in lines] == ["top", "middle", "bottom"]
    assert [line.avg_y for line in lines] == sorted(line.avg_y for line in lines)


def test_build_lines_orders_tokens_by_left_edge() -> None:
    # Slightly higher token on the right sorts first for clustering but last in the row.
    clustered = cluster_tokens([_token("4.99", 300, 98), _token("Eggs", 10, 103)])

    built = build_lines(clustered)

    assert built[0].text == "Eggs 4.99"
    assert [t.text for t in built[0].tokens] == ["Eggs", "4.99"]


def test_no_tokens_means_no_lines() -> None:
    assert group_tokens_into_lines([]) == []


def test_annotation_builder_round_trips_through_normalizer() -> None:
    token = token_from_annotation(make_annotation("Bread", 10, 100, 60, 120))

    assert (token.cx, token.cy) == (35, 110)


def test_cluster_tokens_returns_clustered_lines() -> None:
    lines = cluster_tokens([_token("a", 0, 100), _token("b", 50, 104)])

    assert len(lines) == 1
    assert isinstance(lines[0], ClusteredLine)
    assert [t.text for t in lines[0].tokens] == ["a", "b"]
    assert lines[0].avg_y == 102
