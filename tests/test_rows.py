"""Tests for row grouping, continuation merging and header detection."""

from __future__ import annotations

from positioned_table_extractor.postprocess import is_number_like
from positioned_table_extractor.rows import (
    detect_header_row,
    group_rows,
    merge_wrapped_rows,
    row_text,
)


def test_group_rows_splits_on_vertical_distance(make_item):
    items = [
        make_item("b", 60, 12),
        make_item("a", 10, 10),
        make_item("c", 10, 30),
    ]
    rows = group_rows(items)
    assert [[it.text for it in r] for r in rows] == [["a", "b"], ["c"]]


def test_group_rows_uses_first_item_as_reference(make_item):
    """y=14 joins the row started at y=10, y=18 does not (threshold 6)."""
    items = [make_item("a", 10, 10), make_item("b", 60, 14), make_item("c", 110, 18)]
    rows = group_rows(items)
    assert [len(r) for r in rows] == [2, 1]


def test_group_rows_invariants(table_items):
    rows = group_rows(table_items)
    assert len(rows) <= len(table_items)
    for row in rows:
        xs = [it.x for it in row]
        assert xs == sorted(xs)


def test_group_rows_empty():
    assert group_rows([]) == []


def test_row_text_skips_blank_fragments(make_item):
    row = [make_item("Net", 0, 0), make_item("  ", 30, 0), make_item("income", 50, 0)]
    assert row_text(row) == "Net income"


def test_merge_wrapped_thousands():
    merged = merge_wrapped_rows([["Revenue", "100"], ["", "000"]])
    assert merged == [["Revenue", "100 000"]]


def test_merge_wrapped_label_over_several_rows():
    rows = [
        ["Q2", "10", "20"],
        ["2024", "", ""],
        ["(restated)", "", ""],
        ["Q3", "11", "21"],
    ]
    assert merge_wrapped_rows(rows) == [
        ["Q2 2024 (restated)", "10", "20"],
        ["Q3", "11", "21"],
    ]


def test_merge_wrapped_keeps_full_rows():
    rows = [["A", "1", "2"], ["B", "3", "4"]]
    assert merge_wrapped_rows(rows) == rows


def test_merge_wrapped_requires_filled_base_cell():
    rows = [["A", "", "2"], ["", "5", ""]]
    assert merge_wrapped_rows(rows) == rows


def test_merge_wrapped_ignores_empty_rows():
    rows = [["A", "1"], ["", ""]]
    assert merge_wrapped_rows(rows) == rows


def test_detect_header_numeric_first_row():
    header, body = detect_header_row([["1", "2"], ["3", ""]], is_number_like)
    assert header is None
    assert body == [["1", "2"], ["3", ""]]


def test_detect_header_compound_subheader():
    rows = [
        ["", "Revenue", "", "Cost", ""],
        ["Item", "2023", "2024", "2023", "2024"],
        ["Widgets", "10", "12", "4", "5"],
    ]
    header, body = detect_header_row(rows, is_number_like)
    assert header == ["Item", "Revenue 2023", "Revenue 2024", "Cost 2023", "Cost 2024"]
    assert body == [["Widgets", "10", "12", "4", "5"]]


def test_detect_header_plain_first_row():
    header, body = detect_header_row([["Name", "Qty"], ["Apple", "3"]], is_number_like)
    assert header == ["Name", "Qty"]
    assert body == [["Apple", "3"]]


def test_merge_wrapped_keeps_half_empty_wide_row():
    rows = [["Name", "Qty", "Price", "Note"], ["Apple", "", "", "ripe"]]
    assert merge_wrapped_rows(rows) == rows


def test_merge_wrapped_wide_row_with_majority_empty():
    rows = [["Name", "Qty", "Price", "Note"], ["", "", "", "(ripe)"]]
    assert merge_wrapped_rows(rows) == [["Name", "Qty", "Price", "Note (ripe)"]]
