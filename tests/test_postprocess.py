"""Tests for table finalization."""

from __future__ import annotations

import pytest

from conftest import item
from positioned_table_extractor.postprocess import (
    add_non_table_text,
    column_label,
    drop_empty_columns,
    finalize_table,
    is_number_like,
)
from positioned_table_extractor.structures import TableData


@pytest.mark.parametrize("text", ["246", "1,234.56", "(57,519)", "$ 101,606", "-", "12.5%"])
def test_number_like(text):
    assert is_number_like(text)


@pytest.mark.parametrize("text", ["", "Q2", "Revenue", "2023-01-01"])
def test_not_number_like(text):
    assert not is_number_like(text)


def test_column_labels():
    assert [column_label(i) for i in (0, 1, 25, 26, 27)] == [
        "Col A", "Col B", "Col Z", "Col AA", "Col AB",
    ]


def test_drop_empty_columns():
    table = drop_empty_columns(TableData(rows=[["Name", "", "Qty"], ["Apple", "", "3"]]))
    assert table.rows == [["Name", "Qty"], ["Apple", "3"]]


def test_drop_empty_columns_pads_ragged_rows():
    table = drop_empty_columns(TableData(rows=[["a", "b"], ["c"]]))
    assert table.rows == [["a", "b"], ["c", ""]]


def test_finalize_generic_headers_for_numeric_first_row():
    table = finalize_table(TableData(rows=[["1", "2"], ["3", "4"]]))
    assert table.headers == ["Col A", "Col B"]
    assert table.rows == [["1", "2"], ["3", "4"]]


def test_finalize_first_row_header():
    table = finalize_table(TableData(rows=[["Name", "", "Qty"], ["Apple", "", "3"]]))
    assert table == TableData(headers=["Name", "Qty"], rows=[["Apple", "3"]])


def test_finalize_is_idempotent():
    raw = TableData(rows=[
        ["", "Revenue", "", "Cost", ""],
        ["Item", "2023", "2024", "2023", "2024"],
        ["Widgets", "10", "12", "4", "5"],
        ["Gadgets", "", "7", "", "1"],
    ])
    once = finalize_table(raw)
    assert finalize_table(once) == once


def test_finalize_rows_match_header_width():
    table = finalize_table(TableData(rows=[["Name", "Qty", "Price"], ["Apple"]]))
    assert all(len(r) == len(table.headers) for r in table.rows)


def test_finalize_empty():
    assert finalize_table(TableData()) == TableData()


def test_add_non_table_text_appends_after_table():
    table = TableData(headers=["Name", "Qty"], rows=[["Apple", "3"]])
    before = [[item("Quarterly", 0, 0), item("Report", 50, 0)]]
    after = [[item("Source: internal", 0, 100)]]
    result = add_non_table_text(table, before, after)
    assert result.rows == [
        ["Apple", "3"],
        ["Quarterly Report", ""],
        ["Source: internal", ""],
    ]
