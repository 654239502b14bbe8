"""End-to-end tests for single-page table reconstruction."""

from __future__ import annotations

import math

from conftest import grid_items, item, separator_rulings, vline
from positioned_table_extractor.grid_builder import build_table_data
from positioned_table_extractor.structures import PageRulings, TableData

EXPECTED = TableData(
    headers=["Name", "Qty", "Price"],
    rows=[["Apple", "3", "1.20"], ["Pear", "5", "0.80"]],
)


def test_rulings_and_histogram_agree(table_items):
    with_rulings = build_table_data(table_items, separator_rulings())
    without_rulings = build_table_data(table_items)
    assert with_rulings == EXPECTED
    assert without_rulings == EXPECTED


def test_every_row_matches_header_width(table_items):
    table = build_table_data(table_items + [item("extra", 300, 50)])
    assert all(len(r) == len(table.headers) for r in table.rows)


def test_empty_input():
    assert build_table_data([]) == TableData()


def test_border_rulings_without_horizontals(table_items):
    rulings = PageRulings(vertical=[vline(x, 0, 70) for x in (0, 100, 200, 300)])
    assert build_table_data(table_items, rulings) == EXPECTED


def test_useless_rulings_fall_back_to_histogram(table_items):
    rulings = PageRulings(vertical=[vline(300, 0, 70), vline(400, 0, 70)])
    assert build_table_data(table_items, rulings) == EXPECTED


def test_histogram_reattaches_non_table_text():
    items = grid_items() + [item("Quarterly Report", 10, -20, width=150),
                            item("Source: internal", 10, 80, width=150)]
    table = build_table_data(items)
    assert table.headers == ["Name", "Qty", "Price"]
    assert table.rows[-2:] == [["Quarterly Report", "", ""], ["Source: internal", "", ""]]

    assert build_table_data(items, tables_only=True) == EXPECTED


def test_ruled_table_reattaches_text_outside_box():
    items = grid_items() + [item("Footnote", 10, 200)]
    table = build_table_data(items, separator_rulings())
    assert table.rows[-1] == ["Footnote", "", ""]
    assert build_table_data(items, separator_rulings(), tables_only=True) == EXPECTED


def test_wrapped_cell_is_merged():
    items = grid_items(ys=(10.0, 30.0, 60.0)) + [item("(green)", 10, 42)]
    table = build_table_data(items)
    assert table.rows == [["Apple (green)", "3", "1.20"], ["Pear", "5", "0.80"]]


def test_single_column_text_page():
    items = [item("Notes", 10, 10), item("All figures audited", 10, 30, width=150)]
    table = build_table_data(items)
    assert table == TableData(headers=["Notes"], rows=[["All figures audited"]])


def test_numeric_first_row_gets_generic_headers():
    items = grid_items(cells=[("1", "2", "3"), ("4", "5", "6")], ys=(10.0, 30.0))
    table = build_table_data(items)
    assert table.headers == ["Col A", "Col B", "Col C"]
    assert len(table.rows) == 2


def test_far_outlier_does_not_blow_up_histogram():
    items = [item("a", 10, 10), item("b", 110, 10), item("c", 1e12, 10)]
    table = build_table_data(items)
    assert table == TableData(headers=["a", "b", "c"])


def test_non_finite_items_are_dropped():
    items = [item("a", 10, 10), item("b", 110, 10), item("c", math.inf, 10),
             item("d", 210, math.nan)]
    assert build_table_data(items) == TableData(headers=["a b"])


def test_non_finite_rulings_are_ignored(table_items):
    rulings = PageRulings(vertical=[vline(math.inf, 5, 65), vline(math.nan, 5, 65)])
    assert build_table_data(table_items, rulings) == EXPECTED
