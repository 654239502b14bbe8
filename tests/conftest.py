"""Shared builders for synthetic page content."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import pytest

from positioned_table_extractor.structures import PageLine, PageRulings, PositionedItem

ROW_Y = (10.0, 30.0, 50.0)
COL_X = (10.0, 110.0, 210.0)
GRID_TEXT = (
    ("Name", "Qty", "Price"),
    ("Apple", "3", "1.20"),
    ("Pear", "5", "0.80"),
)


def item(text: str, x: float, y: float, width: float = 40.0, height: float = 10.0,
         page: int = 1) -> PositionedItem:
    return PositionedItem(text=text, x=x, y=y, width=width, height=height, page=page)


def grid_items(cells: Sequence[Sequence[str]] = GRID_TEXT,
               xs: Sequence[float] = COL_X,
               ys: Sequence[float] = ROW_Y,
               page: int = 1) -> List[PositionedItem]:
    return [
        item(text, x, y, page=page)
        for row, y in zip(cells, ys)
        for text, x in zip(row, xs)
        if text
    ]


def hline(y: float, x1: float, x2: float) -> PageLine:
    return PageLine(x1=x1, y1=y, x2=x2, y2=y)


def vline(x: float, y1: float, y2: float) -> PageLine:
    return PageLine(x1=x, y1=y1, x2=x, y2=y2)


def separator_rulings() -> PageRulings:
    """Two full-height column separators and two full-width row separators."""
    return PageRulings(
        horizontal=[hline(25, 5, 255), hline(45, 5, 255)],
        vertical=[vline(60, 5, 65), vline(160, 5, 65)],
    )


@pytest.fixture
def make_item():
    return item


@pytest.fixture
def table_items() -> List[PositionedItem]:
    return grid_items()
