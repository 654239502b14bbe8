from __future__ import annotations
from bisect import bisect_right
from typing import List, Sequence
from .structures import PositionedItem

def bucket_index(value: float, boundaries: Sequence[float]) -> int:
    """Index of the first boundary the value falls below; past the last one, the rightmost bucket."""
    return bisect_right(boundaries, value)

def assign_to_grid(rows: Sequence[Sequence[PositionedItem]],
                   boundaries: Sequence[float]
                   ) -> List[List[str]]:
    """Place every item of every row into its column bucket.

    Items sharing a bucket are joined with a single space, left to right.
    Each output row has exactly ``len(boundaries) + 1`` cells.
    """
    width = len(boundaries) + 1
    grid: List[List[str]] = []
    for row in rows:
        cells: List[List[str]] = [[] for _ in range(width)]
        for it in sorted(row, key=lambda z: z.x):
            text = it.text.strip()
            if text:
                cells[bucket_index(it.x, boundaries)].append(text)
        grid.append([" ".join(c) for c in cells])
    return grid
