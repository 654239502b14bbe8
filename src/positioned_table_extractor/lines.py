from __future__ import annotations
from typing import List, Optional, Sequence

from .config import DEFAULT_CONFIG, ExtractionConfig, PageStats
from .rows import group_rows
from .structures import DocLine, PositionedItem

def build_document_lines(items: Sequence[PositionedItem],
                         stats: Optional[PageStats] = None,
                         config: ExtractionConfig = DEFAULT_CONFIG,
                         ) -> List[DocLine]:
    """Group the whole (filtered) item set into reading-order lines."""
    rows = group_rows(items, stats, config)
    return [DocLine(y=min(it.y for it in row), items=row) for row in rows]

def _space_run(gap: float, unit: float, limit: int) -> str:
    if unit <= 0:
        return " "
    # redondeo hacia arriba en .5
    return " " * min(limit, max(1, int(gap / unit + 0.5)))

def lines_to_plain_text(lines: Sequence[DocLine],
                        stats: Optional[PageStats] = None,
                        config: ExtractionConfig = DEFAULT_CONFIG,
                        ) -> str:
    """Serialize lines to monospace text.

    A blank line separates paragraphs: the vertical step from the previous
    line exceeds ``paragraph_gap_ratio`` times the line's mean item height.
    Inter-word gaps become ``round(gap / (space_width_ratio * h))`` spaces,
    at least one and at most ``max_space_run``. Lines with no visible text
    are skipped.
    """
    fallback_h = stats.mean_height if stats else 0.0
    out: List[str] = []
    prev_y: Optional[float] = None

    for line in lines:
        h = line.mean_height or fallback_h
        unit = config.space_width_ratio * h
        parts: List[str] = []
        prev: Optional[PositionedItem] = None
        for it in line.items:
            text = it.text.strip()
            if not text:
                continue
            if prev is not None:
                parts.append(_space_run(it.x - prev.right, unit, config.max_space_run))
            parts.append(text)
            prev = it
        if not parts:
            prev_y = line.y
            continue

        if prev_y is not None and line.y - prev_y > config.paragraph_gap_ratio * h:
            out.append("")
        prev_y = line.y
        out.append("".join(parts))

    return "\n".join(out)
