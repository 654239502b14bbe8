"""Detección de tablas a partir de reglas (líneas dibujadas en la página)."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .assign import assign_to_grid, bucket_index
from .clustering import cluster_values
from .config import DEFAULT_CONFIG, ExtractionConfig, PageStats
from .rows import group_rows
from .structures import PageLine, PageRulings, PositionedItem

log = logging.getLogger(__name__)


@dataclass
class RuledTable:
    """Tabla encontrada por reglas: rejilla cruda y la caja que ocupa."""
    grid: List[List[str]]
    column_boundaries: List[float]
    box: Tuple[float, float, float, float]
    inside: List[PositionedItem] = field(default_factory=list)
    outside: List[PositionedItem] = field(default_factory=list)

    @property
    def top(self) -> float:
        return self.box[1]

    @property
    def bottom(self) -> float:
        return self.box[3]


def _vertical_extent(rulings: PageRulings) -> Tuple[float, float]:
    source = rulings.horizontal or rulings.vertical
    ys = [y for ln in source for y in (ln.y1, ln.y2)]
    return min(ys), max(ys)


def _overlaps(line: PageLine, left: float, right: float) -> bool:
    return min(line.x1, line.x2) < right and max(line.x1, line.x2) > left


def _inside(it: PositionedItem, box: Tuple[float, float, float, float], tol: float) -> bool:
    x1, y1, x2, y2 = box
    return (it.x >= x1 - tol and it.y >= y1 - tol
            and it.right <= x2 + tol and it.bottom <= y2 + tol)


def _bucket_by_rows(items: Sequence[PositionedItem],
                    row_bounds: Sequence[float]
                    ) -> List[List[PositionedItem]]:
    buckets: List[List[PositionedItem]] = [[] for _ in range(len(row_bounds) + 1)]
    for it in items:
        buckets[bucket_index(it.yc, row_bounds)].append(it)
    # las bandas sin texto (bordes exteriores) no son filas
    return [sorted(b, key=lambda z: z.x) for b in buckets if b]


def detect_ruled_table(items: Sequence[PositionedItem],
                       rulings: PageRulings,
                       stats: Optional[PageStats] = None,
                       config: ExtractionConfig = DEFAULT_CONFIG,
                       ) -> Optional[RuledTable]:
    """
    Reconstruye la tabla usando las reglas verticales como separadores de
    columna y, si hay al menos dos útiles, las horizontales como separadores
    de fila. Devuelve None cuando no hay al menos dos fronteras de columna:
    quien llama pasa entonces al método por histograma.
    """
    if len(rulings.vertical) < 2:
        return None

    stats = stats or PageStats.from_items(items)
    top, bottom = _vertical_extent(rulings)
    min_len = config.ruling_length_ratio * (bottom - top)

    verticals = [ln for ln in rulings.vertical if ln.height >= min_len]
    boundaries = cluster_values([ln.x_mid for ln in verticals], config.cluster_threshold)
    if len(boundaries) < 2:
        log.debug("Solo %d fronteras verticales útiles; se descarta el método por reglas.",
                  len(boundaries))
        return None

    left, right = boundaries[0], boundaries[-1]
    min_width = config.ruling_length_ratio * (right - left)
    horizontals = [ln for ln in rulings.horizontal
                   if ln.width >= min_width and _overlaps(ln, left, right)]

    # la caja abarca las reglas que la delimitan, tanto verticales como horizontales
    box = (
        min([left] + [min(ln.x1, ln.x2) for ln in horizontals]),
        min([top] + [min(ln.y1, ln.y2) for ln in verticals]),
        max([right] + [max(ln.x1, ln.x2) for ln in horizontals]),
        max([bottom] + [max(ln.y1, ln.y2) for ln in verticals]),
    )
    tol = config.ruling_box_tolerance
    inside = [it for it in items if _inside(it, box, tol)]
    outside = [it for it in items if not _inside(it, box, tol)]

    if len(horizontals) >= 2:
        row_bounds = cluster_values([ln.y_mid for ln in horizontals], config.cluster_threshold)
        rows = _bucket_by_rows(inside, row_bounds)
        log.debug("Reglas: %d columnas x %d bandas de fila.", len(boundaries) + 1, len(row_bounds) + 1)
    else:
        rows = group_rows(inside, stats, config)
        log.debug("Reglas: %d columnas, filas por proximidad vertical.", len(boundaries) + 1)

    return RuledTable(
        grid=assign_to_grid(rows, boundaries),
        column_boundaries=boundaries,
        box=box,
        inside=inside,
        outside=outside,
    )
