# src/positioned_table_extractor/grid_builder.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from .assign import assign_to_grid
from .columns import estimate_columns
from .config import DEFAULT_CONFIG, ExtractionConfig, PageStats
from .postprocess import add_non_table_text, finalize_table
from .rows import group_rows, merge_wrapped_rows, row_text
from .rulings import RuledTable, detect_ruled_table
from .spatial import drop_non_finite
from .structures import PageRulings, PositionedItem, TableData

log = logging.getLogger(__name__)

def _from_rulings(ruled: RuledTable,
                  stats: PageStats,
                  tables_only: bool,
                  config: ExtractionConfig) -> TableData:
    table = finalize_table(TableData(rows=merge_wrapped_rows(ruled.grid)))
    if tables_only or not ruled.outside:
        return table
    above = [it for it in ruled.outside if it.yc < ruled.top]
    rest = [it for it in ruled.outside if it.yc >= ruled.top]
    return add_non_table_text(table,
                              group_rows(above, stats, config),
                              group_rows(rest, stats, config))

def _from_histogram(items: Sequence[PositionedItem],
                    stats: PageStats,
                    tables_only: bool,
                    config: ExtractionConfig) -> TableData:
    layout = estimate_columns(items, stats, config)
    if not layout.is_table:
        grid: List[List[str]] = [[row_text(r)] for r in layout.rows]
        return finalize_table(TableData(rows=[g for g in grid if g[0]]))

    start, stop = layout.body
    grid = assign_to_grid(layout.rows[start:stop], layout.boundaries)
    table = finalize_table(TableData(rows=merge_wrapped_rows(grid)))
    if tables_only:
        return table
    return add_non_table_text(table, layout.rows[:start], layout.rows[stop:])

def build_table_data(items: Sequence[PositionedItem],
                     lines: Optional[PageRulings] = None,
                     tables_only: bool = False,
                     *,
                     config: Optional[ExtractionConfig] = None,
                     ) -> TableData:
    """
    Reconstruye la tabla de una página a partir de items posicionados.

    Intenta primero las reglas (si hay al menos dos en alguna orientación) y
    acepta su resultado solo si tiene más de una columna; en otro caso usa el
    histograma de posiciones. ``tables_only`` omite el texto fuera de tabla.
    """
    config = config or DEFAULT_CONFIG
    items = drop_non_finite(items)
    if not items:
        log.warning("Sin items: tabla vacía.")
        return TableData()

    stats = PageStats.from_items(items)
    if lines:
        lines = PageRulings(horizontal=[ln for ln in lines.horizontal if ln.is_finite],
                            vertical=[ln for ln in lines.vertical if ln.is_finite])

    if lines and (len(lines.horizontal) >= 2 or len(lines.vertical) >= 2):
        ruled = detect_ruled_table(items, lines, stats, config)
        if ruled is not None:
            table = _from_rulings(ruled, stats, tables_only, config)
            if table.column_count > 1:
                log.info("Tabla por reglas: %d columnas, %d filas.",
                         table.column_count, len(table.rows))
                return table
            log.info("Las reglas dieron una sola columna; se usa el histograma.")
        else:
            log.info("Reglas insuficientes; se usa el histograma.")

    table = _from_histogram(items, stats, tables_only, config)
    log.info("Tabla por histograma: %d columnas, %d filas.", table.column_count, len(table.rows))
    return table
