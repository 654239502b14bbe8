from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .assign import bucket_index
from .config import DEFAULT_CONFIG, ExtractionConfig, PageStats
from .rows import group_rows
from .structures import PositionedItem

log = logging.getLogger(__name__)

@dataclass
class ColumnLayout:
    """Resultado de la detección por histograma.

    ``body`` es el intervalo [inicio, fin) de filas que forman la tabla; None
    cuando la página es texto de una sola columna.
    """
    rows: List[List[PositionedItem]]
    boundaries: List[float] = field(default_factory=list)
    body: Optional[Tuple[int, int]] = None

    @property
    def is_table(self) -> bool:
        return bool(self.boundaries) and self.body is not None

def find_gap_boundaries(xs: Sequence[float],
                        stats: PageStats,
                        config: ExtractionConfig = DEFAULT_CONFIG,
                        ) -> List[float]:
    """Busca separadores de columna en los huecos del histograma de x-inicio.

    Cada racha de bins vacíos de al menos ``ceil(min_gap_ratio * h / bin)``
    bins aporta su punto medio como frontera.
    """
    arr = np.asarray(xs, dtype=float)
    arr = arr[np.isfinite(arr)]
    if len(arr) == 0:
        return []

    bin_width = max(stats.scaled(config.histogram_bin_ratio), config.min_histogram_bin)
    min_run = max(1, math.ceil(stats.scaled(config.min_gap_ratio) / bin_width))

    x_min = float(arr.min())
    idx = np.floor((arr - x_min) / bin_width).astype(np.int64)
    # solo bins ocupados: el perfil denso no cabe en memoria con un outlier lejano
    occupied = np.unique(idx)
    if len(occupied) < 2:
        return []

    boundaries: List[float] = []
    for lo, hi in zip(occupied[:-1], occupied[1:]):
        if hi - lo - 1 >= min_run:
            left = x_min + (lo + 1) * bin_width
            right = x_min + hi * bin_width
            boundaries.append(float((left + right) / 2.0))
    return boundaries

def estimate_columns(items: Sequence[PositionedItem],
                     stats: Optional[PageStats] = None,
                     config: ExtractionConfig = DEFAULT_CONFIG,
                     ) -> ColumnLayout:
    """Estrategia de respaldo: columnas a partir de la densidad horizontal.

    Una fila es "de tabla" si sus items tocan al menos
    ``min_table_row_columns`` columnas distintas; el cuerpo va de la primera
    a la última fila de tabla y lo demás queda como texto fuera de tabla.
    """
    stats = stats or PageStats.from_items(items)
    rows = group_rows(items, stats, config)
    if not rows:
        return ColumnLayout(rows=[])

    xs = [it.x for it in items]
    spread = max(xs) - min(xs)
    if spread < stats.scaled(config.single_column_spread_ratio):
        log.debug("Dispersión en X (%.1f) demasiado pequeña: texto de una columna.", spread)
        return ColumnLayout(rows=rows)

    boundaries = find_gap_boundaries(xs, stats, config)
    if not boundaries:
        log.debug("No se encontraron huecos de columna.")
        return ColumnLayout(rows=rows)
    if len(boundaries) > config.max_column_boundaries:
        log.warning("Se descartan %d fronteras de columna (máximo %d): una sola columna.",
                    len(boundaries), config.max_column_boundaries)
        return ColumnLayout(rows=rows)

    table_rows = [
        i for i, row in enumerate(rows)
        if len({bucket_index(it.x, boundaries) for it in row}) >= config.min_table_row_columns
    ]
    if not table_rows:
        log.info("Ninguna fila toca %d columnas: no hay tabla.", config.min_table_row_columns)
        return ColumnLayout(rows=rows)

    body = (table_rows[0], table_rows[-1] + 1)
    log.info("Histograma: %d fronteras, cuerpo de tabla en filas [%d, %d).",
             len(boundaries), body[0], body[1])
    return ColumnLayout(rows=rows, boundaries=boundaries, body=body)
