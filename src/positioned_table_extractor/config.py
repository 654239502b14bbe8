"""Umbrales heurísticos del motor de reconstrucción."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .structures import PositionedItem


@dataclass(frozen=True)
class ExtractionConfig:
    """Constantes ajustables por clase de documento.

    Los valores ``*_ratio`` se multiplican por la altura media de los items de
    la página (ver :class:`PageStats`); el resto están en unidades de página.
    """

    # Filas: nueva fila cuando |y - y_ref| > row_threshold_ratio * altura media.
    row_threshold_ratio: float = 0.6
    # Agrupación de coordenadas de reglas.
    cluster_threshold: float = 3.0
    # Reglas más cortas que esta fracción de la extensión se descartan.
    ruling_length_ratio: float = 0.25
    # Holgura al decidir si un item cae dentro de la caja de la tabla reglada.
    ruling_box_tolerance: float = 3.0
    # Dispersión de x-inicio por debajo de ratio * altura media => una sola columna.
    single_column_spread_ratio: float = 3.0
    histogram_bin_ratio: float = 0.3
    min_histogram_bin: float = 2.0
    min_gap_ratio: float = 0.8
    max_column_boundaries: int = 30
    min_table_row_columns: int = 3
    # Documento
    paragraph_gap_ratio: float = 1.8
    space_width_ratio: float = 0.4
    # Tope de espacios entre dos palabras de una línea.
    max_space_run: int = 200
    # Compilación multipágina
    page_separator: str = "--- Page {page} ---"
    embedded_text_sample_pages: int = 3
    embedded_text_min_chars: int = 50

    def separator_for(self, page: int) -> str:
        return self.page_separator.format(page=page)


DEFAULT_CONFIG = ExtractionConfig()


@dataclass(frozen=True)
class PageStats:
    """Estadísticos calculados una vez por página y pasados a cada etapa."""

    mean_height: float

    @classmethod
    def from_items(cls, items: Sequence[PositionedItem]) -> "PageStats":
        if not items:
            return cls(mean_height=0.0)
        heights = np.asarray([it.height for it in items], dtype=float)
        return cls(mean_height=float(heights.mean()))

    def scaled(self, ratio: float) -> float:
        return ratio * self.mean_height
