from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .config import DEFAULT_CONFIG, ExtractionConfig, PageStats
from .grid_builder import build_table_data
from .lines import build_document_lines, lines_to_plain_text
from .postprocess import column_label
from .spatial import drop_non_finite, filter_items_by_regions
from .structures import CropRegion, PageRulings, PositionedItem, TableData

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

PAGE_RANGE_RE = re.compile(r"^[\d,\-\s]+$")


@dataclass
class PageInput:
    """Items (y reglas opcionales) ya extraídos de una página."""

    page: int
    items: List[PositionedItem] = field(default_factory=list)
    rulings: Optional[PageRulings] = None


def extract_page_table(
    items: Sequence[PositionedItem],
    rulings: Optional[PageRulings] = None,
    *,
    regions: Optional[Sequence[CropRegion]] = None,
    tables_only: bool = False,
    config: Optional[ExtractionConfig] = None,
) -> TableData:
    config = config or DEFAULT_CONFIG
    filtered = filter_items_by_regions(items, regions)
    return build_table_data(filtered, rulings, tables_only, config=config)


def extract_page_text(
    items: Sequence[PositionedItem],
    *,
    regions: Optional[Sequence[CropRegion]] = None,
    config: Optional[ExtractionConfig] = None,
) -> str:
    config = config or DEFAULT_CONFIG
    filtered = filter_items_by_regions(drop_non_finite(items), regions)
    if not filtered:
        return ""
    stats = PageStats.from_items(filtered)
    lines = build_document_lines(filtered, stats, config)
    return lines_to_plain_text(lines, stats, config)


def _run_pages(func, pages: List[PageInput], max_workers: Optional[int],
               progress_callback: Optional[ProgressCallback]) -> list:
    """Procesa páginas independientes; el resultado conserva el orden de entrada."""
    total = len(pages)
    results = []
    if max_workers and max_workers > 1 and total > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            for i, result in enumerate(pool.map(func, pages), start=1):
                results.append(result)
                if progress_callback:
                    progress_callback(i, total)
        return results

    for i, page in enumerate(pages, start=1):
        results.append(func(page))
        if progress_callback:
            progress_callback(i, total)
    return results


def compile_tables(
    pages: Sequence[PageInput],
    *,
    regions: Optional[Sequence[CropRegion]] = None,
    tables_only: bool = False,
    config: Optional[ExtractionConfig] = None,
    max_workers: Optional[int] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> TableData:
    """
    Extrae una tabla por página y las apila de arriba a abajo por número de
    página ascendente.

    Las tablas más estrechas se rellenan hasta el ancho de la más ancha. La
    primera página con contenido aporta la cabecera; cada página posterior
    va precedida de una fila separadora y, si difiere, de su propia cabecera.
    """
    config = config or DEFAULT_CONFIG
    ordered = sorted(pages, key=lambda p: p.page)

    def _one(page: PageInput) -> TableData:
        return extract_page_table(page.items, page.rulings, regions=regions,
                                  tables_only=tables_only, config=config)

    tables = _run_pages(_one, ordered, max_workers, progress_callback)
    non_empty = [(p.page, t) for p, t in zip(ordered, tables) if not t.is_empty()]
    if not non_empty:
        log.warning("Ninguna página produjo tabla.")
        return TableData()

    width = max(t.column_count for _, t in non_empty)

    def _pad(row: Sequence[str]) -> List[str]:
        return (list(row) + [""] * width)[:width]

    first_headers = list(non_empty[0][1].headers)
    headers = _pad(first_headers)
    for j in range(len(first_headers), width):
        headers[j] = column_label(j)
    rows: List[List[str]] = []
    for idx, (page_no, table) in enumerate(non_empty):
        if idx > 0:
            rows.append(_pad([config.separator_for(page_no)]))
            if _pad(table.headers) != _pad(first_headers):
                rows.append(_pad(table.headers))
        rows.extend(_pad(r) for r in table.rows)

    log.info("Compiladas %d páginas: %d columnas, %d filas.", len(non_empty), width, len(rows))
    return TableData(headers=headers, rows=rows)


def compile_text(
    pages: Sequence[PageInput],
    *,
    regions: Optional[Sequence[CropRegion]] = None,
    config: Optional[ExtractionConfig] = None,
    max_workers: Optional[int] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> str:
    """Texto plano de varias páginas, cada una precedida de su separador."""
    config = config or DEFAULT_CONFIG
    ordered = sorted(pages, key=lambda p: p.page)

    def _one(page: PageInput) -> str:
        return extract_page_text(page.items, regions=regions, config=config)

    texts = _run_pages(_one, ordered, max_workers, progress_callback)
    parts = [f"{config.separator_for(p.page)}\n{text}"
             for p, text in zip(ordered, texts) if text.strip()]
    return "\n\n".join(parts)


def has_embedded_text(pages: Sequence[PageInput],
                      config: Optional[ExtractionConfig] = None) -> bool:
    """
    Indica si las primeras páginas traen texto suficiente (media de caracteres
    por página >= umbral). Si no, quien llama debería recurrir al OCR.
    """
    config = config or DEFAULT_CONFIG
    sample = sorted(pages, key=lambda p: p.page)[:config.embedded_text_sample_pages]
    if not sample:
        return False
    total_chars = sum(len(it.text.strip()) for p in sample for it in p.items)
    return total_chars / len(sample) >= config.embedded_text_min_chars


def _page_number(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Número de página inválido: {text!r}") from None


def parse_page_range(range_str: str, max_pages: int) -> List[int]:
    """
    Convierte "1-3, 5, 9-7" en [1, 2, 3, 5, 9, 8, 7].

    Cadena vacía → lista vacía (todas las páginas). Lanza ValueError ante
    caracteres no válidos, rangos mal formados o páginas fuera de [1, max_pages].
    """
    trimmed = (range_str or "").strip()
    if not trimmed:
        return []
    if not PAGE_RANGE_RE.match(trimmed):
        raise ValueError("Solo se permiten números, comas, guiones y espacios.")

    pages: List[int] = []
    for part in trimmed.split(","):
        p = part.strip()
        if not p:
            continue
        if "-" in p:
            segments = [s.strip() for s in p.split("-") if s.strip()]
            if len(segments) != 2:
                raise ValueError(f"Rango inválido: {p!r}")
            start, end = _page_number(segments[0]), _page_number(segments[1])
            for n in (start, end):
                if n < 1:
                    raise ValueError("Las páginas empiezan en 1.")
                if n > max_pages:
                    raise ValueError(f"La página {n} excede el máximo ({max_pages}).")
            step = 1 if start <= end else -1
            pages.extend(range(start, end + step, step))
        else:
            n = _page_number(p)
            if n < 1:
                raise ValueError("Las páginas empiezan en 1.")
            if n > max_pages:
                raise ValueError(f"La página {n} excede el máximo ({max_pages}).")
            pages.append(n)
    return pages
