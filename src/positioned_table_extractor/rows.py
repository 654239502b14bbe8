# src/positioned_table_extractor/rows.py
from __future__ import annotations
from typing import Callable, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, ExtractionConfig, PageStats
from .structures import PositionedItem

def group_rows(items: Sequence[PositionedItem],
               stats: Optional[PageStats] = None,
               config: ExtractionConfig = DEFAULT_CONFIG,
               ) -> List[List[PositionedItem]]:
    """Agrupa items en filas visuales por proximidad vertical.

    Se abre una fila nueva cuando la Y de un item se aleja de la Y de
    referencia de la fila (la del primer item) más de
    ``row_threshold_ratio * altura media``. Cada fila sale ordenada por X.
    """
    if not items:
        return []

    stats = stats or PageStats.from_items(items)
    threshold = stats.scaled(config.row_threshold_ratio)

    ordered = sorted(items, key=lambda it: (it.y, it.x))
    rows: List[List[PositionedItem]] = []
    current = [ordered[0]]
    ref_y = ordered[0].y

    for it in ordered[1:]:
        if abs(it.y - ref_y) > threshold:
            rows.append(sorted(current, key=lambda z: z.x))
            current = [it]
            ref_y = it.y
        else:
            current.append(it)
    rows.append(sorted(current, key=lambda z: z.x))
    return rows


def row_text(row: Sequence[PositionedItem]) -> str:
    return " ".join(t for t in (it.text.strip() for it in row) if t)


def _is_continuation(base: List[str], candidate: List[str]) -> bool:
    filled = [i for i, c in enumerate(candidate) if c]
    if not filled:
        return False
    empty = len(candidate) - len(filled)
    # mayoría estricta de vacías; en filas de dos celdas basta con una
    if empty * 2 <= len(candidate) and not (len(candidate) == 2 and empty == 1):
        return False
    return all(i < len(base) and base[i] for i in filled)


def merge_wrapped_rows(rows: List[List[str]]) -> List[List[str]]:
    """
    Pliega filas de continuación (valores partidos en dos líneas visuales)
    sobre la fila base anterior.

    Una fila es continuación si tiene alguna celda llena, la mayoría de sus
    celdas vacías y cada celda llena cae bajo una celda ya llena de la base.
    """
    merged: List[List[str]] = []
    i = 0
    while i < len(rows):
        base = list(rows[i])
        j = i + 1
        while j < len(rows) and _is_continuation(base, rows[j]):
            for k, cell in enumerate(rows[j]):
                if cell:
                    base[k] = f"{base[k]} {cell}"
            j += 1
        merged.append(base)
        i = j
    return merged


def detect_header_row(rows: List[List[str]],
                      is_numeric: Callable[[str], bool],
                      ) -> Tuple[Optional[List[str]], List[List[str]]]:
    """
    Separa la cabecera del cuerpo.

    Devuelve (None, rows) si la primera fila es toda numérica o vacía (no hay
    cabecera). Si hay una sub-cabecera repetida (p.ej. años bajo grupos),
    fusiona las filas 0 y 1 en una cabecera compuesta "Revenue 2023".
    """
    if not rows:
        return None, []

    first = rows[0]
    if all(not c or is_numeric(c) for c in first):
        return None, rows

    if len(rows) >= 3 and not first[0]:
        second = rows[1]
        lead = second[0]
        values = [c for c in second[1:] if c]
        if lead and not is_numeric(lead) and len(set(values)) < len(values):
            header: List[str] = []
            group = ""
            for idx, (top, sub) in enumerate(zip(first, second)):
                if idx > 0 and top:
                    group = top
                label = group if idx > 0 else top
                header.append(" ".join(p for p in (label, sub) if p))
            return header, rows[2:]

    return first, rows[1:]
