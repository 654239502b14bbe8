from __future__ import annotations
import logging
import re
from typing import List, Sequence

from .rows import detect_header_row, row_text
from .structures import PositionedItem, TableData

log = logging.getLogger(__name__)

NUMBER_RE = re.compile(r"^[\$€£]?\(?[-+]?\d[\d,\s]*(?:\.\d+)?\)?%?$")

def is_number_like(s: str) -> bool:
    if not s:
        return False
    z = s.strip().replace(" ", "")
    if z in ("-", "–"):
        return True
    # $1,234.56 / (57,519) / 246 / 12.5%
    return bool(NUMBER_RE.match(z))

def column_label(index: int) -> str:
    """0 → 'Col A', 25 → 'Col Z', 26 → 'Col AA'."""
    letters = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return f"Col {letters}"

def _pad(rows: List[List[str]], width: int) -> List[List[str]]:
    return [(list(r) + [""] * width)[:width] for r in rows]

def drop_empty_columns(table: TableData) -> TableData:
    """Quita las columnas vacías en la cabecera y en todas las filas."""
    width = table.column_count
    headers = (list(table.headers) + [""] * width)[:width] if table.headers else []
    rows = _pad(table.rows, width)

    keep = [
        j for j in range(width)
        if (headers and headers[j]) or any(r[j] for r in rows)
    ]
    if len(keep) < width:
        log.debug("Se eliminan %d columnas vacías.", width - len(keep))
    return TableData(
        headers=[headers[j] for j in keep] if headers else [],
        rows=[[r[j] for j in keep] for r in rows],
    )

def finalize_table(table: TableData) -> TableData:
    """
    Posprocesa una rejilla cruda:
      - elimina columnas vacías,
      - clasifica la cabecera (genérica "Col A…" si la primera fila es numérica,
        compuesta si hay sub-cabecera repetida, o la fila 0 en otro caso).
    Una tabla que ya trae cabecera solo se normaliza, por lo que aplicarlo dos
    veces no cambia el resultado.
    """
    table = drop_empty_columns(table)
    if table.headers or not table.rows:
        return table

    width = table.column_count
    header, body = detect_header_row(table.rows, is_number_like)
    if header is None:
        log.debug("Primera fila numérica: cabecera genérica.")
        header = [column_label(j) for j in range(width)]
    return TableData(headers=list(header), rows=body)

def add_non_table_text(table: TableData,
                       before: Sequence[Sequence[PositionedItem]],
                       after: Sequence[Sequence[PositionedItem]],
                       ) -> TableData:
    """
    Reanexa las filas de texto fuera de la tabla (encima y debajo) al final:
    el texto completo de la fila en la primera celda, el resto en blanco.
    """
    extra = [row_text(r) for r in list(before) + list(after)]
    extra = [t for t in extra if t]
    if not extra:
        return table

    headers = list(table.headers) or [column_label(0)]
    width = len(headers)
    rows = [list(r) for r in table.rows]
    rows.extend([t] + [""] * (width - 1) for t in extra)
    log.debug("Se reanexan %d filas de texto fuera de tabla.", len(extra))
    return TableData(headers=headers, rows=rows)
