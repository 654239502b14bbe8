# src/positioned_table_extractor/spatial.py
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from .structures import CropRegion, PositionedItem

log = logging.getLogger(__name__)

def regions_by_page(regions: Optional[Sequence[CropRegion]]) -> Dict[int, List[CropRegion]]:
    by_page: Dict[int, List[CropRegion]] = defaultdict(list)
    for r in regions or []:
        by_page[r.page].append(r)
    return by_page

def filter_items_by_regions(items: Sequence[PositionedItem],
                            regions: Optional[Sequence[CropRegion]] = None
                            ) -> List[PositionedItem]:
    """Conserva los items cuyo centro cae en alguna región de su página.

    Las páginas sin regiones no se filtran. No hay recorte geométrico: un item
    entra o sale entero según su punto central.
    """
    by_page = regions_by_page(regions)
    if not by_page:
        return list(items)

    kept = [
        it for it in items
        if not by_page.get(it.page) or any(r.contains(it.xc, it.yc) for r in by_page[it.page])
    ]
    if len(kept) < len(items):
        log.debug("Filtro de regiones: %d de %d items conservados.", len(kept), len(items))
    return kept

def drop_non_finite(items: Sequence[PositionedItem]) -> List[PositionedItem]:
    """Descarta items con coordenadas NaN o infinitas."""
    kept = [it for it in items if it.is_finite]
    if len(kept) < len(items):
        log.warning("Se descartan %d items con geometría no finita.", len(items) - len(kept))
    return kept
