# src/positioned_table_extractor/parser.py
from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from bs4 import BeautifulSoup

from .main import PageInput
from .structures import CropRegion, PageLine, PageRulings, PositionedItem, parse_bbox

log = logging.getLogger(__name__)

def _load_soup(text: str) -> BeautifulSoup:
    """
    Intenta XML (lxml-xml) y, si no hay nodos HOCR, fallback a HTML (lxml).
    """
    soup_xml = BeautifulSoup(text, "lxml-xml")
    if soup_xml.find(class_=lambda c: c and "ocr_page" in c):
        return soup_xml
    return BeautifulSoup(text, "lxml")

def parse_hocr_items(hocr_path: str,
                     table_bbox: Optional[Tuple[int, int, int, int]] = None
                     ) -> List[PositionedItem]:
    """
    Convierte las palabras `ocrx_word` de un hOCR en PositionedItem.
    La página es el orden (desde 1) del nodo `ocr_page`; las coordenadas
    son las del bbox de Tesseract (píxeles de la imagen, Y hacia abajo).
    """
    with open(hocr_path, "r", encoding="utf-8") as f:
        raw = f.read()
    soup = _load_soup(raw)

    items: List[PositionedItem] = []
    pages = soup.find_all(class_=lambda c: c and "ocr_page" in c)

    for pi, page in enumerate(pages, start=1):
        for w in page.find_all(class_=lambda c: c and "ocrx_word" in c):
            bb = parse_bbox(w.get("title", ""))
            if not bb:
                continue
            x1, y1, x2, y2 = bb
            if table_bbox:
                X1, Y1, X2, Y2 = table_bbox
                if not (x1 >= X1 and y1 >= Y1 and x2 <= X2 and y2 <= Y2):
                    continue

            text = (w.get_text() or "").strip()
            if not text:
                continue
            items.append(PositionedItem(text=text, x=x1, y=y1,
                                        width=x2 - x1, height=y2 - y1, page=pi))

    log.info("hOCR: %d palabras en %d páginas.", len(items), len(pages))
    return items

def items_to_pages(items: List[PositionedItem]) -> List[PageInput]:
    by_page: Dict[int, List[PositionedItem]] = {}
    for it in items:
        by_page.setdefault(it.page, []).append(it)
    return [PageInput(page=p, items=by_page[p]) for p in sorted(by_page)]

def _line(raw: Dict[str, Any]) -> PageLine:
    return PageLine(x1=float(raw["x1"]), y1=float(raw["y1"]),
                    x2=float(raw["x2"]), y2=float(raw["y2"]))

def _page_from_dict(raw: Dict[str, Any]) -> PageInput:
    page_no = int(raw["page"])
    items = [
        PositionedItem(text=str(it["text"]), x=float(it["x"]), y=float(it["y"]),
                       width=float(it["width"]), height=float(it["height"]),
                       page=int(it.get("page", page_no)))
        for it in raw.get("items", [])
    ]
    rulings = None
    lines = raw.get("lines")
    if lines and not isinstance(lines, dict):
        raise ValueError(f"'lines' debe ser un objeto, no {type(lines).__name__}")
    if lines:
        rulings = PageRulings(
            horizontal=[_line(ln) for ln in lines.get("horizontal", [])],
            vertical=[_line(ln) for ln in lines.get("vertical", [])],
        )
    return PageInput(page=page_no, items=items, rulings=rulings)

def load_pages_json(path: str) -> Tuple[List[PageInput], List[CropRegion]]:
    """
    Lee un volcado JSON de páginas:
      {"pages": [{"page": 1, "items": [...], "lines": {"horizontal": [...], "vertical": [...]}}],
       "regions": [{"x":..., "y":..., "width":..., "height":..., "page": 1}]}
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    try:
        pages = [_page_from_dict(p) for p in data["pages"]]
        regions = [
            CropRegion(x=float(r["x"]), y=float(r["y"]), width=float(r["width"]),
                       height=float(r["height"]), page=int(r.get("page", 1)))
            for r in data.get("regions", [])
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"JSON de páginas mal formado en {path}: {exc}") from exc
    log.info("JSON: %d páginas, %d regiones.", len(pages), len(regions))
    return pages, regions
