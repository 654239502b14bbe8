from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import math
import re

BBOX_RE = re.compile(r"bbox (\d+)\s+(\d+)\s+(\d+)\s+(\d+)")

def parse_bbox(title_attr: str) -> Optional[Tuple[int, int, int, int]]:
    if not title_attr:
        return None
    m = BBOX_RE.search(title_attr)
    if not m:
        return None
    x1, y1, x2, y2 = map(int, m.groups())
    return x1, y1, x2, y2

@dataclass(frozen=True)
class PositionedItem:
    """Fragmento de texto con su caja en coordenadas de página (Y crece hacia abajo)."""
    text: str
    x: float
    y: float
    width: float
    height: float
    page: int = 1

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def xc(self) -> float:
        return self.x + self.width / 2.0

    @property
    def yc(self) -> float:
        return self.y + self.height / 2.0

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))

@dataclass(frozen=True)
class PageLine:
    """Segmento de regla ya clasificado (horizontal/vertical) por quien lo detecta."""
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def x_mid(self) -> float:
        return (self.x1 + self.x2) / 2.0

    @property
    def y_mid(self) -> float:
        return (self.y1 + self.y2) / 2.0

    @property
    def width(self) -> float:
        return abs(self.x2 - self.x1)

    @property
    def height(self) -> float:
        return abs(self.y2 - self.y1)

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x1, self.y1, self.x2, self.y2))

@dataclass
class PageRulings:
    horizontal: List[PageLine] = field(default_factory=list)
    vertical: List[PageLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.horizontal) + len(self.vertical)

@dataclass(frozen=True)
class CropRegion:
    x: float
    y: float
    width: float
    height: float
    page: int = 1

    def contains(self, px: float, py: float) -> bool:
        # bordes inclusivos
        return (self.x <= px <= self.x + self.width
                and self.y <= py <= self.y + self.height)

@dataclass
class TableData:
    """Tabla rectangular: cada fila tiene exactamente len(headers) celdas."""
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        if self.headers:
            return len(self.headers)
        return max((len(r) for r in self.rows), default=0)

    def is_empty(self) -> bool:
        return not self.headers and not self.rows

    def to_dict(self) -> Dict[str, object]:
        return {"headers": list(self.headers), "rows": [list(r) for r in self.rows]}

@dataclass
class DocLine:
    """Una línea visual de texto, items ordenados de izquierda a derecha."""
    y: float
    items: Sequence[PositionedItem]

    @property
    def mean_height(self) -> float:
        if not self.items:
            return 0.0
        return sum(it.height for it in self.items) / len(self.items)
