from __future__ import annotations
from typing import List, Sequence
import numpy as np

def cluster_values(values: Sequence[float], threshold: float) -> List[float]:
    """Fusiona coordenadas cercanas en centros representativos.

    Ordena los valores y abre un grupo nuevo cuando la distancia al último
    miembro del grupo actual supera ``threshold``. Cada grupo se colapsa a su
    media aritmética.
    """
    if len(values) == 0:
        return []

    ordered = np.sort(np.asarray(values, dtype=float))
    # cortes donde el salto entre vecinos excede el umbral
    splits = np.where(np.diff(ordered) > threshold)[0] + 1
    return [float(group.mean()) for group in np.split(ordered, splits)]
