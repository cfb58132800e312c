"""
Diverging colour scale for belief strength.

Low values (contradiction) map to red, 0.5 to a neutral yellow and high
values (consistency) to green, using matplotlib's ColorBrewer ``RdYlGn``.
"""
from __future__ import annotations

import math
from typing import Tuple

import matplotlib
import numpy as np
from PySide6.QtGui import QColor

from beliefgraph.config import COLOR_MAP_NAME

RGBA = Tuple[float, float, float, float]


class DivergingColorScale:
    def __init__(self, name: str = COLOR_MAP_NAME) -> None:
        self.name = name
        self._cmap = matplotlib.colormaps[name]

    @staticmethod
    def position(value: float) -> float:
        """Coordinate on the diverging axis: value clamped to [0, 1], NaN -> midpoint."""
        value = float(value)
        if math.isnan(value):
            return 0.5
        return min(max(value, 0.0), 1.0)

    def rgba(self, value: float) -> RGBA:
        r, g, b, a = self._cmap(self.position(value))
        return float(r), float(g), float(b), float(a)

    def rgba_array(self, values: np.ndarray) -> np.ndarray:
        """(N,) values -> (N, 4) uint8 colours, vectorised for a whole frame."""
        values = np.asarray(values, dtype=np.float64)
        positions = np.clip(np.nan_to_num(values, nan=0.5), 0.0, 1.0)
        return self._cmap(positions, bytes=True)

    def qcolor(self, value: float) -> QColor:
        return QColor.fromRgbF(*self.rgba(value))
