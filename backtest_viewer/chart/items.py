# backtest_viewer/chart/items.py
"""
PyQtGraph items and time-axis helpers for the chart surface
"""
import math
import logging
from typing import Optional, Sequence

import numpy as np
import pandas as pd
import pyqtgraph as pg

from ..data.models import PricePoint, TimeKey
from ..styles import ChartStyles

logger = logging.getLogger(__name__)

DAY_SECONDS = 86400
CANDLE_WIDTH = 0.6 * DAY_SECONDS
VOLUME_BAR_WIDTH = 0.8 * DAY_SECONDS

_EPOCH = pd.Timestamp('1970-01-01')


def time_keys_to_x(times: Sequence[TimeKey]) -> np.ndarray:
    """TimeKeys to UTC epoch seconds (x coordinates of the date axis)"""
    if len(times) == 0:
        return np.array([], dtype=float)
    index = pd.to_datetime(pd.Index(list(times)), format='%Y-%m-%d')
    return ((index - _EPOCH) // pd.Timedelta(seconds=1)).to_numpy(dtype=float)


def x_to_time_key(x: float) -> Optional[TimeKey]:
    """Nearest calendar day for an x coordinate, None if out of range"""
    if x is None or not math.isfinite(x):
        return None
    try:
        day = _EPOCH + pd.Timedelta(days=round(x / DAY_SECONDS))
    except (OverflowError, ValueError):
        return None
    return day.strftime('%Y-%m-%d')


class CandlestickItem(pg.GraphicsObject):
    """Candlestick item drawn once into a QPicture"""

    def __init__(self, points: Sequence[PricePoint] = ()):
        pg.GraphicsObject.__init__(self)
        self.points: Sequence[PricePoint] = ()
        self.picture = None
        self._bounds = pg.QtCore.QRectF()
        self.set_data(points)

    def set_data(self, points: Sequence[PricePoint]):
        self.points = points
        self.generatePicture()
        self.prepareGeometryChange()
        self._bounds = self._data_bounds()
        self.update()

    def generatePicture(self):
        """Generate the picture for painting"""
        self.picture = pg.QtGui.QPicture()
        p = pg.QtGui.QPainter(self.picture)

        xs = time_keys_to_x([pt.time for pt in self.points])
        half = CANDLE_WIDTH / 2
        wick_pen = pg.mkPen(ChartStyles.CANDLE_WICK, width=1)

        for x, pt in zip(xs, self.points):
            color = ChartStyles.CANDLE_BULL_BODY if pt.is_bullish else ChartStyles.CANDLE_BEAR_BODY

            # High-low wick
            p.setPen(wick_pen)
            p.drawLine(pg.QtCore.QPointF(x, pt.low), pg.QtCore.QPointF(x, pt.high))

            # Open-close body
            p.setPen(pg.mkPen(color, width=1))
            p.setBrush(pg.mkBrush(color))
            p.drawRect(pg.QtCore.QRectF(x - half, min(pt.open, pt.close),
                                        CANDLE_WIDTH, abs(pt.close - pt.open)))

        p.end()

    def paint(self, p, *args):
        if self.picture:
            p.drawPicture(0, 0, self.picture)

    def _data_bounds(self):
        # QPicture bounds are integer rects, compute from the data instead
        if not self.points:
            return pg.QtCore.QRectF()
        xs = time_keys_to_x([pt.time for pt in self.points])
        low = min(pt.low for pt in self.points)
        high = max(pt.high for pt in self.points)
        half = CANDLE_WIDTH / 2
        return pg.QtCore.QRectF(xs.min() - half, low, (xs.max() - xs.min()) + CANDLE_WIDTH, high - low)

    def boundingRect(self):
        return self._bounds
