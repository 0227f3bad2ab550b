# backtest_viewer/chart/surface.py
"""
Chart surface: materializes one sealed SeriesRegistry on a pyqtgraph widget.

Lifecycle is UNMOUNTED -> MOUNTED -> DESTROYED. A surface never receives a
second registry; a new payload gets a new surface.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

import numpy as np
import pyqtgraph as pg
from PyQt6.QtCore import QObject, QTimer, pyqtSignal, Qt
from PyQt6.QtWidgets import QWidget

from ..exceptions import SurfaceStateError
from ..data.models import LegendSnapshot, SeriesKind, Scale, TradeEvent, TimeKey, VOLUME
from ..styles import ChartStyles
from .crosshair import resolve_legend
from .registry import SeriesRegistry
from .items import CandlestickItem, DAY_SECONDS, VOLUME_BAR_WIDTH, time_keys_to_x, x_to_time_key

logger = logging.getLogger(__name__)

# Configure PyQtGraph
pg.setConfigOptions(antialias=True)

# (plot_item, trades, to_x) -> None
MarkerRenderer = Callable[[pg.PlotItem, Sequence[TradeEvent], Callable[[Sequence[TimeKey]], np.ndarray]], None]


class SurfaceState(Enum):
    UNMOUNTED = 'unmounted'
    MOUNTED = 'mounted'
    DESTROYED = 'destroyed'


class ChartSurface(QObject):
    """
    Owns the rendering widget for one registry generation.

    Primary scale is the right axis (candles, indicators), secondary scale is
    the left axis (equity). Volume lives in an overlay view box whose range
    keeps the bars in the bottom fraction of the plot.
    """

    # LegendSnapshot, or None when the cursor leaves the plot
    crosshair_moved = pyqtSignal(object)

    def __init__(self, container: QWidget, height: int = 400,
                 volume_margin_top: float = 0.8,
                 marker_renderer: Optional[MarkerRenderer] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.container = container
        self.height = height
        self.volume_margin_top = volume_margin_top
        self.marker_renderer = marker_renderer

        self.state = SurfaceState.UNMOUNTED
        self.registry: Optional[SeriesRegistry] = None

        # Rendering handles, only valid while mounted
        self.widget: Optional[pg.GraphicsLayoutWidget] = None
        self.plot: Optional[pg.PlotItem] = None
        self.secondary_vb: Optional[pg.ViewBox] = None
        self.volume_vb: Optional[pg.ViewBox] = None
        self.items: Dict[str, pg.GraphicsObject] = {}
        self.crosshair_v: Optional[pg.InfiniteLine] = None
        self.proxy: Optional[pg.SignalProxy] = None

        # Deferred re-fit; restarting the timer coalesces resizes within a tick
        self._refit_timer = QTimer(self)
        self._refit_timer.setSingleShot(True)
        self._refit_timer.setInterval(0)
        self._refit_timer.timeout.connect(self._on_refit_timeout)

    @property
    def is_mounted(self) -> bool:
        return self.state is SurfaceState.MOUNTED

    def mount(self, registry: SeriesRegistry, trades: Sequence[TradeEvent] = ()):
        """Create the widget, draw every registered series and fit the time range"""
        if self.state is not SurfaceState.UNMOUNTED:
            raise SurfaceStateError("Surface can only be mounted once", self.state.value)

        self.registry = registry

        self.widget = pg.GraphicsLayoutWidget(parent=self.container)
        self.widget.setObjectName("chart_container")
        self.widget.setBackground(ChartStyles.CHART_BACKGROUND)
        self.widget.setGeometry(0, 0, max(self.container.width(), 1), self.height)

        date_axis = pg.DateAxisItem(orientation='bottom', utcOffset=0)
        self.plot = self.widget.addPlot(row=0, col=0, axisItems={'bottom': date_axis})
        self.plot.showGrid(x=True, y=True, alpha=0.3)
        self.plot.showAxis('right')
        for name in ('left', 'right', 'bottom'):
            axis = self.plot.getAxis(name)
            axis.setPen(ChartStyles.CHART_BORDER)
            axis.setTextPen(ChartStyles.CHART_TEXT)
        self.plot.vb.setAutoVisible(y=True)

        # Secondary scale on the left axis
        self.secondary_vb = pg.ViewBox()
        self.plot.scene().addItem(self.secondary_vb)
        self.plot.getAxis('left').linkToView(self.secondary_vb)
        self.secondary_vb.setXLink(self.plot)

        # Volume overlay, no axis
        self.volume_vb = pg.ViewBox()
        self.volume_vb.setMouseEnabled(x=False, y=False)
        self.plot.scene().addItem(self.volume_vb)
        self.volume_vb.setXLink(self.plot)
        self.volume_vb.setZValue(-10)

        self.plot.vb.sigResized.connect(self._sync_views)

        for handle in registry:
            self._materialize(handle)

        if self.marker_renderer and trades:
            self.marker_renderer(self.plot, trades, time_keys_to_x)

        # Crosshair
        self.crosshair_v = pg.InfiniteLine(
            angle=90, movable=False,
            pen=pg.mkPen(ChartStyles.CROSSHAIR_COLOR, width=0.5, style=Qt.PenStyle.DashLine)
        )
        self.plot.addItem(self.crosshair_v, ignoreBounds=True)
        self.crosshair_v.hide()
        self.proxy = pg.SignalProxy(self.plot.scene().sigMouseMoved,
                                    rateLimit=60, slot=self._mouse_moved)

        if hasattr(self.container, 'resized'):
            self.container.resized.connect(self.resize)

        self.widget.show()
        self.state = SurfaceState.MOUNTED
        self._sync_views()
        self.fit_content()

        logger.info(f"Mounted chart surface for generation {registry.generation} "
                    f"({len(registry)} series)")

    def _materialize(self, handle):
        series = self.registry.series(handle.identity)
        xs = time_keys_to_x(series.times)

        if handle.kind is SeriesKind.CANDLESTICK:
            item = CandlestickItem(series.points)
            self.plot.addItem(item)

        elif handle.kind is SeriesKind.HISTOGRAM:
            item = pg.BarGraphItem(
                x=xs, height=[p.value for p in series.points], width=VOLUME_BAR_WIDTH,
                brush=pg.mkBrush(ChartStyles.VOLUME_COLOR), pen=pg.mkPen(None)
            )
            self.volume_vb.addItem(item)

        else:
            ys = np.array([p.value for p in series.points], dtype=float)
            if handle.scale is Scale.SECONDARY:
                pen = pg.mkPen(ChartStyles.EQUITY_COLOR, width=ChartStyles.EQUITY_WIDTH)
                item = pg.PlotDataItem(xs, ys, pen=pen, name=handle.identity)
                self.secondary_vb.addItem(item)
            else:
                pen = pg.mkPen(handle.color or ChartStyles.CHART_TEXT, width=ChartStyles.INDICATOR_WIDTH)
                item = pg.PlotDataItem(xs, ys, pen=pen, name=handle.identity)
                self.plot.addItem(item)

        self.items[handle.identity] = item

    def _sync_views(self):
        """Keep overlay view boxes on top of the main view box"""
        if self.plot is None:
            return
        rect = self.plot.vb.sceneBoundingRect()
        for vb in (self.secondary_vb, self.volume_vb):
            vb.setGeometry(rect)
            vb.linkedViewChanged(self.plot.vb, vb.XAxis)

    def fit_content(self):
        """Fit the time axis to the full data extent and rescale every price axis"""
        if not self.is_mounted:
            return

        extent = self.registry.time_extent()
        if extent is None:
            return

        start, end = time_keys_to_x(list(extent))
        self.plot.setXRange(start - DAY_SECONDS, end + DAY_SECONDS, padding=0)
        self.plot.vb.enableAutoRange(axis=pg.ViewBox.YAxis)
        self.secondary_vb.enableAutoRange(axis=pg.ViewBox.YAxis)

        volume = self.registry.series(VOLUME)
        if volume:
            top = max(p.value for p in volume.points)
            visible_fraction = 1.0 - self.volume_margin_top
            self.volume_vb.setYRange(0, top / visible_fraction if top > 0 else 1, padding=0)

    def resize(self, width: int, height: int):
        """Apply a new container size and schedule a re-fit on the next tick"""
        if not self.is_mounted:
            return
        self.height = height
        self.widget.setGeometry(0, 0, width, height)
        self._refit_timer.start()

    def _on_refit_timeout(self):
        # Surface may have been destroyed after the re-fit was scheduled
        if self.is_mounted:
            self.fit_content()

    def _mouse_moved(self, evt):
        pos = evt[0]
        if not self.is_mounted:
            return
        if not self.plot.sceneBoundingRect().contains(pos):
            self.cursor_moved_to(None)
            return
        mouse_point = self.plot.vb.mapSceneToView(pos)
        self.cursor_moved_to(mouse_point.x())

    def cursor_moved_to(self, x: Optional[float]) -> Optional[LegendSnapshot]:
        """Resolve the legend for an x coordinate (None hides it) and emit it"""
        if not self.is_mounted:
            return None

        key = x_to_time_key(x) if x is not None else None
        snapshot = resolve_legend(key, self.registry)

        if snapshot is None:
            self.crosshair_v.hide()
        else:
            self.crosshair_v.setPos(time_keys_to_x([snapshot.time])[0])
            self.crosshair_v.show()

        self.crosshair_moved.emit(snapshot)
        return snapshot

    def destroy(self):
        """Release the widget and every series item; destroying twice is a no-op"""
        if self.state is SurfaceState.DESTROYED:
            return

        self._refit_timer.stop()

        if self.state is SurfaceState.MOUNTED:
            if hasattr(self.container, 'resized'):
                try:
                    self.container.resized.disconnect(self.resize)
                except TypeError:
                    logger.debug("Resize signal was not connected")
            self.proxy.disconnect()
            self.plot.vb.sigResized.disconnect(self._sync_views)
            self.plot.clear()
            self.widget.clear()
            self.widget.hide()
            self.widget.setParent(None)
            self.widget.deleteLater()

        generation = self.registry.generation if self.registry else None
        self.items.clear()
        self.widget = None
        self.plot = None
        self.secondary_vb = None
        self.volume_vb = None
        self.crosshair_v = None
        self.proxy = None
        self.registry = None
        self.state = SurfaceState.DESTROYED

        self.crosshair_moved.emit(None)
        logger.debug(f"Destroyed chart surface for generation {generation}")
