# backtest_viewer/chart/chart_view.py
"""
Chart view: hosts one ChartSurface at a time and rebuilds it per payload
"""
import logging
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QWidget, QVBoxLayout

from ..data.models import ChartData
from ..styles import ChartStyles
from .legend import LegendLabel
from .registry import SeriesRegistry, build_registry
from .surface import ChartSurface, MarkerRenderer

logger = logging.getLogger(__name__)


class ChartContainer(QWidget):
    """Fixed-height container that reports its size to the mounted surface"""

    resized = pyqtSignal(int, int)

    def __init__(self, height: int, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("chart_container")
        self.setFixedHeight(height)

    def resizeEvent(self, event):
        """Handle widget resize events."""
        super().resizeEvent(event)
        self.resized.emit(event.size().width(), event.size().height())


class ChartView(QWidget):
    """
    Legend + chart container.

    Every set_chart_data call is a new generation: the old surface is
    destroyed, a fresh registry is built and a new surface is mounted.
    """

    crosshair_moved = pyqtSignal(object)

    def __init__(self, height: int = 400, volume_margin_top: float = 0.8,
                 marker_renderer: Optional[MarkerRenderer] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.chart_height = height
        self.volume_margin_top = volume_margin_top
        self.marker_renderer = marker_renderer

        self.generation = 0
        self.surface: Optional[ChartSurface] = None
        self.registry: Optional[SeriesRegistry] = None

        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.legend = LegendLabel()
        layout.addWidget(self.legend)

        self.container = ChartContainer(self.chart_height)
        self.container.setStyleSheet(ChartStyles.get_stylesheet())
        layout.addWidget(self.container)

        self.crosshair_moved.connect(self.legend.update_snapshot)

    def set_chart_data(self, chart_data: ChartData) -> SeriesRegistry:
        """
        Tear down the current surface and mount a new one for chart_data.

        Raises:
            SeriesRegistrationError: identity collision; no chart is left mounted
        """
        self.clear()

        self.generation += 1
        registry = build_registry(chart_data, generation=self.generation)

        surface = ChartSurface(
            self.container,
            height=self.chart_height,
            volume_margin_top=self.volume_margin_top,
            marker_renderer=self.marker_renderer,
            parent=self,
        )
        surface.crosshair_moved.connect(self.crosshair_moved)
        surface.mount(registry, chart_data.trades)

        self.surface = surface
        self.registry = registry
        return registry

    def clear(self):
        """Destroy the mounted surface, if any"""
        if self.surface is not None:
            self.surface.destroy()
            self.surface.crosshair_moved.disconnect(self.crosshair_moved)
            self.surface.deleteLater()
        self.surface = None
        self.registry = None
