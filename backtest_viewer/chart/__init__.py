"""
Series registry, crosshair resolution and the pyqtgraph chart surface
"""
from .colors import INDICATOR_PALETTE, assign_colors
from .registry import SeriesRegistry, build_registry
from .crosshair import resolve_legend
from .surface import ChartSurface, SurfaceState
from .chart_view import ChartView

__all__ = [
    'INDICATOR_PALETTE', 'assign_colors',
    'SeriesRegistry', 'build_registry',
    'resolve_legend',
    'ChartSurface', 'SurfaceState',
    'ChartView',
]
