"""
Backtest viewer dashboard widgets
"""
from .main_window import BacktestViewerWindow
from .metrics_panel import MetricsPanel

__all__ = ['BacktestViewerWindow', 'MetricsPanel']
