"""
Backtest Viewer - renders strategy backtest results as a synchronized
candlestick, volume, equity and indicator chart
"""

__version__ = "0.1.0"
