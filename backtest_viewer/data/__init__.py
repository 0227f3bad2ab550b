"""
Backtest payload models, parsing and normalization
"""
from .models import (
    TimeKey, Scale, SeriesKind, TradeSide, PricePoint, ScalarPoint, ABSENT,
    LineSeries, SeriesHandle, TradeEvent, BacktestMetrics, BacktestResult,
    ChartData, LegendEntry, LegendSnapshot, PRICE, VOLUME, EQUITY
)
from .time_keys import truncate_datetime, to_time_key
from .normalizers import (
    normalize_candles, normalize_equity, infer_schema, project_field,
    normalize_indicators, normalize_trades, normalize_result
)
from .payload import parse_backtest_response, format_metrics, is_positive_return

__all__ = [
    'TimeKey', 'Scale', 'SeriesKind', 'TradeSide', 'PricePoint', 'ScalarPoint', 'ABSENT',
    'LineSeries', 'SeriesHandle', 'TradeEvent', 'BacktestMetrics', 'BacktestResult',
    'ChartData', 'LegendEntry', 'LegendSnapshot', 'PRICE', 'VOLUME', 'EQUITY',
    'truncate_datetime', 'to_time_key',
    'normalize_candles', 'normalize_equity', 'infer_schema', 'project_field',
    'normalize_indicators', 'normalize_trades', 'normalize_result',
    'parse_backtest_response', 'format_metrics', 'is_positive_return',
]
