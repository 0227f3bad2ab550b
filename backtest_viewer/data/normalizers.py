# backtest_viewer/data/normalizers.py
"""
Pure normalization of backend records into renderable series.

No function here touches the rendering surface. Malformed rows (empty or
unparseable datetime, null values) are dropped silently; sparse indicator
data is the normal case, not an error.
"""
import math
import logging
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .models import (
    ChartData, LineSeries, PricePoint, ScalarPoint, SeriesKind,
    TradeEvent, TradeSide, BacktestResult, PRICE, VOLUME, EQUITY
)
from .time_keys import to_time_key

logger = logging.getLogger(__name__)

DATETIME_FIELD = 'datetime'


def _as_number(value: Any) -> Optional[float]:
    """Numeric value or None for null, NaN, bools and non-numbers"""
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    if math.isnan(number):
        return None
    return number


def indicator_identity(indicator: str, field: str) -> str:
    return f"{indicator}.{field}"


def normalize_candles(records: Iterable[Mapping[str, Any]]) -> Tuple[LineSeries, LineSeries]:
    """
    Split OHLCV records into aligned price and volume series.

    Both outputs always have the same length: a record is kept only when it
    has a valid datetime and numeric open/high/low/close/volume.
    """
    prices: List[PricePoint] = []
    volumes: List[ScalarPoint] = []
    dropped = 0

    for record in records:
        time = to_time_key(record.get(DATETIME_FIELD))
        ohlcv = [_as_number(record.get(k)) for k in ('open', 'high', 'low', 'close', 'volume')]
        if time is None or any(v is None for v in ohlcv):
            dropped += 1
            continue

        open_, high, low, close, volume = ohlcv
        prices.append(PricePoint(time, open_, high, low, close))
        volumes.append(ScalarPoint(time, volume))

    if dropped:
        logger.debug(f"Dropped {dropped} malformed candle records")

    return (
        LineSeries(PRICE, SeriesKind.CANDLESTICK, tuple(prices)),
        LineSeries(VOLUME, SeriesKind.HISTOGRAM, tuple(volumes)),
    )


def normalize_equity(records: Iterable[Mapping[str, Any]]) -> LineSeries:
    """Equity curve as a line series, 'equity' renamed to 'value'"""
    points = []
    for record in records:
        time = to_time_key(record.get(DATETIME_FIELD))
        value = _as_number(record.get('equity'))
        if time is None or value is None:
            continue
        points.append(ScalarPoint(time, value))

    return LineSeries(EQUITY, SeriesKind.LINE, tuple(points))


def infer_schema(records: Sequence[Mapping[str, Any]]) -> Tuple[str, ...]:
    """
    Field names of an indicator, frozen at its first record with a datetime.

    Fields that only show up on later records are never surfaced.
    Returns an empty tuple when no record carries a datetime.
    """
    for record in records:
        if to_time_key(record.get(DATETIME_FIELD)) is not None:
            return tuple(k for k in record.keys() if k != DATETIME_FIELD)
    return ()


def project_field(indicator: str, field: str,
                  records: Iterable[Mapping[str, Any]]) -> LineSeries:
    """One field of an indicator as a line; null (warm-up) entries are left out"""
    points = []
    for record in records:
        time = to_time_key(record.get(DATETIME_FIELD))
        value = _as_number(record.get(field))
        if time is None or value is None:
            continue
        points.append(ScalarPoint(time, value))

    return LineSeries(indicator_identity(indicator, field), SeriesKind.LINE, tuple(points))


def normalize_indicators(
    indicators: Mapping[str, Sequence[Mapping[str, Any]]]
) -> Dict[str, Dict[str, LineSeries]]:
    """
    Every non-empty (indicator, field) line, in input order then discovery order.
    """
    result: Dict[str, Dict[str, LineSeries]] = {}

    for name, records in indicators.items():
        schema = infer_schema(records)
        if not schema:
            logger.debug(f"Indicator '{name}' has no dated records, skipping")
            continue

        lines = {}
        for field in schema:
            series = project_field(name, field, records)
            if series:
                lines[field] = series
            else:
                logger.debug(f"Indicator field '{name}.{field}' has no values, skipping")

        if lines:
            result[name] = lines

    return result


def normalize_trades(records: Iterable[Mapping[str, Any]]) -> List[TradeEvent]:
    """Trade events with a valid date and a buy/sell side"""
    trades = []
    for record in records:
        time = to_time_key(record.get(DATETIME_FIELD))
        side = record.get('type')
        if time is None or not isinstance(side, str):
            continue
        try:
            trade_side = TradeSide(side.lower())
        except ValueError:
            continue
        trades.append(TradeEvent(time, trade_side, _as_number(record.get('price'))))
    return trades


def normalize_result(result: BacktestResult) -> ChartData:
    """Run every normalizer over a parsed payload"""
    price, volume = normalize_candles(result.candles)
    chart_data = ChartData(
        price=price,
        volume=volume,
        equity=normalize_equity(result.equity),
        indicators=normalize_indicators(result.indicators),
        trades=normalize_trades(result.trades),
    )

    logger.info(
        f"Normalized {len(price)} candles, {len(chart_data.equity)} equity points, "
        f"{sum(len(f) for f in chart_data.indicators.values())} indicator lines, "
        f"{len(chart_data.trades)} trades"
    )
    return chart_data
