# backtest_viewer/data/payload.py
"""
Backend payload parsing and metrics formatting
"""
import logging
from typing import Any, Dict, Mapping

from ..exceptions import PayloadError
from .models import BacktestMetrics, BacktestResult

logger = logging.getLogger(__name__)

METRIC_FIELDS = ('final_value', 'initial_value', 'max_drawdown', 'sharpe_ratio', 'total_return')


def _metric(raw: Mapping[str, Any], name: str) -> float:
    value = raw.get(name)
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        logger.warning(f"Metric '{name}' is not numeric: {value!r}")
        return 0.0


def _list_field(raw: Mapping[str, Any], name: str) -> list:
    value = raw.get(name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise PayloadError(f"'{name}' must be a list", field=name)
    return [r for r in value if isinstance(r, Mapping)]


def parse_backtest_response(raw: Any) -> BacktestResult:
    """
    Parse the backend JSON body into a BacktestResult.

    Record contents are left untouched; normalizers filter them later.
    Raises PayloadError when the top-level shape is wrong.
    """
    if not isinstance(raw, Mapping):
        raise PayloadError(f"Expected a JSON object, got {type(raw).__name__}")

    metrics_raw = raw.get('metrics') or {}
    if not isinstance(metrics_raw, Mapping):
        raise PayloadError("'metrics' must be an object", field='metrics')
    metrics = BacktestMetrics(**{name: _metric(metrics_raw, name) for name in METRIC_FIELDS})

    indicators_raw = raw.get('indicators') or {}
    if not isinstance(indicators_raw, Mapping):
        raise PayloadError("'indicators' must be an object", field='indicators')

    indicators = {}
    for name, records in indicators_raw.items():
        if not isinstance(records, list):
            raise PayloadError(f"Indicator '{name}' must be a list", field=f"indicators.{name}")
        indicators[str(name)] = [r for r in records if isinstance(r, Mapping)]

    return BacktestResult(
        success=bool(raw.get('success', False)),
        strategy_name=str(raw.get('strategy_name') or ''),
        metrics=metrics,
        candles=_list_field(raw, 'candles'),
        equity=_list_field(raw, 'equity'),
        indicators=indicators,
        trades=_list_field(raw, 'trades'),
        chart_url=raw.get('chart_url'),
    )


def is_positive_return(metrics: BacktestMetrics) -> bool:
    return metrics.total_return >= 0


def format_metrics(metrics: BacktestMetrics) -> Dict[str, str]:
    """Display strings for the results card"""
    return {
        'total_return': f"{metrics.total_return:.2f}%",
        'sharpe_ratio': f"{metrics.sharpe_ratio:.3f}",
        'max_drawdown': f"{metrics.max_drawdown:.2f}%",
        'initial_value': f"${metrics.initial_value:,.2f}",
        'final_value': f"${metrics.final_value:,.2f}",
    }
