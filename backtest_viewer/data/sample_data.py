# backtest_viewer/data/sample_data.py
"""
Sample backend payload for running the viewer without the service
"""
from typing import Any, Dict

SAMPLE_CANDLES = [
    {'datetime': '2024-01-01', 'open': 150.0, 'high': 155.0, 'low': 149.0, 'close': 154.0, 'volume': 1000000},
    {'datetime': '2024-01-02', 'open': 154.0, 'high': 158.0, 'low': 153.0, 'close': 157.0, 'volume': 1500000},
    {'datetime': '2024-01-03', 'open': 157.0, 'high': 160.0, 'low': 156.0, 'close': 159.0, 'volume': 1200000},
    {'datetime': '2024-01-04', 'open': 159.0, 'high': 162.0, 'low': 158.0, 'close': 161.0, 'volume': 1800000},
    {'datetime': '2024-01-05', 'open': 161.0, 'high': 163.0, 'low': 159.0, 'close': 160.0, 'volume': 1100000},
    {'datetime': '2024-01-08', 'open': 160.0, 'high': 164.0, 'low': 159.0, 'close': 163.0, 'volume': 1400000},
    {'datetime': '2024-01-09', 'open': 163.0, 'high': 165.0, 'low': 161.0, 'close': 162.0, 'volume': 1300000},
    {'datetime': '2024-01-10', 'open': 162.0, 'high': 166.0, 'low': 161.0, 'close': 165.0, 'volume': 1600000},
    {'datetime': '2024-01-11', 'open': 165.0, 'high': 168.0, 'low': 164.0, 'close': 167.0, 'volume': 1700000},
    {'datetime': '2024-01-12', 'open': 167.0, 'high': 170.0, 'low': 166.0, 'close': 169.0, 'volume': 1900000},
]

SAMPLE_EQUITY = [
    {'datetime': '2024-01-01', 'equity': 10000.0},
    {'datetime': '2024-01-02', 'equity': 10250.5},
    {'datetime': '2024-01-03', 'equity': 10480.2},
    {'datetime': '2024-01-04', 'equity': 10650.8},
    {'datetime': '2024-01-05', 'equity': 10620.3},
    {'datetime': '2024-01-08', 'equity': 10850.1},
    {'datetime': '2024-01-09', 'equity': 10800.7},
    {'datetime': '2024-01-10', 'equity': 11020.4},
    {'datetime': '2024-01-11', 'equity': 11280.9},
    {'datetime': '2024-01-12', 'equity': 11520.5},
]


def _sma(closes, period):
    values = []
    for i in range(len(closes)):
        if i + 1 < period:
            values.append(None)
        else:
            values.append(round(sum(closes[i + 1 - period:i + 1]) / period, 4))
    return values


def sample_payload() -> Dict[str, Any]:
    """Backend-shaped payload with a 3-day SMA that has a warm-up gap"""
    closes = [c['close'] for c in SAMPLE_CANDLES]
    sma = _sma(closes, 3)

    return {
        'success': True,
        'strategy_name': 'SMACrossover',
        'metrics': {
            'final_value': 11520.5,
            'initial_value': 10000.0,
            'max_drawdown': 0.46,
            'sharpe_ratio': 2.147,
            'total_return': 15.205,
        },
        'candles': [dict(c) for c in SAMPLE_CANDLES],
        'equity': [dict(e) for e in SAMPLE_EQUITY],
        'indicators': {
            'sma': [{'datetime': c['datetime'], 'value': v} for c, v in zip(SAMPLE_CANDLES, sma)],
        },
        'trades': [
            {'datetime': '2024-01-03', 'type': 'buy', 'price': 159.0},
            {'datetime': '2024-01-09', 'type': 'sell', 'price': 162.0},
        ],
    }
