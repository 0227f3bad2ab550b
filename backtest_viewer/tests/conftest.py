# backtest_viewer/tests/conftest.py
"""
Shared fixtures: offscreen QApplication and backend-shaped payloads
"""
import os

# Must be set before any Qt import
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

import pytest
from PyQt6.QtWidgets import QApplication

from backtest_viewer.data.normalizers import normalize_result
from backtest_viewer.data.payload import parse_backtest_response
from backtest_viewer.data.sample_data import sample_payload


@pytest.fixture(scope='session')
def qapp():
    """Single QApplication for the whole test session"""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def example_payload():
    """Two-day payload with an SMA warming up on the first day"""
    return {
        'success': True,
        'strategy_name': 'SMACrossover',
        'metrics': {
            'final_value': 10250.5,
            'initial_value': 10000.0,
            'max_drawdown': 1.25,
            'sharpe_ratio': 1.5,
            'total_return': 2.505,
        },
        'candles': [
            {'datetime': '2024-01-01', 'open': 150.0, 'high': 155.0, 'low': 149.0, 'close': 154.0, 'volume': 1000000},
            {'datetime': '2024-01-02', 'open': 154.0, 'high': 158.0, 'low': 153.0, 'close': 157.0, 'volume': 1500000},
        ],
        'equity': [
            {'datetime': '2024-01-01', 'equity': 10000},
            {'datetime': '2024-01-02', 'equity': 10250.5},
        ],
        'indicators': {
            'sma': [
                {'datetime': '2024-01-01', 'value': None},
                {'datetime': '2024-01-02', 'value': 50.1},
            ],
        },
    }


@pytest.fixture
def example_chart_data(example_payload):
    return normalize_result(parse_backtest_response(example_payload))


@pytest.fixture
def sample_chart_data():
    return normalize_result(parse_backtest_response(sample_payload()))
