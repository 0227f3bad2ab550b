# backtest_viewer/tests/test_payload.py
"""
Module: Payload Parsing Tests
Purpose: Top-level shape checks, metric defaults and display formatting
"""
import pytest

from backtest_viewer.exceptions import PayloadError
from backtest_viewer.data.models import BacktestMetrics
from backtest_viewer.data.payload import parse_backtest_response, format_metrics, is_positive_return


class TestParseBacktestResponse:

    def test_example_payload(self, example_payload):
        result = parse_backtest_response(example_payload)
        assert result.success
        assert result.strategy_name == 'SMACrossover'
        assert result.metrics.sharpe_ratio == 1.5
        assert list(result.indicators) == ['sma']
        assert result.trades == []
        assert result.chart_url is None

    @pytest.mark.parametrize('raw', [None, [], 'text', 42])
    def test_rejects_non_object(self, raw):
        with pytest.raises(PayloadError):
            parse_backtest_response(raw)

    @pytest.mark.parametrize('field', ['candles', 'equity', 'trades'])
    def test_rejects_non_list_fields(self, example_payload, field):
        example_payload[field] = {'datetime': '2024-01-01'}
        with pytest.raises(PayloadError) as exc_info:
            parse_backtest_response(example_payload)
        assert exc_info.value.field == field

    def test_rejects_bad_indicator_shapes(self, example_payload):
        example_payload['indicators'] = {'sma': {'value': 1}}
        with pytest.raises(PayloadError) as exc_info:
            parse_backtest_response(example_payload)
        assert exc_info.value.field == 'indicators.sma'

        example_payload['indicators'] = ['sma']
        with pytest.raises(PayloadError):
            parse_backtest_response(example_payload)

    def test_non_mapping_records_filtered(self, example_payload):
        example_payload['candles'].append('garbage')
        example_payload['indicators']['sma'].append(None)
        result = parse_backtest_response(example_payload)
        assert len(result.candles) == 2
        assert len(result.indicators['sma']) == 2

    def test_missing_fields_default(self):
        result = parse_backtest_response({})
        assert not result.success
        assert result.metrics == BacktestMetrics()
        assert result.candles == []
        assert result.indicators == {}

    def test_non_numeric_metric_defaults_to_zero(self, example_payload):
        example_payload['metrics']['sharpe_ratio'] = 'n/a'
        result = parse_backtest_response(example_payload)
        assert result.metrics.sharpe_ratio == 0.0


class TestMetricsFormatting:

    def test_format(self):
        metrics = BacktestMetrics(final_value=12345.678, initial_value=10000.0,
                                  max_drawdown=3.14159, sharpe_ratio=1.23456, total_return=23.45678)
        assert format_metrics(metrics) == {
            'total_return': '23.46%',
            'sharpe_ratio': '1.235',
            'max_drawdown': '3.14%',
            'initial_value': '$10,000.00',
            'final_value': '$12,345.68',
        }

    def test_return_sign(self):
        assert is_positive_return(BacktestMetrics(total_return=0.0))
        assert not is_positive_return(BacktestMetrics(total_return=-0.5))
