# backtest_viewer/tests/test_registry.py
"""
Module: Series Registry Tests
Purpose: Identity uniqueness, ordering, scale binding and color determinism
"""
import pytest

from backtest_viewer.exceptions import SeriesRegistrationError
from backtest_viewer.data.models import ChartData, LineSeries, ScalarPoint, Scale, SeriesKind, ABSENT
from backtest_viewer.data.normalizers import normalize_indicators
from backtest_viewer.chart.colors import INDICATOR_PALETTE, assign_colors
from backtest_viewer.chart.registry import SeriesRegistry, build_registry


def line(identity, *points):
    return LineSeries(identity, SeriesKind.LINE, tuple(ScalarPoint(t, v) for t, v in points))


class TestColorAssignment:

    def test_colors_follow_order_and_wrap(self):
        keys = [('ind', f'f{i}') for i in range(len(INDICATOR_PALETTE) + 2)]
        colors = assign_colors(keys)

        assert colors[keys[0]] == INDICATOR_PALETTE[0]
        assert colors[keys[1]] == INDICATOR_PALETTE[1]
        assert colors[keys[len(INDICATOR_PALETTE)]] == INDICATOR_PALETTE[0]
        assert colors[keys[len(INDICATOR_PALETTE) + 1]] == INDICATOR_PALETTE[1]

    def test_repeated_key_keeps_first_color(self):
        colors = assign_colors([('a', 'x'), ('b', 'y'), ('a', 'x')], palette=('red', 'blue', 'green'))
        assert colors == {('a', 'x'): 'red', ('b', 'y'): 'blue'}

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            assign_colors([('a', 'x')], palette=())


class TestSeriesRegistry:

    def test_duplicate_identity_rejected(self):
        registry = SeriesRegistry(generation=1)
        registry.register('sma.value', line('sma.value'), Scale.PRIMARY)

        with pytest.raises(SeriesRegistrationError) as exc_info:
            registry.register('sma.value', line('sma.value'), Scale.PRIMARY)

        assert exc_info.value.identity == 'sma.value'
        assert exc_info.value.generation == 1
        assert len(registry) == 1

    def test_same_identity_in_new_generation(self):
        first = SeriesRegistry(generation=1)
        first.register('equity', line('equity'), Scale.SECONDARY)
        first.seal()

        second = SeriesRegistry(generation=2)
        handle = second.register('equity', line('equity'), Scale.SECONDARY)
        assert handle.identity == 'equity'

    def test_sealed_registry_rejects_registration(self):
        registry = SeriesRegistry()
        registry.seal()
        with pytest.raises(SeriesRegistrationError):
            registry.register('price', line('price'), Scale.PRIMARY)

    def test_registration_order_is_stable(self):
        registry = SeriesRegistry()
        for identity in ('price', 'volume', 'b.x', 'a.y'):
            registry.register(identity, line(identity), Scale.PRIMARY)
        assert registry.all_identities() == ['price', 'volume', 'b.x', 'a.y']
        assert [h.identity for h in registry] == registry.all_identities()

    def test_resolve_and_samples(self):
        registry = SeriesRegistry()
        registry.register('rsi.value', line('rsi.value', ('2024-01-02', 40.0)), Scale.PRIMARY, color='#fff')

        handle = registry.resolve('rsi.value')
        assert handle.scale is Scale.PRIMARY
        assert handle.kind is SeriesKind.LINE
        assert handle.color == '#fff'
        assert registry.resolve('missing') is None
        assert registry.sample_at('rsi.value', '2024-01-02') == ScalarPoint('2024-01-02', 40.0)
        assert registry.sample_at('rsi.value', '2024-01-03') is ABSENT
        assert registry.sample_at('missing', '2024-01-02') is ABSENT

    def test_time_extent(self):
        registry = SeriesRegistry()
        assert registry.time_extent() is None
        registry.register('a.x', line('a.x', ('2024-01-05', 1), ('2024-01-07', 1)), Scale.PRIMARY)
        registry.register('b.x', line('b.x', ('2024-01-02', 1)), Scale.PRIMARY)
        assert registry.time_extent() == ('2024-01-02', '2024-01-07')


class TestBuildRegistry:

    def test_example_payload(self, example_chart_data):
        registry = build_registry(example_chart_data, generation=3)

        assert registry.sealed
        assert registry.generation == 3
        assert registry.all_identities() == ['price', 'volume', 'equity', 'sma.value']
        assert registry.resolve('price').kind is SeriesKind.CANDLESTICK
        assert registry.resolve('volume').kind is SeriesKind.HISTOGRAM
        assert registry.resolve('equity').scale is Scale.SECONDARY
        assert registry.resolve('equity').color is None
        assert registry.resolve('sma.value').scale is Scale.PRIMARY
        assert registry.resolve('sma.value').color == INDICATOR_PALETTE[0]
        assert len(registry.series('sma.value')) == 1

    def test_rebuild_is_deterministic(self, sample_chart_data):
        first = build_registry(sample_chart_data, generation=1)
        second = build_registry(sample_chart_data, generation=2)
        assert [(h.identity, h.color) for h in first] == [(h.identity, h.color) for h in second]

    def test_empty_indicator_does_not_change_size(self, example_chart_data):
        baseline = len(build_registry(example_chart_data))
        example_chart_data.indicators.update(normalize_indicators({'unused': []}))
        assert len(build_registry(example_chart_data)) == baseline

    def test_empty_volume_and_equity_not_registered(self):
        chart_data = ChartData(
            price=LineSeries('price', SeriesKind.CANDLESTICK),
            volume=LineSeries('volume', SeriesKind.HISTOGRAM),
            equity=LineSeries('equity', SeriesKind.LINE),
        )
        registry = build_registry(chart_data)
        assert registry.all_identities() == ['price']

    def test_colliding_indicator_identities_fail(self):
        indicators = normalize_indicators({
            'a.b': [{'datetime': '2024-01-01', 'c': 1.0}],
            'a': [{'datetime': '2024-01-01', 'b.c': 2.0}],
        })
        chart_data = ChartData(
            price=LineSeries('price', SeriesKind.CANDLESTICK),
            volume=LineSeries('volume', SeriesKind.HISTOGRAM),
            equity=LineSeries('equity', SeriesKind.LINE),
            indicators=indicators,
        )
        with pytest.raises(SeriesRegistrationError) as exc_info:
            build_registry(chart_data)
        assert exc_info.value.identity == 'a.b.c'
