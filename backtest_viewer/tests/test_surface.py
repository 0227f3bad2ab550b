# backtest_viewer/tests/test_surface.py
"""
Module: Chart Surface Tests
Purpose: Mount/destroy lifecycle, deferred re-fit and chart view rebuilds
"""
from unittest.mock import Mock

import pyqtgraph as pg
import pytest

from backtest_viewer.exceptions import SeriesRegistrationError, SurfaceStateError
from backtest_viewer.data.normalizers import normalize_indicators, normalize_result
from backtest_viewer.data.payload import parse_backtest_response
from backtest_viewer.chart.chart_view import ChartContainer, ChartView
from backtest_viewer.chart.items import CandlestickItem, time_keys_to_x, x_to_time_key
from backtest_viewer.chart.registry import build_registry
from backtest_viewer.chart.surface import ChartSurface, SurfaceState


@pytest.fixture
def container(qapp):
    widget = ChartContainer(300)
    widget.resize(640, 300)
    yield widget
    widget.deleteLater()


@pytest.fixture
def surface(container, example_chart_data):
    chart = ChartSurface(container, height=300)
    chart.mount(build_registry(example_chart_data, generation=1))
    yield chart
    chart.destroy()


class TestTimeAxis:

    def test_keys_map_to_utc_midnight(self):
        xs = time_keys_to_x(['1970-01-02', '2024-01-02'])
        assert xs[0] == 86400.0
        assert x_to_time_key(xs[1]) == '2024-01-02'

    def test_x_snaps_to_nearest_day(self):
        assert x_to_time_key(86400.0 * 1.4) == '1970-01-02'
        assert x_to_time_key(86400.0 * 1.6) == '1970-01-03'

    def test_invalid_x(self):
        assert x_to_time_key(None) is None
        assert x_to_time_key(float('nan')) is None
        assert x_to_time_key(float('inf')) is None


class TestCandlestickItem:

    def test_bounds_cover_every_candle(self, qapp, example_chart_data):
        item = CandlestickItem(example_chart_data.price.points)
        rect = item.boundingRect()
        xs = time_keys_to_x(example_chart_data.price.times)

        assert rect.left() < xs[0] < xs[1] < rect.right()
        assert (rect.top(), rect.bottom()) == (149.0, 158.0)

    def test_bounds_not_recomputed_per_call(self, qapp, example_chart_data, monkeypatch):
        item = CandlestickItem(example_chart_data.price.points)
        expected = item.boundingRect()

        convert = Mock(side_effect=AssertionError('time axis converted again'))
        monkeypatch.setattr('backtest_viewer.chart.items.time_keys_to_x', convert)

        assert item.boundingRect() == expected
        convert.assert_not_called()

    def test_empty_item(self, qapp):
        assert CandlestickItem().boundingRect().isNull()


class TestSurfaceLifecycle:

    def test_mount_materializes_every_series(self, surface):
        assert surface.state is SurfaceState.MOUNTED
        assert set(surface.items) == {'price', 'volume', 'equity', 'sma.value'}
        assert isinstance(surface.items['price'], CandlestickItem)
        assert isinstance(surface.items['volume'], pg.BarGraphItem)
        assert isinstance(surface.items['equity'], pg.PlotDataItem)
        assert surface.items['equity'] in surface.secondary_vb.addedItems
        assert surface.items['sma.value'] in surface.plot.items

    def test_second_mount_rejected(self, surface, example_chart_data):
        with pytest.raises(SurfaceStateError):
            surface.mount(build_registry(example_chart_data, generation=2))

    def test_resizes_coalesce_into_one_fit(self, surface, qapp):
        surface.fit_content = Mock()

        surface.resize(800, 300)
        surface.resize(900, 320)
        assert surface.fit_content.call_count == 0

        qapp.processEvents()
        assert surface.fit_content.call_count == 1
        assert surface.widget.width() == 900

    def test_container_resize_reaches_surface(self, surface, container):
        container.resized.emit(700, 300)
        assert surface.widget.width() == 700

    def test_destroy_is_idempotent(self, surface):
        snapshots = []
        surface.crosshair_moved.connect(snapshots.append)

        surface.destroy()
        surface.destroy()

        assert surface.state is SurfaceState.DESTROYED
        assert surface.widget is None
        assert surface.items == {}
        assert snapshots == [None]

    def test_resize_after_destroy_is_noop(self, surface, qapp):
        surface.destroy()
        surface.fit_content = Mock()

        surface.resize(800, 300)
        qapp.processEvents()

        surface.fit_content.assert_not_called()

    def test_pending_refit_dropped_on_destroy(self, surface, qapp):
        fit = Mock()
        surface.fit_content = fit
        surface.resize(800, 300)
        surface.destroy()

        qapp.processEvents()
        fit.assert_not_called()

    def test_cursor_emits_snapshot(self, surface):
        snapshots = []
        surface.crosshair_moved.connect(snapshots.append)

        x = time_keys_to_x(['2024-01-02'])[0]
        snapshot = surface.cursor_moved_to(x + 3600)
        surface.cursor_moved_to(None)

        assert snapshot.time == '2024-01-02'
        assert snapshots == [snapshot, None]
        assert not surface.crosshair_v.isVisible()


class TestChartView:

    def test_rebuild_replaces_surface(self, qapp, example_chart_data):
        view = ChartView(height=300)
        first_registry = view.set_chart_data(example_chart_data)
        first_surface = view.surface

        second_registry = view.set_chart_data(example_chart_data)

        assert first_surface.state is SurfaceState.DESTROYED
        assert view.surface is not first_surface
        assert view.surface.state is SurfaceState.MOUNTED
        assert (first_registry.generation, second_registry.generation) == (1, 2)
        assert first_registry.all_identities() == second_registry.all_identities()
        view.clear()

    def test_collision_leaves_no_chart(self, qapp, example_chart_data):
        view = ChartView(height=300)
        view.set_chart_data(example_chart_data)
        old_surface = view.surface

        example_chart_data.indicators.update(normalize_indicators({
            'a.b': [{'datetime': '2024-01-01', 'c': 1.0}],
            'a': [{'datetime': '2024-01-01', 'b.c': 2.0}],
        }))
        with pytest.raises(SeriesRegistrationError):
            view.set_chart_data(example_chart_data)

        assert old_surface.state is SurfaceState.DESTROYED
        assert view.surface is None
        assert view.registry is None

    def test_legend_follows_crosshair(self, qapp, example_chart_data):
        view = ChartView(height=300)
        view.set_chart_data(example_chart_data)

        view.surface.cursor_moved_to(time_keys_to_x(['2024-01-02'])[0])
        assert 'sma.value 50.10' in view.legend.text()

        view.surface.cursor_moved_to(None)
        assert view.legend.text() == ''
        view.clear()

    def test_compact_candle_date_still_mounts(self, qapp, example_payload):
        example_payload['candles'][1]['datetime'] = '20240102T00:00:00'
        chart_data = normalize_result(parse_backtest_response(example_payload))

        view = ChartView(height=300)
        registry = view.set_chart_data(chart_data)

        assert registry.series('price').times == ['2024-01-01']
        assert view.surface.state is SurfaceState.MOUNTED
        view.clear()
