# backtest_viewer/tests/test_config.py
"""
Module: Configuration Tests
Purpose: Environment and override resolution, value validation
"""
import logging

import pytest

from backtest_viewer.config import ViewerConfig, DEFAULT_API_URL, setup_logging
from backtest_viewer.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('BACKTEST_API_URL', 'BACKTEST_TIMEOUT', 'CHART_HEIGHT',
                 'VOLUME_MARGIN_TOP', 'LOG_LEVEL', 'LOG_DIR'):
        monkeypatch.delenv(name, raising=False)


class TestViewerConfig:

    def test_defaults(self):
        config = ViewerConfig()
        assert config.api_url == DEFAULT_API_URL
        assert config.backtest_endpoint == f"{DEFAULT_API_URL}/backtest"
        assert config.request_timeout == 120.0
        assert config.chart_height == 400
        assert config.volume_margin_top == 0.8
        assert config.log_level == 'INFO'

    def test_environment(self, monkeypatch):
        monkeypatch.setenv('BACKTEST_API_URL', 'http://localhost:8000/')
        monkeypatch.setenv('CHART_HEIGHT', '600')
        config = ViewerConfig()
        assert config.backtest_endpoint == 'http://localhost:8000/backtest'
        assert config.chart_height == 600

    def test_override_wins(self, monkeypatch):
        monkeypatch.setenv('CHART_HEIGHT', '600')
        config = ViewerConfig({'chart_height': 250, 'log_level': 'debug'})
        assert config.chart_height == 250
        assert config.log_level == 'DEBUG'

    @pytest.mark.parametrize('override', [
        {'chart_height': 'tall'},
        {'chart_height': 0},
        {'volume_margin_top': 1.0},
        {'volume_margin_top': -0.1},
        {'request_timeout': 'soon'},
    ])
    def test_invalid_values(self, override):
        with pytest.raises(ConfigurationError) as exc_info:
            ViewerConfig(override)
        assert exc_info.value.config_key == next(iter(override))


class TestSetupLogging:

    def test_file_handler_created(self, tmp_path):
        log_file = setup_logging(debug=True, log_dir=tmp_path)
        assert log_file.parent == tmp_path
        assert log_file.name.startswith('backtest_viewer_')
        assert logging.getLogger('urllib3').level == logging.WARNING
