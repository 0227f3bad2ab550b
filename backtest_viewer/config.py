# backtest_viewer/config.py - Configuration for the backtest viewer
"""
Configuration module for the backtest viewer.
Handles environment variables, service endpoint, chart sizing and logging setup.
"""

import os
import sys
import logging
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# .env lives in the project root (one level up from backtest_viewer/)
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

DEFAULT_API_URL = "https://backtesting-mini-engine-v1-hc8o.onrender.com"


class ViewerConfig:
    """
    [CLASS SUMMARY]
    Purpose: Centralized configuration for the viewer
    Responsibilities:
        - Resolve the backtest service URL and request timeout
        - Provide chart sizing (height, volume overlay margin)
        - Provide logging level and log directory
    Usage:
        config = ViewerConfig()
        config.api_url
    """

    def __init__(self, config_override: Optional[Dict[str, Any]] = None):
        """
        [FUNCTION SUMMARY]
        Purpose: Initialize configuration with environment variables and optional overrides
        Parameters:
            - config_override (dict, optional): Override settings, mostly for testing
        Example: ViewerConfig({'chart_height': 600}) -> config with a taller chart
        """
        self.config_override = config_override or {}

        self._load_api_config()
        self._load_chart_config()
        self._load_logging_config()

    def _get(self, key: str, env_name: str, default: Any) -> Any:
        if key in self.config_override:
            return self.config_override[key]
        return os.getenv(env_name, default)

    def _get_number(self, key: str, env_name: str, default: Any, cast):
        raw = self._get(key, env_name, default)
        try:
            return cast(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid value for {env_name}", key, raw)

    def _load_api_config(self):
        self.api_url = str(self._get('api_url', 'BACKTEST_API_URL', DEFAULT_API_URL)).rstrip('/')
        self.backtest_endpoint = f"{self.api_url}/backtest"
        self.request_timeout = self._get_number('request_timeout', 'BACKTEST_TIMEOUT', 120, float)

    def _load_chart_config(self):
        self.chart_height = self._get_number('chart_height', 'CHART_HEIGHT', 400, int)
        if self.chart_height <= 0:
            raise ConfigurationError("Chart height must be positive", 'chart_height', self.chart_height)

        # Fraction of the surface above the volume histogram
        self.volume_margin_top = self._get_number('volume_margin_top', 'VOLUME_MARGIN_TOP', 0.8, float)
        if not 0.0 <= self.volume_margin_top < 1.0:
            raise ConfigurationError(
                "Volume margin must be in [0, 1)", 'volume_margin_top', self.volume_margin_top
            )

    def _load_logging_config(self):
        self.log_level = str(self._get('log_level', 'LOG_LEVEL', 'INFO')).upper()
        self.log_dir = Path(self._get('log_dir', 'LOG_DIR', Path(__file__).parent.parent / 'logs'))


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None,
                  level: str = 'INFO') -> Optional[Path]:
    """Set up logging configuration, returns the log file path when file logging is enabled"""
    log_level = logging.DEBUG if debug else getattr(logging, level, logging.INFO)
    handlers = [logging.StreamHandler(sys.stdout)]

    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"backtest_viewer_{timestamp}.log"
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    # Silence noisy loggers
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    return log_file
