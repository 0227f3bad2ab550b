# backtest_viewer/data/rest_client.py
"""
REST API client for the backtest service.
Issues the request and surfaces raw success/failure; never retries.
"""
import logging
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

import requests
from PyQt6.QtCore import QThread, pyqtSignal

from ..exceptions import BacktestAPIError, ViewerError
from .models import BacktestResult
from .payload import parse_backtest_response

logger = logging.getLogger(__name__)


@dataclass
class BacktestRequest:
    """Request body for POST /backtest"""
    strategy_code: str
    strategy_name: str
    data_source: str
    start_date: str
    end_date: str
    initial_cash: float
    strategy_params: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        # Strategy sources may carry literal '\n' escapes; the service needs real newlines
        return {
            'strategy_code': self.strategy_code.replace('\\n', '\n'),
            'strategy_name': self.strategy_name,
            'strategy_params': dict(self.strategy_params),
            'data_source': self.data_source,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'initial_cash': float(self.initial_cash),
        }


class BacktestClient:
    """
    REST API client for the backtest service

    Usage:
        client = BacktestClient(config.backtest_endpoint)
        result = client.run_backtest(request)
    """

    def __init__(self, endpoint: str, timeout: float = 120):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    def run_backtest(self, request: BacktestRequest) -> BacktestResult:
        """
        Submit a backtest and parse the response

        Raises:
            BacktestAPIError: network failure, non-2xx status or non-JSON body
            PayloadError: body is JSON but not a backtest result
        """
        payload = request.to_payload()
        logger.info(f"Submitting backtest {request.strategy_name} on {request.data_source} "
                    f"{request.start_date}..{request.end_date}")

        try:
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error("Backtest request timeout")
            raise BacktestAPIError("Request timeout - server may be busy", endpoint=self.endpoint)
        except requests.exceptions.RequestException as e:
            logger.error(f"Backtest request failed: {e}")
            raise BacktestAPIError(f"Failed to reach backtest service: {e}", endpoint=self.endpoint)

        if not response.ok:
            logger.error(f"HTTP {response.status_code}: {response.text[:200]}")
            raise BacktestAPIError(
                f"API Error: {response.status_code} {response.reason}",
                status_code=response.status_code,
                response_body=response.text
            )

        try:
            body = response.json()
        except ValueError:
            raise BacktestAPIError("Backtest service returned a non-JSON body",
                                   status_code=response.status_code,
                                   response_body=response.text)

        result = parse_backtest_response(body)
        logger.info(f"Backtest finished: success={result.success}, "
                    f"return={result.metrics.total_return:.2f}%")
        return result

    def close(self):
        self.session.close()


class BacktestWorker(QThread):
    """Worker thread for one backtest request"""

    result_ready = pyqtSignal(object)  # BacktestResult
    error_occurred = pyqtSignal(str)

    def __init__(self, client: BacktestClient, request: BacktestRequest, parent=None):
        super().__init__(parent)
        self.client = client
        self.request = request

    def run(self):
        try:
            result = self.client.run_backtest(self.request)
        except ViewerError as e:
            self.error_occurred.emit(e.message)
            return
        self.result_ready.emit(result)
