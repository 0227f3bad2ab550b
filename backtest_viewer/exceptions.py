# backtest_viewer/exceptions.py - Custom exceptions for the backtest viewer
"""
Custom exception classes for the backtest viewer.
Malformed rows are never raised; only integration and transport faults are.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ViewerError(Exception):
    """
    [CLASS SUMMARY]
    Purpose: Base exception class for all viewer errors
    Usage: Base class for inheritance, rarely raised directly
    Attributes:
        - message: Error description
        - details: Additional context dictionary
        - timestamp: When the error occurred (UTC)
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        """Format error message with details if available"""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class SeriesRegistrationError(ViewerError):
    """
    [CLASS SUMMARY]
    Purpose: Raised when a series identity is registered twice in one generation,
             or when registering into a sealed registry
    Usage: Fatal to the current rebuild; callers must not swallow it
    """

    def __init__(self, message: str, identity: str, generation: int, **kwargs):
        details = kwargs
        details['identity'] = identity
        details['generation'] = generation

        super().__init__(message, details)
        self.identity = identity
        self.generation = generation


class SurfaceStateError(ViewerError):
    """Raised on an invalid chart surface lifecycle transition"""

    def __init__(self, message: str, state: str):
        super().__init__(message, {'state': state})
        self.state = state


class PayloadError(ViewerError):
    """
    [CLASS SUMMARY]
    Purpose: Raised when the backend payload does not have the expected top-level shape
    Common scenarios:
        - Body is not a JSON object
        - 'candles' / 'equity' / 'trades' is not a list
        - 'indicators' is not a mapping
    """

    def __init__(self, message: str, field: Optional[str] = None):
        details = {'field': field} if field else None
        super().__init__(message, details)
        self.field = field


class BacktestAPIError(ViewerError):
    """
    [CLASS SUMMARY]
    Purpose: Raised when the backtest service cannot be reached or answers with an error
    Usage: Surfaced to the user as a message, never retried
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_body: Optional[str] = None, **kwargs):
        details = kwargs
        if status_code:
            details['status_code'] = status_code
        if response_body:
            details['response_body'] = response_body[:200]

        super().__init__(message, details)
        self.status_code = status_code


class ConfigurationError(ViewerError):
    """Raised when a configuration value is present but invalid"""

    def __init__(self, message: str, config_key: str, value: Any = None):
        super().__init__(message, {'config_key': config_key, 'value': value})
        self.config_key = config_key
