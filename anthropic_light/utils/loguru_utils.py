"""
Logging utilities using loguru for clean, structured client logs.

Provides a thin wrapper that binds structured context to every record and
times outgoing API calls.
"""

import time
import uuid
from typing import Any, Dict

from loguru import logger


class LoguruLogger:
    """Enhanced logger wrapper for loguru with structured logging."""

    def __init__(self, name: str = "anthropic_light"):
        """Initialize logger with name."""
        self.name = name
        self._start_times: Dict[str, float] = {}

    def _log(self, level: str, message: str, **kwargs):
        """Internal log method with context."""
        logger.bind(component=self.name, **kwargs).log(level, message)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self._log("DEBUG", message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self._log("WARNING", message, **kwargs)

    def start_timer(self, operation: str) -> str:
        """Start a timer for an operation."""
        timer_id = f"{operation}_{uuid.uuid4().hex[:8]}"
        self._start_times[timer_id] = time.monotonic()
        return timer_id

    def stop_timer(self, timer_id: str) -> float:
        """Stop a timer and return the elapsed seconds."""
        started = self._start_times.pop(timer_id, None)
        if started is None:
            self.warning(f"Timer not found: {timer_id}")
            return 0.0
        return time.monotonic() - started

    def log_api_request(self, method: str, url: str, **kwargs: Any) -> None:
        """Log an outgoing API request."""
        self.debug(f"Request {method} {url}", method=method, path=url, **kwargs)

    def log_api_response(self, method: str, url: str, status_code: int, duration: float, **kwargs: Any) -> None:
        """Log the status of an API response."""
        level = "WARNING" if status_code >= 400 else "DEBUG"
        self._log(
            level,
            f"Response {status_code}",
            method=method,
            path=url,
            status_code=status_code,
            duration_seconds=duration,
            **kwargs
        )
