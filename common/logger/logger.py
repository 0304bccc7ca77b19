# common/logger/logger.py
"""
Application logger.

Usage:
    from common.logger import get_app_logger

    logger = get_app_logger(__name__)
    logger.info("Appointment booked", appointment_id=appointment.id)

    # Per-request context
    request_logger = logger.bind(request_id=request.state.request_id)

    # With timing enabled the logger shows up under GET /metrics
    logger = get_app_logger(__name__, track_timing=True)
"""

import time
from typing import Any, Dict, Optional

from common.config.structlog_config import get_logger as _get_structlog_logger


class TimingStats:
    """How long log calls take, for loggers created with track_timing."""

    def __init__(self) -> None:
        self.total_calls = 0
        self.total_time = 0.0
        self.max_time = 0.0

    def record(self, elapsed: float) -> None:
        self.total_calls += 1
        self.total_time += elapsed
        self.max_time = max(self.max_time, elapsed)

    def get_stats(self) -> Dict[str, Any]:
        avg = self.total_time / self.total_calls if self.total_calls else 0
        return {
            "total_calls": self.total_calls,
            "avg_time_ms": round(avg * 1000, 4),
            "max_time_ms": round(self.max_time * 1000, 4),
        }


# logger name -> stats, shared by every timed logger of that name
_timing_registry: Dict[str, TimingStats] = {}


class AppLogger:
    """
    Keyword-context facade over structlog.

    The structlog logger is resolved on first use, so modules create their
    logger at import time, before initialize_config() has run.
    """

    def __init__(
        self,
        name: str = "hospital",
        track_timing: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._name = name
        self._context = dict(context or {})
        self._logger_instance: Optional[Any] = None
        self._timing_stats: Optional[TimingStats] = (
            _timing_registry.setdefault(name, TimingStats()) if track_timing else None
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def _logger(self) -> Any:
        if self._logger_instance is None:
            self._logger_instance = _get_structlog_logger(self._name).bind(**self._context)
        return self._logger_instance

    def bind(self, **context: Any) -> "AppLogger":
        """Child logger that adds `context` to every event."""
        return AppLogger(
            self._name,
            track_timing=self._timing_stats is not None,
            context={**self._context, **context},
        )

    def _log(self, level: str, msg: str, **kwargs: Any) -> None:
        start_time = time.perf_counter()
        try:
            getattr(self._logger, level)(msg, **kwargs)
        finally:
            if self._timing_stats is not None:
                self._timing_stats.record(time.perf_counter() - start_time)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log("debug", msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log("info", msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log("warning", msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log("error", msg, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self._log("critical", msg, **kwargs)

    def get_timing_stats(self) -> Dict[str, Any]:
        if self._timing_stats is None:
            return {"error": "Timing tracking not enabled"}
        return self._timing_stats.get_stats()


def get_app_logger(name: str = "hospital", track_timing: bool = False) -> AppLogger:
    """
    Example:
        >>> logger = get_app_logger(__name__, track_timing=True)
        >>> logger.info("Doctor deleted", doctor_id="d1")
    """
    return AppLogger(name=name, track_timing=track_timing)


def get_all_timing_stats() -> Dict[str, Dict[str, Any]]:
    """Stats of every logger created with track_timing, keyed by logger name."""
    return {name: stats.get_stats() for name, stats in sorted(_timing_registry.items())}


# Convenience instance for simple usage
logger = get_app_logger()

__all__ = ["logger", "AppLogger", "get_app_logger", "get_all_timing_stats", "TimingStats"]
