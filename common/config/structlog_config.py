# common/config/structlog_config.py
"""
Process-wide structlog setup.

configure_structlog() runs once, from initialize_config(). Every event
passes through mask_contact_details before rendering so patient emails
and phone numbers never reach the log sink in clear text.
"""
import sys
import os
import threading
from typing import Any, MutableMapping, Optional
import structlog
from rich.traceback import install as install_rich_traceback

install_rich_traceback(show_locals=False, width=None, extra_lines=3)

# Event keys holding patient or staff contact details
CONTACT_KEYS = frozenset(
    {"email", "phone", "patient_email", "patient_phone", "emergency_contact"}
)


class _StructlogState:
    """uvicorn --reload forks workers; each process configures itself once."""

    _lock = threading.Lock()

    def __init__(self) -> None:
        self._log_level: Optional[int] = None
        self._process_id: Optional[int] = None

    @property
    def is_configured(self) -> bool:
        return self._process_id == os.getpid()

    @property
    def log_level(self) -> Optional[int]:
        return self._log_level

    def mark_configured(self, log_level: int) -> None:
        with self._lock:
            self._log_level = log_level
            self._process_id = os.getpid()


_state = _StructlogState()


def _mask(value: str) -> str:
    if "@" in value:
        local, _, domain = value.partition("@")
        return f"{local[:1]}***@{domain}"
    return f"***{value[-2:]}" if len(value) > 2 else "***"


def mask_contact_details(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key in CONTACT_KEYS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, str) and value:
            event_dict[key] = _mask(value)
    return event_dict


def _renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(
            show_locals=False,
            width=None,
            suppress=["starlette", "uvicorn", "fastapi", "sqlalchemy"],
        ),
    )


def configure_structlog(log_level: int, json_output: bool = False) -> None:
    """
    Args:
        log_level: Numeric logging level (e.g., logging.INFO)
        json_output: One JSON object per line (LOG_FORMAT=json) instead of console text

    Raises:
        RuntimeError: If already configured in this process with a different level
    """
    if _state.is_configured:
        if _state.log_level == log_level:
            return
        raise RuntimeError(
            f"structlog already configured in this process. "
            f"Current level: {_state.log_level}, attempted: {log_level}"
        )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        mask_contact_details,
        structlog.processors.TimeStamper(
            fmt="iso" if json_output else "%Y-%m-%d %H:%M:%S", utc=json_output
        ),
    ]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
    else:
        processors.append(structlog.dev.set_exc_info)
    processors.append(_renderer(json_output))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    _state.mark_configured(log_level)


def get_logger(name: str = "hospital") -> Any:
    """
    structlog logger whose events carry `logger=name`.

    Raises:
        RuntimeError: If structlog hasn't been configured yet in this process
    """
    if not _state.is_configured:
        raise RuntimeError(
            "structlog not configured. "
            "Call initialize_config() at application startup."
        )
    return structlog.get_logger().bind(logger=name)


def is_configured() -> bool:
    return _state.is_configured


__all__ = [
    "configure_structlog",
    "get_logger",
    "is_configured",
    "mask_contact_details",
    "CONTACT_KEYS",
]
