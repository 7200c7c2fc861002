"""
Logging configuration for modelkit.

Features:
- Log level from settings or environment (MODELKIT_LOG_LEVEL)
- Structured JSON logging with timestamps
- Human-readable colored console output
- Optional rotating file output (MODELKIT_LOG_DIR)
- Context propagation through log_context()

The library never installs handlers on import; call setup_logging() from
the application.
"""

import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from modelkit.config import get_settings

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5
LOG_FILE_NAME = "modelkit.log"
ROOT_LOGGER_NAME = "modelkit"

_current_log_level = "WARNING"


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if getattr(record, "context", None):
            log_data["context"] = record.context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "") if self.use_colors else ""
        reset = self.RESET if self.use_colors else ""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        base_msg = f"[{timestamp}] {color}{record.levelname:8}{reset} | {record.name:30} | {record.getMessage()}"

        if getattr(record, "context", None):
            base_msg += f" | context={json.dumps(record.context, ensure_ascii=False, default=str)}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg


class LogContext:
    """Context manager for adding context to logs."""

    _current_context: dict[str, Any] = {}

    def __init__(self, **kwargs: Any):
        self._new_context = kwargs
        self._old_context: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._old_context = LogContext._current_context.copy()
        LogContext._current_context = {**self._old_context, **self._new_context}
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        LogContext._current_context = self._old_context

    @classmethod
    def get_context(cls) -> dict[str, Any]:
        return cls._current_context.copy()


class ContextFilter(logging.Filter):
    """Filter that adds the active LogContext to log records."""

    def __init__(self, context: dict[str, Any] | None = None):
        super().__init__()
        self._context = context or {}

    def filter(self, record: logging.LogRecord) -> bool:
        context = dict(getattr(record, "context", None) or {})
        context.update(self._context)
        context.update(LogContext.get_context())
        record.context = context
        return True


def _build_file_handler(log_dir: Path) -> RotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=MAX_FILE_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(StructuredFormatter())
    return handler


def setup_logging(
    level: str | None = None,
    json_format: bool | None = None,
    log_dir: Path | None = None,
    enable_console: bool = True,
    stream: Any = None,
) -> logging.Logger:
    """
    Setup logging for the modelkit logger hierarchy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON output on the console
        log_dir: Directory for rotating file output
        enable_console: Enable console logging
        stream: Console stream (defaults to stdout)

    Unset arguments fall back to Settings.

    Returns:
        The configured "modelkit" logger
    """
    global _current_log_level

    settings = get_settings()
    _current_log_level = (level or settings.log_level).upper()
    if json_format is None:
        json_format = settings.log_json
    if log_dir is None:
        log_dir = settings.log_path

    numeric_level = getattr(logging, _current_log_level, logging.WARNING)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if enable_console:
        console_handler = logging.StreamHandler(stream or sys.stdout)
        if json_format:
            console_handler.setFormatter(StructuredFormatter())
        else:
            console_handler.setFormatter(HumanFormatter())
        console_handler.setLevel(numeric_level)
        console_handler.addFilter(ContextFilter())
        logger.addHandler(console_handler)

    if log_dir is not None:
        file_handler = _build_file_handler(Path(log_dir))
        file_handler.setLevel(numeric_level)
        file_handler.addFilter(ContextFilter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)
    """
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """
    Dynamically set the log level.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    global _current_log_level
    _current_log_level = level.upper()

    numeric_level = getattr(logging, _current_log_level, logging.WARNING)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)


def get_log_level() -> str:
    return _current_log_level


@contextmanager
def log_context(**kwargs: Any):
    """
    Context manager for adding context to logs.

    Usage:
        with log_context(model="Person"):
            person.validate()
    """
    with LogContext(**kwargs):
        yield
