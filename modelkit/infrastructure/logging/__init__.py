"""Logging infrastructure for modelkit."""

from modelkit.infrastructure.logging.logging_config import (
    ContextFilter,
    HumanFormatter,
    LogContext,
    StructuredFormatter,
    get_log_level,
    get_logger,
    log_context,
    set_log_level,
    setup_logging,
)

__all__ = [
    "ContextFilter",
    "HumanFormatter",
    "LogContext",
    "StructuredFormatter",
    "get_log_level",
    "get_logger",
    "log_context",
    "set_log_level",
    "setup_logging",
]
