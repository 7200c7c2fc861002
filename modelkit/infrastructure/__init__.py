"""
Infrastructure Module - Core infrastructure components.

Provides:
- logging: Logging configuration and utilities
"""

from modelkit.infrastructure.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
