"""Utility functions."""

from boxconfig.utils.logging import configure_logging, get_logger, redact

__all__ = [
    "configure_logging",
    "get_logger",
    "redact",
]
