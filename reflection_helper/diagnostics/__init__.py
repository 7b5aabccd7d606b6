"""Diagnostics file sink and logging setup."""

from .config import DiagnosticsConfig, DEFAULT_LOG_FILENAME
from .logger import setup_logging
from .sink import DiagnosticsSink

__all__ = [
    "DiagnosticsConfig",
    "DEFAULT_LOG_FILENAME",
    "DiagnosticsSink",
    "setup_logging",
]
