"""Core PromptGate utilities.

This module exports core utilities for use throughout the application.
"""

from promptgate.core.config import Settings, get_settings
from promptgate.core.logging import LoggingContext, configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
]
