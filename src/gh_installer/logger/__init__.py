"""Logging utilities for gh-installer.

All modules log through ``get_logger(__name__)`` using %-style
formatting. Handlers are attached only to the root ``gh_installer``
logger, through a QueueHandler/QueueListener pair, so the event loop never
blocks on console or file I/O:

    Request task -> QueueHandler -> Queue -> QueueListener thread
                                                 |
                                       Console + File handlers

Environment Variables:
    LOG_LEVEL: Override console log level (DEBUG, INFO, WARNING, ...)
"""

from gh_installer.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
)
from gh_installer.logger.handlers import ConfigurationError
from gh_installer.logger.logger import (
    clear_logger_state,
    configure_logging,
    get_logger,
    setup_logging,
)
from gh_installer.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "clear_logger_state",
    "configure_logging",
    "get_logger",
    "get_state",
    "setup_logging",
]
