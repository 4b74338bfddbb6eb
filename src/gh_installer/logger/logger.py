"""Public logging API: setup_logging, get_logger and test helpers."""

import atexit
import logging
import os
from pathlib import Path

from gh_installer.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
)
from gh_installer.logger.handlers import ROOT_LOGGER_NAME, setup_root_logger
from gh_installer.logger.state import get_state


def _cleanup_logging() -> None:
    state = get_state()
    if state.queue_listener is not None:
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure logging and return the named logger.

    The root ``gh_installer`` logger is initialized exactly once; later
    calls only look up child loggers, which propagate to the root.

    The ``LOG_LEVEL`` environment variable overrides the console level.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level
        log_file: Optional rotating log file

    Returns:
        Logger instance

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            console_level = (
                os.getenv("LOG_LEVEL")
                or console_level
                or DEFAULT_CONSOLE_LOG_LEVEL
            ).upper()
            setup_root_logger(
                state,
                console_level,
                (file_level or DEFAULT_LOG_LEVEL).upper(),
                log_file,
            )
    return logging.getLogger(name)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger, initializing the root logger with defaults if needed.

    Example:
        >>> from gh_installer.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("serving script %s/%s", user, program)

    """
    return setup_logging(name=name)


def configure_logging(
    console_level: str,
    file_level: str,
    log_file: Path | None,
) -> None:
    """Re-initialize the root logger from loaded server settings.

    Called once by the entry point after configuration is loaded; modules
    that already hold loggers keep working since only handlers change.
    """
    clear_logger_state(keep_loggers=True)
    setup_logging(
        console_level=console_level,
        file_level=file_level,
        log_file=log_file,
    )


def clear_logger_state(*, keep_loggers: bool = False) -> None:
    """Stop the queue listener and reset state.

    Intended for tests and for reconfiguration at startup.

    Args:
        keep_loggers: Keep child logger objects registered (only the root
            handlers are removed)

    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            state.queue_listener.stop()
            for handler in state.queue_listener.handlers:
                handler.close()
            state.queue_listener = None
        state.log_queue = None
        state.root_initialized = False

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)

        if keep_loggers:
            return
        for logger_name in list(logging.Logger.manager.loggerDict):
            if logger_name.startswith(ROOT_LOGGER_NAME + "."):
                del logging.Logger.manager.loggerDict[logger_name]
