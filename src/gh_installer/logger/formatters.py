"""Console formatters for the gh_installer logging system."""

import logging

from gh_installer.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter that colors the level name with ANSI codes."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with a colored level name.

        The record's levelname is restored afterwards so other handlers
        sharing the record see the plain value.
        """
        if record.levelname not in LOG_COLORS:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = (
            f"{LOG_COLORS[original_levelname]}{original_levelname}"
            f"{LOG_COLORS['RESET']}"
        )
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class HybridConsoleFormatter(ColoredConsoleFormatter):
    """Plain messages for INFO, structured colored lines for the rest.

    Request logs ("serving script ...") stay readable while warnings and
    errors keep the logger name and timestamp.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format INFO records as bare messages."""
        if record.levelno == logging.INFO:
            return record.getMessage()
        return super().format(record)
