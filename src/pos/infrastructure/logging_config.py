"""structlog setup for the CLI.

Library code only calls ``structlog.get_logger()``; configuring output is
left to the entry point so tests and embedding applications stay in
control of it.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog


def configure_logging(level: str | None = None) -> None:
    """Send key-value log lines to stderr at *level* (or ``POS_LOG_LEVEL``)."""
    name = (level or os.environ.get("POS_LOG_LEVEL", "WARNING")).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
