import logging
import sys
from typing import TextIO

import structlog
from structlog.stdlib import add_log_level, add_logger_name


def setup_logging(
    level: int = logging.INFO, colors: bool = True, stream: TextIO | None = None
) -> None:
    """Configure structlog and standard logging with the given level.

    Log lines go to ``stream`` (stderr by default) so that maps printed on
    stdout stay clean.
    """
    logging.basicConfig(
        level=level, format="%(message)s", stream=stream or sys.stderr, force=True
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
