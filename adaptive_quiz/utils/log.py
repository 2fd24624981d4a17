"""
Logging setup for hosts embedding the quiz engine.

Library modules only create module-level loggers; configure_logging is called
once by the entrypoint.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = "INFO") -> logging.Logger:
    """Configure root logging to stderr.

    Args:
        level: Logging level as int or string (e.g., logging.INFO or "INFO").

    Returns:
        The "adaptive_quiz" package logger.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return logging.getLogger("adaptive_quiz")
