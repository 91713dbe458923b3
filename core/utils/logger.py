"""
Logging configuration for the application.

Records below ERROR go to stdout; ERROR and above go to stderr so that
failures (provider errors, operation-log write failures) land on the
process diagnostic channel.
"""
import logging
import sys
from typing import Optional

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below the given level"""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (default: INFO)
        log_format: Custom log format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)

    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.setLevel(level)
    out_handler.addFilter(_BelowLevelFilter(logging.ERROR))
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(max(level, logging.ERROR))
    err_handler.setFormatter(formatter)

    logger.addHandler(out_handler)
    logger.addHandler(err_handler)

    return logger


app_logger = setup_logger('drive_gateway')
