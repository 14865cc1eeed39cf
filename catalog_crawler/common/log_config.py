"""
Logging Configuration

Console logging goes to stderr; the crawler scripts print their banners and
run summaries on stdout. Long crawls can also mirror the log to a file.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s " + LOG_FORMAT

# Third-party loggers that are noisy at INFO
NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the catalog_crawler logger.

    Args:
        verbose: DEBUG level (wins over quiet)
        quiet: WARNING level
        log_file: Optional path that also receives every record at DEBUG

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO

    logger = logging.getLogger("catalog_crawler")
    logger.setLevel(logging.DEBUG if log_file else level)

    # Calling twice (tests, chained scripts) must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger
