"""
Logging Configuration

Progress messages for a deck run go to stderr through the "wishlist_deck"
logger; stdout stays free for the run summary printed by the CLI scripts.
"""

import logging
import sys

PACKAGE_LOGGER = "wishlist_deck"

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
VERBOSE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Libraries that log every request / decoded image at DEBUG
NOISY_LOGGERS = ("urllib3", "PIL")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Attach a stderr handler to the package logger.

    Args:
        verbose: DEBUG level, with timestamps
        quiet: WARNING level (ignored when verbose is set)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(VERBOSE_LOG_FORMAT if verbose else LOG_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling twice must not duplicate output
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
