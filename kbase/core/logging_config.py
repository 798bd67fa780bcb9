"""
Logging configuration for the kbase CLI and server.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "kbase-stderr"


def configure_logging(verbose: bool = False) -> None:
    """
    Configure the package logger with a single stderr handler.

    Parameters
    ----------
    verbose : bool
        Log at DEBUG level instead of WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger("kbase")
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    else:
        # sys.stderr may have been swapped since the last call (test runners)
        handler.setStream(sys.stderr)

    handler.setLevel(level)
