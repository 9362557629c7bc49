"""
Logging configuration for the ``polybevel`` namespace.
"""
from __future__ import annotations

import logging


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send ``polybevel`` records to stderr, debug level when *verbose*.

    Calling it again replaces the handler rather than adding a second one.
    """
    logger = logging.getLogger("polybevel")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
