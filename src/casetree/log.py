"""Logging setup for the `casetree` logger namespace."""

import logging

logger = logging.getLogger("casetree")


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure casetree logging.

    Params:
        verbose: Show INFO level logs (sub-run logs of the pytest reporter)
        debug: Show DEBUG level logs (tree builds, execution phases)
    """
    level = logging.WARNING
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO

    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)
