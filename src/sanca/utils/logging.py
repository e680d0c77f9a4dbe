"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "sanca"


def configure_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Route sanca logs to stderr through rich.

    WARNING by default, INFO with ``verbose``, DEBUG with ``debug``. Calling it
    again replaces the previously installed handler.
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
