# Logging setup for metanames.
# Library modules only create loggers; handlers are attached here,
# by the cli, so embedding applications keep control of their own logging.

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "metanames"


def setup_logging(verbose: bool = False) -> logging.Logger:
    # Parse failures are logged at DEBUG, so they only show up with --verbose.
    level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers so repeated cli invocations in one process don't stack.
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
