"""
Logging setup for Dice Roller.

Library modules only create loggers; handlers are installed here, by the CLI.
Output goes to stderr through Rich so it never mixes with --json output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "diceroller"


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: Show INFO messages
        debug: Show DEBUG messages and full tracebacks

    Returns:
        The configured "diceroller" logger
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # Avoid duplicate output when called more than once
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger
