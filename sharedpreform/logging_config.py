"""
Logging configuration for the sharedpreform generator.

Usage in modules:
    from sharedpreform.logging_config import get_logger
    logger = get_logger(__name__)

All loggers live under the "sharedpreform" hierarchy. Levels are set by the CLI.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "sharedpreform"


def get_logger(name: str = None) -> logging.Logger:
    """
    Return a logger under the sharedpreform hierarchy.

    Args:
        name: Module __name__, or None for the root package logger.

    Returns:
        logging.Logger instance
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the sharedpreform logger hierarchy.

    Levels:
        --verbose / -v  -> DEBUG
        (default)       -> WARNING
        --quiet / -q    -> ERROR

    Args:
        verbose: Enable DEBUG-level output.
        quiet: Only show errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    # Avoid duplicate handlers when called multiple times
    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.propagate = False
