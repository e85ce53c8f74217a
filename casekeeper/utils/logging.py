"""Logging configuration for casekeeper.

Every module logs under the "casekeeper" logger. Console records go through
Rich by default, or as plain timestamped lines on stderr when the output is
piped or scripted. An optional log file always receives everything down to
DEBUG, so timer decisions can be audited after the fact.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


# Log output shares stderr so command output on stdout stays clean
console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(message)s"

ROOT_LOGGER = "casekeeper"


def _console_handler(rich_output: bool) -> logging.Handler:
    if not rich_output:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        return handler

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    rich_output: bool = True,
) -> logging.Logger:
    """
    Configure the casekeeper logger.

    Calling it again replaces the handlers, so each CLI invocation starts
    from a clean configuration.

    Args:
        level: Console log level name (unknown names fall back to WARNING)
        log_file: Optional file that receives DEBUG and above
        rich_output: Rich console handler when True, plain stderr lines otherwise

    Returns:
        The "casekeeper" logger
    """
    console_level = getattr(logging, str(level).upper(), None)
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    console_handler = _console_handler(rich_output)
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    # The logger passes DEBUG whenever a file is attached; handlers filter
    logger.setLevel(logging.DEBUG if log_file else console_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a casekeeper module, e.g. get_logger(__name__)."""
    return logging.getLogger(name)
