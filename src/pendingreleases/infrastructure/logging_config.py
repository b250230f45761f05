"""
Logging configuration module.

Log records go to stderr through rich, so the report table printed on stdout
is never interleaved with diagnostics. An optional log file receives every
record at DEBUG level in plain text.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Libraries that log connection chatter at INFO
QUIET_LOGGERS = ("pyodbc",)


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=level <= logging.DEBUG,
        markup=False,
        rich_tracebacks=False,
        log_time_format="[%H:%M:%S]",
    )
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    handler.setLevel(level)
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(level: int = logging.WARNING, log_file: str | None = None) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Console logging level (logging.DEBUG for --verbose)
        log_file: Optional path to a log file; always written at DEBUG
    """
    handlers = [_console_handler(level)]
    if log_file:
        handlers.append(_file_handler(log_file))

    # Root passes everything; each handler filters on its own level
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Console log level: %s", logging.getLevelName(level))
    if log_file:
        logger.debug("Writing log file: %s", log_file)
