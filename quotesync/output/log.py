# quotesync Logging
# Diagnostic logging through rich on stderr, optionally to a file

import logging
from pathlib import Path

from rich.console import Console as RichConsole
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(*, verbose: bool = False, log_file: str | None = None) -> logging.Logger:
    """
    Configure the ``quotesync`` logger.

    Args:
        verbose: Log debug messages (default: warnings only).
        log_file: Optional file receiving all messages at INFO or above.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("quotesync")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=RichConsole(stderr=True),
        show_path=False,
        rich_tracebacks=verbose,
    )
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger
