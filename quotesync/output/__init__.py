# quotesync Output Module
# Rich console output and logging setup

from quotesync.output.console import Console, create_console, format_timestamp
from quotesync.output.log import setup_logging

__all__ = [
    "Console",
    "create_console",
    "format_timestamp",
    "setup_logging",
]
