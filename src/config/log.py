"""
Logging setup for the CLI entry points.

Log records go to stderr through Rich so they never mix with the
product listings the chat loop prints to stdout.
"""

import logging
from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure the root logger with a Rich handler.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    # httpx logs every request at INFO; keep it quiet unless debugging
    if logging.getLogger().level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
