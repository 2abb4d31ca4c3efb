"""Console logging setup for applications embedding topsort."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(*, verbose: bool = False, console: Console | None = None) -> None:
    """Send log records to stderr through rich.

    The library itself never configures logging; call this from an
    application entry point.

    Args:
        verbose: Log at DEBUG instead of INFO, and show source locations.
        console: Console to write to. Defaults to a stderr console.

    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=console if console is not None else Console(stderr=True),
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
        force=True,
    )
