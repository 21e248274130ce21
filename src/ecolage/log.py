"""Logging setup with rich console output."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "ECOLAGE_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"

_handler: Optional[RichHandler] = None


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.WARNING)


def init_logging(level: str | int = DEFAULT_LEVEL) -> None:
    """Send log records to stderr through rich.

    Calling it again only changes the level.
    """
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(_handler)
    root.setLevel(_parse_level(level))


def shutdown_logging() -> None:
    """Remove the rich handler, intended for tests."""
    global _handler
    if _handler is not None:
        logging.getLogger().removeHandler(_handler)
        _handler = None
