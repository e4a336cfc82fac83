"""Logging setup for swift_typegen.

All modules log through children of the ``swift_typegen`` logger. Handlers
are only installed by ``configure_logging`` (called from the CLI), so library
users keep full control over where diagnostics go.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "swift_typegen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``swift_typegen``.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: str = "WARNING", console: Optional[Console] = None
) -> logging.Logger:
    """Install a rich handler on the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        console: Console to log to. Defaults to a stderr console.

    Returns:
        The package root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    root.setLevel(numeric_level)

    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True

    return root
