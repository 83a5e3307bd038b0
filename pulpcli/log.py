"""Logging setup: one rich handler on the package logger, colour optional."""

import logging
from typing import Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler

ROOT = "pulpcli"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the package namespace."""
    if not name or name == ROOT:
        return logging.getLogger(ROOT)
    if not name.startswith(ROOT + "."):
        name = f"{ROOT}.{name}"
    return logging.getLogger(name)


def configure(*, monochrome: bool = False, debug: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """Install the console handler, replacing one installed earlier.

    `monochrome` comes from the resolved command line options; it is passed in
    explicitly rather than kept as module state.
    """
    logger = logging.getLogger(ROOT)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    console = Console(file=stream, stderr=stream is None, no_color=monochrome, highlight=False)
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    return logger


__all__ = (
    "ROOT",
    "get_logger",
    "configure",
)
