#!/usr/bin/env python3

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler


class Console:
    """Simple console wrapper focused on output."""

    def __init__(self, stderr: bool = False):
        self._rich = RichConsole(stderr=stderr)

    def print(self, *args, **kwargs):
        """Print using Rich console."""
        return self._rich.print(*args, **kwargs)

    def setup_logging(self, verbose: bool = False) -> logging.Logger:
        """Route the ccouple logger through this console."""
        handler = RichHandler(console=self._rich, show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger = logging.getLogger("ccouple")
        logger.handlers = [handler]
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        logger.propagate = False
        return logger
