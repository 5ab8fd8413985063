"""Reporting collaborators for non-fatal analysis diagnostics."""

import logging
from typing import Protocol


class Reporter(Protocol):
    """Receives warnings and debug messages from the analysis stages."""

    def warning(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...


class LoggingReporter:
    """Forwards diagnostics to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("ccouple")

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)


class CollectingReporter:
    """Keeps diagnostics in memory."""

    def __init__(self):
        self.warnings: list[str] = []
        self.debug_messages: list[str] = []

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def debug(self, message: str) -> None:
        self.debug_messages.append(message)


def default_reporter(reporter: Reporter | None) -> Reporter:
    return reporter if reporter is not None else LoggingReporter()
