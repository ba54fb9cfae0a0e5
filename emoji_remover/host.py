"""
Capabilities the editor host lends to the invocation layer.

The core never talks to an editor directly; it only sees these two narrow
protocols, so tests (and the standalone CLI) can supply their own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol


class Host(Protocol):
    def flush_all(self) -> None:
        """Write every modified buffer to disk (`:wall`)."""
        ...

    def reload_changed(self) -> None:
        """Reload buffers whose files changed on disk (`:checktime`)."""
        ...


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass(frozen=True)
class LoggingReporter:
    logger: logging.Logger

    def info(self, message: str) -> None:
        self.logger.info("%s", message)

    def warning(self, message: str) -> None:
        self.logger.warning("%s", message)

    def error(self, message: str) -> None:
        self.logger.error("%s", message)


@dataclass(frozen=True)
class StandaloneHost:
    """Host used outside an editor: there are no buffers to flush or reload."""

    logger: logging.Logger

    def flush_all(self) -> None:
        self.logger.debug("No editor buffers to flush.")

    def reload_changed(self) -> None:
        self.logger.debug("No editor buffers to reload.")
