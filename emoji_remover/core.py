from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from emoji_remover.host import Host, LoggingReporter, Reporter

BUSY_POLICIES = ("reject", "parallel")


@dataclass(frozen=True)
class Options:
    plugin_root: Path | None = None
    cwd: Path | None = None
    on_busy: str = "reject"  # reject|parallel


@dataclass(frozen=True)
class Context:
    logger: logging.Logger
    host: Host
    reporter: Reporter
    options: Options


def build_context(
    *,
    host: Host,
    options: Options,
    logger: logging.Logger,
    reporter: Reporter | None = None,
) -> Context:
    if options.on_busy not in BUSY_POLICIES:
        raise ValueError(
            f"Unknown on_busy policy {options.on_busy!r} (expected one of: {', '.join(BUSY_POLICIES)})"
        )
    return Context(
        logger=logger,
        host=host,
        reporter=reporter if reporter is not None else LoggingReporter(logger),
        options=options,
    )
