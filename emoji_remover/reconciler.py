from __future__ import annotations

import logging
from dataclasses import dataclass

from emoji_remover.host import Host, Reporter


@dataclass(frozen=True)
class ExitOutcome:
    code: int
    stdout_lines: tuple[str, ...] = ()
    stderr_lines: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.code == 0


@dataclass(frozen=True)
class StateReconciler:
    host: Host
    reporter: Reporter
    logger: logging.Logger

    def reconcile(self, outcome: ExitOutcome) -> bool:
        """
        Report the terminal outcome and, on success, have the host reload
        files the tool changed on disk. Returns True when reconciliation ran.
        """
        if not outcome.succeeded:
            # Files may be half-processed or untouched; leave host state alone.
            self.reporter.error(f"Emoji removal failed with exit code: {outcome.code}")
            return False

        self.reporter.info("Emoji removal complete.")
        try:
            self.host.reload_changed()
        except Exception as e:
            # Fire-and-forget: the removal itself succeeded.
            self.logger.debug("Reloading changed files failed: %s", e)
        return True
