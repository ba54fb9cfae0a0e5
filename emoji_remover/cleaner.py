from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from emoji_remover.core import Context
from emoji_remover.errors import ExecutableNotFound, FlushFailure
from emoji_remover.invocation import ToolConfiguration, patterns_summary, prepare_invocation
from emoji_remover.locator import ResolvedExecutable, locate_binary
from emoji_remover.reconciler import StateReconciler
from emoji_remover.state import Invocation
from emoji_remover.supervisor import ProcessSupervisor


class EmojiCleaner:
    """
    Runs the external emoji remover against the workspace.

    `clean()` is what the editor command calls: it schedules the whole
    lifecycle on the running event loop and returns at once. `run()` is the
    awaitable form used by the CLI and tests.
    """

    def __init__(
        self,
        ctx: Context,
        *,
        supervisor: ProcessSupervisor | None = None,
        locate: Callable[[Path | None], ResolvedExecutable] = locate_binary,
    ) -> None:
        self._ctx = ctx
        self._supervisor = supervisor if supervisor is not None else ProcessSupervisor(logger=ctx.logger)
        self._locate = locate
        self._active: set[Invocation] = set()

    @property
    def busy(self) -> bool:
        return bool(self._active)

    def _new_invocation(self) -> Invocation:
        ctx = self._ctx
        reconciler = StateReconciler(host=ctx.host, reporter=ctx.reporter, logger=ctx.logger)
        return Invocation(reporter=ctx.reporter, reconciler=reconciler, logger=ctx.logger)

    def clean(self, config: ToolConfiguration | None = None) -> asyncio.Task[Invocation] | None:
        """Schedule an invocation without blocking. Returns None if rejected as busy."""
        loop = asyncio.get_running_loop()
        if self._reject_if_busy():
            return None
        invocation = self._new_invocation()
        # Claim the slot now so a second clean() before the task starts is rejected too.
        self._active.add(invocation)
        task = loop.create_task(self._drive(invocation, config or ToolConfiguration()))
        # A task cancelled before its first step never reaches _drive's finally.
        task.add_done_callback(lambda _t: self._active.discard(invocation))
        return task

    async def run(self, config: ToolConfiguration | None = None) -> Invocation | None:
        if self._reject_if_busy():
            return None
        invocation = self._new_invocation()
        self._active.add(invocation)
        return await self._drive(invocation, config or ToolConfiguration())

    def _reject_if_busy(self) -> bool:
        if self._ctx.options.on_busy == "reject" and self._active:
            self._ctx.reporter.warning("Emoji Remover is already running.")
            return True
        return False

    async def _drive(self, invocation: Invocation, config: ToolConfiguration) -> Invocation:
        ctx = self._ctx
        try:
            invocation.launching()
            ctx.logger.debug(
                "include: %s; exclude: %s",
                patterns_summary(config.include),
                patterns_summary(config.exclude),
            )
            try:
                request = prepare_invocation(
                    config,
                    plugin_root=ctx.options.plugin_root,
                    cwd=ctx.options.cwd,
                    locate=self._locate,
                )
            except ExecutableNotFound as e:
                invocation.abort(e)
                return invocation

            # The tool reads from disk, so pending edits must land first.
            try:
                ctx.host.flush_all()
            except Exception as e:
                invocation.abort(FlushFailure(e))
                return invocation

            ctx.reporter.info("Running Emoji Remover...")
            handle = await self._supervisor.launch(request)
            invocation.running(handle.pid)
            await invocation.consume(handle)
            return invocation
        finally:
            self._active.discard(invocation)
