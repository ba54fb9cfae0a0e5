from __future__ import annotations

import logging
from enum import Enum

from emoji_remover.errors import EmojiRemoverError, ExternalFailure, InvalidTransition
from emoji_remover.host import Reporter
from emoji_remover.reconciler import ExitOutcome, StateReconciler
from emoji_remover.supervisor import ErrorLine, Exited, Message, OutputLine, ProcessHandle


class InvocationState(str, Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_TRANSITIONS: dict[InvocationState, frozenset[InvocationState]] = {
    InvocationState.IDLE: frozenset({InvocationState.LAUNCHING}),
    InvocationState.LAUNCHING: frozenset({InvocationState.RUNNING, InvocationState.FAILED}),
    InvocationState.RUNNING: frozenset({InvocationState.SUCCEEDED, InvocationState.FAILED}),
    InvocationState.SUCCEEDED: frozenset(),
    InvocationState.FAILED: frozenset(),
}

TERMINAL_STATES = frozenset({InvocationState.SUCCEEDED, InvocationState.FAILED})


class Invocation:
    """
    Single owner of one launch-to-exit lifecycle.

    Process events arrive as messages (see supervisor) and are applied in
    order; the exit message drives reconciliation and moves the invocation
    to a terminal state. A new request always gets a fresh Invocation.
    """

    def __init__(self, *, reporter: Reporter, reconciler: StateReconciler, logger: logging.Logger) -> None:
        self._reporter = reporter
        self._reconciler = reconciler
        self._logger = logger
        self._state = InvocationState.IDLE
        self._stdout: list[str] = []
        self._stderr: list[str] = []
        self.outcome: ExitOutcome | None = None
        self.error: EmojiRemoverError | None = None
        self.pid: int | None = None

    @property
    def state(self) -> InvocationState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state in TERMINAL_STATES

    def _move(self, new: InvocationState) -> None:
        if new not in _TRANSITIONS[self._state]:
            raise InvalidTransition(f"Invalid invocation transition: {self._state.value} -> {new.value}")
        self._logger.debug("invocation %s -> %s", self._state.value, new.value)
        self._state = new

    def launching(self) -> None:
        self._move(InvocationState.LAUNCHING)

    def abort(self, error: EmojiRemoverError) -> None:
        """Fail before anything was spawned; reports the error once."""
        self._move(InvocationState.FAILED)
        self.error = error
        self._reporter.error(str(error))

    def running(self, pid: int | None = None) -> None:
        self._move(InvocationState.RUNNING)
        self.pid = pid

    def handle(self, msg: Message) -> None:
        if self._state is not InvocationState.RUNNING:
            raise InvalidTransition(f"Received {type(msg).__name__} while {self._state.value}")

        if isinstance(msg, OutputLine):
            if msg.text != "":
                self._stdout.append(msg.text)
                self._reporter.info(msg.text)
        elif isinstance(msg, ErrorLine):
            if msg.text != "":
                self._stderr.append(msg.text)
                self._reporter.warning(msg.text)
        elif isinstance(msg, Exited):
            self._finish(msg)
        else:
            raise TypeError(f"Unknown process message: {msg!r}")

    def _finish(self, msg: Exited) -> None:
        self.outcome = ExitOutcome(
            code=msg.code,
            stdout_lines=tuple(self._stdout),
            stderr_lines=tuple(self._stderr),
        )
        if self._reconciler.reconcile(self.outcome):
            self._move(InvocationState.SUCCEEDED)
            return
        self.error = msg.spawn_failure if msg.spawn_failure is not None else ExternalFailure(msg.code)
        self._move(InvocationState.FAILED)

    async def consume(self, handle: ProcessHandle) -> InvocationState:
        async for msg in handle.messages():
            self.handle(msg)
        return self._state
