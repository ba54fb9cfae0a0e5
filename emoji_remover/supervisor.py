from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Union

from emoji_remover.errors import SpawnFailure
from emoji_remover.invocation import InvocationRequest
from emoji_remover.util import sh_join

# Lines longer than this are dropped whole instead of delivered.
MAX_LINE_BYTES = 1024 * 1024
READ_CHUNK = 64 * 1024


@dataclass(frozen=True)
class OutputLine:
    text: str


@dataclass(frozen=True)
class ErrorLine:
    text: str


@dataclass(frozen=True)
class Exited:
    code: int
    spawn_failure: SpawnFailure | None = None


Message = Union[OutputLine, ErrorLine, Exited]


@dataclass
class ProcessHandle:
    """
    One in-flight external process.

    Stream lines and the final exit are delivered as messages on a single
    queue. `Exited` is always the last message and is posted only after
    both streams reached EOF.
    """

    argv: list[str]
    pid: int | None
    _queue: asyncio.Queue[Message] = field(repr=False)
    _pump: asyncio.Task[None] | None = field(default=None, repr=False)

    async def messages(self) -> AsyncIterator[Message]:
        while True:
            msg = await self._queue.get()
            yield msg
            if isinstance(msg, Exited):
                return

    async def wait(self) -> int:
        code = 0
        async for msg in self.messages():
            if isinstance(msg, Exited):
                code = msg.code
        return code


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


class ProcessSupervisor:
    def __init__(self, *, logger: logging.Logger) -> None:
        self._logger = logger

    async def launch(self, request: InvocationRequest) -> ProcessHandle:
        """
        Start the external process and return immediately.

        A failure to spawn is not raised: the returned handle yields a
        single Exited message with a non-zero code instead.
        """
        argv = request.argv
        queue: asyncio.Queue[Message] = asyncio.Queue()

        self._logger.debug("RUN %s", sh_join(argv))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(request.cwd) if request.cwd is not None else None,
            )
        except OSError as e:
            failure = SpawnFailure(request.executable.path, e)
            self._logger.debug("%s", failure)
            queue.put_nowait(Exited(code=failure.code, spawn_failure=failure))
            return ProcessHandle(argv=argv, pid=None, _queue=queue)

        self._logger.debug("Started pid %s", proc.pid)
        pump = asyncio.create_task(self._pump(proc, queue))
        return ProcessHandle(argv=argv, pid=proc.pid, _queue=queue, _pump=pump)

    async def _pump(self, proc: asyncio.subprocess.Process, queue: asyncio.Queue[Message]) -> None:
        readers = []
        if proc.stdout is not None:
            readers.append(self._read_lines(proc.stdout, OutputLine, queue))
        if proc.stderr is not None:
            readers.append(self._read_lines(proc.stderr, ErrorLine, queue))
        try:
            await asyncio.gather(*readers)
        finally:
            code = await proc.wait()
            self._logger.debug("pid %s exited with code %s", proc.pid, code)
            queue.put_nowait(Exited(code=code))

    async def _read_lines(self, stream: asyncio.StreamReader, kind: type, queue: asyncio.Queue[Message]) -> None:
        pending = b""
        # Set while skipping the rest of a line that outgrew MAX_LINE_BYTES.
        discarding = False
        while True:
            chunk = await stream.read(READ_CHUNK)
            if not chunk:
                break
            *lines, pending = (pending + chunk).split(b"\n")
            for raw in lines:
                if discarding:
                    discarding = False
                    continue
                if len(raw) > MAX_LINE_BYTES:
                    self._logger.warning("Dropped oversized output line (%d bytes)", len(raw))
                    continue
                queue.put_nowait(kind(_decode(raw)))
            if len(pending) > MAX_LINE_BYTES:
                if not discarding:
                    self._logger.warning("Dropped oversized output line (over %d bytes)", MAX_LINE_BYTES)
                discarding = True
                pending = b""
        if pending and not discarding:
            # Last line without a trailing newline.
            queue.put_nowait(kind(_decode(pending)))
