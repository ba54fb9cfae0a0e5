from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import pytest

from emoji_remover.core import Options, build_context
from emoji_remover.invocation import InvocationRequest
from emoji_remover.supervisor import Exited, Message, ProcessHandle


class RecordingReporter:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.events.append(("info", message))

    def warning(self, message: str) -> None:
        self.events.append(("warning", message))

    def error(self, message: str) -> None:
        self.events.append(("error", message))

    def of(self, level: str) -> list[str]:
        return [m for (lvl, m) in self.events if lvl == level]


class FakeHost:
    def __init__(self, *, flush_error: Exception | None = None, reload_error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self._flush_error = flush_error
        self._reload_error = reload_error

    def flush_all(self) -> None:
        self.calls.append("flush_all")
        if self._flush_error is not None:
            raise self._flush_error

    def reload_changed(self) -> None:
        self.calls.append("reload_changed")
        if self._reload_error is not None:
            raise self._reload_error


class FakeSupervisor:
    """Replays scripted process messages instead of spawning anything."""

    def __init__(self, messages: list[Message] | None = None) -> None:
        self.messages = messages if messages is not None else [Exited(0)]
        self.launched: list[InvocationRequest] = []

    async def launch(self, request: InvocationRequest) -> ProcessHandle:
        self.launched.append(request)
        queue: asyncio.Queue[Message] = asyncio.Queue()
        for msg in self.messages:
            queue.put_nowait(msg)
        return ProcessHandle(argv=request.argv, pid=4242, _queue=queue)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("emoji-remover.tests")


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def make_ctx(logger, reporter, host):
    def _make(**options):
        return build_context(host=host, options=Options(**options), logger=logger, reporter=reporter)

    return _make


def write_fake_tool(plugin_root: Path, body: str) -> Path:
    """Install a Python script where the locator expects the release binary."""
    path = plugin_root / "target" / "release" / "emoji-remover"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\nimport sys\n{body}\n", encoding="utf-8")
    path.chmod(0o755)
    return path


posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="fake tool relies on a shebang")
