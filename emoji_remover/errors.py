from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    EXECUTABLE_NOT_FOUND = "executable-not-found"
    SPAWN_FAILURE = "spawn-failure"
    EXTERNAL_FAILURE = "external-failure"
    FLUSH_FAILURE = "flush-failure"
    INVALID_TRANSITION = "invalid-transition"


class EmojiRemoverError(RuntimeError):
    kind: ErrorKind


class ExecutableNotFound(EmojiRemoverError):
    kind = ErrorKind.EXECUTABLE_NOT_FOUND

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Emoji Remover binary not found at {path}. Did you run 'cargo build --release'?"
        )


class SpawnFailure(EmojiRemoverError):
    """
    The executable exists but the OS refused to start it.

    Carries a synthetic exit code so it can be reported like any other
    non-zero exit (126 permission denied, 127 not found, 1 otherwise).
    """

    kind = ErrorKind.SPAWN_FAILURE

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        if isinstance(cause, PermissionError):
            self.code = 126
        elif isinstance(cause, FileNotFoundError) or cause.errno == errno.ENOENT:
            self.code = 127
        else:
            self.code = 1
        super().__init__(f"Failed to start {path}: {cause}")


class ExternalFailure(EmojiRemoverError):
    kind = ErrorKind.EXTERNAL_FAILURE

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Emoji removal failed with exit code: {code}")


class FlushFailure(EmojiRemoverError):
    kind = ErrorKind.FLUSH_FAILURE

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Failed to write modified buffers before running Emoji Remover: {cause}")


class InvalidTransition(EmojiRemoverError):
    kind = ErrorKind.INVALID_TRANSITION
