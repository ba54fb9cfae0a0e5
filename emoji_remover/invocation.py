from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from emoji_remover.errors import ExecutableNotFound
from emoji_remover.locator import ResolvedExecutable, locate_binary
from emoji_remover.util import is_executable_file


def _as_patterns(value: Any, *, what: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        if not value:
            raise ValueError(f"'{what}' must be a non-empty string or a list of strings")
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(x, str) and x for x in value):
        return tuple(value)
    raise ValueError(f"'{what}' must be a non-empty string or a list of strings")


@dataclass(frozen=True)
class ToolConfiguration:
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "ToolConfiguration":
        raw = raw or {}
        unknown = set(raw.keys()) - {"include", "exclude"}
        if unknown:
            raise ValueError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return cls(
            include=_as_patterns(raw.get("include"), what="include"),
            exclude=_as_patterns(raw.get("exclude"), what="exclude"),
        )

    def merged(self, other: "ToolConfiguration") -> "ToolConfiguration":
        # Patterns from `other` come after ours.
        return ToolConfiguration(
            include=self.include + other.include,
            exclude=self.exclude + other.exclude,
        )


@dataclass(frozen=True)
class InvocationRequest:
    executable: ResolvedExecutable
    arguments: tuple[str, ...]
    cwd: Path | None = None

    @property
    def argv(self) -> list[str]:
        return list(self.arguments)


def build_arguments(executable: ResolvedExecutable, config: ToolConfiguration) -> tuple[str, ...]:
    args = [str(executable.path)]
    if config.include:
        args.append("--include")
        args.extend(config.include)
    if config.exclude:
        args.append("--exclude")
        args.extend(config.exclude)
    return tuple(args)


def prepare_invocation(
    config: ToolConfiguration,
    *,
    plugin_root: Path | None = None,
    cwd: Path | None = None,
    locate: Callable[[Path | None], ResolvedExecutable] = locate_binary,
    is_executable: Callable[[Path], bool] = is_executable_file,
) -> InvocationRequest:
    """
    Resolve the external tool and build its argument vector.

    Raises ExecutableNotFound when the resolved path is missing or not
    executable; nothing is launched in that case.
    """
    executable = locate(plugin_root)
    if not is_executable(executable.path):
        raise ExecutableNotFound(executable.path)
    return InvocationRequest(
        executable=executable,
        arguments=build_arguments(executable, config),
        cwd=cwd,
    )


def patterns_summary(patterns: Sequence[str]) -> str:
    return ", ".join(patterns) if patterns else "(none)"
