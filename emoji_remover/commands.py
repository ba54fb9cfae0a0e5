from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

_COMMAND_NAME_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


@dataclass(frozen=True)
class UserCommand:
    """
    An editor user command. The handler receives the parsed option mapping
    (possibly empty) and returns whatever the command wants to hand back.
    """

    name: str
    handler: Callable[[Mapping[str, Any]], Any]
    description: str = ""


class CommandRegistry:
    """
    Registry of user commands by name. Names follow editor rules for user
    commands: they start with an uppercase letter.
    """

    def __init__(self, commands: Iterable[UserCommand] = ()) -> None:
        self._by_name: dict[str, UserCommand] = {}
        for cmd in commands:
            self.register(cmd)

    def register(self, cmd: UserCommand) -> None:
        if not isinstance(cmd, UserCommand):
            raise ValueError(f"Invalid command: {cmd!r}")
        if not isinstance(cmd.name, str) or not _COMMAND_NAME_RE.match(cmd.name):
            raise ValueError(f"Invalid command name: {cmd.name!r} (must start with an uppercase letter)")
        if not callable(cmd.handler):
            raise ValueError(f"Command {cmd.name} has a non-callable handler")
        if cmd.name in self._by_name:
            raise ValueError(f"Duplicate command: {cmd.name}")
        self._by_name[cmd.name] = cmd

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return sorted(self._by_name)

    def get(self, name: str) -> UserCommand:
        cmd = self._by_name.get(name)
        if cmd is None:
            known = ", ".join(self.names) if self._by_name else "(none)"
            raise ValueError(f"Unknown command: {name} (known: {known})")
        return cmd

    def invoke(self, name: str, raw: Mapping[str, Any] | None = None) -> Any:
        return self.get(name).handler(raw or {})
