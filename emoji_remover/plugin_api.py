"""
Stable surface for editor hosts embedding emoji-remover.

Hosts should only depend on this module: implement `Host` (and optionally
`Reporter`), build a `Context`, and call `PLUGIN.setup(registry, ctx)`.
"""

from __future__ import annotations

from emoji_remover.commands import CommandRegistry, UserCommand
from emoji_remover.core import Context, Options, build_context
from emoji_remover.host import Host, LoggingReporter, Reporter
from emoji_remover.invocation import ToolConfiguration
from emoji_remover.plugin import COMMAND_NAME, PLUGIN
from emoji_remover.state import Invocation, InvocationState

__all__ = [
    "COMMAND_NAME",
    "PLUGIN",
    "CommandRegistry",
    "Context",
    "Host",
    "Invocation",
    "InvocationState",
    "LoggingReporter",
    "Options",
    "Reporter",
    "ToolConfiguration",
    "UserCommand",
    "build_context",
]
