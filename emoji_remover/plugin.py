"""
Editor-facing entry point.

The host calls `PLUGIN.setup(registry, ctx)` from its startup hook. Setup
registers the `EmojiClean` command once; later calls are no-ops.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Mapping

from emoji_remover.cleaner import EmojiCleaner
from emoji_remover.commands import CommandRegistry, UserCommand
from emoji_remover.core import Context
from emoji_remover.invocation import ToolConfiguration
from emoji_remover.state import Invocation

COMMAND_NAME = "EmojiClean"


class SetupState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class EmojiRemoverPlugin:
    def __init__(self) -> None:
        self._state = SetupState.UNINITIALIZED
        self._cleaner: EmojiCleaner | None = None
        self._defaults = ToolConfiguration()

    @property
    def state(self) -> SetupState:
        return self._state

    @property
    def cleaner(self) -> EmojiCleaner:
        if self._cleaner is None:
            raise RuntimeError("emoji-remover is not set up; call setup() first")
        return self._cleaner

    def setup(
        self,
        registry: CommandRegistry,
        ctx: Context,
        *,
        defaults: ToolConfiguration | None = None,
        cleaner: EmojiCleaner | None = None,
    ) -> bool:
        """Returns True if this call did the setup, False if already done."""
        if self._state is SetupState.READY:
            ctx.logger.debug("emoji-remover already set up")
            return False

        self._cleaner = cleaner if cleaner is not None else EmojiCleaner(ctx)
        self._defaults = defaults or ToolConfiguration()
        registry.register(
            UserCommand(
                name=COMMAND_NAME,
                handler=self._on_command,
                description="Remove emoji from files in the current repository",
            )
        )
        self._state = SetupState.READY
        return True

    def reset(self) -> None:
        self._state = SetupState.UNINITIALIZED
        self._cleaner = None
        self._defaults = ToolConfiguration()

    def _on_command(self, raw: Mapping[str, Any]) -> asyncio.Task[Invocation] | None:
        config = self._defaults.merged(ToolConfiguration.from_dict(raw))
        return self.cleaner.clean(config)


PLUGIN = EmojiRemoverPlugin()
