from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from emoji_remover.util import expand_path

BINARY_NAME = "emoji-remover"
# Standard location for cargo release builds, relative to the plugin root.
RELEASE_SUBDIR = ("target", "release")
ROOT_ENV_VAR = "EMOJI_REMOVER_ROOT"


@dataclass(frozen=True)
class ResolvedExecutable:
    path: Path
    platform_suffix: str = ""

    def __str__(self) -> str:
        return str(self.path)


def default_plugin_root() -> Path:
    """
    Resolve the plugin root: $EMOJI_REMOVER_ROOT if set, otherwise the
    directory that contains the emoji_remover package.
    """
    env = os.environ.get(ROOT_ENV_VAR)
    if env:
        return expand_path(env).resolve()
    return Path(__file__).resolve().parents[1]


def platform_suffix(platform: str | None = None) -> str:
    platform = platform if platform is not None else sys.platform
    if platform.startswith("win") or platform == "cygwin":
        return ".exe"
    return ""


def locate_binary(plugin_root: Path | None = None, *, platform: str | None = None) -> ResolvedExecutable:
    # Resolved on every call so a rebuilt or moved plugin is picked up.
    root = plugin_root if plugin_root is not None else default_plugin_root()
    suffix = platform_suffix(platform)
    path = root.resolve().joinpath(*RELEASE_SUBDIR, BINARY_NAME + suffix)
    return ResolvedExecutable(path=path, platform_suffix=suffix)
