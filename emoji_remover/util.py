from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Sequence


def xdg_config_home() -> Path:
    # An empty or relative XDG_CONFIG_HOME is invalid and must be ignored.
    value = os.environ.get("XDG_CONFIG_HOME", "")
    if value and os.path.isabs(value):
        return Path(value)
    return Path.home() / ".config"


def expand_path(s: str) -> Path:
    """`~user` and `$VAR` expansion for paths read from config files."""
    return Path(os.path.expandvars(os.path.expanduser(s)))


def sh_join(args: Sequence[str]) -> str:
    return shlex.join([str(a) for a in args])


def is_executable_file(p: Path) -> bool:
    try:
        return p.is_file() and os.access(p, os.X_OK)
    except OSError:
        return False
