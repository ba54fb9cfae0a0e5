from __future__ import annotations

import json
from dataclasses import dataclass
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from emoji_remover.core import BUSY_POLICIES
from emoji_remover.invocation import ToolConfiguration
from emoji_remover.util import expand_path, xdg_config_home

CONFIG_NAMES = ("config.toml", "config.json", "config.yaml", "config.yml")
_KNOWN_KEYS = {"include", "exclude", "on_busy", "plugin_root"}


@dataclass(frozen=True)
class LoadedConfig:
    path: Path | None
    tool: ToolConfiguration
    on_busy: str | None = None
    plugin_root: Path | None = None


def default_config_dir() -> Path:
    return xdg_config_home() / "emoji-remover"


def discover_config_file(config_dir: Path | None = None) -> Path | None:
    config_dir = config_dir if config_dir is not None else default_config_dir()
    for name in CONFIG_NAMES:
        candidate = config_dir / name
        if candidate.is_file():
            return candidate
    return None


def _invalid(fmt: str, path: Path, e: object, line: int | None = None, col: int | None = None) -> ValueError:
    where = f" at line {line}, column {col}" if line is not None else ""
    return ValueError(f"Invalid {fmt} in {path}{where}: {e}")


def _parse_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except JSONDecodeError as e:
        raise _invalid("JSON", path, e.msg, e.lineno, e.colno) from e


def _parse_toml(text: str, path: Path) -> Any:
    try:
        import tomllib  # type: ignore
    except ImportError:  # pragma: no cover
        import tomli as tomllib  # type: ignore
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise _invalid("TOML", path, e) from e


def _parse_yaml(text: str, path: Path) -> Any:
    import yaml

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark is None:
            raise _invalid("YAML", path, e) from e
        # PyYAML marks are 0-based.
        raise _invalid("YAML", path, e, mark.line + 1, mark.column + 1) from e


_PARSERS = {
    ".json": _parse_json,
    ".toml": _parse_toml,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
}


def _normalize(raw: Any, path: Path) -> LoadedConfig:
    if raw is None:
        # Empty YAML document.
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: config must be a table/object with 'include' and/or 'exclude'")

    # Allow nesting everything under [emoji-remover] / {"emoji-remover": {...}}.
    section = raw.get("emoji-remover")
    if isinstance(section, dict):
        raw = section

    extra = set(raw.keys()) - _KNOWN_KEYS
    if extra:
        raise ValueError(f"{path}: unknown key(s): {', '.join(sorted(extra))}")

    try:
        tool = ToolConfiguration.from_dict({k: raw[k] for k in ("include", "exclude") if k in raw})
    except ValueError as e:
        raise ValueError(f"{path}: {e}") from e

    on_busy = raw.get("on_busy")
    if on_busy is not None and on_busy not in BUSY_POLICIES:
        raise ValueError(f"{path}: 'on_busy' must be one of: {', '.join(BUSY_POLICIES)}")

    plugin_root = raw.get("plugin_root")
    if plugin_root is not None and (not isinstance(plugin_root, str) or not plugin_root):
        raise ValueError(f"{path}: 'plugin_root' must be a non-empty string if present")

    return LoadedConfig(
        path=path,
        tool=tool,
        on_busy=on_busy,
        plugin_root=expand_path(plugin_root) if plugin_root else None,
    )


def load_config_file(path: Path) -> LoadedConfig:
    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        raise ValueError(
            f"Unsupported config format for {path} (expected {', '.join(_PARSERS)})."
        )
    return _normalize(parse(path.read_text(encoding="utf-8"), path), path)
