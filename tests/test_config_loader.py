from __future__ import annotations

import re
from pathlib import Path

import pytest

from emoji_remover.config_loader import discover_config_file, load_config_file


def test_toml(tmp_path: Path):
    p = tmp_path / "config.toml"
    p.write_text('include = ["*.rs", "*.py"]\nexclude = "target/*"\non_busy = "parallel"\n', encoding="utf-8")
    loaded = load_config_file(p)
    assert loaded.tool.include == ("*.rs", "*.py")
    assert loaded.tool.exclude == ("target/*",)
    assert loaded.on_busy == "parallel"
    assert loaded.path == p


def test_toml_section(tmp_path: Path):
    p = tmp_path / "config.toml"
    p.write_text('[emoji-remover]\ninclude = ["*.md"]\n', encoding="utf-8")
    assert load_config_file(p).tool.include == ("*.md",)


def test_json(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_text('{"exclude": ["node_modules/**"], "plugin_root": "~/emoji"}', encoding="utf-8")
    loaded = load_config_file(p)
    assert loaded.tool.include == ()
    assert loaded.tool.exclude == ("node_modules/**",)
    assert loaded.plugin_root == Path.home() / "emoji"


def test_yaml(tmp_path: Path):
    p = tmp_path / "config.yaml"
    p.write_text("include:\n  - '*.tsx'\n  - '*.jsx'\n", encoding="utf-8")
    assert load_config_file(p).tool.include == ("*.tsx", "*.jsx")


def test_empty_yaml_is_empty_config(tmp_path: Path):
    p = tmp_path / "config.yml"
    p.write_text("", encoding="utf-8")
    loaded = load_config_file(p)
    assert loaded.tool.include == ()
    assert loaded.on_busy is None


def test_invalid_json_has_position(tmp_path: Path):
    p = tmp_path / "config.json"
    p.write_text('{"include": [}', encoding="utf-8")
    with pytest.raises(ValueError, match="line 1, column"):
        load_config_file(p)


def test_invalid_yaml_has_position(tmp_path: Path):
    p = tmp_path / "config.yaml"
    p.write_text("include: [a\nexclude: b\n", encoding="utf-8")
    with pytest.raises(ValueError, match=r"Invalid YAML in .* at line \d+, column \d+"):
        load_config_file(p)


@pytest.mark.parametrize(
    "text",
    [
        'include = 3\n',
        'paths = ["*.rs"]\n',
        'on_busy = "queue"\n',
        'plugin_root = ""\n',
    ],
)
def test_rejects_bad_values(tmp_path: Path, text: str):
    p = tmp_path / "config.toml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError, match=re.escape(str(p))):
        load_config_file(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "config.ini"
    p.write_text("[x]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported config format"):
        load_config_file(p)


def test_discover_prefers_toml(tmp_path: Path):
    (tmp_path / "config.json").write_text("{}", encoding="utf-8")
    (tmp_path / "config.toml").write_text("", encoding="utf-8")
    assert discover_config_file(tmp_path) == tmp_path / "config.toml"


def test_discover_uses_xdg(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert discover_config_file() is None
    d = tmp_path / "emoji-remover"
    d.mkdir()
    (d / "config.yaml").write_text("include: '*.py'\n", encoding="utf-8")
    assert discover_config_file() == d / "config.yaml"
