from __future__ import annotations

from pathlib import Path

from emoji_remover.util import expand_path, is_executable_file, xdg_config_home

from conftest import posix_only


def test_xdg_config_home_from_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert xdg_config_home() == tmp_path


def test_xdg_config_home_ignores_empty_and_relative(monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", "")
    assert xdg_config_home() == Path.home() / ".config"
    monkeypatch.setenv("XDG_CONFIG_HOME", "relative/dir")
    assert xdg_config_home() == Path.home() / ".config"


def test_expand_path_vars(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("EMOJI_TEST_DIR", str(tmp_path))
    assert expand_path("$EMOJI_TEST_DIR/plugin") == tmp_path / "plugin"


@posix_only
def test_is_executable_file(tmp_path: Path):
    f = tmp_path / "tool"
    f.write_text("", encoding="utf-8")
    f.chmod(0o644)
    assert not is_executable_file(f)
    f.chmod(0o755)
    assert is_executable_file(f)
    assert not is_executable_file(tmp_path)
