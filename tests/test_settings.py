"""Tests for configuration discovery, loading, and validation logic.

Updates:
  v0.2.0 - 2026-10-13 - Cover TOML files, storage directories, and relative paths.
  v0.1.0 - 2026-10-09 - Cover JSON/env precedence and validation errors.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pytest import LogCaptureFixture, MonkeyPatch

from config import (
    PromptsCliSettings,
    SettingsError,
    default_config_dir,
    load_settings,
    read_config_file,
    resolve_config_path,
)


def test_defaults_without_config_or_env() -> None:
    """No file and no environment means the JSON backend at the default location."""
    settings = load_settings()
    assert isinstance(settings, PromptsCliSettings)
    assert settings.storage.type == "json"
    assert settings.storage.path is None
    assert settings.config_path is None


def test_default_config_dir_honours_xdg(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("config.settings.sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    assert default_config_dir() == tmp_path / "xdg" / "prompts-cli"


def test_default_config_dir_on_windows_uses_appdata(
    monkeypatch: MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setattr("config.settings.sys.platform", "win32")
    monkeypatch.setenv("APPDATA", str(tmp_path / "roaming"))
    assert default_config_dir() == tmp_path / "roaming" / "prompts-cli"


def test_toml_config_is_loaded(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        '[storage]\ntype = "libsql"\npath = "data/prompts.db"\n',
        encoding="utf-8",
    )
    settings = load_settings(config_path)
    assert settings.storage.type == "sqlite"
    assert settings.storage.path == (tmp_path / "data" / "prompts.db").resolve()
    assert settings.config_path == config_path


def test_json_config_accepts_flat_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"storage_type": "json", "storage_path": str(tmp_path / "store")}),
        encoding="utf-8",
    )
    settings = load_settings(config_path)
    assert settings.storage.type == "json"
    assert settings.storage.path == (tmp_path / "store").resolve()


def test_directory_config_is_a_json_storage_root(tmp_path: Path) -> None:
    storage_dir = tmp_path / "prompt-dir"
    storage_dir.mkdir()
    data = read_config_file(storage_dir)
    assert data == {"storage": {"type": "json", "path": str(storage_dir.resolve())}}
    settings = load_settings(storage_dir)
    assert settings.storage.path == storage_dir.resolve()


def test_platform_default_config_is_discovered(tmp_path: Path) -> None:
    config_dir = default_config_dir()
    config_dir.mkdir(parents=True)
    (config_dir / "config.json").write_text(
        json.dumps({"storage": {"type": "sqlite"}}),
        encoding="utf-8",
    )
    assert resolve_config_path() == config_dir / "config.json"
    (config_dir / "config.toml").write_text('[storage]\ntype = "json"\n', encoding="utf-8")
    assert resolve_config_path() == config_dir / "config.toml"
    assert load_settings().storage.type == "json"


def test_config_env_var_is_used_when_flag_missing(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "env.toml"
    config_path.write_text('[storage]\ntype = "sqlite"\n', encoding="utf-8")
    monkeypatch.setenv("PROMPTS_CLI_CONFIG", str(config_path))
    assert resolve_config_path() == config_path
    assert load_settings().storage.type == "sqlite"


def test_explicit_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "missing.toml")


def test_environment_supplies_storage_settings(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PROMPTS_CLI_STORAGE_TYPE", "sqlite")
    monkeypatch.setenv("PROMPTS_CLI_STORAGE__PATH", str(tmp_path / "env.db"))
    settings = load_settings()
    assert settings.storage.type == "sqlite"
    assert settings.storage.path == (tmp_path / "env.db").resolve()


def test_config_file_beats_environment(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """File values override env while env still fills keys the file omits."""
    monkeypatch.setenv("PROMPTS_CLI_STORAGE_TYPE", "sqlite")
    monkeypatch.setenv("PROMPTS_CLI_STORAGE_PATH", str(tmp_path / "from-env"))
    config_path = tmp_path / "config.toml"
    config_path.write_text('[storage]\ntype = "json"\n', encoding="utf-8")
    settings = load_settings(config_path)
    assert settings.storage.type == "json"
    assert settings.storage.path == (tmp_path / "from-env").resolve()


def test_overrides_beat_config_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[storage]\ntype = "json"\npath = "a"\n', encoding="utf-8")
    settings = load_settings(config_path, storage_type="sqlite")
    assert settings.storage.type == "sqlite"
    assert settings.storage.path == (tmp_path / "a").resolve()


def test_unknown_storage_type_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[storage]\ntype = "postgres"\n', encoding="utf-8")
    with pytest.raises(SettingsError, match="storage.type"):
        load_settings(config_path)


@pytest.mark.parametrize(
    ("name", "contents"),
    [
        ("bad.toml", "[storage\ntype = 'json'"),
        ("bad.json", "{not json"),
        ("list.json", "[1, 2]"),
        ("storage.toml", 'storage = "json"\n'),
    ],
)
def test_malformed_config_files_raise(tmp_path: Path, name: str, contents: str) -> None:
    config_path = tmp_path / name
    config_path.write_text(contents, encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(config_path)


def test_unknown_config_keys_are_logged(tmp_path: Path, caplog: LogCaptureFixture) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('theme = "dark"\n[storage]\ntype = "json"\n', encoding="utf-8")
    with caplog.at_level("WARNING", logger="prompts_cli.settings"):
        load_settings(config_path)
    assert "theme" in caplog.text
