from __future__ import annotations

from pathlib import Path

import pytest

from sipp.config import (
    ClientConfig,
    ConfigError,
    config_path,
    env,
    env_int,
    load_config,
    save_config,
)
from sipp.server import ServerSettings


def test_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIPP_REMOTE_URL", "http://x")
    monkeypatch.setenv("SIPP_API_KEY", "")

    assert env("REMOTE_URL") == "http://x"
    assert env("API_KEY", "fallback") == "fallback"


def test_env_int_falls_back_on_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIPP_PORT", "not-a-number")

    assert env_int("PORT", 3000) == 3000


def test_config_path_honours_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("SIPP_CONFIG_DIR", str(tmp_path))

    assert config_path() == tmp_path / "config.json"


def test_save_then_load(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "config.json"

    save_config(ClientConfig(remote_url="https://sipp.example", api_key="k"), target)

    assert load_config(target) == ClientConfig(
        remote_url="https://sipp.example", api_key="k"
    )


def test_load_missing_or_corrupt_is_empty(tmp_path: Path) -> None:
    assert load_config(tmp_path / "absent.json") == ClientConfig()

    corrupt = tmp_path / "config.json"
    corrupt.write_text("{not json", encoding="utf-8")
    assert load_config(corrupt) == ClientConfig()


def test_load_ignores_blank_values(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    target.write_text('{"remote_url": "  ", "api_key": 5}', encoding="utf-8")

    assert load_config(target) == ClientConfig()


def test_save_into_unwritable_location_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ConfigError):
        save_config(ClientConfig(), blocker / "config.json")


def test_server_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIPP_DB_PATH", "/tmp/s.sqlite")
    monkeypatch.setenv("SIPP_API_KEY", "k")
    monkeypatch.setenv("SIPP_PORT", "8080")
    monkeypatch.delenv("SIPP_HOST", raising=False)

    settings = ServerSettings.from_env()

    assert settings == ServerSettings(
        db_path="/tmp/s.sqlite", api_key="k", host="0.0.0.0", port=8080
    )
