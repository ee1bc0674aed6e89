"""Client configuration: saved remote URL and API key, plus env defaults."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from sipp.runtime import telemetry

ENV_PREFIX = "SIPP_"
CONFIG_FILENAME = "config.json"
DEFAULT_REMOTE_URL = "http://localhost:3000"


class ConfigError(RuntimeError):
    """Raised when the config file cannot be written."""


@dataclass(slots=True)
class ClientConfig:
    remote_url: Optional[str] = None
    api_key: Optional[str] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None or value == "":
        return default
    return value


def env_int(name: str, fallback: int) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def config_dir() -> Path:
    override = env("CONFIG_DIR")
    if override:
        return Path(override)
    return Path(os.environ.get("HOME", ".")) / ".config" / "sipp"


def config_path() -> Path:
    return config_dir() / CONFIG_FILENAME


def _clean(value: object) -> Optional[str]:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def load_config(path: Optional[Path] = None) -> ClientConfig:
    """Read the saved config; a missing or unreadable file yields an empty one."""

    target = path or config_path()
    try:
        raw = json.loads(target.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return ClientConfig()
    except (OSError, ValueError) as exc:
        telemetry.record_event(
            "config.unreadable",
            level="warning",
            data={"path": str(target), "error": str(exc)},
        )
        return ClientConfig()
    if not isinstance(raw, dict):
        return ClientConfig()
    return ClientConfig(
        remote_url=_clean(raw.get("remote_url")),
        api_key=_clean(raw.get("api_key")),
    )


def save_config(config: ClientConfig, path: Optional[Path] = None) -> Path:
    target = path or config_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(asdict(config), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot write config to {target}: {exc}") from exc
    telemetry.record_event("config.saved", data={"path": str(target)})
    return target


__all__ = [
    "ClientConfig",
    "ConfigError",
    "DEFAULT_REMOTE_URL",
    "config_dir",
    "config_path",
    "env",
    "env_int",
    "load_config",
    "save_config",
]
