from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .db import DEFAULT_DB, DEFAULT_TIMEOUT

ENVIRONMENTS = ("local", "dev", "prod")
DEFAULT_ADDRESS = "localhost:8083"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Config:
    env: str = "local"
    storage_path: str = DEFAULT_DB
    address: str = DEFAULT_ADDRESS
    timeout: float = DEFAULT_TIMEOUT

    @property
    def host(self) -> str:
        return self.address.rpartition(":")[0] or "localhost"

    @property
    def port(self) -> int:
        return int(self.address.rpartition(":")[2])


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"config file does not exist: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file must contain a mapping: {path}")
    return data


def load_config(path: str | Path | None = None) -> Config:
    """Build the Config from an optional YAML file plus URL_SHORTENER_* env vars.

    The file is ``path`` or $CONFIG_PATH; without either, defaults apply.
    Environment variables win over the file.
    """
    path = path or os.environ.get("CONFIG_PATH")
    data = _read_yaml(Path(path)) if path else {}
    http = data.get("http_server") or {}
    if not isinstance(http, dict):
        raise ConfigError(f"http_server must be a mapping, got {http!r}")

    env = os.environ.get("URL_SHORTENER_ENV", data.get("env", "local"))
    storage_path = os.environ.get("URL_SHORTENER_DB", data.get("storage_path", DEFAULT_DB))
    address = os.environ.get("URL_SHORTENER_ADDRESS", http.get("address", DEFAULT_ADDRESS))
    timeout = os.environ.get("URL_SHORTENER_TIMEOUT", http.get("timeout", DEFAULT_TIMEOUT))

    if env not in ENVIRONMENTS:
        raise ConfigError(f"env must be one of {', '.join(ENVIRONMENTS)}, got {env!r}")

    _, sep, port = str(address).rpartition(":")
    if not sep or not port.isdigit():
        raise ConfigError(f"address must look like host:port, got {address!r}")

    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        raise ConfigError(f"timeout must be a number of seconds, got {timeout!r}") from None
    if timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {timeout}")

    return Config(
        env=env,
        storage_path=os.path.expanduser(str(storage_path)),
        address=str(address),
        timeout=timeout,
    )
