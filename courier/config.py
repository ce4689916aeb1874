"""TOML-based network configuration.

Loads ~/.courier/defaults.toml (global) and courier.toml (project),
merges them, and resolves the ``[network]`` and ``[logging]`` sections.

Example courier.toml:

    [network]
    base_url = "https://www.example.com"
    secure_base_url = "https://secure.example.com"
    recheck_timeout = 10

    [logging]
    level = "DEBUG"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from courier.constants import (
    DEFAULT_PLATFORM,
    DEFAULT_REFERER,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_PENDING_TIME,
)
from courier.core.exceptions import ConfigurationError
from courier.logging import LogConfig

type RawConfig = dict[str, Any]

GLOBAL_CONFIG_PATH = Path.home() / ".courier" / "defaults.toml"
PROJECT_CONFIG_NAME = "courier.toml"


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Settings for the default pipeline collaborators.

    Attributes:
        base_url: API origin used for regular requests.
        secure_base_url: Origin for requests flagged as secure. Defaults to base_url.
        timeout: Total transport timeout per request, in seconds.
        recheck_timeout: Seconds a request may stay pending before a
            connectivity recheck is signalled.
        referer: Value sent as the ``referer`` parameter.
        platform: Client platform sent with every request.
        email: Fallback ``email`` parameter.
        persisted_path: JSON file backing the persisted-request queue.
    """

    base_url: str
    secure_base_url: str | None = None
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    recheck_timeout: float = MAX_PENDING_TIME
    referer: str = DEFAULT_REFERER
    platform: str = DEFAULT_PLATFORM
    email: str | None = None
    persisted_path: Path | None = None


def _deep_merge(base: RawConfig, override: RawConfig) -> RawConfig:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> RawConfig:
    if not path.is_file():
        return {}
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def load_config(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> RawConfig:
    global_cfg = _read_toml(global_path or GLOBAL_CONFIG_PATH)
    project_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    project_cfg = _read_toml(project_path)

    merged = _deep_merge(global_cfg, project_cfg)
    merged.setdefault("network", {})
    merged.setdefault("logging", {})
    return merged


def _check_keys(section: str, raw: RawConfig, cls: type) -> None:
    valid = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - valid)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in [{section}]: {', '.join(unknown)}. "
            f"Valid: {', '.join(sorted(valid))}"
        )


def build_network_config(raw: RawConfig) -> NetworkConfig:
    raw = dict(raw)
    _check_keys("network", raw, NetworkConfig)
    if not raw.get("base_url"):
        raise ConfigurationError("[network] missing 'base_url' field")
    if (path := raw.get("persisted_path")) is not None:
        raw["persisted_path"] = Path(path).expanduser()
    return NetworkConfig(**raw)


def build_log_config(raw: RawConfig) -> LogConfig:
    _check_keys("logging", raw, LogConfig)
    return LogConfig(**raw)


def resolve_config(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> tuple[NetworkConfig, LogConfig]:
    config = load_config(project_dir=project_dir, global_path=global_path)
    return build_network_config(config["network"]), build_log_config(config["logging"])
