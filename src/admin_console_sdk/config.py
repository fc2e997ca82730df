from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

ENV_PREFIX = "ADMIN_CONSOLE_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

NumberT = TypeVar("NumberT", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 30.0
    max_connections: int = 20
    verify_ssl: bool = True
    session_dir: str | None = None
    notify_server_on_logout: bool = False
    log_level: str = "WARNING"


def _env(name: str) -> str:
    return (os.getenv(f"{ENV_PREFIX}{name}") or "").strip()


def _flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if not raw:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _positive(name: str, default: NumberT, cast: Callable[[str], NumberT]) -> NumberT:
    raw = _env(name)
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {ENV_PREFIX}{name}: expected a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"Invalid {ENV_PREFIX}{name}: expected > 0, got {value}")
    return value


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    api_base_url = _env(f"API_BASE_URL_{env_name.upper()}") or _env("API_BASE_URL")

    timeout = _positive("TIMEOUT_SECONDS", 30.0, float)
    connect_timeout = _positive("CONNECT_TIMEOUT_SECONDS", min(timeout, 5.0), float)
    read_timeout = _positive("READ_TIMEOUT_SECONDS", max(timeout, connect_timeout), float)
    max_connections = _positive("MAX_CONNECTIONS", 20, int)

    log_level = (_env("LOG_LEVEL") or "WARNING").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"Invalid {ENV_PREFIX}LOG_LEVEL: expected one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    if not api_base_url:
        raise ConfigError(f"Missing required config value: {ENV_PREFIX}API_BASE_URL")

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        max_connections=max_connections,
        verify_ssl=_flag("VERIFY_SSL", True),
        session_dir=_env("SESSION_DIR") or None,
        notify_server_on_logout=_flag("NOTIFY_LOGOUT", False),
        log_level=log_level,
    )
