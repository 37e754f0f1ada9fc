"""Configuration loading for the line locator service."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 18170
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(RuntimeError):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class AppConfig:
    service_token: str | None
    log_level: str
    host: str
    port: int


def _read_dotenv_value(dotenv_path: Path, key: str) -> str | None:
    """Read a single key from a .env file without mutating the environment."""
    if not dotenv_path.is_file():
        return None
    try:
        content = dotenv_path.read_text(encoding="utf-8")
    except OSError:
        return None

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].strip()
        if "=" not in stripped:
            continue
        name, value = stripped.split("=", 1)
        name = name.strip()
        if name != key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        return value or None
    return None


def _read_setting(dotenv_path: Path, key: str) -> str | None:
    raw_value = os.environ.get(key)
    if raw_value is None:
        raw_value = _read_dotenv_value(dotenv_path, key)
    if raw_value is None:
        return None
    return raw_value.strip() or None


def _read_log_level(raw_value: str | None, *, key: str) -> str:
    if raw_value is None:
        return DEFAULT_LOG_LEVEL
    normalized = raw_value.upper()
    if not isinstance(logging.getLevelName(normalized), int):
        raise ConfigError(f"{key} must be a logging level name.")
    return normalized


def _read_port(raw_value: str | None, *, key: str) -> int:
    if raw_value is None:
        return DEFAULT_PORT
    try:
        port = int(raw_value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer.") from exc
    if not 1 <= port <= 65535:
        raise ConfigError(f"{key} must be between 1 and 65535.")
    return port


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout is reserved for the stdio transport."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config() -> AppConfig:
    """Load configuration from the environment, falling back to ./.env."""
    dotenv_path = Path.cwd() / ".env"

    log_level_key = "LINE_LOCATOR_LOG_LEVEL"
    log_level = _read_log_level(
        _read_setting(dotenv_path, log_level_key), key=log_level_key
    )

    port_key = "LINE_LOCATOR_PORT"
    port = _read_port(_read_setting(dotenv_path, port_key), key=port_key)

    return AppConfig(
        service_token=_read_setting(dotenv_path, "LINE_LOCATOR_SERVICE_TOKEN"),
        log_level=log_level,
        host=_read_setting(dotenv_path, "LINE_LOCATOR_HOST") or DEFAULT_HOST,
        port=port,
    )
