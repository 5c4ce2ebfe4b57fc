"""Client configuration loaded from an optional YAML file and the environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

DEFAULT_API_BASE = "http://localhost:8000"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

_ENV_OVERRIDES: dict[str, str] = {
    "api_base": "PROJECT_VIEW_API_BASE",
    "timeout": "PROJECT_VIEW_TIMEOUT",
    "upload_timeout": "PROJECT_VIEW_UPLOAD_TIMEOUT",
    "title_prefix": "PROJECT_VIEW_TITLE_PREFIX",
    "log_level": "LOG_LEVEL",
    "cors_origins": "API_CORS_ORIGINS",
    "token": "PROJECT_VIEW_TOKEN",
    "user_id": "PROJECT_VIEW_USER_ID",
}


@dataclass(slots=True)
class ClientConfig:
    api_base: str = DEFAULT_API_BASE
    timeout: float = 30.0
    upload_timeout: float = 300.0
    title_prefix: str = "Chat"
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    token: str | None = None
    user_id: str | None = None


def _split_origins(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    return [str(origin).strip() for origin in value or [] if str(origin).strip()]


def _coerce(name: str, value: Any) -> Any:
    if name in {"timeout", "upload_timeout"}:
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if name == "cors_origins":
        return _split_origins(value)
    if value is None:
        return None
    return str(value)


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    return data


def load_config(path: str | Path | None = None) -> ClientConfig:
    """Build a :class:`ClientConfig`; environment variables win over the file."""

    config_path = path or os.getenv("PROJECT_VIEW_CONFIG")
    raw = _load_file(Path(config_path).expanduser()) if config_path else {}

    known = {item.name for item in fields(ClientConfig)}
    values: dict[str, Any] = {key: value for key, value in raw.items() if key in known}
    for name, env_name in _ENV_OVERRIDES.items():
        env_value = os.getenv(env_name)
        if env_value:
            values[name] = env_value

    config = ClientConfig(**{name: _coerce(name, value) for name, value in values.items()})
    if not config.cors_origins:
        config.cors_origins = list(DEFAULT_CORS_ORIGINS)
    config.api_base = (config.api_base or DEFAULT_API_BASE).rstrip("/")
    return config


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
