"""Environment-sourced rectlayout configuration."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Mapping

from rectlayout.errors import UnknownScalarKindError
from rectlayout.scalar import resolve_scalar_kind

DEFAULT_SCALAR_KIND = "f64"


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    scalar_kind: str = DEFAULT_SCALAR_KIND
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_LAYOUT_CONFIG: ContextVar[LayoutConfig | None] = ContextVar("rectlayout_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _normalize_format(raw: str) -> str:
    value = str(raw).strip().lower()
    return "json" if value == "json" else "text"


def _normalize_scalar_kind(raw: str) -> str:
    try:
        return resolve_scalar_kind(raw).name
    except UnknownScalarKindError:
        return DEFAULT_SCALAR_KIND


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with rectlayout-prefixed override."""
    value = _raw("RECTLAYOUT_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _text("LOG_LEVEL", default, env=env)
    return value.strip().upper()


def load_layout_config(*, env: Mapping[str, str] | None = None) -> LayoutConfig:
    file_path = _text("RECTLAYOUT_LOG_FILE", "", env=env)
    return LayoutConfig(
        scalar_kind=_normalize_scalar_kind(_text("RECTLAYOUT_SCALAR", DEFAULT_SCALAR_KIND, env=env)),
        logging=LoggingConfig(
            level_name=resolve_log_level_name(env=env),
            console_format=_normalize_format(_text("RECTLAYOUT_LOG_FORMAT", "text", env=env)),
            file_path=file_path or None,
            file_format="json",
        ),
    )


def initialize_layout_config(*, env: Mapping[str, str] | None = None) -> LayoutConfig:
    config = load_layout_config(env=env)
    _LAYOUT_CONFIG.set(config)
    return config


def set_layout_config(config: LayoutConfig | None) -> LayoutConfig | None:
    """Install ``config`` for the current context; ``None`` forces a reload on next use."""
    _LAYOUT_CONFIG.set(config)
    return config


def get_layout_config() -> LayoutConfig:
    config = _LAYOUT_CONFIG.get()
    if config is not None:
        return config
    return initialize_layout_config()


__all__ = [
    "DEFAULT_SCALAR_KIND",
    "LayoutConfig",
    "LoggingConfig",
    "get_layout_config",
    "initialize_layout_config",
    "load_layout_config",
    "resolve_log_level_name",
    "set_layout_config",
]
