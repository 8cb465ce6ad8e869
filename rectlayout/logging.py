"""Logging setup for the ``rectlayout`` logger namespace.

Only the namespace logger is configured. The root logger and any handler
the host application attached are left alone.
"""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from rectlayout.config import LoggingConfig, load_layout_config

LOGGER_NAMESPACE = "rectlayout"

# Attributes every LogRecord carries, plus the ones formatters add on the fly.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}

_QUEUE_LISTENER: QueueListener | None = None
_OWNED_HANDLERS: list[logging.Handler] = []


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = _extra_fields(record)
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}


def namespace_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAMESPACE)


def configure_logging(config: LoggingConfig, *, propagate: bool = False) -> None:
    """Attach console and optional file sinks to the ``rectlayout`` logger.

    Handlers from an earlier call are replaced; foreign handlers stay.
    """
    global _QUEUE_LISTENER

    logger = namespace_logger()
    _release_owned_handlers(logger)
    logger.setLevel(logging.getLevelNamesMapping().get(config.level_name.upper(), logging.INFO))
    logger.propagate = propagate

    sinks = _build_sinks(config)
    if len(sinks) == 1:
        _own(logger, sinks[0])
        return

    # File I/O runs on the listener thread.
    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    _own(logger, QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *sinks, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the namespace logger from the environment unless it has handlers."""
    if namespace_logger().handlers:
        return
    configure_logging(config if config is not None else load_layout_config().logging)


def stop_logging() -> None:
    """Flush and close the sinks installed by ``configure_logging``."""
    _release_owned_handlers(namespace_logger())


def reset_logging() -> None:
    """Undo ``configure_logging``: drop owned sinks and restore level and propagation."""
    logger = namespace_logger()
    _release_owned_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Return namespaced logger instance."""
    return logging.getLogger(name)


def _build_sinks(config: LoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_formatter_for(config.console_format))
    sinks: list[logging.Handler] = [console]
    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_sink = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_sink.setFormatter(_formatter_for(config.file_format))
        sinks.append(file_sink)
    return sinks


def _own(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.addHandler(handler)
    _OWNED_HANDLERS.append(handler)


def _release_owned_handlers(logger: logging.Logger) -> None:
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for sink in _QUEUE_LISTENER.handlers:
            sink.close()
        _QUEUE_LISTENER = None
    while _OWNED_HANDLERS:
        handler = _OWNED_HANDLERS.pop()
        logger.removeHandler(handler)
        handler.close()


def _formatter_for(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


__all__ = [
    "JsonFormatter",
    "LOGGER_NAMESPACE",
    "configure_logging",
    "get_logger",
    "namespace_logger",
    "reset_logging",
    "setup_logging",
    "stop_logging",
]
