from __future__ import annotations

import json
import logging

from rectlayout.config import LoggingConfig
from rectlayout.logging import (
    JsonFormatter,
    configure_logging,
    get_logger,
    reset_logging,
    setup_logging,
    stop_logging,
)
from rectlayout.rect import Rect64


def _record(message: str = "split %s", args: tuple = ("left",)) -> logging.LogRecord:
    return logging.LogRecord("rectlayout.rect", logging.INFO, __file__, 1, message, args, None)


def test_json_formatter_keeps_extra_fields() -> None:
    record = _record()
    record.axis = "x"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "rectlayout.rect"
    assert payload["msg"] == "split left"
    assert payload["fields"] == {"axis": "x"}


def test_json_formatter_ignores_attributes_set_by_text_formatter() -> None:
    record = _record()
    logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s").format(record)
    assert hasattr(record, "asctime")
    payload = json.loads(JsonFormatter().format(record))
    assert "fields" not in payload


def test_setup_logging_adds_handler_when_missing(monkeypatch, layout_logger) -> None:
    root_handlers = list(logging.getLogger().handlers)
    monkeypatch.setenv("RECTLAYOUT_LOG_LEVEL", "DEBUG")
    setup_logging()
    assert len(layout_logger.handlers) == 1
    assert layout_logger.level == logging.DEBUG
    assert layout_logger.propagate is False
    assert logging.getLogger().handlers == root_handlers


def test_setup_logging_does_not_override_existing_handlers(layout_logger) -> None:
    sentinel = logging.NullHandler()
    layout_logger.addHandler(sentinel)
    try:
        setup_logging(LoggingConfig(level_name="DEBUG"))
        assert layout_logger.handlers == [sentinel]
        assert layout_logger.level == logging.NOTSET
    finally:
        layout_logger.removeHandler(sentinel)


def test_configure_logging_leaves_foreign_handlers_alone(layout_logger) -> None:
    root = logging.getLogger()
    root_sentinel = logging.NullHandler()
    own_sentinel = logging.NullHandler()
    root.addHandler(root_sentinel)
    layout_logger.addHandler(own_sentinel)
    try:
        configure_logging(LoggingConfig(level_name="WARNING"))
        configure_logging(LoggingConfig(level_name="INFO"))
        assert root_sentinel in root.handlers
        assert own_sentinel in layout_logger.handlers
        assert len(layout_logger.handlers) == 2
        reset_logging()
        assert layout_logger.handlers == [own_sentinel]
        assert layout_logger.propagate is True
    finally:
        root.removeHandler(root_sentinel)
        layout_logger.removeHandler(own_sentinel)


def test_configure_logging_streams_json_lines_to_file(tmp_path, layout_logger) -> None:
    log_file = tmp_path / "logs" / "layout.jsonl"
    configure_logging(LoggingConfig(level_name="DEBUG", console_format="text", file_path=str(log_file)))
    Rect64(0.0, 0.0, 1.0, 1.0).margin(2.0)
    get_logger("rectlayout.test").info("done", extra={"pieces": 2})
    get_logger("host.app").warning("not ours")
    stop_logging()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    messages = [line["msg"] for line in lines]
    assert any(message.startswith("margin_collapse axis=x") for message in messages)
    assert any(message.startswith("margin_collapse axis=y") for message in messages)
    assert "not ours" not in messages
    assert lines[-1]["msg"] == "done"
    assert lines[-1]["fields"] == {"pieces": 2}
    assert all("asctime" not in line.get("fields", {}) for line in lines)
