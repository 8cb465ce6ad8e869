from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from rectlayout.config import set_layout_config
from rectlayout.logging import namespace_logger, reset_logging
from rectlayout.rect import ArrayRect, Rect32, Rect64


@pytest.fixture(params=[Rect32, Rect64], ids=["f32", "f64"])
def rect_type(request: pytest.FixtureRequest) -> type[ArrayRect]:
    return request.param


@pytest.fixture(autouse=True)
def _reset_layout_config() -> Iterator[None]:
    set_layout_config(None)
    yield
    set_layout_config(None)


@pytest.fixture
def layout_logger() -> Iterator[logging.Logger]:
    logger = namespace_logger()
    root = logging.getLogger()
    root_handlers = list(root.handlers)
    root_level = root.level
    reset_logging()
    try:
        yield logger
    finally:
        reset_logging()
        root.handlers.clear()
        root.handlers.extend(root_handlers)
        root.setLevel(root_level)
