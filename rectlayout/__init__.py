"""Rectangle layout helpers over four-scalar rectangles."""

from rectlayout.config import LayoutConfig, LoggingConfig, get_layout_config, load_layout_config
from rectlayout.errors import (
    IntegerRangeError,
    RectLayoutError,
    RectShapeError,
    UnknownScalarKindError,
)
from rectlayout.logging import configure_logging, setup_logging
from rectlayout.rect import ArrayRect, Rect, Rect32, Rect64, make_rect, rect_type_for
from rectlayout.scalar import FLOAT32, FLOAT64, ScalarKind, resolve_scalar_kind

__all__ = [
    "ArrayRect",
    "FLOAT32",
    "FLOAT64",
    "IntegerRangeError",
    "LayoutConfig",
    "LoggingConfig",
    "Rect",
    "Rect32",
    "Rect64",
    "RectLayoutError",
    "RectShapeError",
    "ScalarKind",
    "UnknownScalarKindError",
    "configure_logging",
    "get_layout_config",
    "load_layout_config",
    "make_rect",
    "rect_type_for",
    "resolve_scalar_kind",
    "setup_logging",
]
