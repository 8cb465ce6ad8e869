"""Rectangle layout helpers generic over the scalar type."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from typing import Any, ClassVar, Self

import numpy as np

from rectlayout.config import LayoutConfig, get_layout_config
from rectlayout.errors import RectShapeError, UnknownScalarKindError
from rectlayout.logging import get_logger
from rectlayout.scalar import FLOAT32, FLOAT64, ScalarKind, check_i32, check_u32, resolve_scalar_kind

_LOG = get_logger(__name__)

type Span[S] = tuple[S, S]


class Rect[S](ABC):
    """Axis-aligned rectangle ``(x, y, w, h)``.

    Subclasses own the storage: they set ``scalar`` and implement the
    canonical constructor plus the per-field getters and setters. Every
    derived query and transform is computed here from those primitives,
    using only the operations of ``scalar``. Transforms return new
    rectangles and never mutate ``self``.

    Negative extents are accepted and processed with plain arithmetic.
    """

    __slots__ = ()

    scalar: ClassVar[ScalarKind[Any]]

    @classmethod
    @abstractmethod
    def from_x_y_w_h(cls, x: S, y: S, w: S, h: S) -> Self:
        """Create a rectangle from x, y, w, h."""

    @classmethod
    def from_u32(cls, rect: Iterable[int]) -> Self:
        """Convert from an unsigned 32-bit integer rectangle."""
        values = tuple(check_u32(value) for value in _components(rect))
        return cls._from_integers(values, cls.scalar.from_u32)

    @classmethod
    def from_i32(cls, rect: Iterable[int]) -> Self:
        """Convert from a signed 32-bit integer rectangle."""
        values = tuple(check_i32(value) for value in _components(rect))
        return cls._from_integers(values, cls.scalar.from_i32)

    @classmethod
    def from_integer_rect(cls, rect: Iterable[int], *, signed: bool) -> Self:
        """Convert from an integer rectangle through the i32 or u32 entry point."""
        if signed:
            return cls.from_i32(rect)
        return cls.from_u32(rect)

    @classmethod
    def from_array(cls, rect: Iterable[object]) -> Self:
        """Create a rectangle from any four scalars, cast to ``scalar``."""
        kind = cls.scalar
        values = _components(rect)
        with kind.arithmetic():
            x, y, w, h = (kind.cast(value) for value in values)
        return cls.from_x_y_w_h(x, y, w, h)

    @classmethod
    def _from_integers(cls, values: tuple[int, ...], convert: Callable[[int], S]) -> Self:
        x, y, w, h = converted = tuple(convert(value) for value in values)
        if _LOG.isEnabledFor(logging.DEBUG) and any(
            int(result) != value for result, value in zip(converted, values)
        ):
            _LOG.debug("lossy_integer_conversion kind=%s values=%s", cls.scalar.name, values)
        return cls.from_x_y_w_h(x, y, w, h)

    @abstractmethod
    def x(self) -> S:
        """Gets x."""

    @abstractmethod
    def y(self) -> S:
        """Gets y."""

    @abstractmethod
    def w(self) -> S:
        """Gets w."""

    @abstractmethod
    def h(self) -> S:
        """Gets h."""

    @abstractmethod
    def set_x(self, val: S) -> None:
        """Sets x."""

    @abstractmethod
    def set_y(self, val: S) -> None:
        """Sets y."""

    @abstractmethod
    def set_w(self, val: S) -> None:
        """Sets w."""

    @abstractmethod
    def set_h(self, val: S) -> None:
        """Sets h."""

    def xy(self) -> Span[S]:
        return (self.x(), self.y())

    def wh(self) -> Span[S]:
        return (self.w(), self.h())

    def xw(self) -> Span[S]:
        return (self.x(), self.w())

    def yh(self) -> Span[S]:
        return (self.y(), self.h())

    def x1x2(self) -> Span[S]:
        """Return left and right."""
        x, w = self.xw()
        with self.scalar.arithmetic():
            return (x, x + w)

    def y1y2(self) -> Span[S]:
        """Return top and bottom."""
        y, h = self.yh()
        with self.scalar.arithmetic():
            return (y, y + h)

    def p1p2(self) -> tuple[Span[S], Span[S]]:
        """Return upper left and lower right corner."""
        x, y, w, h = self.xywh()
        with self.scalar.arithmetic():
            return ((x, y), (x + w, y + h))

    def xywh(self) -> tuple[S, S, S, S]:
        return (self.x(), self.y(), self.w(), self.h())

    def center(self) -> Span[S]:
        """Return the center of the rectangle.

        Both components are offset by half the height.
        """
        kind = self.scalar
        x, y, _, h = self.xywh()
        half = kind.from_f64(0.5)
        with kind.arithmetic():
            return (x + half * h, y + half * h)

    def is_empty(self) -> bool:
        """Return whether ``w * h`` is exactly zero."""
        kind = self.scalar
        with kind.arithmetic():
            return bool(self.w() * self.h() == kind.zero)

    def contains(self, px: S | float, py: S | float) -> bool:
        """Return whether a point is inside the rectangle, edges included."""
        kind = self.scalar
        (x1, y1), (x2, y2) = self.p1p2()
        with kind.arithmetic():
            px, py = kind.cast(px), kind.cast(py)
            return bool(x1 <= px <= x2 and y1 <= py <= y2)

    def margin(self, val: S | float) -> Self:
        """Compute a margin rectangle.

        An axis whose extent is less than twice the margin collapses to a
        zero extent at that axis' midpoint.
        """
        kind = self.scalar
        x, y, w, h = self.xywh()
        with kind.arithmetic():
            val = kind.cast(val)
            x, w = _margin_axis(kind, "x", x, w, val)
            y, h = _margin_axis(kind, "y", y, h, val)
        return self.from_x_y_w_h(x, y, w, h)

    def split_left(self, val: S | float, factor: S | float) -> tuple[Self, Self]:
        """Split from the left side, at ``val`` capped by ``w * factor``."""
        kind = self.scalar
        x, y, w, h = self.xywh()
        with kind.arithmetic():
            (x1, w1), (x2, w2) = _split_near(kind, x, w, kind.cast(val), kind.cast(factor))
        return self.from_x_y_w_h(x1, y, w1, h), self.from_x_y_w_h(x2, y, w2, h)

    def split_right(self, val: S | float, factor: S | float) -> tuple[Self, Self]:
        """Split from the right side; the right piece comes second."""
        kind = self.scalar
        x, y, w, h = self.xywh()
        with kind.arithmetic():
            (x1, w1), (x2, w2) = _split_far(kind, x, w, kind.cast(val), kind.cast(factor))
        return self.from_x_y_w_h(x1, y, w1, h), self.from_x_y_w_h(x2, y, w2, h)

    def split_top(self, val: S | float, factor: S | float) -> tuple[Self, Self]:
        """Split from the top side, at ``val`` capped by ``h * factor``."""
        kind = self.scalar
        x, y, w, h = self.xywh()
        with kind.arithmetic():
            (y1, h1), (y2, h2) = _split_near(kind, y, h, kind.cast(val), kind.cast(factor))
        return self.from_x_y_w_h(x, y1, w, h1), self.from_x_y_w_h(x, y2, w, h2)

    def split_bottom(self, val: S | float, factor: S | float) -> tuple[Self, Self]:
        """Split from the bottom side; the bottom piece comes second."""
        kind = self.scalar
        x, y, w, h = self.xywh()
        with kind.arithmetic():
            (y1, h1), (y2, h2) = _split_far(kind, y, h, kind.cast(val), kind.cast(factor))
        return self.from_x_y_w_h(x, y1, w, h1), self.from_x_y_w_h(x, y2, w, h2)

    def copy(self) -> Self:
        return self.from_x_y_w_h(*self.xywh())

    def __copy__(self) -> Self:
        return self.copy()

    def __iter__(self) -> Iterator[S]:
        return iter(self.xywh())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return all(bool(a == b) for a, b in zip(self.xywh(), other.xywh()))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        x, y, w, h = self.xywh()
        return f"{type(self).__name__}(x={x}, y={y}, w={w}, h={h})"


def _components(rect: Iterable[object]) -> tuple[object, ...]:
    values = tuple(rect)
    if len(values) != 4:
        raise RectShapeError(len(values))
    return values


def _margin_axis[S](kind: ScalarKind[S], axis: str, origin: S, extent: S, val: S) -> Span[S]:
    two = kind.from_f64(2.0)
    if extent < two * val:
        _LOG.debug("margin_collapse axis=%s extent=%s margin=%s", axis, extent, val)
        return (origin + kind.from_f64(0.5) * extent, kind.zero)
    return (origin + val, extent - two * val)


def _split_near[S](
    kind: ScalarKind[S], origin: S, extent: S, val: S, factor: S
) -> tuple[Span[S], Span[S]]:
    near = extent * factor
    if val > near:
        return (origin, near), (origin + near, extent * (kind.one - factor))
    return (origin, val), (origin + val, extent - val)


def _split_far[S](
    kind: ScalarKind[S], origin: S, extent: S, val: S, factor: S
) -> tuple[Span[S], Span[S]]:
    if val > extent * factor:
        rest = extent * (kind.one - factor)
        return (origin, rest), (origin + rest, extent * factor)
    return (origin, extent - val), (origin + extent - val, val)


class ArrayRect(Rect[np.floating]):
    """Rectangle stored as one flat numpy array ``[x, y, w, h]``.

    Subclasses pick the dtype through a numpy-backed ``scalar`` kind.
    """

    __slots__ = ("_xywh",)

    def __init__(self, x: object, y: object, w: object, h: object) -> None:
        with self.scalar.arithmetic():
            self._xywh = np.array((x, y, w, h), dtype=self.scalar.dtype)

    @classmethod
    def from_x_y_w_h(cls, x: object, y: object, w: object, h: object) -> Self:
        return cls(x, y, w, h)

    def x(self) -> np.floating:
        return self._xywh[0]

    def y(self) -> np.floating:
        return self._xywh[1]

    def w(self) -> np.floating:
        return self._xywh[2]

    def h(self) -> np.floating:
        return self._xywh[3]

    def set_x(self, val: object) -> None:
        self._assign(0, val)

    def set_y(self, val: object) -> None:
        self._assign(1, val)

    def set_w(self, val: object) -> None:
        self._assign(2, val)

    def set_h(self, val: object) -> None:
        self._assign(3, val)

    def _assign(self, index: int, val: object) -> None:
        with self.scalar.arithmetic():
            self._xywh[index] = val

    def xywh(self) -> tuple[np.floating, np.floating, np.floating, np.floating]:
        x, y, w, h = self._xywh
        return (x, y, w, h)

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> np.ndarray:
        if copy is False:
            raise ValueError("rectangle storage is private; an array view needs copy=True or None")
        return np.array(self._xywh, dtype=dtype, copy=True)


class Rect32(ArrayRect):
    """Single-precision rectangle."""

    __slots__ = ()

    scalar = FLOAT32


class Rect64(ArrayRect):
    """Double-precision rectangle."""

    __slots__ = ()

    scalar = FLOAT64


_ARRAY_RECT_TYPES: dict[str, type[ArrayRect]] = {
    FLOAT32.name: Rect32,
    FLOAT64.name: Rect64,
}


def rect_type_for(kind: ScalarKind[Any] | str) -> type[ArrayRect]:
    """Return the shipped rectangle type for a scalar kind or kind name."""
    name = resolve_scalar_kind(kind).name if isinstance(kind, str) else kind.name
    rect_type = _ARRAY_RECT_TYPES.get(name)
    if rect_type is None:
        raise UnknownScalarKindError(name)
    return rect_type


def make_rect(
    x: object, y: object, w: object, h: object, *, config: LayoutConfig | None = None
) -> ArrayRect:
    """Build a rectangle of the configured default scalar kind."""
    resolved = config if config is not None else get_layout_config()
    return rect_type_for(resolved.scalar_kind).from_x_y_w_h(x, y, w, h)


__all__ = [
    "ArrayRect",
    "Rect",
    "Rect32",
    "Rect64",
    "make_rect",
    "rect_type_for",
]
