"""Rectangle input-contract errors."""

from __future__ import annotations


class RectLayoutError(ValueError):
    """Base class for rectlayout input-contract violations."""


class IntegerRangeError(RectLayoutError):
    """Integer component does not fit the requested 32-bit entry point."""

    def __init__(self, value: object, kind: str) -> None:
        super().__init__(f"value {value!r} is not a valid {kind} component")
        self.value = value
        self.kind = kind


class RectShapeError(RectLayoutError):
    """Rectangle components were not exactly four values."""

    def __init__(self, count: int) -> None:
        super().__init__(f"expected 4 rectangle components, got {count}")
        self.count = count


class UnknownScalarKindError(RectLayoutError):
    """Scalar kind name does not match a shipped kind."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown scalar kind: {name!r}")
        self.name = name


__all__ = [
    "IntegerRangeError",
    "RectLayoutError",
    "RectShapeError",
    "UnknownScalarKindError",
]
