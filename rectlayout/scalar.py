"""Scalar contract for rectangle components."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from functools import partial

import numpy as np

from rectlayout.errors import IntegerRangeError, UnknownScalarKindError

U32_MAX = 2**32 - 1
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


@dataclass(frozen=True, slots=True)
class ScalarKind[S]:
    """Arithmetic capabilities a rectangle needs from its scalar type.

    Values of ``S`` must support ``+``, ``-``, ``*``, ``<`` and ``==``. The
    kind supplies the identities and the named conversions; ``arithmetic``
    wraps every derived computation and must not raise.
    """

    name: str
    cast: Callable[[object], S]
    from_u32: Callable[[int], S]
    from_i32: Callable[[int], S]
    from_f64: Callable[[float], S]
    zero: S
    one: S
    arithmetic: Callable[[], AbstractContextManager[object]] = nullcontext
    dtype: np.dtype | None = None


def _numpy_kind(name: str, scalar_type: type[np.floating]) -> ScalarKind[np.floating]:
    return ScalarKind(
        name=name,
        cast=scalar_type,
        from_u32=scalar_type,
        from_i32=scalar_type,
        from_f64=scalar_type,
        zero=scalar_type(0),
        one=scalar_type(1),
        # NaN/Inf propagate without RuntimeWarning noise.
        arithmetic=partial(np.errstate, all="ignore"),
        dtype=np.dtype(scalar_type),
    )


FLOAT32 = _numpy_kind("f32", np.float32)
FLOAT64 = _numpy_kind("f64", np.float64)

_KIND_ALIASES: dict[str, ScalarKind[np.floating]] = {
    "f32": FLOAT32,
    "float32": FLOAT32,
    "single": FLOAT32,
    "f64": FLOAT64,
    "float64": FLOAT64,
    "double": FLOAT64,
}


def resolve_scalar_kind(name: str) -> ScalarKind[np.floating]:
    """Return the shipped scalar kind for a name or alias."""
    normalized = str(name).strip().lower()
    kind = _KIND_ALIASES.get(normalized)
    if kind is None:
        raise UnknownScalarKindError(name)
    return kind


def check_u32(value: object) -> int:
    """Return ``value`` as int if it is a valid unsigned 32-bit component."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise IntegerRangeError(value, "u32")
    if not 0 <= value <= U32_MAX:
        raise IntegerRangeError(value, "u32")
    return int(value)


def check_i32(value: object) -> int:
    """Return ``value`` as int if it is a valid signed 32-bit component."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise IntegerRangeError(value, "i32")
    if not I32_MIN <= value <= I32_MAX:
        raise IntegerRangeError(value, "i32")
    return int(value)


__all__ = [
    "FLOAT32",
    "FLOAT64",
    "I32_MAX",
    "I32_MIN",
    "ScalarKind",
    "U32_MAX",
    "check_i32",
    "check_u32",
    "resolve_scalar_kind",
]
