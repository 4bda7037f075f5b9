# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_scalar.py — The float64 component type used by every color
model in the engine.

A Scalar accepts any real numeric input (Python ints, floats, Fractions,
Decimals, NumPy scalars) and always stores a single float64. Arithmetic and
comparison promote the other operand first, so mixed-type expressions never
change the internal precision.

Notes:
  1.  Division and exponentiation follow IEEE 754 (x / 0 -> ±inf, negative
      base with a fractional exponent -> nan) instead of raising, matching
      the behaviour of the NumPy kernels elsewhere in the engine.
  2.  Equality is IEEE equality: NaN compares unequal to itself and no total
      order is attempted.
  3.  Integers and fractions too large for float64 saturate to ±inf.
"""

from __future__ import annotations

import math
import numbers
import re
from decimal import Decimal
from typing import Any, Final, Optional, TypeAlias, Union

import numpy as np

__all__ = [
    "Scalar",
    "ScalarLike",
    "DEFAULT_PRECISION",
    "to_float",
]

# Fractional digits used when a Scalar (or a color) is displayed without an
# explicit precision.
DEFAULT_PRECISION: Final[int] = 4

ScalarLike: TypeAlias = Union["Scalar", numbers.Real, Decimal, np.integer, np.floating]

_PRECISION_SPEC = re.compile(r"^\.(\d+)f?$")


def to_float(value: Any) -> float:
    """
    Converts any supported numeric input to a Python float (float64).

    Args:
        value: A Scalar, bool, int, float, Fraction, Decimal or NumPy scalar.

    Returns:
        The value as float64.

    Raises:
        TypeError: If the value is not a real number (complex, str, None...).
    """
    if isinstance(value, Scalar):
        return value._value
    if isinstance(value, (bool, np.bool_)):
        return 1.0 if value else 0.0
    if isinstance(value, (numbers.Real, Decimal, np.integer, np.floating)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    raise TypeError(
        f"Cannot convert {type(value).__name__} to a Scalar; expected a real number."
    )


def _coerce(value: Any) -> Optional[float]:
    """Operator helper: float value or None when the operand is unsupported."""
    try:
        return to_float(value)
    except TypeError:
        return None


def _ieee(op: str, a: float, b: float) -> float:
    """Evaluates ``a op b`` with float64 semantics (no exceptions)."""
    x = np.float64(a)
    with np.errstate(all="ignore"):
        if op == "/":
            return float(x / b)
        if op == "//":
            return float(x // b)
        if op == "%":
            return float(x % b)
        return float(x ** b)


class Scalar:
    """
    Immutable float64 wrapper for a single color component.

    Args:
        value: Any real numeric value (default 0.0).

    Raises:
        TypeError: If ``value`` is not a real number.
    """

    __slots__ = ("_value",)

    def __init__(self, value: ScalarLike = 0.0) -> None:
        object.__setattr__(self, "_value", to_float(value))

    @classmethod
    def const(cls, value: float) -> "Scalar":
        """
        Builds a Scalar for constant tables, accepting float64 input only.

        Raises:
            TypeError: If ``value`` is not already a float.
        """
        if not isinstance(value, float):
            raise TypeError(
                f"Scalar.const() requires a float, got {type(value).__name__}."
            )
        return cls(value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Scalar is immutable")

    @property
    def value(self) -> float:
        return self._value

    # -- conversions ---------------------------------------------------------
    def __float__(self) -> float:
        return self._value

    def __int__(self) -> int:
        return int(self._value)

    def __bool__(self) -> bool:
        return self._value != 0.0

    def __round__(self, ndigits: Optional[int] = None) -> Any:
        return round(self._value, ndigits)

    def __hash__(self) -> int:
        return hash(self._value)

    def __reduce__(self) -> Any:
        return (Scalar, (self._value,))

    def __copy__(self) -> "Scalar":
        return self

    def __deepcopy__(self, memo: dict) -> "Scalar":
        return self

    # -- arithmetic ----------------------------------------------------------
    def __add__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(self._value + o)

    def __radd__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(o + self._value)

    def __sub__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(self._value - o)

    def __rsub__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(o - self._value)

    def __mul__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(self._value * o)

    def __rmul__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(o * self._value)

    def __truediv__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("/", self._value, o))

    def __rtruediv__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("/", o, self._value))

    def __floordiv__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("//", self._value, o))

    def __rfloordiv__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("//", o, self._value))

    def __mod__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("%", self._value, o))

    def __rmod__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("%", o, self._value))

    def __pow__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("**", self._value, o))

    def __rpow__(self, other: Any) -> "Scalar":
        o = _coerce(other)
        return NotImplemented if o is None else Scalar(_ieee("**", o, self._value))

    def __neg__(self) -> "Scalar":
        return Scalar(-self._value)

    def __pos__(self) -> "Scalar":
        return self

    def __abs__(self) -> "Scalar":
        return Scalar(abs(self._value))

    # -- comparison ----------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        o = _coerce(other)
        return NotImplemented if o is None else self._value == o

    def __ne__(self, other: object) -> bool:
        o = _coerce(other)
        return NotImplemented if o is None else self._value != o

    def __lt__(self, other: Any) -> bool:
        o = _coerce(other)
        return NotImplemented if o is None else self._value < o

    def __le__(self, other: Any) -> bool:
        o = _coerce(other)
        return NotImplemented if o is None else self._value <= o

    def __gt__(self, other: Any) -> bool:
        o = _coerce(other)
        return NotImplemented if o is None else self._value > o

    def __ge__(self, other: Any) -> bool:
        o = _coerce(other)
        return NotImplemented if o is None else self._value >= o

    # -- helpers -------------------------------------------------------------
    def clamp(self, low: ScalarLike, high: ScalarLike) -> "Scalar":
        """Returns the value limited to ``[low, high]`` (NaN stays NaN)."""
        return Scalar(min(max(self._value, to_float(low)), to_float(high)))

    def lerp(self, other: ScalarLike, t: ScalarLike) -> "Scalar":
        """Linear interpolation: ``self`` at t=0, ``other`` at t=1."""
        a = self._value
        return Scalar(a + (to_float(other) - a) * to_float(t))

    def to_string(self, precision: int = DEFAULT_PRECISION) -> str:
        return f"{self._value:.{precision}f}"

    # -- display -------------------------------------------------------------
    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.to_string()
        match = _PRECISION_SPEC.match(format_spec)
        if match:
            return self.to_string(int(match.group(1)))
        return format(self._value, format_spec)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Scalar({self._value!r})"
