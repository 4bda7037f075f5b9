# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_matrix.py — Immutable 3x3 float64 matrices for tristimulus
algebra (RGB <-> XYZ, XYZ <-> cone response, Oklab stages).

Conventions:
  - Vectors are column vectors: ``M @ v`` (or ``M.apply(v)``) computes M·v.
    Row-vector products are available through ``M.apply_row(v)`` / ``v @ M``.
  - The determinant and inverse are evaluated by small Numba kernels using
    the cofactor (adjugate) expansion, which is exact for 3x3 and avoids the
    LAPACK call overhead for a single matrix.
  - A Matrix3 never changes after construction. The inverse is computed
    once, on first request, and cached on the instance.
"""

from __future__ import annotations

import threading
from typing import Any, Final, Iterable, Optional, Tuple, TypeAlias

import numpy as np
from numba import njit

from swatch_errors import ConfigurationError
from swatch_scalar import DEFAULT_PRECISION, ScalarLike, to_float

__all__ = [
    "Matrix3",
    "Vector3",
    "SINGULAR_TOLERANCE",
]

Vector3: TypeAlias = Tuple[float, float, float]

# |det| below this is treated as singular.
SINGULAR_TOLERANCE: Final[float] = 1e-12


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(cache=True)
def _det3(m: np.ndarray) -> float:
    """Determinant by cofactor expansion along the first row."""
    return (
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


@njit(cache=True)
def _inverse3(m: np.ndarray, det: float) -> np.ndarray:
    """Inverse as adjugate / determinant. Caller guarantees det != 0."""
    inv = np.empty((3, 3), dtype=np.float64)
    s = 1.0 / det
    inv[0, 0] = (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1]) * s
    inv[0, 1] = (m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2]) * s
    inv[0, 2] = (m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1]) * s
    inv[1, 0] = (m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2]) * s
    inv[1, 1] = (m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0]) * s
    inv[1, 2] = (m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2]) * s
    inv[2, 0] = (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0]) * s
    inv[2, 1] = (m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1]) * s
    inv[2, 2] = (m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]) * s
    return inv


def _as_vector(v: Iterable[ScalarLike]) -> np.ndarray:
    vec = np.array([to_float(c) for c in v], dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got {vec.shape[0]} components.")
    return vec


# =============================================================================
# 2. MATRIX3
# =============================================================================

class Matrix3:
    """
    An immutable 3x3 float64 matrix.

    Args:
        rows: Three rows of three numeric values (any Scalar-convertible
            type), or a (3, 3) NumPy array.

    Raises:
        ValueError: If the input is not 3x3.
    """

    __slots__ = ("_data", "_inverse", "_lock")

    def __init__(self, rows: Any) -> None:
        if isinstance(rows, Matrix3):
            arr = rows._data.copy()
        elif isinstance(rows, np.ndarray):
            arr = np.array(rows, dtype=np.float64)
        else:
            arr = np.array([[to_float(v) for v in row] for row in rows], dtype=np.float64)
        if arr.shape != (3, 3):
            raise ValueError(f"Matrix3 requires a 3x3 input, got shape {arr.shape}.")
        arr = np.ascontiguousarray(arr)
        arr.setflags(write=False)
        self._data: np.ndarray = arr
        self._inverse: Optional[Matrix3] = None
        self._lock = threading.Lock()

    # -- constructors --------------------------------------------------------
    @classmethod
    def identity(cls) -> "Matrix3":
        return cls(np.eye(3))

    @classmethod
    def diagonal(cls, values: Iterable[ScalarLike]) -> "Matrix3":
        return cls(np.diag(_as_vector(values)))

    @classmethod
    def from_columns(
        cls, c0: Iterable[ScalarLike], c1: Iterable[ScalarLike], c2: Iterable[ScalarLike]
    ) -> "Matrix3":
        return cls(np.column_stack((_as_vector(c0), _as_vector(c1), _as_vector(c2))))

    # -- access --------------------------------------------------------------
    def __getitem__(self, index: Tuple[int, int]) -> float:
        return float(self._data[index])

    def rows(self) -> Tuple[Vector3, Vector3, Vector3]:
        return tuple(tuple(float(v) for v in row) for row in self._data)  # type: ignore[return-value]

    def to_array(self) -> np.ndarray:
        """Returns a writable copy of the underlying array."""
        return self._data.copy()

    # -- algebra -------------------------------------------------------------
    def determinant(self) -> float:
        return float(_det3(self._data))

    def inverse(self) -> "Matrix3":
        """
        Returns the inverse matrix, computing it on first use.

        Raises:
            ConfigurationError: If the matrix is singular.
        """
        inv = self._inverse
        if inv is not None:
            return inv
        with self._lock:
            if self._inverse is None:
                det = self.determinant()
                if not np.isfinite(det) or abs(det) < SINGULAR_TOLERANCE:
                    raise ConfigurationError(
                        f"Matrix is singular (determinant {det:.3e}) and cannot be inverted."
                    )
                result = Matrix3(_inverse3(self._data, det))
                result._inverse = self
                self._inverse = result
            return self._inverse

    def transpose(self) -> "Matrix3":
        return Matrix3(self._data.T)

    def is_singular(self) -> bool:
        det = self.determinant()
        return not np.isfinite(det) or abs(det) < SINGULAR_TOLERANCE

    def apply(self, vector: Iterable[ScalarLike]) -> Vector3:
        """Matrix · column vector."""
        r = self._data @ _as_vector(vector)
        return (float(r[0]), float(r[1]), float(r[2]))

    def apply_row(self, vector: Iterable[ScalarLike]) -> Vector3:
        """Row vector · matrix."""
        r = _as_vector(vector) @ self._data
        return (float(r[0]), float(r[1]), float(r[2]))

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, Matrix3):
            return Matrix3(self._data @ other._data)
        if isinstance(other, (str, bytes)):
            return NotImplemented
        try:
            return self.apply(other)
        except TypeError:
            return NotImplemented

    def __rmatmul__(self, other: Any) -> Any:
        if isinstance(other, (str, bytes)):
            return NotImplemented
        try:
            return self.apply_row(other)
        except TypeError:
            return NotImplemented

    def __add__(self, other: Any) -> "Matrix3":
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(self._data + other._data)

    def __sub__(self, other: Any) -> "Matrix3":
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(self._data - other._data)

    def __mul__(self, other: Any) -> "Matrix3":
        if isinstance(other, Matrix3):
            return Matrix3(self._data @ other._data)
        try:
            factor = to_float(other)
        except TypeError:
            return NotImplemented
        return Matrix3(self._data * factor)

    def __rmul__(self, other: Any) -> "Matrix3":
        try:
            factor = to_float(other)
        except TypeError:
            return NotImplemented
        return Matrix3(self._data * factor)

    def __truediv__(self, other: Any) -> "Matrix3":
        try:
            divisor = to_float(other)
        except TypeError:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Matrix3(self._data / divisor)

    def __neg__(self) -> "Matrix3":
        return Matrix3(-self._data)

    # -- comparison ----------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def allclose(self, other: "Matrix3", atol: float = 1e-9) -> bool:
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=atol))

    # -- display -------------------------------------------------------------
    def to_string(self, precision: int = DEFAULT_PRECISION) -> str:
        rows = (
            "[" + ", ".join(f"{v:.{precision}f}" for v in row) + "]"
            for row in self._data
        )
        return "[" + ", ".join(rows) + "]"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.to_string()
        return self.to_string(int(format_spec.lstrip(".").rstrip("f")))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix3({self.to_string(10)})"

