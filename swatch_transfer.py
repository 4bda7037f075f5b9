# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_transfer.py — Transfer functions (OETF / EOTF pairs) relating
linear light to encoded RGB values.

The set of curves is closed: linear, pure power-law gamma, sRGB, BT.709,
BT.601, SMPTE ST 2084 (PQ), ARIB STD-B67 (HLG) and ROMM (ProPhoto RGB).

Notes:
  1.  Every curve is extended to negative input by odd symmetry
      (f(-x) = -f(x)). Out-of-gamut values produced by conversions are
      therefore preserved through encode/decode instead of collapsing to NaN.
  2.  PQ works on normalised linear light: 1.0 corresponds to 10000 cd/m².
      Above 1.0 (either side) PQ continues linearly along its tangent at the
      peak, so decode stays finite and the pair remains mutually inverse.
  3.  The kernels are scalar Numba functions with explicit signatures so
      that they compile once at import and are shared by every RGB space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Final, Optional

from numba import njit, float64

from swatch_scalar import ScalarLike, to_float

__all__ = [
    "TransferKind",
    "TransferFunction",
]

# --- IEC 61966-2-1 (sRGB) ---
SRGB_ALPHA: Final[float] = 0.055
SRGB_GAMMA: Final[float] = 2.4
SRGB_SLOPE: Final[float] = 12.92
SRGB_LINEAR_THRESHOLD: Final[float] = 0.0031308
SRGB_ENCODED_THRESHOLD: Final[float] = 0.04045

# --- ITU-R BT.709 / BT.601 (identical OETF) ---
# Full-precision alpha/beta from BT.2020 so both segments meet exactly;
# the rounded 0.099 / 0.018 pair leaves a small gap at the knee.
BT709_ALPHA: Final[float] = 0.09929682680944
BT709_GAMMA: Final[float] = 1.0 / 0.45
BT709_SLOPE: Final[float] = 4.5
BT709_LINEAR_THRESHOLD: Final[float] = 0.018053968510807
BT709_ENCODED_THRESHOLD: Final[float] = BT709_SLOPE * BT709_LINEAR_THRESHOLD

# --- ARIB STD-B67 (HLG) ---
HLG_A: Final[float] = 0.17883277
HLG_B: Final[float] = 0.28466892
HLG_C: Final[float] = 0.55991073

# --- SMPTE ST 2084 (PQ) ---
PQ_C1: Final[float] = 3424.0 / 4096.0
PQ_C2: Final[float] = 2413.0 / 4096.0 * 32.0
PQ_C3: Final[float] = 2392.0 / 4096.0 * 32.0
PQ_M1: Final[float] = 2610.0 / 16384.0
PQ_M2: Final[float] = 2523.0 / 4096.0 * 128.0
# d(decode)/d(encoded) at the 10000 cd/m² peak, where both sides equal 1.0.
# Past the peak both kernels follow this tangent; the decode pole sits near 1.99.
PQ_PEAK_SLOPE: Final[float] = (PQ_C2 - PQ_C3 * PQ_C1) / ((PQ_C2 - PQ_C3) ** 2 * PQ_M1 * PQ_M2)

# --- ROMM RGB (ProPhoto) ---
PROPHOTO_GAMMA: Final[float] = 1.8
PROPHOTO_SLOPE: Final[float] = 16.0
PROPHOTO_LINEAR_THRESHOLD: Final[float] = 1.0 / 512.0
PROPHOTO_ENCODED_THRESHOLD: Final[float] = 16.0 / 512.0


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(float64(float64), cache=True)
def _srgb_encode(v: float) -> float:
    a = abs(v)
    if a <= SRGB_LINEAR_THRESHOLD:
        e = SRGB_SLOPE * a
    else:
        e = (1.0 + SRGB_ALPHA) * a ** (1.0 / SRGB_GAMMA) - SRGB_ALPHA
    return math.copysign(e, v)


@njit(float64(float64), cache=True)
def _srgb_decode(v: float) -> float:
    a = abs(v)
    if a <= SRGB_ENCODED_THRESHOLD:
        lin = a / SRGB_SLOPE
    else:
        lin = ((a + SRGB_ALPHA) / (1.0 + SRGB_ALPHA)) ** SRGB_GAMMA
    return math.copysign(lin, v)


@njit(float64(float64), cache=True)
def _bt709_encode(v: float) -> float:
    a = abs(v)
    if a < BT709_LINEAR_THRESHOLD:
        e = BT709_SLOPE * a
    else:
        e = (1.0 + BT709_ALPHA) * a ** (1.0 / BT709_GAMMA) - BT709_ALPHA
    return math.copysign(e, v)


@njit(float64(float64), cache=True)
def _bt709_decode(v: float) -> float:
    a = abs(v)
    if a < BT709_ENCODED_THRESHOLD:
        lin = a / BT709_SLOPE
    else:
        lin = ((a + BT709_ALPHA) / (1.0 + BT709_ALPHA)) ** BT709_GAMMA
    return math.copysign(lin, v)


@njit(float64(float64, float64), cache=True)
def _gamma_encode(v: float, gamma: float) -> float:
    return math.copysign(abs(v) ** (1.0 / gamma), v)


@njit(float64(float64, float64), cache=True)
def _gamma_decode(v: float, gamma: float) -> float:
    return math.copysign(abs(v) ** gamma, v)


@njit(float64(float64), cache=True)
def _hlg_encode(v: float) -> float:
    a = abs(v)
    if a <= 1.0 / 12.0:
        e = math.sqrt(3.0 * a)
    else:
        e = HLG_A * math.log(12.0 * a - HLG_B) + HLG_C
    return math.copysign(e, v)


@njit(float64(float64), cache=True)
def _hlg_decode(v: float) -> float:
    a = abs(v)
    if a <= 0.5:
        lin = a * a / 3.0
    else:
        lin = (math.exp((a - HLG_C) / HLG_A) + HLG_B) / 12.0
    return math.copysign(lin, v)


@njit(float64(float64), cache=True)
def _pq_encode(v: float) -> float:
    a = abs(v)
    if a > 1.0:
        return math.copysign(1.0 + (a - 1.0) / PQ_PEAK_SLOPE, v)
    y = a ** PQ_M1
    e = ((PQ_C1 + PQ_C2 * y) / (1.0 + PQ_C3 * y)) ** PQ_M2
    return math.copysign(e, v)


@njit(float64(float64), cache=True)
def _pq_decode(v: float) -> float:
    a = abs(v)
    if a > 1.0:
        return math.copysign(1.0 + (a - 1.0) * PQ_PEAK_SLOPE, v)
    p = a ** (1.0 / PQ_M2)
    num = max(p - PQ_C1, 0.0)
    lin = (num / (PQ_C2 - PQ_C3 * p)) ** (1.0 / PQ_M1)
    return math.copysign(lin, v)


@njit(float64(float64), cache=True)
def _prophoto_encode(v: float) -> float:
    a = abs(v)
    if a < PROPHOTO_LINEAR_THRESHOLD:
        e = PROPHOTO_SLOPE * a
    else:
        e = a ** (1.0 / PROPHOTO_GAMMA)
    return math.copysign(e, v)


@njit(float64(float64), cache=True)
def _prophoto_decode(v: float) -> float:
    a = abs(v)
    if a < PROPHOTO_ENCODED_THRESHOLD:
        lin = a / PROPHOTO_SLOPE
    else:
        lin = a ** PROPHOTO_GAMMA
    return math.copysign(lin, v)


# =============================================================================
# 2. TRANSFER FUNCTION VALUES
# =============================================================================

class TransferKind(Enum):
    LINEAR = "Linear"
    GAMMA = "Gamma"
    SRGB = "sRGB"
    BT709 = "BT.709"
    BT601 = "BT.601"
    PQ = "PQ (ST 2084)"
    HLG = "HLG"
    PROPHOTO = "ProPhoto RGB"


@dataclass(frozen=True)
class TransferFunction:
    """
    A named encode/decode curve.

    Use the class constants (``TransferFunction.SRGB`` …) or
    ``TransferFunction.gamma(2.2)`` rather than the constructor.
    """

    kind: TransferKind
    exponent: Optional[float] = None

    LINEAR: ClassVar["TransferFunction"]
    SRGB: ClassVar["TransferFunction"]
    BT709: ClassVar["TransferFunction"]
    BT601: ClassVar["TransferFunction"]
    PQ: ClassVar["TransferFunction"]
    HLG: ClassVar["TransferFunction"]
    PROPHOTO: ClassVar["TransferFunction"]

    def __post_init__(self) -> None:
        if self.kind is TransferKind.GAMMA:
            if self.exponent is None or not self.exponent > 0.0:
                raise ValueError(f"Gamma exponent must be positive, got {self.exponent}.")
        elif self.exponent is not None:
            raise ValueError(f"{self.kind.value} does not take an exponent.")

    @classmethod
    def gamma(cls, exponent: ScalarLike) -> "TransferFunction":
        """Pure power law: ``decode(e) = e ** exponent``."""
        return cls(TransferKind.GAMMA, to_float(exponent))

    @property
    def is_linear(self) -> bool:
        return self.kind is TransferKind.LINEAR

    def encode(self, linear: ScalarLike) -> float:
        """Linear light -> encoded value."""
        v = to_float(linear)
        kind = self.kind
        if kind is TransferKind.LINEAR:
            return v
        if kind is TransferKind.SRGB:
            return _srgb_encode(v)
        if kind is TransferKind.GAMMA:
            return _gamma_encode(v, self.exponent)
        if kind is TransferKind.BT709 or kind is TransferKind.BT601:
            return _bt709_encode(v)
        if kind is TransferKind.PQ:
            return _pq_encode(v)
        if kind is TransferKind.HLG:
            return _hlg_encode(v)
        return _prophoto_encode(v)

    def decode(self, encoded: ScalarLike) -> float:
        """Encoded value -> linear light."""
        v = to_float(encoded)
        kind = self.kind
        if kind is TransferKind.LINEAR:
            return v
        if kind is TransferKind.SRGB:
            return _srgb_decode(v)
        if kind is TransferKind.GAMMA:
            return _gamma_decode(v, self.exponent)
        if kind is TransferKind.BT709 or kind is TransferKind.BT601:
            return _bt709_decode(v)
        if kind is TransferKind.PQ:
            return _pq_decode(v)
        if kind is TransferKind.HLG:
            return _hlg_decode(v)
        return _prophoto_decode(v)

    def __str__(self) -> str:
        if self.kind is TransferKind.GAMMA:
            return f"Gamma {self.exponent:.2f}"
        return self.kind.value


TransferFunction.LINEAR = TransferFunction(TransferKind.LINEAR)
TransferFunction.SRGB = TransferFunction(TransferKind.SRGB)
TransferFunction.BT709 = TransferFunction(TransferKind.BT709)
TransferFunction.BT601 = TransferFunction(TransferKind.BT601)
TransferFunction.PQ = TransferFunction(TransferKind.PQ)
TransferFunction.HLG = TransferFunction(TransferKind.HLG)
TransferFunction.PROPHOTO = TransferFunction(TransferKind.PROPHOTO)
