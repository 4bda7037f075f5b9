# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: cie.py — CIE xyY, L*a*b*, LCh(ab) and L*u*v*.

All four are relative to the reference white of their context (D65 / CIE
1931 2° unless told otherwise) and convert through XYZ in that same context.

Conventions:
  1.  xyY of black carries the chromaticity of its reference white and Y = 0
      (Lindbloom); xyY with y = 0 converts to black.
  2.  LCh stores the exact hue angle of its a*, b* pair; the ``hue`` property
      reports 0.0 when chroma is below ``ACHROMATIC_THRESHOLD``, and rotating
      such a hue leaves the colour unchanged.
  3.  L*u*v* with L* = 0 converts to black.
  4.  Lab, LCh mix natively; LCh mixes hue along the shortest arc and treats
      the hue of an achromatic end as powerless.
"""

from __future__ import annotations

import math
from typing import ClassVar, Final, Tuple

from numba import njit, float64

from swatch_context import Xy
from swatch_scalar import ScalarLike, to_float

from .model import ColorModel, ContextualModel
from .xyz import Xyz

__all__ = [
    "Xyy",
    "Lab",
    "Lch",
    "Luv",
    "ACHROMATIC_THRESHOLD",
    "mix_hue",
    "powerless_hue",
]

# CIE constants in their exact rational form
DELTA: Final[float] = 6.0 / 29.0
EPSILON: Final[float] = 216.0 / 24389.0   # DELTA ** 3
KAPPA: Final[float] = 24389.0 / 27.0      # (29 / 3) ** 3

ACHROMATIC_THRESHOLD: Final[float] = 1e-4


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(float64(float64), cache=True)
def _lab_f(t: float) -> float:
    if t > EPSILON:
        return t ** (1.0 / 3.0)
    return t / (3.0 * DELTA * DELTA) + 4.0 / 29.0


@njit(float64(float64), cache=True)
def _lab_f_inv(t: float) -> float:
    if t > DELTA:
        return t * t * t
    return 3.0 * DELTA * DELTA * (t - 4.0 / 29.0)


def _polar(a: float, b: float) -> Tuple[float, float]:
    """(chroma, hue°) of a rectangular pair.

    The stored hue is always the exact angle, even for residual chroma; the
    achromatic sentinel is applied by the ``hue`` getters.
    """
    return math.hypot(a, b), math.degrees(math.atan2(b, a)) % 360.0


def powerless_hue(chroma: float, hue: float) -> float:
    """Reported hue: 0.0 below ``ACHROMATIC_THRESHOLD``, else in [0, 360)."""
    if chroma < ACHROMATIC_THRESHOLD:
        return 0.0
    return hue % 360.0


def _rectangular(chroma: float, hue: float) -> Tuple[float, float]:
    rad = math.radians(hue)
    return chroma * math.cos(rad), chroma * math.sin(rad)


def mix_hue(h1: float, c1: float, h2: float, c2: float, t: float) -> float:
    """
    Interpolates hue along the shortest arc.

    When one end is achromatic (chroma below ``ACHROMATIC_THRESHOLD``) its hue
    is powerless and the other hue is used; both achromatic gives 0.0.
    """
    achromatic1 = c1 < ACHROMATIC_THRESHOLD
    achromatic2 = c2 < ACHROMATIC_THRESHOLD
    if achromatic1 and achromatic2:
        return 0.0
    if achromatic1:
        return h2
    if achromatic2:
        return h1
    diff = h2 - h1
    if diff > 180.0:
        diff -= 360.0
    elif diff < -180.0:
        diff += 360.0
    return (h1 + diff * t) % 360.0


# =============================================================================
# 2. xyY
# =============================================================================

class Xyy(ContextualModel):
    """
    CIE xyY: chromaticity plus luminance.

    Args:
        x, y: Chromaticity coordinates.
        luminance: Y (reference white = 1).
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("x", "y", "luminance")
    HUB_COST: ClassVar[int] = 1

    def to_xyz(self) -> Xyz:
        values = Xy(self.x, self.y).to_xyz(self.luminance)  # type: ignore[attr-defined]
        return Xyz(*values, alpha=self.alpha, context=self._context)

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Xyy":
        x, y, z = xyz.components()
        if x + y + z == 0.0:
            white = Xy.from_xyz(xyz.context.reference_white())
            return cls(white.x, white.y, 0.0, alpha=xyz.alpha, context=xyz.context)
        chroma = Xy.from_xyz((x, y, z))
        return cls(chroma.x, chroma.y, y, alpha=xyz.alpha, context=xyz.context)

    @property
    def chromaticity(self) -> Xy:
        return Xy(self.x, self.y)  # type: ignore[attr-defined]


# =============================================================================
# 3. L*a*b*
# =============================================================================

class Lab(ContextualModel):
    """
    CIE 1976 L*a*b*.

    Args:
        l: Lightness L* (0-100).
        a, b: Opponent axes.
        alpha: Opacity in [0, 1].
        context: Viewing context; defaults to D65.
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("l", "a", "b")
    HUB_COST: ClassVar[int] = 1

    def to_xyz(self) -> Xyz:
        l, a, b = self.components()
        xn, yn, zn = self._context.reference_white()
        fy = (l + 16.0) / 116.0
        fx = fy + a / 500.0
        fz = fy - b / 200.0
        return Xyz(
            xn * _lab_f_inv(fx), yn * _lab_f_inv(fy), zn * _lab_f_inv(fz),
            alpha=self.alpha, context=self._context,
        )

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Lab":
        x, y, z = xyz.components()
        xn, yn, zn = xyz.context.reference_white()
        fx, fy, fz = _lab_f(x / xn), _lab_f(y / yn), _lab_f(z / zn)
        return cls(
            116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz),
            alpha=xyz.alpha, context=xyz.context,
        )

    @property
    def lightness(self) -> float:
        return self.l  # type: ignore[attr-defined]

    def with_lightness(self, lightness: ScalarLike) -> "Lab":
        return self.with_l(lightness)  # type: ignore[attr-defined]

    def mixed_with(self, other: ColorModel, t: ScalarLike = 0.5) -> "Lab":
        """Linear interpolation in rectangular L*a*b*."""
        o = self._coerce_same(other)
        tt = to_float(t)
        values = tuple(p + (q - p) * tt for p, q in zip(self.components(), o.components()))
        alpha = min(max(self.alpha + (o.alpha - self.alpha) * tt, 0.0), 1.0)
        return self.with_components(values).with_alpha(alpha)  # type: ignore[return-value]


# =============================================================================
# 4. LCh(ab)
# =============================================================================

class Lch(ContextualModel):
    """
    Cylindrical L*a*b*: lightness, chroma, hue in degrees.
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("l", "c", "h")
    ANGULAR_COMPONENTS: ClassVar[Tuple[str, ...]] = ("h",)
    HUB_COST: ClassVar[int] = 2

    @classmethod
    def native_conversions(cls):
        return ((Lab, cls, cls.from_lab), (cls, Lab, cls.to_lab))

    @classmethod
    def from_lab(cls, lab: Lab) -> "Lch":
        l, a, b = lab.components()
        chroma, hue = _polar(a, b)
        return cls(l, chroma, hue, alpha=lab.alpha, context=lab.context)

    def to_lab(self) -> Lab:
        l, c, h = self.components()
        a, b = _rectangular(c, h)
        return Lab(l, a, b, alpha=self.alpha, context=self._context)

    def to_xyz(self) -> Xyz:
        return self.to_lab().to_xyz()

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Lch":
        return cls.from_lab(Lab.from_xyz(xyz))

    @property
    def lightness(self) -> float:
        return self.l  # type: ignore[attr-defined]

    def with_lightness(self, lightness: ScalarLike) -> "Lch":
        return self.with_l(lightness)  # type: ignore[attr-defined]

    @property
    def chroma(self) -> float:
        return self.c  # type: ignore[attr-defined]

    def with_chroma(self, chroma: ScalarLike) -> "Lch":
        return self.with_c(chroma)  # type: ignore[attr-defined]

    @property
    def hue(self) -> float:
        return powerless_hue(self.c, self.h)  # type: ignore[attr-defined]

    def with_hue(self, hue: ScalarLike) -> "Lch":
        return self.with_h(to_float(hue) % 360.0)  # type: ignore[attr-defined]

    def with_hue_rotated_by(self, degrees: ScalarLike) -> "Lch":
        if self.c < ACHROMATIC_THRESHOLD:  # type: ignore[attr-defined]
            return self.copy()  # type: ignore[return-value]
        return self.with_hue(self.h + to_float(degrees))  # type: ignore[attr-defined]

    def mixed_with(self, other: ColorModel, t: ScalarLike = 0.5) -> "Lch":
        """Interpolates L and C linearly and hue along the shortest arc."""
        o = self._coerce_same(other)
        tt = to_float(t)
        l1, c1, h1 = self.components()
        l2, c2, h2 = o.components()
        alpha = min(max(self.alpha + (o.alpha - self.alpha) * tt, 0.0), 1.0)
        return self.with_components(
            (l1 + (l2 - l1) * tt, c1 + (c2 - c1) * tt, mix_hue(h1, c1, h2, c2, tt))
        ).with_alpha(alpha)  # type: ignore[return-value]


# =============================================================================
# 5. L*u*v*
# =============================================================================

def _uv_prime(x: float, y: float, z: float) -> Tuple[float, float]:
    denominator = x + 15.0 * y + 3.0 * z
    if denominator == 0.0:
        return 0.0, 0.0
    return 4.0 * x / denominator, 9.0 * y / denominator


class Luv(ContextualModel):
    """
    CIE 1976 L*u*v*.
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("l", "u", "v")
    HUB_COST: ClassVar[int] = 1

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Luv":
        x, y, z = xyz.components()
        white = xyz.context.reference_white()
        yr = y / white[1]
        if yr > EPSILON:
            l = 116.0 * yr ** (1.0 / 3.0) - 16.0
        else:
            l = KAPPA * yr
        u_p, v_p = _uv_prime(x, y, z)
        un_p, vn_p = _uv_prime(*white)
        return cls(
            l, 13.0 * l * (u_p - un_p), 13.0 * l * (v_p - vn_p),
            alpha=xyz.alpha, context=xyz.context,
        )

    def to_xyz(self) -> Xyz:
        l, u, v = self.components()
        if l == 0.0:
            return Xyz(0.0, 0.0, 0.0, alpha=self.alpha, context=self._context)
        white = self._context.reference_white()
        if l > KAPPA * EPSILON:
            y = white[1] * ((l + 16.0) / 116.0) ** 3
        else:
            y = white[1] * l / KAPPA
        un_p, vn_p = _uv_prime(*white)
        u_p = u / (13.0 * l) + un_p
        v_p = v / (13.0 * l) + vn_p
        if v_p == 0.0:
            return Xyz(0.0, y, 0.0, alpha=self.alpha, context=self._context)
        x = y * 9.0 * u_p / (4.0 * v_p)
        z = y * (12.0 - 3.0 * u_p - 20.0 * v_p) / (4.0 * v_p)
        return Xyz(x, y, z, alpha=self.alpha, context=self._context)
