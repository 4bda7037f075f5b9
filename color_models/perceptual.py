# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: perceptual.py — Oklab, OkLCh, gamut mapping and HPLuv.

Oklab is defined on D65 XYZ (Ottosson 2020). Values from any other white are
adapted to D65 with the transform of their own context before conversion.
OkLCh is the hub for the universal hue and chroma; Oklab is the default
mixing space.

Gamut mapping (``map_into_gamut``):
    Lightness and hue are kept; OkLCh chroma is reduced until the value sits
    on the boundary of the target RGB gamut. The boundary chroma is the root
    of the channel excess, found with ``scipy.optimize.brentq``. L >= 1 maps
    to white, L <= 0 to black.

HPLuv (``Hpluv``) scales L*u*v* chroma by the largest chroma that is inside
the bound RGB space at every hue for the given L*, so its saturation is
hue-independent. The bound is derived from the inverse matrix of the space.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar, Final, Tuple

import numpy as np
from scipy.optimize import brentq

from swatch_context import ColorimetricContext
from swatch_matrix import Matrix3
from swatch_rgbspec import RgbSpec
from swatch_scalar import ScalarLike, to_float

from .cie import (
    ACHROMATIC_THRESHOLD,
    EPSILON,
    KAPPA,
    Luv,
    _polar,
    _rectangular,
    _uv_prime,
    mix_hue,
    powerless_hue,
)
from .model import ColorModel, RgbBound
from .xyz import Xyz

__all__ = [
    "Oklab",
    "Oklch",
    "map_into_gamut",
    "Hpluv",
    "max_safe_chroma",
]

# XYZ (D65) -> LMS
M1_XYZ_TO_LMS: Final = Matrix3([
    [0.8189330101, 0.3618667424, -0.1288597137],
    [0.0329845436, 0.9293118715, 0.0361456387],
    [0.0482003018, 0.2643662691, 0.6338517070],
])

# LMS' (cube root) -> Lab
M2_LMS_TO_LAB: Final = Matrix3([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])

M1_LMS_TO_XYZ: Final = M1_XYZ_TO_LMS.inverse()
M2_LAB_TO_LMS: Final = M2_LMS_TO_LAB.inverse()

# Chroma tolerance of the boundary search.
_GAMUT_XTOL: Final[float] = 1e-10


def _oklab_context(xyz: Xyz) -> ColorimetricContext:
    """D65 / CIE 1931 2° with the transform of the incoming context."""
    return ColorimetricContext(cat=xyz.context.cat)


# =============================================================================
# 1. OKLAB
# =============================================================================

class Oklab(ColorModel):
    """
    Oklab perceptual space.

    Args:
        l: Perceptual lightness (0-1).
        a, b: Opponent axes.
        alpha: Opacity in [0, 1].
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("l", "a", "b")
    HUB_COST: ClassVar[int] = 1

    def to_xyz(self) -> Xyz:
        lms_prime = np.array(M2_LAB_TO_LMS.apply(self.components()))
        lms = lms_prime ** 3
        return Xyz(*M1_LMS_TO_XYZ.apply(lms), alpha=self.alpha, context=ColorimetricContext())

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Oklab":
        target = _oklab_context(xyz)
        if not xyz.context.shares_white_with(target):
            xyz = xyz.adapted_to(target)
        lms = np.array(M1_XYZ_TO_LMS.apply(xyz.components()))
        lms_prime = np.sign(lms) * np.abs(lms) ** (1.0 / 3.0)
        return cls(*M2_LMS_TO_LAB.apply(lms_prime), alpha=xyz.alpha)

    def mixed_with(self, other: ColorModel, t: ScalarLike = 0.5) -> "Oklab":
        """Linear interpolation in Oklab."""
        o = other.to(Oklab)
        tt = to_float(t)
        values = tuple(p + (q - p) * tt for p, q in zip(self.components(), o.components()))
        alpha = min(max(self.alpha + (o.alpha - self.alpha) * tt, 0.0), 1.0)
        return self.with_components(values).with_alpha(alpha)  # type: ignore[return-value]


# =============================================================================
# 2. OKLCH
# =============================================================================

class Oklch(ColorModel):
    """
    Cylindrical Oklab: lightness, chroma, hue in degrees. The exact angle is
    stored; chroma below 1e-4 reports hue 0.0 and does not rotate.
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("l", "c", "h")
    ANGULAR_COMPONENTS: ClassVar[Tuple[str, ...]] = ("h",)
    HUB_COST: ClassVar[int] = 2

    @classmethod
    def native_conversions(cls):
        return ((Oklab, cls, cls.from_oklab), (cls, Oklab, cls.to_oklab))

    @classmethod
    def from_oklab(cls, oklab: Oklab) -> "Oklch":
        l, a, b = oklab.components()
        chroma, hue = _polar(a, b)
        return cls(l, chroma, hue, alpha=oklab.alpha)

    def to_oklab(self) -> Oklab:
        l, c, h = self.components()
        a, b = _rectangular(c, h)
        return Oklab(l, a, b, alpha=self.alpha)

    def to_xyz(self) -> Xyz:
        return self.to_oklab().to_xyz()

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Oklch":
        return cls.from_oklab(Oklab.from_xyz(xyz))

    @property
    def hue(self) -> float:
        return powerless_hue(self.c, self.h)  # type: ignore[attr-defined]

    def with_hue(self, hue: ScalarLike) -> "Oklch":
        return self.with_h(to_float(hue) % 360.0)  # type: ignore[attr-defined]

    def with_hue_rotated_by(self, degrees: ScalarLike) -> "Oklch":
        if self.c < ACHROMATIC_THRESHOLD:  # type: ignore[attr-defined]
            return self.copy()  # type: ignore[return-value]
        return self.with_hue(self.h + to_float(degrees))  # type: ignore[attr-defined]

    @property
    def chroma(self) -> float:
        return self.c  # type: ignore[attr-defined]

    def with_chroma(self, chroma: ScalarLike) -> "Oklch":
        return self.with_c(chroma)  # type: ignore[attr-defined]

    def mixed_with(self, other: ColorModel, t: ScalarLike = 0.5) -> "Oklch":
        """Interpolates L and C linearly and hue along the shortest arc."""
        o = other.to(Oklch)
        tt = to_float(t)
        l1, c1, h1 = self.components()
        l2, c2, h2 = o.components()
        alpha = min(max(self.alpha + (o.alpha - self.alpha) * tt, 0.0), 1.0)
        return self.with_components(
            (l1 + (l2 - l1) * tt, c1 + (c2 - c1) * tt, mix_hue(h1, c1, h2, c2, tt))
        ).with_alpha(alpha)  # type: ignore[return-value]


# =============================================================================
# 3. GAMUT MAPPING
# =============================================================================

def _channel_excess(oklch: Oklch, linear_cls: type, chroma: float) -> float:
    """How far the most out-of-range linear channel lies outside [0, 1]."""
    channels = oklch.with_c(chroma).to(linear_cls).components()  # type: ignore[attr-defined]
    return max(max(channels) - 1.0, -min(channels))


def map_into_gamut(color: ColorModel, rgb_cls: type) -> Any:
    """
    Maps ``color`` into the gamut of ``rgb_cls`` (an ``Rgb[spec]`` class).

    Args:
        color: Any color model instance.
        rgb_cls: Target encoded RGB class.

    Returns:
        An instance of ``rgb_cls`` with all channels in [0, 1].
    """
    from .rgb import LinearRgb

    rgb = color.to(rgb_cls)
    if rgb.in_gamut():
        return rgb

    oklch = color.to(Oklch)
    lightness = oklch.l  # type: ignore[attr-defined]
    if lightness >= 1.0:
        return rgb_cls(1.0, 1.0, 1.0, alpha=color.alpha)
    if lightness <= 0.0:
        return rgb_cls(0.0, 0.0, 0.0, alpha=color.alpha)

    linear_cls = LinearRgb[rgb_cls.SPEC]
    chroma = oklch.c  # type: ignore[attr-defined]
    if _channel_excess(oklch, linear_cls, 0.0) >= 0.0:
        # the neutral axis itself touches the boundary at this lightness
        chroma = 0.0
    elif _channel_excess(oklch, linear_cls, chroma) > 0.0:
        chroma = brentq(
            lambda c: _channel_excess(oklch, linear_cls, c), 0.0, chroma, xtol=_GAMUT_XTOL
        )
    return oklch.with_c(chroma).to(rgb_cls).clamped()  # type: ignore[attr-defined]


# =============================================================================
# 4. HPLUV
# =============================================================================

# Lightness beyond which the safe chroma is taken as zero.
_HPLUV_L_MIN: Final[float] = 1e-8
_HPLUV_L_MAX: Final[float] = 100.0 - 1e-7


def max_safe_chroma(lightness: float, spec: RgbSpec) -> float:
    """
    Largest L*u*v* chroma at ``lightness`` that stays inside ``spec`` for
    every hue: the distance from the neutral axis to the nearest gamut edge.

    Each channel bound (linear channel = 0 or 1) is a line in the (u*, v*)
    plane at fixed L*; the result is the smallest origin distance over the
    six lines.
    """
    if not _HPLUV_L_MIN < lightness < _HPLUV_L_MAX:
        return 0.0
    white = spec.reference_white()
    if lightness > KAPPA * EPSILON:
        y = white[1] * ((lightness + 16.0) / 116.0) ** 3
    else:
        y = white[1] * lightness / KAPPA
    un_p, vn_p = _uv_prime(*white)
    best = math.inf
    for m1, m2, m3 in spec.inverse_xyz_matrix().rows():
        for bound in (0.0, 1.0):
            a = y * (9.0 * m1 - 3.0 * m3)
            b = y * (4.0 * m2 - 20.0 * m3) - 4.0 * bound
            c = 12.0 * m3 * y
            norm = math.hypot(a, b)
            if norm == 0.0:
                continue
            best = min(best, 13.0 * lightness * abs(a * un_p + b * vn_p + c) / norm)
    return 0.0 if math.isinf(best) else best


class Hpluv(RgbBound, ColorModel):
    """
    HPLuv: hue, saturation and lightness over CIE L*u*v*, with saturation
    relative to the chroma that is safe at every hue of the bound RGB space.

    Rotating the hue of an in-gamut HPLuv value never leaves the gamut.
    ``Hpluv`` is over sRGB; ``Hpluv[DISPLAY_P3]`` uses the Display P3 bound.

    Args:
        h: Hue in degrees.
        s: Saturation (0-1), 1 at the safe-chroma circle.
        l: CIE L* / 100.
        alpha: Opacity in [0, 1].
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("h", "s", "l")
    ANGULAR_COMPONENTS: ClassVar[Tuple[str, ...]] = ("h",)

    def _to_luv(self) -> Luv:
        h, s, l = self.components()
        lightness = l * 100.0
        u, v = _rectangular(s * max_safe_chroma(lightness, self.SPEC), h)
        return Luv(lightness, u, v, alpha=self.alpha, context=self.SPEC.context)

    def to_xyz(self) -> Xyz:
        return self._to_luv().to_xyz()

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Hpluv":
        spec: RgbSpec = cls.SPEC
        if not xyz.context.shares_white_with(spec.context):
            xyz = xyz.adapted_to(spec.context)
        lightness, u, v = Luv.from_xyz(xyz).components()
        chroma, hue = _polar(u, v)
        limit = max_safe_chroma(lightness, spec)
        s = chroma / limit if limit > ACHROMATIC_THRESHOLD else 0.0
        return cls(hue, s, lightness / 100.0, alpha=xyz.alpha)

    @property
    def hue(self) -> float:
        return powerless_hue(self.s, self.h)  # type: ignore[attr-defined]

    def with_hue(self, hue: ScalarLike) -> "Hpluv":
        return self.with_h(to_float(hue) % 360.0)  # type: ignore[attr-defined]

    def with_hue_rotated_by(self, degrees: ScalarLike) -> "Hpluv":
        if self.s < ACHROMATIC_THRESHOLD:  # type: ignore[attr-defined]
            return self.copy()  # type: ignore[return-value]
        return self.with_hue(self.h + to_float(degrees))  # type: ignore[attr-defined]

    @property
    def saturation(self) -> float:
        return self.s  # type: ignore[attr-defined]

    def with_saturation(self, saturation: ScalarLike) -> "Hpluv":
        return self.with_s(saturation)  # type: ignore[attr-defined]
