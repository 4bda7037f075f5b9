# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: cylindrical.py — HSL, HSV, HWB and HSI over an encoded RGB space.

Each model is a cylindrical re-parametrisation of ``Rgb[S]`` and, like it,
is bound to one RgbSpec: ``Hsl`` is over sRGB, ``Hsl[DISPLAY_P3]`` over
Display P3. They convert to and from their own ``Rgb[S]`` natively and reach
everything else through it.

Units:
    h     hue in degrees [0, 360); achromatic values (max == min) report 0.0
    s/l/v/w/b/i fractions, nominally in [0, 1]

The ``l`` component of Hsl is the HSL lightness; the universal ``lightness``
property is CIE L* for every model.

HSL has one singularity outside the gamut: channels that differ but average to
an HSL lightness of exactly 0 or 1 (``Rgb(1.5, 0.5, 0.5)``) have no finite
saturation. They convert with s = 0 and come back as the gray of that
lightness; every other out-of-gamut value round-trips.
"""

from __future__ import annotations

import math
from typing import ClassVar, Tuple

from swatch_scalar import ScalarLike, to_float

from .model import ColorModel, RgbBound
from .rgb import Rgb
from .xyz import Xyz

__all__ = ["Hsl", "Hsv", "Hwb", "Hsi"]


# =============================================================================
# 1. SHARED GEOMETRY
# =============================================================================

def _hue_of(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """(hue°, max, min) of an RGB triple; hue is 0.0 when max == min."""
    high = max(r, g, b)
    low = min(r, g, b)
    delta = high - low
    if delta <= 0.0:
        return 0.0, high, low
    if high == r:
        sector = ((g - b) / delta) % 6.0
    elif high == g:
        sector = (b - r) / delta + 2.0
    else:
        sector = (r - g) / delta + 4.0
    return (sector * 60.0) % 360.0, high, low


def _pure_hue(hue: float, chroma: float) -> Tuple[float, float, float]:
    """RGB offsets of a hue at the given chroma, before the lightness shift."""
    h_prime = (hue % 360.0) / 60.0
    x = chroma * (1.0 - abs(h_prime % 2.0 - 1.0))
    sector = int(h_prime) % 6
    return (
        (chroma, x, 0.0),
        (x, chroma, 0.0),
        (0.0, chroma, x),
        (0.0, x, chroma),
        (x, 0.0, chroma),
        (chroma, 0.0, x),
    )[sector]


class _RgbCylinder(RgbBound, ColorModel):
    """Common hue handling and the native edges to ``Rgb[S]``."""

    __slots__ = ()

    ANGULAR_COMPONENTS: ClassVar[Tuple[str, ...]] = ("h",)

    @classmethod
    def native_conversions(cls):
        rgb = Rgb[cls.SPEC]
        return ((rgb, cls, cls.from_rgb), (cls, rgb, cls._to_rgb))

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "_RgbCylinder":
        raise NotImplementedError(f"{cls.__name__} must implement from_rgb().")

    def _to_rgb(self) -> Rgb:
        raise NotImplementedError(f"{type(self).__name__} must implement _to_rgb().")

    def to_xyz(self) -> Xyz:
        return self._to_rgb().to_xyz()

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "_RgbCylinder":
        return cls.from_rgb(Rgb[cls.SPEC].from_xyz(xyz))

    # -- hue -------------------------------------------------------------------
    @property
    def hue(self) -> float:
        return self.h % 360.0  # type: ignore[attr-defined]

    def with_hue(self, hue: ScalarLike) -> "_RgbCylinder":
        return self.with_h(to_float(hue) % 360.0)  # type: ignore[attr-defined]

    def with_hue_rotated_by(self, degrees: ScalarLike) -> "_RgbCylinder":
        return self.with_hue(self.h + to_float(degrees))  # type: ignore[attr-defined]


# =============================================================================
# 2. HSL
# =============================================================================

class Hsl(_RgbCylinder):
    """
    Hue, saturation, lightness.

    Args:
        h: Hue in degrees.
        s: Saturation (0-1).
        l: HSL lightness (0-1).
        alpha: Opacity in [0, 1].

    Saturation is 0 where its denominator vanishes (l of exactly 0 or 1 with
    unequal channels); such values do not survive a round trip.
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("h", "s", "l")

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "Hsl":
        hue, high, low = _hue_of(*rgb.components())
        delta = high - low
        l = (high + low) / 2.0
        if delta <= 0.0:
            return cls(0.0, 0.0, l, alpha=rgb.alpha)
        denominator = high + low if l <= 0.5 else 2.0 - high - low
        s = delta / denominator if denominator != 0.0 else 0.0
        return cls(hue, s, l, alpha=rgb.alpha)

    def _to_rgb(self) -> Rgb:
        h, s, l = self.components()
        chroma = (1.0 - abs(2.0 * l - 1.0)) * s
        shift = l - chroma / 2.0
        r, g, b = _pure_hue(h, chroma)
        return Rgb[self.SPEC](r + shift, g + shift, b + shift, alpha=self.alpha)

    @property
    def saturation(self) -> float:
        return self.s  # type: ignore[attr-defined]

    def with_saturation(self, saturation: ScalarLike) -> "Hsl":
        return self.with_s(saturation)  # type: ignore[attr-defined]


# =============================================================================
# 3. HSV
# =============================================================================

class Hsv(_RgbCylinder):
    """
    Hue, saturation, value.

    Args:
        h: Hue in degrees.
        s: Saturation (0-1).
        v: Value (0-1).
        alpha: Opacity in [0, 1].
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("h", "s", "v")

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "Hsv":
        hue, high, low = _hue_of(*rgb.components())
        s = (high - low) / high if high != 0.0 else 0.0
        return cls(hue, s, high, alpha=rgb.alpha)

    def _to_rgb(self) -> Rgb:
        h, s, v = self.components()
        chroma = v * s
        shift = v - chroma
        r, g, b = _pure_hue(h, chroma)
        return Rgb[self.SPEC](r + shift, g + shift, b + shift, alpha=self.alpha)

    @property
    def saturation(self) -> float:
        return self.s  # type: ignore[attr-defined]

    def with_saturation(self, saturation: ScalarLike) -> "Hsv":
        return self.with_s(saturation)  # type: ignore[attr-defined]


# =============================================================================
# 4. HWB
# =============================================================================

class Hwb(_RgbCylinder):
    """
    Hue, whiteness, blackness. Whiteness + blackness >= 1 is a gray of
    level ``w / (w + b)``.

    Args:
        h: Hue in degrees.
        w: Whiteness (0-1).
        b: Blackness (0-1).
        alpha: Opacity in [0, 1].
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("h", "w", "b")

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "Hwb":
        hue, high, low = _hue_of(*rgb.components())
        return cls(hue, low, 1.0 - high, alpha=rgb.alpha)

    def _to_rgb(self) -> Rgb:
        h, w, b = self.components()
        rgb_cls = Rgb[self.SPEC]
        if w + b >= 1.0:
            gray = w / (w + b)
            return rgb_cls(gray, gray, gray, alpha=self.alpha)
        span = 1.0 - w - b
        return rgb_cls(*(c * span + w for c in _pure_hue(h, 1.0)), alpha=self.alpha)


# =============================================================================
# 5. HSI
# =============================================================================

_SQRT3: float = math.sqrt(3.0)


class Hsi(_RgbCylinder):
    """
    Hue, saturation, intensity.

    Intensity is the channel mean and saturation ``1 - min / i``. The hue is
    the geometric angle in the chromatic plane, so it differs slightly from
    the hexagonal HSL/HSV hue between the primaries. Channels that differ but
    average to zero have no finite saturation and convert with s = 0.

    Args:
        h: Hue in degrees.
        s: Saturation (0-1).
        i: Intensity (0-1).
        alpha: Opacity in [0, 1].
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("h", "s", "i")

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "Hsi":
        r, g, b = rgb.components()
        i = (r + g + b) / 3.0
        if max(r, g, b) - min(r, g, b) <= 0.0:
            return cls(0.0, 0.0, i, alpha=rgb.alpha)
        hue = math.degrees(math.atan2(_SQRT3 * (g - b), 2.0 * r - g - b)) % 360.0
        s = 1.0 - min(r, g, b) / i if i != 0.0 else 0.0
        return cls(hue, s, i, alpha=rgb.alpha)

    def _to_rgb(self) -> Rgb:
        h, s, i = self.components()
        # rotate into the first sector; the low channel there is blue
        sector, offset = divmod(h % 360.0, 120.0)
        rad = math.radians(offset)
        low = i * (1.0 - s)
        lead = i * (1.0 + s * math.cos(rad) / math.cos(math.pi / 3.0 - rad))
        trail = 3.0 * i - lead - low
        index = int(sector) % 3
        if index == 0:
            rgb = (lead, trail, low)
        elif index == 1:
            rgb = (low, lead, trail)
        else:
            rgb = (trail, low, lead)
        return Rgb[self.SPEC](*rgb, alpha=self.alpha)

    @property
    def saturation(self) -> float:
        return self.s  # type: ignore[attr-defined]

    def with_saturation(self, saturation: ScalarLike) -> "Hsi":
        return self.with_s(saturation)  # type: ignore[attr-defined]
