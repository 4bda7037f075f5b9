# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: subtractive.py — Device CMY and CMYK over an encoded RGB space.

These are the naive complements of ``Rgb[S]``, not a print profile:
    CMY   c = 1 - r
    CMYK  k = 1 - max(r, g, b), c = (1 - r - k) / (1 - k); pure black is
          (0, 0, 0, 1)
Both are bound to the RgbSpec they complement.
"""

from __future__ import annotations

from typing import ClassVar, Tuple

from .model import ColorModel, RgbBound
from .rgb import Rgb
from .xyz import Xyz

__all__ = ["Cmy", "Cmyk"]


class Cmy(RgbBound, ColorModel):
    """
    Cyan, magenta, yellow (0-1).
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("c", "m", "y")

    @classmethod
    def native_conversions(cls):
        rgb = Rgb[cls.SPEC]
        return ((rgb, cls, cls.from_rgb), (cls, rgb, cls._to_rgb))

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "Cmy":
        return cls(*(1.0 - v for v in rgb.components()), alpha=rgb.alpha)

    def _to_rgb(self) -> Rgb:
        return Rgb[self.SPEC](*(1.0 - v for v in self.components()), alpha=self.alpha)

    def to_xyz(self) -> Xyz:
        return self._to_rgb().to_xyz()

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Cmy":
        return cls.from_rgb(Rgb[cls.SPEC].from_xyz(xyz))


class Cmyk(RgbBound, ColorModel):
    """
    Cyan, magenta, yellow and key (black), all 0-1.

    Args:
        c, m, y: Chromatic inks after black removal.
        k: Key.
        alpha: Opacity in [0, 1].
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("c", "m", "y", "k")

    @classmethod
    def native_conversions(cls):
        rgb = Rgb[cls.SPEC]
        cmy = Cmy[cls.SPEC]
        return (
            (rgb, cls, cls.from_rgb),
            (cls, rgb, cls._to_rgb),
            (cmy, cls, cls.from_cmy),
            (cls, cmy, cls._to_cmy),
        )

    @classmethod
    def from_cmy(cls, cmy: Cmy) -> "Cmyk":
        c, m, y = cmy.components()
        k = min(c, m, y)
        if k >= 1.0:
            return cls(0.0, 0.0, 0.0, 1.0, alpha=cmy.alpha)
        rest = 1.0 - k
        return cls((c - k) / rest, (m - k) / rest, (y - k) / rest, k, alpha=cmy.alpha)

    def _to_cmy(self) -> Cmy:
        """Folds the key back into the three inks."""
        c, m, y, k = self.components()
        rest = 1.0 - k
        return Cmy[self.SPEC](c * rest + k, m * rest + k, y * rest + k, alpha=self.alpha)

    @classmethod
    def from_rgb(cls, rgb: Rgb) -> "Cmyk":
        return cls.from_cmy(Cmy[cls.SPEC].from_rgb(rgb))

    def _to_rgb(self) -> Rgb:
        c, m, y, k = self.components()
        rest = 1.0 - k
        return Rgb[self.SPEC]((1.0 - c) * rest, (1.0 - m) * rest, (1.0 - y) * rest, alpha=self.alpha)

    def to_xyz(self) -> Xyz:
        return self._to_rgb().to_xyz()

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Cmyk":
        return cls.from_rgb(Rgb[cls.SPEC].from_xyz(xyz))

    # -- inks ------------------------------------------------------------------
    @property
    def cyan(self) -> float:
        return self.c  # type: ignore[attr-defined]

    @property
    def magenta(self) -> float:
        return self.m  # type: ignore[attr-defined]

    @property
    def yellow(self) -> float:
        return self.y  # type: ignore[attr-defined]

    @property
    def key(self) -> float:
        return self.k  # type: ignore[attr-defined]
