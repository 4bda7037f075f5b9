# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: rgb.py — Linear and transfer-encoded RGB bound to an RgbSpec.

``Rgb`` is sRGB; ``Rgb[ADOBE_RGB]`` is a distinct class for Adobe RGB (1998)
and so on. Values of different spaces never combine without an explicit
conversion: arithmetic and mixing between them raise TypeError.

Conversions:
    LinearRgb[S] -> Xyz   M(S) · rgb, context of S
    Xyz -> LinearRgb[S]   adapted to the white of S first, then M(S)⁻¹ · xyz
    Rgb[S] <-> LinearRgb[S]   per-channel transfer function of S

Nothing is clamped on the way; use ``clamped`` / ``gamut_mapped`` explicitly.
The 8-bit accessors round without clamping finite values; a NaN channel
reads as 0 and an infinite one as 0 or 255 by sign.
"""

from __future__ import annotations

import math
from typing import Any, Callable, ClassVar, Optional, Tuple

from swatch_rgbspec import RgbSpec
from swatch_scalar import ScalarLike, to_float

from .model import ColorModel, RgbBound
from .xyz import Xyz

__all__ = ["LinearRgb", "Rgb"]

_EIGHT_BIT: float = 255.0


def _eight_bit(value: float) -> int:
    """Channel on the 0-255 scale, unclamped while finite."""
    scaled = value * _EIGHT_BIT
    if math.isnan(scaled):
        return 0
    if math.isinf(scaled):
        return 255 if scaled > 0.0 else 0
    return round(scaled)


class _ChannelArithmetic:
    """Component-wise ``+ - * /`` for RGB values of one space."""

    __slots__ = ()

    def _combine(self, other: Any, op: Callable[[float, float], float], scalars: bool) -> Any:
        if isinstance(other, ColorModel):
            self._check_space(other)  # type: ignore[attr-defined]
            if type(other) is not type(self):
                raise TypeError(
                    f"Cannot combine {type(self).__name__} with {type(other).__name__}."
                )
            rhs = other.components()
        elif scalars:
            try:
                value = to_float(other)
            except TypeError:
                return NotImplemented
            rhs = (value,) * 3
        else:
            return NotImplemented
        values = tuple(op(a, b) for a, b in zip(self.components(), rhs))  # type: ignore[attr-defined]
        return self.with_components(values)  # type: ignore[attr-defined]

    def __add__(self, other: Any) -> Any:
        return self._combine(other, lambda a, b: a + b, scalars=False)

    def __sub__(self, other: Any) -> Any:
        return self._combine(other, lambda a, b: a - b, scalars=False)

    def __mul__(self, other: Any) -> Any:
        return self._combine(other, lambda a, b: a * b, scalars=True)

    def __rmul__(self, other: Any) -> Any:
        return self._combine(other, lambda a, b: b * a, scalars=True)

    def __truediv__(self, other: Any) -> Any:
        return self._combine(other, lambda a, b: a / b, scalars=True)


# =============================================================================
# 1. LINEAR RGB
# =============================================================================

class LinearRgb(_ChannelArithmetic, RgbBound, ColorModel):
    """
    Linear-light RGB (no transfer function applied).

    Args:
        r, g, b: Channels, nominally in [0, 1].
        alpha: Opacity in [0, 1].
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("r", "g", "b")
    HUB_COST: ClassVar[int] = 1

    def to_xyz(self) -> Xyz:
        spec: RgbSpec = self.SPEC
        values = spec.xyz_matrix().apply(self.components())
        return Xyz(*values, alpha=self.alpha, context=spec.context)

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "LinearRgb":
        spec: RgbSpec = cls.SPEC
        if not xyz.context.shares_white_with(spec.context):
            xyz = xyz.adapted_to(spec.context)
        values = spec.inverse_xyz_matrix().apply(xyz.components())
        return cls(*values, alpha=xyz.alpha)

    def to_encoded(self) -> "Rgb":
        """Applies the transfer function of the space."""
        spec: RgbSpec = self.SPEC
        encoded = tuple(spec.encode(v) for v in self.components())
        return Rgb[spec](*encoded, alpha=self.alpha)


# =============================================================================
# 2. ENCODED RGB
# =============================================================================

class Rgb(_ChannelArithmetic, RgbBound, ColorModel):
    """
    Transfer-encoded RGB, the usual device value.

    Args:
        r, g, b: Encoded channels, nominally in [0, 1].
        alpha: Opacity in [0, 1].

    Examples:
        # 8-bit input
        orange = Rgb.from_8bit(255, 128, 0)

        # Adobe RGB value, explicitly converted to sRGB
        srgb = Rgb[ADOBE_RGB](0.2, 0.4, 0.6).to(Rgb)
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("r", "g", "b")
    HUB_COST: ClassVar[int] = 2

    @classmethod
    def native_conversions(cls):
        linear = LinearRgb[cls.SPEC]
        return ((cls, linear, cls.to_linear), (linear, cls, linear.to_encoded))

    @classmethod
    def from_8bit(cls, red: ScalarLike, green: ScalarLike, blue: ScalarLike, alpha: ScalarLike = 1.0) -> "Rgb":
        """Builds a value from 0-255 channels."""
        return cls(*(to_float(v) / _EIGHT_BIT for v in (red, green, blue)), alpha=alpha)

    def to_8bit(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def to_linear(self) -> LinearRgb:
        """Removes the transfer function of the space."""
        spec: RgbSpec = self.SPEC
        linear = tuple(spec.decode(v) for v in self.components())
        return LinearRgb[spec](*linear, alpha=self.alpha)

    def to_xyz(self) -> Xyz:
        return self.to_linear().to_xyz()

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Rgb":
        spec: RgbSpec = cls.SPEC
        linear = LinearRgb[spec].from_xyz(xyz)
        return cls(*(spec.encode(v) for v in linear.components()), alpha=linear.alpha)

    # -- 8-bit channels --------------------------------------------------------
    @property
    def red(self) -> int:
        return _eight_bit(self.r)

    def with_red(self, red: ScalarLike) -> "Rgb":
        return self.with_r(to_float(red) / _EIGHT_BIT)  # type: ignore[attr-defined]

    @property
    def green(self) -> int:
        return _eight_bit(self.g)

    def with_green(self, green: ScalarLike) -> "Rgb":
        return self.with_g(to_float(green) / _EIGHT_BIT)  # type: ignore[attr-defined]

    @property
    def blue(self) -> int:
        return _eight_bit(self.b)

    def with_blue(self, blue: ScalarLike) -> "Rgb":
        return self.with_b(to_float(blue) / _EIGHT_BIT)  # type: ignore[attr-defined]

    # -- gamut -----------------------------------------------------------------
    def in_gamut(self, spec: Optional[RgbSpec] = None, tolerance: float = 1e-9) -> bool:
        if spec is not None and spec is not self.SPEC:
            return super().in_gamut(spec, tolerance)
        return all(-tolerance <= v <= 1.0 + tolerance for v in self.components())

    def clamped(self, spec: Optional[RgbSpec] = None) -> "Rgb":
        if spec is not None and spec is not self.SPEC:
            return super().clamped(spec)  # type: ignore[return-value]
        return self.with_components(tuple(min(max(v, 0.0), 1.0) for v in self.components()))  # type: ignore[return-value]
