# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: xyz.py — CIE 1931 XYZ, the hub every other model converts through.

Values are relative (reference white Y = 1) and carry the ColorimetricContext
they are expressed in. Luminance, chromaticity, intensity scaling and
chromatic adaptation are native here; every other model reaches them through
the hub.
"""

from __future__ import annotations

from typing import ClassVar, Tuple

from swatch_context import ColorimetricContext, Xy
from swatch_scalar import ScalarLike, to_float

from .model import ContextualModel

__all__ = ["Xyz"]


class Xyz(ContextualModel):
    """
    CIE XYZ tristimulus value.

    Args:
        x, y, z: Tristimulus components (Y = 1 is the reference white).
        alpha: Opacity in [0, 1].
        context: Viewing context (default D65 / CIE 1931 2°).
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("x", "y", "z")
    HUB_COST: ClassVar[int] = 0

    # -- hub primitives --------------------------------------------------------
    def to_xyz(self) -> "Xyz":
        return self.copy()  # type: ignore[return-value]

    @classmethod
    def from_xyz(cls, xyz: "Xyz") -> "Xyz":
        return cls(*xyz.components(), alpha=xyz.alpha, context=xyz.context)

    # -- luminance -------------------------------------------------------------
    @property
    def luminance(self) -> float:
        return self.y

    def with_luminance(self, luminance: ScalarLike) -> "Xyz":
        """Sets Y and scales X and Z to keep the chromaticity (black only gets Y)."""
        target = to_float(luminance)
        x, y, z = self.components()
        if y == 0.0:
            return self.with_components((x, target, z))  # type: ignore[return-value]
        factor = target / y
        return self.with_components((x * factor, target, z * factor))  # type: ignore[return-value]

    def with_luminance_scaled_by(self, factor: ScalarLike) -> "Xyz":
        return self.amplified_by(factor)

    def with_luminance_incremented_by(self, amount: ScalarLike) -> "Xyz":
        return self.with_luminance(self.y + to_float(amount))

    def with_luminance_decremented_by(self, amount: ScalarLike) -> "Xyz":
        return self.with_luminance(self.y - to_float(amount))

    def amplified_by(self, factor: ScalarLike) -> "Xyz":
        f = to_float(factor)
        return self.with_components(tuple(v * f for v in self.components()))  # type: ignore[return-value]

    def attenuated_by(self, factor: ScalarLike) -> "Xyz":
        f = to_float(factor)
        return self.with_components(tuple(v / f for v in self.components()))  # type: ignore[return-value]

    # -- chromaticity ----------------------------------------------------------
    @property
    def chromaticity(self) -> Xy:
        """xy chromaticity; black reports the chromaticity of its reference white."""
        if sum(self.components()) == 0.0:
            return Xy.from_xyz(self._context.reference_white())
        return Xy.from_xyz(self.components())

    # -- adaptation ------------------------------------------------------------
    def adapted_to(self, context: ColorimetricContext) -> "Xyz":
        """
        Re-expresses the value relative to ``context``'s reference white
        using ``context.cat``. Sharing the white only re-labels.
        """
        if self._context.shares_white_with(context):
            return self.with_context(context)  # type: ignore[return-value]
        return context.cat.adapt(self, self._context, context, context=context)

    def adapted_between(
        self, source: ColorimetricContext, target: ColorimetricContext
    ) -> "Xyz":
        values = target.cat.adapt_values(self.components(), source, target)
        return self.with_components(values)  # type: ignore[return-value]
