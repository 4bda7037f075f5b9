# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: physiological.py — Cone-response LMS.

The cone space is the one the context's adaptation transform works in, so
``Lms`` under a Bradford context holds Bradford "sharpened" responses and
under a Hunt-Pointer-Estevez context the physiological ones. Changing the
transform with ``with_context`` re-labels; ``adapted_to`` re-computes.
"""

from __future__ import annotations

from typing import ClassVar, Tuple

from .model import ContextualModel
from .xyz import Xyz

__all__ = ["Lms"]


class Lms(ContextualModel):
    """
    Long / medium / short cone responses.

    Args:
        l, m, s: Cone responses of the context's transform matrix.
        alpha: Opacity in [0, 1].
        context: Viewing context; its ``cat`` defines the cone space.
    """

    __slots__ = ()

    COMPONENTS: ClassVar[Tuple[str, ...]] = ("l", "m", "s")
    HUB_COST: ClassVar[int] = 1

    def to_xyz(self) -> Xyz:
        values = self._context.cat.inverse.apply(self.components())
        return Xyz(*values, alpha=self.alpha, context=self._context)

    @classmethod
    def from_xyz(cls, xyz: Xyz) -> "Lms":
        values = xyz.context.cat.matrix.apply(xyz.components())
        return cls(*values, alpha=xyz.alpha, context=xyz.context)
