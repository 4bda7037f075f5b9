# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: color_models — Concrete color representations.

Importing the package registers every model with the ConversionHub.
"""

from .model import ColorModel, ContextualModel, RgbBound
from .xyz import Xyz
from .rgb import LinearRgb, Rgb
from .cie import ACHROMATIC_THRESHOLD, Lab, Lch, Luv, Xyy, mix_hue
from .perceptual import Hpluv, Oklab, Oklch, map_into_gamut, max_safe_chroma
from .physiological import Lms
from .cylindrical import Hsi, Hsl, Hsv, Hwb
from .subtractive import Cmy, Cmyk

__all__ = [
    "ColorModel",
    "ContextualModel",
    "RgbBound",
    "Xyz",
    "LinearRgb",
    "Rgb",
    "Xyy",
    "Lab",
    "Lch",
    "Luv",
    "Oklab",
    "Oklch",
    "Hpluv",
    "Lms",
    "Hsl",
    "Hsv",
    "Hwb",
    "Hsi",
    "Cmy",
    "Cmyk",
    "ACHROMATIC_THRESHOLD",
    "mix_hue",
    "map_into_gamut",
    "max_safe_chroma",
]
