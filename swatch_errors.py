# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_errors.py — Exception types shared by the engine modules.
"""

__all__ = ["ConfigurationError"]


class ConfigurationError(ValueError):
    """
    Raised when a space, transform or context definition is degenerate.

    Examples are colinear RGB primaries, a singular adaptation matrix or an
    illuminant/observer pair without a reference white. These are reported
    when the offending object is constructed, never on first use.
    """
