# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_context.py — Chromaticity coordinates, reference whites and
the viewing context (illuminant, observer, adaptation transform) attached to
tristimulus values.

Reference whites are consumed as plain XYZ triples (Y = 1). The built-in
table covers the CIE standard illuminants for the 1931 2° and 1964 10°
observers; a spectral data provider can add or replace entries through
``register_reference_white``.
"""

from __future__ import annotations

import math
import threading
import warnings
from dataclasses import dataclass, field, replace
from typing import Dict, Final, Iterator, Tuple

from swatch_adaptation import ChromaticAdaptationTransform, default_transform
from swatch_errors import ConfigurationError
from swatch_matrix import Vector3
from swatch_scalar import ScalarLike, to_float

__all__ = [
    "Xy",
    "Uv",
    "Upvp",
    "Illuminant",
    "Observer",
    "ColorimetricContext",
    "reference_white",
    "register_reference_white",
    "registered_whites",
]


# =============================================================================
# 1. CHROMATICITY
# =============================================================================

@dataclass(frozen=True)
class Xy:
    """CIE 1931 xy chromaticity coordinates."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_float(self.x))
        object.__setattr__(self, "y", to_float(self.y))

    @classmethod
    def from_xyz(cls, xyz: Vector3) -> "Xy":
        """Projects a tristimulus triple. Black (X+Y+Z = 0) maps to (0, 0)."""
        x, y, z = (to_float(v) for v in xyz)
        total = x + y + z
        if total == 0.0:
            return cls(0.0, 0.0)
        return cls(x / total, y / total)

    def to_xyz(self, luminance: ScalarLike = 1.0) -> Vector3:
        """Lifts the chromaticity to XYZ at the given Y. ``y == 0`` yields black."""
        big_y = to_float(luminance)
        if self.y == 0.0:
            return (0.0, 0.0, 0.0)
        ratio = big_y / self.y
        return (ratio * self.x, big_y, ratio * (1.0 - self.x - self.y))

    def to_uv(self) -> "Uv":
        """CIE 1960 UCS coordinates. A zero denominator maps to (0, 0)."""
        denominator = -2.0 * self.x + 12.0 * self.y + 3.0
        if denominator == 0.0:
            return Uv(0.0, 0.0)
        return Uv(4.0 * self.x / denominator, 6.0 * self.y / denominator)

    def to_upvp(self) -> "Upvp":
        """CIE 1976 UCS coordinates. A zero denominator maps to (0, 0)."""
        denominator = -2.0 * self.x + 12.0 * self.y + 3.0
        if denominator == 0.0:
            return Upvp(0.0, 0.0)
        return Upvp(4.0 * self.x / denominator, 9.0 * self.y / denominator)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"Xy({self.x:.4f}, {self.y:.4f})"


@dataclass(frozen=True)
class Uv:
    """CIE 1960 UCS (u, v) chromaticity coordinates."""

    u: float
    v: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "u", to_float(self.u))
        object.__setattr__(self, "v", to_float(self.v))

    @classmethod
    def from_xyz(cls, xyz: Vector3) -> "Uv":
        return Xy.from_xyz(xyz).to_uv()

    def to_xy(self) -> Xy:
        denominator = 2.0 * self.u - 8.0 * self.v + 4.0
        if denominator == 0.0:
            return Xy(0.0, 0.0)
        return Xy(3.0 * self.u / denominator, 2.0 * self.v / denominator)

    def to_upvp(self) -> "Upvp":
        """u' = u and v' = 1.5 v."""
        return Upvp(self.u, self.v * 1.5)

    def to_xyz(self, luminance: ScalarLike = 1.0) -> Vector3:
        return self.to_xy().to_xyz(luminance)

    def __iter__(self) -> Iterator[float]:
        yield self.u
        yield self.v

    def __str__(self) -> str:
        return f"Uv({self.u:.4f}, {self.v:.4f})"


@dataclass(frozen=True)
class Upvp:
    """CIE 1976 UCS (u', v') chromaticity coordinates, as used by L*u*v*."""

    u: float
    v: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "u", to_float(self.u))
        object.__setattr__(self, "v", to_float(self.v))

    @classmethod
    def from_xyz(cls, xyz: Vector3) -> "Upvp":
        return Xy.from_xyz(xyz).to_upvp()

    def to_xy(self) -> Xy:
        denominator = 6.0 * self.u - 16.0 * self.v + 12.0
        if denominator == 0.0:
            return Xy(0.0, 0.0)
        return Xy(9.0 * self.u / denominator, 4.0 * self.v / denominator)

    def to_uv(self) -> Uv:
        return Uv(self.u, self.v * (2.0 / 3.0))

    def to_xyz(self, luminance: ScalarLike = 1.0) -> Vector3:
        return self.to_xy().to_xyz(luminance)

    def __iter__(self) -> Iterator[float]:
        yield self.u
        yield self.v

    def __str__(self) -> str:
        return f"Upvp({self.u:.4f}, {self.v:.4f})"


# =============================================================================
# 2. ILLUMINANTS, OBSERVERS AND REFERENCE WHITES
# =============================================================================

class Illuminant:
    """Names of the illuminants with built-in reference whites."""

    A: Final[str] = "A"
    B: Final[str] = "B"
    C: Final[str] = "C"
    D50: Final[str] = "D50"
    D55: Final[str] = "D55"
    D65: Final[str] = "D65"
    D75: Final[str] = "D75"
    E: Final[str] = "E"
    F2: Final[str] = "F2"
    F7: Final[str] = "F7"
    F11: Final[str] = "F11"


class Observer:
    """Names of the standard colorimetric observers."""

    CIE_1931_2D: Final[str] = "CIE 1931 2°"
    CIE_1964_10D: Final[str] = "CIE 1964 10°"


# ASTM E308 tristimulus values of the standard illuminants, normalised to Y = 1.
_WHITES: Dict[Tuple[str, str], Vector3] = {
    # CIE 1931 2°
    ("A", Observer.CIE_1931_2D): (1.09850, 1.0, 0.35585),
    ("B", Observer.CIE_1931_2D): (0.99072, 1.0, 0.85223),
    ("C", Observer.CIE_1931_2D): (0.98074, 1.0, 1.18232),
    ("D50", Observer.CIE_1931_2D): (0.96422, 1.0, 0.82521),
    ("D55", Observer.CIE_1931_2D): (0.95682, 1.0, 0.92149),
    ("D65", Observer.CIE_1931_2D): (0.95047, 1.0, 1.08883),
    ("D75", Observer.CIE_1931_2D): (0.94972, 1.0, 1.22638),
    ("E", Observer.CIE_1931_2D): (1.0, 1.0, 1.0),
    ("F2", Observer.CIE_1931_2D): (0.99187, 1.0, 0.67395),
    ("F7", Observer.CIE_1931_2D): (0.95044, 1.0, 1.08755),
    ("F11", Observer.CIE_1931_2D): (1.00966, 1.0, 0.64370),
    # CIE 1964 10°
    ("A", Observer.CIE_1964_10D): (1.11144, 1.0, 0.35200),
    ("C", Observer.CIE_1964_10D): (0.97285, 1.0, 1.16145),
    ("D50", Observer.CIE_1964_10D): (0.96720, 1.0, 0.81427),
    ("D55", Observer.CIE_1964_10D): (0.95799, 1.0, 0.90926),
    ("D65", Observer.CIE_1964_10D): (0.94811, 1.0, 1.07304),
    ("D75", Observer.CIE_1964_10D): (0.94416, 1.0, 1.20641),
    ("E", Observer.CIE_1964_10D): (1.0, 1.0, 1.0),
    ("F2", Observer.CIE_1964_10D): (1.03280, 1.0, 0.69026),
    ("F7", Observer.CIE_1964_10D): (0.95792, 1.0, 1.07687),
    ("F11", Observer.CIE_1964_10D): (1.03866, 1.0, 0.65627),
}
_BUILTIN_KEYS: Final[frozenset] = frozenset(_WHITES)
_WHITES_LOCK = threading.RLock()


def reference_white(illuminant: str, observer: str = Observer.CIE_1931_2D) -> Vector3:
    """
    Returns the XYZ reference white for an illuminant/observer pair.

    Raises:
        ConfigurationError: If no white is registered for the pair.
    """
    try:
        return _WHITES[(illuminant, observer)]
    except KeyError:
        raise ConfigurationError(
            f"No reference white registered for illuminant {illuminant!r} "
            f"and observer {observer!r}."
        ) from None


def register_reference_white(illuminant: str, observer: str, xyz: Vector3) -> None:
    """
    Registers (or replaces) a reference white supplied by a spectral provider.

    Args:
        illuminant: Illuminant name.
        observer: Observer name.
        xyz: Reference white tristimulus values; all finite, Y > 0.

    Raises:
        ConfigurationError: If the triple is not a usable white.
    """
    values = tuple(to_float(v) for v in xyz)
    if len(values) != 3:
        raise ConfigurationError(f"A reference white needs 3 components, got {len(values)}.")
    if not all(math.isfinite(v) for v in values) or min(values) <= 0.0:
        raise ConfigurationError(f"Reference white {values} must be finite and positive.")
    key = (illuminant, observer)
    with _WHITES_LOCK:
        if key in _BUILTIN_KEYS and _WHITES[key] != values:
            warnings.warn(
                f"Overriding built-in reference white for {illuminant} / {observer}.",
                UserWarning,
                stacklevel=2,
            )
        _WHITES[key] = values  # type: ignore[assignment]


def registered_whites() -> Tuple[Tuple[str, str], ...]:
    """All (illuminant, observer) pairs with a reference white."""
    return tuple(_WHITES)


# =============================================================================
# 3. COLORIMETRIC CONTEXT
# =============================================================================

@dataclass(frozen=True)
class ColorimetricContext:
    """
    Viewing conditions for a tristimulus value.

    Attributes:
        illuminant: Illuminant name (default D65).
        observer: Observer name (default CIE 1931 2°).
        cat: Chromatic adaptation transform used when values are moved to
            another context. Defaults to the process-wide default transform.

    Raises:
        ConfigurationError: If no reference white exists for the
            illuminant/observer pair.
    """

    illuminant: str = Illuminant.D65
    observer: str = Observer.CIE_1931_2D
    cat: ChromaticAdaptationTransform = field(default_factory=default_transform)

    def __post_init__(self) -> None:
        reference_white(self.illuminant, self.observer)

    def reference_white(self) -> Vector3:
        return reference_white(self.illuminant, self.observer)

    def with_illuminant(self, illuminant: str) -> "ColorimetricContext":
        return replace(self, illuminant=illuminant)

    def with_observer(self, observer: str) -> "ColorimetricContext":
        return replace(self, observer=observer)

    def with_cat(self, cat: ChromaticAdaptationTransform) -> "ColorimetricContext":
        return replace(self, cat=cat)

    with_chromatic_adaptation_transform = with_cat

    def shares_white_with(self, other: "ColorimetricContext") -> bool:
        return self.reference_white() == other.reference_white()

    def __str__(self) -> str:
        return f"{self.illuminant} / {self.observer} / {self.cat.name}"
