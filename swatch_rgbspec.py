# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_rgbspec.py — RGB space definitions: primaries, transfer
function and reference white, plus the derived RGB <-> XYZ matrices.

Matrix derivation (closed form, no iteration):
    P  = [XYZ(red) | XYZ(green) | XYZ(blue)]     primaries lifted to Y = 1
    S  = P⁻¹ · W                                  per-primary scale
    M  = P · diag(S)                              linear RGB -> XYZ
    M⁻¹                                           XYZ -> linear RGB

The matrices are never hand-authored. They are computed on first access,
once per RgbSpec and reference white, under a lock (first caller computes,
all callers receive the same completed result). Replacing the registered
white of a space rebuilds its matrices on the next access.

Degenerate input:
    Colinear primaries (zero-area gamut triangle) or a primary with y == 0
    raise ConfigurationError when the RgbPrimaries is constructed; a white
    point on an edge of the gamut triangle raises when the RgbSpec is.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Final, Iterator, Optional, Sequence, Tuple, Union

from swatch_context import ColorimetricContext, Illuminant, Xy
from swatch_errors import ConfigurationError
from swatch_matrix import Matrix3, Vector3
from swatch_scalar import ScalarLike, to_float
from swatch_transfer import TransferFunction

__all__ = [
    "RgbPrimaries",
    "RgbSpec",
    "Rg",
    "RGB_SPACES",
    "rgb_space_by_name",
    # --- Standard spaces ---
    "SRGB", "LINEAR_SRGB", "ADOBE_RGB", "APPLE_RGB", "BEST_RGB", "BETA_RGB",
    "BRUCE_RGB", "CIE_RGB", "COLORMATCH_RGB", "DCI_P3", "DISPLAY_P3",
    "DON_RGB_4", "ECI_RGB_V2", "EKTA_SPACE_PS5", "NTSC", "PAL_SECAM",
    "PROPHOTO_RGB", "REC_601", "REC_709", "REC_2020", "REC_2100_HLG",
    "REC_2100_PQ", "WIDE_GAMUT_RGB", "ACES_2065_1", "ACES_CCT", "ARRI_WIDE_GAMUT_3",
    "ARRI_WIDE_GAMUT_4", "BLACKMAGIC_WIDE_GAMUT", "CANON_CINEMA_GAMUT",
    "DAVINCI_WIDE_GAMUT", "FILMLIGHT_E_GAMUT", "PANASONIC_V_GAMUT",
    "RED_WIDE_GAMUT", "SONY_SGAMUT3", "SONY_SGAMUT3_CINE",
]

# Gamut triangles with a smaller xy area are treated as colinear.
_MIN_GAMUT_AREA: Final[float] = 1e-10

# Barycentric weight below which the white counts as lying on a gamut edge.
_MIN_WHITE_WEIGHT: Final[float] = 1e-9

XyLike = Union[Xy, Sequence[ScalarLike]]


def _as_xy(value: XyLike) -> Xy:
    if isinstance(value, Xy):
        return value
    x, y = value
    return Xy(x, y)


# =============================================================================
# 1. PRIMARIES
# =============================================================================

class RgbPrimaries:
    """
    Chromaticities of the red, green and blue primaries.

    Raises:
        ConfigurationError: If a primary has y == 0 or the three primaries
            are colinear.
    """

    __slots__ = ("red", "green", "blue")

    def __init__(self, red: XyLike, green: XyLike, blue: XyLike) -> None:
        self.red: Xy = _as_xy(red)
        self.green: Xy = _as_xy(green)
        self.blue: Xy = _as_xy(blue)

        for label, p in (("red", self.red), ("green", self.green), ("blue", self.blue)):
            if abs(p.y) < _MIN_GAMUT_AREA:
                raise ConfigurationError(
                    f"The {label} primary {p} has y = 0 and cannot be lifted to XYZ."
                )
        area = self.gamut_area()
        if area < _MIN_GAMUT_AREA:
            raise ConfigurationError(
                f"Primaries {self.red}, {self.green}, {self.blue} are colinear "
                f"(gamut area {area:.3e}); the RGB matrix would be singular."
            )

    def gamut_area(self) -> float:
        """Area of the xy gamut triangle."""
        r, g, b = self.red, self.green, self.blue
        return 0.5 * abs(r.x * (g.y - b.y) + g.x * (b.y - r.y) + b.x * (r.y - g.y))

    def barycentric(self, point: Xy) -> Tuple[float, float, float]:
        """Weights of ``point`` relative to the red, green and blue corners."""
        r, g, b = self.red, self.green, self.blue
        denominator = (g.y - b.y) * (r.x - b.x) + (b.x - g.x) * (r.y - b.y)
        w_red = ((g.y - b.y) * (point.x - b.x) + (b.x - g.x) * (point.y - b.y)) / denominator
        w_green = ((b.y - r.y) * (point.x - b.x) + (r.x - b.x) * (point.y - b.y)) / denominator
        return w_red, w_green, 1.0 - w_red - w_green

    def check_white(self, white: Vector3) -> None:
        """
        Raises:
            ConfigurationError: If the chromaticity of ``white`` lies on an
                edge of the gamut triangle.
        """
        weights = self.barycentric(Xy.from_xyz(white))
        if min(abs(w) for w in weights) < _MIN_WHITE_WEIGHT:
            raise ConfigurationError(
                f"White point {white} lies on an edge of the gamut "
                f"{self.red}, {self.green}, {self.blue}; the RGB matrix would be singular."
            )

    def primary_matrix(self) -> Matrix3:
        """Primaries as XYZ columns with unit luminance."""
        return Matrix3.from_columns(self.red.to_xyz(), self.green.to_xyz(), self.blue.to_xyz())

    def calculate_xyz_matrix(self, white: Vector3) -> Matrix3:
        """
        Linear RGB -> XYZ matrix whose (1, 1, 1) maps onto ``white``.

        Raises:
            ConfigurationError: If ``white`` lies on a gamut edge so one
                primary gets a zero weight.
        """
        p = self.primary_matrix()
        scale = p.inverse().apply(white)
        matrix = p @ Matrix3.diagonal(scale)
        if matrix.is_singular():
            raise ConfigurationError(
                f"White point {white} gives a zero weight to a primary; "
                f"the RGB matrix is singular."
            )
        return matrix

    def __iter__(self):
        return iter((self.red, self.green, self.blue))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RgbPrimaries):
            return NotImplemented
        return tuple(self) == tuple(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RgbPrimaries({self.red}, {self.green}, {self.blue})"


# =============================================================================
# 2. SPACE DEFINITION
# =============================================================================

class RgbSpec:
    """
    Static description of an RGB color space.

    Args:
        name: Display name.
        primaries: An RgbPrimaries or three xy pairs.
        transfer_function: Encoding curve (default sRGB).
        context: Viewing context carrying the reference white (default D65,
            CIE 1931 2°).

    Specs compare by identity: two specs are the same space only if they are
    the same object, which is what RGB-bound color classes are keyed on.
    """

    __slots__ = (
        "name",
        "primaries",
        "transfer_function",
        "context",
        "_memo",
        "_lock",
    )

    def __init__(
        self,
        name: str,
        primaries: Union[RgbPrimaries, Sequence[XyLike]],
        transfer_function: TransferFunction = TransferFunction.SRGB,
        context: Optional[ColorimetricContext] = None,
    ) -> None:
        if not isinstance(primaries, RgbPrimaries):
            primaries = RgbPrimaries(*primaries)
        self.name: str = name
        self.primaries: RgbPrimaries = primaries
        self.transfer_function: TransferFunction = transfer_function
        self.context: ColorimetricContext = context if context is not None else ColorimetricContext()
        primaries.check_white(self.reference_white())
        self._memo: Optional[Tuple[Vector3, Matrix3, Matrix3]] = None
        self._lock = threading.Lock()

    def reference_white(self) -> Vector3:
        return self.context.reference_white()

    def _matrices(self) -> Tuple[Vector3, Matrix3, Matrix3]:
        """(white, forward, inverse), rebuilt whenever the registered white changes."""
        white = self.reference_white()
        entry = self._memo
        if entry is None or entry[0] != white:
            with self._lock:
                entry = self._memo
                if entry is None or entry[0] != white:
                    forward = self.primaries.calculate_xyz_matrix(white)
                    entry = (white, forward, forward.inverse())
                    self._memo = entry
        return entry

    def xyz_matrix(self) -> Matrix3:
        """Linear RGB -> XYZ, computed on first access."""
        return self._matrices()[1]

    def inverse_xyz_matrix(self) -> Matrix3:
        """XYZ -> linear RGB, computed on first access."""
        return self._matrices()[2]

    def encode(self, linear: ScalarLike) -> float:
        return self.transfer_function.encode(linear)

    def decode(self, encoded: ScalarLike) -> float:
        return self.transfer_function.decode(encoded)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"RgbSpec({self.name!r}, {self.primaries!r}, "
            f"{self.transfer_function}, {self.context.illuminant})"
        )


# =============================================================================
# 3. RGB CHROMATICITY
# =============================================================================

@dataclass(frozen=True)
class Rg:
    """
    rg chromaticity: the red and green shares of linear RGB in one space.

    b is implied as 1 - r - g. A triple summing to zero (black, or a
    direction the space cannot express) maps to (0, 0).
    """

    r: float
    g: float
    spec: Optional["RgbSpec"] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", to_float(self.r))
        object.__setattr__(self, "g", to_float(self.g))
        if self.spec is None:
            object.__setattr__(self, "spec", SRGB)

    @classmethod
    def from_xy(cls, xy: XyLike, spec: Optional["RgbSpec"] = None) -> "Rg":
        space = spec or SRGB
        r, g, b = space.inverse_xyz_matrix().apply(_as_xy(xy).to_xyz())
        total = r + g + b
        if total == 0.0:
            return cls(0.0, 0.0, space)
        return cls(r / total, g / total, space)

    def to_xy(self) -> Xy:
        rgb = (self.r, self.g, 1.0 - self.r - self.g)
        return Xy.from_xyz(self.spec.xyz_matrix().apply(rgb))  # type: ignore[union-attr]

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g

    def __str__(self) -> str:
        return f"Rg({self.r:.4f}, {self.g:.4f})"


# =============================================================================
# 4. STANDARD SPACES
# =============================================================================

def _ctx(illuminant: str) -> ColorimetricContext:
    return ColorimetricContext(illuminant=illuminant)


def _gamma(g: float) -> TransferFunction:
    return TransferFunction.gamma(g)


_SRGB_PRIMARIES: Final = RgbPrimaries((0.64, 0.33), (0.30, 0.60), (0.15, 0.06))
_P3_PRIMARIES: Final = RgbPrimaries((0.680, 0.320), (0.265, 0.690), (0.150, 0.060))
_REC_2020_PRIMARIES: Final = RgbPrimaries((0.708, 0.292), (0.170, 0.797), (0.131, 0.046))
_NTSC_PRIMARIES: Final = RgbPrimaries((0.67, 0.33), (0.21, 0.71), (0.14, 0.08))

_D50: Final[str] = Illuminant.D50
_D65: Final[str] = Illuminant.D65

SRGB: Final = RgbSpec("sRGB", _SRGB_PRIMARIES, TransferFunction.SRGB, _ctx(_D65))
LINEAR_SRGB: Final = RgbSpec("Linear sRGB", _SRGB_PRIMARIES, TransferFunction.LINEAR, _ctx(_D65))
ADOBE_RGB: Final = RgbSpec(
    "Adobe RGB (1998)", ((0.64, 0.33), (0.21, 0.71), (0.15, 0.06)), _gamma(2.19921875), _ctx(_D65)
)
APPLE_RGB: Final = RgbSpec(
    "Apple RGB", ((0.625, 0.340), (0.280, 0.595), (0.155, 0.070)), _gamma(1.8), _ctx(_D65)
)
BEST_RGB: Final = RgbSpec(
    "Best RGB", ((0.7347, 0.2653), (0.2150, 0.7750), (0.1300, 0.0350)), _gamma(2.2), _ctx(_D50)
)
BETA_RGB: Final = RgbSpec(
    "Beta RGB", ((0.6888, 0.3112), (0.1986, 0.7551), (0.1265, 0.0352)), _gamma(2.2), _ctx(_D50)
)
BRUCE_RGB: Final = RgbSpec(
    "Bruce RGB", ((0.64, 0.33), (0.28, 0.65), (0.15, 0.06)), _gamma(2.2), _ctx(_D65)
)
CIE_RGB: Final = RgbSpec(
    "CIE RGB", ((0.7347, 0.2653), (0.2738, 0.7174), (0.1666, 0.0089)),
    TransferFunction.LINEAR, _ctx(Illuminant.E),
)
COLORMATCH_RGB: Final = RgbSpec(
    "ColorMatch RGB", ((0.630, 0.340), (0.295, 0.605), (0.150, 0.075)), _gamma(1.8), _ctx(_D50)
)
DCI_P3: Final = RgbSpec("DCI-P3", _P3_PRIMARIES, _gamma(2.6), _ctx(_D65))
DISPLAY_P3: Final = RgbSpec("Display P3", _P3_PRIMARIES, TransferFunction.SRGB, _ctx(_D65))
DON_RGB_4: Final = RgbSpec(
    "Don RGB 4", ((0.696, 0.300), (0.215, 0.765), (0.130, 0.035)), _gamma(2.2), _ctx(_D50)
)
ECI_RGB_V2: Final = RgbSpec("ECI RGB v2", _NTSC_PRIMARIES, TransferFunction.LINEAR, _ctx(_D50))
EKTA_SPACE_PS5: Final = RgbSpec(
    "EktaSpace PS5", ((0.695, 0.305), (0.26, 0.70), (0.11, 0.005)), _gamma(2.2), _ctx(_D50)
)
NTSC: Final = RgbSpec("NTSC (1953)", _NTSC_PRIMARIES, TransferFunction.BT709, _ctx(Illuminant.C))
PAL_SECAM: Final = RgbSpec(
    "PAL/SECAM", ((0.64, 0.33), (0.29, 0.60), (0.15, 0.06)), TransferFunction.BT709, _ctx(_D65)
)
PROPHOTO_RGB: Final = RgbSpec(
    "ProPhoto RGB",
    ((0.734699, 0.265301), (0.159597, 0.840403), (0.036598, 0.000105)),
    TransferFunction.PROPHOTO,
    _ctx(_D50),
)
REC_601: Final = RgbSpec(
    "Rec. 601", ((0.630, 0.340), (0.310, 0.595), (0.155, 0.070)), TransferFunction.BT601, _ctx(_D65)
)
REC_709: Final = RgbSpec("Rec. 709", _SRGB_PRIMARIES, TransferFunction.BT709, _ctx(_D65))
REC_2020: Final = RgbSpec("Rec. 2020", _REC_2020_PRIMARIES, TransferFunction.BT709, _ctx(_D65))
REC_2100_HLG: Final = RgbSpec("Rec. 2100 HLG", _REC_2020_PRIMARIES, TransferFunction.HLG, _ctx(_D65))
REC_2100_PQ: Final = RgbSpec("Rec. 2100 PQ", _REC_2020_PRIMARIES, TransferFunction.PQ, _ctx(_D65))
WIDE_GAMUT_RGB: Final = RgbSpec(
    "Wide Gamut RGB", ((0.7347, 0.2653), (0.1152, 0.8264), (0.1566, 0.0177)), _gamma(2.2), _ctx(_D50)
)

# --- Camera / scene-referred gamuts (linear encoding) ---
ACES_2065_1: Final = RgbSpec(
    "ACES 2065-1", ((0.7347, 0.2653), (0.0, 1.0), (0.0001, -0.0770)),
    TransferFunction.LINEAR, _ctx(_D65),
)
ACES_CCT: Final = RgbSpec(
    "ACEScct", ((0.713, 0.293), (0.165, 0.830), (0.128, 0.044)), TransferFunction.LINEAR, _ctx(_D65)
)
ARRI_WIDE_GAMUT_3: Final = RgbSpec(
    "ARRI Wide Gamut 3", ((0.684, 0.313), (0.221, 0.848), (0.0861, -0.102)),
    TransferFunction.LINEAR, _ctx(_D65),
)
ARRI_WIDE_GAMUT_4: Final = RgbSpec(
    "ARRI Wide Gamut 4", ((0.7347, 0.2653), (0.1424, 0.8576), (0.0991, -0.0308)),
    TransferFunction.LINEAR, _ctx(_D65),
)
BLACKMAGIC_WIDE_GAMUT: Final = RgbSpec(
    "Blackmagic Wide Gamut", ((0.7177, 0.3171), (0.228, 0.8616), (0.1006, -0.082)),
    TransferFunction.LINEAR, _ctx(_D65),
)
CANON_CINEMA_GAMUT: Final = RgbSpec(
    "Canon Cinema Gamut", ((0.74, 0.27), (0.17, 1.14), (0.08, -0.10)),
    TransferFunction.LINEAR, _ctx(_D65),
)
DAVINCI_WIDE_GAMUT: Final = RgbSpec(
    "DaVinci Wide Gamut", ((0.8, 0.313), (0.1682, 0.9877), (0.079, -0.1155)),
    TransferFunction.LINEAR, _ctx(_D65),
)
FILMLIGHT_E_GAMUT: Final = RgbSpec(
    "FilmLight E-Gamut", ((0.8, 0.3177), (0.18, 0.9), (0.065, -0.0805)),
    TransferFunction.LINEAR, _ctx(_D65),
)
PANASONIC_V_GAMUT: Final = RgbSpec(
    "Panasonic V-Gamut", ((0.73, 0.28), (0.165, 0.84), (0.1, -0.03)),
    TransferFunction.LINEAR, _ctx(_D65),
)
RED_WIDE_GAMUT: Final = RgbSpec(
    "RED Wide Gamut RGB", ((0.780308, 0.304253), (0.121595, 1.493994), (0.095612, -0.084589)),
    TransferFunction.LINEAR, _ctx(_D65),
)
SONY_SGAMUT3: Final = RgbSpec(
    "Sony S-Gamut3", ((0.730, 0.280), (0.140, 0.855), (0.100, -0.050)),
    TransferFunction.LINEAR, _ctx(_D65),
)
SONY_SGAMUT3_CINE: Final = RgbSpec(
    "Sony S-Gamut3.Cine", ((0.766, 0.275), (0.225, 0.800), (0.089, -0.087)),
    TransferFunction.LINEAR, _ctx(_D65),
)

RGB_SPACES: Final[Dict[str, RgbSpec]] = {
    spec.name: spec
    for spec in (
        SRGB, LINEAR_SRGB, ADOBE_RGB, APPLE_RGB, BEST_RGB, BETA_RGB, BRUCE_RGB,
        CIE_RGB, COLORMATCH_RGB, DCI_P3, DISPLAY_P3, DON_RGB_4, ECI_RGB_V2,
        EKTA_SPACE_PS5, NTSC, PAL_SECAM, PROPHOTO_RGB, REC_601, REC_709,
        REC_2020, REC_2100_HLG, REC_2100_PQ, WIDE_GAMUT_RGB, ACES_2065_1,
        ACES_CCT, ARRI_WIDE_GAMUT_3, ARRI_WIDE_GAMUT_4, BLACKMAGIC_WIDE_GAMUT,
        CANON_CINEMA_GAMUT, DAVINCI_WIDE_GAMUT, FILMLIGHT_E_GAMUT,
        PANASONIC_V_GAMUT, RED_WIDE_GAMUT, SONY_SGAMUT3, SONY_SGAMUT3_CINE,
    )
}


def rgb_space_by_name(name: str) -> RgbSpec:
    """
    Looks up a standard RGB space by display name (case-insensitive).

    Raises:
        KeyError: If the name is unknown.
    """
    for key, spec in RGB_SPACES.items():
        if key.lower() == name.lower():
            return spec
    raise KeyError(f"Unknown RGB space {name!r}.")
