# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_adaptation.py — Chromatic adaptation transforms (CATs).

A CAT maps XYZ into a sharpened cone-like basis where von Kries style
per-channel gains between two reference whites are applied, then maps back:

    M_composite = M⁻¹ · diag(M·W_dst / M·W_src) · M

Composite matrices are cached per (transform, source white, target white).

Default transform:
    Exactly one transform is the process-wide default. It is the first
    enabled entry of the priority chain

        Bradford > CAT16 > CAT02 > CMC CAT2000 > Von Kries >
        Hunt-Pointer-Estevez > Sharp > Fairchild > CMC CAT97 > XYZ Scaling

    The enabled set is read once at import from the environment variable
    ``SWATCH_ENABLED_TRANSFORMS`` (comma separated names; unset = all) and
    can be changed at runtime with ``set_enabled_transforms``. XYZ Scaling is
    always enabled so a default always exists.
"""

from __future__ import annotations

import functools
import os
import threading
import warnings
from typing import Any, Dict, Final, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from swatch_errors import ConfigurationError
from swatch_matrix import Matrix3, Vector3
from swatch_scalar import to_float

__all__ = [
    # --- Class ---
    "ChromaticAdaptationTransform",
    # --- Named transforms ---
    "XYZ_SCALING",
    "BRADFORD",
    "CAT02",
    "CAT16",
    "CMC_CAT2000",
    "CMC_CAT97",
    "FAIRCHILD",
    "HUNT_POINTER_ESTEVEZ",
    "SHARP",
    "VON_KRIES",
    "TRANSFORMS",
    "PRIORITY",
    # --- Configuration ---
    "ENABLED_TRANSFORMS_ENV",
    "default_transform",
    "enabled_transforms",
    "set_enabled_transforms",
    "transform_by_name",
]

# Cone responses below this are floored before computing gains.
_MIN_CONE_RESPONSE: Final[float] = 1e-12


def _as_white(white: Any) -> Vector3:
    """Accepts an XYZ triple, an Xyz color or a ColorimetricContext."""
    if hasattr(white, "reference_white"):
        white = white.reference_white()
    elif hasattr(white, "components"):
        white = white.components()
    values = tuple(to_float(v) for v in white)
    if len(values) != 3:
        raise ValueError(f"A white point needs 3 components, got {len(values)}.")
    return values  # type: ignore[return-value]


# =============================================================================
# 1. TRANSFORM
# =============================================================================

class ChromaticAdaptationTransform:
    """
    A named cone-response matrix with its inverse.

    Args:
        name: Display name of the transform.
        matrix: 3x3 XYZ -> cone response matrix.

    Raises:
        ConfigurationError: If the matrix is singular.
    """

    __slots__ = ("name", "matrix", "inverse", "_key")

    def __init__(self, name: str, matrix: Union[Matrix3, Sequence[Sequence[float]]]) -> None:
        m = matrix if isinstance(matrix, Matrix3) else Matrix3(matrix)
        try:
            inverse = m.inverse()
        except ConfigurationError as exc:
            raise ConfigurationError(f"Adaptation transform {name!r}: {exc}") from exc
        self.name: str = name
        self.matrix: Matrix3 = m
        self.inverse: Matrix3 = inverse
        self._key = (name, m.rows())

    def adaptation_matrix(self, source_white: Any, target_white: Any) -> Matrix3:
        """
        Composite XYZ -> XYZ matrix moving colors from one white to another.

        Args:
            source_white: White the color is currently relative to.
            target_white: White the color should be relative to.

        Returns:
            The cached composite matrix.
        """
        return _composite_matrix(self, _as_white(source_white), _as_white(target_white))

    def adapt_values(self, xyz: Iterable[Any], source_white: Any, target_white: Any) -> Vector3:
        """Adapts a raw XYZ triple. Equal whites return the triple unchanged."""
        values = tuple(to_float(v) for v in xyz)
        src = _as_white(source_white)
        dst = _as_white(target_white)
        if src == dst:
            return values  # type: ignore[return-value]
        return _composite_matrix(self, src, dst).apply(values)

    def adapt(self, color: Any, source_white: Any, target_white: Any, context: Any = None) -> Any:
        """
        Re-expresses a color relative to a new reference white.

        Args:
            color: An Xyz value, any other color model instance (converted
                through the hub first) or a raw XYZ triple.
            source_white: Current white (triple, Xyz or context).
            target_white: New white (triple, Xyz or context).
            context: Context attached to the returned Xyz. Defaults to the
                target when ``target_white`` is a context, otherwise to the
                context of the input.

        Returns:
            An ``Xyz`` for color model input, a tuple for raw triples.
        """
        from color_models.model import ColorModel
        from color_models.xyz import Xyz

        if not isinstance(color, ColorModel):
            return self.adapt_values(color, source_white, target_white)
        xyz = color if isinstance(color, Xyz) else color.to(Xyz)
        values = self.adapt_values(xyz.components(), source_white, target_white)
        if context is None:
            context = target_white if hasattr(target_white, "reference_white") else xyz.context
        return Xyz(*values, alpha=xyz.alpha, context=context)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChromaticAdaptationTransform):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return f"{self.name} {self.matrix}"

    def __repr__(self) -> str:
        return f"ChromaticAdaptationTransform({self.name!r})"


@functools.lru_cache(maxsize=128)
def _composite_matrix(
    cat: ChromaticAdaptationTransform, src: Tuple[float, ...], dst: Tuple[float, ...]
) -> Matrix3:
    """
    Cached worker for the composite adaptation matrix.

    Derivation:
        M_composite = M_inv · Gain · M   (column-vector convention)
    """
    src_lms = np.array(cat.matrix.apply(src))
    dst_lms = np.array(cat.matrix.apply(dst))

    small = np.abs(src_lms) < _MIN_CONE_RESPONSE
    if small.any():
        warnings.warn(
            f"{cat.name}: source white {src} has a near-zero cone response; "
            f"flooring to {_MIN_CONE_RESPONSE:g}.",
            RuntimeWarning,
            stacklevel=3,
        )
        src_lms = np.where(small, _MIN_CONE_RESPONSE, src_lms)

    gain = Matrix3.diagonal(dst_lms / src_lms)
    return cat.inverse @ gain @ cat.matrix


# =============================================================================
# 2. NAMED TRANSFORMS
# =============================================================================

XYZ_SCALING: Final = ChromaticAdaptationTransform("XYZ Scaling", np.eye(3))

BRADFORD: Final = ChromaticAdaptationTransform("Bradford", [
    [ 0.8951,  0.2664, -0.1614],
    [-0.7502,  1.7135,  0.0367],
    [ 0.0389, -0.0685,  1.0296],
])

CAT02: Final = ChromaticAdaptationTransform("CAT02", [
    [ 0.7328,  0.4296, -0.1624],
    [-0.7036,  1.6975,  0.0061],
    [ 0.0030,  0.0136,  0.9834],
])

CAT16: Final = ChromaticAdaptationTransform("CAT16", [
    [ 0.401288,  0.650173, -0.051461],
    [-0.250268,  1.204414,  0.045854],
    [-0.002079,  0.048952,  0.953127],
])

CMC_CAT2000: Final = ChromaticAdaptationTransform("CMC CAT2000", [
    [ 0.7982,  0.3389, -0.1371],
    [-0.5918,  1.5512,  0.0406],
    [ 0.0008,  0.0239,  0.9753],
])

# CMC CAT97 uses the Bradford matrix in its linearised form.
CMC_CAT97: Final = ChromaticAdaptationTransform("CMC CAT97", BRADFORD.matrix)

FAIRCHILD: Final = ChromaticAdaptationTransform("Fairchild", [
    [ 0.8562,  0.3372, -0.1934],
    [-0.8360,  1.8327,  0.0033],
    [ 0.0357, -0.0469,  1.0112],
])

HUNT_POINTER_ESTEVEZ: Final = ChromaticAdaptationTransform("Hunt-Pointer-Estevez", [
    [ 0.38971,  0.68898, -0.07868],
    [-0.22981,  1.18340,  0.04641],
    [ 0.0,      0.0,      1.0    ],
])

SHARP: Final = ChromaticAdaptationTransform("Sharp", [
    [ 1.2694, -0.0988, -0.1706],
    [-0.8364,  1.8006,  0.0357],
    [ 0.0297, -0.0315,  1.0018],
])

VON_KRIES: Final = ChromaticAdaptationTransform("Von Kries", [
    [ 0.40024,  0.7076,  -0.08081],
    [-0.2263,   1.16532,  0.0457 ],
    [ 0.0,      0.0,      0.91822],
])

TRANSFORMS: Final[Dict[str, ChromaticAdaptationTransform]] = {
    cat.name: cat
    for cat in (
        XYZ_SCALING, BRADFORD, CAT02, CAT16, CMC_CAT2000, CMC_CAT97,
        FAIRCHILD, HUNT_POINTER_ESTEVEZ, SHARP, VON_KRIES,
    )
}

PRIORITY: Final[Tuple[str, ...]] = (
    "Bradford",
    "CAT16",
    "CAT02",
    "CMC CAT2000",
    "Von Kries",
    "Hunt-Pointer-Estevez",
    "Sharp",
    "Fairchild",
    "CMC CAT97",
    "XYZ Scaling",
)

_ALIASES: Final[Dict[str, str]] = {"hpe": "Hunt-Pointer-Estevez", "xyz": "XYZ Scaling"}


def _normalise(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


_LOOKUP: Final[Dict[str, str]] = {
    **{_normalise(name): name for name in TRANSFORMS},
    **_ALIASES,
}


def transform_by_name(name: str) -> ChromaticAdaptationTransform:
    """
    Looks up a named transform (case, spaces and hyphens are ignored).

    Raises:
        KeyError: If no transform has that name.
    """
    key = _LOOKUP.get(_normalise(name))
    if key is None:
        raise KeyError(f"Unknown chromatic adaptation transform {name!r}.")
    return TRANSFORMS[key]


# =============================================================================
# 3. RUNTIME CONFIGURATION
# =============================================================================
# Toggle at runtime via:
#     import swatch_adaptation as sa
#     sa.set_enabled_transforms(["CAT16", "Von Kries"])  # default -> CAT16
#     sa.set_enabled_transforms(None)                    # back to all

ENABLED_TRANSFORMS_ENV: Final[str] = "SWATCH_ENABLED_TRANSFORMS"

_CONFIG_LOCK = threading.Lock()


def _select_default(enabled: Iterable[str]) -> ChromaticAdaptationTransform:
    enabled = set(enabled)
    for name in PRIORITY:
        if name in enabled:
            return TRANSFORMS[name]
    return XYZ_SCALING


def _enabled_from_env() -> Tuple[str, ...]:
    raw = os.environ.get(ENABLED_TRANSFORMS_ENV, "").strip()
    if not raw:
        return PRIORITY
    names = {XYZ_SCALING.name}
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            names.add(transform_by_name(token).name)
        except KeyError:
            warnings.warn(
                f"{ENABLED_TRANSFORMS_ENV}: ignoring unknown transform {token!r}.",
                UserWarning,
                stacklevel=2,
            )
    return tuple(name for name in PRIORITY if name in names)


_ENABLED: Tuple[str, ...] = _enabled_from_env()
_DEFAULT: ChromaticAdaptationTransform = _select_default(_ENABLED)


def default_transform() -> ChromaticAdaptationTransform:
    """The process-wide default transform."""
    return _DEFAULT


def enabled_transforms() -> Tuple[str, ...]:
    """Names of the enabled transforms, in priority order."""
    return _ENABLED


def set_enabled_transforms(names: Optional[Iterable[str]] = None) -> ChromaticAdaptationTransform:
    """
    Restricts the transforms eligible as default and re-selects the default.

    Args:
        names: Transform names to enable, or None to enable all of them.
            XYZ Scaling is always enabled.

    Returns:
        The newly selected default transform.

    Raises:
        KeyError: If a name does not match any transform.
    """
    global _ENABLED, _DEFAULT
    if names is None:
        selected = set(PRIORITY)
    else:
        selected = {transform_by_name(n).name for n in names}
        selected.add(XYZ_SCALING.name)
    with _CONFIG_LOCK:
        _ENABLED = tuple(name for name in PRIORITY if name in selected)
        _DEFAULT = _select_default(_ENABLED)
        return _DEFAULT
