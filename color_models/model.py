# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: model.py — Base class for color models.

A concrete model supplies:
  - ``COMPONENTS``: ordered component names,
  - ``to_xyz()`` / ``from_xyz(xyz)``: the two hub primitives,
  - optionally ``native_conversions()`` (shortcut edges for the hub graph)
    and native overrides of any universal property or operation.

Everything else is derived here:
  - per-component accessors (``n``, ``with_n``, ``set_n``, ``with_n_incremented_by``,
    ``increment_n``, ``with_n_decremented_by``, ``decrement_n``,
    ``with_n_scaled_by``, ``scale_n``), installed when the class is created;
  - universal properties (luminance, chromaticity, lightness, hue, chroma,
    saturation, 8-bit RGB channels, CMYK inks) and operations, answered
    through ``ConversionHub`` unless the class defines them itself.

Every mutating method is the ``with_*`` / past-participle form followed by
``_assign``, so ``x.with_op(a)`` and ``y = x.copy(); y.op(a)`` always agree.
"""

from __future__ import annotations

import functools
import operator
from typing import Any, Callable, ClassVar, Dict, Iterable, Optional, Tuple, Type

from swatch_context import ColorimetricContext, Xy
from swatch_hub import ConversionHub
from swatch_rgbspec import SRGB, RgbSpec
from swatch_scalar import Scalar, ScalarLike, to_float

__all__ = [
    "ColorModel",
    "ContextualModel",
    "RgbBound",
]


@functools.lru_cache(maxsize=None)
def _slot_names(cls: type) -> Tuple[str, ...]:
    """All instance slots declared along the MRO."""
    names = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return tuple(names)


def _check_alpha(alpha: ScalarLike) -> Scalar:
    value = Scalar(alpha)
    if not 0.0 <= value.value <= 1.0:
        raise ValueError(f"Alpha must lie in [0, 1], got {value.value}.")
    return value


def _rgb_class(cls: type, spec: Optional["RgbSpec"]) -> type:
    """``Rgb`` specialised for ``spec``, the model's own space, or sRGB."""
    from color_models.rgb import Rgb
    return Rgb[spec or getattr(cls, "SPEC", None) or SRGB]


# =============================================================================
# 1. COMPONENT ACCESSOR FACTORIES
# =============================================================================

def _component_getter(index: int, name: str) -> property:
    def getter(self: "ColorModel") -> float:
        return self._components[index].value
    getter.__name__ = name
    getter.__doc__ = f"The {name!r} component."
    return property(getter)


def _component_with(index: int, name: str) -> Callable[..., "ColorModel"]:
    def with_value(self: "ColorModel", value: ScalarLike) -> "ColorModel":
        values = list(self._components)
        values[index] = Scalar(value)
        return self.with_components(values)
    with_value.__name__ = f"with_{name}"
    return with_value


def _component_delta(
    name: str, op: Callable[[float, float], float], suffix: str, angular: bool = False
) -> Callable[..., "ColorModel"]:
    def with_delta(self: "ColorModel", amount: ScalarLike) -> "ColorModel":
        value = op(getattr(self, name), to_float(amount))
        if angular:
            value %= 360.0
        return getattr(self, f"with_{name}")(value)
    with_delta.__name__ = f"with_{name}_{suffix}"
    return with_delta


def _mutator(with_name: str, name: str) -> Callable[..., None]:
    def mutate(self: "ColorModel", *args: Any) -> None:
        self._assign(getattr(self, with_name)(*args))
    mutate.__name__ = name
    return mutate


def _install_component_accessors(cls: type) -> None:
    """Adds the derived accessors without replacing anything ``cls`` defines."""
    for index, name in enumerate(cls.COMPONENTS):
        angular = name in cls.ANGULAR_COMPONENTS
        generated: Dict[str, Any] = {
            name: _component_getter(index, name),
            f"with_{name}": _component_with(index, name),
            f"with_{name}_incremented_by": _component_delta(name, operator.add, "incremented_by", angular),
            f"with_{name}_decremented_by": _component_delta(name, operator.sub, "decremented_by", angular),
            f"with_{name}_scaled_by": _component_delta(name, operator.mul, "scaled_by", angular),
            f"set_{name}": _mutator(f"with_{name}", f"set_{name}"),
            f"increment_{name}": _mutator(f"with_{name}_incremented_by", f"increment_{name}"),
            f"decrement_{name}": _mutator(f"with_{name}_decremented_by", f"decrement_{name}"),
            f"scale_{name}": _mutator(f"with_{name}_scaled_by", f"scale_{name}"),
        }
        for attr, value in generated.items():
            if attr not in cls.__dict__:
                setattr(cls, attr, value)


# =============================================================================
# 2. COLOR MODEL
# =============================================================================

class ColorModel:
    """
    Base class for every color representation.

    Args:
        *components: One value per entry of ``COMPONENTS`` (any real number).
        alpha: Opacity in [0, 1] (default 1.0).

    Raises:
        ValueError: If the number of components is wrong or alpha is out of range.
        TypeError: If a component is not a real number.
    """

    __slots__ = ("_components", "_alpha")

    COMPONENTS: ClassVar[Tuple[str, ...]] = ()
    HUB_COST: ClassVar[int] = 3
    # Components in degrees; their generated deltas wrap into [0, 360).
    ANGULAR_COMPONENTS: ClassVar[Tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "COMPONENTS" in cls.__dict__:
            _install_component_accessors(cls)
        if cls.COMPONENTS:
            ConversionHub.register(cls)

    def __init__(self, *components: ScalarLike, alpha: ScalarLike = 1.0) -> None:
        self._components: Tuple[Scalar, ...] = self._checked(components)
        self._alpha: Scalar = _check_alpha(alpha)

    def _checked(self, values: Iterable[ScalarLike]) -> Tuple[Scalar, ...]:
        scalars = tuple(Scalar(v) for v in values)
        if len(scalars) != len(self.COMPONENTS):
            raise ValueError(
                f"{type(self).__name__} takes {len(self.COMPONENTS)} components "
                f"{self.COMPONENTS}, got {len(scalars)}."
            )
        return scalars

    # -- hub primitives --------------------------------------------------------
    def to_xyz(self) -> Any:
        """Converts to CIE XYZ."""
        raise NotImplementedError(f"{type(self).__name__} must implement to_xyz().")

    @classmethod
    def from_xyz(cls, xyz: Any) -> "ColorModel":
        """Builds an instance from CIE XYZ."""
        raise NotImplementedError(f"{cls.__name__} must implement from_xyz().")

    @classmethod
    def native_conversions(cls) -> Tuple[Tuple[type, type, Callable[[Any], Any]], ...]:
        """Shortcut edges ``(source, target, converter)`` that bypass the hub."""
        return ()

    # -- raw components --------------------------------------------------------
    def components(self) -> Tuple[float, ...]:
        return tuple(c.value for c in self._components)

    def set_components(self, values: Iterable[ScalarLike]) -> None:
        self._components = self._checked(values)

    def with_components(self, values: Iterable[ScalarLike]) -> "ColorModel":
        clone = self.copy()
        clone.set_components(values)
        return clone

    def _assign(self, other: "ColorModel") -> None:
        """Overwrites this instance with ``other`` (same class only)."""
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot assign {type(other).__name__} to {type(self).__name__}."
            )
        for slot in _slot_names(type(self)):
            object.__setattr__(self, slot, getattr(other, slot))
        if hasattr(other, "__dict__"):
            self.__dict__.update(other.__dict__)

    def copy(self) -> "ColorModel":
        clone = object.__new__(type(self))
        clone._assign(self)
        return clone

    def _check_space(self, other: "ColorModel") -> None:
        """Refuses to combine values tagged with different RGB spaces."""
        mine = getattr(type(self), "SPEC", None)
        theirs = getattr(type(other), "SPEC", None)
        if mine is not None and theirs is not None and mine is not theirs:
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}: "
                f"different RGB spaces; convert explicitly first."
            )

    # -- alpha -----------------------------------------------------------------
    @property
    def alpha(self) -> float:
        return self._alpha.value

    opacity = alpha

    def with_alpha(self, alpha: ScalarLike) -> "ColorModel":
        clone = self.copy()
        clone._alpha = _check_alpha(alpha)
        return clone

    def set_alpha(self, alpha: ScalarLike) -> None:
        self._assign(self.with_alpha(alpha))

    # -- conversion ------------------------------------------------------------
    def to(self, target: Type["ColorModel"]) -> Any:
        """Converts to ``target`` along the cheapest known path."""
        return ConversionHub.convert(self, target)

    def to_lab(self) -> Any:
        from color_models.cie import Lab
        return self.to(Lab)

    def to_lch(self) -> Any:
        from color_models.cie import Lch
        return self.to(Lch)

    def to_luv(self) -> Any:
        from color_models.cie import Luv
        return self.to(Luv)

    def to_xyy(self) -> Any:
        from color_models.cie import Xyy
        return self.to(Xyy)

    def to_oklab(self) -> Any:
        from color_models.perceptual import Oklab
        return self.to(Oklab)

    def to_oklch(self) -> Any:
        from color_models.perceptual import Oklch
        return self.to(Oklch)

    def to_lms(self) -> Any:
        from color_models.physiological import Lms
        return self.to(Lms)

    def to_rgb(self, spec: Optional["RgbSpec"] = None) -> Any:
        return self.to(_rgb_class(type(self), spec))

    def to_linear_rgb(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.rgb import LinearRgb
        return self.to(LinearRgb[_rgb_class(type(self), spec).SPEC])

    def to_hsl(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.cylindrical import Hsl
        return self.to(Hsl[_rgb_class(type(self), spec).SPEC])

    def to_hsv(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.cylindrical import Hsv
        return self.to(Hsv[_rgb_class(type(self), spec).SPEC])

    def to_hwb(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.cylindrical import Hwb
        return self.to(Hwb[_rgb_class(type(self), spec).SPEC])

    def to_hsi(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.cylindrical import Hsi
        return self.to(Hsi[_rgb_class(type(self), spec).SPEC])

    def to_hpluv(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.perceptual import Hpluv
        return self.to(Hpluv[_rgb_class(type(self), spec).SPEC])

    def to_cmy(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.subtractive import Cmy
        return self.to(Cmy[_rgb_class(type(self), spec).SPEC])

    def to_cmyk(self, spec: Optional["RgbSpec"] = None) -> Any:
        from color_models.subtractive import Cmyk
        return self.to(Cmyk[_rgb_class(type(self), spec).SPEC])

    # =========================================================================
    # Universal properties
    # =========================================================================

    @property
    def luminance(self) -> float:
        """Relative luminance Y."""
        return ConversionHub.read(self, "luminance")

    def with_luminance(self, luminance: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "luminance", luminance)

    def set_luminance(self, luminance: ScalarLike) -> None:
        self._assign(self.with_luminance(luminance))

    @property
    def chromaticity(self) -> Xy:
        """CIE 1931 xy chromaticity."""
        return ConversionHub.read(self, "chromaticity")

    @property
    def lightness(self) -> float:
        """CIE L* (0-100)."""
        return ConversionHub.read(self, "lightness")

    def with_lightness(self, lightness: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "lightness", lightness)

    def set_lightness(self, lightness: ScalarLike) -> None:
        self._assign(self.with_lightness(lightness))

    @property
    def hue(self) -> float:
        """Hue angle in degrees [0, 360). Achromatic colors report 0.0."""
        return ConversionHub.read(self, "hue")

    def with_hue(self, hue: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "hue", hue)

    def set_hue(self, hue: ScalarLike) -> None:
        self._assign(self.with_hue(hue))

    @property
    def chroma(self) -> float:
        """OkLCh chroma."""
        return ConversionHub.read(self, "chroma")

    def with_chroma(self, chroma: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "chroma", chroma)

    def set_chroma(self, chroma: ScalarLike) -> None:
        self._assign(self.with_chroma(chroma))

    @property
    def saturation(self) -> float:
        """HSL saturation (0-1)."""
        return ConversionHub.read(self, "saturation")

    def with_saturation(self, saturation: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "saturation", saturation)

    def set_saturation(self, saturation: ScalarLike) -> None:
        self._assign(self.with_saturation(saturation))

    @property
    def red(self) -> int:
        """Red channel on the 8-bit scale (not clamped)."""
        return ConversionHub.read(self, "red")

    def with_red(self, red: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "red", red)

    def set_red(self, red: ScalarLike) -> None:
        self._assign(self.with_red(red))

    @property
    def green(self) -> int:
        return ConversionHub.read(self, "green")

    def with_green(self, green: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "green", green)

    def set_green(self, green: ScalarLike) -> None:
        self._assign(self.with_green(green))

    @property
    def blue(self) -> int:
        return ConversionHub.read(self, "blue")

    def with_blue(self, blue: ScalarLike) -> "ColorModel":
        return ConversionHub.write(self, "blue", blue)

    def set_blue(self, blue: ScalarLike) -> None:
        self._assign(self.with_blue(blue))

    @property
    def cyan(self) -> float:
        return ConversionHub.read(self, "cyan")

    @property
    def magenta(self) -> float:
        return ConversionHub.read(self, "magenta")

    @property
    def yellow(self) -> float:
        return ConversionHub.read(self, "yellow")

    @property
    def key(self) -> float:
        return ConversionHub.read(self, "key")

    # =========================================================================
    # Universal operations
    # =========================================================================

    def amplified_by(self, factor: ScalarLike) -> "ColorModel":
        """Scales the tristimulus value by ``factor``."""
        return ConversionHub.apply(self, "amplified_by", factor)

    def amplify(self, factor: ScalarLike) -> None:
        self._assign(self.amplified_by(factor))

    def attenuated_by(self, factor: ScalarLike) -> "ColorModel":
        """Divides the tristimulus value by ``factor``."""
        return ConversionHub.apply(self, "attenuated_by", factor)

    def attenuate(self, factor: ScalarLike) -> None:
        self._assign(self.attenuated_by(factor))

    def with_luminance_scaled_by(self, factor: ScalarLike) -> "ColorModel":
        return ConversionHub.apply(self, "with_luminance_scaled_by", factor)

    def scale_luminance(self, factor: ScalarLike) -> None:
        self._assign(self.with_luminance_scaled_by(factor))

    def with_luminance_incremented_by(self, amount: ScalarLike) -> "ColorModel":
        return ConversionHub.apply(self, "with_luminance_incremented_by", amount)

    def increment_luminance(self, amount: ScalarLike) -> None:
        self._assign(self.with_luminance_incremented_by(amount))

    def with_luminance_decremented_by(self, amount: ScalarLike) -> "ColorModel":
        return ConversionHub.apply(self, "with_luminance_decremented_by", amount)

    def decrement_luminance(self, amount: ScalarLike) -> None:
        self._assign(self.with_luminance_decremented_by(amount))

    def with_hue_rotated_by(self, degrees: ScalarLike) -> "ColorModel":
        """Rotates the hue (OkLCh unless the model has its own hue)."""
        return ConversionHub.apply(self, "with_hue_rotated_by", degrees)

    def rotate_hue(self, degrees: ScalarLike) -> None:
        self._assign(self.with_hue_rotated_by(degrees))

    def mixed_with(self, other: "ColorModel", t: ScalarLike = 0.5) -> "ColorModel":
        """
        Interpolates toward ``other`` (Oklab unless the model mixes natively).

        Args:
            other: Any color; converted as needed.
            t: 0 returns ``self``, 1 returns ``other``; values outside
                extrapolate.

        Raises:
            TypeError: If both colors are bound to different RGB spaces.
        """
        self._check_space(other)
        return ConversionHub.apply(self, "mixed_with", other, t)

    def mix(self, other: "ColorModel", t: ScalarLike = 0.5) -> None:
        self._assign(self.mixed_with(other, t))

    def adapted_between(
        self, source: ColorimetricContext, target: ColorimetricContext
    ) -> "ColorModel":
        """
        Chromatically adapts the color from ``source`` to ``target`` white,
        using the target's transform, keeping the color's own context label.
        """
        return ConversionHub.apply(self, "adapted_between", source, target)

    def adapt_between(self, source: ColorimetricContext, target: ColorimetricContext) -> None:
        self._assign(self.adapted_between(source, target))

    def in_gamut(self, spec: Optional["RgbSpec"] = None, tolerance: float = 1e-9) -> bool:
        """True when the color lies inside the RGB gamut of ``spec``."""
        return self.to(_rgb_class(type(self), spec)).in_gamut(tolerance=tolerance)

    def clamped(self, spec: Optional["RgbSpec"] = None) -> "ColorModel":
        """Clips the RGB channels of ``spec`` to [0, 1]."""
        rgb = self.to(_rgb_class(type(self), spec)).clamped()
        return ConversionHub.restore(rgb, self)

    def clamp(self, spec: Optional["RgbSpec"] = None) -> None:
        self._assign(self.clamped(spec))

    def gamut_mapped(self, spec: Optional["RgbSpec"] = None) -> "ColorModel":
        """Brings the color into gamut by reducing OkLCh chroma at constant lightness and hue."""
        from color_models.perceptual import map_into_gamut
        rgb = map_into_gamut(self, _rgb_class(type(self), spec))
        return ConversionHub.restore(rgb, self)

    def map_to_gamut(self, spec: Optional["RgbSpec"] = None) -> None:
        self._assign(self.gamut_mapped(spec))

    # -- dunder ----------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.components() == other.components()  # type: ignore[attr-defined]
            and self.alpha == other.alpha  # type: ignore[attr-defined]
            and getattr(self, "_context", None) == getattr(other, "_context", None)
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        return iter(self.components())

    def __format__(self, format_spec: str) -> str:
        body = ", ".join(format(c, format_spec) for c in self._components)
        if self.alpha < 1.0:
            body += f", {self.alpha * 100.0:.0f}%"
        return f"{type(self).__name__}({body})"

    def __str__(self) -> str:
        return format(self, "")

    def __repr__(self) -> str:
        values = ", ".join(repr(c) for c in self.components())
        return f"{type(self).__name__}({values}, alpha={self.alpha!r})"


# =============================================================================
# 3. CONTEXT-CARRYING MODELS
# =============================================================================

class ContextualModel(ColorModel):
    """
    Base for the tristimulus family (XYZ, xyY, Lab, LCh, Luv, LMS), whose
    values are relative to the reference white of a ColorimetricContext.

    Args:
        *components: Component values.
        alpha: Opacity in [0, 1].
        context: Viewing context (default D65 / CIE 1931 2° / default CAT).
    """

    __slots__ = ("_context",)

    def __init__(
        self,
        *components: ScalarLike,
        alpha: ScalarLike = 1.0,
        context: Optional[ColorimetricContext] = None,
    ) -> None:
        super().__init__(*components, alpha=alpha)
        self._context: ColorimetricContext = context if context is not None else ColorimetricContext()

    @property
    def context(self) -> ColorimetricContext:
        return self._context

    def with_context(self, context: ColorimetricContext) -> "ContextualModel":
        """Re-labels the values with ``context`` without transforming them."""
        clone = self.copy()
        clone._context = context
        return clone

    def set_context(self, context: ColorimetricContext) -> None:
        self._assign(self.with_context(context))

    def adapted_to(self, context: ColorimetricContext) -> "ContextualModel":
        """Transforms the values so they are relative to ``context``'s white."""
        return type(self).from_xyz(self.to_xyz().adapted_to(context))

    def adapt_to(self, context: ColorimetricContext) -> None:
        self._assign(self.adapted_to(context))

    def _coerce_same(self, other: ColorModel) -> "ContextualModel":
        """``other`` as this class and context, for component-wise mixing."""
        same = other.to(type(self))
        if same.context != self._context:
            same = same.adapted_to(self._context)
        return same

    def __repr__(self) -> str:
        values = ", ".join(repr(c) for c in self.components())
        return f"{type(self).__name__}({values}, alpha={self.alpha!r}, context={self._context})"


# =============================================================================
# 4. RGB-BOUND MODELS
# =============================================================================

class RgbBound:
    """
    Mixin for models parametrised by an RGB space. ``Model[spec]`` returns a
    subclass bound to ``spec``; the unparametrised class is bound to sRGB.
    Specialisations are created once and cached.
    """

    __slots__ = ()

    SPEC: ClassVar[RgbSpec] = SRGB
    _specialisations: ClassVar[Dict[Tuple[type, "RgbSpec"], type]] = {}

    def __class_getitem__(cls, spec: "RgbSpec") -> type:
        if not isinstance(spec, RgbSpec):
            raise TypeError(f"{cls.__name__}[...] expects an RgbSpec, got {type(spec).__name__}.")
        root = cls.__dict__.get("_SPECIALISED_FROM", cls)
        if spec is root.SPEC:
            return root
        key = (root, spec)
        special = RgbBound._specialisations.get(key)
        if special is None:
            # the hub lock: creating the class registers it with the hub
            with ConversionHub.registry_lock:
                special = RgbBound._specialisations.get(key)
                if special is None:
                    special = type(
                        f"{root.__name__}[{spec.name}]",
                        (root,),
                        {
                            "SPEC": spec,
                            "__slots__": (),
                            "_SPECIALISED_FROM": root,
                            "__module__": root.__module__,
                            "__qualname__": f"{root.__qualname__}[{spec.name}]",
                        },
                    )
                    RgbBound._specialisations[key] = special
        return special
