# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: swatch_hub.py — Conversion hub and universal property routing.

Every color model converts to and from CIE XYZ (the hub). On top of those
two primitives the hub:

  1.  Finds the cheapest conversion path between any two model classes.
      Nodes are model classes; edges are the hub primitives (weighted by
      the model's ``HUB_COST``) and the native shortcuts each model
      declares in ``native_conversions`` (weight 1), e.g. Hsl <-> Rgb or
      Lab <-> Lch. Paths are found with Dijkstra and cached per
      (source, target) until a new model class is registered.
  2.  Answers cross-model property reads/writes and operations for models
      that do not implement them natively: the color is converted to the
      canonical model that defines the property, the native accessor runs
      there, and the result is converted back to the caller's class (and,
      for tristimulus-family values, re-adapted to the caller's context).

Canonical models:
    luminance, chromaticity, luminance ops, amplify/attenuate, adaptation -> Xyz
    lightness                                                       -> Lab
    hue, chroma, hue rotation                                       -> Oklch
    mixing                                                          -> Oklab
    saturation                                                      -> Hsl
    red, green, blue                                                -> Rgb
    cyan, magenta, yellow, key                                      -> Cmyk
The RGB-derived models (Hsl, Rgb, Cmyk) use the caller's own RGB space when
it has one and sRGB otherwise.
"""

from __future__ import annotations

import heapq
import itertools
import threading
from typing import TYPE_CHECKING, Any, Callable, Dict, Final, List, Tuple, Type

if TYPE_CHECKING:
    from color_models.model import ColorModel
    from swatch_rgbspec import RgbSpec

__all__ = [
    "ConversionHub",
    "NATIVE_EDGE_COST",
    "PROPERTY_MODELS",
    "OPERATION_MODELS",
]

NATIVE_EDGE_COST: Final[int] = 1

Converter = Callable[[Any], Any]
Edge = Tuple[type, Converter, int]


# =============================================================================
# 1. CANONICAL MODELS
# =============================================================================
# Resolved lazily: color_models imports this module.

def _spec_of(cls: type) -> "RgbSpec":
    from swatch_rgbspec import SRGB
    return getattr(cls, "SPEC", None) or SRGB


def _xyz(cls: type) -> type:
    from color_models.xyz import Xyz
    return Xyz


def _lab(cls: type) -> type:
    from color_models.cie import Lab
    return Lab


def _oklab(cls: type) -> type:
    from color_models.perceptual import Oklab
    return Oklab


def _oklch(cls: type) -> type:
    from color_models.perceptual import Oklch
    return Oklch


def _rgb(cls: type) -> type:
    from color_models.rgb import Rgb
    return Rgb[_spec_of(cls)]


def _hsl(cls: type) -> type:
    from color_models.cylindrical import Hsl
    return Hsl[_spec_of(cls)]


def _cmyk(cls: type) -> type:
    from color_models.subtractive import Cmyk
    return Cmyk[_spec_of(cls)]


PROPERTY_MODELS: Final[Dict[str, Callable[[type], type]]] = {
    "luminance": _xyz,
    "chromaticity": _xyz,
    "lightness": _lab,
    "hue": _oklch,
    "chroma": _oklch,
    "saturation": _hsl,
    "red": _rgb,
    "green": _rgb,
    "blue": _rgb,
    "cyan": _cmyk,
    "magenta": _cmyk,
    "yellow": _cmyk,
    "key": _cmyk,
}

OPERATION_MODELS: Final[Dict[str, Callable[[type], type]]] = {
    "amplified_by": _xyz,
    "attenuated_by": _xyz,
    "with_luminance_scaled_by": _xyz,
    "with_luminance_incremented_by": _xyz,
    "with_luminance_decremented_by": _xyz,
    "adapted_between": _xyz,
    "with_hue_rotated_by": _oklch,
    "mixed_with": _oklab,
}


def _defines_natively(model: type, attribute: str) -> bool:
    """True when ``attribute`` is implemented below the ColorModel base."""
    from color_models.model import ColorModel
    for klass in model.__mro__:
        if attribute in klass.__dict__:
            return klass is not ColorModel
    return False


# =============================================================================
# 2. HUB
# =============================================================================

class ConversionHub:
    """
    Registry of model classes and router for conversions and universal
    properties. All methods are static; state is process-wide.
    """

    _classes: List[type] = []
    registry_lock = threading.RLock()
    _gen: int = 0
    _edge_gen: int = -1
    _edges: Dict[type, List[Edge]] = {}
    _paths: Dict[Tuple[type, type], Tuple[int, Tuple[Converter, ...]]] = {}

    # -- registry ------------------------------------------------------------
    @staticmethod
    def register(model: type) -> None:
        """Adds a model class to the graph. Called from ``__init_subclass__``."""
        with ConversionHub.registry_lock:
            if model not in ConversionHub._classes:
                ConversionHub._classes.append(model)
                ConversionHub._gen += 1

    @staticmethod
    def unregister(model: type) -> None:
        """Removes a model class from the graph; unknown classes are ignored."""
        with ConversionHub.registry_lock:
            if model in ConversionHub._classes:
                ConversionHub._classes.remove(model)
                ConversionHub._gen += 1

    @staticmethod
    def registered() -> Tuple[type, ...]:
        return tuple(ConversionHub._classes)

    @staticmethod
    def _build_edges() -> Dict[type, List[Edge]]:
        """Collects native shortcuts. Caller must hold ``registry_lock``."""
        while ConversionHub._edge_gen != ConversionHub._gen:
            gen = ConversionHub._gen
            edges: Dict[type, List[Edge]] = {}
            # declaring shortcuts may specialise (and register) new classes
            for model in list(ConversionHub._classes):
                for source, target, converter in model.native_conversions():
                    bucket = edges.setdefault(source, [])
                    if all(t is not target for t, _, _ in bucket):
                        bucket.append((target, converter, NATIVE_EDGE_COST))
            ConversionHub._edges = edges
            ConversionHub._edge_gen = gen
        return ConversionHub._edges

    # -- paths ---------------------------------------------------------------
    @staticmethod
    def path(source: type, target: type) -> Tuple[Converter, ...]:
        """
        Cheapest chain of converters from ``source`` to ``target``.

        Args:
            source: Model class of the input value.
            target: Model class wanted.

        Returns:
            Converters to apply in order (empty when source is target).
        """
        if source is target:
            return ()
        key = (source, target)
        cached = ConversionHub._paths.get(key)
        if cached is not None and cached[0] == ConversionHub._gen:
            return cached[1]
        with ConversionHub.registry_lock:
            ConversionHub.register(source)
            ConversionHub.register(target)
            edges = ConversionHub._build_edges()
            route = ConversionHub._dijkstra(source, target, edges, ConversionHub._classes)
            ConversionHub._paths[key] = (ConversionHub._gen, route)
            return route

    @staticmethod
    def _dijkstra(
        source: type, target: type, edges: Dict[type, List[Edge]], nodes: List[type]
    ) -> Tuple[Converter, ...]:
        hub = _xyz(source)
        tie = itertools.count()
        best: Dict[type, int] = {source: 0}
        previous: Dict[type, Tuple[type, Converter]] = {}
        queue: List[Tuple[int, int, type]] = [(0, next(tie), source)]

        while queue:
            cost, _, node = heapq.heappop(queue)
            if node is target:
                break
            if cost > best.get(node, cost):
                continue
            neighbours: List[Edge] = list(edges.get(node, ()))
            if node is not hub:
                neighbours.append((hub, _to_hub, node.HUB_COST))
            else:
                neighbours.extend(
                    (model, model.from_xyz, model.HUB_COST) for model in nodes if model is not hub
                )
            for nxt, converter, weight in neighbours:
                new_cost = cost + weight
                if new_cost < best.get(nxt, new_cost + 1):
                    best[nxt] = new_cost
                    previous[nxt] = (node, converter)
                    heapq.heappush(queue, (new_cost, next(tie), nxt))

        steps: List[Converter] = []
        node = target
        while node is not source:
            node, converter = previous[node]
            steps.append(converter)
        return tuple(reversed(steps))

    # -- conversion ----------------------------------------------------------
    @staticmethod
    def convert(color: "ColorModel", target: Type["ColorModel"]) -> Any:
        """
        Converts ``color`` to an instance of ``target`` (alpha preserved).
        """
        if type(color) is target:
            return color.copy()
        value: Any = color
        for step in ConversionHub.path(type(color), target):
            value = step(value)
        if value.alpha != color.alpha:
            value = value.with_alpha(color.alpha)
        return value

    @staticmethod
    def restore(result: "ColorModel", template: "ColorModel") -> Any:
        """
        Converts a working-model result back to the template's class and,
        when the template carries a viewing context, to that context.
        """
        out = ConversionHub.convert(result, type(template))
        context = getattr(template, "context", None)
        if context is not None and out.context != context:
            out = out.adapted_to(context)
        return out

    # -- universal access ----------------------------------------------------
    @staticmethod
    def working_model(name: str, cls: type) -> type:
        table = PROPERTY_MODELS if name in PROPERTY_MODELS else OPERATION_MODELS
        try:
            factory = table[name]
        except KeyError:
            raise KeyError(f"{name!r} is not a universal property or operation.") from None
        model = factory(cls)
        if not _defines_natively(model, name):
            raise TypeError(f"{model.__name__} does not define {name!r} natively.")
        return model

    @staticmethod
    def read(color: "ColorModel", name: str) -> Any:
        """Reads a universal property through its canonical model."""
        model = ConversionHub.working_model(name, type(color))
        working = ConversionHub.convert(color, model)
        return getattr(working, name)

    @staticmethod
    def write(color: "ColorModel", name: str, value: Any) -> Any:
        """Returns ``color`` with a universal property replaced."""
        model = ConversionHub.working_model(name, type(color))
        working = ConversionHub.convert(color, model)
        result = getattr(working, f"with_{name}")(value)
        return ConversionHub.restore(result, color)

    @staticmethod
    def apply(color: "ColorModel", name: str, *args: Any) -> Any:
        """Runs a universal operation in its canonical model."""
        model = ConversionHub.working_model(name, type(color))
        working = ConversionHub.convert(color, model)
        result = getattr(working, name)(*args)
        return ConversionHub.restore(result, color)


def _to_hub(color: Any) -> Any:
    return color.to_xyz()
