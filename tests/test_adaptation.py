# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: test_adaptation.py — Chromatic adaptation transforms and the default
selection chain.
"""

import pytest

import swatch_adaptation as sa
from color_models import Lab, Xyz
from swatch_adaptation import (
    BRADFORD,
    CAT16,
    PRIORITY,
    TRANSFORMS,
    XYZ_SCALING,
    ChromaticAdaptationTransform,
    transform_by_name,
)
from swatch_context import ColorimetricContext, Illuminant, reference_white
from swatch_errors import ConfigurationError

from conftest import close

D65 = reference_white(Illuminant.D65)
D50 = reference_white(Illuminant.D50)
A = reference_white(Illuminant.A)


@pytest.mark.parametrize("cat", list(TRANSFORMS.values()), ids=lambda c: c.name)
def test_white_maps_onto_white(cat):
    assert cat.adapt_values(D65, D65, D50) == pytest.approx(D50, abs=1e-9)


@pytest.mark.parametrize("cat", list(TRANSFORMS.values()), ids=lambda c: c.name)
def test_adaptation_round_trip(cat):
    color = (0.3, 0.4, 0.2)
    there = cat.adapt_values(color, D65, A)
    assert cat.adapt_values(there, A, D65) == pytest.approx(color, abs=1e-9)


def test_same_white_is_identity():
    color = (0.3, 0.4, 0.2)
    assert BRADFORD.adapt_values(color, D65, D65) == color
    xyz = Xyz(0.3, 0.4, 0.2)
    assert close(BRADFORD.adapt(xyz, D65, D65), color, 1e-6)


def test_bradford_d65_to_d50_matrix():
    expected = (
        (1.0478112, 0.0228866, -0.0501270),
        (0.0295424, 0.9904844, -0.0170491),
        (-0.0092345, 0.0150436, 0.7521316),
    )
    rows = BRADFORD.adaptation_matrix(D65, D50).rows()
    for row, ref in zip(rows, expected):
        assert row == pytest.approx(ref, abs=1e-6)


def test_composite_matrix_is_cached():
    assert BRADFORD.adaptation_matrix(D65, A) is BRADFORD.adaptation_matrix(D65, A)


def test_adapt_accepts_contexts_and_colors():
    d65 = ColorimetricContext()
    d50 = ColorimetricContext(illuminant=Illuminant.D50)
    adapted = BRADFORD.adapt(Xyz(*D65, context=d65), d65, d50)
    assert isinstance(adapted, Xyz)
    assert adapted.context == d50
    assert close(adapted, D50, 1e-9)
    # non-XYZ input goes through the hub first
    lab = Lab(50.0, 10.0, -10.0)
    assert close(BRADFORD.adapt(lab, d65, d50), BRADFORD.adapt(lab.to(Xyz), d65, d50), 1e-12)


def test_singular_transform_raises():
    with pytest.raises(ConfigurationError):
        ChromaticAdaptationTransform("broken", [[1, 0, 0], [1, 0, 0], [0, 0, 1]])


def test_near_zero_cone_response_warns():
    with pytest.warns(RuntimeWarning, match="near-zero cone response"):
        XYZ_SCALING.adapt_values((0.2, 0.3, 0.4), (0.0, 1.0, 0.7), D65)


def test_transform_lookup():
    assert transform_by_name("bradford") is BRADFORD
    assert transform_by_name("cat-16") is CAT16
    assert transform_by_name("HPE").name == "Hunt-Pointer-Estevez"
    with pytest.raises(KeyError):
        transform_by_name("CAT42")


def test_default_is_bradford(restore_transforms):
    sa.set_enabled_transforms(None)
    assert sa.default_transform() is BRADFORD
    assert sa.enabled_transforms() == PRIORITY


def test_default_follows_priority_chain(restore_transforms):
    assert sa.set_enabled_transforms(["Von Kries", "CAT16"]) is CAT16
    assert sa.enabled_transforms() == ("CAT16", "Von Kries", "XYZ Scaling")
    assert sa.set_enabled_transforms(["Fairchild", "sharp"]).name == "Sharp"
    assert sa.set_enabled_transforms([]) is XYZ_SCALING
    assert ColorimetricContext().cat is XYZ_SCALING


def test_unknown_name_rejected_at_runtime(restore_transforms):
    with pytest.raises(KeyError):
        sa.set_enabled_transforms(["nope"])


def test_environment_selection(monkeypatch):
    monkeypatch.setenv(sa.ENABLED_TRANSFORMS_ENV, "cat02, von kries")
    assert sa._enabled_from_env() == ("CAT02", "Von Kries", "XYZ Scaling")
    monkeypatch.setenv(sa.ENABLED_TRANSFORMS_ENV, "cat02,unknown")
    with pytest.warns(UserWarning, match="unknown"):
        assert sa._enabled_from_env() == ("CAT02", "XYZ Scaling")
    monkeypatch.delenv(sa.ENABLED_TRANSFORMS_ENV)
    assert sa._enabled_from_env() == PRIORITY


def test_equality_and_display():
    clone = ChromaticAdaptationTransform("Bradford", BRADFORD.matrix)
    assert clone == BRADFORD
    assert hash(clone) == hash(BRADFORD)
    assert sa.CMC_CAT97 != BRADFORD
    assert repr(BRADFORD) == "ChromaticAdaptationTransform('Bradford')"
