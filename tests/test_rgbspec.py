# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: test_rgbspec.py — RGB primaries, space matrices and the catalogue.
"""

import threading
import warnings

import pytest

from color_models import LinearRgb, Xyz
from swatch_context import (
    ColorimetricContext,
    Illuminant,
    Observer,
    Xy,
    reference_white,
    register_reference_white,
)
from swatch_errors import ConfigurationError
from swatch_matrix import Matrix3
from swatch_rgbspec import (
    ADOBE_RGB,
    PROPHOTO_RGB,
    RED_WIDE_GAMUT,
    RGB_SPACES,
    SONY_SGAMUT3,
    SONY_SGAMUT3_CINE,
    SRGB,
    WIDE_GAMUT_RGB,
    Rg,
    RgbPrimaries,
    RgbSpec,
    rgb_space_by_name,
)
from swatch_transfer import TransferFunction

from conftest import close


def test_catalogue_is_complete():
    assert len(RGB_SPACES) == 35
    assert rgb_space_by_name("srgb") is SRGB
    assert rgb_space_by_name("Adobe RGB (1998)") is ADOBE_RGB
    with pytest.raises(KeyError):
        rgb_space_by_name("Imaginary RGB")


@pytest.mark.parametrize(
    "name, spec",
    [
        ("RED Wide Gamut RGB", RED_WIDE_GAMUT),
        ("sony s-gamut3", SONY_SGAMUT3),
        ("Sony S-Gamut3.Cine", SONY_SGAMUT3_CINE),
        ("Wide Gamut RGB", WIDE_GAMUT_RGB),
    ],
)
def test_wide_camera_and_legacy_spaces_are_listed(name, spec):
    assert rgb_space_by_name(name) is spec
    red = LinearRgb[spec](1.0, 0.0, 0.0).to_xyz()
    assert tuple(Xy.from_xyz(red.components())) == pytest.approx(tuple(spec.primaries.red), abs=1e-9)


@pytest.mark.parametrize("spec", list(RGB_SPACES.values()), ids=str)
def test_matrix_inverse_is_identity(spec):
    product = spec.xyz_matrix() @ spec.inverse_xyz_matrix()
    assert product.allclose(Matrix3.identity(), atol=1e-9)


@pytest.mark.parametrize("spec", list(RGB_SPACES.values()), ids=str)
def test_rgb_white_maps_onto_reference_white(spec):
    assert spec.xyz_matrix().apply((1.0, 1.0, 1.0)) == pytest.approx(
        spec.reference_white(), abs=1e-6
    )


def test_srgb_matrix_reference_values():
    expected = (
        (0.4124564, 0.3575761, 0.1804375),
        (0.2126729, 0.7151522, 0.0721750),
        (0.0193339, 0.1191920, 0.9503041),
    )
    for row, ref in zip(SRGB.xyz_matrix().rows(), expected):
        assert row == pytest.approx(ref, abs=1e-6)


def test_matrices_are_memoised():
    assert SRGB.xyz_matrix() is SRGB.xyz_matrix()
    assert SRGB.inverse_xyz_matrix() is SRGB.xyz_matrix().inverse()


def test_concurrent_first_access_sees_one_result():
    spec = RgbSpec("Threaded", ((0.64, 0.33), (0.30, 0.60), (0.15, 0.06)))
    results = []

    def worker():
        results.append(spec.xyz_matrix())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(m is results[0] for m in results)


def test_colinear_primaries_fail_fast():
    with pytest.raises(ConfigurationError, match="colinear"):
        RgbPrimaries((0.1, 0.1), (0.2, 0.2), (0.3, 0.3))


def test_primary_with_zero_y_fails():
    with pytest.raises(ConfigurationError):
        RgbPrimaries((0.64, 0.0), (0.30, 0.60), (0.15, 0.06))


def test_white_on_gamut_edge_fails_at_construction():
    # midpoint of the red-green edge
    register_reference_white("edge", Observer.CIE_1931_2D, Xy(0.47, 0.465).to_xyz())
    primaries = RgbPrimaries((0.64, 0.33), (0.30, 0.60), (0.15, 0.06))
    with pytest.raises(ConfigurationError, match="edge"):
        RgbSpec("Edge", primaries, context=ColorimetricContext(illuminant="edge"))
    with pytest.raises(ConfigurationError):
        primaries.calculate_xyz_matrix(Xy(0.47, 0.465).to_xyz())


def test_white_outside_the_gamut_is_allowed():
    primaries = RgbPrimaries((0.64, 0.33), (0.30, 0.60), (0.15, 0.06))
    assert min(primaries.barycentric(Xy(0.7, 0.3))) < 0.0
    matrix = primaries.calculate_xyz_matrix(Xy(0.7, 0.3).to_xyz())
    assert matrix.apply((1.0, 1.0, 1.0)) == pytest.approx(Xy(0.7, 0.3).to_xyz(), abs=1e-9)


def test_spec_defaults_and_transfer():
    spec = RgbSpec("Custom", ((0.64, 0.33), (0.30, 0.60), (0.15, 0.06)))
    assert spec.transfer_function is TransferFunction.SRGB
    assert spec.context.illuminant == Illuminant.D65
    assert spec.decode(spec.encode(0.25)) == pytest.approx(0.25)
    assert str(spec) == "Custom"


def test_spec_identity_is_the_space():
    twin = RgbSpec("sRGB", SRGB.primaries, SRGB.transfer_function, SRGB.context)
    assert twin is not SRGB
    assert twin.primaries == SRGB.primaries


def test_d50_space_white():
    assert PROPHOTO_RGB.reference_white() == (0.96422, 1.0, 0.82521)


@pytest.fixture
def replaced_d65():
    """Swaps the built-in D65 white for the duration of one test."""
    original = reference_white(Illuminant.D65)
    replacement = (0.9505, 1.0, 1.089)
    with pytest.warns(UserWarning, match="Overriding built-in"):
        register_reference_white(Illuminant.D65, Observer.CIE_1931_2D, replacement)
    yield replacement
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        register_reference_white(Illuminant.D65, Observer.CIE_1931_2D, original)


def test_matrices_follow_a_replaced_white(replaced_d65):
    assert SRGB.xyz_matrix().apply((1.0, 1.0, 1.0)) == pytest.approx(replaced_d65, abs=1e-12)
    white = LinearRgb(1.0, 1.0, 1.0).to_xyz()
    assert close(white, replaced_d65, 1e-12)
    assert close(Xyz(*replaced_d65).to(LinearRgb), (1.0, 1.0, 1.0), 1e-12)


def test_matrices_recover_after_the_white_is_restored(replaced_d65):
    assert SRGB.xyz_matrix().apply((1.0, 1.0, 1.0)) == pytest.approx(replaced_d65, abs=1e-12)
    with pytest.warns(UserWarning):
        register_reference_white(Illuminant.D65, Observer.CIE_1931_2D, (0.95047, 1.0, 1.08883))
    assert SRGB.xyz_matrix().apply((1.0, 1.0, 1.0)) == pytest.approx((0.95047, 1.0, 1.08883), abs=1e-12)


# -- rg chromaticity ------------------------------------------------------------

def test_rg_of_the_white_is_a_third_each():
    white = Xy.from_xyz(SRGB.reference_white())
    rg = Rg.from_xy(white)
    assert rg.spec is SRGB
    assert tuple(rg) == pytest.approx((1.0 / 3.0, 1.0 / 3.0), abs=1e-12)


def test_rg_of_a_primary_is_a_corner():
    assert tuple(Rg.from_xy((0.64, 0.33))) == pytest.approx((1.0, 0.0), abs=1e-9)
    assert tuple(Rg.from_xy((0.30, 0.60))) == pytest.approx((0.0, 1.0), abs=1e-9)


def test_rg_converts_back_to_xy_in_its_space():
    rg = Rg.from_xy(Xy(0.35, 0.42), ADOBE_RGB)
    assert rg.spec is ADOBE_RGB
    assert tuple(rg.to_xy()) == pytest.approx((0.35, 0.42), abs=1e-12)
    assert tuple(Rg(0.2, 0.5).to_xy()) != tuple(Rg(0.2, 0.5, ADOBE_RGB).to_xy())
