# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: test_models.py — Conversions of the concrete color models.
"""

import math

import pytest

from color_models import (
    Cmy,
    Cmyk,
    max_safe_chroma,
    Hpluv,
    Hsi,
    Hsl,
    Hsv,
    Hwb,
    Lab,
    Lch,
    LinearRgb,
    Lms,
    Luv,
    Oklab,
    Oklch,
    Rgb,
    Xyy,
    Xyz,
)
from swatch_adaptation import BRADFORD, HUNT_POINTER_ESTEVEZ
from swatch_context import ColorimetricContext, Illuminant
from swatch_hub import ConversionHub
from swatch_rgbspec import ADOBE_RGB, DISPLAY_P3, PROPHOTO_RGB, SRGB

from conftest import close

RED = Rgb(1.0, 0.0, 0.0)
STEEL = Rgb(0.2, 0.4, 0.6)

ALL_MODELS = [
    Xyz, Xyy, Lab, Lch, Luv, Oklab, Oklch, Lms,
    Rgb, LinearRgb, Hsl, Hsv, Hwb, Hsi, Hpluv, Cmy, Cmyk,
    Rgb[ADOBE_RGB], Hsl[DISPLAY_P3], Cmyk[PROPHOTO_RGB],
]


@pytest.mark.parametrize("model", ALL_MODELS, ids=lambda m: m.__name__)
def test_hub_round_trip(model):
    converted = STEEL.to(model)
    assert isinstance(converted, model)
    assert close(converted.to(Rgb), STEEL.components(), 1e-9)


# Values built natively in each model: black, neutrals, near-neutrals, ordinary
# colors and out-of-gamut colors. Out-of-gamut picks keep one positive sRGB
# channel and stay clear of the HSL singular lightness.
NATIVE_VALUES = [
    Xyz(0.0, 0.0, 0.0),
    Xyz(0.95047, 1.0, 1.08883),
    Xyz(0.475235, 0.5, 0.544415 + 2e-5),
    Xyz(0.3, 0.2, 0.6),
    Xyz(0.6, 0.3, 0.02),
    Xyy(0.3127, 0.329, 0.0),
    Xyy(0.3127, 0.329, 0.5),
    Xyy(0.64, 0.33, 0.2126),
    Xyy(0.2, 0.7, 0.5),
    Lab(0.0, 0.0, 0.0),
    Lab(50.0, 0.0, 0.0),
    Lab(50.0, 3e-5, -2e-5),
    Lab(60.0, 40.0, -20.0),
    Lab(80.0, -120.0, 90.0),
    Lab(40.0, 10.0, 10.0, context=ColorimetricContext(illuminant=Illuminant.D50)),
    Lch(50.0, 0.0, 0.0),
    Lch(50.0, 5e-5, 200.0),
    Lch(60.0, 45.0, 30.0),
    Lch(70.0, 150.0, 140.0),
    Luv(0.0, 0.0, 0.0),
    Luv(50.0, 0.0, 0.0),
    Luv(55.0, 60.0, -40.0),
    Luv(70.0, -150.0, 80.0),
    Oklab(0.0, 0.0, 0.0),
    Oklab(1.0, 0.0, 0.0),
    Oklab(0.6, 3e-5, -2e-5),
    Oklab(0.7, 0.1, -0.05),
    Oklab(0.8, -0.35, 0.2),
    Oklch(0.5, 0.0, 0.0),
    Oklch(0.6, 5e-5, 90.0),
    Oklch(0.7, 0.12, 250.0),
    Oklch(0.8, 0.4, 140.0),
    Lms(0.0, 0.0, 0.0),
    Lms(0.5, 0.5, 0.5),
    Lms(0.3, 0.2, 0.1),
    Lms(0.9, 0.1, 0.5),
    Rgb(0.0, 0.0, 0.0),
    Rgb(1.0, 1.0, 1.0),
    Rgb(0.5, 0.5, 0.5),
    Rgb(0.5, 0.5, 0.5001),
    Rgb(0.2, 0.4, 0.6),
    Rgb(1.2, -0.1, 0.3),
    LinearRgb(0.0, 0.0, 0.0),
    LinearRgb(0.18, 0.18, 0.18),
    LinearRgb(0.05, 0.6, 0.3),
    LinearRgb(1.5, 0.2, -0.05),
    Hsl(0.0, 0.0, 0.0),
    Hsl(120.0, 0.0, 0.5),
    Hsl(210.0, 0.5, 0.4),
    Hsl(30.0, 1.5, 0.6),
    Hsv(0.0, 0.0, 0.0),
    Hsv(200.0, 0.0, 0.7),
    Hsv(40.0, 0.8, 0.9),
    Hsv(300.0, 1.3, 0.8),
    Hwb(0.0, 0.0, 1.0),
    Hwb(180.0, 0.5, 0.5),
    Hwb(90.0, 0.3, 0.3),
    Hwb(250.0, -0.1, 0.1),
    Hsi(0.0, 0.0, 0.0),
    Hsi(200.0, 0.0, 0.6),
    Hsi(60.0, 0.5, 0.5),
    Hsi(300.0, 1.4, 0.4),
    Hpluv(0.0, 0.0, 0.0),
    Hpluv(120.0, 0.0, 0.5),
    Hpluv(40.0, 0.8, 0.6),
    Hpluv(260.0, 2.5, 0.4),
    Cmy(0.0, 0.0, 0.0),
    Cmy(1.0, 1.0, 1.0),
    Cmy(0.2, 0.5, 0.7),
    Cmy(-0.2, 0.5, 1.1),
    Cmyk(0.0, 0.0, 0.0, 0.0),
    Cmyk(0.0, 0.0, 0.0, 1.0),
    Cmyk(0.5, 0.5, 0.5, 0.2),
    Cmyk(0.6, 0.2, 0.0, 0.3),
    Cmyk(-0.1, 0.4, 1.2, 0.1),
    Rgb[ADOBE_RGB](0.5, 0.5, 0.5),
    Rgb[ADOBE_RGB](0.1, 0.9, 0.2),
    Rgb[ADOBE_RGB](1.1, 0.3, -0.05),
    Hsl[DISPLAY_P3](0.0, 0.0, 0.7),
    Hsl[DISPLAY_P3](330.0, 0.6, 0.5),
    Cmyk[PROPHOTO_RGB](0.0, 0.0, 0.0, 0.5),
    Cmyk[PROPHOTO_RGB](0.1, 0.7, 0.3, 0.05),
]


def _label(color):
    return f"{type(color).__name__}{tuple(round(v, 5) for v in color.components())}"


@pytest.mark.parametrize("color", NATIVE_VALUES, ids=_label)
def test_native_values_round_trip_through_every_model(color):
    origin = color.to_xyz().components()
    for target in ALL_MODELS:
        back = ConversionHub.restore(color.to(target), color)
        assert type(back) is type(color)
        assert close(back.to_xyz(), origin, 1e-9), target.__name__


@pytest.mark.parametrize("model", ALL_MODELS, ids=lambda m: m.__name__)
def test_alpha_survives_conversion(model):
    assert STEEL.with_alpha(0.25).to(model).alpha == 0.25


# -- XYZ / RGB ------------------------------------------------------------------

def test_linear_srgb_white_is_d65():
    xyz = LinearRgb(1.0, 1.0, 1.0).to_xyz()
    assert close(xyz, (0.95047, 1.0, 1.08883), 1e-6)
    assert xyz.context.illuminant == Illuminant.D65


def test_srgb_red_xyz():
    assert close(RED.to(Xyz), (0.4124564, 0.2126729, 0.0193339), 1e-6)


def test_8bit_construction():
    orange = Rgb.from_8bit(255, 128, 0)
    assert close(orange, (1.0, 128 / 255, 0.0), 1e-12)
    assert orange.to_8bit() == (255, 128, 0)


def test_rgb_decodes_through_transfer():
    assert close(Rgb(0.5, 0.5, 0.5).to_linear(), (0.214041,) * 3, 1e-6)
    assert close(LinearRgb(0.214041, 0.214041, 0.214041).to_encoded(), (0.5,) * 3, 1e-6)


def test_conversion_between_rgb_spaces_adapts_whites():
    # ProPhoto is D50; the D65 white must land on ProPhoto's white
    white = Rgb(1.0, 1.0, 1.0).to(Rgb[PROPHOTO_RGB])
    assert close(white, (1.0, 1.0, 1.0), 1e-6)
    assert close(white.to(Rgb), (1.0, 1.0, 1.0), 1e-6)


def test_out_of_gamut_values_are_kept():
    wide = Rgb[ADOBE_RGB](0.0, 1.0, 0.0).to(Rgb)
    assert min(wide.components()) < 0.0


# -- CIE ------------------------------------------------------------------------

def test_lab_reference_values():
    assert close(RED.to(Lab), (53.2408, 80.0925, 67.2032), 1e-2)
    assert close(Rgb(1.0, 1.0, 1.0).to(Lab), (100.0, 0.0, 0.0), 1e-6)
    assert close(Rgb(0.0, 0.0, 0.0).to(Lab), (0.0, 0.0, 0.0), 1e-9)


def test_lab_low_light_branch_round_trips():
    dark = Lab(2.0, 1.0, -1.0)
    assert close(dark.to(Xyz).to(Lab), dark.components(), 1e-9)


def test_lab_in_d50_context():
    d50 = ColorimetricContext(illuminant=Illuminant.D50)
    lab = Xyz(0.96422, 1.0, 0.82521, context=d50).to(Lab)
    assert lab.context == d50
    assert close(lab, (100.0, 0.0, 0.0), 1e-9)


def test_lch_reference_values():
    lch = RED.to(Lch)
    assert close(lch, (53.2408, 104.5518, 39.9990), 1e-2)
    assert Lch(50, 10, 370).hue == pytest.approx(10.0)


def test_luv_reference_values():
    assert close(RED.to(Luv), (53.2408, 175.0151, 37.7564), 1e-2)


def test_luv_black():
    assert close(Luv(0.0, 10.0, 10.0).to(Xyz), (0.0, 0.0, 0.0), 0.0)
    assert close(Xyz(0.0, 0.0, 0.0).to(Luv), (0.0, 0.0, 0.0), 0.0)


def test_xyy_reference_values():
    assert close(RED.to(Xyy), (0.64, 0.33, 0.2126729), 1e-6)


def test_xyy_black_carries_white_chromaticity():
    black = Xyz(0.0, 0.0, 0.0).to(Xyy)
    assert close(black, (0.312727, 0.329023, 0.0), 1e-6)
    assert close(black.to(Xyz), (0.0, 0.0, 0.0), 0.0)
    assert close(Xyy(0.3, 0.0, 0.5).to(Xyz), (0.0, 0.0, 0.0), 0.0)


# -- perceptual -------------------------------------------------------------------

def test_oklab_reference_values():
    assert close(RED.to(Oklab), (0.627955, 0.224863, 0.125846), 1e-3)
    white = Rgb(1.0, 1.0, 1.0).to(Oklab)
    assert white.l == pytest.approx(1.0, abs=1e-3)


def test_oklab_adapts_foreign_whites():
    d50 = ColorimetricContext(illuminant=Illuminant.D50)
    d50_white = Xyz(0.96422, 1.0, 0.82521, context=d50).to(Oklab)
    d65_white = Xyz(0.95047, 1.0, 1.08883).to(Oklab)
    assert close(d50_white, d65_white.components(), 1e-9)


def test_oklch_from_oklab():
    oklch = Oklab(0.6, 0.1, 0.1).to(Oklch)
    assert close(oklch, (0.6, 0.141421, 45.0), 1e-6)


# -- physiological ----------------------------------------------------------------

def test_lms_uses_context_transform():
    xyz = Xyz(0.3, 0.4, 0.2)
    bradford = xyz.with_context(ColorimetricContext(cat=BRADFORD)).to(Lms)
    hpe = xyz.with_context(ColorimetricContext(cat=HUNT_POINTER_ESTEVEZ)).to(Lms)
    assert close(bradford, BRADFORD.matrix.apply(xyz.components()), 1e-12)
    assert close(hpe, HUNT_POINTER_ESTEVEZ.matrix.apply(xyz.components()), 1e-12)
    assert close(hpe.to(Xyz), xyz.components(), 1e-12)


# -- cylindrical ------------------------------------------------------------------

def test_hsl_hsv_hwb_of_red():
    assert close(RED.to(Hsl), (0.0, 1.0, 0.5), 1e-12)
    assert close(RED.to(Hsv), (0.0, 1.0, 1.0), 1e-12)
    assert close(RED.to(Hwb), (0.0, 0.0, 0.0), 1e-12)


def test_hsl_hsv_hwb_of_steel_blue():
    assert close(STEEL.to(Hsl), (210.0, 0.5, 0.4), 1e-9)
    assert close(STEEL.to(Hsv), (210.0, 2.0 / 3.0, 0.6), 1e-9)
    assert close(STEEL.to(Hwb), (210.0, 0.2, 0.4), 1e-9)


@pytest.mark.parametrize("model", [Hsl, Hsv, Hwb, Hsi], ids=lambda m: m.__name__)
def test_gray_has_hue_zero(model):
    gray = Rgb(0.5, 0.5, 0.5).to(model)
    assert gray.h == 0.0
    assert gray.hue == 0.0


def test_hwb_overfull_is_gray():
    assert close(Hwb(120.0, 0.6, 0.6).to(Rgb), (0.5, 0.5, 0.5), 1e-12)


def test_hsl_singular_lightness_collapses_to_gray():
    bright = Rgb(1.5, 0.5, 0.5).to(Hsl)
    assert close(bright, (0.0, 0.0, 1.0), 1e-12)
    assert close(bright.to(Rgb), (1.0, 1.0, 1.0), 1e-12)
    dark = Rgb(0.5, -0.5, 0.0).to(Hsl)
    assert close(dark.to(Rgb), (0.0, 0.0, 0.0), 1e-12)
    # one step off the singular lightness the value survives
    near = Rgb(1.5, 0.5, 0.4)
    assert close(near.to(Hsl).to(Rgb), near.components(), 1e-9)


def test_hsl_is_bound_to_its_space():
    p3 = Hsl[DISPLAY_P3](0.0, 1.0, 0.5)
    assert p3.SPEC is DISPLAY_P3
    rgb = p3.to(Rgb[DISPLAY_P3])
    assert close(rgb, (1.0, 0.0, 0.0), 1e-12)
    # P3 red lies outside sRGB
    assert not p3.in_gamut(SRGB)


def test_hsi_of_primaries_and_steel_blue():
    assert close(RED.to(Hsi), (0.0, 1.0, 1.0 / 3.0), 1e-12)
    assert close(Rgb(0.0, 1.0, 0.0).to(Hsi), (120.0, 1.0, 1.0 / 3.0), 1e-9)
    assert close(STEEL.to(Hsi), (210.0, 0.5, 0.4), 1e-9)


def test_hsi_hue_is_geometric():
    orange = Rgb(1.0, 0.25, 0.0)
    hue = orange.to(Hsi).h
    assert close(hue, math.degrees(math.atan2(math.sqrt(3.0) * 0.25, 1.75)), 1e-9)
    assert abs(hue - orange.to(Hsl).h) > 1.0
    assert close(orange.to(Hsi).to(Rgb), orange.components(), 1e-9)


@pytest.mark.parametrize("hue", [10.0, 45.0, 119.0, 130.0, 200.0, 250.0, 359.0])
def test_hsi_round_trips_every_sector(hue):
    hsi = Hsi(hue, 0.6, 0.45)
    assert close(hsi.to(Rgb).to(Hsi), hsi.components(), 1e-9)


def test_hsi_gray_and_zero_intensity():
    assert Rgb(0.5, 0.5, 0.5).to(Hsi).components() == (0.0, 0.0, 0.5)
    assert Rgb(0.5, 0.5, 0.5).to(Hsi).hue == 0.0
    # unequal channels with a zero mean have no finite saturation
    flat = Rgb(0.5, -0.5, 0.0).to(Hsi)
    assert flat.s == 0.0
    assert close(flat.to(Rgb), (0.0, 0.0, 0.0), 1e-12)


# -- HPLuv ----------------------------------------------------------------------

def test_hpluv_lightness_is_cie_l():
    hpluv = STEEL.to(Hpluv)
    assert close(hpluv.l, STEEL.to(Luv).l / 100.0, 1e-12)
    _, u, v = STEEL.to(Luv).components()
    assert close(hpluv.h, math.degrees(math.atan2(v, u)) % 360.0, 1e-9)


def test_hpluv_gray_has_no_saturation():
    gray = Rgb(0.5, 0.5, 0.5).to(Hpluv)
    assert close(gray.s, 0.0, 1e-9)
    assert gray.hue == 0.0
    assert gray.with_hue_rotated_by(90.0) == gray


def test_max_safe_chroma_bounds():
    assert max_safe_chroma(0.0, SRGB) == 0.0
    assert max_safe_chroma(100.0, SRGB) == 0.0
    assert max_safe_chroma(50.0, SRGB) > 0.0
    assert max_safe_chroma(50.0, DISPLAY_P3) >= max_safe_chroma(50.0, SRGB)


@pytest.mark.parametrize("lightness", [0.05, 0.3, 0.6, 0.95])
def test_full_hpluv_saturation_stays_in_gamut_at_every_hue(lightness):
    for hue in range(0, 360, 5):
        assert Hpluv(float(hue), 1.0, lightness).in_gamut(), hue


def test_hpluv_bound_is_tight():
    outside = [h for h in range(360) if not Hpluv(float(h), 1.05, 0.6).in_gamut()]
    assert outside


def test_hpluv_is_bound_to_its_space():
    p3 = Hpluv[DISPLAY_P3]
    assert p3.SPEC is DISPLAY_P3
    for hue in range(0, 360, 30):
        assert p3(float(hue), 1.0, 0.5).in_gamut(), hue


def test_shortcut_conversions_follow_the_space():
    assert type(STEEL.to_hsi()) is Hsi
    assert type(STEEL.to_hpluv(DISPLAY_P3)) is Hpluv[DISPLAY_P3]
    assert close(STEEL.to_hsi().to(Rgb), STEEL.components(), 1e-9)


# -- subtractive ------------------------------------------------------------------

def test_cmy_and_cmyk():
    assert close(STEEL.to(Cmy), (0.8, 0.6, 0.4), 1e-12)
    assert close(STEEL.to(Cmyk), (2.0 / 3.0, 1.0 / 3.0, 0.0, 0.4), 1e-12)
    assert close(RED.to(Cmyk), (0.0, 1.0, 1.0, 0.0), 1e-12)


def test_cmyk_of_black():
    assert Rgb(0.0, 0.0, 0.0).to(Cmyk).components() == (0.0, 0.0, 0.0, 1.0)
    assert close(Cmyk(0.3, 0.3, 0.3, 1.0).to(Rgb), (0.0, 0.0, 0.0), 0.0)


def test_cmy_cmyk_native_edge():
    cmyk = Cmy(0.8, 0.6, 0.4).to(Cmyk)
    assert close(cmyk.to(Cmy), (0.8, 0.6, 0.4), 1e-12)


# -- construction -----------------------------------------------------------------

def test_wrong_component_count():
    with pytest.raises(ValueError):
        Lab(1.0, 2.0)
    with pytest.raises(ValueError):
        Cmyk(0.1, 0.2, 0.3)


def test_alpha_must_be_in_unit_range():
    with pytest.raises(ValueError):
        Rgb(0.1, 0.2, 0.3, alpha=1.5)
    with pytest.raises(ValueError):
        RED.with_alpha(-0.1)


def test_non_numeric_component():
    with pytest.raises(TypeError):
        Lab("50", 0, 0)
