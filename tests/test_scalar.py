# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: test_scalar.py — Scalar normalisation, arithmetic and display.
"""

import copy
import math
import pickle
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from swatch_scalar import Scalar, to_float


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, 3.0),
        (0.25, 0.25),
        (True, 1.0),
        (Fraction(1, 4), 0.25),
        (Decimal("0.5"), 0.5),
        (np.int8(-7), -7.0),
        (np.uint16(65535), 65535.0),
        (np.float32(0.5), 0.5),
        (np.float64(2.5), 2.5),
    ],
)
def test_heterogeneous_input_normalises_to_float(value, expected):
    s = Scalar(value)
    assert type(s.value) is float
    assert s.value == expected


@pytest.mark.parametrize("bad", ["1.0", None, 1 + 2j, [1.0]])
def test_non_real_input_is_rejected(bad):
    with pytest.raises(TypeError):
        Scalar(bad)
    with pytest.raises(TypeError):
        to_float(bad)


def test_scalar_wraps_scalar():
    assert Scalar(Scalar(1.5)).value == 1.5


def test_arithmetic_promotes_the_other_operand():
    a = Scalar(3)
    assert isinstance(a + 1, Scalar)
    assert (a + 1).value == 4.0
    assert (1 - a).value == -2.0
    assert (a * Fraction(1, 2)).value == 1.5
    assert (6 / a) == 2.0
    assert (a / np.int32(6)).value == 0.5
    assert (a ** 2).value == 9.0
    assert (2 ** a).value == 8.0
    assert (Scalar(7) // 2).value == 3.0
    assert (Scalar(-1) % 360).value == 359.0
    assert (-a).value == -3.0
    assert abs(Scalar(-2)).value == 2.0


def test_division_follows_ieee():
    assert Scalar(1) / 0 == math.inf
    assert Scalar(-1) / 0 == -math.inf
    assert math.isnan((Scalar(0) / 0).value)
    assert math.isnan((Scalar(1) % 0).value)


def test_oversized_input_saturates_to_infinity():
    assert Scalar(10**400).value == math.inf
    assert Scalar(-(10**400)).value == -math.inf
    assert to_float(Fraction(10**400, 3)) == math.inf
    assert to_float(Decimal("-1e400")) == -math.inf
    assert (Scalar(1) + 10**400).value == math.inf


def test_nan_is_never_equal():
    nan = Scalar(float("nan"))
    assert nan != nan
    assert not nan == nan
    assert not nan < 1.0
    assert not nan >= 1.0


def test_comparisons_with_plain_numbers():
    assert Scalar(1) == 1
    assert Scalar(1) < 1.5
    assert Scalar(2) >= np.float32(2.0)
    assert Scalar(0.5) == Fraction(1, 2)


def test_unsupported_operand_returns_not_implemented():
    with pytest.raises(TypeError):
        Scalar(1) + "a"
    assert (Scalar(1) == "a") is False


def test_hash_matches_float():
    assert hash(Scalar(1.5)) == hash(1.5)
    assert {Scalar(2.0): "x"}[Scalar(2)] == "x"


def test_immutable():
    s = Scalar(1.0)
    with pytest.raises(AttributeError):
        s._value = 2.0
    assert copy.deepcopy(s) is s
    assert pickle.loads(pickle.dumps(s)) == s


def test_const_requires_float():
    assert Scalar.const(0.5).value == 0.5
    with pytest.raises(TypeError):
        Scalar.const(1)


def test_clamp_and_lerp():
    assert Scalar(1.5).clamp(0, 1) == 1.0
    assert Scalar(-0.5).clamp(0, 1) == 0.0
    assert math.isnan(Scalar(float("nan")).clamp(0, 1).value)
    assert Scalar(10).lerp(20, 0.25) == 12.5
    assert Scalar(10).lerp(20, 1.5) == 25.0


def test_display_uses_fixed_precision():
    assert str(Scalar(0.5)) == "0.5000"
    assert format(Scalar(1 / 3), ".2") == "0.33"
    assert format(Scalar(1 / 3), ".3f") == "0.333"
    assert format(Scalar(12.5), "e") == "1.250000e+01"
    assert repr(Scalar(0.5)) == "Scalar(0.5)"


def test_conversions():
    s = Scalar(2.75)
    assert float(s) == 2.75
    assert int(s) == 2
    assert round(s, 1) == 2.8
    assert bool(Scalar(0)) is False
