# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: test_matrix.py — Matrix3 algebra.
"""

import numpy as np
import pytest

from swatch_errors import ConfigurationError
from swatch_matrix import Matrix3
from swatch_scalar import Scalar

M = Matrix3([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])


def test_inverse_round_trip():
    assert (M @ M.inverse()).allclose(Matrix3.identity(), atol=1e-12)
    assert (M.inverse() @ M).allclose(Matrix3.identity(), atol=1e-12)


def test_inverse_is_cached():
    assert M.inverse() is M.inverse()
    assert M.inverse().inverse() is M


def test_singular_matrix_raises():
    singular = Matrix3([[1, 2, 3], [2, 4, 6], [0, 0, 1]])
    assert singular.is_singular()
    with pytest.raises(ConfigurationError):
        singular.inverse()


def test_apply_is_column_vector_product():
    v = (1.0, 0.0, 0.0)
    assert M.apply(v) == pytest.approx((0.4124564, 0.2126729, 0.0193339))
    assert M @ [1, 1, 1] == pytest.approx(tuple(M.to_array().sum(axis=1)))
    assert (1, 0, 0) @ M == pytest.approx((0.4124564, 0.3575761, 0.1804375))


def test_apply_accepts_scalars_and_arrays():
    assert M.apply((Scalar(1), Scalar(0), Scalar(0))) == M.apply(np.array([1.0, 0.0, 0.0]))


def test_apply_rejects_wrong_length():
    with pytest.raises(ValueError):
        M.apply((1.0, 2.0))


def test_shape_is_checked():
    with pytest.raises(ValueError):
        Matrix3([[1, 0], [0, 1]])


def test_constructors():
    assert Matrix3.diagonal((1, 2, 3))[1, 1] == 2.0
    assert Matrix3.diagonal((1, 2, 3))[0, 1] == 0.0
    cols = Matrix3.from_columns((1, 2, 3), (4, 5, 6), (7, 8, 9))
    assert cols.rows()[0] == (1.0, 4.0, 7.0)
    assert cols.transpose().rows()[0] == (1.0, 2.0, 3.0)


def test_immutable_storage():
    data = M.to_array()
    data[0, 0] = 99.0
    assert M[0, 0] == 0.4124564
    with pytest.raises(ValueError):
        M._data[0, 0] = 1.0


def test_elementwise_operators():
    two = Matrix3.identity() * 2
    assert two[2, 2] == 2.0
    assert (two + Matrix3.identity())[0, 0] == 3.0
    assert (two - Matrix3.identity())[1, 1] == 1.0
    assert (two / 4)[0, 0] == 0.5
    assert (-two)[0, 0] == -2.0
    assert 3 * Matrix3.identity() == Matrix3.diagonal((3, 3, 3))


def test_determinant():
    assert Matrix3.diagonal((2, 3, 4)).determinant() == pytest.approx(24.0)


def test_display():
    assert str(Matrix3.identity()).startswith("[[1.0000, 0.0000, 0.0000]")
    assert format(Matrix3.identity(), ".1").startswith("[[1.0, 0.0, 0.0]")
