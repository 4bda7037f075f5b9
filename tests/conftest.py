# -*- coding: utf-8 -*-
"""
Swatch: Colorimetric computation across color models
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: conftest.py — Shared fixtures for the test suite.
"""

import pytest

import swatch_adaptation as sa


@pytest.fixture
def restore_transforms():
    """Re-enables every adaptation transform after the test."""
    yield
    sa.set_enabled_transforms(None)


def close(actual, expected, tol=1e-6):
    """Component-wise ``pytest.approx`` for color values and plain triples."""
    if isinstance(actual, (int, float)):
        return actual == pytest.approx(expected, abs=tol)
    values = actual.components() if hasattr(actual, "components") else tuple(actual)
    return values == pytest.approx(tuple(expected), abs=tol)
