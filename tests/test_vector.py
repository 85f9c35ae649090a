"""
Tests for core/vector.py
"""

import math

import numpy as np
import pytest

from apiary.core.vector import (
    constrain,
    distance,
    from_angle,
    heading,
    limit,
    magnitude,
    map_range,
    set_mag,
    vec,
)


class TestVectorBasics:

    def test_vec_is_float_array(self):
        v = vec(1, 2)
        assert v.dtype == np.float64
        assert v.shape == (2,)

    def test_magnitude_and_distance(self):
        assert magnitude(vec(3.0, 4.0)) == pytest.approx(5.0)
        assert distance(vec(1.0, 1.0), vec(4.0, 5.0)) == pytest.approx(5.0)

    def test_heading(self):
        assert heading(vec(0.0, 1.0)) == pytest.approx(math.pi / 2)
        assert heading(vec(0.0, 0.0)) == 0.0

    def test_from_angle_is_unit(self):
        v = from_angle(math.pi / 3)
        assert magnitude(v) == pytest.approx(1.0)
        assert heading(v) == pytest.approx(math.pi / 3)


class TestMagnitudeOps:

    def test_set_mag(self):
        v = set_mag(vec(3.0, 4.0), 10.0)
        np.testing.assert_allclose(v, [6.0, 8.0])

    def test_set_mag_zero_vector_stays_zero(self):
        np.testing.assert_array_equal(set_mag(vec(), 5.0), [0.0, 0.0])

    def test_set_mag_negative_flips(self):
        np.testing.assert_allclose(set_mag(vec(2.0, 0.0), -1.0), [-1.0, 0.0])

    def test_limit_shrinks_long_vectors(self):
        v = limit(vec(30.0, 40.0), 5.0)
        assert magnitude(v) == pytest.approx(5.0)
        np.testing.assert_allclose(v, [3.0, 4.0])

    def test_limit_keeps_short_vectors(self):
        np.testing.assert_array_equal(limit(vec(0.3, 0.4), 5.0), [0.3, 0.4])

    def test_limit_non_positive_is_zero(self):
        np.testing.assert_array_equal(limit(vec(1.0, 1.0), 0.0), [0.0, 0.0])

    def test_limit_returns_copy(self):
        v = vec(0.1, 0.1)
        out = limit(v, 1.0)
        out[0] = 99.0
        assert v[0] == 0.1


class TestMapRange:

    def test_linear_inside_range(self):
        assert map_range(50, 20, 80, 3, 6) == pytest.approx(4.5)
        assert map_range(55, 10, 100, 0, 9) == pytest.approx(4.5)

    def test_clamps_outside_range(self):
        assert map_range(5, 10, 100, 0, 4) == 0.0
        assert map_range(500, 10, 100, 0, 4) == 4.0
        assert map_range(100, 20, 80, 3, 6) == 6.0

    def test_reversed_ranges(self):
        assert map_range(0, 1000, 0, 100, 1) == pytest.approx(1.0)
        assert map_range(500, 1000, 0, 100, 1) == pytest.approx(50.5)
        assert map_range(2000, 1000, 0, 100, 1) == pytest.approx(100.0)

    def test_degenerate_source_range(self):
        assert map_range(7, 3, 3, 1, 2) == 1.0

    def test_constrain(self):
        assert constrain(5, 1, 3) == 3
        assert constrain(-5, 1, 3) == 1
        assert constrain(2, 1, 3) == 2
