"""
===============================================================================
ORIENTATION - Vec3 Test Suite
===============================================================================
Tests for the 3-vector value type consumed by rotation and axis-angle
construction. Every operation must return a new vector and leave its
operands untouched.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from orientation.vector import Vec3


@pytest.fixture
def a():
    return Vec3(1.0, 2.0, 3.0)


@pytest.fixture
def b():
    return Vec3(-4.0, 0.5, 2.0)


class TestConstruction:

    def test_default_is_zero(self):
        assert Vec3() == Vec3.zero() == Vec3(0.0, 0.0, 0.0)

    def test_accessors(self, a):
        assert (a.x, a.y, a.z) == (1.0, 2.0, 3.0)
        assert list(a) == [1.0, 2.0, 3.0]

    def test_from_array(self):
        assert Vec3.from_array(np.array([1, 2, 3])) == Vec3(1.0, 2.0, 3.0)
        assert Vec3.from_array((0.5, -1.0, 2.0)) == Vec3(0.5, -1.0, 2.0)

    @pytest.mark.parametrize("values", [[1.0, 2.0], [1.0, 2.0, 3.0, 4.0], []])
    def test_from_array_wrong_length_raises(self, values):
        with pytest.raises(ValueError):
            Vec3.from_array(values)

    def test_to_array_is_a_copy(self, a):
        arr = a.to_array()
        arr[0] = 99.0
        assert a.x == 1.0


class TestArithmetic:

    def test_dot(self, a, b):
        assert_allclose(a.dot(b), -4.0 + 1.0 + 6.0, atol=0.0)
        assert_allclose(Vec3.dot(a, b), a.dot(b), atol=0.0)

    def test_cross(self):
        x_hat = Vec3(1.0, 0.0, 0.0)
        y_hat = Vec3(0.0, 1.0, 0.0)
        assert x_hat.cross(y_hat) == Vec3(0.0, 0.0, 1.0)
        assert Vec3.cross(y_hat, x_hat) == Vec3(0.0, 0.0, -1.0)

    def test_cross_is_perpendicular(self, a, b):
        c = a.cross(b)
        assert_allclose(c.dot(a), 0.0, atol=1e-14)
        assert_allclose(c.dot(b), 0.0, atol=1e-14)

    def test_scale_add_sub(self, a, b):
        assert a.scale(2.0) == Vec3(2.0, 4.0, 6.0)
        assert a.add(b) == Vec3(-3.0, 2.5, 5.0)
        assert a.sub(b) == Vec3(5.0, 1.5, 1.0)

    def test_operators(self, a, b):
        assert a + b == a.add(b)
        assert a - b == a.sub(b)
        assert a * 2 == 2 * a == a.scale(2.0)
        assert -a == Vec3(-1.0, -2.0, -3.0)

    def test_operands_unchanged(self, a, b):
        a.add(b).scale(3.0)
        a.cross(b)
        assert a == Vec3(1.0, 2.0, 3.0)
        assert b == Vec3(-4.0, 0.5, 2.0)

    def test_norm_and_normalized(self):
        v = Vec3(3.0, 4.0, 0.0)
        assert_allclose(v.norm(), 5.0, atol=0.0)
        assert_allclose(v.normalized().to_array(), [0.6, 0.8, 0.0], atol=1e-15)

    def test_normalize_zero_raises(self):
        with pytest.raises(ValueError):
            Vec3.zero().normalized()

    def test_unsupported_operand(self, a):
        with pytest.raises(TypeError):
            a + 1.0

    def test_equality_is_exact(self):
        assert Vec3(1.0, 2.0, 3.0) == Vec3(1.0, 2.0, 3.0)
        assert Vec3(1.0, 2.0, 3.0) != Vec3(1.0, 2.0, 3.0 + 1e-12)

    def test_equal_vectors_hash_alike(self):
        assert hash(Vec3(1.0, 2.0, 3.0)) == hash(Vec3.from_array([1, 2, 3]))
        assert len({Vec3(1.0, 2.0, 3.0), Vec3.from_array([1, 2, 3])}) == 1
