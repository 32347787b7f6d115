"""
Tests for the rotation catalog.
"""

from itertools import permutations, product

import numpy as np
import pytest

from scanner_registration.geometry.points import Point
from scanner_registration.geometry.rotations import (
    IDENTITY,
    ROTATIONS,
    Axis,
    AxisSign,
    RotationMatrix,
    Sign,
    enumerate_rotations,
)


def _key(rotation: RotationMatrix):
    return tuple(map(tuple, rotation.as_array()))


def test_catalog_has_24_distinct_rotations():
    assert len(ROTATIONS) == 24
    assert len(set(ROTATIONS)) == 24
    assert len({_key(r) for r in ROTATIONS}) == 24


def test_enumeration_is_deterministic():
    assert tuple(enumerate_rotations()) == ROTATIONS
    assert IDENTITY in ROTATIONS


def test_every_rotation_is_proper():
    for rotation in ROTATIONS:
        assert rotation.determinant() == 1
        assert round(np.linalg.det(rotation.as_array())) == 1
        m = rotation.as_array()
        np.testing.assert_array_equal(m @ m.T, np.eye(3, dtype=np.int64))


def test_catalog_is_exactly_the_proper_signed_permutations():
    proper = set()
    for perm in permutations(range(3)):
        for signs in product((1, -1), repeat=3):
            m = np.zeros((3, 3), dtype=np.int64)
            for row, (col, s) in enumerate(zip(perm, signs)):
                m[row, col] = s
            if round(np.linalg.det(m)) == 1:
                proper.add(tuple(map(tuple, m)))
    assert len(proper) == 24
    assert {_key(r) for r in ROTATIONS} == proper


def test_closure_under_composition():
    catalog = set(ROTATIONS)
    for a in ROTATIONS:
        for b in ROTATIONS:
            assert a.compose(b) in catalog


def test_composition_matches_sequential_application():
    p = Point(3, -7, 11)
    for a in ROTATIONS[::5]:
        for b in ROTATIONS:
            assert a.compose(b).apply(p) == a.apply(b.apply(p))
            np.testing.assert_array_equal(a.compose(b).as_array(), a.as_array() @ b.as_array())


def test_inverse_is_in_catalog():
    catalog = set(ROTATIONS)
    for rotation in ROTATIONS:
        inverse = rotation.inverse()
        assert inverse in catalog
        assert rotation.compose(inverse) == IDENTITY
        assert inverse.compose(rotation) == IDENTITY


def test_apply_agrees_with_matrix_form():
    p = Point(5, -2, 9)
    for rotation in ROTATIONS:
        expected = rotation.as_array() @ np.array(p.as_tuple())
        assert rotation(p).as_tuple() == tuple(int(v) for v in expected)


def test_apply_is_pure():
    p = Point(1, 2, 3)
    rotation = RotationMatrix((
        AxisSign(Axis.Y, Sign.POSITIVE),
        AxisSign(Axis.X, Sign.NEGATIVE),
        AxisSign(Axis.Z, Sign.POSITIVE),
    ))
    assert rotation.apply(p) == Point(2, -1, 3)
    assert p == Point(1, 2, 3)
    assert str(rotation) == "(+y, -x, +z)"


def test_sign_multiplication():
    assert Sign.POSITIVE * Sign.POSITIVE is Sign.POSITIVE
    assert Sign.NEGATIVE * Sign.NEGATIVE is Sign.POSITIVE
    assert Sign.POSITIVE * Sign.NEGATIVE is Sign.NEGATIVE


def test_reflection_has_negative_determinant():
    mirror = RotationMatrix((
        AxisSign(Axis.X, Sign.NEGATIVE),
        AxisSign(Axis.Y, Sign.POSITIVE),
        AxisSign(Axis.Z, Sign.POSITIVE),
    ))
    assert mirror.determinant() == -1
    assert mirror not in ROTATIONS


def test_repeated_axis_is_rejected():
    broken = RotationMatrix((
        AxisSign(Axis.X, Sign.POSITIVE),
        AxisSign(Axis.X, Sign.POSITIVE),
        AxisSign(Axis.Z, Sign.POSITIVE),
    ))
    with pytest.raises(ValueError):
        broken.determinant()
