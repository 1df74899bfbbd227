#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `blshd.curve` module."

import pytest
from py_ecc.bls.g2_primitives import G1_to_pubkey, subgroup_check
from py_ecc.optimized_bls12_381 import FQ, field_modulus

from blshd.alias import G1Point
from blshd.curve import (
    GENERATOR,
    INF,
    add_points,
    bytes_from_point,
    is_infinity,
    mult,
    n,
    point_from_octets,
    points_equal,
    require_in_group,
    scalar_from_digest,
    sum_points,
)
from blshd.exceptions import InvalidEncodingError


def _point_outside_subgroup() -> G1Point:
    "Return the first on-curve point (by x) outside of the prime order subgroup."
    x = 0
    while True:
        y2 = (x**3 + 4) % field_modulus
        y = pow(y2, (field_modulus + 1) // 4, field_modulus)
        if y * y % field_modulus == y2:
            P = (FQ(x), FQ(y), FQ(1))
            if not subgroup_check(P):
                return P
        x += 1


def test_group_operations() -> None:
    assert is_infinity(INF)
    assert not is_infinity(GENERATOR)
    assert is_infinity(mult(0))
    assert is_infinity(mult(n))
    assert points_equal(mult(1), GENERATOR)
    assert points_equal(mult(n + 1), GENERATOR)
    assert points_equal(mult(-1), mult(n - 1))
    assert is_infinity(add_points(mult(5), mult(n - 5)))
    assert points_equal(mult(2, mult(3)), mult(6))
    assert points_equal(sum_points([mult(1), mult(2), mult(3)]), mult(6))
    assert is_infinity(sum_points([]))


def test_encoding() -> None:
    for P in (INF, GENERATOR, mult(2), mult(n - 1)):
        P_bytes = bytes_from_point(P)
        assert len(P_bytes) == 48
        assert points_equal(point_from_octets(P_bytes), P)
        assert points_equal(point_from_octets(P_bytes.hex()), P)

    # the encoding does not depend on the projective representation
    assert bytes_from_point(mult(3)) == bytes_from_point(add_points(mult(1), mult(2)))


def test_require_in_group() -> None:
    require_in_group(GENERATOR)
    require_in_group(INF)

    with pytest.raises(InvalidEncodingError, match="point not on curve"):
        require_in_group((FQ(1), FQ(1), FQ(1)))

    # on curve, but with a cofactor component
    P = _point_outside_subgroup()
    with pytest.raises(InvalidEncodingError, match="not in the G1 subgroup"):
        require_in_group(P)
    with pytest.raises(InvalidEncodingError, match="not in the G1 subgroup"):
        point_from_octets(G1_to_pubkey(P))

    with pytest.raises(InvalidEncodingError, match="invalid size: "):
        point_from_octets(b"\xc0" + b"\x00" * 46)


def test_scalar_from_digest() -> None:
    assert scalar_from_digest(b"\x00" * 32) == 0
    assert scalar_from_digest(n.to_bytes(32, byteorder="big")) == 0
    assert scalar_from_digest((n + 1).to_bytes(32, byteorder="big")) == 1
    assert scalar_from_digest(b"\xff" * 32) == (2**256 - 1) % n
