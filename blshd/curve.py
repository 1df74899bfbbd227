#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BLS12-381 G1 group operations.

This is the only module talking to the py_ecc primitives:
public keys are G1 points serialized in the 48 bytes ZCash compressed
format, private keys are scalars modulo the group order n.
"""

from typing import Iterable

from py_ecc.bls.g2_primitives import G1_to_pubkey, pubkey_to_G1, subgroup_check
from py_ecc.optimized_bls12_381 import (
    G1,
    Z1,
    add,
    b,
    curve_order,
    eq,
    is_inf,
    is_on_curve,
    multiply,
)

from blshd.alias import G1Point, Octets
from blshd.config import PUB_KEY_SIZE
from blshd.exceptions import InvalidEncodingError
from blshd.utils import bytes_from_octets

# order of the G1 subgroup, i.e. size of the private scalar field
n = curve_order

INF = Z1
GENERATOR = G1


def mult(m: int, Q: G1Point = GENERATOR) -> G1Point:
    "Scalar multiplication of a G1 point (the generator by default)."
    return multiply(Q, m % n)


def add_points(P: G1Point, Q: G1Point) -> G1Point:
    return add(P, Q)


def sum_points(points: Iterable[G1Point]) -> G1Point:
    result = INF
    for P in points:
        result = add(result, P)
    return result


def points_equal(P: G1Point, Q: G1Point) -> bool:
    "Group element equality, independent of the projective representation."
    return eq(P, Q)


def is_infinity(P: G1Point) -> bool:
    return is_inf(P)


def require_in_group(P: G1Point) -> None:
    if not is_on_curve(P, b):
        raise InvalidEncodingError("point not on curve")
    if not subgroup_check(P):
        raise InvalidEncodingError("point not in the G1 subgroup")


def bytes_from_point(P: G1Point) -> bytes:
    "Return the canonical 48 bytes compressed encoding of a G1 point."
    return bytes(G1_to_pubkey(P))


def point_from_octets(pub_key: Octets) -> G1Point:
    """Return the G1 point encoded by 48 compressed bytes.

    The point is checked to be on curve and in the prime order subgroup.
    """

    pub_key = bytes_from_octets(pub_key, PUB_KEY_SIZE)
    try:
        P = pubkey_to_G1(pub_key)
    except ValueError as e:
        err_msg = f"invalid G1 point encoding: {pub_key.hex()}"
        raise InvalidEncodingError(err_msg) from e
    require_in_group(P)
    return P


def scalar_from_digest(digest: bytes) -> int:
    "Reduce a hash digest, read as big endian integer, modulo n."
    return int.from_bytes(digest, byteorder="big", signed=False) % n
