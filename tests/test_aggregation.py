#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `blshd.aggregation` module."

import logging
from itertools import permutations

import pytest

from blshd.aggregation import (
    aggregate_insecure,
    aggregate_secure,
    aggregation_weights,
)
from blshd.curve import n
from blshd.exceptions import BLSHDTypeError, EmptyInputError
from blshd.extended_keys import ExtendedPrivateKey
from blshd.keys import PrivateKey, PublicKey

INF_HEX = "c0" + "00" * 47

SEED = bytes(range(32))


@pytest.fixture(scope="module")
def xprvs():
    master = ExtendedPrivateKey.from_seed(SEED)
    return [master.private_child(i) for i in range(3)]


def test_exceptions() -> None:

    for aggregate in (aggregate_secure, aggregate_insecure, aggregation_weights):
        with pytest.raises(EmptyInputError, match="no public keys to aggregate"):
            aggregate([])

        with pytest.raises(BLSHDTypeError, match="not a PublicKey: "):
            aggregate([PrivateKey(1).public_key(), b"\x00" * 48])  # type: ignore


def test_insecure() -> None:
    pub_keys = [PrivateKey(q).public_key() for q in (1, 2, 3)]
    assert aggregate_insecure(pub_keys) == PrivateKey(6).public_key()
    assert aggregate_insecure(pub_keys[:1]) == pub_keys[0]

    # rogue key cancelling out the honest one
    pub_key = PrivateKey(5).public_key()
    rogue_key = PrivateKey(n - 5).public_key()
    aggregated = aggregate_insecure([pub_key, rogue_key])
    assert aggregated.serialize().hex() == INF_HEX

    # secure aggregation is not fooled
    assert aggregate_secure([pub_key, rogue_key]).serialize().hex() != INF_HEX


def test_singleton_convention(xprvs) -> None:
    # a single key has weight 1: it aggregates to itself
    pub_key = xprvs[0].public_key
    assert aggregation_weights([pub_key]) == [1]
    assert aggregate_secure([pub_key]) == pub_key
    assert aggregate_secure([pub_key]) == aggregate_insecure([pub_key])


def test_secure_is_weighted(xprvs) -> None:
    pub_keys = [xprv.public_key for xprv in xprvs]
    weights = aggregation_weights(pub_keys)
    assert len(weights) == len(pub_keys)
    assert all(0 < e < n for e in weights)
    assert len(set(weights)) == len(weights)

    aggregated = aggregate_secure(pub_keys)
    assert aggregated != aggregate_insecure(pub_keys)

    # the same weights applied to the private keys
    q = sum(e * xprv.private_key.to_int() for e, xprv in zip(weights, xprvs))
    assert PrivateKey(q % n).public_key() == aggregated


def test_weights_bind_the_whole_set(xprvs) -> None:
    a, b, c = (xprv.public_key for xprv in xprvs)
    assert aggregation_weights([a, b])[0] != aggregation_weights([a, c])[0]

    # duplicate keys get the same weight
    e_1, e_2 = aggregation_weights([a, a])
    assert e_1 == e_2
    assert aggregate_secure([a, a]) != a


def test_order_independence(xprvs) -> None:
    pub_keys = [xprv.public_key for xprv in xprvs]
    secure = aggregate_secure(pub_keys)
    insecure = aggregate_insecure(pub_keys)
    for permutation in permutations(pub_keys):
        assert aggregate_secure(list(permutation)) == secure
        assert aggregate_insecure(list(permutation)) == insecure

    weights = dict(zip(pub_keys, aggregation_weights(pub_keys)))
    reversed_keys = pub_keys[::-1]
    assert aggregation_weights(reversed_keys) == [weights[k] for k in reversed_keys]


def test_inputs_are_not_modified(xprvs) -> None:
    pub_keys = [xprv.public_key for xprv in xprvs]
    serialized = [pub_key.serialize() for pub_key in pub_keys]
    aggregate_secure(pub_keys)
    aggregate_insecure(pub_keys)
    assert [pub_key.serialize() for pub_key in pub_keys] == serialized
    assert [PublicKey.from_bytes(s) for s in serialized] == pub_keys


def test_logging(xprvs, caplog) -> None:
    pub_keys = [xprv.public_key for xprv in xprvs]
    with caplog.at_level(logging.DEBUG, logger="blshd"):
        aggregated = aggregate_secure(pub_keys)
    assert f"securely aggregated 3 public keys into {aggregated.fingerprint:08x}" in (
        caplog.text
    )
