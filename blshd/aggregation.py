#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Public key aggregation.

Insecure aggregation is the plain sum of the public keys:
it is vulnerable to rogue-key attacks unless every key comes
with a proof of possession (or another mitigation) verified by the caller.

Secure aggregation weights each key with an exponent bound to the whole
key set, so that a key chosen after seeing the others cannot cancel them:

    L = H_set(sorted serialized keys)
    e_i = H_weight(L || serialized pk_i) mod n
    aggregate = sum(e_i * pk_i)

Both H_set and H_weight are tagged SHA256 hashes.
Sorting makes the result independent of the input order.
By convention a single key has weight 1, i.e. it aggregates to itself.
"""

import logging
from typing import List, Sequence

from blshd.curve import mult, scalar_from_digest, sum_points
from blshd.exceptions import BLSHDTypeError, EmptyInputError
from blshd.hashes import AGGREGATION_SET_TAG, AGGREGATION_WEIGHT_TAG, tagged_hash
from blshd.keys import PublicKey

_LOGGER = logging.getLogger(__name__)


def _assert_valid_pub_keys(pub_keys: Sequence[PublicKey]) -> None:
    if not pub_keys:
        raise EmptyInputError("no public keys to aggregate")
    for pub_key in pub_keys:
        if not isinstance(pub_key, PublicKey):
            err_msg = f"not a PublicKey: {type(pub_key).__name__}"
            raise BLSHDTypeError(err_msg)


def aggregation_weights(pub_keys: Sequence[PublicKey]) -> List[int]:
    """Return the secure aggregation weights, in input order.

    The same weights, applied to the corresponding private keys,
    give the private key of the securely aggregated public key.
    """

    _assert_valid_pub_keys(pub_keys)
    if len(pub_keys) == 1:
        return [1]

    serialized = [pub_key.serialize() for pub_key in pub_keys]
    set_hash = tagged_hash(AGGREGATION_SET_TAG, b"".join(sorted(serialized)))
    return [
        scalar_from_digest(tagged_hash(AGGREGATION_WEIGHT_TAG, set_hash + pk))
        for pk in serialized
    ]


def aggregate_secure(pub_keys: Sequence[PublicKey]) -> PublicKey:
    "Aggregate public keys, with rogue-key resistant weights."

    weights = aggregation_weights(pub_keys)
    if len(pub_keys) == 1:
        return pub_keys[0]

    points = (mult(e, pub_key.point) for e, pub_key in zip(weights, pub_keys))
    result = PublicKey(sum_points(points), check_validity=False)
    _LOGGER.debug(
        "securely aggregated %d public keys into %08x",
        len(pub_keys),
        result.fingerprint,
    )
    return result


def aggregate_insecure(pub_keys: Sequence[PublicKey]) -> PublicKey:
    """Aggregate public keys as their plain sum.

    No rogue-key mitigation is performed:
    the caller must have verified a proof of possession for every key.
    """

    _assert_valid_pub_keys(pub_keys)
    result = PublicKey(
        sum_points(pub_key.point for pub_key in pub_keys), check_validity=False
    )
    _LOGGER.debug(
        "insecurely aggregated %d public keys into %08x",
        len(pub_keys),
        result.fingerprint,
    )
    return result
