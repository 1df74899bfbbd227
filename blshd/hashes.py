#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

Two distinct constructions are used, so that an HD derivation tweak
can never collide with an aggregation weight:

- HD derivation uses HMAC-SHA256 keyed by the seed key or the chain code;
- key aggregation uses BIP340-style tagged SHA256 hashes.
"""

import hashlib
import hmac
from typing import Tuple

AGGREGATION_SET_TAG = b"BLS-HD/aggregation/set"
AGGREGATION_WEIGHT_TAG = b"BLS-HD/aggregation/weight"


def hmac_sha256(key: bytes, msg: bytes) -> bytes:
    return hmac.new(key, msg, "sha256").digest()


def hmac_sha256_pair(key: bytes, msg: bytes) -> Tuple[bytes, bytes]:
    """Return the two HMAC-SHA256 of msg suffixed by 0x00 and by 0x01.

    The first one is meant to become a scalar, the second a chain code.
    """
    return hmac_sha256(key, msg + b"\x00"), hmac_sha256(key, msg + b"\x01")


def tagged_hash(tag: bytes, m: bytes) -> bytes:
    h1 = hashlib.sha256()
    h1.update(tag)
    tag_hash = h1.digest()

    h2 = hashlib.sha256()
    h2.update(tag_hash + tag_hash)

    # it could be sped up by storing the above midstate

    h2.update(m)
    return h2.digest()
