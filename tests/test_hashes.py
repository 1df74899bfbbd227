#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `blshd.hashes` module."

import hashlib
import hmac

from blshd.hashes import (
    AGGREGATION_SET_TAG,
    AGGREGATION_WEIGHT_TAG,
    hmac_sha256,
    hmac_sha256_pair,
    tagged_hash,
)


def test_hmac_sha256_pair() -> None:
    key = b"BLS HD seed"
    msg = bytes(range(32))
    left, right = hmac_sha256_pair(key, msg)
    assert left == hmac.new(key, msg + b"\x00", hashlib.sha256).digest()
    assert right == hmac.new(key, msg + b"\x01", hashlib.sha256).digest()
    assert left == hmac_sha256(key, msg + b"\x00")
    assert left != right
    assert len(left) == len(right) == 32


def test_tagged_hash() -> None:
    tag = b"BIP0340/challenge"
    tag_hash = hashlib.sha256(tag).digest()
    m = b"message"
    assert tagged_hash(tag, m) == hashlib.sha256(tag_hash + tag_hash + m).digest()

    # aggregation tags are domain separated
    assert AGGREGATION_SET_TAG != AGGREGATION_WEIGHT_TAG
    assert tagged_hash(AGGREGATION_SET_TAG, m) != tagged_hash(AGGREGATION_WEIGHT_TAG, m)
