#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from io import BytesIO
from typing import Tuple, Union

from py_ecc.optimized_bls12_381 import FQ

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "a4 9b 0d 7e ..." (a serialized public key, with blanks)
# "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
#
# use blshd.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for serialized public keys (48 bytes),
# private keys (32 bytes), chain codes (32 bytes), seeds, etc.
Octets = Union[bytes, str]

# binary data, usually to be consumed as byte stream,
# but possibly provided as Octets too
BinaryData = Union[BytesIO, Octets]

# G1 point in projective coordinates, as used by py_ecc.
# The infinity point has z == 0; use blshd.curve.is_infinity to check it.
G1Point = Tuple[FQ, FQ, FQ]
