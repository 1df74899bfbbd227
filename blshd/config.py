#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""HD derivation parameters and constants."""

from dataclasses import dataclass

from blshd.exceptions import BLSHDTypeError, BLSHDValueError

# serialized sizes, in bytes
PUB_KEY_SIZE = 48
PRV_KEY_SIZE = 32
CHAIN_CODE_SIZE = 32

# indexes at or above this value are hardened
HARDENED = 0x80000000
MAX_INDEX = 0xFFFFFFFF
# depth is serialized as a single byte
MAX_DEPTH = 255


@dataclass(frozen=True)
class HDConfig:
    # extended key version, shared by private and public extended keys
    version: int = 1
    # HMAC key used to expand a seed into the master key
    seed_key: bytes = b"BLS HD seed"

    def __post_init__(self) -> None:
        if not isinstance(self.version, int):
            raise BLSHDTypeError("version is not an instance of int")
        if not 0 <= self.version <= MAX_INDEX:
            raise BLSHDValueError(f"invalid version: {self.version}")
        if not isinstance(self.seed_key, bytes):
            raise BLSHDTypeError("seed_key is not an instance of bytes")
        if not self.seed_key:
            raise BLSHDValueError("empty seed_key")


DEFAULT_CONFIG = HDConfig()
