#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are only meant to discriminate between Exceptions being raised
by blshd from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the blshd versions are derived.
"""


class BLSHDValueError(ValueError):
    pass


class BLSHDTypeError(TypeError):
    pass


class BLSHDRuntimeError(RuntimeError):
    pass


class InvalidEncodingError(BLSHDValueError):
    "Malformed or wrongly sized input, or a point not in the G1 subgroup."


class EmptyInputError(BLSHDValueError):
    "Aggregation of an empty list of keys."


class HardenedChildFromPublicKeyError(BLSHDValueError):
    "Hardened derivation attempted without private key material."


class DepthExceededError(BLSHDValueError):
    "Derivation beyond the 255 levels allowed by the one byte depth."


class KeyReleasedError(BLSHDRuntimeError):
    "Private key material used after it has been released."
