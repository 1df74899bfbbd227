#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""HD derivation path.

A derivation path can be represented as:

- "m/12381h/0'/1H/0/10" or "12381h/0'/1H/0/10" string
- sequence of integer indexes (even a single int)
- bytes (multiples of 4-bytes little endian index)
"""

from typing import List, Optional, Sequence, Union

from blshd.alias import Octets
from blshd.config import HARDENED, MAX_DEPTH, MAX_INDEX
from blshd.exceptions import BLSHDValueError, DepthExceededError

# default hardening symbol among the possible ones: "h", "H", "'"
_HARDENING = "h"


def int_from_index_str(s: str) -> int:

    s = s.strip().lower()
    if not s:
        raise BLSHDValueError("empty index")
    hardened = False
    if s[-1] in ("'", "h"):
        s = s[:-1]
        hardened = True

    try:
        index = int(s)
    except ValueError as e:
        raise BLSHDValueError(f"invalid index: '{s}'") from e
    if not 0 <= index < HARDENED:
        raise BLSHDValueError(f"invalid index: {index}")
    return index + (HARDENED if hardened else 0)


def str_from_index_int(i: int, hardening: str = _HARDENING) -> str:

    if hardening not in ("'", "h", "H"):
        raise BLSHDValueError(f"invalid hardening symbol: {hardening}")
    if not 0 <= i <= MAX_INDEX:
        raise BLSHDValueError(f"invalid index: {i}")
    if i < HARDENED:
        return str(i)
    return str(i - HARDENED) + hardening


def _indexes_from_der_path_str(der_path: str, skip_m: bool = True) -> List[int]:

    steps = [x.strip().lower() for x in der_path.split("/")]
    if skip_m and steps[0] == "m":
        steps = steps[1:]

    return [int_from_index_str(s) for s in steps if s != ""]


DerPath = Union[str, Sequence[int], int, bytes]


def indexes_from_der_path(der_path: DerPath) -> List[int]:

    if isinstance(der_path, str):
        indexes = _indexes_from_der_path_str(der_path)
    elif isinstance(der_path, int):
        indexes = [der_path]
    elif isinstance(der_path, bytes):
        if len(der_path) % 4 != 0:
            err_msg = f"index are not a multiple of 4-bytes: {len(der_path)}"
            raise BLSHDValueError(err_msg)
        indexes = [
            int.from_bytes(der_path[n : n + 4], byteorder="little", signed=False)
            for n in range(0, len(der_path), 4)
        ]
    else:  # Iterable[int]
        indexes = [int(i) for i in der_path]

    if len(indexes) > MAX_DEPTH:
        err_msg = f"depth greater than {MAX_DEPTH}: {len(indexes)}"
        raise DepthExceededError(err_msg)
    for i in indexes:
        if not 0 <= i <= MAX_INDEX:
            raise BLSHDValueError(f"invalid index: {i}")
    return indexes


def str_from_der_path(
    der_path: DerPath,
    master_fingerprint: Optional[Union[int, Octets]] = None,
    hardening: str = _HARDENING,
) -> str:
    """Return the string representation of a derivation path.

    If a master fingerprint is provided (as int, bytes, or hex-string),
    it replaces the leading "m".
    """

    indexes = indexes_from_der_path(der_path)
    result = "/".join(str_from_index_int(i, hardening) for i in indexes)

    if master_fingerprint is None:
        first_element = "m"
    elif isinstance(master_fingerprint, int):
        first_element = f"{master_fingerprint:08x}"
    elif isinstance(master_fingerprint, str):
        first_element = master_fingerprint.strip()
    else:
        first_element = master_fingerprint.hex()
    if first_element != "m" and len(first_element) != 8:
        err_msg = f"invalid master fingerprint length: {first_element}"
        raise BLSHDValueError(err_msg)

    return first_element + ("/" + result if result else "")


def bytes_from_der_path(der_path: DerPath) -> bytes:
    indexes = indexes_from_der_path(der_path)
    result = [i.to_bytes(4, byteorder="little", signed=False) for i in indexes]
    return b"".join(result)
