#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BLS public key, private key, and chain code value types.

A PublicKey is a G1 point, serialized as 48 compressed bytes;
its fingerprint is the big endian int of the first four serialized bytes.

A PrivateKey is a non-zero scalar modulo the G1 order n, serialized
as 32 big endian bytes. The scalar is kept in a mutable buffer that is
zeroed by release(), either explicitly, at the end of a with block,
or when the key is garbage collected.
"""

import hmac
from types import TracebackType
from typing import Any, Optional, Type, TypeVar

from blshd.alias import G1Point, Octets
from blshd.config import CHAIN_CODE_SIZE, PRV_KEY_SIZE
from blshd.curve import bytes_from_point, mult, n, point_from_octets
from blshd.curve import points_equal, require_in_group
from blshd.exceptions import BLSHDTypeError, InvalidEncodingError, KeyReleasedError
from blshd.utils import bytes_from_octets

_PublicKey = TypeVar("_PublicKey", bound="PublicKey")
_PrivateKey = TypeVar("_PrivateKey", bound="PrivateKey")
_ChainCode = TypeVar("_ChainCode", bound="ChainCode")


class PublicKey:
    __slots__ = ("_point", "_bytes")

    def __init__(self, point: G1Point, check_validity: bool = True) -> None:
        if check_validity:
            require_in_group(point)
        self._point = point
        self._bytes = bytes_from_point(point)

    @classmethod
    def from_bytes(cls: Type[_PublicKey], data: Octets) -> _PublicKey:
        "Return a PublicKey from its 48 bytes (or hex-string) encoding."
        return cls(point_from_octets(data), check_validity=False)

    @property
    def point(self) -> G1Point:
        return self._point

    def serialize(self) -> bytes:
        return self._bytes

    @property
    def fingerprint(self) -> int:
        return int.from_bytes(self._bytes[:4], byteorder="big", signed=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return points_equal(self._point, other._point)

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return f"PublicKey({self._bytes.hex()})"

    # immutable: copies can share the same instance
    def __copy__(self: _PublicKey) -> _PublicKey:
        return self

    def __deepcopy__(self: _PublicKey, memo: Any) -> _PublicKey:
        return self


class PrivateKey:
    __slots__ = ("_secret", "_released")

    def __init__(self, secret: int) -> None:
        if not isinstance(secret, int):
            raise BLSHDTypeError("private key is not an instance of int")
        if not 0 < secret < n:
            raise InvalidEncodingError("invalid private key not in 1..n-1")
        self._released = False
        self._secret = bytearray(
            secret.to_bytes(PRV_KEY_SIZE, byteorder="big", signed=False)
        )

    @classmethod
    def from_bytes(cls: Type[_PrivateKey], data: Octets) -> _PrivateKey:
        "Return a PrivateKey from its 32 bytes (or hex-string) encoding."
        data = bytes_from_octets(data, PRV_KEY_SIZE)
        return cls(int.from_bytes(data, byteorder="big", signed=False))

    @property
    def released(self) -> bool:
        return self._released

    def _require_not_released(self) -> None:
        if self._released:
            raise KeyReleasedError("private key already released")

    def serialize(self) -> bytes:
        self._require_not_released()
        return bytes(self._secret)

    def to_int(self) -> int:
        self._require_not_released()
        return int.from_bytes(self._secret, byteorder="big", signed=False)

    def public_key(self) -> PublicKey:
        return PublicKey(mult(self.to_int()), check_validity=False)

    def release(self) -> None:
        "Zero the private key material; later releases are no-op."
        if self._released:
            return
        for i in range(len(self._secret)):
            self._secret[i] = 0
        self._released = True

    def __enter__(self: _PrivateKey) -> _PrivateKey:
        self._require_not_released()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.release()

    def __del__(self) -> None:
        # a partially initialized instance has no _secret yet
        if hasattr(self, "_secret"):
            self.release()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return hmac.compare_digest(self.serialize(), other.serialize())

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        status = "released" if self._released else "***"
        return f"PrivateKey({status})"

    # a copy owns its own buffer: releasing one never zeroes the other
    def __copy__(self: _PrivateKey) -> _PrivateKey:
        duplicate = object.__new__(type(self))
        duplicate._secret = bytearray(self._secret)
        duplicate._released = self._released
        return duplicate

    def __deepcopy__(self: _PrivateKey, memo: Any) -> _PrivateKey:
        return self.__copy__()


class ChainCode:
    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        if not isinstance(data, bytes):
            raise BLSHDTypeError("chain code is not an instance of bytes")
        if len(data) != CHAIN_CODE_SIZE:
            err_msg = "invalid chain code length: "
            err_msg += f"{len(data)} bytes"
            err_msg += f" instead of {CHAIN_CODE_SIZE}"
            raise InvalidEncodingError(err_msg)
        self._data = data

    @classmethod
    def from_bytes(cls: Type[_ChainCode], data: Octets) -> _ChainCode:
        return cls(bytes_from_octets(data, CHAIN_CODE_SIZE))

    def serialize(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainCode):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"ChainCode({self._data.hex()})"

    def __copy__(self: _ChainCode) -> _ChainCode:
        return self

    def __deepcopy__(self: _ChainCode, memo: Any) -> _ChainCode:
        return self
