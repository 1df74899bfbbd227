#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32-style hierarchical deterministic BLS keys.

A deterministic wallet is a hash-chain of private/public key pairs that
derives from a single root, which is the only element requiring backup.
Moreover, public keys can be derived without accessing private keys
(watch-only derivation), as long as the derivation is not hardened.

Here, the BIP32 tree is adapted to BLS12-381 keys:
private keys are scalars, public keys are G1 points,
and HMAC-SHA256 replaces HMAC-SHA512:

    L = HMAC(chain_code, data || ser32(index) || 0x00)
    R = HMAC(chain_code, data || ser32(index) || 0x01)

where data is the serialized private key for hardened indexes
and the serialized public key otherwise.
The child private key is (k + L) mod n, the child public key is P + L*G,
and R is the child chain code.

A serialized extended public key is 93 bytes:

- [  : 4] version
- [ 4: 5] depth in the derivation path
- [ 5: 9] parent fingerprint
- [ 9:13] child number
- [13:45] chain code
- [45:93] compressed G1 public key

A serialized extended private key is 77 bytes,
with the 32 bytes private key in place of the public key.
"""

import copy
import logging
from dataclasses import InitVar, dataclass, field, replace
from functools import cached_property
from io import BytesIO
from types import TracebackType
from typing import Any, Optional, Tuple, Type, TypeVar

from dataclasses_json import DataClassJsonMixin, config

from blshd.alias import BinaryData, Octets
from blshd.config import (
    CHAIN_CODE_SIZE,
    DEFAULT_CONFIG,
    HARDENED,
    MAX_DEPTH,
    MAX_INDEX,
    PRV_KEY_SIZE,
    PUB_KEY_SIZE,
    HDConfig,
)
from blshd.curve import add_points, mult, n, scalar_from_digest
from blshd.der_path import DerPath, indexes_from_der_path
from blshd.der_path import int_from_index_str, str_from_index_int
from blshd.exceptions import (
    BLSHDTypeError,
    BLSHDValueError,
    DepthExceededError,
    HardenedChildFromPublicKeyError,
    InvalidEncodingError,
    KeyReleasedError,
)
from blshd.hashes import hmac_sha256_pair
from blshd.keys import ChainCode, PrivateKey, PublicKey
from blshd.utils import bytes_from_octets, bytesio_from_binarydata

_LOGGER = logging.getLogger(__name__)

_HEADER_SIZE = 4 + 1 + 4 + 4
XPUB_SIZE = _HEADER_SIZE + CHAIN_CODE_SIZE + PUB_KEY_SIZE
XPRV_SIZE = _HEADER_SIZE + CHAIN_CODE_SIZE + PRV_KEY_SIZE

_ExtendedPublicKey = TypeVar("_ExtendedPublicKey", bound="ExtendedPublicKey")
_ExtendedPrivateKey = TypeVar("_ExtendedPrivateKey", bound="ExtendedPrivateKey")

_FINGERPRINT_METADATA = config(
    encoder=lambda v: f"{v:08x}", decoder=lambda v: int(v, 16)
)
_INDEX_METADATA = config(encoder=str_from_index_int, decoder=int_from_index_str)


def _assert_valid_metadata(
    version: int, depth: int, parent_fingerprint: int, child_number: int
) -> None:

    for name, value, max_value in (
        ("version", version, MAX_INDEX),
        ("depth", depth, MAX_DEPTH),
        ("parent fingerprint", parent_fingerprint, MAX_INDEX),
        ("child number", child_number, MAX_INDEX),
    ):
        if not isinstance(value, int):
            raise BLSHDTypeError(f"{name} is not an instance of int")
        if not 0 <= value <= max_value:
            raise InvalidEncodingError(f"invalid {name}: {value}")

    if depth == 0:
        if parent_fingerprint != 0:
            err_msg = "zero depth with non-zero parent fingerprint: "
            err_msg += f"0x{parent_fingerprint:08x}"
            raise InvalidEncodingError(err_msg)
        if child_number != 0:
            err_msg = f"zero depth with non-zero child number: {child_number}"
            raise InvalidEncodingError(err_msg)


def _serialize(
    version: int,
    depth: int,
    parent_fingerprint: int,
    child_number: int,
    chain_code: ChainCode,
    key: bytes,
) -> bytes:
    return b"".join(
        [
            version.to_bytes(4, byteorder="big", signed=False),
            depth.to_bytes(1, byteorder="big", signed=False),
            parent_fingerprint.to_bytes(4, byteorder="big", signed=False),
            child_number.to_bytes(4, byteorder="big", signed=False),
            chain_code.serialize(),
            key,
        ]
    )


def _read_xkey(
    data: BinaryData, size: int
) -> Tuple[int, int, int, int, ChainCode, bytes]:
    "Split the serialized extended key into its fields."

    stream = bytesio_from_binarydata(data)
    xkey_bin = stream.read(size)
    if len(xkey_bin) != size:
        err_msg = f"invalid decoded length: {len(xkey_bin)}"
        err_msg += f" instead of {size}"
        raise InvalidEncodingError(err_msg)
    # a stream may hold more data, bytes must be exact
    if not isinstance(data, BytesIO) and stream.read(1):
        raise InvalidEncodingError(f"invalid decoded length: more than {size}")

    return (
        int.from_bytes(xkey_bin[0:4], byteorder="big", signed=False),
        xkey_bin[4],
        int.from_bytes(xkey_bin[5:9], byteorder="big", signed=False),
        int.from_bytes(xkey_bin[9:13], byteorder="big", signed=False),
        ChainCode(xkey_bin[13:45]),
        xkey_bin[45:],
    )


def _assert_valid_index(index: int) -> None:
    if not isinstance(index, int):
        raise BLSHDTypeError("index is not an instance of int")
    if not 0 <= index <= MAX_INDEX:
        raise BLSHDValueError(f"invalid index: {index}")


def _assert_derivable(depth: int) -> None:
    if depth >= MAX_DEPTH:
        raise DepthExceededError(f"cannot go further than {MAX_DEPTH} levels")


def _ckd(chain_code: ChainCode, data: bytes, index: int) -> Tuple[int, ChainCode]:
    "Return the child key tweak and the child chain code."

    msg = data + index.to_bytes(4, byteorder="big", signed=False)
    left, right = hmac_sha256_pair(chain_code.serialize(), msg)
    return scalar_from_digest(left), ChainCode(right)


class _ExtendedKeyInfo:
    "Properties shared by extended public and private keys."

    public_key: PublicKey
    depth: int
    parent_fingerprint: int
    child_number: int

    @property
    def is_hardened(self) -> bool:
        return self.child_number >= HARDENED

    @property
    def is_root(self) -> bool:
        return (
            self.depth == 0
            and self.child_number == 0
            and self.parent_fingerprint == 0
        )

    @property
    def fingerprint(self) -> int:
        return self.public_key.fingerprint


@dataclass(frozen=True)
class ExtendedPublicKey(_ExtendedKeyInfo, DataClassJsonMixin):
    public_key: PublicKey = field(
        metadata=config(
            encoder=lambda v: v.serialize().hex(), decoder=PublicKey.from_bytes
        )
    )
    chain_code: ChainCode = field(
        metadata=config(
            encoder=lambda v: v.serialize().hex(), decoder=ChainCode.from_bytes
        )
    )
    # derivation bookkeeping, not part of the key identity
    version: int = field(default=DEFAULT_CONFIG.version, compare=False)
    depth: int = field(default=0, compare=False)
    parent_fingerprint: int = field(
        default=0, compare=False, metadata=_FINGERPRINT_METADATA
    )
    child_number: int = field(default=0, compare=False, metadata=_INDEX_METADATA)
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        if not isinstance(self.public_key, PublicKey):
            raise BLSHDTypeError("public key is not an instance of PublicKey")
        if not isinstance(self.chain_code, ChainCode):
            raise BLSHDTypeError("chain code is not an instance of ChainCode")
        _assert_valid_metadata(
            self.version, self.depth, self.parent_fingerprint, self.child_number
        )

    def serialize(self, check_validity: bool = True) -> bytes:

        if check_validity:
            self.assert_valid()

        return _serialize(
            self.version,
            self.depth,
            self.parent_fingerprint,
            self.child_number,
            self.chain_code,
            self.public_key.serialize(),
        )

    @classmethod
    def parse(
        cls: Type[_ExtendedPublicKey], data: BinaryData, check_validity: bool = True
    ) -> _ExtendedPublicKey:
        "Return an ExtendedPublicKey by parsing 93 bytes from binary data."

        version, depth, parent_fingerprint, child_number, chain_code, key = _read_xkey(
            data, XPUB_SIZE
        )
        return cls(
            public_key=PublicKey.from_bytes(key),
            chain_code=chain_code,
            version=version,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_number=child_number,
            check_validity=check_validity,
        )

    def public_child(self: _ExtendedPublicKey, index: int) -> _ExtendedPublicKey:
        """Derive the (normal) child extended public key at index.

        Hardened children (index >= 0x80000000) require the private key
        and cannot be derived from an extended public key.
        """

        _assert_valid_index(index)
        if index >= HARDENED:
            err_msg = f"cannot derive hardened child from public key: {index}"
            raise HardenedChildFromPublicKeyError(err_msg)
        _assert_derivable(self.depth)

        tweak, chain_code = _ckd(self.chain_code, self.public_key.serialize(), index)
        point = add_points(self.public_key.point, mult(tweak))
        child = type(self)(
            public_key=PublicKey(point, check_validity=False),
            chain_code=chain_code,
            version=self.version,
            depth=self.depth + 1,
            parent_fingerprint=self.public_key.fingerprint,
            child_number=index,
        )
        _LOGGER.debug(
            "derived public child %s at depth %d of %08x",
            str_from_index_int(index),
            child.depth,
            child.parent_fingerprint,
        )
        return child

    def derive(self: _ExtendedPublicKey, der_path: DerPath) -> _ExtendedPublicKey:
        """Derive an extended public key across a path of normal indexes.

        Valid DerPath examples:

        - string like "m/0/1/2"
        - iterable integer indexes
        - one single integer index
        - bytes in multiples of the 4-bytes index
        """

        indexes = indexes_from_der_path(der_path)
        final_depth = self.depth + len(indexes)
        if final_depth > MAX_DEPTH:
            err_msg = f"final depth greater than {MAX_DEPTH}: {final_depth}"
            raise DepthExceededError(err_msg)

        xkey = self
        for index in indexes:
            xkey = xkey.public_child(index)
        return xkey


@dataclass(frozen=True)
class ExtendedPrivateKey(_ExtendedKeyInfo, DataClassJsonMixin):
    private_key: PrivateKey = field(
        metadata=config(
            encoder=lambda v: v.serialize().hex(), decoder=PrivateKey.from_bytes
        )
    )
    chain_code: ChainCode = field(
        metadata=config(
            encoder=lambda v: v.serialize().hex(), decoder=ChainCode.from_bytes
        )
    )
    # derivation bookkeeping, not part of the key identity
    version: int = field(default=DEFAULT_CONFIG.version, compare=False)
    depth: int = field(default=0, compare=False)
    parent_fingerprint: int = field(
        default=0, compare=False, metadata=_FINGERPRINT_METADATA
    )
    child_number: int = field(default=0, compare=False, metadata=_INDEX_METADATA)
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()
        # each extended key exclusively owns its private key buffer
        if isinstance(self.private_key, PrivateKey):
            object.__setattr__(self, "private_key", copy.copy(self.private_key))

    def __copy__(self: _ExtendedPrivateKey) -> _ExtendedPrivateKey:
        return replace(self, check_validity=False)

    def __deepcopy__(self: _ExtendedPrivateKey, memo: Any) -> _ExtendedPrivateKey:
        return replace(self, check_validity=False)

    def assert_valid(self) -> None:
        if not isinstance(self.private_key, PrivateKey):
            raise BLSHDTypeError("private key is not an instance of PrivateKey")
        if not isinstance(self.chain_code, ChainCode):
            raise BLSHDTypeError("chain code is not an instance of ChainCode")
        _assert_valid_metadata(
            self.version, self.depth, self.parent_fingerprint, self.child_number
        )

    @classmethod
    def from_seed(
        cls: Type[_ExtendedPrivateKey],
        seed: Octets,
        hd_config: HDConfig = DEFAULT_CONFIG,
    ) -> _ExtendedPrivateKey:
        """Return the master extended private key from a seed.

        The seed can be of any length;
        it is expanded with HMAC-SHA256 keyed by hd_config.seed_key.
        """

        seed = bytes_from_octets(seed)
        left, right = hmac_sha256_pair(hd_config.seed_key, seed)
        return cls(
            private_key=PrivateKey(scalar_from_digest(left)),
            chain_code=ChainCode(right),
            version=hd_config.version,
        )

    @cached_property
    def public_key(self) -> PublicKey:  # type: ignore
        return self.private_key.public_key()

    @property
    def released(self) -> bool:
        return self.private_key.released

    def release(self) -> None:
        "Zero the private key material owned by this extended key."
        self.private_key.release()

    def __enter__(self: _ExtendedPrivateKey) -> _ExtendedPrivateKey:
        if self.released:
            raise KeyReleasedError("private key already released")
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.release()

    def serialize(self, check_validity: bool = True) -> bytes:

        if check_validity:
            self.assert_valid()

        return _serialize(
            self.version,
            self.depth,
            self.parent_fingerprint,
            self.child_number,
            self.chain_code,
            self.private_key.serialize(),
        )

    @classmethod
    def parse(
        cls: Type[_ExtendedPrivateKey], data: BinaryData, check_validity: bool = True
    ) -> _ExtendedPrivateKey:
        "Return an ExtendedPrivateKey by parsing 77 bytes from binary data."

        version, depth, parent_fingerprint, child_number, chain_code, key = _read_xkey(
            data, XPRV_SIZE
        )
        return cls(
            private_key=PrivateKey.from_bytes(key),
            chain_code=chain_code,
            version=version,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_number=child_number,
            check_validity=check_validity,
        )

    def extended_public_key(self) -> ExtendedPublicKey:
        """Neutered Derivation (ND).

        Derivation of the extended public key corresponding to an extended
        private key (“neutered” as it removes the ability to sign).
        Chain code and derivation bookkeeping are copied unchanged.
        """

        return ExtendedPublicKey(
            public_key=self.public_key,
            chain_code=self.chain_code,
            version=self.version,
            depth=self.depth,
            parent_fingerprint=self.parent_fingerprint,
            child_number=self.child_number,
        )

    def private_child(self: _ExtendedPrivateKey, index: int) -> _ExtendedPrivateKey:
        """Derive the child extended private key at index.

        Hardened derivation (index >= 0x80000000) hashes the parent
        private key instead of the parent public key:
        a leaked child private key together with the parent extended
        public key then does not disclose the parent private key.
        """

        _assert_valid_index(index)
        _assert_derivable(self.depth)

        if index >= HARDENED:
            data = self.private_key.serialize()
        else:
            data = self.public_key.serialize()
        tweak, chain_code = _ckd(self.chain_code, data, index)
        child = type(self)(
            private_key=PrivateKey((self.private_key.to_int() + tweak) % n),
            chain_code=chain_code,
            version=self.version,
            depth=self.depth + 1,
            parent_fingerprint=self.public_key.fingerprint,
            child_number=index,
        )
        _LOGGER.debug(
            "derived private child %s at depth %d of %08x",
            str_from_index_int(index),
            child.depth,
            child.parent_fingerprint,
        )
        return child

    def derive(self: _ExtendedPrivateKey, der_path: DerPath) -> _ExtendedPrivateKey:
        """Derive an extended private key across a path of indexes.

        Valid DerPath examples:

        - string like "m/12381h/0'/1H/0/10"
        - iterable integer indexes
        - one single integer index
        - bytes in multiples of the 4-bytes index

        DerPath is case/blank/extra-slash insensitive
        (e.g. "M /12381h / 0' /1H // 0/ 10 / ").
        Intermediate private keys are released as soon as they are used.
        """

        indexes = indexes_from_der_path(der_path)
        final_depth = self.depth + len(indexes)
        if final_depth > MAX_DEPTH:
            err_msg = f"final depth greater than {MAX_DEPTH}: {final_depth}"
            raise DepthExceededError(err_msg)

        xkey = self
        for index in indexes:
            try:
                child = xkey.private_child(index)
            finally:
                if xkey is not self:
                    xkey.release()
            xkey = child
        return xkey


def crack_private_key(
    parent_xpub: ExtendedPublicKey, child_xprv: ExtendedPrivateKey
) -> ExtendedPrivateKey:
    """Return the parent extended private key.

    Normal derivation only adds a tweak computable from the parent
    extended public key: knowing the child private key, the tweak can be
    subtracted. Hardened children are not affected.
    """

    if not isinstance(parent_xpub, ExtendedPublicKey):
        raise BLSHDTypeError("extended parent key is not an ExtendedPublicKey")
    if not isinstance(child_xprv, ExtendedPrivateKey):
        raise BLSHDTypeError("extended child key is not an ExtendedPrivateKey")

    if child_xprv.depth != parent_xpub.depth + 1:
        raise BLSHDValueError("not a parent's child: wrong depths")
    if child_xprv.parent_fingerprint != parent_xpub.fingerprint:
        raise BLSHDValueError("not a parent's child: wrong parent fingerprint")
    if child_xprv.is_hardened:
        raise BLSHDValueError("hardened child derivation")

    tweak, chain_code = _ckd(
        parent_xpub.chain_code,
        parent_xpub.public_key.serialize(),
        child_xprv.child_number,
    )
    if chain_code != child_xprv.chain_code:
        raise BLSHDValueError("not a parent's child: wrong chain code")

    parent_prv_key = PrivateKey((child_xprv.private_key.to_int() - tweak) % n)
    if parent_prv_key.public_key() != parent_xpub.public_key:
        parent_prv_key.release()
        raise BLSHDValueError("not a parent's child: wrong private key")

    return ExtendedPrivateKey(
        private_key=parent_prv_key,
        chain_code=parent_xpub.chain_code,
        version=parent_xpub.version,
        depth=parent_xpub.depth,
        parent_fingerprint=parent_xpub.parent_fingerprint,
        child_number=parent_xpub.child_number,
    )
