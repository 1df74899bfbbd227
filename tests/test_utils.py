#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `blshd.utils` module."

from io import BytesIO

import pytest

from blshd.exceptions import InvalidEncodingError
from blshd.utils import bytes_from_octets, bytesio_from_binarydata


def test_bytes_from_octets() -> None:
    data = bytes(range(32))
    assert bytes_from_octets(data) == data
    assert bytes_from_octets(data.hex()) == data
    assert bytes_from_octets(" " + data.hex() + " ") == data
    assert bytes_from_octets("00 01 02") == b"\x00\x01\x02"
    assert bytes_from_octets(data, 32) == data
    assert bytes_from_octets(data, (32, 48)) == data
    assert bytes_from_octets("") == b""

    with pytest.raises(InvalidEncodingError, match="invalid size: "):
        bytes_from_octets(data, 48)
    with pytest.raises(InvalidEncodingError, match="invalid size: "):
        bytes_from_octets(data, (31, 33))
    with pytest.raises(InvalidEncodingError, match="invalid hex-string: "):
        bytes_from_octets("0g")
    with pytest.raises(InvalidEncodingError, match="invalid hex-string: "):
        bytes_from_octets("012")


def test_bytesio_from_binarydata() -> None:
    stream = BytesIO(b"\x01\x02")
    assert bytesio_from_binarydata(stream) is stream
    assert bytesio_from_binarydata(b"\x01\x02").read() == b"\x01\x02"
    assert bytesio_from_binarydata("0102").read() == b"\x01\x02"
