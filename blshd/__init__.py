#!/usr/bin/env python3

# Copyright (C) 2022 The blshd developers
#
# This file is part of blshd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of blshd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the blshd package."

import logging

from blshd.aggregation import (
    aggregate_insecure,
    aggregate_secure,
    aggregation_weights,
)
from blshd.config import DEFAULT_CONFIG, HDConfig
from blshd.extended_keys import (
    ExtendedPrivateKey,
    ExtendedPublicKey,
    crack_private_key,
)
from blshd.keys import ChainCode, PrivateKey, PublicKey

name = "blshd"
__version__ = "2022.6.1"
__author__ = "The blshd developers"
__author_email__ = "devs@blshd.org"
__copyright__ = "Copyright (C) 2022 The blshd developers"
__license__ = "MIT License"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ChainCode",
    "DEFAULT_CONFIG",
    "ExtendedPrivateKey",
    "ExtendedPublicKey",
    "HDConfig",
    "PrivateKey",
    "PublicKey",
    "aggregate_insecure",
    "aggregate_secure",
    "aggregation_weights",
    "crack_private_key",
]
