#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Any, Callable, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string,
# optionally prefixed by 0x, e.g.:
# "02531fe6068134503d2723133227c867ac8fa6c83c537e9a44c3c5bdbdcb1fe337"
# "0x02531fe6068134503d2723133227c867ac8fa6c83c537e9a44c3c5bdbdcb1fe337"
#
# use stealthlib.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for private keys (32 bytes), compressed public keys
# and shared secrets (33 bytes), tweaks (32 bytes)
Octets = Union[bytes, str]

# hex-string, bytes, or native int representation of an integer
Integer = Union[bytes, str, int]

# Hash digest constructor, e.g. hashlib.sha256 or hashlib.sha3_256
HashF = Callable[[], Any]

# Elliptic curve point in affine coordinates.
Point = Tuple[int, int]

# The infinity point in affine coordinates is INF = (int, 0):
# no affine point has y=0 coordinate in a group of prime order.
# The x-coordinate is arbitrary: 5 is not a valid secp256k1 x-coordinate
INF = 5, 0

# Elliptic curve point in Jacobian coordinates.
JacPoint = Tuple[int, int, int]

# Infinity point in Jacobian coordinates is INFJ = (int, int, 0).
# It can be checked with 'INFJ[2] == 0'
INFJ = 7, 0, 0

# bytes or text string (not hex-string), e.g. a random seed or a chain name
String = Union[bytes, str]
