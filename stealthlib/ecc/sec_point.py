#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC compressed point representation.

Public keys, shared secrets, and stealth public keys are all
exchanged as compressed points (SEC 1 v.2, section 2.3.3):
a 0x02 (even y) or 0x03 (odd y) prefix byte followed by
the big-endian x-coordinate.
Uncompressed (0x04) points are not used by the engine.
"""

from stealthlib.alias import Octets, Point
from stealthlib.ecc.curve import Curve, secp256k1
from stealthlib.exceptions import InvalidPointError, InvalidPrefixError
from stealthlib.utils import bytes_from_octets, hex_string


def bytes_from_point(Q: Point, ec: Curve = secp256k1) -> bytes:
    "Return a point as compressed octet sequence."

    ec.require_on_curve(Q)
    if Q[1] == 0:  # infinity point in affine coordinates
        raise InvalidPointError("no bytes representation for infinity point")

    prefix = b"\x03" if Q[1] & 1 else b"\x02"
    return prefix + Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)


def point_from_octets(pub_key: Octets, ec: Curve = secp256k1) -> Point:
    """Return a tuple (x_Q, y_Q) that belongs to the curve.

    Size is checked first (InvalidLengthError),
    then the prefix (InvalidPrefixError),
    then curve membership of the x-coordinate (InvalidPointError),
    according to SEC 1 v.2, section 2.3.4.
    """

    pub_key = bytes_from_octets(pub_key, ec.p_size + 1)

    if pub_key[0] not in (0x02, 0x03):
        err_msg = "invalid compression flag (must be 0x02 or 0x03), "
        err_msg += f"got 0x{pub_key[0]:02x}"
        raise InvalidPrefixError(err_msg)

    x_Q = int.from_bytes(pub_key[1:], byteorder="big", signed=False)
    try:
        y_Q = ec.y_even(x_Q)
    except InvalidPointError as e:
        raise InvalidPointError(f"invalid x-coordinate: '{hex_string(x_Q)}'") from e
    return x_Q, y_Q if pub_key[0] == 0x02 else ec.p - y_Q
