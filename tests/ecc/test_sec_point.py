#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `stealthlib.ecc.sec_point` module."

import secrets
from typing import Dict

import pytest

from stealthlib.alias import INF
from stealthlib.ecc.curve import Curve, mult, secp256k1
from stealthlib.ecc.sec_point import bytes_from_point, point_from_octets
from stealthlib.exceptions import (
    InvalidLengthError,
    InvalidPointError,
    InvalidPrefixError,
    StealthValueError,
)

# test curves: very low cardinality
low_card_curves: Dict[str, Curve] = {}
# 13 % 4 = 1; 13 % 8 = 5
low_card_curves["ec13_11"] = Curve(13, 7, 6, (1, 1), 11)
low_card_curves["ec13_19"] = Curve(13, 0, 2, (1, 9), 19)
# 17 % 4 = 1; 17 % 8 = 1
low_card_curves["ec17_23"] = Curve(17, 3, 5, (1, 14), 23)
# 19 % 4 = 3; 19 % 8 = 3
low_card_curves["ec19_23"] = Curve(19, 2, 9, (0, 16), 23)
# 23 % 4 = 3; 23 % 8 = 7
low_card_curves["ec23_19"] = Curve(23, 9, 7, (5, 4), 19)
low_card_curves["ec23_31"] = Curve(23, 5, 1, (0, 1), 31)

all_curves: Dict[str, Curve] = {}
all_curves.update(low_card_curves)
all_curves["secp256k1"] = secp256k1


def test_octets2point() -> None:
    for ec in all_curves.values():

        G_bytes = bytes_from_point(ec.G, ec)
        assert len(G_bytes) == ec.p_size + 1
        G_point = point_from_octets(G_bytes, ec)
        assert ec.G == G_point

        # just a random point, not INF
        q = 1 + secrets.randbelow(ec.n - 1)
        Q = mult(q, ec.G, ec)

        Q_bytes = b"\x03" if Q[1] & 1 else b"\x02"
        Q_bytes += Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)
        Q_point = point_from_octets(Q_bytes, ec)
        assert Q_point == Q
        assert bytes_from_point(Q_point, ec) == Q_bytes

        Q_hex_str = Q_bytes.hex()
        assert point_from_octets(Q_hex_str, ec) == Q
        assert point_from_octets("0x" + Q_hex_str.upper(), ec) == Q

        # the opposite point only differs in the prefix
        minus_Q_bytes = bytes_from_point((Q[0], ec.p - Q[1]), ec)
        assert minus_Q_bytes[0] ^ Q_bytes[0] == 1
        assert minus_Q_bytes[1:] == Q_bytes[1:]

        Q_bytes = b"\x04" + Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)
        err_msg = "invalid compression flag \\(must be 0x02 or 0x03\\), got 0x04"
        with pytest.raises(InvalidPrefixError, match=err_msg):
            point_from_octets(Q_bytes, ec)

        # uncompressed points are not supported
        Q_bytes += Q[1].to_bytes(ec.p_size, byteorder="big", signed=False)
        with pytest.raises(InvalidLengthError, match="invalid size: "):
            point_from_octets(Q_bytes, ec)

        Q_bytes = b"\x01" + b"\x01" * ec.p_size
        with pytest.raises(InvalidPrefixError, match="got 0x01"):
            point_from_octets(Q_bytes, ec)

        # x-coordinate not in 0..p-1
        Q_bytes = b"\x02" + ec.p.to_bytes(ec.p_size, byteorder="big", signed=False)
        with pytest.raises(InvalidPointError, match="invalid x-coordinate: "):
            point_from_octets(Q_bytes, ec)

        with pytest.raises(InvalidPointError, match="no bytes representation for inf"):
            bytes_from_point(INF, ec)


def test_secp256k1() -> None:
    G_bytes = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    assert bytes_from_point(secp256k1.G).hex() == G_bytes
    assert point_from_octets(G_bytes) == secp256k1.G

    G2_bytes = "02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
    assert bytes_from_point(mult(2)).hex() == G2_bytes
    G3_bytes = "02f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9"
    assert bytes_from_point(mult(3)).hex() == G3_bytes

    # odd y, 0x03 prefix
    minus_G = secp256k1.G[0], secp256k1.p - secp256k1.G[1]
    assert bytes_from_point(minus_G).hex() == "03" + G_bytes[2:]


def test_invalid_points() -> None:
    # x-coordinate with no corresponding y on secp256k1
    x = "EEFDEA4CDB677750A420FEE807EACF21EB9898AE79B9768766E4FAA04A2D4A34"
    for prefix in ("02", "03"):
        with pytest.raises(InvalidPointError, match="invalid x-coordinate: "):
            point_from_octets(prefix + x)

    # all errors are value errors, checked size first
    for pub_key in ("02" + x[2:], "04" + x, "05" + x[2:] + "00", "02" + x):
        with pytest.raises(StealthValueError):
            point_from_octets(pub_key)
    err_msg = "invalid size: 32 bytes instead of 33"
    with pytest.raises(InvalidLengthError, match=err_msg):
        point_from_octets("04" + x[2:])

    with pytest.raises(InvalidPointError, match="point not on curve: "):
        bytes_from_point((1, 1))
