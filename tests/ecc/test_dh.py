#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `stealthlib.ecc.dh` module."

import secrets

import pytest

from stealthlib.ecc.curve import mult, secp256k1
from stealthlib.ecc.dh import SHARED_SECRET_SIZE, shared_secret, shared_secret_point
from stealthlib.ecc.sec_point import bytes_from_point
from stealthlib.exceptions import (
    InvalidLengthError,
    InvalidPointError,
    InvalidPrefixError,
    StealthValueError,
)
from stealthlib.keys import pub_key_from_prv_key


def test_symmetry() -> None:
    ec = secp256k1
    for _ in range(5):
        a = 1 + secrets.randbelow(ec.n - 1)
        b = 1 + secrets.randbelow(ec.n - 1)
        A = pub_key_from_prv_key(a)
        B = pub_key_from_prv_key(b)

        secret = shared_secret(a, B)
        assert secret == shared_secret(b, A)
        assert len(secret) == SHARED_SECRET_SIZE
        assert secret[0] in (0x02, 0x03)
        assert secret == bytes_from_point(mult(a * b))
        assert shared_secret_point(a, B) == mult(a * b)

        # any private key representation
        a_bytes = a.to_bytes(32, byteorder="big", signed=False)
        assert shared_secret(a_bytes, B) == secret
        assert shared_secret(a_bytes.hex(), B.hex()) == secret


def test_vector() -> None:
    viewing_prv_key = "02" * 32
    ephemeral_prv_key = "03" * 32
    viewing_pub_key = pub_key_from_prv_key(viewing_prv_key)
    ephemeral_pub_key = pub_key_from_prv_key(ephemeral_prv_key)

    secret = shared_secret(ephemeral_prv_key, viewing_pub_key)
    assert secret == shared_secret(viewing_prv_key, ephemeral_pub_key)
    assert secret.hex() == (
        "02aca78f27d5f23b2e7254a0bb8df128e7c0f922d47ccac72814501e07b7291886"
    )

    # 1 * G
    G_bytes = bytes_from_point(secp256k1.G)
    assert shared_secret(1, G_bytes) == G_bytes


def test_exceptions() -> None:
    pub_key = pub_key_from_prv_key(1)

    with pytest.raises(StealthValueError, match="private key not in 1..n-1: "):
        shared_secret(0, pub_key)
    with pytest.raises(StealthValueError, match="private key not in 1..n-1: "):
        shared_secret(secp256k1.n, pub_key)

    with pytest.raises(InvalidLengthError):
        shared_secret(1, pub_key[:-1])
    with pytest.raises(InvalidPrefixError):
        shared_secret(1, b"\x04" + pub_key[1:])
    x = "EEFDEA4CDB677750A420FEE807EACF21EB9898AE79B9768766E4FAA04A2D4A34"
    with pytest.raises(InvalidPointError):
        shared_secret(1, "02" + x)
