#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `stealthlib.ecc.number_theory` module."

import secrets

import pytest

from stealthlib.ecc.curve import secp256k1
from stealthlib.ecc.number_theory import legendre_symbol, mod_inv, mod_sqrt, xgcd
from stealthlib.exceptions import StealthValueError

# 13 % 8 = 5; 17 % 8 = 1; 41 % 8 = 1; 19 % 4 = 3; 23 % 4 = 3
primes = [3, 5, 7, 11, 13, 17, 19, 23, 41, 97, 113, 257]


def test_xgcd() -> None:
    for a, b in ((240, 46), (46, 240), (17, 5), (0, 7), (secrets.randbits(64), 97)):
        g, x, y = xgcd(a, b)
        assert a * x + b * y == g
        assert g > 0
        assert a % g == 0 and b % g == 0


def test_mod_inv() -> None:
    for p in primes + [secp256k1.p, secp256k1.n]:
        for a in (1, 2, p - 1, 1 + secrets.randbelow(p - 1)):
            inv = mod_inv(a, p)
            assert a * inv % p == 1
            assert inv == mod_inv(a + p, p)
            assert inv == mod_inv(a - p, p)

    # m does not have to be a prime
    assert mod_inv(3, 10) == 7

    with pytest.raises(StealthValueError, match="no inverse for "):
        mod_inv(0, 13)
    with pytest.raises(StealthValueError, match="no inverse for "):
        mod_inv(4, 10)
    with pytest.raises(StealthValueError, match="no inverse for "):
        mod_inv(secp256k1.p, secp256k1.p)


def test_mod_sqrt() -> None:
    for p in primes:
        assert mod_sqrt(0, p) == 0
        squares = {x * x % p for x in range(1, p)}
        for a in range(1, p):
            if a in squares:
                assert legendre_symbol(a, p) == 1
                root = mod_sqrt(a, p)
                assert root * root % p == a
                root = p - root
                assert root * root % p == a
            else:
                assert legendre_symbol(a, p) == -1
                with pytest.raises(StealthValueError, match="no root for "):
                    mod_sqrt(a, p)


def test_mod_sqrt_secp256k1() -> None:
    p = secp256k1.p
    for _ in range(10):
        x = 1 + secrets.randbelow(p - 1)
        a = x * x % p
        assert mod_sqrt(a, p) in (x, p - x)
        # -1 is not a square for p = 3 (mod 4)
        with pytest.raises(StealthValueError, match="no root for "):
            mod_sqrt(p - a, p)
