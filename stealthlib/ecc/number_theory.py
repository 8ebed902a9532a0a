#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Number theory and modular arithmetic functions.

Modular inverse via the Extended Euclidean Algorithm,
modular square root via the p = 3 (mod 4) shortcut
or, for any other odd prime, Tonelli-Shanks.
"""

from typing import Tuple

from stealthlib.exceptions import StealthValueError
from stealthlib.utils import hex_string


def _fmt(i: int) -> str:
    return hex_string(i) if i > 0xFFFFFFFF else f"{i}"


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    based on Extended Euclidean Algorithm, see
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
    """

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def mod_inv(a: int, m: int) -> int:
    "Return the inverse of a (mod m). m does not have to be a prime."

    a %= m
    g, x, _ = xgcd(a, m)
    if g == 1:
        return x % m
    raise StealthValueError(f"no inverse for {_fmt(a)} mod {_fmt(m)}")


def legendre_symbol(a: int, p: int) -> int:
    """Compute the Legendre symbol a|p using Euler's criterion.

    p is a prime, a is relatively prime to p (if p divides a, then a|p = 0).
    Return 1 if a has a square root modulo p, -1 otherwise.
    """

    ls = pow(a, p >> 1, p)
    return -1 if ls == p - 1 else ls


def mod_sqrt(a: int, p: int) -> int:
    """Return a square root of a (mod p); p must be an odd prime.

    Note that p - x is also a root.
    """

    a %= p
    if a == 0:
        return 0

    if p % 4 == 3:  # secp256k1 case
        x = pow(a, (p >> 2) + 1, p)
        if x * x % p == a:
            return x
        raise StealthValueError(f"no root for {_fmt(a)} mod {_fmt(p)}")

    if legendre_symbol(a, p) != 1:
        raise StealthValueError(f"no root for {_fmt(a)} mod {_fmt(p)}")

    # Tonelli-Shanks: p - 1 = q * 2^s with q odd
    q, s = p - 1, 0
    while q & 1 == 0:
        s += 1
        q >>= 1

    z = 2
    while legendre_symbol(z, p) != -1:
        z += 1

    c = pow(z, q, p)
    x = pow(a, (q + 1) // 2, p)
    t = pow(a, q, p)
    m = s
    while t != 1:
        # lowest i such that t^(2^i) = 1
        i, t2i = 1, t * t % p
        while t2i != 1:
            t2i = t2i * t2i % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        x = x * b % p
        c = b * b % p
        t = t * c % p
        m = i
    return x
