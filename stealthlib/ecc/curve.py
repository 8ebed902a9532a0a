#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve class and scalar multiplication functions.

A Curve is the prime order subgroup generated by G
of the points of an elliptic curve over Fp,
i.e. the solutions (x, y) of the Weierstrass equation
y^2 = x^3 + a*x + b, together with the point at infinity INF.

Only secp256k1 is used by the stealth address engine,
but nothing here is secp256k1 specific:
the test suite exercises the group law on low cardinality curves too.

Scalar multiplication is not constant-time.
"""

from math import ceil
from typing import List, Optional

from stealthlib.alias import INF, INFJ, Integer, JacPoint, Point
from stealthlib.ecc.number_theory import mod_inv, mod_sqrt
from stealthlib.exceptions import InvalidPointError, StealthValueError
from stealthlib.utils import hex_string, int_from_integer

HEX_THRESHOLD = 0xFFFFFFFF


def _fmt(i: int) -> str:
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


def _is_probable_prime(i: int) -> bool:
    # Fermat test will do as _probabilistic_ primality test
    return i == 2 or i > 2 and i % 2 == 1 and pow(2, i - 1, i) == 1


def jac_from_aff(Q: Point) -> JacPoint:
    """Return the Jacobian representation of the affine point.

    The input point is assumed to be on curve.
    """
    return Q[0], Q[1], 1 if Q[1] else 0


class Curve:
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self, p: Integer, a: Integer, b: Integer, G: Point, n: Integer
    ) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)
        n = int_from_integer(n)

        if not _is_probable_prime(p) or p == 2:
            raise StealthValueError(f"p is not an odd prime: {_fmt(p)}")
        self.p = p
        self.p_size = ceil(p.bit_length() / 8)

        if not 0 <= a < p:
            raise StealthValueError(f"a not in 0..p-1: {_fmt(a)}")
        if not 0 <= b < p:
            raise StealthValueError(f"b not in 0..p-1: {_fmt(b)}")
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise StealthValueError("zero discriminant")
        self._a = a
        self._b = b

        if len(G) != 2:
            raise StealthValueError("generator must be a tuple[int, int]")
        self.G = int_from_integer(G[0]), int_from_integer(G[1])
        if self.G[1] == 0:
            raise StealthValueError("INF point cannot be a generator")
        if not self.is_on_curve(self.G):
            raise StealthValueError("generator is not on the curve")
        self.GJ = jac_from_aff(self.G)

        if not _is_probable_prime(n):
            raise StealthValueError(f"n is not prime: {_fmt(n)}")
        if n == p:
            raise StealthValueError(f"n=p weak curve: {_fmt(n)}")
        self.n = n
        self.n_size = ceil(n.bit_length() / 8)
        if mult_fixed_window(n, self.GJ, self)[2] != 0:
            raise StealthValueError(f"n is not the group order: {_fmt(n)}")

    def __repr__(self) -> str:
        result = f"Curve({_fmt(self.p)}, {_fmt(self._a)}, {_fmt(self._b)}"
        result += f", ({_fmt(self.G[0])}, {_fmt(self.G[1])})"
        result += f", {_fmt(self.n)})"
        return result

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the point is on the curve."
        if len(Q) != 2:
            raise StealthValueError("point must be a tuple[int, int]")
        if Q[1] == 0:  # Infinity point in affine coordinates
            return True
        if not (0 <= Q[0] < self.p and 0 < Q[1] < self.p):
            return False
        return self._y2(Q[0]) == Q[1] * Q[1] % self.p

    def require_on_curve(self, Q: Point) -> None:
        "Raise InvalidPointError if the point is not on the curve."
        if not self.is_on_curve(Q):
            raise InvalidPointError(f"point not on curve: {Q}")

    def _y2(self, x: int) -> int:
        # no check that sqrt(y2) exists: keep this method private
        return ((x * x + self._a) * x + self._b) % self.p

    def y(self, x: int) -> int:
        "Return one of the two y coordinates associated to x."
        if not 0 <= x < self.p:
            raise InvalidPointError(f"x-coordinate not in 0..p-1: {_fmt(x)}")
        try:
            y = mod_sqrt(self._y2(x), self.p)
        except StealthValueError as e:
            raise InvalidPointError(f"invalid x-coordinate: {_fmt(x)}") from e
        if y == 0:
            # (x, 0) would have order 2, impossible in a prime order group
            raise InvalidPointError(f"invalid x-coordinate: {_fmt(x)}")
        return y

    def y_even(self, x: int) -> int:
        "Return the even affine y-coordinate associated to x."
        root = self.y(x)
        return self.p - root if root % 2 else root

    def add_aff(self, Q: Point, R: Point) -> Point:
        # points are assumed to be on curve
        if R[1] == 0:  # Infinity point in affine coordinates
            return Q
        if Q[1] == 0:
            return R
        if R[0] == Q[0]:
            if R[1] == Q[1]:
                return self.double_aff(Q)
            return INF  # opposite points
        lam = (R[1] - Q[1]) * mod_inv(R[0] - Q[0], self.p)
        x = lam * lam - Q[0] - R[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def double_aff(self, Q: Point) -> Point:
        # point is assumed to be on curve
        if Q[1] == 0:
            return INF
        lam = (3 * Q[0] * Q[0] + self._a) * mod_inv(2 * Q[1], self.p)
        x = lam * lam - 2 * Q[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def aff_from_jac(self, Q: JacPoint) -> Point:
        # point is assumed to be on curve
        if Q[2] == 0:  # Infinity point in Jacobian coordinates
            return INF
        Z2 = Q[2] * Q[2]
        x = Q[0] * mod_inv(Z2, self.p)
        y = Q[1] * mod_inv(Z2 * Q[2], self.p)
        return x % self.p, y % self.p

    def add_jac(self, Q: JacPoint, R: JacPoint) -> JacPoint:
        # points are assumed to be on curve
        if Q[2] == 0:
            return R
        if R[2] == 0:
            return Q

        RZ2 = R[2] * R[2]
        QZ2 = Q[2] * Q[2]
        M = Q[0] * RZ2 % self.p
        N = R[0] * QZ2 % self.p
        T = Q[1] * RZ2 * R[2] % self.p
        U = R[1] * QZ2 * Q[2] % self.p

        if M == N:  # same affine x
            return self.double_jac(Q) if T == U else INFJ

        W = U - T
        V = N - M
        V2 = V * V
        V3 = V2 * V
        MV2 = M * V2
        X = (W * W - V3 - 2 * MV2) % self.p
        Y = (W * (MV2 - X) - T * V3) % self.p
        Z = (V * Q[2] * R[2]) % self.p
        return X, Y, Z

    def double_jac(self, Q: JacPoint) -> JacPoint:
        # point is assumed to be on curve
        QZ2 = Q[2] * Q[2]
        QY2 = Q[1] * Q[1]
        W = 3 * Q[0] * Q[0] + self._a * QZ2 * QZ2
        V = 4 * Q[0] * QY2
        X = W * W - 2 * V
        Y = W * (V - X) - 8 * QY2 * QY2
        Z = 2 * Q[1] * Q[2]
        return X % self.p, Y % self.p, Z % self.p


def multiples(Q: JacPoint, size: int, ec: Curve) -> List[JacPoint]:
    "Return {k_i * Q} for k_i in {0, ..., size-1}."

    if size < 2:
        raise StealthValueError(f"size too low: {size}")

    T = [INFJ, Q]
    for _ in range(2, size):
        T.append(ec.add_jac(T[-1], Q))
    return T


def digits_in_base(i: int, base: int) -> List[int]:
    "Return the digits of a non-negative integer, most significant first."

    digits: List[int] = []
    while i or not digits:
        i, idx = divmod(i, base)
        digits.append(idx)
    return digits[::-1]


def mult_fixed_window(m: int, Q: JacPoint, ec: Curve, w: int = 4) -> JacPoint:
    """Scalar multiplication using "fixed window".

    This implementation uses
    'multiple-double & add' algorithm,
    'left-to-right' window decomposition of the m coefficient,
    Jacobian coordinates.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n
    if appropriate.
    """

    if m < 0:
        raise StealthValueError(f"negative m: {hex(m)}")
    if w <= 0:
        raise StealthValueError(f"non positive w: {w}")

    T = multiples(Q, 2 ** w, ec)
    digits = digits_in_base(m, 2 ** w)

    R = T[digits[0]]
    for i in digits[1:]:
        for _ in range(w):
            R = ec.double_jac(R)
        R = ec.add_jac(R, T[i])
    return R


def _double_mult(u: int, HJ: JacPoint, v: int, QJ: JacPoint, ec: Curve) -> JacPoint:
    """Double scalar multiplication (u*H + v*Q).

    Shamir-Strauss algorithm: a single 'double & add' loop
    over the 'left-to-right' binary decomposition of u and v,
    with H+Q precomputed for the steps where both bits are set.
    """

    if u < 0:
        raise StealthValueError(f"negative first coefficient: {hex(u)}")
    if v < 0:
        raise StealthValueError(f"negative second coefficient: {hex(v)}")

    T = [INFJ, HJ, QJ, ec.add_jac(HJ, QJ)]
    size = max(u.bit_length(), v.bit_length(), 1)
    R = INFJ
    for i in reversed(range(size)):
        R = ec.double_jac(R)
        R = ec.add_jac(R, T[((u >> i) & 1) + 2 * ((v >> i) & 1)])
    return R


# SEC 2 v.2, section 2.4.1
secp256k1 = Curve(
    "FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFE FFFFFC2F".replace(
        " ", ""
    ),
    0,
    7,
    (
        0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
        0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    ),
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
)


def mult(m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1) -> Point:
    """Elliptic curve scalar multiplication m*Q.

    Q defaults to the curve generator; m is reduced mod n.
    """

    if Q is None:
        QJ = ec.GJ
    else:
        ec.require_on_curve(Q)
        QJ = jac_from_aff(Q)

    m = int_from_integer(m) % ec.n
    return ec.aff_from_jac(mult_fixed_window(m, QJ, ec))


def double_mult(
    u: Integer, H: Point, v: Integer, Q: Point, ec: Curve = secp256k1
) -> Point:
    "Double scalar multiplication (u*H + v*Q)."

    ec.require_on_curve(H)
    ec.require_on_curve(Q)
    u = int_from_integer(u) % ec.n
    v = int_from_integer(v) % ec.n
    return ec.aff_from_jac(_double_mult(u, jac_from_aff(H), v, jac_from_aff(Q), ec))
