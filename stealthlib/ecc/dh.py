#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Diffie-Hellman elliptic curve key agreement.

The payer multiplies the payee viewing public key
by its ephemeral private key; the payee multiplies
the ephemeral public key by its viewing private key.
Both obtain the same point, q_e * q_v * G.

Unlike SEC 1 v.2 section 6.1, the whole compressed point
(prefix byte included) is the shared secret: no key derivation
function is applied here, hashing is left to the tweak derivation.
"""

from stealthlib.alias import Octets, Point
from stealthlib.ecc.curve import Curve, mult, secp256k1
from stealthlib.ecc.sec_point import bytes_from_point, point_from_octets
from stealthlib.exceptions import InvalidPointError
from stealthlib.keys import PrvKey, int_from_prv_key

SHARED_SECRET_SIZE = 33


def shared_secret_point(prv_key: int, pub_key: Octets, ec: Curve = secp256k1) -> Point:
    "Return the shared secret point q * Q."

    Q = point_from_octets(pub_key, ec)
    shared_point = mult(prv_key, Q, ec)
    # edge case that cannot be reproduced with a valid private key
    if shared_point[1] == 0:
        raise InvalidPointError("invalid (INF) shared secret")  # pragma: no cover
    return shared_point


def shared_secret(prv_key: PrvKey, pub_key: Octets, ec: Curve = secp256k1) -> bytes:
    """Return the ECDH shared secret as 33 bytes compressed point.

    prv_key is any private key representation accepted by
    stealthlib.keys.int_from_prv_key, pub_key a compressed public key
    (bytes or hex-string).
    """

    q = int_from_prv_key(prv_key, ec)
    return bytes_from_point(shared_secret_point(q, pub_key, ec), ec)
