#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Stealth address derivation.

Given the payee meta address (S, V) = (s*G, v*G),
the payer draws an ephemeral key pair (e, E = e*G) and computes:

* the shared secret  Z = e*V  (compressed, 33 bytes)
* the tweak          t = SHA256(Z || uint32_be(k))
* the stealth key    P = S + t*G
* the address        prefix || pad(SHA3-256(P)[:width])
* the view hint      Z[0]

and publishes E, the view hint, and k along with the payment.

The payee recomputes Z = v*E with the viewing private key,
hence t and P, recognizing the payment;
the spend private key then yields the stealth private key p = s + t,
with p*G = P.

k allows many unlinkable addresses from the same shared secret,
e.g. k = 0, 1, 2, ...
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Union

from stealthlib.alias import Octets
from stealthlib.chains import DEFAULT_CHAIN, Chain, address_format_from_chain
from stealthlib.ecc.curve import Curve, double_mult, secp256k1
from stealthlib.ecc.dh import SHARED_SECRET_SIZE, shared_secret
from stealthlib.ecc.sec_point import bytes_from_point
from stealthlib.entropy import SecureRandom
from stealthlib.exceptions import (
    InvalidPointError,
    StealthTypeError,
    StealthValueError,
)
from stealthlib.hashes import digest, sha256
from stealthlib.keys import (
    KeyPair,
    MetaAddress,
    PrvKey,
    PubKey,
    assert_valid_pub_key,
    bytes_from_pub_key,
    generate_key_pair,
    int_from_prv_key,
    point_from_pub_key,
    pub_key_from_prv_key,
)
from stealthlib.utils import bytes_from_octets

logger = logging.getLogger(__name__)

TWEAK_SIZE = 32
MAX_K = 0xFFFFFFFF


def _bytes_from_k(k: int) -> bytes:
    if isinstance(k, bool) or not isinstance(k, int):
        raise StealthTypeError(f"k must be an integer: {k!r}")
    if not 0 <= k <= MAX_K:
        raise StealthValueError(f"k not in 0..{MAX_K}: {k}")
    return k.to_bytes(4, byteorder="big", signed=False)


def _int_from_tweak(tweak: Octets, ec: Curve) -> int:
    tweak = bytes_from_octets(tweak, TWEAK_SIZE)
    t = int.from_bytes(tweak, byteorder="big", signed=False) % ec.n
    if t == 0:
        raise StealthValueError("tweak is zero (mod n)")
    return t


def tweak_from_shared_secret(secret: Octets, k: int = 0) -> bytes:
    "Return SHA256(secret || uint32_be(k))."

    secret = bytes_from_octets(secret, SHARED_SECRET_SIZE)
    return sha256(secret + _bytes_from_k(k))


def stealth_pub_key_from_tweak(
    spend_pub_key: PubKey, tweak: Octets, ec: Curve = secp256k1
) -> bytes:
    """Return the stealth public key S + t*G.

    The tweak is interpreted as a big-endian integer reduced mod n.
    """

    t = _int_from_tweak(tweak, ec)
    S = point_from_pub_key(spend_pub_key, ec)
    P = double_mult(t, ec.G, 1, S, ec)
    if P[1] == 0:
        raise InvalidPointError("stealth public key is the infinity point")
    return bytes_from_point(P, ec)


def stealth_prv_key_from_shared_secret(
    spend_prv_key: PrvKey, secret: Octets, k: int = 0, ec: Curve = secp256k1
) -> bytes:
    "Return the stealth private key (s + t) mod n."

    s = int_from_prv_key(spend_prv_key, ec)
    t = _int_from_tweak(tweak_from_shared_secret(secret, k), ec)
    p = (s + t) % ec.n
    if p == 0:
        raise StealthValueError("stealth private key is zero")
    return p.to_bytes(ec.n_size, byteorder="big", signed=False)


def address_from_stealth_pub_key(
    stealth_pub_key: PubKey,
    address_width: Optional[int] = None,
    chain: Chain = DEFAULT_CHAIN,
) -> str:
    """Return the chain address of a stealth public key.

    address_width, if provided, overrides the chain default
    number of digest bytes kept.
    """

    address_format = address_format_from_chain(chain)
    if address_width is not None:
        address_format = dataclasses.replace(
            address_format, address_width=address_width
        )

    pub_key = bytes_from_pub_key(stealth_pub_key)
    h = digest(pub_key, address_format.hf)[: address_format.address_width]
    return address_format.prefix + h.hex().rjust(address_format.hex_width, "0")


def view_hint_from_shared_secret(secret: Octets) -> int:
    """Return the view hint, i.e. the first byte of the shared secret.

    The shared secret is a compressed point: its first byte is the
    0x02/0x03 parity prefix, so unrelated secrets match about half
    of the time. A match must always be confirmed by full recomputation.
    """
    return bytes_from_octets(secret, SHARED_SECRET_SIZE)[0]


@dataclass(frozen=True)
class StealthPayment:
    """What the payer publishes along with a stealth payment.

    chain is the address format the stealth address is checked against;
    it is not part of the published data.
    """

    stealth_address: str
    ephemeral_pub_key: bytes
    view_hint: int
    k: int = 0
    chain: Chain = field(default=DEFAULT_CHAIN, repr=False, compare=False)

    def __init__(
        self,
        stealth_address: str,
        ephemeral_pub_key: Octets,
        view_hint: int,
        k: int = 0,
        chain: Chain = DEFAULT_CHAIN,
        check_validity: bool = True,
    ) -> None:
        object.__setattr__(self, "stealth_address", stealth_address)
        object.__setattr__(
            self, "ephemeral_pub_key", bytes_from_octets(ephemeral_pub_key)
        )
        object.__setattr__(self, "view_hint", view_hint)
        object.__setattr__(self, "k", k)
        object.__setattr__(self, "chain", chain)

        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        address_format = address_format_from_chain(self.chain)
        address_format.normalize_address(self.stealth_address)
        assert_valid_pub_key(self.ephemeral_pub_key)
        if isinstance(self.view_hint, bool) or not isinstance(self.view_hint, int):
            raise StealthTypeError(f"view hint must be an integer: {self.view_hint!r}")
        if not 0 <= self.view_hint <= 0xFF:
            raise StealthValueError(f"view hint not in 0..255: {self.view_hint}")
        _bytes_from_k(self.k)

    def to_dict(self, check_validity: bool = True) -> Dict[str, Union[str, int]]:
        if check_validity:
            self.assert_valid()

        return {
            "stealthAddress": self.stealth_address,
            "ephemeralPubKey": self.ephemeral_pub_key.hex(),
            "viewHint": f"{self.view_hint:02x}",
            "k": self.k,
        }

    @classmethod
    def from_dict(
        cls,
        dict_: Mapping[str, Union[str, int]],
        check_validity: bool = True,
        chain: Chain = DEFAULT_CHAIN,
    ) -> "StealthPayment":
        view_hint = dict_["viewHint"]
        if isinstance(view_hint, str):
            view_hint = bytes_from_octets(view_hint, 1)[0]
        return cls(
            dict_["stealthAddress"],  # type: ignore
            dict_["ephemeralPubKey"],  # type: ignore
            view_hint,
            dict_.get("k", 0),  # type: ignore
            chain,
            check_validity,
        )


def generate_stealth_address(
    spend_pub_key: PubKey,
    viewing_pub_key: PubKey,
    ephemeral_prv_key: PrvKey,
    k: int = 0,
    chain: Chain = DEFAULT_CHAIN,
    ec: Curve = secp256k1,
) -> StealthPayment:
    """Return the stealth payment data for the meta address (spend, viewing).

    Pure function: the same inputs always give the same payment.
    Errors from any step are propagated unchanged.
    """

    ephemeral_pub_key = pub_key_from_prv_key(ephemeral_prv_key, ec)
    viewing_pub_key = bytes_from_pub_key(viewing_pub_key, ec)
    secret = shared_secret(ephemeral_prv_key, viewing_pub_key, ec)
    tweak = tweak_from_shared_secret(secret, k)
    stealth_pub_key = stealth_pub_key_from_tweak(spend_pub_key, tweak, ec)
    address = address_from_stealth_pub_key(stealth_pub_key, chain=chain)
    logger.debug("stealth address %s derived for k=%d", address, k)
    return StealthPayment(
        address, ephemeral_pub_key, view_hint_from_shared_secret(secret), k, chain
    )


def new_stealth_address(
    meta_address: Union[MetaAddress, str],
    k: int = 0,
    rng: Optional[SecureRandom] = None,
    chain: Chain = DEFAULT_CHAIN,
) -> Tuple[StealthPayment, KeyPair]:
    """Return a stealth payment to the meta address and its ephemeral key pair.

    The ephemeral private key is not needed after this call:
    the caller is expected to discard it.
    """

    if isinstance(meta_address, str):
        meta_address = MetaAddress.from_str(meta_address)
    ephemeral = generate_key_pair(rng)
    payment = generate_stealth_address(
        meta_address.spend_pub_key,
        meta_address.viewing_pub_key,
        ephemeral.prv_key,
        k,
        chain,
    )
    return payment, ephemeral


def recover_stealth_prv_key(
    spend_prv_key: PrvKey,
    viewing_prv_key: PrvKey,
    ephemeral_pub_key: PubKey,
    k: int = 0,
    ec: Curve = secp256k1,
) -> bytes:
    "Return the private key controlling a stealth address, payee side."

    ephemeral_pub_key = bytes_from_pub_key(ephemeral_pub_key, ec)
    secret = shared_secret(viewing_prv_key, ephemeral_pub_key, ec)
    return stealth_prv_key_from_shared_secret(spend_prv_key, secret, k, ec)


def is_own_stealth_address(
    viewing_prv_key: PrvKey,
    spend_pub_key: PubKey,
    ephemeral_pub_key: PubKey,
    stealth_address: str,
    k: int = 0,
    view_hint: Optional[int] = None,
    chain: Chain = DEFAULT_CHAIN,
    ec: Curve = secp256k1,
) -> bool:
    """Return True if the stealth address belongs to the payee.

    Only the viewing private key is needed.
    If the view hint is provided, a mismatch rejects the candidate
    before the stealth public key derivation.
    A malformed stealth address raises, it does not just mismatch.
    """

    address_format = address_format_from_chain(chain)
    stealth_address = address_format.normalize_address(stealth_address)
    ephemeral_pub_key = bytes_from_pub_key(ephemeral_pub_key, ec)
    secret = shared_secret(viewing_prv_key, ephemeral_pub_key, ec)
    if view_hint is not None and view_hint != view_hint_from_shared_secret(secret):
        logger.debug("view hint mismatch for k=%d", k)
        return False

    tweak = tweak_from_shared_secret(secret, k)
    stealth_pub_key = stealth_pub_key_from_tweak(spend_pub_key, tweak, ec)
    address = address_from_stealth_pub_key(stealth_pub_key, chain=address_format)
    return address == stealth_address


def is_own_payment(
    viewing_prv_key: PrvKey,
    spend_pub_key: PubKey,
    payment: StealthPayment,
    chain: Optional[Chain] = None,
) -> bool:
    """Return True if the published stealth payment belongs to the payee.

    chain defaults to the one the payment was built for.
    """

    if chain is None:
        chain = payment.chain

    return is_own_stealth_address(
        viewing_prv_key,
        spend_pub_key,
        payment.ephemeral_pub_key,
        payment.stealth_address,
        payment.k,
        payment.view_hint,
        chain,
    )
