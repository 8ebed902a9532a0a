#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Private keys, public keys, key pairs, and meta addresses.

A private key is a secp256k1 scalar in 1..n-1,
serialized as 32 big-endian bytes.
A public key is the compressed (33 bytes) SEC serialization
of the corresponding curve point.

A payee generates two key pairs, spend and viewing, once:
the two public keys form the meta address, to be published.
A payer generates a fresh ephemeral key pair for each payment.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union

from stealthlib.alias import Octets, Point
from stealthlib.ecc.curve import Curve, mult, secp256k1
from stealthlib.ecc.sec_point import bytes_from_point, point_from_octets
from stealthlib.entropy import SecureRandom, random_bytes
from stealthlib.exceptions import (
    InsecureRandomnessError,
    InvalidLengthError,
    InvalidPointError,
    StealthTypeError,
    StealthValueError,
)
from stealthlib.utils import bytes_from_octets

logger = logging.getLogger(__name__)

# private key inputs: native int, 32 bytes, or 64 hex digits
PrvKey = Union[int, bytes, str]

# public key inputs: 33 bytes, 66 hex digits, or native point tuple
PubKey = Union[bytes, str, Point]

# consecutive out of range candidates tolerated before
# giving up on the random source
MAX_DRAWS = 64


def int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    "Return a verified-as-valid private key integer."

    if isinstance(prv_key, bool):
        raise StealthTypeError(f"not a private key: {prv_key!r}")
    if isinstance(prv_key, int):
        q = prv_key
    else:
        prv_key = bytes_from_octets(prv_key, ec.n_size)
        q = int.from_bytes(prv_key, byteorder="big", signed=False)

    if not 0 < q < ec.n:
        raise StealthValueError(f"private key not in 1..n-1: {hex(q).upper()}")
    return q


def bytes_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> bytes:
    "Return the 32 bytes serialization of a verified-as-valid private key."
    q = int_from_prv_key(prv_key, ec)
    return q.to_bytes(ec.n_size, byteorder="big", signed=False)


def generate_prv_key(
    rng: Optional[SecureRandom] = None, ec: Curve = secp256k1
) -> bytes:
    """Return a new random private key.

    Candidates equal to zero or not lower than the group order
    are discarded and redrawn (rejection sampling, no modular bias).
    """

    for _ in range(MAX_DRAWS):
        candidate = random_bytes(ec.n_size, rng)
        if 0 < int.from_bytes(candidate, byteorder="big", signed=False) < ec.n:
            return candidate
        logger.debug("private key candidate out of range, redrawing")
    raise InsecureRandomnessError(f"no valid private key in {MAX_DRAWS} draws")


def point_from_pub_key(pub_key: PubKey, ec: Curve = secp256k1) -> Point:
    "Return an elliptic curve point tuple from a public key."

    if isinstance(pub_key, tuple):
        if ec.is_on_curve(pub_key) and pub_key[1] != 0:
            return pub_key
        raise InvalidPointError(f"not a valid public key: {pub_key}")
    return point_from_octets(pub_key, ec)


def bytes_from_pub_key(pub_key: PubKey, ec: Curve = secp256k1) -> bytes:
    "Return the compressed serialization of a verified-as-valid public key."
    return bytes_from_point(point_from_pub_key(pub_key, ec), ec)


def pub_key_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> bytes:
    "Return the compressed public key q*G of a private key."
    q = int_from_prv_key(prv_key, ec)
    return bytes_from_point(mult(q, ec.G, ec), ec)


@dataclass(frozen=True)
class PubKeyValidation:
    """Outcome of a public key validation.

    Truthy if the key is valid; otherwise error holds the exception
    that would have been raised, so that its class (InvalidLengthError,
    InvalidPrefixError, InvalidPointError, ...) can drive
    field-level feedback.
    """

    valid: bool
    error: Optional[Exception] = None

    def __bool__(self) -> bool:
        return self.valid

    @property
    def message(self) -> str:
        return "" if self.error is None else str(self.error)


def validate_pub_key(pub_key: Octets, ec: Curve = secp256k1) -> PubKeyValidation:
    "Validate a compressed public key without raising."

    try:
        if not isinstance(pub_key, (bytes, bytearray, str)):
            raise StealthTypeError("public key must be bytes or hex-string")
        data = bytes_from_octets(pub_key)
        if len(data) != ec.p_size + 1:
            err_msg = f"public key must be {ec.p_size + 1} bytes "
            err_msg += f"({2 * ec.p_size + 2} hex characters), got {len(data)} bytes"
            raise InvalidLengthError(err_msg)
        point_from_octets(data, ec)
    except (StealthTypeError, StealthValueError) as e:
        return PubKeyValidation(False, e)
    return PubKeyValidation(True)


def assert_valid_pub_key(pub_key: Octets, ec: Curve = secp256k1) -> bytes:
    "Return the public key bytes, raising the validation error if invalid."

    validation = validate_pub_key(pub_key, ec)
    if validation.error is not None:
        raise validation.error
    return bytes_from_octets(pub_key)


@dataclass(frozen=True)
class KeyPair:
    prv_key: bytes = field(repr=False)
    pub_key: bytes

    def __init__(
        self,
        prv_key: PrvKey,
        pub_key: Optional[Octets] = None,
        check_validity: bool = True,
    ) -> None:
        prv_key = bytes_from_prv_key(prv_key)
        if pub_key is None:
            pub_key = pub_key_from_prv_key(prv_key)
        object.__setattr__(self, "prv_key", prv_key)
        object.__setattr__(self, "pub_key", bytes_from_octets(pub_key))

        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        assert_valid_pub_key(self.pub_key)
        if pub_key_from_prv_key(self.prv_key) != self.pub_key:
            raise StealthValueError("public key does not match private key")

    def to_dict(self, check_validity: bool = True) -> Dict[str, str]:
        if check_validity:
            self.assert_valid()

        return {"privateKey": self.prv_key.hex(), "publicKey": self.pub_key.hex()}

    @classmethod
    def from_dict(
        cls, dict_: Mapping[str, str], check_validity: bool = True
    ) -> "KeyPair":
        return cls(dict_["privateKey"], dict_["publicKey"], check_validity)


def generate_key_pair(rng: Optional[SecureRandom] = None) -> KeyPair:
    "Return a new random key pair, e.g. an ephemeral one."
    return KeyPair(generate_prv_key(rng))


@dataclass(frozen=True)
class MetaAddress:
    """The published (spend public key, viewing public key) pair.

    Its string form is "<spend hex>:<viewing hex>".
    """

    spend_pub_key: bytes
    viewing_pub_key: bytes

    def __init__(
        self,
        spend_pub_key: Octets,
        viewing_pub_key: Octets,
        check_validity: bool = True,
    ) -> None:
        object.__setattr__(self, "spend_pub_key", bytes_from_octets(spend_pub_key))
        object.__setattr__(
            self, "viewing_pub_key", bytes_from_octets(viewing_pub_key)
        )

        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        for name, pub_key in (
            ("spend", self.spend_pub_key),
            ("viewing", self.viewing_pub_key),
        ):
            validation = validate_pub_key(pub_key)
            if validation.error is not None:
                e = validation.error
                raise type(e)(f"invalid {name} public key: {e}") from e

    def __str__(self) -> str:
        return f"{self.spend_pub_key.hex()}:{self.viewing_pub_key.hex()}"

    @classmethod
    def from_str(cls, meta_address: str, check_validity: bool = True) -> "MetaAddress":
        parts = meta_address.strip().split(":")
        if len(parts) != 2:
            err_msg = f"not a spend:viewing meta address: {meta_address!r}"
            raise StealthValueError(err_msg)
        return cls(parts[0], parts[1], check_validity)

    def to_dict(self, check_validity: bool = True) -> Dict[str, str]:
        if check_validity:
            self.assert_valid()

        return {
            "spendPubKey": self.spend_pub_key.hex(),
            "viewingPubKey": self.viewing_pub_key.hex(),
        }

    @classmethod
    def from_dict(
        cls, dict_: Mapping[str, str], check_validity: bool = True
    ) -> "MetaAddress":
        return cls(dict_["spendPubKey"], dict_["viewingPubKey"], check_validity)


@dataclass(frozen=True)
class MetaAddressKeys:
    "The payee spend and viewing key pairs."

    spend: KeyPair
    viewing: KeyPair

    @property
    def meta_address(self) -> MetaAddress:
        return MetaAddress(self.spend.pub_key, self.viewing.pub_key)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {"spend": self.spend.to_dict(), "viewing": self.viewing.to_dict()}

    @classmethod
    def from_dict(cls, dict_: Mapping[str, Mapping[str, str]]) -> "MetaAddressKeys":
        return cls(
            KeyPair.from_dict(dict_["spend"]), KeyPair.from_dict(dict_["viewing"])
        )


def generate_meta_address_keys(rng: Optional[SecureRandom] = None) -> MetaAddressKeys:
    "Return new random spend and viewing key pairs."
    return MetaAddressKeys(generate_key_pair(rng), generate_key_pair(rng))
