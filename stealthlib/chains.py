#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Chain address formats.

A stealth address is derived by hashing the stealth public key,
keeping the first address_width bytes of the digest,
left-padding them with zeros up to hex_width hex digits,
and adding the chain prefix.

The derivation itself is chain agnostic: chains only differ
in these few constants, collected here.
"""

import hashlib
import string
import threading
from dataclasses import dataclass
from typing import Dict, Union

from stealthlib.alias import HashF
from stealthlib.exceptions import (
    InvalidHexDigitError,
    InvalidLengthError,
    InvalidPrefixError,
    StealthTypeError,
    StealthValueError,
)

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class AddressFormat:
    # number of digest bytes kept
    address_width: int
    # number of hex digits of the address, prefix excluded
    hex_width: int
    prefix: str = "0x"
    hf: HashF = hashlib.sha3_256

    def __post_init__(self) -> None:
        self.assert_valid()

    def assert_valid(self) -> None:
        digest_size = self.hf().digest_size
        if not 0 < self.address_width <= digest_size:
            err_msg = f"address width not in 1..{digest_size}: {self.address_width}"
            raise StealthValueError(err_msg)
        if self.hex_width < 2 * self.address_width:
            err_msg = f"hex width too small for {self.address_width} bytes: "
            err_msg += f"{self.hex_width}"
            raise StealthValueError(err_msg)

    @property
    def address_length(self) -> int:
        "Number of characters of an address, prefix included."
        return len(self.prefix) + self.hex_width

    def normalize_address(self, address: str) -> str:
        """Return the canonical form of an address in this format.

        The prefix is matched case-insensitively and the hex digits
        are lower-cased; prefix, length, and digits are checked.
        """

        if not isinstance(address, str):
            raise StealthTypeError(f"not an address: {address!r}")
        address = address.strip()
        prefix_len = len(self.prefix)
        if address[:prefix_len].lower() != self.prefix.lower():
            err_msg = f"invalid address prefix (must be {self.prefix!r}): {address!r}"
            raise InvalidPrefixError(err_msg)
        if len(address) != self.address_length:
            err_msg = f"invalid address length: {len(address)} characters "
            err_msg += f"instead of {self.address_length}"
            raise InvalidLengthError(err_msg)
        digits = address[prefix_len:]
        for i, c in enumerate(digits):
            if c not in _HEX_DIGITS:
                err_msg = f"invalid hex digit {c!r} at position {prefix_len + i}"
                raise InvalidHexDigitError(err_msg)
        return self.prefix + digits.lower()


CHAINS: Dict[str, AddressFormat] = {
    # Aptos stealth payments: 16 bytes of SHA3-256, padded to 32 bytes
    "aptos": AddressFormat(16, 64),
    # full width variant: the whole SHA3-256 digest
    "aptos-full": AddressFormat(32, 64),
}

DEFAULT_CHAIN = "aptos"

_CHAINS_LOCK = threading.Lock()

Chain = Union[str, AddressFormat]


def address_format_from_chain(chain: Chain = DEFAULT_CHAIN) -> AddressFormat:
    "Return the AddressFormat of a chain name (or the AddressFormat itself)."

    if isinstance(chain, AddressFormat):
        return chain
    if not isinstance(chain, str):
        raise StealthTypeError(f"not a chain: {chain!r}")
    try:
        return CHAINS[chain.strip().lower()]
    except KeyError as e:
        raise StealthValueError(f"unknown chain: {chain!r}") from e


def register_chain(name: str, address_format: AddressFormat) -> None:
    """Add (or replace) a chain address format.

    Registration is lock protected. A running derivation keeps the
    (immutable) AddressFormat it looked up; chains are meant to be
    registered at import time.
    """

    if not isinstance(address_format, AddressFormat):
        raise StealthTypeError(f"not an AddressFormat: {address_format!r}")
    name = name.strip().lower()
    if not name:
        raise StealthValueError("empty chain name")
    with _CHAINS_LOCK:
        CHAINS[name] = address_format
