#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hex/byte codec and assorted conversion utilities.

This is the one place where hex-strings are turned into bytes
and back: every other module goes through these functions,
so that malformed input is always reported with the same
error classes.

Hex-strings are accepted with or without a "0x" prefix,
are always produced lower-case and "0x"-prefixed.
"""

import string
from collections.abc import Iterable as IterableCollection
from typing import Iterable, Optional, Union

from stealthlib.alias import Integer, Octets
from stealthlib.exceptions import (
    InvalidHexDigitError,
    InvalidLengthError,
    OddLengthError,
    StealthTypeError,
    StealthValueError,
)

_HEX_DIGITS = frozenset(string.hexdigits)

NoneOneOrMoreInt = Optional[Union[int, Iterable[int]]]


def _strip_hex_prefix(hex_str: str) -> str:
    hex_str = hex_str.strip()
    if hex_str[:2] in ("0x", "0X"):
        return hex_str[2:]
    return hex_str


def bytes_from_hex(hex_str: str) -> bytes:
    """Return the bytes encoded by a hex-string.

    Leading/trailing blanks and an optional "0x" prefix are stripped.
    Embedded blanks are not allowed.
    """

    if not isinstance(hex_str, str):
        raise StealthTypeError(f"not a hex-string: {hex_str!r}")

    digits = _strip_hex_prefix(hex_str)
    if len(digits) % 2:
        err_msg = f"odd number of hex digits: {len(digits)}"
        raise OddLengthError(err_msg)
    for i, c in enumerate(digits):
        if c not in _HEX_DIGITS:
            raise InvalidHexDigitError(f"invalid hex digit {c!r} at position {i}")
    return bytes.fromhex(digits)


def hex_from_bytes(data: bytes) -> str:
    "Return the lower-case, 0x-prefixed hex-string of the input bytes."

    if not isinstance(data, (bytes, bytearray)):
        raise StealthTypeError(f"not bytes: {data!r}")
    return "0x" + bytes(data).hex()


def normalize_hex(hex_str: str) -> str:
    "Return the canonical (lower-case, 0x-prefixed) form of a hex-string."
    return hex_from_bytes(bytes_from_hex(hex_str))


def bytes_from_octets(octets: Octets, out_size: NoneOneOrMoreInt = None) -> bytes:
    """Return bytes from a hex-string or bytes.

    If the input is not a string, then it goes untouched.
    Optionally, it also ensures required output size.
    """

    if isinstance(octets, str):
        octets = bytes_from_hex(octets)
    elif isinstance(octets, bytearray):
        octets = bytes(octets)
    elif not isinstance(octets, bytes):
        raise StealthTypeError(f"not octets: {octets!r}")

    if (
        out_size is None
        or isinstance(out_size, int)
        and len(octets) == out_size
        or isinstance(out_size, IterableCollection)
        and len(octets) in out_size
    ):
        return octets

    err_msg = f"invalid size: {len(octets)} bytes instead of {out_size}"
    raise InvalidLengthError(err_msg)


def int_from_integer(i: Integer) -> int:
    """Return an int from many possible integer representations.

    Allowed integer representations are:

    * 3735928559
    * "0xdeadbeef"
    * "deadbeef"
    * b'\xde\xad\xbe\xef'

    hex-strings and bytes are interpreted as big-endian unsigned integers.
    """

    if isinstance(i, bool):
        raise StealthTypeError(f"not an integer: {i!r}")
    if isinstance(i, int):
        return i
    return int.from_bytes(bytes_from_octets(i), byteorder="big", signed=False)


def hex_string(i: Integer) -> str:
    """Return a hex-string from many positive integer representations.

    Negative integers are not allowed.

    The resulting hex-string has an even number of hex-digits and
    includes a space every four bytes (i.e. every eight hex-digits).
    It is meant for error messages, not for data interchange.
    """

    int_ = int_from_integer(i)
    if int_ < 0:
        raise StealthValueError(f"negative integer: {int_}")
    a_str = format(int_, "x")
    if len(a_str) % 2 != 0:
        a_str = "0" + a_str

    indx = list(reversed(range(len(a_str), 0, -8)))
    return " ".join(a_str[max(0, i - 8) : i] for i in indx).upper()
