#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `stealthlib.utils` module."

import secrets

import pytest

from stealthlib.exceptions import (
    InvalidHexDigitError,
    InvalidLengthError,
    OddLengthError,
    StealthTypeError,
    StealthValueError,
)
from stealthlib.utils import (
    bytes_from_hex,
    bytes_from_octets,
    hex_from_bytes,
    hex_string,
    int_from_integer,
    normalize_hex,
)


def test_hex_codec() -> None:
    for data in (b"", b"\x00", b"\x01" * 32, secrets.token_bytes(33)):
        hex_str = hex_from_bytes(data)
        assert hex_str.startswith("0x")
        assert hex_str == hex_str.lower()
        assert len(hex_str) == 2 + 2 * len(data)
        assert bytes_from_hex(hex_str) == data
        assert bytes_from_hex(hex_str[2:]) == data
        assert bytes_from_hex(hex_str.upper()) == data
        assert bytes_from_hex("  " + hex_str + "\n") == data

    assert hex_from_bytes(bytearray(b"\xde\xad")) == "0xdead"


def test_normalize_hex() -> None:
    assert normalize_hex("DEADBEEF") == "0xdeadbeef"
    assert normalize_hex(" 0XdeadBEEF ") == "0xdeadbeef"
    assert normalize_hex("0x") == "0x"
    hex_str = "0x" + secrets.token_bytes(32).hex()
    assert normalize_hex(hex_str.upper()) == hex_str
    assert hex_from_bytes(bytes_from_hex(hex_str.upper())) == normalize_hex(hex_str)


def test_hex_errors() -> None:

    with pytest.raises(OddLengthError, match="odd number of hex digits: 3"):
        bytes_from_hex("0xabc")

    # odd length is reported before invalid digits
    with pytest.raises(OddLengthError):
        bytes_from_hex("0xzzz")

    err_msg = "invalid hex digit 'g' at position 2"
    with pytest.raises(InvalidHexDigitError, match=err_msg):
        bytes_from_hex("abgd")

    # embedded blanks are not allowed
    with pytest.raises(InvalidHexDigitError):
        bytes_from_hex("de  ad")

    # both are value errors
    with pytest.raises(ValueError):
        bytes_from_hex("0x0")
    with pytest.raises(StealthValueError):
        bytes_from_hex("0xxx")

    with pytest.raises(StealthTypeError, match="not a hex-string: "):
        bytes_from_hex(b"deadbeef")  # type: ignore

    with pytest.raises(StealthTypeError, match="not bytes: "):
        hex_from_bytes("deadbeef")  # type: ignore


def test_bytes_from_octets() -> None:
    data = secrets.token_bytes(32)
    assert bytes_from_octets(data) == data
    assert bytes_from_octets(data.hex()) == data
    assert bytes_from_octets("0x" + data.hex(), 32) == data
    assert bytes_from_octets(bytearray(data), 32) == data
    assert bytes_from_octets(data, (32, 33)) == data

    err_msg = "invalid size: 32 bytes instead of 33"
    with pytest.raises(InvalidLengthError, match=err_msg):
        bytes_from_octets(data, 33)

    with pytest.raises(InvalidLengthError):
        bytes_from_octets(data, (31, 33))

    with pytest.raises(StealthTypeError, match="not octets: "):
        bytes_from_octets(32)  # type: ignore


def test_int_from_integer() -> None:
    for i in (
        secrets.randbits(256 - 8),
        0x0B6CA75B7D3076C561958CCED813797F6D2275C7F42F3856D007D587769A90,
    ):
        assert i == int_from_integer(i)
        assert i == int_from_integer(i.to_bytes(32, byteorder="big", signed=False))
        i_bytes = i.to_bytes(32, byteorder="big", signed=False)
        assert i == int_from_integer(i_bytes.hex())

    with pytest.raises(StealthTypeError, match="not an integer: "):
        int_from_integer(True)  # type: ignore


def test_hex_string() -> None:
    int_ = 34492435054806958080
    assert hex_string(int_) == "01 DEADBEEF 00000000"
    assert hex_string("01deadbeef00000000") == "01 DEADBEEF 00000000"

    a_bytes = bytes.fromhex("01deadbeef00000000")
    assert hex_string(a_bytes) == "01 DEADBEEF 00000000"

    with pytest.raises(StealthValueError, match="negative integer: "):
        hex_string(-1)
