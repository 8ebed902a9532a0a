#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Random sources for key generation.

Key generation never reaches for a global random API:
it is handed a SecureRandom instance, defaulting to DEFAULT_RANDOM,
i.e. the operating system CSPRNG through the secrets module.
Any object with a token_bytes(nbytes) method can be injected.

If the OS source is not available the engine refuses to generate keys
(InsecureRandomnessError): there is no fallback to the random module.

DeterministicRandom is an HMAC-SHA256 counter-mode stream,
reproducible from its seed; it is meant for tests and
test-vector generation, not for production keys.
"""

import hashlib
import hmac
import secrets
import threading
from typing import Optional

from stealthlib.alias import String
from stealthlib.exceptions import (
    InsecureRandomnessError,
    StealthTypeError,
    StealthValueError,
)


def _check_nbytes(nbytes: int) -> None:
    if isinstance(nbytes, bool) or not isinstance(nbytes, int):
        raise StealthTypeError(f"not an integer: {nbytes!r}")
    if nbytes < 0:
        raise StealthValueError(f"negative number of bytes: {nbytes}")


class SecureRandom:
    "Interface of a cryptographically secure random byte source."

    def token_bytes(self, nbytes: int) -> bytes:
        raise NotImplementedError


class SystemRandom(SecureRandom):
    "The operating system CSPRNG, as exposed by the secrets module."

    def token_bytes(self, nbytes: int) -> bytes:
        _check_nbytes(nbytes)
        try:
            return secrets.token_bytes(nbytes)
        except (NotImplementedError, OSError) as e:
            raise InsecureRandomnessError("secure random source unavailable") from e


class DeterministicRandom(SecureRandom):
    """Reproducible byte stream: HMAC-SHA256(seed, counter) blocks.

    Safe to share among threads: the counter is lock protected,
    so concurrent callers get non overlapping slices of the stream.
    """

    def __init__(self, seed: String) -> None:
        if isinstance(seed, str):
            seed = seed.encode()
        if not isinstance(seed, bytes):
            raise StealthTypeError(f"not a seed: {seed!r}")
        if not seed:
            raise StealthValueError("empty seed")
        self._seed = seed
        self._counter = 0
        self._buffer = b""
        self._lock = threading.Lock()

    def _block(self) -> bytes:
        counter = self._counter.to_bytes(8, byteorder="big", signed=False)
        self._counter += 1
        return hmac.new(self._seed, counter, hashlib.sha256).digest()

    def token_bytes(self, nbytes: int) -> bytes:
        _check_nbytes(nbytes)
        with self._lock:
            while len(self._buffer) < nbytes:
                self._buffer += self._block()
            data, self._buffer = self._buffer[:nbytes], self._buffer[nbytes:]
        return data


DEFAULT_RANDOM: SecureRandom = SystemRandom()


def random_bytes(nbytes: int, rng: Optional[SecureRandom] = None) -> bytes:
    """Return nbytes from the given source (DEFAULT_RANDOM if None).

    The output of the source is checked:
    anything but exactly nbytes bytes is an InsecureRandomnessError.
    """

    _check_nbytes(nbytes)
    rng = DEFAULT_RANDOM if rng is None else rng
    data = rng.token_bytes(nbytes)
    if not isinstance(data, bytes):
        raise InsecureRandomnessError(f"random source returned {type(data)}")
    if len(data) != nbytes:
        err_msg = f"random source returned {len(data)} bytes instead of {nbytes}"
        raise InsecureRandomnessError(err_msg)
    return data
