#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions."""

import hashlib

from stealthlib.alias import HashF, Octets
from stealthlib.utils import bytes_from_octets


def sha256(octets: Octets) -> bytes:
    """Return the SHA256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha256(octets).digest()


def sha3_256(octets: Octets) -> bytes:
    """Return the SHA3-256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha3_256(octets).digest()


def digest(octets: Octets, hf: HashF = hashlib.sha256) -> bytes:
    "Return the digest of the input octet sequence using the hf constructor."
    h = hf()
    h.update(bytes_from_octets(octets))
    return bytes(h.digest())
