#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The three base classes only discriminate between exceptions raised
by stealthlib and those raised by other codebase:
they derive from the regular ValueError, TypeError, and RuntimeError,
so callers may just deal with the built-in ones.

The more specific classes name the kind of failure,
allowing field-level feedback (e.g. in a registration form)
without parsing error messages.
"""


class StealthValueError(ValueError):
    pass


class StealthTypeError(TypeError):
    pass


class StealthRuntimeError(RuntimeError):
    pass


class InvalidLengthError(StealthValueError):
    "Input is not the expected number of bytes for its role."


class InvalidHexDigitError(StealthValueError):
    "Hex-string contains a non hexadecimal character."


class OddLengthError(StealthValueError):
    "Hex-string has an odd number of hex digits."


class InvalidPrefixError(StealthValueError):
    "Compressed public key or address does not start with the expected prefix."


class InvalidPointError(StealthValueError):
    "Not a secp256k1 point, or the point at infinity."


class InsecureRandomnessError(StealthRuntimeError):
    "The cryptographically secure random source is not usable."
