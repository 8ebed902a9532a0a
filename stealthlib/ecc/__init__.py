#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Elliptic curve primitives used by the stealth address engine."
