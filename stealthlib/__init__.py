#!/usr/bin/env python3

# Copyright (C) The stealthlib developers
#
# This file is part of stealthlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of stealthlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the stealthlib package."

name = "stealthlib"
__version__ = "2026.10.1"
__author__ = "The stealthlib developers"
__author_email__ = "devs@stealthlib.org"
__copyright__ = "Copyright (C) 2025-2026 The stealthlib developers"
__license__ = "MIT License"
