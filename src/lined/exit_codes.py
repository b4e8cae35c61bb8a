# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Process exit statuses.

0 for a normal exit, 1 for environmental problems (file not found, invalid
flags, I/O errors, etc), 2 to indicate a corrupt or invalid input file,
3 for an internal consistency error (e.g., bug) which caused lined to panic.
"""

from __future__ import annotations

from enum import IntEnum


class ExitStatus(IntEnum):
    NORMAL = 0
    ENVIRONMENTAL = 1
    CORRUPT_INPUT = 2
    INTERNAL_BUG = 3
