# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
lined core package.

The startup sequence, mode flags and restricted-mode access gate live here;
the buffer and session are the collaborators it drives.
"""
from .exit_codes import ExitStatus as ExitStatus  # noqa: F401 (re-export)
from .flags import ModeFlags as ModeFlags  # noqa: F401 (re-export)
