# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Restricted-mode access gate.

In restricted mode a name may not start a shell command ('!...') and may
not leave the working directory ('..' or any path separator). Outside
restricted mode everything is permitted. No filesystem access happens here.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from .flags import ModeFlags

SHELL_RESTRICTED = "Shell access restricted"
DIRECTORY_RESTRICTED = "Directory access restricted"

PATH_SEPARATORS: frozenset[str] = frozenset(
    sep for sep in ("/", os.sep, os.altsep) if sep
)


def _has_separator(name: str) -> bool:
    return any(ch in PATH_SEPARATORS for ch in name)


def may_access_filename(
    name: str,
    flags: ModeFlags,
    record_error: Callable[[str], None],
) -> bool:
    """Return True if ``name`` may be used as a file or command.

    Args:
        name: Raw argument as typed (a leading '!' is a shell command)
        flags: Mode flags; only RESTRICTED is consulted
        record_error: Sink for the rejection message

    Returns:
        True if permitted, False if denied (message recorded)
    """
    if not flags.restricted():
        return True

    if name.startswith("!"):
        record_error(SHELL_RESTRICTED)
        return False
    if name == ".." or _has_separator(name):
        record_error(DIRECTORY_RESTRICTED)
        return False
    return True
