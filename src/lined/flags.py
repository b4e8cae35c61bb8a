# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Mode flags shared by the startup sequence and every collaborator.

One ModeFlags instance is built by the entry point and handed by reference
to whatever needs to read or write a flag. Each accessor is get-or-set:
called with a value it stores and returns it, called without one it
returns the stored value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ModeFlag(Enum):
    EXTENDED_REGEXP = auto()  # use EREs
    RESTRICTED = auto()  # no shell, no directory traversal
    SCRIPTED = auto()  # suppress diagnostics, byte counts and '!' prompt
    STRIP_CR = auto()  # strip trailing CRs
    TRADITIONAL = auto()  # be backwards compatible


@dataclass
class ModeFlags:
    """Named boolean settings, all false until written."""

    _values: dict[ModeFlag, bool] = field(
        default_factory=lambda: {flag: False for flag in ModeFlag}
    )

    def access(self, flag: ModeFlag, value: bool | None = None) -> bool:
        if value is not None:
            self._values[flag] = bool(value)
        return self._values[flag]

    def extended_regexp(self, value: bool | None = None) -> bool:
        return self.access(ModeFlag.EXTENDED_REGEXP, value)

    def restricted(self, value: bool | None = None) -> bool:
        return self.access(ModeFlag.RESTRICTED, value)

    def scripted(self, value: bool | None = None) -> bool:
        return self.access(ModeFlag.SCRIPTED, value)

    def strip_cr(self, value: bool | None = None) -> bool:
        return self.access(ModeFlag.STRIP_CR, value)

    def traditional(self, value: bool | None = None) -> bool:
        return self.access(ModeFlag.TRADITIONAL, value)

    def as_dict(self) -> dict[str, bool]:
        return {flag.name.lower(): v for flag, v in self._values.items()}
