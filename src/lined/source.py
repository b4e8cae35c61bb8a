# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Initial source descriptor.

A positional token is classified once: '-' means standard input, a leading
'!' means the output of a shell command, anything else is a path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class SourceKind(Enum):
    PATH = auto()
    SHELL_COMMAND = auto()
    STDIN = auto()


@dataclass(frozen=True)
class Source:
    kind: SourceKind
    token: str

    @classmethod
    def parse(cls, token: str) -> Source:
        if token == "-":
            return cls(SourceKind.STDIN, token)
        if token.startswith("!"):
            return cls(SourceKind.SHELL_COMMAND, token)
        return cls(SourceKind.PATH, token)

    @property
    def command(self) -> str:
        """Shell command text (token without the leading '!')."""
        if self.kind is not SourceKind.SHELL_COMMAND:
            return ""
        return self.token[1:]

    @property
    def is_shell_command(self) -> bool:
        return self.kind is SourceKind.SHELL_COMMAND
