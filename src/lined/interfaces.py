# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Protocol definitions for dependency injection.

The startup sequence only talks to its collaborators through these
contracts, so tests can swap in fakes for the buffer, session, executor
and terminal UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from .source import Source


class LoadStatus(Enum):
    OK = auto()
    INVALID = auto()  # opened, but the content could not be read
    FAILED = auto()  # source could not be opened or run


@dataclass(frozen=True)
class LoadResult:
    status: LoadStatus
    size: int = 0
    lines: int = 0

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK


class LineBuffer(Protocol):
    """Protocol for the editing buffer."""

    def init_buffers(self) -> bool:
        """Prepare an empty buffer. False on failure."""
        ...

    def read_file(self, source: Source) -> LoadResult:
        """Load a path or shell command output into the buffer."""
        ...

    def set_def_filename(self, name: str) -> bool:
        """Register the session's default filename. False on failure."""
        ...

    def is_regular_file(self, source: Source) -> bool:
        """Return True if the source is a path naming a regular file."""
        ...


class Session(Protocol):
    """Protocol for the interactive session."""

    def set_prompt(self, text: str) -> bool:
        """Use ``text`` as the interactive prompt. False on failure."""
        ...

    def set_verbose(self) -> None:
        """Print error explanations instead of a bare '?'."""
        ...

    def set_error_msg(self, text: str) -> None:
        """Record the last error message."""
        ...

    def main_loop(self, initial_error: bool, loose: bool) -> int:
        """Run the command loop and return the process exit status."""
        ...


class Executor(Protocol):
    """Protocol for command execution."""

    def run(self, command: str) -> tuple[int, str, str, str, int]:
        """Run a shell command and return results.

        Returns:
            (exit_code, stdout, stderr, started_at, duration_ms)
        """
        ...


class UI(Protocol):
    """Protocol for terminal input/output."""

    def read(self, prompt: str) -> str:
        """Read one command line. Raises EOFError at end of input."""
        ...

    def write(self, text: str) -> None:
        """Write text exactly as given."""
        ...
