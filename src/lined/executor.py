# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Subprocess-backed executor for shell commands.

Used for '!command' initial sources and for the '!' command of the
session. Output is captured as text; the caller decides what to show.
"""

from __future__ import annotations

import subprocess
from datetime import datetime

# /bin/sh reports "command not found" with this status
COMMAND_NOT_FOUND = 127
# reported when the command could not be started or timed out
COMMAND_NOT_RUN = -1


class SubprocessExecutor:
    """Subprocess implementation of Executor protocol."""

    def __init__(self, timeout: int = 30, cwd: str | None = None):
        """Initialize executor with configuration.

        Args:
            timeout: Command timeout in seconds (default: 30)
            cwd: Working directory for commands (default: current directory)
        """
        self.timeout = timeout
        self.cwd = cwd

    def _elapsed_ms(self, start_time: datetime) -> int:
        return int((datetime.now() - start_time).total_seconds() * 1000)

    def run(self, command: str) -> tuple[int, str, str, str, int]:
        """Run a shell command and return buffered results.

        Args:
            command: shell command to execute

        Returns:
            (exit_code, stdout, stderr, started_at, duration_ms)
        """
        started_at = datetime.now().isoformat()
        start_time = datetime.now()

        try:
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
                errors="surrogateescape",
                timeout=self.timeout,
                cwd=self.cwd,
            )
        except subprocess.TimeoutExpired:
            return (
                COMMAND_NOT_RUN, "",
                f"Command timed out after {self.timeout} seconds",
                started_at, self._elapsed_ms(start_time)
            )
        except OSError as e:
            return (
                COMMAND_NOT_RUN, "", f"Error executing command: {e}",
                started_at, self._elapsed_ms(start_time)
            )

        return (
            result.returncode, result.stdout, result.stderr,
            started_at, self._elapsed_ms(start_time)
        )
