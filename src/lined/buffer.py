# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
In-memory line buffer.

Loads the initial source (a file, or the output of a shell command) and
keeps the session's default filename. Load outcomes are tri-state:
OK, INVALID (the file was opened but reading it failed) and FAILED
(the source could not be opened or the command could not be run).
Loading is 8-bit clean: bytes that do not decode in the locale's
encoding are kept as surrogate escapes.
"""

from __future__ import annotations

import locale
import os
import stat
import sys
from collections.abc import Callable
from dataclasses import dataclass, field

from .executor import COMMAND_NOT_FOUND, COMMAND_NOT_RUN
from .flags import ModeFlags
from .interfaces import Executor, LoadResult, LoadStatus
from .source import Source, SourceKind

DEFAULT_MAX_FILENAME = 4096


def _stderr(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


def _stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def split_lines(text: str, strip_cr: bool = False) -> list[str]:
    """Split text into lines without their terminators.

    With ``strip_cr`` a single trailing carriage return is dropped from
    every line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if strip_cr:
        lines = [ln[:-1] if ln.endswith("\r") else ln for ln in lines]
    return lines


@dataclass
class Buffer:
    """LineBuffer implementation backed by a list of strings."""

    flags: ModeFlags
    executor: Executor
    max_filename: int = DEFAULT_MAX_FILENAME
    # None means the locale's preferred encoding
    encoding: str | None = None

    lines: list[str] = field(default_factory=list)
    def_filename: str = ""
    initialized: bool = False

    output_fn: Callable[[str], None] = _stdout
    error_fn: Callable[[str], None] = _stderr
    # Wired to Session.set_error_msg by the CLI
    record_error: Callable[[str], None] | None = None

    def _set_error(self, msg: str) -> None:
        if self.record_error is not None:
            self.record_error(msg)

    def show_strerror(self, name: str, errmsg: str) -> None:
        if self.flags.scripted():
            return
        if name:
            self.error_fn(f"{name}: {errmsg}\n")
        else:
            self.error_fn(f"{errmsg}\n")

    # ---------- LineBuffer protocol ----------

    def init_buffers(self) -> bool:
        self.lines = []
        self.def_filename = ""
        self.initialized = True
        return True

    def read_file(self, source: Source) -> LoadResult:
        if source.kind is SourceKind.SHELL_COMMAND:
            status, raw = self._read_command(source)
        elif source.kind is SourceKind.PATH:
            status, raw = self._read_path(source)
        else:
            self._set_error("Cannot read input file")
            return LoadResult(LoadStatus.FAILED)

        if status is not LoadStatus.OK:
            return LoadResult(status, size=len(raw))

        text = raw.decode(self._encoding(), errors="surrogateescape")
        self.lines = split_lines(text, strip_cr=self.flags.strip_cr())
        if not self.flags.scripted():
            self.output_fn(f"{len(raw)}\n")
        return LoadResult(LoadStatus.OK, size=len(raw), lines=len(self.lines))

    def set_def_filename(self, name: str) -> bool:
        if "\0" in name:
            self._set_error("Invalid filename")
            return False
        if len(name) > self.max_filename:
            self._set_error("Filename too long")
            return False
        self.def_filename = name
        return True

    def is_regular_file(self, source: Source) -> bool:
        if source.kind is not SourceKind.PATH:
            return False
        try:
            return stat.S_ISREG(os.stat(source.token).st_mode)
        except OSError:
            return False

    # ---------- helpers ----------

    def _read_path(self, source: Source) -> tuple[LoadStatus, bytes]:
        try:
            f = open(source.token, "rb")
        except OSError as e:
            self.show_strerror(source.token, e.strerror or str(e))
            self._set_error("Cannot open input file")
            return LoadStatus.FAILED, b""

        with f:
            try:
                return LoadStatus.OK, f.read()
            except OSError as e:
                # opened but unreadable
                self.show_strerror(source.token, e.strerror or str(e))
                self._set_error("Cannot read input file")
                return LoadStatus.INVALID, b""

    def _read_command(self, source: Source) -> tuple[LoadStatus, bytes]:
        exit_code, stdout, stderr, _started, _ms = self.executor.run(
            source.command
        )
        if stderr and not self.flags.scripted():
            self.error_fn(stderr if stderr.endswith("\n") else stderr + "\n")
        if exit_code in (COMMAND_NOT_FOUND, COMMAND_NOT_RUN):
            self._set_error("Cannot read input file")
            return LoadStatus.FAILED, b""
        return LoadStatus.OK, stdout.encode(
            self._encoding(), errors="surrogateescape"
        )

    def _encoding(self) -> str:
        return self.encoding or locale.getpreferredencoding(False)

    def line_count(self) -> int:
        return len(self.lines)
