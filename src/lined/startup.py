# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Startup sequence.

Design:
- Options are parsed and applied to the ModeFlags passed in.
- The buffer is initialized and the optional initial source loaded.
- Setup failures end the process with status 1; a failed load of a
  regular file ends it with status 2; any other load problem is deferred
  and reported with a single '?' once the session starts.
- The session's main loop decides the final exit status.
"""

from __future__ import annotations

import locale
import sys
from collections.abc import Callable
from dataclasses import dataclass

from . import config as cfg_module
from .access import may_access_filename
from .exit_codes import ExitStatus
from .flags import ModeFlags
from .interfaces import LineBuffer, LoadStatus, Session
from .options import OptionError, dispatch_options, parse_options
from .source import Source, SourceKind


@dataclass
class StartupResult:
    initial_error: bool = False  # initial source could not be read
    loose_exit: bool = False


def _stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _stderr(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


def init_locale() -> None:
    """Set the process locale from the environment."""
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        # environment names a locale this system does not have
        locale.setlocale(locale.LC_ALL, "C")


@dataclass
class Startup:
    """Startup sequencer; one instance per process run."""

    flags: ModeFlags
    buffer: LineBuffer
    session: Session
    config: cfg_module.YAMLConfig
    invocation_name: str = "lined"
    output_fn: Callable[[str], None] = _stdout
    error_fn: Callable[[str], None] = _stderr

    def show_help(self) -> None:
        self.output_fn(cfg_module.help_text(self.config, self.invocation_name))

    def show_version(self) -> None:
        self.output_fn(cfg_module.version_text(self.config))

    def show_error(self, msg: str, hint: bool = False) -> None:
        if msg:
            self.error_fn(f"{self.config.program_name}: {msg}\n")
        if hint:
            self.error_fn(
                f"Try '{self.invocation_name} --help' "
                "for more information.\n"
            )

    def _load_initial_source(
        self, source: Source, result: StartupResult
    ) -> ExitStatus | None:
        """Load the first positional source; status only if fatal."""
        if not may_access_filename(
            source.token, self.flags, self.session.set_error_msg
        ):
            result.initial_error = True
            return None

        loaded = self.buffer.read_file(source)
        if loaded.status is not LoadStatus.OK:
            if self.buffer.is_regular_file(source):
                return ExitStatus.CORRUPT_INPUT
            result.initial_error = True

        if not source.is_shell_command:
            if not self.buffer.set_def_filename(source.token):
                return ExitStatus.ENVIRONMENTAL
        return None

    def run(self, argv: list[str]) -> int:
        """Run the startup sequence and return the process exit status."""
        result = StartupResult()

        try:
            options, positionals = parse_options(argv)
        except OptionError as e:
            self.show_error(str(e), hint=True)
            return ExitStatus.ENVIRONMENTAL

        status = dispatch_options(
            options,
            self.flags,
            result,
            self.session,
            self.show_help,
            self.show_version,
            self.show_error,
        )
        if status is not None:
            return status

        init_locale()
        if not self.buffer.init_buffers():
            return ExitStatus.ENVIRONMENTAL

        for token in positionals:
            source = Source.parse(token)
            if source.kind is SourceKind.STDIN:
                self.flags.scripted(True)
                continue
            status = self._load_initial_source(source, result)
            if status is not None:
                return status
            break

        if result.initial_error:
            self.output_fn("?\n")
        return self.session.main_loop(result.initial_error, result.loose_exit)


def run(
    argv: list[str],
    flags: ModeFlags,
    buffer: LineBuffer,
    session: Session,
    config: cfg_module.YAMLConfig,
    invocation_name: str = "lined",
    output_fn: Callable[[str], None] | None = None,
    error_fn: Callable[[str], None] | None = None,
) -> int:
    startup = Startup(
        flags=flags,
        buffer=buffer,
        session=session,
        config=config,
        invocation_name=invocation_name,
        output_fn=output_fn or _stdout,
        error_fn=error_fn or _stderr,
    )
    return startup.run(argv)
