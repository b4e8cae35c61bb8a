# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Interactive editing session.

Owns the prompt, the verbose-error switch and the last error message, and
runs the command loop. Only a small command set is understood:

  q, Q        quit
  h           print the last error message
  H           toggle verbose error messages
  P           toggle the prompt
  f [file]    print or set the default filename
  =           print the number of lines in the buffer
  ,p          print the buffer
  !command    run a shell command

A failed command prints '?' (followed by the message in verbose mode).
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from datetime import datetime

from . import config as cfg_module
from .access import may_access_filename
from .buffer import Buffer
from .flags import ModeFlags
from .interfaces import UI, Executor


def write_crash_log(
    error: Exception,
    command: str = "",
    def_filename: str = "",
    flags: ModeFlags | None = None,
) -> None:
    """Write an entry to the crash log.

    Only creates the log directory when actually needed.
    Appends to crash.log (never overwrites).
    """
    try:
        crash_log = cfg_module.crash_log_path(cfg_module.get_data_root())
        crash_log.parent.mkdir(parents=True, exist_ok=True)

        lines = [f"{datetime.now().isoformat()}"]
        if command:
            lines.append(f"command={command}")
        if def_filename:
            lines.append(f"file={def_filename}")
        if flags is not None:
            enabled = [k for k, v in flags.as_dict().items() if v]
            lines.append(f"flags={','.join(enabled)}")

        lines.append(f"error={type(error).__name__}: {error}")
        lines.append("traceback:")
        lines.append(traceback.format_exc())
        lines.append("----")

        with crash_log.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    except OSError:
        # Already reporting an error; nothing more to do
        pass


class CommandError(Exception):
    """A command failed; the message becomes the last error."""


@dataclass
class EditSession:
    """Session implementation driving a Buffer through a TerminalUI."""

    flags: ModeFlags
    buffer: Buffer
    executor: Executor
    ui: UI
    default_prompt: str = "*"

    prompt: str = ""
    prompt_on: bool = False
    verbose: bool = False
    errmsg: str = ""
    failed: bool = False
    running: bool = False

    # ---------- Session protocol ----------

    def set_prompt(self, text: str) -> bool:
        if "\n" in text:
            self.set_error_msg("Invalid prompt")
            return False
        self.prompt = text
        self.prompt_on = True
        return True

    def set_verbose(self) -> None:
        self.verbose = True

    def set_error_msg(self, text: str) -> None:
        self.errmsg = text

    def main_loop(self, initial_error: bool, loose: bool) -> int:
        self.failed = initial_error
        self.running = True

        while self.running:
            try:
                line = self.ui.read(self.prompt if self.prompt_on else "")
            except EOFError:
                break
            except KeyboardInterrupt:
                self.ui.write("\n")
                self._report("Interrupt")
                continue

            try:
                self.handle_command(line)
            except CommandError as e:
                self._report(str(e))
            except Exception as e:
                write_crash_log(
                    e,
                    command=line,
                    def_filename=self.buffer.def_filename,
                    flags=self.flags,
                )
                self.failed = True
                self.ui.write(
                    f"[ERROR] Unhandled exception: {type(e).__name__}: {e}\n"
                )

        self.running = False
        if loose:
            return 0
        return 1 if self.failed else 0

    # ---------- commands ----------

    def _report(self, msg: str) -> None:
        self.failed = True
        self.set_error_msg(msg)
        self.ui.write("?\n")
        if self.verbose:
            self.ui.write(f"{msg}\n")

    def _check_access(self, name: str) -> None:
        if not may_access_filename(name, self.flags, self.set_error_msg):
            raise CommandError(self.errmsg)

    def handle_command(self, line: str) -> None:
        """Run one command line. Raises CommandError on failure."""
        if line.startswith("!"):
            self._shell(line)
            return

        cmd = line.strip()
        if not cmd:
            return
        if cmd in ("q", "Q"):
            self.running = False
        elif cmd == "h":
            if self.errmsg:
                self.ui.write(f"{self.errmsg}\n")
        elif cmd == "H":
            self.verbose = not self.verbose
            if self.verbose and self.errmsg:
                self.ui.write(f"{self.errmsg}\n")
        elif cmd == "P":
            if not self.prompt:
                self.prompt = self.default_prompt
            self.prompt_on = not self.prompt_on
        elif cmd == "=":
            self.ui.write(f"{self.buffer.line_count()}\n")
        elif cmd == ",p":
            if not self.buffer.lines:
                raise CommandError("Invalid address")
            self.ui.write("".join(f"{ln}\n" for ln in self.buffer.lines))
        elif cmd == "f" or cmd.startswith("f "):
            self._filename(cmd[1:].strip())
        else:
            raise CommandError("Unknown command")

    def _filename(self, name: str) -> None:
        if name:
            self._check_access(name)
            if not self.buffer.set_def_filename(name):
                raise CommandError(self.errmsg)
        elif not self.buffer.def_filename:
            raise CommandError("No current filename")
        self.ui.write(f"{self.buffer.def_filename}\n")

    def _shell(self, line: str) -> None:
        self._check_access(line)
        command = line[1:].strip()
        if not command:
            raise CommandError("No command")
        _code, stdout, stderr, _started, _ms = self.executor.run(command)
        self.ui.write(stdout)
        self.ui.write(stderr)
        if not self.flags.scripted():
            self.ui.write("!\n")
