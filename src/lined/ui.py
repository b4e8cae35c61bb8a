# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

from __future__ import annotations

import sys
from typing import TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.shortcuts import print_formatted_text


class TerminalUI:
    """
    Line-at-a-time terminal I/O:
      - Interactive stdin: PromptSession (history, line editing,
        Ctrl+L to clear).
      - Anything else (pipes, here-documents, files): plain stream reads,
        so scripts see exactly the bytes they sent.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        interactive: bool | None = None,
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        if interactive is None:
            interactive = self._isatty(self.stdin)
        self.interactive = interactive
        self.session: PromptSession[str] | None = None

    @staticmethod
    def _isatty(stream: TextIO) -> bool:
        try:
            return stream.isatty()
        except (AttributeError, ValueError):
            return False

    # ---------- session ----------

    def _ensure_session(self) -> None:
        if self.session is not None:
            return
        self.session = PromptSession(
            history=InMemoryHistory(),
            key_bindings=self.build_key_bindings(),
        )

    def build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("c-l")
        def _(event):
            event.app.renderer.clear()
            event.app.invalidate()

        return kb

    # ---------- public API ----------

    def read(self, prompt: str) -> str:
        """Read one line without its newline. EOFError at end of input."""
        if self.interactive:
            self._ensure_session()
            assert self.session is not None
            with patch_stdout():
                return self.session.prompt(ANSI(prompt))

        if prompt:
            self.write(prompt)
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line[:-1] if line.endswith("\n") else line

    def write(self, text: str) -> None:
        """Write EXACTLY what we receive (no extra newline)."""
        if not text:
            return
        if self.interactive:
            # plain str: escape bytes in buffer text are not formatting
            print_formatted_text(text, end="")
            return
        try:
            self.stdout.write(text)
        except UnicodeEncodeError:
            # lines loaded from bytes outside the locale encoding
            self._write_raw(text)
        self.stdout.flush()

    def _write_raw(self, text: str) -> None:
        encoding = getattr(self.stdout, "encoding", None) or "utf-8"
        raw = text.encode(encoding, errors="surrogateescape")
        binary = getattr(self.stdout, "buffer", None)
        if binary is None:
            self.stdout.write(raw.decode(encoding, errors="replace"))
            return
        self.stdout.flush()
        binary.write(raw)
