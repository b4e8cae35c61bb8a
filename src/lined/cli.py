# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
lined CLI entry points.

Design:
- CLI owns process startup and wiring.
- ModeFlags is built here once and handed to every collaborator.
- The startup sequence decides the exit status (or delegates it to the
  session's main loop).
"""

from __future__ import annotations

import sys

from . import config, startup
from .buffer import Buffer
from .executor import SubprocessExecutor
from .flags import ModeFlags
from .session import EditSession
from .ui import TerminalUI


def build_session(
    cfg: config.YAMLConfig,
    flags: ModeFlags,
    ui: TerminalUI | None = None,
) -> EditSession:
    """Wire buffer, executor and UI into a session."""
    ui = ui or TerminalUI()
    executor = SubprocessExecutor(
        timeout=int(cfg.get_path("execution.timeout", 30))
    )
    buffer = Buffer(
        flags=flags,
        executor=executor,
        max_filename=int(cfg.get_path("buffer.max_filename", 4096)),
        output_fn=ui.write,
    )
    session = EditSession(
        flags=flags,
        buffer=buffer,
        executor=executor,
        ui=ui,
        default_prompt=str(cfg.get_path("session.default_prompt", "*")),
    )
    buffer.record_error = session.set_error_msg
    return session


def run(argv: list[str]) -> int:
    """Run lined with a full argv (program name first)."""
    cfg = config.load_system_config()
    flags = ModeFlags()
    session = build_session(cfg, flags)
    invocation_name = argv[0] if argv else cfg.program_name

    return startup.run(
        argv[1:],
        flags=flags,
        buffer=session.buffer,
        session=session,
        config=cfg,
        invocation_name=invocation_name,
    )


def main() -> None:
    """Main entry point for lined."""
    sys.exit(run(sys.argv))


def main_restricted() -> None:
    """Entry point for rlined: lined in restricted mode."""
    argv = list(sys.argv) or ["rlined"]
    sys.exit(run([argv[0], "--restricted", *argv[1:]]))
