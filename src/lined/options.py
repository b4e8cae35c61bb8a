# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Command-line option table and dispatch.

The table is declarative; tokenizing is left to getopt.gnu_getopt, which
permutes options and positional arguments the GNU way. Dispatch maps each
recognized option code onto a flag write, a session call or a terminal
action.
"""

from __future__ import annotations

import getopt
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from .exit_codes import ExitStatus
from .flags import ModeFlags
from .interfaces import Session

if TYPE_CHECKING:
    from .startup import StartupResult  # pragma: no cover


class OptionCode(Enum):
    EXTENDED_REGEXP = auto()
    TRADITIONAL = auto()
    HELP = auto()
    LOOSE_EXIT_STATUS = auto()
    PROMPT = auto()
    RESTRICTED = auto()
    SCRIPTED = auto()
    VERBOSE = auto()
    VERSION = auto()
    STRIP_CR = auto()


# Options that end the program before anything else is looked at
TERMINAL_CODES = frozenset({OptionCode.HELP, OptionCode.VERSION})


@dataclass(frozen=True)
class OptionSpec:
    code: OptionCode
    short: str | None
    long: str
    takes_arg: bool = False


OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(OptionCode.EXTENDED_REGEXP, "E", "extended-regexp"),
    OptionSpec(OptionCode.TRADITIONAL, "G", "traditional"),
    OptionSpec(OptionCode.HELP, "h", "help"),
    OptionSpec(OptionCode.LOOSE_EXIT_STATUS, "l", "loose-exit-status"),
    OptionSpec(OptionCode.PROMPT, "p", "prompt", takes_arg=True),
    OptionSpec(OptionCode.RESTRICTED, "r", "restricted"),
    OptionSpec(OptionCode.SCRIPTED, "s", "quiet"),
    OptionSpec(OptionCode.SCRIPTED, None, "silent"),
    OptionSpec(OptionCode.VERBOSE, "v", "verbose"),
    OptionSpec(OptionCode.VERSION, "V", "version"),
    OptionSpec(OptionCode.STRIP_CR, None, "strip-trailing-cr"),
)


@dataclass(frozen=True)
class ParsedOption:
    code: OptionCode
    argument: str | None = None


class OptionError(Exception):
    """Raised when the command line cannot be parsed."""


def _getopt_spec(table: Iterable[OptionSpec]) -> tuple[str, list[str]]:
    shortopts = ""
    longopts: list[str] = []
    for spec in table:
        if spec.short and spec.short not in shortopts:
            shortopts += spec.short + (":" if spec.takes_arg else "")
        longopts.append(spec.long + ("=" if spec.takes_arg else ""))
    return shortopts, longopts


def parse_options(
    argv: list[str],
    table: tuple[OptionSpec, ...] = OPTIONS,
) -> tuple[list[ParsedOption], list[str]]:
    """Split argv into recognized options and positional arguments.

    Args:
        argv: Arguments without the program name
        table: Declared options

    Returns:
        (options in command-line order, positional arguments)

    Raises:
        OptionError: Unknown option, missing or unexpected argument,
            or an ambiguous long-option prefix
    """
    shortopts, longopts = _getopt_spec(table)
    try:
        pairs, positionals = getopt.gnu_getopt(argv, shortopts, longopts)
    except getopt.GetoptError as e:
        raise OptionError(str(e)) from e

    by_spelling: dict[str, OptionSpec] = {}
    for spec in table:
        if spec.short:
            by_spelling.setdefault(f"-{spec.short}", spec)
        by_spelling[f"--{spec.long}"] = spec

    parsed: list[ParsedOption] = []
    for opt, value in pairs:
        spec = by_spelling[opt]
        parsed.append(
            ParsedOption(spec.code, value if spec.takes_arg else None)
        )
    return parsed, positionals


def dispatch_option(
    option: ParsedOption,
    flags: ModeFlags,
    result: StartupResult,
    session: Session,
    show_help: Callable[[], None],
    show_version: Callable[[], None],
    show_error: Callable[[str], None],
) -> ExitStatus | None:
    """Apply one option. Returns an exit status if the program must stop."""
    code = option.code

    if code is OptionCode.EXTENDED_REGEXP:
        flags.extended_regexp(True)
    elif code is OptionCode.TRADITIONAL:
        flags.traditional(True)
    elif code is OptionCode.HELP:
        show_help()
        return ExitStatus.NORMAL
    elif code is OptionCode.LOOSE_EXIT_STATUS:
        result.loose_exit = True
    elif code is OptionCode.PROMPT:
        if not session.set_prompt(option.argument or ""):
            return ExitStatus.ENVIRONMENTAL
    elif code is OptionCode.RESTRICTED:
        flags.restricted(True)
    elif code is OptionCode.SCRIPTED:
        flags.scripted(True)
    elif code is OptionCode.VERBOSE:
        session.set_verbose()
    elif code is OptionCode.VERSION:
        show_version()
        return ExitStatus.NORMAL
    elif code is OptionCode.STRIP_CR:
        flags.strip_cr(True)
    else:
        show_error("internal error: uncaught option.")
        return ExitStatus.INTERNAL_BUG
    return None


def dispatch_options(
    options: list[ParsedOption],
    flags: ModeFlags,
    result: StartupResult,
    session: Session,
    show_help: Callable[[], None],
    show_version: Callable[[], None],
    show_error: Callable[[str], None],
) -> ExitStatus | None:
    """Apply options in order; help/version win wherever they appear."""
    terminal = next(
        (opt for opt in options if opt.code in TERMINAL_CODES), None
    )
    ordered = [terminal] if terminal is not None else options

    for option in ordered:
        status = dispatch_option(
            option, flags, result, session,
            show_help, show_version, show_error,
        )
        if status is not None:
            return status
    return None
