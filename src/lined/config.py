# lined — Line-Oriented Text Editor
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Configuration and filesystem discovery for lined.

Handles:
- Packaged YAML defaults loading (lined/defaults/system.yaml)
- Data root resolution (LINED_DATA_HOME, ~/.local/share) for crash logs
- Help and version text built from the program section of the defaults
"""

from __future__ import annotations

import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


# -----------------------
# Config model wrapper
# -----------------------


class YAMLConfig:
    """Simple config wrapper over the loaded defaults mapping."""

    def __init__(self, config_dict: dict[str, Any]):
        self._config = config_dict

    @property
    def program(self) -> dict[str, Any]:
        prog = self._config.get("program", {})
        return prog if isinstance(prog, dict) else {}

    @property
    def program_name(self) -> str:
        return str(self.program.get("name", "lined"))

    @property
    def version(self) -> str:
        return str(self.program.get("version", "0"))

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def get_path(self, path: str, default: Any = None) -> Any:
        """
        Nested lookup using dot-separated path.
        Example: get_path("session.default_prompt", "*") -> "*"
        """
        if not path:
            return default

        cur: Any = self._config
        for part in path.split("."):
            if not isinstance(cur, dict):
                return default
            if part not in cur:
                return default
            cur = cur[part]
        return cur


# -----------------------
# Data root + log helpers
# -----------------------


def get_data_root() -> Path:
    """Get the data root directory for lined.

    Resolution order:
    1. LINED_DATA_HOME environment variable (if set)
    2. ~/.local/share (default, XDG_DATA_HOME is ignored)
    """
    lined_data_home = os.getenv("LINED_DATA_HOME")
    if lined_data_home:
        return Path(lined_data_home)
    return Path.home() / ".local" / "share"


def crash_log_path(data_root: Path) -> Path:
    """<data_root>/lined/logs/crash.log"""
    return data_root / "lined" / "logs" / "crash.log"


# -----------------------
# Packaged defaults loading
# -----------------------


def _defaults_dir() -> Path:
    """Return the installed path to packaged defaults directory."""
    return Path(str(resources.files("lined.defaults")))


def load_defaults_yaml(filename: str) -> dict[str, Any]:
    """
    Load a YAML file from lined/defaults/.
    """
    defaults_dir = _defaults_dir()
    path = defaults_dir / filename
    if not path.exists():
        raise FileNotFoundError(
            f"Missing defaults YAML: {filename} "
            f"(looked in {defaults_dir})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Defaults YAML {filename} must load to a mapping/dict."
        )
    return data


def load_system_config() -> YAMLConfig:
    """
    Load system.yaml from packaged defaults and return a YAMLConfig wrapper.
    """
    return YAMLConfig(load_defaults_yaml("system.yaml"))


# -----------------------
# Help / version text
# -----------------------


def help_text(cfg: YAMLConfig, invocation_name: str) -> str:
    restricted_name = cfg.get_path("program.restricted_name", "")
    lines = [
        f"{cfg.program_name} is a line-oriented text editor. It is used to "
        "create, display,",
        "modify and otherwise manipulate text files, both interactively "
        "and via",
        "shell scripts.",
    ]
    if restricted_name:
        lines.append(
            f"A restricted version, {restricted_name}, can only edit files "
            "in the current"
        )
        lines.append("directory and cannot execute shell commands.")
    lines += [
        "",
        f"Usage: {invocation_name} [options] [file]",
        "",
        "Options:",
        "  -h, --help                 display this help and exit",
        "  -V, --version              output version information and exit",
        "  -E, --extended-regexp      use extended regular expressions",
        "  -G, --traditional          run in compatibility mode",
        "  -l, --loose-exit-status    exit with 0 status even if a command "
        "fails",
        "  -p, --prompt=STRING        use STRING as an interactive prompt",
        "  -r, --restricted           run in restricted mode",
        "  -s, --quiet, --silent      suppress diagnostics, byte counts and "
        "'!' prompt",
        "  -v, --verbose              be verbose; equivalent to the 'H' "
        "command",
        "      --strip-trailing-cr    strip carriage returns at end of text "
        "lines",
        "",
        "Start edit by reading in 'file' if given.",
        "If 'file' begins with a '!', read output of shell command.",
        "",
        "Exit status: 0 for a normal exit, 1 for environmental problems "
        "(file",
        "not found, invalid flags, I/O errors, etc), 2 to indicate a "
        "corrupt or",
        "invalid input file, 3 for an internal consistency error (e.g., bug) "
        "which",
        f"caused {cfg.program_name} to panic.",
    ]
    bug_report = cfg.get_path("program.bug_report", "")
    home_page = cfg.get_path("program.home_page", "")
    if bug_report or home_page:
        lines.append("")
    if bug_report:
        lines.append(f"Report bugs to {bug_report}")
    if home_page:
        lines.append(f"{cfg.program_name} home page: {home_page}")
    return "\n".join(lines) + "\n"


def version_text(cfg: YAMLConfig) -> str:
    year = cfg.get_path("program.year", "")
    return (
        f"{cfg.program_name} {cfg.version}\n"
        f"Copyright (C) {year} TriFactoria (Andrew Blankfield).\n"
        "License BSL 1.1, converting to Apache 2.0 on 2029-01-01.\n"
    )
