# tests/test_session.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from lined import session as session_mod
from lined.buffer import Buffer
from lined.flags import ModeFlags
from lined.session import EditSession


@dataclass
class FakeUI:
    """
    UI abstraction used by the session:
      - read(prompt) -> str
      - write(text) -> None
    """

    inputs: list[str]
    outputs: list[str] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    def read(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def write(self, text: str) -> None:
        self.outputs.append(text)

    @property
    def text(self) -> str:
        return "".join(self.outputs)


class FakeExecutor:
    def __init__(self):
        self.commands_run = []

    def run(self, command: str) -> tuple[int, str, str, str, int]:
        self.commands_run.append(command)
        return (0, "output\n", "", "2025-12-14T10:00:00", 100)


def make_session(
    inputs: list[str],
    flags: ModeFlags | None = None,
    lines: list[str] | None = None,
) -> EditSession:
    flags = flags or ModeFlags()
    executor = FakeExecutor()
    buffer = Buffer(flags=flags, executor=executor)
    buffer.init_buffers()
    buffer.lines = list(lines or [])
    ui = FakeUI(inputs=list(inputs))
    sess = EditSession(
        flags=flags, buffer=buffer, executor=executor, ui=ui,
        default_prompt="*",
    )
    buffer.record_error = sess.set_error_msg
    return sess


def restricted_flags() -> ModeFlags:
    flags = ModeFlags()
    flags.restricted(True)
    return flags


# ----------------------------------------------------------------
# Session protocol
# ----------------------------------------------------------------


def test_set_prompt_turns_prompt_on() -> None:
    sess = make_session(["q"])

    assert sess.set_prompt("> ") is True
    sess.main_loop(False, False)

    assert sess.ui.prompts == ["> "]


def test_set_prompt_rejects_newline() -> None:
    sess = make_session([])

    assert sess.set_prompt("a\nb") is False
    assert sess.errmsg == "Invalid prompt"
    assert sess.prompt_on is False


def test_no_prompt_by_default() -> None:
    sess = make_session(["q"])
    sess.main_loop(False, False)

    assert sess.ui.prompts == [""]


def test_set_verbose_prints_messages() -> None:
    sess = make_session(["bogus"])
    sess.set_verbose()

    sess.main_loop(False, False)

    assert sess.ui.text == "?\nUnknown command\n"


# ----------------------------------------------------------------
# Exit status
# ----------------------------------------------------------------


def test_clean_session_exits_zero() -> None:
    assert make_session(["=", "q"]).main_loop(False, False) == 0


def test_end_of_input_ends_the_loop() -> None:
    assert make_session([]).main_loop(False, False) == 0


def test_initial_error_makes_status_one() -> None:
    assert make_session(["q"]).main_loop(True, False) == 1


def test_failed_command_makes_status_one() -> None:
    sess = make_session(["bogus", "q"])

    assert sess.main_loop(False, False) == 1
    assert sess.ui.text == "?\n"
    assert sess.errmsg == "Unknown command"


def test_loose_exit_ignores_failures() -> None:
    assert make_session(["bogus", "q"]).main_loop(True, True) == 0


def test_lines_after_quit_are_not_read() -> None:
    sess = make_session(["q", "bogus"])

    assert sess.main_loop(False, False) == 0
    assert sess.ui.inputs == ["bogus"]


# ----------------------------------------------------------------
# Commands
# ----------------------------------------------------------------


def test_h_prints_last_error() -> None:
    sess = make_session(["bogus", "h"])
    sess.main_loop(False, False)

    assert sess.ui.text == "?\nUnknown command\n"


def test_H_toggles_verbose() -> None:
    sess = make_session(["bogus", "H", "bogus", "H", "bogus"])
    sess.main_loop(False, False)

    assert sess.ui.text == "?\nUnknown command\n?\nUnknown command\n?\n"


def test_P_toggles_default_prompt() -> None:
    sess = make_session(["P", "P", "q"])
    sess.main_loop(False, False)

    assert sess.ui.prompts == ["", "*", ""]


def test_P_keeps_custom_prompt() -> None:
    sess = make_session(["P", "P", "q"])
    sess.set_prompt(": ")
    sess.main_loop(False, False)

    assert sess.ui.prompts == [": ", "", ": "]


def test_equals_prints_line_count() -> None:
    sess = make_session(["="], lines=["a", "b", "c"])
    sess.main_loop(False, False)

    assert sess.ui.text == "3\n"


def test_print_buffer() -> None:
    sess = make_session([",p"], lines=["a", "b"])
    sess.main_loop(False, False)

    assert sess.ui.text == "a\nb\n"


def test_print_empty_buffer_is_an_error() -> None:
    sess = make_session([",p"])

    assert sess.main_loop(False, False) == 1
    assert sess.errmsg == "Invalid address"


def test_f_sets_and_prints_filename() -> None:
    sess = make_session(["f notes.txt", "f"])
    sess.main_loop(False, False)

    assert sess.buffer.def_filename == "notes.txt"
    assert sess.ui.text == "notes.txt\nnotes.txt\n"


def test_f_without_filename_is_an_error() -> None:
    sess = make_session(["f"])

    assert sess.main_loop(False, False) == 1
    assert sess.errmsg == "No current filename"


def test_f_respects_restricted_mode() -> None:
    sess = make_session(["f ../secret"], flags=restricted_flags())

    assert sess.main_loop(False, False) == 1
    assert sess.errmsg == "Directory access restricted"
    assert sess.buffer.def_filename == ""


def test_shell_command_runs() -> None:
    sess = make_session(["!echo hi"])
    sess.main_loop(False, False)

    assert sess.executor.commands_run == ["echo hi"]
    assert sess.ui.text == "output\n!\n"


def test_shell_bang_suppressed_when_scripted() -> None:
    flags = ModeFlags()
    flags.scripted(True)
    sess = make_session(["!echo hi"], flags=flags)
    sess.main_loop(False, False)

    assert sess.ui.text == "output\n"


def test_shell_command_denied_in_restricted_mode() -> None:
    sess = make_session(["!ls"], flags=restricted_flags())

    assert sess.main_loop(False, False) == 1
    assert sess.executor.commands_run == []
    assert sess.errmsg == "Shell access restricted"


def test_empty_shell_command_is_an_error() -> None:
    sess = make_session(["!"])

    assert sess.main_loop(False, False) == 1
    assert sess.errmsg == "No command"


def test_blank_line_is_ignored() -> None:
    sess = make_session(["", "q"])

    assert sess.main_loop(False, False) == 0
    assert sess.ui.text == ""


def test_keyboard_interrupt_reports_and_continues() -> None:
    sess = make_session(["q"])
    original_read = sess.ui.read
    raised = []

    def read(prompt: str) -> str:
        if not raised:
            raised.append(True)
            raise KeyboardInterrupt
        return original_read(prompt)

    sess.ui.read = read  # type: ignore[method-assign]

    assert sess.main_loop(False, False) == 1
    assert sess.ui.text == "\n?\n"
    assert sess.errmsg == "Interrupt"


# ----------------------------------------------------------------
# Crash log
# ----------------------------------------------------------------


def test_unhandled_exception_is_logged_and_session_continues(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LINED_DATA_HOME", str(tmp_path))
    sess = make_session(["boom", "="], lines=["a"])
    original = sess.handle_command

    def handle(line: str) -> None:
        if line == "boom":
            raise RuntimeError("kaboom")
        original(line)

    monkeypatch.setattr(sess, "handle_command", handle)

    assert sess.main_loop(False, False) == 1
    assert "[ERROR] Unhandled exception: RuntimeError: kaboom\n" in sess.ui.outputs
    assert sess.ui.outputs[-1] == "1\n"

    log = (tmp_path / "lined" / "logs" / "crash.log").read_text(encoding="utf-8")
    assert "command=boom" in log
    assert "error=RuntimeError: kaboom" in log
    assert "Traceback" in log


def test_write_crash_log_records_enabled_flags(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LINED_DATA_HOME", str(tmp_path))
    flags = restricted_flags()

    try:
        raise ValueError("bad")
    except ValueError as e:
        session_mod.write_crash_log(e, command="x", flags=flags)

    log = (tmp_path / "lined" / "logs" / "crash.log").read_text(encoding="utf-8")
    assert "flags=restricted" in log
    assert log.rstrip().endswith("----")
