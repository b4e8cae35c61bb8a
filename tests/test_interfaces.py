"""
Tests that verify Protocol definitions are valid and implementations comply.
These tests don't test behavior - just that contracts exist.
"""

from __future__ import annotations

from lined import interfaces


def _methods(protocol) -> list[str]:
    return [
        name for name in vars(protocol)
        if not name.startswith("_") and callable(getattr(protocol, name))
    ]


def test_line_buffer_protocol_exists():
    protocol = interfaces.LineBuffer

    for method in ["init_buffers", "read_file", "set_def_filename", "is_regular_file"]:
        assert hasattr(protocol, method), f"LineBuffer missing {method}"


def test_session_protocol_exists():
    protocol = interfaces.Session

    for method in ["set_prompt", "set_verbose", "set_error_msg", "main_loop"]:
        assert hasattr(protocol, method), f"Session missing {method}"


def test_executor_and_ui_protocols_exist():
    assert hasattr(interfaces.Executor, "run")
    assert hasattr(interfaces.UI, "read")
    assert hasattr(interfaces.UI, "write")


def test_buffer_conforms_to_line_buffer_protocol():
    from lined.buffer import Buffer

    for method in _methods(interfaces.LineBuffer):
        assert hasattr(Buffer, method), f"Buffer missing {method}"


def test_edit_session_conforms_to_session_protocol():
    from lined.session import EditSession

    for method in _methods(interfaces.Session):
        assert hasattr(EditSession, method), f"EditSession missing {method}"


def test_subprocess_executor_conforms_to_executor_protocol():
    from lined.executor import SubprocessExecutor

    assert callable(getattr(SubprocessExecutor, "run", None))


def test_terminal_ui_conforms_to_ui_protocol():
    from lined.ui import TerminalUI

    for method in _methods(interfaces.UI):
        assert hasattr(TerminalUI, method), f"TerminalUI missing {method}"


def test_load_result_ok_property():
    ok = interfaces.LoadResult(interfaces.LoadStatus.OK, size=3, lines=1)
    bad = interfaces.LoadResult(interfaces.LoadStatus.FAILED)

    assert ok.ok is True
    assert bad.ok is False
    assert bad.size == 0
