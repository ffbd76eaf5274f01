"""Tests for the editor's read/dispatch/refresh loop."""

import contextlib

import pytest
from tilde.constants import EditorConstants
from tilde.editor import Editor
from tilde.terminal import TerminalError


class MockTerminal:
    """Mock terminal that replays bytes and records frames."""

    def __init__(self, data=b"", size=(10, 40)):
        self._byte_queue = list(data)
        self.size = size
        self.frames = []
        self.raw_entered = 0
        self.raw_exited = 0

    def read_byte(self, timeout=None):
        if self._byte_queue:
            return self._byte_queue.pop(0)
        return None

    def get_window_size(self):
        if isinstance(self.size, Exception):
            raise self.size
        return self.size

    def write(self, frame):
        self.frames.append(frame)

    @contextlib.contextmanager
    def raw_mode(self):
        self.raw_entered += 1
        try:
            yield self
        finally:
            self.raw_exited += 1


def test_run_types_and_quits():
    terminal = MockTerminal(b"hi\x1b[D!\x11\x11\x11")
    editor = Editor(terminal=terminal)

    editor.run()

    assert editor.document.lines() == ["h!i"]
    assert editor.running is False
    assert terminal.raw_entered == terminal.raw_exited == 1
    # One frame per keypress handled
    assert len(terminal.frames) == 7


def test_run_quits_immediately_when_clean():
    terminal = MockTerminal(b"\x11")
    editor = Editor(terminal=terminal)
    editor.run()
    assert len(terminal.frames) == 1
    assert EditorConstants.HELP_MESSAGE in terminal.frames[0]


def test_run_stops_at_end_of_input():
    terminal = MockTerminal(b"abc")
    editor = Editor(terminal=terminal)
    editor.run()
    assert editor.document.lines() == ["abc"]
    assert terminal.raw_exited == 1


def test_each_frame_is_a_single_write():
    terminal = MockTerminal(b"\x11")
    Editor(terminal=terminal).run()
    frame = terminal.frames[0]
    assert frame.startswith(EditorConstants.HIDE_CURSOR + EditorConstants.CURSOR_HOME)
    assert frame.endswith(EditorConstants.SHOW_CURSOR)


def test_viewport_follows_terminal_size():
    terminal = MockTerminal(b"\x11", size=(30, 100))
    editor = Editor(terminal=terminal)
    editor.run()
    assert editor.viewport.screen_rows == 28
    assert editor.viewport.screen_columns == 100


def test_terminal_error_restores_and_propagates():
    terminal = MockTerminal(b"abc", size=TerminalError("get window size"))
    editor = Editor(terminal=terminal)
    with pytest.raises(TerminalError):
        editor.run()
    assert terminal.raw_exited == 1
