"""Tests for the command-line entry point."""

import logging
from unittest.mock import patch

import pytest
from tilde.__main__ import configure_logging, main
from tilde.settings import EditorSettings
from tilde.terminal import TerminalError


@pytest.fixture
def quiet():
    with patch("tilde.__main__.configure_logging"), \
         patch("tilde.settings.load_settings", return_value=EditorSettings()):
        yield


def test_too_many_arguments(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["a.txt", "b.txt"])
    assert exc.value.code == 2
    assert "usage" in capsys.readouterr().err


def test_opens_file_and_runs(quiet):
    with patch("tilde.editor.Editor") as editor_cls:
        main(["notes.txt"])
    editor = editor_cls.return_value
    editor.load_file.assert_called_once_with("notes.txt")
    editor.run.assert_called_once()


def test_no_argument_starts_empty(quiet):
    with patch("tilde.editor.Editor") as editor_cls:
        main([])
    editor_cls.return_value.load_file.assert_not_called()
    editor_cls.return_value.run.assert_called_once()


def test_fatal_terminal_error_exits_1(quiet, capsys):
    with patch("tilde.editor.Editor") as editor_cls:
        editor_cls.return_value.run.side_effect = TerminalError("read: Input/output error")
        with pytest.raises(SystemExit) as exc:
            main([])
    assert exc.value.code == 1
    assert "Error: read: Input/output error" in capsys.readouterr().err


def test_unreadable_file_exits_1(quiet, capsys):
    with patch("tilde.editor.Editor") as editor_cls:
        editor_cls.return_value.load_file.side_effect = IsADirectoryError(21, "Is a directory")
        with pytest.raises(SystemExit) as exc:
            main(["somedir"])
    assert exc.value.code == 1
    editor_cls.return_value.run.assert_not_called()


def test_configure_logging_writes_to_file(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    log_file = tmp_path / "logs" / "tilde.log"
    try:
        configure_logging("INFO", log_file)
        logging.getLogger("tilde.test").info("hello log")
        for handler in root.handlers:
            handler.flush()
        assert "hello log" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
