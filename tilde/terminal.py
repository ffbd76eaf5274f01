"""Terminal interface using Blessed for raw mode and dimensions."""

import blessed
import contextlib
import errno
import logging
import os
import select
import sys
from typing import Iterator, Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class TerminalError(Exception):
    """Unrecoverable terminal I/O or dimension failure."""


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 input_fd: Optional[int] = None, output=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self._input_fd = input_fd
        self.output = output if output is not None else sys.stdout
        self.in_raw_mode = False

    @property
    def input_fd(self) -> int:
        if self._input_fd is None:
            self._input_fd = sys.stdin.fileno()
        return self._input_fd

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator["TerminalInterface"]:
        """Switch to the alternate screen in raw mode for the duration of the block.

        The original terminal attributes are restored however the block
        exits, including on exceptions.
        """
        with self.term.fullscreen(), self.term.raw():
            self.in_raw_mode = True
            logger.debug("Entered raw mode")
            try:
                yield self
            finally:
                self.in_raw_mode = False
                try:
                    self.write(EditorConstants.CLEAR_SCREEN + EditorConstants.CURSOR_HOME)
                except TerminalError as e:
                    logger.warning(f"Could not clear screen on exit: {e}")
        logger.debug("Left raw mode")

    def get_window_size(self) -> tuple[int, int]:
        """Return (rows, columns) of the terminal.

        Raises:
            TerminalError: if the size is unknown or too small to draw in
        """
        try:
            rows, columns = self.term.height, self.term.width
        except (OSError, TypeError, ValueError) as e:
            raise TerminalError(f"get window size: {e}") from e
        if not rows or not columns or rows <= EditorConstants.BAR_HEIGHT or columns < 1:
            raise TerminalError(f"get window size: unusable size {columns}x{rows}")
        return rows, columns

    def read_byte(self, timeout: Optional[float] = None) -> Optional[int]:
        """Read a single byte from the keyboard.

        Args:
            timeout: Seconds to wait (None blocks until input arrives)

        Returns:
            The byte value, or None on timeout or end of input.
        """
        while True:
            try:
                ready, _, _ = select.select([self.input_fd], [], [], timeout)
                if not ready:
                    return None
                data = os.read(self.input_fd, 1)
            except InterruptedError:
                continue
            except OSError as e:
                if e.errno == errno.EAGAIN:
                    return None
                raise TerminalError(f"read: {e}") from e
            if not data:
                return None
            return data[0]

    def write(self, frame: str) -> None:
        """Write a whole frame and flush it."""
        try:
            self.output.write(frame)
            self.output.flush()
        except OSError as e:
            raise TerminalError(f"write: {e}") from e

