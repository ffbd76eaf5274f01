"""Main editor controller."""

import logging
import os
import stat
import tempfile
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyEvent, KeyType, create_key_decoder
from .model import Cursor, Document
from .session import EditorSession
from .settings import EditorSettings
from .terminal import TerminalInterface
from .view import ScreenRenderer, Viewport

logger = logging.getLogger(__name__)

FILE_ENCODING = 'utf-8'
FILE_ERRORS = 'surrogateescape'  # keep undecodable bytes intact across load/save


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class Editor:
    """Owns the document, cursor, viewport and session, and runs the key loop."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = create_key_decoder(self.terminal, self.settings.escape_timeout)
        self.document = Document(tab_stop=self.settings.tab_stop)
        self.cursor = Cursor()
        self.viewport = Viewport()
        self.renderer = ScreenRenderer(self.viewport)
        self.session = EditorSession(quit_times=self.settings.quit_times,
                                     message_timeout=self.settings.message_timeout)
        self.command_registry = CommandRegistry()
        self.running = False

    def run(self):
        """Run the main editor loop until quit.

        Raises:
            TerminalError: on unrecoverable terminal I/O, after the terminal
                has been restored
        """
        self.session.set_status_message(EditorConstants.HELP_MESSAGE)
        self.running = True
        with self.terminal.raw_mode():
            while self.running:
                self.refresh_screen()
                self.process_keypress()
        logger.info("Session ended")

    def refresh_screen(self):
        """Draw the current editor state in a single write."""
        rows, columns = self.terminal.get_window_size()
        self.viewport.resize(rows, columns)
        frame = self.renderer.build_frame(self.document, self.cursor, self.session)
        self.terminal.write(frame)

    def process_keypress(self):
        key_event = self.keyboard.read_key()
        if key_event is None:
            logger.info("End of input, leaving")
            self.running = False
            return
        self.handle_key_event(key_event)

    def handle_key_event(self, key_event: KeyEvent) -> bool:
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with decoded key information

        Returns:
            True if the document was modified
        """
        if self.session.prompt_mode == 'save_as':
            self._handle_filename_prompt(key_event)
            return False
        return self.command_registry.execute(self, key_event)

    def request_quit(self):
        """Handle Ctrl-Q, asking for confirmation while there are unsaved changes."""
        self.session.quit_times -= 1
        if self.document.dirty and self.session.quit_times > 0:
            self.session.set_status_message(
                EditorConstants.QUIT_WARNING_MESSAGE.format(self.session.quit_times))
            return
        self.running = False

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file starts an empty document under that name.

        Args:
            filename: Path to file to load

        Raises:
            OSError: if the file exists but cannot be read
        """
        self.session.filename = filename
        try:
            with open(filename, 'r', encoding=FILE_ENCODING, errors=FILE_ERRORS, newline='') as f:
                content = f.read()
        except FileNotFoundError:
            logger.warning(f"{filename} does not exist, starting a new file")
            self.document.load("")
            return
        self.document.load(content)
        self.cursor = Cursor()
        logger.info(f"Loaded {self.document.row_count()} lines from {filename}")

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        content = self.document.serialize()
        data = content.encode(FILE_ENCODING, FILE_ERRORS)
        dir_name = os.path.dirname(filename) or '.'
        temp_filename = None
        try:
            try:
                mode = stat.S_IMODE(os.stat(filename).st_mode)
            except FileNotFoundError:
                mode = 0o666 & ~_current_umask()

            # Same directory as the target so the rename stays on one filesystem
            prefix = EditorConstants.ATOMIC_SAVE_PREFIX + os.path.basename(filename) + '.'
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name, prefix=prefix,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(data)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.chmod(temp_filename, mode)
            os.replace(temp_filename, filename)
        except OSError as e:
            reason = e.strerror or str(e)
            logger.warning(f"Could not save {filename}: {reason}")
            self.session.set_status_message(EditorConstants.SAVE_FAILED_MESSAGE.format(reason))
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError as cleanup_error:
                    logger.warning(f"Could not remove {temp_filename}: {cleanup_error}")
            return False

        self.session.filename = filename
        self.document.mark_clean()
        self.session.set_status_message(EditorConstants.SAVED_MESSAGE.format(len(data)))
        logger.info(f"Wrote {len(data)} bytes to {filename}")
        return True

    def handle_save(self):
        """Handle Ctrl-S: save, or ask for a filename first."""
        if self.session.filename:
            self.save_file(self.session.filename)
        else:
            self.session.start_prompt()

    def _handle_filename_prompt(self, key_event: KeyEvent):
        """Handle keypress during the save-as prompt."""
        session = self.session
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            session.end_prompt()
            session.set_status_message(EditorConstants.SAVE_ABORTED_MESSAGE)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if session.prompt_input:
                filename = session.prompt_input
                session.end_prompt()
                self.save_file(filename)
        elif (key_event.key_type == KeyType.SPECIAL and key_event.value in ('backspace', 'delete')) or \
             (key_event.key_type == KeyType.CTRL and key_event.value == 'h'):
            session.prompt_input = session.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR and key_event.code is not None:
            if 32 <= key_event.code < 127:
                session.prompt_input += key_event.value
