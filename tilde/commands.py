"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor, key_event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class ArrowCommand(MovementCommand):
    def __init__(self, direction: str):
        self.direction = direction

    def _move(self, editor, key_event):
        editor.cursor = editor.document.move_cursor(editor.cursor, self.direction)


class PageCommand(MovementCommand):
    """Jump to the top or bottom screen row, then step a full screen.

    Stepping reuses the single-cell move, so row clamping and the stop at
    either end of the document come from there.
    """

    def __init__(self, direction: str):
        self.direction = direction

    def _move(self, editor, key_event):
        viewport = editor.viewport
        if self.direction == 'up':
            editor.cursor.y = viewport.row_offset
        else:
            editor.cursor.y = min(viewport.row_offset + viewport.screen_rows - 1,
                                  editor.document.row_count())
        for _ in range(viewport.screen_rows):
            editor.cursor = editor.document.move_cursor(editor.cursor, self.direction)


class HomeCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.x = 0


class EndCommand(MovementCommand):
    def _move(self, editor, key_event):
        row = editor.document.row(editor.cursor.y)
        if row is not None:
            editor.cursor.x = len(row)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands report a change if the dirty counter moved."""
        before = editor.document.dirty
        self._edit(editor, key_event)
        return editor.document.dirty != before

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        # Control chords carry their letter; insert the byte itself
        char = chr(key_event.code) if key_event.code is not None else key_event.value
        cursor = editor.cursor
        editor.cursor = editor.document.insert_char_at(cursor.y, cursor.x, char)


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        cursor = editor.cursor
        editor.cursor = editor.document.insert_newline(cursor.y, cursor.x)


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        cursor = editor.cursor
        editor.cursor = editor.document.delete_char_before(cursor.y, cursor.x)


class DeleteCharCommand(EditCommand):
    """Delete under the cursor: step right, then delete before."""

    def _edit(self, editor, key_event):
        editor.cursor = editor.document.move_cursor(editor.cursor, 'right')
        cursor = editor.cursor
        editor.cursor = editor.document.delete_char_before(cursor.y, cursor.x)


class NoOpCommand(EditorCommand):
    def execute(self, editor, key_event):
        return False


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        for direction in ('left', 'right', 'up', 'down'):
            self.register((KeyType.SPECIAL, direction), ArrowCommand(direction))
        self.register((KeyType.SPECIAL, 'page_up'), PageCommand('up'))
        self.register((KeyType.SPECIAL, 'page_down'), PageCommand('down'))
        self.register((KeyType.SPECIAL, 'home'), HomeCommand())
        self.register((KeyType.SPECIAL, 'end'), EndCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.CTRL, 'h'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())

        # Ignored keys
        self.register((KeyType.SPECIAL, 'escape'), NoOpCommand())
        self.register((KeyType.CTRL, 'l'), NoOpCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Any key other than quit re-arms the quit confirmation counter.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if not isinstance(command, QuitCommand):
            editor.session.reset_quit_times()

        if command:
            return command.execute(editor, key_event)

        # Unbound literal bytes below 128 are inserted as typed
        if key_event.key_type in (KeyType.REGULAR, KeyType.CTRL):
            if key_event.code is not None and key_event.code < 128:
                return InsertTextCommand().execute(editor, key_event)

        return False
