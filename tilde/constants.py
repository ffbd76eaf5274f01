"""Constants and configuration for the tilde editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    VERSION = "0.0.1"

    # Document layout
    TAB_STOP = 8  # Tabs expand to the next multiple of this column
    FILLER_MARKER = "~"  # Drawn on screen rows past end-of-document

    # Screen layout
    BAR_HEIGHT = 2  # Status bar + message bar
    STATUS_FILENAME_WIDTH = 20  # Filename is truncated to this in the status bar
    NO_NAME = "[No Name]"

    # Keyboard timing
    ESCAPE_SEQUENCE_TIMEOUT = 0.1  # Lookahead wait after ESC (seconds)

    # Session
    QUIT_TIMES = 3  # Ctrl-Q presses needed to quit with unsaved changes
    MESSAGE_TIMEOUT = 5.0  # Status message lifetime (seconds)

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Escape sequences emitted by the renderer
    HIDE_CURSOR = "\x1b[?25l"
    SHOW_CURSOR = "\x1b[?25h"
    CURSOR_HOME = "\x1b[H"
    CLEAR_SCREEN = "\x1b[2J"
    CLEAR_EOL = "\x1b[K"
    INVERSE_VIDEO = "\x1b[7m"
    NORMAL_VIDEO = "\x1b[m"
    MOVE_CURSOR = "\x1b[{row};{column}H"  # 1-based row/column

    # Status messages
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    WELCOME_MESSAGE = "Tilde editor -- version {}"
    SAVE_PROMPT = "Save as: {} (ESC to cancel)"
    SAVE_ABORTED_MESSAGE = "Save aborted"
    SAVED_MESSAGE = "{} bytes written to disk"
    SAVE_FAILED_MESSAGE = "Can't save! I/O error: {}"
    QUIT_WARNING_MESSAGE = "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit."
