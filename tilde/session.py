"""Session state for the tilde editor.

One ``EditorSession`` is owned by the ``Editor`` and handed to the
components that need it; there is no global instance.
"""

import time
from typing import Optional

from .constants import EditorConstants


class EditorSession:
    """Per-process editor state that is not part of the document.

    Holds the recorded filename, the transient status message, the quit
    confirmation counter and the save-as prompt state.
    """

    def __init__(self, quit_times: int = EditorConstants.QUIT_TIMES,
                 message_timeout: float = EditorConstants.MESSAGE_TIMEOUT):
        self.filename: Optional[str] = None
        self.status_message = ""
        self.status_time = 0.0
        self.message_timeout = message_timeout
        self.initial_quit_times = quit_times
        self.quit_times = quit_times
        self.prompt_mode: Optional[str] = None  # None or 'save_as'
        self.prompt_input = ""

    def set_status_message(self, message: str, now: Optional[float] = None) -> None:
        """Show a message in the message bar.

        Args:
            message: Text to show
            now: Timestamp to record (defaults to the current time)
        """
        self.status_message = message
        self.status_time = time.time() if now is None else now

    def current_message(self, now: Optional[float] = None) -> str:
        """Return the text for the message bar, or '' once the message has expired."""
        if self.prompt_mode == 'save_as':
            return EditorConstants.SAVE_PROMPT.format(self.prompt_input)
        if not self.status_message:
            return ""
        now = time.time() if now is None else now
        if now - self.status_time < self.message_timeout:
            return self.status_message
        return ""

    def reset_quit_times(self) -> None:
        self.quit_times = self.initial_quit_times

    def start_prompt(self) -> None:
        self.prompt_mode = 'save_as'
        self.prompt_input = ""

    def end_prompt(self) -> None:
        self.prompt_mode = None
        self.prompt_input = ""
