"""Keyboard input decoding from raw terminal bytes."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants


ESC = 0x1b


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"  # Literal character, inserted as typed
    CTRL = "ctrl"        # Control chord, value is the letter
    SPECIAL = "special"  # Named key (arrows, paging, enter, escape, ...)


@dataclass
class KeyEvent:
    """Represents a decoded keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: bytes  # The bytes read from the terminal
    code: Optional[int] = None  # Byte value for literal keys


class DecoderState(Enum):
    """States of the escape-sequence decoder."""
    NORMAL = "normal"
    SAW_ESCAPE = "saw_escape"
    SAW_BRACKET_OR_O = "saw_bracket_or_o"
    AWAITING_TILDE = "awaiting_tilde"


# Final byte of ESC [ x / ESC O x
FINAL_KEYS = {
    ord('A'): 'up',
    ord('B'): 'down',
    ord('C'): 'right',
    ord('D'): 'left',
    ord('H'): 'home',
    ord('F'): 'end',
}

# Digit of ESC [ n ~
TILDE_KEYS = {
    ord('1'): 'home',
    ord('7'): 'home',
    ord('3'): 'delete',
    ord('4'): 'end',
    ord('8'): 'end',
    ord('5'): 'page_up',
    ord('6'): 'page_down',
}


def literal_key(byte: int) -> KeyEvent:
    """Classify a single literal byte."""
    raw = bytes([byte])
    if byte == ESC:
        return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=raw, code=byte)
    # Ctrl-J / Ctrl-M both mean enter
    if byte in (0x0a, 0x0d):
        return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=raw, code=byte)
    if byte == 0x7f:
        return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=raw, code=byte)
    if byte == 0x09:
        return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=raw, code=byte)
    if 1 <= byte <= 26:
        return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + byte - 1), raw=raw, code=byte)
    return KeyEvent(key_type=KeyType.REGULAR, value=chr(byte), raw=raw, code=byte)


def special_key(name: str, raw: bytes) -> KeyEvent:
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=raw)


class KeyDecoder:
    """Turns raw bytes into key events with an explicit state machine.

    ``feed`` advances the machine by one byte and returns a ``KeyEvent``
    once a key is complete. ``timeout`` resolves a pending sequence as a
    plain Escape. ``read_key`` drives both from a terminal's bounded-wait
    ``read_byte``.
    """

    def __init__(self, terminal_interface=None,
                 escape_timeout: float = EditorConstants.ESCAPE_SEQUENCE_TIMEOUT):
        self.terminal = terminal_interface
        self.escape_timeout = escape_timeout
        self.state = DecoderState.NORMAL
        self._pending = bytearray()
        self._digit: Optional[int] = None

    @property
    def pending(self) -> bool:
        return self.state != DecoderState.NORMAL

    def read_key(self) -> Optional[KeyEvent]:
        """Read bytes until one key is decoded.

        Returns None if the terminal reports end of input before any byte.
        """
        byte = self.terminal.read_byte(timeout=None)
        if byte is None:
            return None
        event = self.feed(byte)
        while event is None:
            byte = self.terminal.read_byte(timeout=self.escape_timeout)
            if byte is None:
                return self.timeout()
            event = self.feed(byte)
        return event

    def feed(self, byte: int) -> Optional[KeyEvent]:
        """Advance by one byte."""
        self._pending.append(byte)
        if self.state == DecoderState.NORMAL:
            return self._feed_normal(byte)
        if self.state == DecoderState.SAW_ESCAPE:
            return self._feed_saw_escape(byte)
        if self.state == DecoderState.SAW_BRACKET_OR_O:
            return self._feed_saw_bracket(byte)
        return self._feed_awaiting_tilde(byte)

    def timeout(self) -> Optional[KeyEvent]:
        """No more bytes arrived: a pending sequence becomes Escape."""
        if self.state == DecoderState.NORMAL:
            return None
        return self._escape()

    def _feed_normal(self, byte: int) -> Optional[KeyEvent]:
        if byte == ESC:
            self.state = DecoderState.SAW_ESCAPE
            return None
        return self._finish(literal_key(byte))

    def _feed_saw_escape(self, byte: int) -> Optional[KeyEvent]:
        if byte in (ord('['), ord('O')):
            self.state = DecoderState.SAW_BRACKET_OR_O
            return None
        return self._escape()

    def _feed_saw_bracket(self, byte: int) -> Optional[KeyEvent]:
        if byte in FINAL_KEYS:
            return self._finish(special_key(FINAL_KEYS[byte], bytes(self._pending)))
        if ord('1') <= byte <= ord('9'):
            self._digit = byte
            self.state = DecoderState.AWAITING_TILDE
            return None
        return self._escape()

    def _feed_awaiting_tilde(self, byte: int) -> Optional[KeyEvent]:
        if byte == ord('~') and self._digit in TILDE_KEYS:
            return self._finish(special_key(TILDE_KEYS[self._digit], bytes(self._pending)))
        return self._escape()

    def _escape(self) -> KeyEvent:
        return self._finish(special_key('escape', bytes(self._pending)))

    def _finish(self, event: KeyEvent) -> KeyEvent:
        self.state = DecoderState.NORMAL
        self._pending = bytearray()
        self._digit = None
        return event


def create_key_decoder(terminal_interface, escape_timeout: float = EditorConstants.ESCAPE_SEQUENCE_TIMEOUT):
    """Factory function to create a key decoder.

    Args:
        terminal_interface: Object providing ``read_byte(timeout)``
        escape_timeout: Lookahead wait after ESC, in seconds

    Returns:
        KeyDecoder instance
    """
    return KeyDecoder(terminal_interface, escape_timeout)
