"""Test keyboard input decoding."""

import pytest
from tilde.keyboard import DecoderState, KeyDecoder, KeyEvent, KeyType, literal_key


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self, data=b""):
        self._byte_queue = list(data)
        self.timeouts = []

    def read_byte(self, timeout=None):
        """Mock read_byte that returns from queue, None once empty."""
        self.timeouts.append(timeout)
        if self._byte_queue:
            return self._byte_queue.pop(0)
        return None

    def add_bytes(self, data):
        self._byte_queue.extend(data)


def decode(data):
    terminal = MockTerminal(data)
    decoder = KeyDecoder(terminal, escape_timeout=0.05)
    events = []
    while True:
        event = decoder.read_key()
        if event is None:
            break
        events.append(event)
    return events


def test_arrow_right_sequence():
    events = decode(b"\x1b[C")
    assert len(events) == 1
    assert events[0].key_type == KeyType.SPECIAL
    assert events[0].value == 'right'
    assert events[0].raw == b"\x1b[C"


@pytest.mark.parametrize("seq,name", [
    (b"\x1b[A", 'up'),
    (b"\x1b[B", 'down'),
    (b"\x1b[C", 'right'),
    (b"\x1b[D", 'left'),
    (b"\x1b[H", 'home'),
    (b"\x1b[F", 'end'),
    (b"\x1bOH", 'home'),
    (b"\x1bOF", 'end'),
    (b"\x1bOA", 'up'),
    (b"\x1b[1~", 'home'),
    (b"\x1b[7~", 'home'),
    (b"\x1b[3~", 'delete'),
    (b"\x1b[4~", 'end'),
    (b"\x1b[8~", 'end'),
    (b"\x1b[5~", 'page_up'),
    (b"\x1b[6~", 'page_down'),
])
def test_escape_sequences(seq, name):
    events = decode(seq)
    assert [(e.key_type, e.value) for e in events] == [(KeyType.SPECIAL, name)]


def test_lone_escape_times_out_to_escape():
    terminal = MockTerminal(b"\x1b")
    decoder = KeyDecoder(terminal, escape_timeout=0.05)
    event = decoder.read_key()
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'escape'
    # First byte blocks, lookahead is bounded
    assert terminal.timeouts == [None, 0.05]
    assert decoder.state == DecoderState.NORMAL


@pytest.mark.parametrize("seq", [
    b"\x1b[2~",   # digit with no mapping
    b"\x1b[9~",
    b"\x1b[3x",   # digit not followed by '~'
    b"\x1b[Z",    # unknown final byte
    b"\x1bx",     # not a CSI/SS3 introducer
])
def test_unrecognized_sequences_become_escape(seq):
    events = decode(seq)
    assert [e.value for e in events] == ['escape']


@pytest.mark.parametrize("partial", [b"\x1b[", b"\x1b[5", b"\x1bO"])
def test_partial_sequence_does_not_corrupt_next_key(partial):
    terminal = MockTerminal(partial)
    decoder = KeyDecoder(terminal, escape_timeout=0.05)

    assert decoder.read_key().value == 'escape'

    terminal.add_bytes(b"a")
    event = decoder.read_key()
    assert event.key_type == KeyType.REGULAR
    assert event.value == 'a'


def test_keys_after_sequence_are_decoded_separately():
    events = decode(b"x\x1b[Dy")
    assert [e.value for e in events] == ['x', 'left', 'y']


def test_feed_and_timeout():
    decoder = KeyDecoder()
    assert decoder.feed(0x1b) is None
    assert decoder.state == DecoderState.SAW_ESCAPE
    assert decoder.feed(ord('[')) is None
    assert decoder.state == DecoderState.SAW_BRACKET_OR_O
    assert decoder.feed(ord('3')) is None
    assert decoder.state == DecoderState.AWAITING_TILDE
    assert decoder.pending
    event = decoder.feed(ord('~'))
    assert event.value == 'delete'
    assert not decoder.pending

    assert decoder.timeout() is None
    decoder.feed(0x1b)
    assert decoder.timeout().value == 'escape'
    assert decoder.state == DecoderState.NORMAL


def test_end_of_input_returns_none():
    decoder = KeyDecoder(MockTerminal(b""))
    assert decoder.read_key() is None


@pytest.mark.parametrize("byte,key_type,value", [
    (0x0d, KeyType.SPECIAL, 'enter'),
    (0x0a, KeyType.SPECIAL, 'enter'),
    (0x7f, KeyType.SPECIAL, 'backspace'),
    (0x1b, KeyType.SPECIAL, 'escape'),
    (0x09, KeyType.REGULAR, '\t'),
    (0x11, KeyType.CTRL, 'q'),
    (0x13, KeyType.CTRL, 's'),
    (0x08, KeyType.CTRL, 'h'),
    (0x0c, KeyType.CTRL, 'l'),
    (ord('a'), KeyType.REGULAR, 'a'),
    (ord(' '), KeyType.REGULAR, ' '),
])
def test_literal_key_classification(byte, key_type, value):
    event = literal_key(byte)
    assert event.key_type == key_type
    assert event.value == value
    assert event.code == byte
    assert event.raw == bytes([byte])


def test_high_bytes_are_literal():
    event = literal_key(0xe9)
    assert event == KeyEvent(key_type=KeyType.REGULAR, value='\xe9', raw=b'\xe9', code=0xe9)
