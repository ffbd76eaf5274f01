from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants


@dataclass
class Cursor:
    """Cursor in logical coordinates: x indexes ``Row.chars``, y is a row index."""
    x: int = 0
    y: int = 0


class Row:
    """One line of text plus its render form (tabs expanded)."""

    def __init__(self, chars: str = "", tab_stop: int = EditorConstants.TAB_STOP):
        self.tab_stop = tab_stop
        self._chars = ""
        self.render = ""
        self.chars = chars

    @property
    def chars(self) -> str:
        return self._chars

    @chars.setter
    def chars(self, value: str) -> None:
        # render is derived; every write to chars goes through here
        self._chars = value
        self._update_render()

    def _update_render(self) -> None:
        out = []
        for ch in self._chars:
            if ch == "\t":
                out.append(" ")
                while len(out) % self.tab_stop != 0:
                    out.append(" ")
            else:
                out.append(ch)
        self.render = "".join(out)

    def __len__(self) -> int:
        return len(self._chars)

    def __eq__(self, other):
        if not isinstance(other, Row):
            return NotImplemented
        return self._chars == other._chars and self.render == other.render

    def __repr__(self):
        return f"Row({self._chars!r})"

    def insert_char(self, at: int, c: str) -> bool:
        if not 0 <= at <= len(self._chars):
            return False
        self.chars = self._chars[:at] + c + self._chars[at:]
        return True

    def delete_char(self, at: int) -> bool:
        if not 0 <= at < len(self._chars):
            return False
        self.chars = self._chars[:at] + self._chars[at + 1:]
        return True

    def split(self, at: int) -> str:
        """Truncate the row at ``at`` and return the removed suffix."""
        at = max(0, min(at, len(self._chars)))
        suffix = self._chars[at:]
        self.chars = self._chars[:at]
        return suffix

    def append(self, text: str) -> None:
        self.chars = self._chars + text

    def cursor_to_render_x(self, cursor_x: int) -> int:
        """Map a logical column to its column in ``render``.

        Evaluated on every call; never cached.
        """
        render_x = 0
        for ch in self._chars[:cursor_x]:
            if ch == "\t":
                render_x += (self.tab_stop - 1) - (render_x % self.tab_stop)
            render_x += 1
        return render_x


class Document:
    """Ordered rows of text plus a dirty counter.

    Structural operations with out-of-range coordinates are silent no-ops.
    Editing operations return the cursor position that follows the edit.
    """
    rows: list[Row]
    dirty: int

    def __init__(self, tab_stop: int = EditorConstants.TAB_STOP):
        self.tab_stop = tab_stop
        self.rows = []
        self.dirty = 0

    def row_count(self) -> int:
        return len(self.rows)

    def row(self, y: int) -> Optional[Row]:
        if 0 <= y < len(self.rows):
            return self.rows[y]
        return None

    def insert_row(self, at: int, text: str) -> bool:
        if not 0 <= at <= len(self.rows):
            return False
        self.rows.insert(at, Row(text, self.tab_stop))
        self.dirty += 1
        return True

    def delete_row(self, at: int) -> Optional[Row]:
        if not 0 <= at < len(self.rows):
            return None
        self.dirty += 1
        return self.rows.pop(at)

    def insert_char_at(self, y: int, x: int, c: str) -> Cursor:
        if y == len(self.rows):
            self.insert_row(len(self.rows), "")
        row = self.row(y)
        if row is not None and row.insert_char(x, c):
            self.dirty += 1
            return Cursor(x + 1, y)
        return Cursor(x, y)

    def insert_newline(self, y: int, x: int) -> Cursor:
        if x == 0:
            if not self.insert_row(y, ""):
                return Cursor(x, y)
        else:
            row = self.row(y)
            if row is None or x > len(row):
                return Cursor(x, y)
            suffix = row.split(x)
            self.insert_row(y + 1, suffix)
        return Cursor(0, y + 1)

    def delete_char_before(self, y: int, x: int) -> Cursor:
        row = self.row(y)
        if row is None or (x == 0 and y == 0):
            return Cursor(x, y)
        if x > 0:
            if row.delete_char(x - 1):
                self.dirty += 1
                return Cursor(x - 1, y)
            return Cursor(x, y)
        previous = self.rows[y - 1]
        joined_at = len(previous)
        previous.append(row.chars)
        self.delete_row(y)
        return Cursor(joined_at, y - 1)

    def move_cursor(self, cursor: Cursor, direction: str) -> Cursor:
        """Move one cell, wrapping across row ends, then clamp x to the row."""
        x, y = cursor.x, cursor.y
        row = self.row(y)
        if direction == 'left':
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                x = len(self.rows[y])
        elif direction == 'right':
            if row is not None and x < len(row):
                x += 1
            elif row is not None and x == len(row):
                y += 1
                x = 0
        elif direction == 'up':
            if y > 0:
                y -= 1
        elif direction == 'down':
            if y < len(self.rows):
                y += 1

        row = self.row(y)
        x = min(x, len(row) if row is not None else 0)
        return Cursor(x, y)

    def serialize(self) -> str:
        return "\n".join(row.chars for row in self.rows)

    def load(self, text: str) -> None:
        """Replace the contents with ``text``, one row per line.

        A trailing ``\\r`` on each line is dropped. Empty text loads as an
        empty document, so a document holding one empty row does not
        survive a save/load round trip.
        """
        self.rows = []
        if text:
            for line in text.split("\n"):
                if line.endswith("\r"):
                    line = line[:-1]
                self.insert_row(len(self.rows), line)
        self.dirty = 0

    def mark_clean(self) -> None:
        self.dirty = 0

    def lines(self) -> list[str]:
        return [row.chars for row in self.rows]
