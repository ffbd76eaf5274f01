"""Viewport scrolling and frame rendering."""

from typing import Optional

from .constants import EditorConstants
from .model import Cursor, Document
from .session import EditorSession


class Viewport:
    """The visible window onto the document.

    ``render_x`` is the cursor column within the current row's render
    form, as of the last ``recompute``.
    """

    def __init__(self, screen_rows: int = 0, screen_columns: int = 0):
        self.screen_rows = screen_rows
        self.screen_columns = screen_columns
        self.row_offset = 0
        self.column_offset = 0
        self.render_x = 0

    def resize(self, terminal_rows: int, terminal_columns: int) -> None:
        """Fit the text area to a terminal, leaving room for the bars."""
        self.screen_rows = max(1, terminal_rows - EditorConstants.BAR_HEIGHT)
        self.screen_columns = max(1, terminal_columns)

    def recompute(self, cursor: Cursor, document: Document) -> None:
        """Move the offsets the minimum distance that puts the cursor on screen."""
        row = document.row(cursor.y)
        self.render_x = row.cursor_to_render_x(cursor.x) if row is not None else 0

        if cursor.y < self.row_offset:
            self.row_offset = cursor.y
        if cursor.y >= self.row_offset + self.screen_rows:
            self.row_offset = cursor.y - self.screen_rows + 1

        if self.render_x < self.column_offset:
            self.column_offset = self.render_x
        if self.render_x >= self.column_offset + self.screen_columns:
            self.column_offset = self.render_x - self.screen_columns + 1


class ScreenRenderer:
    """Builds one complete output frame as a single string."""

    def __init__(self, viewport: Viewport):
        self.viewport = viewport

    def build_frame(self, document: Document, cursor: Cursor,
                    session: EditorSession, now: Optional[float] = None) -> str:
        self.viewport.recompute(cursor, document)

        buf: list[str] = [EditorConstants.HIDE_CURSOR, EditorConstants.CURSOR_HOME]
        self._draw_rows(buf, document)
        self._draw_status_bar(buf, document, cursor, session)
        self._draw_message_bar(buf, session, now)

        vp = self.viewport
        buf.append(EditorConstants.MOVE_CURSOR.format(
            row=cursor.y - vp.row_offset + 1,
            column=vp.render_x - vp.column_offset + 1,
        ))
        buf.append(EditorConstants.SHOW_CURSOR)
        return "".join(buf)

    def _draw_rows(self, buf: list[str], document: Document) -> None:
        vp = self.viewport
        for y in range(vp.screen_rows):
            file_row = y + vp.row_offset
            if file_row >= document.row_count():
                if document.row_count() == 0 and y == vp.screen_rows // 3:
                    buf.append(self._welcome_line())
                else:
                    buf.append(EditorConstants.FILLER_MARKER)
            else:
                render = document.rows[file_row].render
                buf.append(render[vp.column_offset:vp.column_offset + vp.screen_columns])
            buf.append(EditorConstants.CLEAR_EOL)
            buf.append("\r\n")

    def _welcome_line(self) -> str:
        columns = self.viewport.screen_columns
        welcome = EditorConstants.WELCOME_MESSAGE.format(EditorConstants.VERSION)[:columns]
        padding = (columns - len(welcome)) // 2
        line = ""
        if padding:
            line += EditorConstants.FILLER_MARKER
            padding -= 1
        return line + " " * padding + welcome

    def _draw_status_bar(self, buf: list[str], document: Document,
                         cursor: Cursor, session: EditorSession) -> None:
        columns = self.viewport.screen_columns
        name = (session.filename or EditorConstants.NO_NAME)[:EditorConstants.STATUS_FILENAME_WIDTH]
        modified = "(modified)" if document.dirty else ""
        status = f"{name} - {document.row_count()} lines {modified}"[:columns]
        right = f"{cursor.y + 1}/{document.row_count()}"

        buf.append(EditorConstants.INVERSE_VIDEO)
        buf.append(status)
        length = len(status)
        while length < columns:
            if columns - length == len(right):
                buf.append(right)
                break
            buf.append(" ")
            length += 1
        buf.append(EditorConstants.NORMAL_VIDEO)
        buf.append("\r\n")

    def _draw_message_bar(self, buf: list[str], session: EditorSession,
                          now: Optional[float]) -> None:
        buf.append(EditorConstants.CLEAR_EOL)
        message = session.current_message(now)
        if message:
            buf.append(message[:self.viewport.screen_columns])
