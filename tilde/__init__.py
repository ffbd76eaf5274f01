"""Tilde - A small terminal text editor."""

from .model import Row, Document, Cursor
from .view import Viewport, ScreenRenderer
from .keyboard import KeyDecoder, KeyEvent, KeyType

__all__ = [
    'Row',
    'Document',
    'Cursor',
    'Viewport',
    'ScreenRenderer',
    'KeyDecoder',
    'KeyEvent',
    'KeyType',
]
