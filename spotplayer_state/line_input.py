"""A single-line text input with a cursor."""

from __future__ import annotations

import enum
from typing import Optional, Union


class InputEffect(enum.Enum):
    """What a key press did to the input."""

    TEXT_CHANGED = "text_changed"
    CURSOR_MOVED = "cursor_moved"
    ACK = "ack"  # consumed, but nothing changed


class KeyCode(enum.Enum):
    """Non-character keys."""

    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    DELETE = "delete"
    HOME = "home"
    END = "end"


Key = Union[str, KeyCode]


class LineInput:
    """Editable single line of text. A plain key is a one-character string."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def input(self, key: Key) -> Optional[InputEffect]:
        """Apply an unmodified key press; ``None`` if the input does not handle it."""
        text, cursor = self._text, self._cursor
        if isinstance(key, str):
            if len(key) != 1:
                return None
            self._text = text[:cursor] + key + text[cursor:]
            self._cursor += 1
            return InputEffect.TEXT_CHANGED
        if key is KeyCode.BACKSPACE:
            if not text or cursor == 0:
                return InputEffect.ACK
            self._cursor -= 1
            self._text = text[: self._cursor] + text[cursor:]
            return InputEffect.TEXT_CHANGED
        if key is KeyCode.LEFT:
            if cursor == 0:
                return InputEffect.ACK
            self._cursor -= 1
            return InputEffect.CURSOR_MOVED
        if key is KeyCode.RIGHT:
            if cursor == len(text):
                return InputEffect.ACK
            self._cursor += 1
            return InputEffect.CURSOR_MOVED
        return None

    def widget(self, is_active: bool) -> list[tuple[str, bool]]:
        """Segments to draw as ``(text, highlighted)``; active inputs show the cursor."""
        if not is_active:
            return [(self._text, False)]
        text, cursor = self._text, self._cursor
        at_end = cursor == len(text)
        return [
            (text[:cursor], False),
            (" " if at_end else text[cursor], True),
            ("" if at_end else text[cursor + 1 :], False),
        ]

    def is_empty(self) -> bool:
        return not self._text

    def get_text(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"LineInput(text={self._text!r}, cursor={self._cursor})"