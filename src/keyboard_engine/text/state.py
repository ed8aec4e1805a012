"""Preedit, surrounding text, and offset state for one input session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .config import TextConfig
from .sync import TextMirror
from .validation import can_remove_from_preedit, clamp_offset, truncate_surrounding


class PreeditFace(str, Enum):
    """How the host should style the preedit."""

    DEFAULT = "default"
    NO_CANDIDATES = "no_candidates"
    KEY_PRESS = "key_press"
    ACTIVE = "active"


@dataclass(slots=True)
class TextState:
    """Mutable text model owned by a single input session.

    Two bounds hold after every call: the surrounding text never exceeds
    ``config.max_surrounding_length`` characters, and the surrounding offset
    stays within ``[0, len(surrounding)]``. Host input that violates either
    is truncated or clamped, never rejected.

    The preedit cursor is only ever written together with the preedit it
    indexes; callers of :meth:`set_preedit` are trusted to pass a position
    that fits the text.
    """

    config: TextConfig = field(default_factory=TextConfig)
    _preedit: str = field(default="", init=False, repr=False)
    _cursor_position: int = field(default=0, init=False, repr=False)
    _surrounding: str = field(default="", init=False, repr=False)
    _surrounding_offset: int = field(default=0, init=False, repr=False)
    _preedit_face: PreeditFace = field(
        default=PreeditFace.DEFAULT, init=False, repr=False
    )
    _primary_candidate: str = field(default="", init=False, repr=False)
    _restored_preedit: bool = field(default=False, init=False, repr=False)

    @property
    def max_surrounding_length(self) -> int:
        return self.config.max_surrounding_length

    @property
    def preedit(self) -> str:
        return self._preedit

    @property
    def preedit_cursor_position(self) -> int:
        return self._cursor_position

    @property
    def surrounding(self) -> str:
        return self._surrounding

    @property
    def surrounding_offset(self) -> int:
        return self._surrounding_offset

    @property
    def preedit_face(self) -> PreeditFace:
        return self._preedit_face

    @property
    def primary_candidate(self) -> str:
        return self._primary_candidate

    @property
    def restored_preedit(self) -> bool:
        return self._restored_preedit

    def set_preedit(self, text: str, cursor_position: Optional[int] = None) -> None:
        """Replace the preedit; the cursor defaults to the end of ``text``."""

        if cursor_position is None:
            cursor_position = len(text)
        self._preedit = text
        self._cursor_position = cursor_position

    def append_to_preedit(self, text: str) -> None:
        """Insert ``text`` at the preedit cursor and move the cursor past it."""

        cursor = self._cursor_position
        self._preedit = self._preedit[:cursor] + text + self._preedit[cursor:]
        self._cursor_position = cursor + len(text)

    def remove_from_preedit(self, delete_length: int) -> bool:
        """Delete ``delete_length`` characters right before the preedit cursor.

        Returns ``False`` and leaves the preedit untouched when
        ``delete_length`` is zero or larger than the number of characters
        before the cursor.
        """

        if not can_remove_from_preedit(delete_length, self._cursor_position):
            return False

        start = self._cursor_position - delete_length
        self._preedit = self._preedit[:start] + self._preedit[self._cursor_position :]
        self._cursor_position = start
        return True

    def clear_preedit(self) -> None:
        self._preedit = ""
        self._cursor_position = 0
        self._primary_candidate = ""
        self._preedit_face = PreeditFace.DEFAULT

    def commit_preedit(self) -> str:
        """Move the preedit into the surrounding text at the current offset.

        The offset advances past the committed text. Limits still apply, so a
        commit that overflows the surrounding text is truncated from the tail.
        Returns the text that was committed.
        """

        committed = self._preedit
        offset = self._surrounding_offset
        merged = self._surrounding[:offset] + committed + self._surrounding[offset:]
        self.set_surrounding(merged)
        self.set_surrounding_offset(offset + len(committed))
        self.clear_preedit()
        return committed

    def set_surrounding(self, text: str) -> None:
        self._surrounding = truncate_surrounding(text, self.max_surrounding_length)
        # Re-clamp so an offset set against older, longer text stays valid.
        self._surrounding_offset = clamp_offset(
            self._surrounding_offset, self._surrounding
        )

    def set_surrounding_offset(self, offset: int) -> None:
        self._surrounding_offset = clamp_offset(offset, self._surrounding)

    def surrounding_left(self) -> str:
        return self._surrounding[: self._surrounding_offset]

    def surrounding_right(self) -> str:
        return self._surrounding[self._surrounding_offset :]

    def set_preedit_face(self, face: PreeditFace) -> None:
        self._preedit_face = PreeditFace(face)

    def set_primary_candidate(self, candidate: str) -> None:
        self._primary_candidate = candidate

    def set_restored_preedit(self, restored: bool) -> None:
        self._restored_preedit = bool(restored)

    def snapshot(self) -> TextMirror:
        return TextMirror(
            preedit=self._preedit,
            preedit_cursor_position=self._cursor_position,
            surrounding=self._surrounding,
            surrounding_offset=self._surrounding_offset,
            preedit_face=self._preedit_face.value,
            primary_candidate=self._primary_candidate,
            restored_preedit=self._restored_preedit,
        )
