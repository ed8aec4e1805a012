"""Preedit and surrounding-text model for keyboard input sessions."""

from .config import MAX_SURROUNDING_TEXT_LENGTH, TextConfig, TextConfigError
from .session import EditResult, TextDelta, TextSession
from .state import PreeditFace, TextState
from .sync import TextMirror, TextSync
from .validation import can_remove_from_preedit, clamp_offset, truncate_surrounding

__all__ = [
    "MAX_SURROUNDING_TEXT_LENGTH",
    "TextConfig",
    "TextConfigError",
    "TextState",
    "PreeditFace",
    "TextSession",
    "TextDelta",
    "EditResult",
    "TextMirror",
    "TextSync",
    "clamp_offset",
    "truncate_surrounding",
    "can_remove_from_preedit",
]
