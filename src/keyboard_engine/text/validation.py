"""Bounds helpers shared by the text state and session."""

from __future__ import annotations


def truncate_surrounding(text: str, limit: int) -> str:
    """Keep at most ``limit`` leading characters of ``text``."""

    if len(text) > limit:
        return text[:limit]
    return text


def clamp_offset(offset: int, text: str) -> int:
    return max(0, min(offset, len(text)))


def can_remove_from_preedit(delete_length: int, cursor_position: int) -> bool:
    # Only characters before the cursor can go; zero-length deletes are no-ops.
    return 1 <= delete_length <= cursor_position
