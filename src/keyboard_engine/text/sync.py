"""Adapter boundary types for exchanging text state with host keyboards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True, slots=True)
class TextMirror:
    """Host-friendly, immutable snapshot of a session's text state."""

    preedit: str
    preedit_cursor_position: int
    surrounding: str
    surrounding_offset: int
    preedit_face: str = "default"
    primary_candidate: str = ""
    restored_preedit: bool = False


class TextSync(Protocol):
    """Protocol describing how keyboard adapters exchange text with a session."""

    def pull_text(self) -> TextMirror:
        """Return the state the host should render or commit."""
        ...

    def push_host_text(
        self, surrounding: str, offset: Optional[int] = None
    ) -> TextMirror:
        """Report the host field's surrounding text (and cursor, when known)."""
        ...
