"""Session facade wrapping a TextState with telemetry and edit results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ContextManager, Optional

from keyboard_engine.runtime import telemetry

from .config import TextConfig
from .state import PreeditFace, TextState
from .sync import TextMirror


class EditResult(str, Enum):
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class TextDelta:
    result: EditResult
    preedit: str
    surrounding: str
    surrounding_offset: int
    label: str

    @property
    def applied(self) -> bool:
        return self.result is EditResult.APPLIED


class TextSession:
    """One text model per input session, as seen by the keyboard host.

    Every mutation runs inside a ``text::<label>`` telemetry span. Host input
    corrected by truncation or clamping is reported as a debug event rather
    than an error.
    """

    def __init__(
        self,
        name: str = "default",
        *,
        config: Optional[TextConfig] = None,
        state: Optional[TextState] = None,
    ) -> None:
        self.name = name
        if state is None:
            state = TextState(config=config or TextConfig())
        self.state = state
        self.logger_name = "keyboard_engine.text"

    @property
    def config(self) -> TextConfig:
        return self.state.config

    def snapshot(self) -> TextMirror:
        return self.state.snapshot()

    def set_preedit(
        self, text: str, cursor_position: Optional[int] = None
    ) -> TextDelta:
        with self._span("set_preedit"):
            self.state.set_preedit(text, cursor_position)
        return self._delta(EditResult.APPLIED, "set_preedit")

    def append_to_preedit(self, text: str) -> TextDelta:
        with self._span("append_to_preedit"):
            self.state.append_to_preedit(text)
        return self._delta(EditResult.APPLIED, "append_to_preedit")

    def remove_from_preedit(self, delete_length: int) -> TextDelta:
        with self._span("remove_from_preedit") as span:
            removed = self.state.remove_from_preedit(delete_length)
            if not removed:
                span.reject(
                    f"cannot remove {delete_length} before cursor "
                    f"{self.state.preedit_cursor_position}"
                )
        result = EditResult.APPLIED if removed else EditResult.REJECTED
        return self._delta(result, "remove_from_preedit")

    def backspace(self) -> TextDelta:
        return self.remove_from_preedit(1)

    def clear_preedit(self) -> TextDelta:
        with self._span("clear_preedit"):
            self.state.clear_preedit()
        return self._delta(EditResult.APPLIED, "clear_preedit")

    def commit_preedit(self) -> TextDelta:
        if not self.state.preedit:
            return self._delta(EditResult.REJECTED, "commit_preedit")

        with self._span("commit_preedit") as span:
            pending = len(self.state.surrounding) + len(self.state.preedit)
            expected_offset = self.state.surrounding_offset + len(self.state.preedit)
            committed = self.state.commit_preedit()
            span.add_metadata("committed_length", len(committed))
        self._report_truncation(pending)
        self._report_clamp(expected_offset)
        return self._delta(EditResult.APPLIED, "commit_preedit")

    def update_surrounding(self, text: str, offset: Optional[int] = None) -> TextDelta:
        """Store host-reported surrounding text and, optionally, its cursor."""

        expected_offset = self.state.surrounding_offset if offset is None else offset
        with self._span("update_surrounding"):
            self.state.set_surrounding(text)
            if offset is not None:
                self.state.set_surrounding_offset(offset)
        self._report_truncation(len(text))
        self._report_clamp(expected_offset)
        return self._delta(EditResult.APPLIED, "update_surrounding")

    def set_surrounding_offset(self, offset: int) -> TextDelta:
        with self._span("set_surrounding_offset"):
            self.state.set_surrounding_offset(offset)
        self._report_clamp(offset)
        return self._delta(EditResult.APPLIED, "set_surrounding_offset")

    def set_preedit_face(self, face: PreeditFace) -> TextDelta:
        with self._span("set_preedit_face"):
            self.state.set_preedit_face(face)
        return self._delta(EditResult.APPLIED, "set_preedit_face")

    def set_primary_candidate(self, candidate: str) -> TextDelta:
        with self._span("set_primary_candidate"):
            self.state.set_primary_candidate(candidate)
        return self._delta(EditResult.APPLIED, "set_primary_candidate")

    def set_restored_preedit(self, restored: bool) -> TextDelta:
        with self._span("set_restored_preedit"):
            self.state.set_restored_preedit(restored)
        return self._delta(EditResult.APPLIED, "set_restored_preedit")

    # TextSync

    def pull_text(self) -> TextMirror:
        return self.snapshot()

    def push_host_text(
        self, surrounding: str, offset: Optional[int] = None
    ) -> TextMirror:
        self.update_surrounding(surrounding, offset)
        return self.snapshot()

    def _span(self, label: str) -> ContextManager[telemetry.SpanHandle]:
        return telemetry.span(
            f"text::{label}",
            logger_name=self.logger_name,
            component="text",
            metadata={"session": self.name},
        )

    def _report_truncation(self, requested_length: int) -> None:
        limit = self.state.max_surrounding_length
        if requested_length > limit:
            telemetry.record_event(
                "text.surrounding_truncated",
                level="debug",
                logger_name=self.logger_name,
                data={
                    "session": self.name,
                    "requested": requested_length,
                    "limit": limit,
                },
            )

    def _report_clamp(self, requested_offset: int) -> None:
        # Covers explicit offsets and the implicit re-clamp after shorter text.
        stored = self.state.surrounding_offset
        if stored != requested_offset:
            telemetry.record_event(
                "text.offset_clamped",
                level="debug",
                logger_name=self.logger_name,
                data={
                    "session": self.name,
                    "requested": requested_offset,
                    "stored": stored,
                },
            )

    def _delta(self, result: EditResult, label: str) -> TextDelta:
        return TextDelta(
            result=result,
            preedit=self.state.preedit,
            surrounding=self.state.surrounding,
            surrounding_offset=self.state.surrounding_offset,
            label=label,
        )
