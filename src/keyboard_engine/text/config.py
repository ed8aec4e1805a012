"""Limits applied to host-reported text."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "KEYBOARD_ENGINE_"

# Upper bound on retained surrounding text, in characters.
MAX_SURROUNDING_TEXT_LENGTH = 1000


class TextConfigError(ValueError):
    """Raised when a text limit is missing, malformed, or out of range."""

    def __init__(self, message: str, *, value: object | None = None) -> None:
        super().__init__(message)
        self.value = value


@dataclass(frozen=True, slots=True)
class TextConfig:
    """Per-session limits for :class:`~keyboard_engine.text.state.TextState`."""

    max_surrounding_length: int = MAX_SURROUNDING_TEXT_LENGTH

    def __post_init__(self) -> None:
        value = self.max_surrounding_length
        if isinstance(value, bool) or not isinstance(value, int):
            raise TextConfigError(
                "max_surrounding_length must be an integer", value=value
            )
        if value < 1:
            raise TextConfigError(
                "max_surrounding_length must be at least 1", value=value
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TextConfig":
        """Build a config from ``KEYBOARD_ENGINE_MAX_SURROUNDING_TEXT_LENGTH``.

        Falls back to the defaults when the variable is unset or blank.
        """

        env = os.environ if environ is None else environ
        raw = env.get(f"{ENV_PREFIX}MAX_SURROUNDING_TEXT_LENGTH", "").strip()
        if not raw:
            return cls()
        try:
            limit = int(raw)
        except ValueError as exc:
            raise TextConfigError(
                "max_surrounding_length must be an integer", value=raw
            ) from exc
        return cls(max_surrounding_length=limit)
