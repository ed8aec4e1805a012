"""Logging and profiling for text sessions, on top of telelog.

Sessions only need three calls: ``get_logger`` for a cached per-component
logger, ``record_event`` for one-off corrections (truncation, clamping) and
``span`` to profile a mutation. ``configure`` lets a host or a test swap the
telelog configuration before the first session starts.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "KEYBOARD_ENGINE_"
ROOT_LOGGER_NAME = "keyboard_engine"

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", "").strip()


def _enabled(name: str) -> bool:
    return _env(name).lower() in {"1", "true", "yes", "on"}


def default_config() -> Any:
    """Build a config from ``KEYBOARD_ENGINE_LOG_*`` environment variables.

    Console output stays on unless ``DISABLE_CONSOLE`` is set; ``LOG_FILE``
    adds a file sink and ``LOG_JSON`` switches both to JSON lines.
    """

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    console = not _enabled("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)
    if _env("LOG_FILE"):
        config.with_file_output(_env("LOG_FILE"))
    config.with_profiling(True)
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (or a fresh default) and drop cached loggers."""

    global _config
    _config = config if config is not None else default_config()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or ROOT_LOGGER_NAME
    if logger_name not in _loggers:
        if _config is None:
            configure()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in data.items()]


def _log(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {data}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata and reports the outcome."""

    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def reject(self, reason: str) -> None:
        _log(self.logger, "debug", "span::reject", self._with(reason))

    def fail(self, reason: str) -> None:
        _log(self.logger, "error", "span::fail", self._with(reason))

    def _with(self, reason: str) -> Dict[str, Any]:
        return {"span": self.name, **self.metadata, "reason": reason}


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``, tracked under ``component`` if given.

    ``metadata`` is attached as logger context while the block runs and is
    removed afterwards, even when the block raises.
    """

    log = get_logger(logger_name)
    context = {key: str(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    handle = SpanHandle(logger=log, name=name, metadata=dict(context))
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(component))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = [
    "SpanHandle",
    "configure",
    "default_config",
    "get_logger",
    "record_event",
    "span",
]
