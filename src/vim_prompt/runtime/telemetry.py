"""Structured logging and profiling for the editor, backed by telelog.

Public surface:

``configure(...)`` -- install settings, a preset, or a raw ``telelog.Config``
``get_logger(name)`` -- cached telelog logger
``record_event(name, ...)`` -- one ``event::<name>`` line with key/value data
``span(name, ...)`` -- profiled block with transient logger context

The editor draws on the terminal while a session is active, so console
logging stays off unless ``VIM_PROMPT_LOG_CONSOLE`` is set. Point
``VIM_PROMPT_LOG_FILE`` at a path to keep a log of editing sessions.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "VIM_PROMPT_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "vim_prompt")
_TRUTHY = {"1", "true", "yes", "on"}

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_on(name: str) -> bool:
    return (_env(name) or "").lower() in _TRUTHY


@dataclass(frozen=True)
class LogSettings:
    """Plain description of where log lines go; turned into a ``telelog.Config``."""

    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls) -> "LogSettings":
        buffered = _env_on("LOG_BUFFERED")
        return cls(
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=_env_on("LOG_CONSOLE"),
            colored=not _env_on("NO_COLOR"),
            json=_env_on("LOG_JSON"),
            file=_env("LOG_FILE") or None,
            buffer_size=int(_env("LOG_BUFFER_SIZE") or "2048") if buffered else None,
        )

    def with_file(self, path: str) -> "LogSettings":
        return replace(self, file=path)

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.file:
            config.with_file_output(self.file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


PRESETS: Mapping[str, LogSettings] = {
    "development": LogSettings(level="DEBUG", console=True),
    "session": LogSettings(file="vim_prompt.log", buffer_size=2048),
}


def configure(
    *,
    settings: Optional[LogSettings] = None,
    preset: Optional[str] = None,
    config: Optional[Any] = None,
) -> None:
    """Swap the active configuration and drop cached loggers.

    At most one of ``settings``, ``preset`` (a key of :data:`PRESETS`) or a
    ready-made ``telelog.Config`` may be given; with none, the environment
    decides.
    """

    global _CONFIG
    if sum(option is not None for option in (settings, preset, config)) > 1:
        raise ValueError("pass only one of settings, preset or config")

    if preset is not None:
        try:
            settings = PRESETS[preset.lower()]
        except KeyError as exc:
            raise ValueError(f"unknown logging preset '{preset}'") from exc
    if config is None:
        config = (settings or LogSettings.from_env()).to_config()

    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    key = name or DEFAULT_LOGGER_NAME
    logger = _LOGGERS.get(key)
    if logger is None:
        if _CONFIG is None:
            configure()
        logger = _LOGGERS[key] = tl.Logger.with_config(key, _CONFIG)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _write(logger: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    """Prefer telelog's ``<level>_with`` form so payload keys stay structured."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"unsupported log level '{level}'")
    plain(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _write(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _write(self.logger, "error", "span::fail", payload)


def _pop_context(logger: Any, keys: List[str]) -> None:
    for key in keys:
        logger.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block; ``component=True`` tracks it under ``name``.

    ``metadata`` is pushed as logger context while the block runs. An
    exception escaping the block is logged through ``SpanHandle.fail`` and
    re-raised.
    """

    logger = get_logger(logger_name)
    component_name = name if component is True else component or None
    handle = SpanHandle(logger=logger, span_name=name, component_name=component_name)
    pushed: List[str] = []

    with ExitStack() as stack:
        for key, value in (metadata or {}).items():
            handle.add_metadata(key, value)
            logger.add_context(key, handle.metadata[key])
            pushed.append(key)
        stack.callback(_pop_context, logger, pushed)
        if component_name:
            stack.enter_context(logger.track_component(component_name))
        stack.enter_context(logger.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
