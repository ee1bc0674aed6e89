"""Structured logging for sipp, backed by telelog.

Callers use four entry points:

``configure(...)`` -- swap in settings, a preset or a ready ``telelog.Config``
``get_logger(name)`` -- a cached telelog logger
``record_event(name, ...)`` -- one ``event::<name>`` line with key/value data
``span(name, ...)`` -- a profiled (optionally component-tracked) block

Settings come from ``SIPP_LOG_*`` variables. Console output stays off unless
``SIPP_LOG_CONSOLE`` is set; the terminal client draws on the same screen.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ROOT_LOGGER = "sipp"
PRESETS = ("development", "production")

_TRUTHY = {"1", "true", "yes", "on"}


def _getenv(name: str) -> Optional[str]:
    value = os.getenv(f"SIPP_{name}")
    return value if value else None


def _flag(name: str, default: bool) -> bool:
    value = _getenv(name)
    return default if value is None else value.lower() in _TRUTHY


@dataclass(slots=True)
class LogSettings:
    level: str = "INFO"
    console: bool = False
    color: bool = True
    json: bool = False
    file: Optional[str] = None
    profiling: bool = True
    buffered: bool = False

    @classmethod
    def from_env(cls) -> "LogSettings":
        return cls(
            level=(_getenv("LOG_LEVEL") or "INFO").upper(),
            console=_flag("LOG_CONSOLE", False),
            color=not _flag("NO_COLOR", False),
            json=_flag("LOG_JSON", False),
            file=_getenv("LOG_FILE"),
            profiling=_flag("LOG_PROFILE", True),
        )

    @classmethod
    def preset(cls, name: str) -> "LogSettings":
        key = name.lower()
        if key == "development":
            return cls(level="DEBUG", console=True)
        if key == "production":
            return cls(
                json=True,
                file=_getenv("LOG_FILE") or "sipp.log",
                buffered=True,
            )
        raise ValueError(f"Unknown preset '{name}'; expected one of {PRESETS}")

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json)
        if self.file:
            config.with_file_output(self.file)
        if self.buffered:
            config.with_buffering(True)
        config.with_profiling(self.profiling)
        return config


class _State:
    config: Optional[Any] = None
    loggers: Dict[str, Any] = {}


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[LogSettings] = None,
) -> None:
    """Replace the active configuration and drop cached loggers.

    At most one of ``config``, ``preset`` and ``settings`` may be given; with
    none, settings are re-read from the environment.
    """

    chosen = [option for option in (config, preset, settings) if option is not None]
    if len(chosen) > 1:
        raise ValueError("Pass only one of `config`, `preset` or `settings`.")
    if preset is not None:
        config = LogSettings.preset(preset).to_config()
    elif settings is not None:
        config = settings.to_config()
    elif config is None:
        config = LogSettings.from_env().to_config()
    _State.config = config
    _State.loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    key = name or ROOT_LOGGER
    logger = _State.loggers.get(key)
    if logger is None:
        if _State.config is None:
            configure()
        logger = tl.Logger.with_config(key, _State.config)
        _State.loggers[key] = logger
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emitter(logger: Any, level: str) -> Tuple[Callable[..., Any], bool]:
    """Return ``(method, takes_pairs)`` for ``level`` on a telelog logger."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, fields: Mapping[str, Any]) -> None:
    method, takes_pairs = _emitter(logger, level)
    if takes_pairs:
        method(message, [(str(k), _text(v)) for k, v in fields.items()])
    else:
        method(f"{message} {dict(fields)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    fields: Dict[str, Any] = {"event": name}
    if data:
        fields.update(data)
    _emit(get_logger(logger_name), level, f"event::{name}", fields)


@dataclass
class SpanHandle:
    """Yielded by ``span``; lets the block attach metadata or log a failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        self._log("error", "span::fail", reason=reason)

    def _log(self, level: str, message: str, **extra: Any) -> None:
        fields: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            fields["component"] = self.component_name
        fields.update(extra)
        _emit(self.logger, level, message, fields)


@contextmanager
def _logger_context(logger: Any, values: Mapping[str, str]) -> Iterator[None]:
    added: List[str] = []
    try:
        for key, value in values.items():
            logger.add_context(key, value)
            added.append(key)
        yield
    finally:
        for key in added:
            logger.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component=True`` also tracks it as a component of the same name; a string
    names the component explicitly. ``metadata`` is attached to the logger's
    context for the duration of the block. An exception leaving the block is
    logged via ``SpanHandle.fail`` and re-raised.
    """

    logger = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    values = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=logger,
        span_name=name,
        component_name=cast(Optional[str], component_name),
        metadata=dict(values),
    )
    with ExitStack() as stack:
        stack.enter_context(_logger_context(logger, values))
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
