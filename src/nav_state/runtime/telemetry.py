"""telelog wiring for the navigation containers.

Containers call three things: ``get_logger`` for a cached logger,
``record_event`` for structured debug events and ``span`` to profile a
mutation. ``configure`` swaps the active telelog config for a named preset.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "NAV_STATE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "nav_state")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class OutputProfile:
    """Where and how log records are written."""

    min_level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: Optional[str] = None
    buffer_size: Optional[int] = None


PRESETS: Dict[str, OutputProfile] = {
    "development": OutputProfile(min_level="DEBUG"),
    "production": OutputProfile(
        console=False, log_file="nav_state.log", buffer_size=2048
    ),
    "performance": OutputProfile(
        min_level="DEBUG",
        console=False,
        json=True,
        log_file="nav_state-performance.log",
        buffer_size=2048,
    ),
}


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def profile_from_env() -> OutputProfile:
    """Profile used when no preset is requested."""

    buffer_size = None
    if _env_flag("LOG_BUFFERED"):
        buffer_size = int(_env("LOG_BUFFER_SIZE") or "2048")
    return OutputProfile(
        min_level=(_env("LOG_LEVEL") or "INFO").upper(),
        console=not _env_flag("DISABLE_CONSOLE"),
        colored=not _env_flag("NO_COLOR"),
        json=_env_flag("LOG_JSON"),
        log_file=_env("LOG_FILE"),
        buffer_size=buffer_size,
    )


def build_config(preset: Optional[str] = None) -> Any:
    """Translate a preset name (or the environment) into a ``telelog.Config``.

    ``NAV_STATE_LOG_FILE`` overrides the file of file-backed presets.
    """

    if preset is None:
        profile = profile_from_env()
    else:
        try:
            profile = PRESETS[preset.lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown preset '{preset}'.") from exc
        if profile.log_file and _env("LOG_FILE"):
            profile = replace(profile, log_file=_env("LOG_FILE"))

    config = tl.Config()
    config.with_min_level(profile.min_level)
    config.with_console_output(profile.console)
    if profile.console:
        config.with_colored_output(profile.colored)
    config.with_json_format(profile.json)
    if profile.log_file:
        config.with_file_output(profile.log_file)
    if profile.buffer_size:
        config.with_buffering(True)
        config.with_buffer_size(profile.buffer_size)
    # span() is built on logger.profile
    config.with_profiling(True)
    return config


def configure(*, preset: Optional[str] = None) -> None:
    """Adopt ``preset`` (or the environment profile) and drop cached loggers."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = build_config(preset)
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = build_config()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return _LOGGER_CACHE[logger_name]


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in data.items()]


def _emit(log: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {data}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(
        get_logger(logger_name),
        level.lower(),
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is reported if the block fails."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``, tracked as ``component`` if given.

    ``metadata`` is pushed as logger context for the duration of the block.
    An exception is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: str(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    handle = SpanHandle(
        logger=log, name=name, component=component, metadata=dict(context)
    )
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(component))
            stack.enter_context(log.profile(name))
            yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = [
    "OutputProfile",
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "profile_from_env",
    "record_event",
    "span",
]
