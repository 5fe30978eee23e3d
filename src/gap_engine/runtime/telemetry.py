"""Logging and profiling helpers built on telelog.

The rest of the engine only touches four names:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- cached logger bound to the active config
``record_event(name, ...)`` -- one structured log line
``span(name, ...)`` -- profiled block with optional component tracking
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "GAP_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "gap_engine")

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _from_environment() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())

    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))

    if _env_flag("LOG_JSON"):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    return config


def _from_preset(preset: str) -> Any:
    config = tl.Config()
    key = preset.lower()
    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "gap_engine.log")
        config.with_buffering(True)
    elif key == "quiet":
        config.with_min_level("ERROR")
        config.with_console_output(False)
    else:
        raise ValueError(f"Unknown preset '{preset}'.")
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` is an explicit ``telelog.Config``; ``preset`` names one of
    ``"development"``, ``"production"`` or ``"quiet"``. Passing neither rebuilds
    the config from ``GAP_ENGINE_*`` environment variables.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _from_preset(preset)
    elif config is None:
        config = _from_environment()

    config.with_profiling(True)
    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    if _CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return _LOGGERS[logger_name]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach results or flag failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracking it under a component name.

    ``component=True`` reuses ``name``; a string names the component
    explicitly. ``metadata`` is pushed as logger context for the duration of
    the block and removed afterwards.
    """

    log = get_logger(logger_name)
    component_name: Optional[str] = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
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
    "get_logger",
    "record_event",
    "span",
]
