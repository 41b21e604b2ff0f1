"""Structured logging and profiling spans for the editor, on top of telelog.

The rest of the package only touches four names: ``configure`` picks the
telelog config, ``get_logger`` hands out cached loggers, ``record_event``
writes one ``event::<name>`` line and ``span`` profiles a block.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

import telelog  # type: ignore[import]

ENV_PREFIX = "HACKADEMY_"
ROOT_LOGGER = "hackademy"

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _setting(name: str) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name)


def _enabled(name: str) -> bool:
    return (_setting(name) or "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _from_preset(preset: str) -> Any:
    config = telelog.Config()
    log_file = _setting("LOG_FILE")
    name = preset.lower()
    if name == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif name == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(log_file or "hackademy.log")
    elif name == "quiet":
        # Console output stays off so nothing paints over the Textual screen.
        config.with_min_level("WARNING")
        config.with_console_output(False)
        if log_file:
            config.with_file_output(log_file)
    else:
        raise ValueError(f"Unknown telemetry preset '{preset}'.")
    return config


def _from_environment() -> Any:
    config = telelog.Config()
    config.with_min_level((_setting("LOG_LEVEL") or "INFO").upper())
    console = not _enabled("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)
    if _setting("LOG_FILE"):
        config.with_file_output(_setting("LOG_FILE"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a telelog config, a named preset, or the env-derived default.

    Loggers created under the previous config are discarded.
    """

    global _config
    if config is not None and preset is not None:
        raise ValueError("Pass either `config` or `preset`.")
    chosen = _from_preset(preset) if preset else config or _from_environment()
    chosen.with_profiling(True)
    _config = chosen
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    key = name or ROOT_LOGGER
    logger = _loggers.get(key)
    if logger is None:
        if _config is None:
            configure()
        logger = _loggers[key] = telelog.Logger.with_config(key, _config)
    return logger


def _write(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    level = level.lower()
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in fields.items()])
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    fields = {"event": name, **(data or {})}
    _write(get_logger(logger_name), level, f"event::{name}", fields)


@dataclass
class SpanHandle:
    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        _write(
            self.logger,
            "error",
            "span::fail",
            {"span": self.name, **self.metadata, "reason": reason},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the enclosed block and attach ``metadata`` as logger context.

    ``component=True`` also tracks the block as a component named ``name``;
    a string names the component. Exceptions are logged and re-raised.
    """

    logger = get_logger(logger_name)
    tracked = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        logger.add_context(key, value)
    handle = SpanHandle(logger=logger, name=name, metadata=dict(context))
    try:
        with ExitStack() as stack:
            if tracked:
                stack.enter_context(logger.track_component(tracked))
            stack.enter_context(logger.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            logger.remove_context(key)


__all__ = ["SpanHandle", "configure", "get_logger", "record_event", "span"]
