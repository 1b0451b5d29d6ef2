"""Logging for history operations, backed by telelog.

Settings come from ``HISTORY_TREE_*`` environment variables, optionally
overlaid by a named preset. Edits run inside ``history_op`` so each one is
profiled under ``history::<op>`` and logged with the index it produced;
everything else goes through ``record_event``.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HISTORY_TREE_"

PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "color": True, "json": False},
    "production": {
        "level": "INFO",
        "console": False,
        "buffered": True,
        "default_file": "history_tree.log",
    },
    "performance": {
        "level": "DEBUG",
        "console": False,
        "buffered": True,
        "json": True,
        "default_file": "history_tree-performance.log",
    },
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_SETTINGS: Optional["TelemetrySettings"] = None


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    logger: str = "history_tree"
    level: str = "INFO"
    log_file: str = ""
    default_file: str = ""
    console: bool = True
    color: bool = True
    json: bool = False
    buffered: bool = False
    buffer_size: int = 2048
    profile: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        return cls(
            logger=get("LOGGER") or "history_tree",
            level=(get("LOG_LEVEL") or "INFO").upper(),
            log_file=get("LOG_FILE") or "",
            console=not _flag(get("DISABLE_CONSOLE"), False),
            color=not _flag(get("NO_COLOR"), False),
            json=_flag(get("LOG_JSON"), False),
            buffered=_flag(get("LOG_BUFFERED"), False),
            buffer_size=int(get("LOG_BUFFER_SIZE") or "2048"),
            profile=_flag(get("PROFILE"), True),
        )

    def with_preset(self, preset: str) -> "TelemetrySettings":
        try:
            overrides = PRESETS[preset.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown preset '{preset}', expected one of {tuple(PRESETS)}."
            ) from None
        return replace(self, **overrides)

    def build(self) -> Any:
        """Translate the settings into a ``telelog.Config``."""

        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        log_file = self.log_file or self.default_file
        if log_file:
            config.with_file_output(log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(self.profile)
        return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` adopts a ready ``telelog.Config``; ``preset`` overlays one of
    ``PRESETS`` on the environment settings. With neither, the environment
    alone decides. Cached loggers are dropped either way.
    """

    global _ACTIVE_CONFIG, _SETTINGS
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    settings = TelemetrySettings.from_env()
    if preset:
        settings = settings.with_preset(preset)
    _SETTINGS = settings
    _ACTIVE_CONFIG = config if config is not None else settings.build()
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _ACTIVE_CONFIG is None or _SETTINGS is None:
        configure()
    assert _SETTINGS is not None
    logger_name = name or _SETTINGS.logger
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, fields: Mapping[str, Any]) -> None:
    pairs = [(str(key), str(value)) for key, value in fields.items()]
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _emit(get_logger(logger_name), level.lower(), f"event::{name}", data or {})


@dataclass(slots=True)
class HistoryOp:
    """An edit in progress; ``result`` attaches what the edit produced."""

    name: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def result(self, index: int, cursor: int) -> None:
        self.fields["index"] = index
        self.fields["cursor"] = cursor


@contextmanager
def history_op(
    name: str, *, logger_name: Optional[str] = None, **fields: Any
) -> Iterator[HistoryOp]:
    """Profile one edit as ``history::<name>`` and log its outcome.

    Keyword arguments describe the edit's inputs (``parent``, ``node``).
    On success a debug line carries them plus ``index`` and ``cursor``; a
    failing edit is logged at error level with the reason and re-raised.
    """

    log = get_logger(logger_name)
    op = HistoryOp(name, dict(fields))
    label = f"history::{name}"
    with log.track_component("history"), log.profile(label):
        try:
            yield op
        except Exception as exc:
            _emit(log, "error", f"{label} failed", {**op.fields, "reason": exc})
            raise
    _emit(log, "debug", label, op.fields)


__all__ = [
    "PRESETS",
    "HistoryOp",
    "TelemetrySettings",
    "configure",
    "get_logger",
    "history_op",
    "record_event",
]
