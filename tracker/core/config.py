from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from domain.models import StatusSet
from utils.constants import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS_PRESET,
    ID_STRATEGIES,
    PRIORITY_LEVELS,
)


class ConfigError(RuntimeError):
    pass


@dataclass(slots=True)
class TrackerConfig:
    status_preset: str = DEFAULT_STATUS_PRESET
    statuses: list[str] = field(default_factory=list)
    default_status: str | None = None
    terminal_status: str | None = None
    priorities_enabled: bool = False
    priorities: list[str] = field(default_factory=lambda: list(PRIORITY_LEVELS))
    default_priority: str = DEFAULT_PRIORITY
    enforce_rating_state: bool = True
    id_strategy: str = "clock"


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    directory: str = ""
    file_name: str = "tracker.log"
    max_bytes: int = 10_000_000
    backup_count: int = 5
    json_console: bool = False


@dataclass(slots=True)
class UIConfig:
    locale: str = "en-US"
    locales_directory: str = ""
    status_colors: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class AppConfig:
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def resolve_status_set(config: TrackerConfig) -> StatusSet:
    try:
        if not config.statuses:
            preset = StatusSet.preset(config.status_preset)
            if config.default_status is None and config.terminal_status is None:
                return preset
            return StatusSet(
                values=preset.values,
                default=config.default_status or preset.default,
                terminal=config.terminal_status or preset.terminal,
            )
        values = tuple(config.statuses)
        return StatusSet(
            values=values,
            default=config.default_status or values[0],
            terminal=config.terminal_status or values[-1],
        )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def resolve_priorities(config: TrackerConfig) -> tuple[str, ...]:
    if not config.priorities_enabled:
        return ()
    priorities = tuple(config.priorities)
    if not priorities:
        raise ConfigError("priorities_enabled is set but no priorities are configured")
    if config.default_priority not in priorities:
        raise ConfigError(
            f"Default priority {config.default_priority!r} is not one of {', '.join(priorities)}"
        )
    return priorities


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _env(key: str, fallback: Any = None) -> Any:
    value = os.getenv(key, "").strip()
    return value or fallback


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name} must be a mapping")
    return section


def _flag(value: Any, default: bool, *, key: str) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def _count(value: Any, default: int, *, key: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a whole number, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a whole number, got {value!r}") from None
    if number < 0:
        raise ConfigError(f"{key} cannot be negative")
    return number


def _str_list(value: Any, default: list[str], *, key: str) -> list[str]:
    if value is None:
        return list(default)
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Missing config file: {path}") from None
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file {path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def load_config(config_path: Path) -> AppConfig:
    """Read ``config_path`` and apply ``.env`` and ``TRACKER_*`` overrides.

    The ``.env`` file is looked up next to the config directory. Invalid
    values raise ``ConfigError`` instead of silently falling back.
    """
    load_dotenv(config_path.parent.parent / ".env")
    raw = _read_yaml(config_path)
    tracker = _section(raw, "tracker")
    logs = _section(raw, "logging")
    ui = _section(raw, "ui")

    tracker_cfg = TrackerConfig(
        status_preset=str(_env("TRACKER_STATUS_PRESET", tracker.get("status_preset") or DEFAULT_STATUS_PRESET)),
        statuses=_str_list(tracker.get("statuses"), [], key="tracker.statuses"),
        default_status=_optional_str(tracker.get("default_status")),
        terminal_status=_optional_str(tracker.get("terminal_status")),
        priorities_enabled=_flag(tracker.get("priorities_enabled"), False, key="tracker.priorities_enabled"),
        priorities=_str_list(tracker.get("priorities"), list(PRIORITY_LEVELS), key="tracker.priorities"),
        default_priority=str(tracker.get("default_priority") or DEFAULT_PRIORITY),
        enforce_rating_state=_flag(
            _env("TRACKER_ENFORCE_RATING_STATE", tracker.get("enforce_rating_state")),
            True,
            key="tracker.enforce_rating_state",
        ),
        id_strategy=str(_env("TRACKER_ID_STRATEGY", tracker.get("id_strategy") or "clock")),
    )
    if tracker_cfg.id_strategy not in ID_STRATEGIES:
        raise ConfigError(
            f"Unknown id_strategy {tracker_cfg.id_strategy!r}. Use: {', '.join(ID_STRATEGIES)}"
        )
    resolve_status_set(tracker_cfg)
    resolve_priorities(tracker_cfg)

    logging_cfg = LoggingConfig(
        level=str(_env("TRACKER_LOG_LEVEL", logs.get("level") or "INFO")),
        directory=str(logs.get("directory") or ""),
        file_name=str(logs.get("file_name") or "tracker.log"),
        max_bytes=_count(logs.get("max_bytes"), 10_000_000, key="logging.max_bytes"),
        backup_count=_count(logs.get("backup_count"), 5, key="logging.backup_count"),
        json_console=_flag(logs.get("json_console"), False, key="logging.json_console"),
    )

    raw_colors = ui.get("status_colors") or {}
    if not isinstance(raw_colors, dict):
        raise ConfigError("ui.status_colors must be a mapping")
    ui_cfg = UIConfig(
        locale=str(_env("TRACKER_LOCALE", ui.get("locale") or "en-US")),
        locales_directory=str(ui.get("locales_directory") or ""),
        status_colors={str(key): str(val) for key, val in raw_colors.items()},
    )

    return AppConfig(tracker=tracker_cfg, logging=logging_cfg, ui=ui_cfg)
