import json
import logging
import os
import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from .defaults import CONFIG_ENV, DEFAULT_CONFIG_PATH, DEFAULT_TASKS, LOG_DIR_ENV
from .types import ConfigError, Settings, TaskConfig, UnsupportedConfigFormatError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_INT_FIELDS = ("min_width", "min_height", "log_min_characters")
_COMMAND_FIELDS = ("unneeded_query", "restart_check", "rpmconfig_check")


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Resolve and load the settings for one run.

    An explicit path or $SYSUPDATE_CONFIG must exist. The per-user default
    file is optional; without it the built-in defaults are used.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV) or None

    if path is None:
        default = Path(DEFAULT_CONFIG_PATH).expanduser()
        if default.is_file():
            settings = load_file(default)
        else:
            settings = Settings(tasks=DEFAULT_TASKS)
    else:
        settings = load_file(path)

    log_dir = os.environ.get(LOG_DIR_ENV, "").strip()
    if log_dir:
        settings = replace(settings, log_dir=Path(log_dir).expanduser())

    if os.environ.get("NO_COLOR") is not None:
        settings = replace(settings, color=False)

    return settings


def load_file(path: str | Path) -> Settings:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    settings = _build_settings(raw_file)
    logger.debug("loaded settings from %s", pure_path)
    return replace(settings, source=pure_path)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    # An empty YAML document means "all defaults".
    if raw_file is None:
        return {}

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: YAML parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc

    return raw_file


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: JSON parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_settings(raw: Mapping[str, Any]) -> Settings:
    keys = {
        "log_dir",
        "refresh_interval",
        "color",
        "log_level",
        "commands",
        *_INT_FIELDS,
        *_COMMAND_FIELDS,
    }
    fields: dict[str, Any] = {}

    for field in raw.keys():
        if field not in keys:
            raise ConfigError(f"Can't process: {field}")

    if "log_dir" in raw:
        if not isinstance(raw["log_dir"], str) or len(raw["log_dir"].strip()) < 1:
            raise ConfigError("'log_dir' should be a non-empty string")
        fields["log_dir"] = Path(raw["log_dir"].strip()).expanduser()

    if "refresh_interval" in raw:
        interval = raw["refresh_interval"]
        # bool is an int subclass
        if isinstance(interval, bool) or not isinstance(interval, (int, float)):
            raise ConfigError("'refresh_interval' should be a number")
        if interval <= 0:
            raise ConfigError("'refresh_interval' must be greater than zero")
        fields["refresh_interval"] = float(interval)

    if "color" in raw:
        if not isinstance(raw["color"], bool):
            raise ConfigError("'color' should be true or false")
        fields["color"] = raw["color"]

    if "log_level" in raw:
        level = raw["log_level"]
        if not isinstance(level, str) or level.strip().upper() not in _LOG_LEVELS:
            raise ConfigError(
                f"'log_level' should be one of: {', '.join(sorted(_LOG_LEVELS))}"
            )
        fields["log_level"] = level.strip().upper()

    for name in _INT_FIELDS:
        if name in raw:
            value = raw[name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"'{name}' should be an integer")
            if value < 1:
                raise ConfigError(f"'{name}' must be positive")
            fields[name] = value

    for name in _COMMAND_FIELDS:
        if name in raw:
            fields[name] = _command(name, raw[name])

    overrides: Mapping[str, Any] = {}
    if "commands" in raw:
        if not isinstance(raw["commands"], Mapping):
            raise ConfigError(
                f"'commands' must be a mapping, got {type(raw['commands'])}"
            )
        overrides = raw["commands"]

    return Settings(tasks=_build_tasks(overrides), **fields)


def _build_tasks(overrides: Mapping[str, Any]) -> tuple[TaskConfig, ...]:
    known = {task.key for task in DEFAULT_TASKS}
    commands: dict[str, str] = {}

    for key, command in overrides.items():
        if not isinstance(key, str):
            raise ConfigError(f"Task key must be a string, got {type(key)}")

        key_norm = key.strip()

        if key_norm not in known:
            raise ConfigError(f"Unknown task '{key_norm}' in 'commands'")

        if key_norm in commands:
            raise ConfigError(f"Duplicate task key after normalization: {key_norm}")

        commands[key_norm] = _command(key_norm, command)

    return tuple(
        replace(task, command=commands[task.key]) if task.key in commands else task
        for task in DEFAULT_TASKS
    )


def _command(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{name}: The command should be a string")

    if len(value.strip()) < 1:
        raise ConfigError(f"{name}: Command missing")

    return value.strip()
