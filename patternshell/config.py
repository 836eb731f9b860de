#!/usr/bin/env python3
# patternshell/config.py
from __future__ import annotations

"""
Shell configuration (stdlib-only).

Sources, lowest precedence first:
  1) the defaults in SETTINGS
  2) files in the working directory, in order: .env, config.ini, config.json, config.toml
  3) environment variables: PATTERNSHELL_<KEY>, or the bare <KEY> of a known setting

Keys are case-insensitive; nested JSON/TOML tables are flattened to
UPPER_SNAKE keys ({"ui": {"theme": "dark"}} -> UI_THEME). Keys that are not
settings end up in ShellConfig.extra.
"""

import configparser
import json
import os
import re
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, NamedTuple, Optional

from patternshell.errors import ConfigurationError

ENV_PREFIX = "PATTERNSHELL_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_BOOL_WORDS = {
    **dict.fromkeys(("1", "true", "yes", "y", "on"), True),
    **dict.fromkeys(("0", "false", "no", "n", "off"), False),
}
_DOTTED_NAME = re.compile(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*")
_ENV_LINE = re.compile(r"^\s*([A-Za-z_]\w*)\s*=\s*(.*?)\s*$")


@dataclass(frozen=True)
class ShellConfig:
    prompt: str
    log_level: str | None
    log_file_path: Path | None
    history_file_path: Path | None
    plugin_package: str
    enable_completion: bool
    retries: int

    # unknown keys, as read
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- value coercion ----------
# Every coercer takes (key, raw value, working directory).

def _blank(value: Any) -> bool:
    return value is None or str(value).strip().lower() in ("", "none")


def _to_text(key: str, value: Any, cwd: Path) -> str:
    return str(value)


def _to_flag(key: str, value: Any, cwd: Path) -> bool:
    if isinstance(value, bool):
        return value
    try:
        return _BOOL_WORDS[str(value).strip().lower()]
    except KeyError:
        raise ConfigurationError(f"{key}: expected a boolean, got {value!r}") from None


def _to_count(key: str, value: Any, cwd: Path) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{key}: expected an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"{key}: expected an integer, got {value!r}") from None
    if number < 0:
        raise ConfigurationError(f"{key} must be >= 0, got {number}")
    return number


def _to_log_level(key: str, value: Any, cwd: Path) -> str | None:
    if _blank(value):
        return None
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"{key} must be one of {list(_LOG_LEVELS)}, got {value!r}")
    return level


def _to_path(key: str, value: Any, cwd: Path) -> Path | None:
    if _blank(value):
        return None
    path = Path(os.path.expandvars(os.path.expanduser(str(value).strip())))
    return (path if path.is_absolute() else cwd / path).resolve()


def _to_module_name(key: str, value: Any, cwd: Path) -> str:
    name = str(value).strip()
    if not _DOTTED_NAME.fullmatch(name):
        raise ConfigurationError(f"{key} must be a dotted module name, got {value!r}")
    return name


class _Setting(NamedTuple):
    attribute: str
    default: Any
    coerce: Callable[[str, Any, Path], Any]


SETTINGS: dict[str, _Setting] = {
    "PROMPT": _Setting("prompt", "cli> ", _to_text),
    "LOG_LEVEL": _Setting("log_level", None, _to_log_level),
    "LOG_FILE_PATH": _Setting("log_file_path", None, _to_path),
    "HISTORY_FILE_PATH": _Setting("history_file_path", None, _to_path),
    "PLUGIN_PACKAGE": _Setting("plugin_package", "plugins", _to_module_name),
    "ENABLE_COMPLETION": _Setting("enable_completion", True, _to_flag),
    "RETRIES": _Setting("retries", 0, _to_count),
}

DEFAULTS: dict[str, Any] = {key: setting.default for key, setting in SETTINGS.items()}


# ---------- sources ----------

def _flatten(obj: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for k, v in obj.items():
        key = f"{prefix}_{k}" if prefix else str(k)
        if isinstance(v, Mapping):
            flat.update(_flatten(v, key))
        else:
            flat[key.upper()] = v
    return flat


def _parse_env(text: str) -> dict[str, Any]:
    """KEY=VALUE lines; '#' comments; one pair of surrounding quotes is dropped."""
    values: dict[str, Any] = {}
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        m = _ENV_LINE.match(line)
        if not m:
            continue
        value = m.group(2)
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[m.group(1)] = value
    return values


def _parse_ini(text: str) -> dict[str, Any]:
    parser = configparser.ConfigParser(interpolation=None)
    parser.read_string(text)
    # sections only group keys; the section name is not part of the key
    return {k: v for section in parser.sections() for k, v in parser.items(section)}


def _parse_json(text: str) -> dict[str, Any]:
    data = json.loads(text)
    if not isinstance(data, Mapping):
        raise ValueError("top level must be an object")
    return _flatten(data)


def _parse_toml(text: str) -> dict[str, Any]:
    return _flatten(tomllib.loads(text))


_FILE_PARSERS: dict[str, Callable[[str], dict[str, Any]]] = {
    ".env": _parse_env,
    "config.ini": _parse_ini,
    "config.json": _parse_json,
    "config.toml": _parse_toml,
}


def _read_files(cwd: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for filename, parse in _FILE_PARSERS.items():
        path = cwd / filename
        if not path.is_file():
            continue
        try:
            values = parse(path.read_text(encoding="utf-8"))
        except (ValueError, configparser.Error) as exc:
            # json and toml decode errors subclass ValueError
            raise ConfigurationError(f"Cannot parse {path}: {exc}") from exc
        merged.update({str(k).upper(): v for k, v in values.items()})
    return merged


def _read_environment(environ: Mapping[str, str]) -> dict[str, Any]:
    bare = {k: v for k, v in environ.items() if k in SETTINGS}
    prefixed = {
        k[len(ENV_PREFIX):]: v
        for k, v in environ.items()
        if k.startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)
    }
    return {**bare, **prefixed}


# ---------- public API ----------

def load_config(cwd: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> ShellConfig:
    """
    Merge every source and validate the result. Reads files, writes nothing.

    Raises:
        ConfigurationError: a value fails validation or a config file cannot be parsed.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    raw = {
        **DEFAULTS,
        **_read_files(base),
        **_read_environment(os.environ if environ is None else environ),
    }

    values: dict[str, Any] = {}
    for key, setting in SETTINGS.items():
        value = raw[key]
        values[setting.attribute] = setting.default if value is None else setting.coerce(key, value, base)
    extra = {k: v for k, v in raw.items() if k not in SETTINGS}
    return ShellConfig(**values, extra=extra)
