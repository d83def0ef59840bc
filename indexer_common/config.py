"""Loading of configuration from a YAML file with an environment variable overlay."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any, Optional

import yaml

CONFIG_FILE = "CONFIG_FILE"
DEFAULT_CONFIG_FILE = "config.yaml"
ENV_PREFIX = "APP__"
ENV_SEPARATOR = "__"

_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""


def _parse_env_value(text: str) -> Any:
    stripped = text.strip()
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT.fullmatch(stripped):
        return int(stripped)
    if _FLOAT.fullmatch(stripped):
        return float(stripped)
    if len(stripped) >= 2 and stripped[0] == stripped[-1] == '"':
        return stripped[1:-1]
    return text


def _merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge(dict(current), value)
        else:
            merged[key] = value
    return merged


def _env_overlay(environ: Mapping[str, str]) -> dict[str, Any]:
    overlay: dict[str, Any] = {}
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = [
            part.lower()
            for part in name[len(ENV_PREFIX):].split(ENV_SEPARATOR)
            if part
        ]
        if not parts:
            continue
        nested: Any = _parse_env_value(raw)
        for part in reversed(parts):
            nested = {part: nested}
        overlay = _merge(overlay, nested)
    return overlay


def _read_file(path: str) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as file:
            content = yaml.safe_load(file)
    except FileNotFoundError as error:
        raise ConfigError(f"required file `{path}` not found") from error
    except OSError as error:
        raise ConfigError(f"cannot read file `{path}`") from error
    except yaml.YAMLError as error:
        raise ConfigError(f"cannot parse YAML file `{path}`") from error
    if content is None:
        return {}
    if not isinstance(content, Mapping):
        raise ConfigError(f"YAML file `{path}` does not contain a mapping")
    return dict(content)


def load_config(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Load the YAML file named by CONFIG_FILE (default config.yaml) overlaid by APP__ variables.

    Variable names are stripped of the prefix, lower-cased and nested at each "__".
    """
    environ = os.environ if environ is None else environ
    path = environ.get(CONFIG_FILE, DEFAULT_CONFIG_FILE)
    return _merge(_read_file(path), _env_overlay(environ))