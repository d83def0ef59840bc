"""Telemetry configuration and JSON logging."""

from __future__ import annotations

import ipaddress
import json
import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

from indexer_common.config import ConfigError

LOG_ENV_VAR = "LOG_LEVEL"

_PACKAGE_NAME = "indexer-common"
_PACKAGE_VERSION = "v0.1.0"
_OTLP_EXPORTER_ENDPOINT_DEFAULT = "http://localhost:4317"
_METRICS_PORT_DEFAULT = 9_000
_U16_MAX = 2**16 - 1

IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"invalid type for `{what}`: expected a mapping")
    return data


def _bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"invalid type for `{key}`: expected a boolean")
    return value


def _str(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for `{key}`: expected a string")
    return value


@dataclass(frozen=True)
class TracingConfig:
    """Tracing configuration; every field has a default."""

    enabled: bool = False
    otlp_exporter_endpoint: str = _OTLP_EXPORTER_ENDPOINT_DEFAULT
    service_name: str = _PACKAGE_NAME
    instrumentation_scope_name: str = _PACKAGE_NAME
    instrumentation_scope_version: str = _PACKAGE_VERSION

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> TracingConfig:
        data = _mapping(data, "tracing")
        return cls(
            enabled=_bool(data, "enabled", False),
            otlp_exporter_endpoint=_str(
                data, "otlp_exporter_endpoint", _OTLP_EXPORTER_ENDPOINT_DEFAULT
            ),
            service_name=_str(data, "service_name", _PACKAGE_NAME),
            instrumentation_scope_name=_str(
                data, "instrumentation_scope_name", _PACKAGE_NAME
            ),
            instrumentation_scope_version=_str(
                data, "instrumentation_scope_version", _PACKAGE_VERSION
            ),
        )


@dataclass(frozen=True)
class MetricsConfig:
    """Metrics configuration; every field has a default."""

    enabled: bool = False
    address: IpAddress = field(
        default_factory=lambda: ipaddress.IPv4Address("0.0.0.0")
    )
    port: int = _METRICS_PORT_DEFAULT

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> MetricsConfig:
        data = _mapping(data, "metrics")
        raw_address = data.get("address", "0.0.0.0")
        try:
            address = ipaddress.ip_address(raw_address)
        except ValueError as error:
            raise ConfigError(f"invalid IP address `{raw_address}`") from error
        port = data.get("port", _METRICS_PORT_DEFAULT)
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConfigError("invalid type for `port`: expected an integer")
        if not 0 <= port <= _U16_MAX:
            raise ConfigError(f"invalid value for `port`: {port} is out of range")
        return cls(enabled=_bool(data, "enabled", False), address=address, port=port)


@dataclass(frozen=True)
class TelemetryConfig:
    """Tracing and metrics configuration; both sections are required."""

    tracing_config: TracingConfig
    metrics_config: MetricsConfig

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TelemetryConfig:
        data = _mapping(data, "telemetry")
        for key in ("tracing", "metrics"):
            if key not in data:
                raise ConfigError(f"missing field `{key}`")
        return cls(
            tracing_config=TracingConfig.from_mapping(data["tracing"]),
            metrics_config=MetricsConfig.from_mapping(data["metrics"]),
        )


_STANDARD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        kvs = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRIBUTES and not key.startswith("_")
        }
        if record.exc_info:
            kvs["exception"] = self.formatException(record.exc_info)
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "target": record.name,
            "file": record.pathname,
            "line": record.lineno,
            "message": record.getMessage(),
            "kvs": kvs,
        }
        return json.dumps(entry, default=str)


_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def _parse_filter(text: str) -> tuple[int, dict[str, int]]:
    root_level = logging.ERROR
    targets: dict[str, int] = {}
    for directive in (part.strip() for part in text.split(",")):
        if not directive:
            continue
        name, sep, level_text = directive.partition("=")
        if sep:
            level = _LEVELS.get(level_text.strip().lower())
            if level is not None and name.strip():
                targets[name.strip()] = level
        elif directive.lower() in _LEVELS:
            root_level = _LEVELS[directive.lower()]
        else:
            targets[directive] = logging.DEBUG
    return root_level, targets


def init_logging(environ: Optional[Mapping[str, str]] = None) -> logging.Handler:
    """Log JSON to stdout, filtered by directives such as "info,some.module=debug".

    The directives are read from LOG_LEVEL; without them only errors are logged.
    Raises RuntimeError if logging has already been initialized.
    """
    environ = os.environ if environ is None else environ
    root = logging.getLogger()
    if any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers):
        raise RuntimeError("logging has already been initialized")

    root_level, targets = _parse_filter(environ.get(LOG_ENV_VAR, ""))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(root_level)
    for name, level in targets.items():
        logging.getLogger(name).setLevel(level)
    return handler