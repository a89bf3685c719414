"""Daemon config data structures and their YAML form (``config.yaml``)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

U16_MAX = 0xFFFF

# Ceiling the daemon applies to idle pooled connections per endpoint.
MAX_IDLE = 100


# ---------------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------------

def _u16(data: dict, key: str) -> int:
    value = data[key]
    # bool is an int subclass; YAML true/false must not pass as a port
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key!r} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= U16_MAX:
        raise ValueError(f"{key!r} out of range 0..{U16_MAX}: {value}")
    return value


def _bool(data: dict, key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f"{key!r} must be a boolean, got {type(value).__name__}")
    return value


def _str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


def _mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise TypeError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Endpoint:
    """A local service to host, reachable under *dns*."""

    port: int            # the port your application runs on
    dns: str
    maxconns: int = 200  # max open connections
    maxidle: int = MAX_IDLE
    enabled: bool = True

    def to_dict(self) -> dict:
        data = {
            "port": self.port,
            "dns": self.dns,
            "maxconns": self.maxconns,
            "maxidle": self.maxidle,
            "enabled": self.enabled,
        }
        # refuse to write what the loader would reject
        self.from_dict(data)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Endpoint:
        data = _mapping(data, "endpoint")
        return cls(
            port=_u16(data, "port"),
            dns=_str(data, "dns"),
            maxconns=_u16(data, "maxconns"),
            maxidle=_u16(data, "maxidle"),
            enabled=_bool(data, "enabled"),
        )


@dataclass
class Ssh:
    """SSH tunnel overrides. Not needed for endpoints to work."""

    enabled: bool
    maxconns: int = 20
    port: int = 22
    maxidle: int = 5
    # None means target the OS-provided hostname
    hostname_override: str | None = None

    @classmethod
    def new(cls, enabled: bool, hostname: str | None = None) -> Ssh:
        return cls(enabled=enabled, hostname_override=hostname)

    def to_dict(self) -> dict:
        data = {
            "maxconns": self.maxconns,
            "port": self.port,
            "enabled": self.enabled,
            "maxidle": self.maxidle,
            "hostname_override": self.hostname_override,
        }
        self.from_dict(data)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Ssh:
        data = _mapping(data, "ssh")
        hostname = data.get("hostname_override")
        if hostname is not None and not isinstance(hostname, str):
            raise TypeError("'hostname_override' must be a string")
        return cls(
            maxconns=_u16(data, "maxconns"),
            port=_u16(data, "port"),
            enabled=_bool(data, "enabled"),
            maxidle=_u16(data, "maxidle"),
            hostname_override=hostname,
        )


@dataclass
class EbbflowDaemonConfig:
    """Top-level daemon configuration (maps to ``config.yaml``)."""

    endpoints: list[Endpoint] = field(default_factory=list)
    ssh: Ssh | None = None

    def to_dict(self) -> dict:
        return {
            "endpoints": [e.to_dict() for e in self.endpoints],
            "ssh": self.ssh.to_dict() if self.ssh is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> EbbflowDaemonConfig:
        data = _mapping(data, "config")
        endpoints = data["endpoints"]
        if not isinstance(endpoints, list):
            raise TypeError("'endpoints' must be a sequence")
        ssh = data.get("ssh")
        return cls(
            endpoints=[Endpoint.from_dict(e) for e in endpoints],
            ssh=Ssh.from_dict(ssh) if ssh is not None else None,
        )


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------

def parse_possibly_empty(raw: bytes | str) -> EbbflowDaemonConfig | None:
    """Parse ``config.yaml`` content.

    Returns ``None`` when the document carries no value at all (zero bytes,
    whitespace or comments only, an explicit ``~``). That is the "not
    configured yet" state and is distinct from a malformed file, which
    raises ``yaml.YAMLError``, ``KeyError``, ``TypeError`` or ``ValueError``.
    """
    data = yaml.safe_load(raw)
    if data is None:
        return None
    return EbbflowDaemonConfig.from_dict(data)


def dump_config(config: EbbflowDaemonConfig) -> str:
    return yaml.safe_dump(config.to_dict(), sort_keys=False, default_flow_style=False)
