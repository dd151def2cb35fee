"""
Client Configuration

Central configuration for the Yildiz HTTP client: target endpoint, tenant
prefix, credentials, connection reuse and instrumentation switches.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


DEFAULT_PREFIX = "default"
DEFAULT_PROTO = "http"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3058
DEFAULT_TIMEOUT_MS = 7500

# Connection pool bounds. Fixed per process, not tunable per call.
POOL_MAX_CONNECTIONS = 200
POOL_MAX_KEEPALIVE_CONNECTIONS = 150
POOL_KEEPALIVE_EXPIRY_S = 3.0

_SUPPORTED_PROTOS = ("http", "https")
_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class TenantContext:
    """Tenant namespace and credential injected into every request."""
    prefix: str = DEFAULT_PREFIX
    auth_token: Optional[str] = None


@dataclass
class ClientConfig:
    """
    Configuration for a Yildiz client instance.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    prefix: str = DEFAULT_PREFIX
    auth_token: Optional[str] = None
    proto: str = DEFAULT_PROTO
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    disable_connection_reuse: bool = False
    enable_timing_instrumentation: bool = False
    default_timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        if not isinstance(self.prefix, str) or not self.prefix:
            raise ValueError("prefix must be a non-empty string")
        self.proto = str(self.proto).lower()
        if self.proto not in _SUPPORTED_PROTOS:
            raise ValueError(f"Unsupported proto: {self.proto!r}")
        if not self.host:
            raise ValueError("host must be a non-empty string")
        self.port = int(self.port)
        if not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")
        self.default_timeout_ms = int(self.default_timeout_ms)
        if self.default_timeout_ms <= 0:
            raise ValueError("default_timeout_ms must be positive")

    @property
    def base_url(self) -> str:
        """Origin every request path is appended to."""
        return f"{self.proto}://{self.host}:{self.port}"

    @property
    def tenant(self) -> TenantContext:
        return TenantContext(prefix=self.prefix, auth_token=self.auth_token)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - YILDIZ_PREFIX: Tenant prefix
        - YILDIZ_TOKEN: Authorization token
        - YILDIZ_PROTO / YILDIZ_HOST / YILDIZ_PORT: Target endpoint
        - YILDIZ_DISABLE_KEEP_ALIVE: Disable connection reuse (true/false)
        - YILDIZ_ENABLE_TIMINGS: Attach timing records to responses (true/false)
        - YILDIZ_TIMEOUT_MS: Default request timeout in milliseconds
        """
        overrides: dict[str, Any] = {}

        if os.getenv("YILDIZ_PREFIX"):
            overrides["prefix"] = os.getenv("YILDIZ_PREFIX")
        if os.getenv("YILDIZ_TOKEN"):
            overrides["auth_token"] = os.getenv("YILDIZ_TOKEN")

        # Endpoint
        if os.getenv("YILDIZ_PROTO"):
            overrides["proto"] = os.getenv("YILDIZ_PROTO")
        if os.getenv("YILDIZ_HOST"):
            overrides["host"] = os.getenv("YILDIZ_HOST")
        if os.getenv("YILDIZ_PORT"):
            overrides["port"] = int(os.getenv("YILDIZ_PORT"))

        disable_keep_alive = _env_flag("YILDIZ_DISABLE_KEEP_ALIVE")
        if disable_keep_alive is not None:
            overrides["disable_connection_reuse"] = disable_keep_alive
        enable_timings = _env_flag("YILDIZ_ENABLE_TIMINGS")
        if enable_timings is not None:
            overrides["enable_timing_instrumentation"] = enable_timings

        if os.getenv("YILDIZ_TIMEOUT_MS"):
            overrides["default_timeout_ms"] = int(os.getenv("YILDIZ_TIMEOUT_MS"))

        return overrides

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ClientConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Allow the settings to live under a top-level "yildiz" key
        if isinstance(data.get("yildiz"), dict):
            data = data["yildiz"]

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Load configuration from a dictionary (supports partial data)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def with_env_overrides(self) -> "ClientConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        data = self.to_dict(mask_secrets=False)
        data.update(overrides)
        return self.from_dict(data)

    def to_dict(self, mask_secrets: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        auth_token = self.auth_token
        if mask_secrets and auth_token:
            auth_token = "***"
        return {
            "prefix": self.prefix,
            "auth_token": auth_token,
            "proto": self.proto,
            "host": self.host,
            "port": self.port,
            "disable_connection_reuse": self.disable_connection_reuse,
            "enable_timing_instrumentation": self.enable_timing_instrumentation,
            "default_timeout_ms": self.default_timeout_ms,
        }
