"""
Client Configuration Module

Provides configuration loading and management for the Yildiz client.
"""

from .runtime import (
    DEFAULT_PREFIX,
    DEFAULT_TIMEOUT_MS,
    POOL_KEEPALIVE_EXPIRY_S,
    POOL_MAX_CONNECTIONS,
    POOL_MAX_KEEPALIVE_CONNECTIONS,
    ClientConfig,
    TenantContext,
)

__all__ = [
    "DEFAULT_PREFIX",
    "DEFAULT_TIMEOUT_MS",
    "POOL_KEEPALIVE_EXPIRY_S",
    "POOL_MAX_CONNECTIONS",
    "POOL_MAX_KEEPALIVE_CONNECTIONS",
    "ClientConfig",
    "TenantContext",
]
