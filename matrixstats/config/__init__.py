"""Configuration access for Matrixstats."""

from .provider import (
    APIConfig,
    AuthConfig,
    ClientConfig,
    ConfigProvider,
    EnvConfigProvider,
    parse_credentials,
)

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ClientConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "parse_credentials",
]
