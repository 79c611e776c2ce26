"""Configuration models and loading."""

from vcd_acctest.config.loader import (
    DEFAULT_CONFIG_NAME,
    load,
    read_config,
    resolve_config_path,
)
from vcd_acctest.config.models import (
    CatalogConfig,
    LocalEndpoint,
    LoggingConfig,
    NetworkingConfig,
    PeerEndpoint,
    ProviderConfig,
    REDACTED,
    VcdConfig,
    VcdTestConfig,
)

__all__ = [
    "CatalogConfig",
    "DEFAULT_CONFIG_NAME",
    "LocalEndpoint",
    "LoggingConfig",
    "NetworkingConfig",
    "PeerEndpoint",
    "ProviderConfig",
    "REDACTED",
    "VcdConfig",
    "VcdTestConfig",
    "load",
    "read_config",
    "resolve_config_path",
]
