"""Service configuration loading and validation."""

from rasterlab.configs.loader import (
    ConfigError,
    LimitsConfig,
    LoggingConfig,
    PreviewConfig,
    RasterLabConfig,
    ServerConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "LimitsConfig",
    "LoggingConfig",
    "PreviewConfig",
    "RasterLabConfig",
    "ServerConfig",
    "load_config",
]
