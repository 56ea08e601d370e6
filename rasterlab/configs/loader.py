"""Configuration loader for the RasterLab service and CLI.

Loads and validates ``server.yaml`` into typed, frozen dataclasses.  Listen
address, logging, request limits and preview defaults all come from the
config.

Usage::

    from rasterlab.configs.loader import load_config
    cfg = load_config()                      # default path
    cfg = load_config("/custom/server.yaml") # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from rasterlab.utils.fs import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "server.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServerConfig:
    """HTTP listen address and route prefix."""

    host: str = "127.0.0.1"
    port: int = 8083
    api_prefix: str = "/api"


@dataclass(frozen=True)
class LoggingConfig:
    """Arguments for setup_logging()."""

    level: str = "INFO"
    file: str | None = None
    json: bool = False
    color: bool = True
    rotate: dict[str, Any] | None = None
    quiet_libs: tuple[str, ...] = ()

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``logging_config.setup_logging``."""
        return {
            "log_level": self.level,
            "log_file": self.file,
            "json": self.json,
            "color": self.color,
            "rotate": self.rotate,
            "quiet_libs": list(self.quiet_libs),
        }


@dataclass(frozen=True)
class LimitsConfig:
    """Bounds enforced on incoming draw requests."""

    max_coordinate: int = 100_000
    max_radius: int = 100_000


@dataclass(frozen=True)
class PreviewConfig:
    """PNG preview defaults for scripts/draw.py."""

    width: int = 200
    height: int = 200
    background: int = 255
    foreground: int = 0
    margin: int = 2
    scale: int = 4


@dataclass(frozen=True)
class RasterLabConfig:
    """Top-level configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_server(data: dict[str, Any]) -> ServerConfig:
    prefix = str(data.get("api_prefix", "/api"))
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return ServerConfig(
        host=str(data.get("host", "127.0.0.1")),
        port=int(data.get("port", 8083)),
        api_prefix=prefix.rstrip("/"),
    )


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    rotate = data.get("rotate")
    if rotate is not None and not isinstance(rotate, dict):
        raise ConfigError(f"logging.rotate must be a mapping, got {rotate!r}")
    file = data.get("file")
    return LoggingConfig(
        level=str(data.get("level", "INFO")).upper(),
        file=str(file) if file else None,
        json=bool(data.get("json", False)),
        color=bool(data.get("color", True)),
        rotate=dict(rotate) if rotate else None,
        quiet_libs=tuple(str(lib) for lib in data.get("quiet_libs") or ()),
    )


def _parse_limits(data: dict[str, Any]) -> LimitsConfig:
    return LimitsConfig(
        max_coordinate=int(data.get("max_coordinate", 100_000)),
        max_radius=int(data.get("max_radius", 100_000)),
    )


def _parse_preview(data: dict[str, Any]) -> PreviewConfig:
    return PreviewConfig(
        width=int(data.get("width", 200)),
        height=int(data.get("height", 200)),
        background=int(data.get("background", 255)),
        foreground=int(data.get("foreground", 0)),
        margin=int(data.get("margin", 2)),
        scale=int(data.get("scale", 4)),
    )


def _validate_config(cfg: RasterLabConfig) -> None:
    """Cross-field checks; raises ConfigError on the first violation."""
    if not 1 <= cfg.server.port <= 65535:
        raise ConfigError(f"server.port must be in 1..65535, got {cfg.server.port}")
    if not cfg.server.host:
        raise ConfigError("server.host must be non-empty")

    if cfg.logging.level not in _LEVELS:
        raise ConfigError(f"logging.level must be one of {_LEVELS}, got {cfg.logging.level!r}")
    if cfg.logging.rotate is not None:
        mode = cfg.logging.rotate.get("mode", "size")
        if mode not in ("size", "time"):
            raise ConfigError(f"logging.rotate.mode must be 'size' or 'time', got {mode!r}")

    if cfg.limits.max_coordinate <= 0:
        raise ConfigError(f"limits.max_coordinate must be > 0, got {cfg.limits.max_coordinate}")
    if cfg.limits.max_radius <= 0:
        raise ConfigError(f"limits.max_radius must be > 0, got {cfg.limits.max_radius}")

    p = cfg.preview
    if p.width <= 0 or p.height <= 0:
        raise ConfigError(f"preview size must be positive, got {p.width}x{p.height}")
    for name in ("background", "foreground"):
        value = getattr(p, name)
        if not 0 <= value <= 255:
            raise ConfigError(f"preview.{name} must be in 0..255, got {value}")
    if p.margin < 0:
        raise ConfigError(f"preview.margin must be >= 0, got {p.margin}")
    if p.scale < 1:
        raise ConfigError(f"preview.scale must be >= 1, got {p.scale}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> RasterLabConfig:
    """Load and validate configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``server.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    RasterLabConfig
        Fully validated, frozen configuration object.  Sections missing
        from the file take their defaults.

    Raises
    ------
    ConfigError
        If the YAML is malformed or any field fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        data = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    try:
        config = RasterLabConfig(
            server=_parse_server(data.get("server") or {}),
            logging=_parse_logging(data.get("logging") or {}),
            limits=_parse_limits(data.get("limits") or {}),
            preview=_parse_preview(data.get("preview") or {}),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid configuration value in {path}: {exc}") from exc

    _validate_config(config)
    logger.info("Configuration loaded successfully")
    return config
