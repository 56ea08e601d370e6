"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Rounding and fractional-part helpers (geometry)
    - Unified logging (logging_config)
    - YAML loading and atomic writes (fs)
    - Wall-clock timing (profiler)
    - Request/response schemas (validators)

No module in utils/ may import from upper layers (raster, service, etc.).

Convenience imports:
    from rasterlab.utils import geometry, fs, validators
    from rasterlab.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import geometry
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, log_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'geometry',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'log_context',
]
