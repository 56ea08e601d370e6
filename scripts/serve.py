#!/usr/bin/env python3
"""Run the RasterLab HTTP service.

Usage:
    # Defaults from rasterlab/configs/server.yaml (127.0.0.1:8083)
    python scripts/serve.py

    # Custom config, listen on all interfaces
    python scripts/serve.py --config deploy/server.yaml --host 0.0.0.0 --port 9000

    # Then:
    curl -X POST localhost:8083/api/draw \\
         -H 'Content-Type: application/json' \\
         -d '{"algorithm": "bresenham-line", "x1": 0, "y1": 0, "x2": 3, "y2": 0}'
"""

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from rasterlab.configs.loader import ConfigError, load_config
from rasterlab.service.app import create_app
from rasterlab.utils.logging_config import get_logger, install_excepthook, setup_logging, shutdown

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Serve the rasterizers over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--config', type=Path, help='Config YAML (default: built-in server.yaml)')
    parser.add_argument('--host', type=str, help='Override server.host')
    parser.add_argument('--port', type=int, help='Override server.port')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    overrides = {}
    if args.host:
        overrides['host'] = args.host
    if args.port:
        overrides['port'] = args.port
    if overrides:
        cfg = dataclasses.replace(cfg, server=dataclasses.replace(cfg.server, **overrides))

    log_kwargs = cfg.logging.as_kwargs()
    if args.verbose:
        log_kwargs['log_level'] = "DEBUG"
    setup_logging(**log_kwargs, context={"app": "serve"})
    install_excepthook()

    app = create_app(cfg)
    logger.info("Server running at http://%s:%d", cfg.server.host, cfg.server.port)

    # log_config=None keeps uvicorn on the root handlers installed above
    try:
        uvicorn.run(app, host=cfg.server.host, port=cfg.server.port, log_config=None)
    finally:
        shutdown()
    return 0


if __name__ == '__main__':
    sys.exit(main())
