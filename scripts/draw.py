#!/usr/bin/env python3
"""Rasterize primitives from the command line.

Runs one or more draw requests through the dispatcher, prints a summary per
request and optionally writes the JSON response and a PNG preview.

Usage:
    # List algorithms
    python scripts/draw.py --list

    # Single line, print the points
    python scripts/draw.py --algorithm bresenham-line --x1 0 --y1 0 --x2 7 --y2 3 --print

    # Circle with fitted PNG preview (4x enlarged)
    python scripts/draw.py --algorithm bresenham-circle --x1 50 --y1 50 --r 30 \\
        --png outputs/circle.png --scale 4

    # Antialiased line, JSON response written to disk
    python scripts/draw.py --algorithm wu --x1 0 --y1 0 --x2 40 --y2 13 --json outputs/wu.json

    # Requests from YAML (one mapping, or a list under `requests:`)
    python scripts/draw.py --request-file requests.yaml --png outputs/shapes.png

    # Average timing over repeated runs
    python scripts/draw.py --algorithm dda --x1 0 --y1 0 --x2 500 --y2 120 --bench 1000

Exit codes:
    0  success
    1  file could not be read or written
    2  invalid request (unknown algorithm, bad geometry)
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rasterlab.configs.loader import ConfigError, load_config
from rasterlab.raster import canvas, dispatcher
from rasterlab.raster.types import UnsupportedAlgorithm
from rasterlab.utils import fs, validators
from rasterlab.utils.logging_config import get_logger, setup_logging
from rasterlab.utils.profiler import TimerAccumulator

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Rasterize lines, circles and Bézier curves",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--algorithm', '-a', type=str, help='Algorithm name or alias')
    source.add_argument('--request-file', type=Path, help='YAML file with draw request(s)')
    source.add_argument('--list', action='store_true', help='List algorithms and exit')

    for i in range(1, 5):
        parser.add_argument(f'--x{i}', type=int, default=0, help=f'Point {i} x (px)')
        parser.add_argument(f'--y{i}', type=int, default=0, help=f'Point {i} y (px)')
    parser.add_argument('--r', type=int, default=0, help='Circle radius (px)')

    parser.add_argument('--print', dest='print_points', action='store_true',
                        help='Print every sample as "x y alpha"')
    parser.add_argument('--json', type=Path, help='Write the draw response as JSON')
    parser.add_argument('--png', type=Path, help='Write a PNG preview')
    parser.add_argument('--width', type=int, help='Preview width (default: fit samples)')
    parser.add_argument('--height', type=int, help='Preview height (default: fit samples)')
    parser.add_argument('--fixed', action='store_true',
                        help='Use the configured preview size instead of fitting the samples')
    parser.add_argument('--scale', type=int, help='Preview pixel enlargement')
    parser.add_argument('--bench', type=int, default=0, metavar='N',
                        help='Repeat each request N times and report the mean time')

    parser.add_argument('--config', type=Path, help='Config YAML (default: built-in server.yaml)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def _requests_from_args(args: argparse.Namespace) -> List[validators.DrawRequestV1]:
    if args.request_file is not None:
        return validators.load_request_file(args.request_file)
    fields = {name: getattr(args, name) for name in validators.COORDINATE_FIELDS + ('r',)}
    return [validators.DrawRequestV1(algorithm=args.algorithm, **fields)]


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)

    log_level = "DEBUG" if args.verbose else "WARNING"
    setup_logging(log_level=log_level, context={"app": "draw"})

    if args.list:
        for name in dispatcher.available_algorithms():
            algo = dispatcher.get_algorithm(name)
            aliases = f" (aliases: {', '.join(algo.aliases)})" if algo.aliases else ""
            print(f"{name:18s} {algo.description}{aliases}")
        return 0

    try:
        cfg = load_config(args.config)
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        requests = _requests_from_args(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    results = []
    for req in requests:
        try:
            result = dispatcher.run(req.algorithm, req.fields())
        except UnsupportedAlgorithm as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        if args.bench > 0:
            acc = TimerAccumulator(result.algorithm)
            algo = dispatcher.get_algorithm(result.algorithm)
            request = algo.build_request(req.fields())
            for _ in range(args.bench):
                with acc.measure():
                    algo(request)
            print(f"{result.algorithm}: {len(result)} samples, "
                  f"mean {acc.mean_ns():.0f} ns over {args.bench} runs")
        else:
            print(f"{result.algorithm}: {len(result)} samples in {result.elapsed_ns} ns")

        if args.print_points:
            for s in result.samples:
                print(f"{s.x} {s.y} {s.alpha:.6g}")
        results.append(result)

    try:
        if args.json is not None:
            if len(results) == 1:
                payload = results[0].to_response()
            else:
                payload = {"responses": [r.to_response() for r in results]}
            fs.atomic_json_dump(payload, args.json)
            logger.info("Wrote %s", args.json)

        if args.png is not None:
            preview = cfg.preview
            samples = [s for r in results for s in r.samples]
            canvas.save_preview(
                samples,
                args.png,
                width=args.width or (preview.width if args.fixed else None),
                height=args.height or (preview.height if args.fixed else None),
                background=preview.background,
                foreground=preview.foreground,
                margin=preview.margin,
                scale=args.scale if args.scale is not None else preview.scale,
            )
    except (RuntimeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
