"""
CLI entry point for the geoquery command.

Prints the key-ranges for a circle query, or encodes/decodes geohashes.
"""
import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from geoquery.core.geohash import decode, encode
from geoquery.core.queries import geohash_queries, query_precision
from geoquery.utils.config import QueryConfig, get_default_config, load_config
from geoquery.utils.exceptions import ConfigurationError, GeoQueryError
from geoquery.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_INVALID_INPUT = 2


def _load_settings(args) -> QueryConfig:
    config = load_config(args.config) if args.config else get_default_config()

    overrides = {}
    log_level = args.log_level or os.environ.get('GEOQUERY_LOG_LEVEL')
    if log_level:
        overrides['log_level'] = log_level
    if args.json_logs:
        overrides['json_logs'] = True
    if overrides:
        config = QueryConfig(**{**config.model_dump(), **overrides})

    configure_logging(log_level=config.log_level, json_output=config.json_logs)
    return config


def _cmd_ranges(args, config: QueryConfig) -> int:
    center = [args.lat, args.lon]
    queries = geohash_queries(center, args.radius, validate=config.validate_inputs)
    bits, precision = query_precision(center, args.radius)

    logger.info("ranges_computed", bits=bits, precision=precision, ranges=len(queries))

    if args.json:
        print(json.dumps([list(query) for query in queries]))
    else:
        for query in queries:
            print(f"{query.start}\t{query.end}")
    return 0


def _cmd_encode(args, config: QueryConfig) -> int:
    precision = args.precision if args.precision is not None else config.geohash_precision
    print(encode(args.lat, args.lon, precision))
    return 0


def _cmd_decode(args, config: QueryConfig) -> int:
    latitude, longitude = decode(args.geohash)
    print(f"{latitude:.6f}\t{longitude:.6f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='geoquery',
        description='Geohash key-ranges for proximity queries',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ranges covering 1 km around San Francisco
  geoquery ranges --lat 37.7749 --lon -122.4194 --radius 1000

  # Same, as a JSON array of [start, end] pairs
  geoquery ranges --lat 37.7749 --lon -122.4194 --radius 1000 --json

  # Encode a location at 8 characters
  geoquery encode --lat 37.7749 --lon -122.4194 --precision 8
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='YAML config file (default: built-in defaults)'
    )

    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: $GEOQUERY_LOG_LEVEL or config)'
    )

    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit JSON logs on stderr'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    ranges = subparsers.add_parser('ranges', help='Key-ranges covering a circle')
    ranges.add_argument('--lat', type=float, required=True, help='Center latitude')
    ranges.add_argument('--lon', type=float, required=True, help='Center longitude')
    ranges.add_argument('--radius', type=float, required=True, help='Radius in meters')
    ranges.add_argument('--json', action='store_true', help='Print a JSON array')
    ranges.set_defaults(handler=_cmd_ranges)

    encode_parser = subparsers.add_parser('encode', help='Encode a location')
    encode_parser.add_argument('--lat', type=float, required=True, help='Latitude')
    encode_parser.add_argument('--lon', type=float, required=True, help='Longitude')
    encode_parser.add_argument('--precision', type=int, default=None,
                               help='Geohash length (default: config geohash_precision)')
    encode_parser.set_defaults(handler=_cmd_encode)

    decode_parser = subparsers.add_parser('decode', help='Decode a geohash to its cell center')
    decode_parser.add_argument('geohash', help='Geohash string')
    decode_parser.set_defaults(handler=_cmd_decode)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = _load_settings(args)
    except (FileNotFoundError, yaml.YAMLError, ConfigurationError, ValidationError) as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        return args.handler(args, config)
    except GeoQueryError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT


if __name__ == '__main__':
    sys.exit(main())
