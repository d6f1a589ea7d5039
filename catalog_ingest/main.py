"""
Command line entry point for reading a location into catalog entities.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional, Sequence

from catalog_ingest.common.config import load_config, read_extra_processors
from catalog_ingest.common.errors import ConfigError
from catalog_ingest.common.io_utils import write_read_result
from catalog_ingest.common.location_reader import LocationReader
from catalog_ingest.common.results import LocationSpec, ReadLocationResult


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def run_read(location: LocationSpec, config: Optional[Dict[str, Any]] = None,
             readers: Sequence[Any] = ()) -> ReadLocationResult:
    """Read a location with the standard processors plus the given readers."""
    reader = LocationReader.standard(config, readers=readers)
    return asyncio.run(reader.read(location))


def read_command(args: argparse.Namespace) -> int:
    """Execute read command."""
    try:
        config = load_config(Path(args.config)) if args.config else {}
        readers = read_extra_processors(config)
    except ConfigError as e:
        logging.error(str(e))
        return 1
    
    location = LocationSpec(type=args.type, target=args.target)
    logging.info(f"Reading location {location.type} {location.target}")
    
    read_result = run_read(location, config, readers)
    
    for item in read_result.errors:
        logging.warning(f"{item.location}: {type(item.error).__name__}: {item.error}")
    logging.info(
        f"Read completed: {len(read_result.entities)} entities, {len(read_result.errors)} errors"
    )
    
    if args.output_dir:
        write_read_result(read_result, Path(args.output_dir))
    
    return 1 if read_result.errors else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Read catalog entities from a location")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    read_parser = subparsers.add_parser("read", help="Read a location and report entities and errors")
    read_parser.add_argument("--type", required=True, help="Location type, e.g. file or bootstrap")
    read_parser.add_argument("--target", required=True, help="Location target, e.g. a path or URL")
    read_parser.add_argument("--config", help="Path to YAML config file")
    read_parser.add_argument("--output-dir", help="Directory for entities.jsonl and errors.jsonl")
    
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 1
    
    setup_logging(args.verbose)
    
    if args.command == "read":
        return read_command(args)
    else:
        logging.error(f"Unknown command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
