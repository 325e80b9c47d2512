"""
Command-line entry point.

Reads an STF export from a file or standard input and writes the converted
document to standard output. Diagnostics, including {S} comments, go to
standard error. Exit status is 0 on success and 1 on any conversion error,
in which case nothing is written to standard output.
"""

import argparse
import sys
from pathlib import Path

from stfjson.config import Config
from stfjson.services.converter import StfConverter
from stfjson.utils.exceptions import StfJsonError
from stfjson.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stfjson",
        description="Convert Lotus Agenda structured text files (STF) to JSON.",
    )
    parser.add_argument("input", nargs="?", help="STF file to convert (default: standard input)")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--format", choices=["json", "yaml"], help="Output format")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Load configuration and apply command-line overrides."""
    config = Config.from_env_or_yaml(yaml_path=args.config)

    if args.format:
        config = config.model_copy(update={"output": config.output.model_copy(update={"format": args.format})})
    if args.log_level:
        config = config.model_copy(
            update={"logging": config.logging.model_copy(update={"level": args.log_level.upper()})}
        )
    return config


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config and not Path(args.config).exists():
        parser.error(f"config file not found: {args.config}")

    try:
        config = load_config(args)
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    setup_logging(**config.logging.model_dump())
    converter = StfConverter(config)

    try:
        if args.input:
            with open(args.input, "rb") as f:
                output = converter.convert(f)
        else:
            output = converter.convert(sys.stdin.buffer)
    except StfJsonError as e:
        logger.error(f"{type(e).__name__}: {e.describe()}")
        return 1
    except OSError as e:
        logger.error(f"Failed to read input: {e}")
        return 1

    sys.stdout.write(output + "\n")
    return 0
