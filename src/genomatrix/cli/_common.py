"""Argument groups and config handling shared by the genomatrix subcommands."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from genomatrix.cli.config import ParseConfig, load_config, merge_config_with_args, validate_config
from genomatrix.io.registry import PersistentKind

logger = logging.getLogger(__name__)

KIND_CHOICES = [k.value for k in PersistentKind]


def add_input_arguments(parser: argparse.ArgumentParser) -> None:
    """--input/--kind/--config plus the parser options every command accepts."""
    parser.add_argument("--input", "-i", type=Path, default=None,
                        help="Input file (.txt dataset, .df/.dataframe table)")
    parser.add_argument("--kind", choices=KIND_CHOICES, default=None,
                        help="Object kind of the input (default: inferred from extension)")
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to YAML/JSON config file (optional, CLI args override config values)")
    parser.add_argument("--comment-char", default="#",
                        help="Comment line marker (default: #)")
    parser.add_argument("--na-token", default="NA",
                        help="Placeholder written for missing row descriptions (default: NA)")
    parser.add_argument("--silent", "-q", action="store_true",
                        help="Suppress import/export progress logging")


def resolve_args(args: argparse.Namespace) -> Optional[argparse.Namespace]:
    """
    Apply the config file (if any) and check that an input is set.

    Returns:
        Merged arguments, or None after printing an error
    """
    if args.config:
        try:
            config = load_config(args.config)
            validate_config(config)
            args = merge_config_with_args(config, args, getattr(args, 'cli_args', None))
        except (FileNotFoundError, ValueError) as e:
            print(f"ERROR: Config file error: {e}")
            return None
        logger.debug(f"Configuration loaded from: {args.config}")

    if not args.input:
        print("ERROR: --input is required (via CLI or config file)")
        return None
    return args


def parser_kwargs(args: argparse.Namespace) -> dict:
    return ParseConfig.from_args(args).parser_kwargs()

