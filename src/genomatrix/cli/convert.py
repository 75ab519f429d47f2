"""
genomatrix convert command - re-export a file, optionally as another kind.

A Dataset converted to a dataframe keeps its values and names and loses its
annotation. A Dataframe converted to a dataset must have unique column names.

Usage:
    genomatrix convert --input expression.txt --output expression.df --to dataframe
"""

import argparse
import logging
from pathlib import Path

from genomatrix.cli._common import KIND_CHOICES, add_input_arguments, parser_kwargs, resolve_args

logger = logging.getLogger(__name__)


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the convert subcommand."""
    parser = subparsers.add_parser(
        "convert",
        help="Re-export a dataset or dataframe",
        description="Parse a file and write it back out, optionally converting its kind.",
    )
    add_input_arguments(parser)
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Output file")
    parser.add_argument("--to", choices=KIND_CHOICES, default=None,
                        help="Object kind to write (default: same as input)")
    parser.set_defaults(func=run_convert)


def convert_object(obj, kind):
    """Same names and values as ``obj``, re-wrapped as ``kind``."""
    from genomatrix.core.dataframe import Dataframe
    from genomatrix.core.dataset import DefaultDataset
    from genomatrix.io.registry import PersistentKind, kind_of

    kind = PersistentKind.lookup(kind)
    if kind_of(obj) is kind:
        return obj
    if kind is PersistentKind.DATAFRAME:
        return Dataframe(obj.name, obj.matrix, obj.row_names, obj.column_names,
                         share_matrix=True, share_row_names=True, share_column_names=True,
                         comment=obj.comment)
    return DefaultDataset(obj.name, obj.matrix, obj.row_names, obj.column_names,
                          share_matrix=True, share_row_names=True, share_column_names=True,
                          comment=obj.comment)


def run_convert(args: argparse.Namespace) -> int:
    """Execute the convert command."""
    from genomatrix.io.base import ParserError
    from genomatrix.io.registry import read_object, write_object

    args = resolve_args(args)
    if args is None:
        return 1
    if not args.output:
        print("ERROR: --output is required (via CLI or config file)")
        return 1

    kwargs = parser_kwargs(args)
    try:
        obj = read_object(args.input, kind=args.kind, **kwargs)
        if args.to:
            obj = convert_object(obj, args.to)
        write_object(obj, args.output, **kwargs)
    except (FileNotFoundError, ParserError, ValueError) as e:
        logger.error(f"Conversion failed: {e}")
        return 1

    logger.info(f"Wrote {obj.quick_info} to {args.output}")
    return 0
