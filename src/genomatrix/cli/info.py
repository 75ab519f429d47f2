"""
genomatrix info command - summarize a dataset or dataframe file.

Usage:
    genomatrix info --input expression.txt
"""

import argparse
import logging

from genomatrix.cli._common import add_input_arguments, parser_kwargs, resolve_args

logger = logging.getLogger(__name__)


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the info subcommand."""
    parser = subparsers.add_parser(
        "info",
        help="Print dimensions and metadata of a dataset or dataframe",
        description="Parse a file and print its name, kind, dimensions and comment.",
    )
    add_input_arguments(parser)
    parser.add_argument("--rows", type=int, default=0,
                        help="Also print the first N row names (default: 0)")
    parser.set_defaults(func=run_info)


def run_info(args: argparse.Namespace) -> int:
    """Execute the info command."""
    from genomatrix.io.base import ParserError
    from genomatrix.io.registry import kind_of, read_object

    args = resolve_args(args)
    if args is None:
        return 1

    try:
        obj = read_object(args.input, kind=args.kind, **parser_kwargs(args))
    except (FileNotFoundError, ParserError, ValueError) as e:
        logger.error(f"Failed to read {args.input}: {e}")
        return 1

    print(f"Name:    {obj.name}")
    print(f"Kind:    {kind_of(obj).value}")
    print(f"Shape:   {obj.quick_info}")
    if obj.comment:
        print("Comment:")
        for line in obj.comment.splitlines():
            print(f"  {line}")
    if args.rows > 0:
        print("Rows:")
        for row_name in obj.row_names[:args.rows]:
            print(f"  {row_name}")
    return 0
