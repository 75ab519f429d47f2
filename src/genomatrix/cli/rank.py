"""
genomatrix rank command - write a ranked list from one dataset column.

The output is a two-column, tab-delimited ranked list (name, score), one
feature per line in rank order.

Usage:
    genomatrix rank --input expression.txt --column tumor_1 --output tumor_1.rnk --sort abs
"""

import argparse
import logging
from pathlib import Path

from genomatrix.cli._common import add_input_arguments, parser_kwargs, resolve_args

logger = logging.getLogger(__name__)


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the rank subcommand."""
    parser = subparsers.add_parser(
        "rank",
        help="Rank dataset rows by one column",
        description="Sort the rows of a dataset by the values of one column and write a ranked list.",
    )
    add_input_arguments(parser)
    parser.add_argument("--column", "-c", default=None,
                        help="Column name to rank by")
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Output ranked list file (.rnk)")
    parser.add_argument("--sort", choices=["real", "abs"], default="real",
                        help="Compare real values or magnitudes (default: real)")
    parser.add_argument("--order", choices=["descending", "ascending"], default="descending",
                        help="Sort order (default: descending)")
    parser.add_argument("--show", type=int, default=5,
                        help="Log the N top and bottom ranked names (default: 5)")
    parser.set_defaults(func=run_rank)


def write_ranked_list(rl, path: Path) -> None:
    """Write ``rl`` as name<TAB>score lines."""
    from genomatrix.core.vector import format_value
    from genomatrix.utils.fileio import atomic_writer

    with atomic_writer(path) as out:
        for rank in range(rl.size):
            out.write(f"{rl.rank_name(rank)}\t{format_value(rl.score_at(rank))}\n")


def run_rank(args: argparse.Namespace) -> int:
    """Execute the rank command."""
    from genomatrix.alg.generators import ranked_list_from_column
    from genomatrix.cli.convert import convert_object
    from genomatrix.io.base import ParserError
    from genomatrix.io.registry import PersistentKind, read_object

    args = resolve_args(args)
    if args is None:
        return 1
    if not args.column:
        print("ERROR: --column is required (via CLI or config file)")
        return 1
    if not args.output:
        print("ERROR: --output is required (via CLI or config file)")
        return 1

    try:
        obj = read_object(args.input, kind=args.kind, **parser_kwargs(args))
        dataset = convert_object(obj, PersistentKind.DATASET)
        rl = ranked_list_from_column(dataset, args.column, sort=args.sort, order=args.order)
        write_ranked_list(rl, args.output)
    except (FileNotFoundError, ParserError, ValueError) as e:
        logger.error(f"Ranking failed: {e}")
        return 1

    logger.info(f"Ranked {rl.quick_info} by {args.column} ({args.sort}, {args.order})")
    if args.show > 0:
        logger.info(f"Top: {rl.names_of_up_or_dn_x_ranks(args.show, top=True)}")
        logger.info(f"Bottom: {rl.names_of_up_or_dn_x_ranks(args.show, top=False)}")
    print(f"Wrote {rl.size} ranked names to {args.output}")
    return 0
