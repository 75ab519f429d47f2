"""
genomatrix CLI - inspect, convert and rank labeled expression matrices.

Commands:
    genomatrix info      - Print dimensions and metadata of a file
    genomatrix convert   - Re-export a dataset or dataframe (optionally as the other kind)
    genomatrix rank      - Write a ranked list from one dataset column
"""

import argparse
import logging
import sys
from typing import Optional, List


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI dispatcher for genomatrix."""
    from genomatrix import __version__

    parser = argparse.ArgumentParser(
        prog="genomatrix",
        description="Labeled expression matrices and their flat-file formats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  info      Print dimensions and metadata of a dataset or dataframe
  convert   Re-export a dataset or dataframe
  rank      Rank dataset rows by one column

Examples:
  genomatrix info --input expression.txt --rows 10
  genomatrix convert --input expression.txt --output expression.df --to dataframe
  genomatrix rank --input expression.txt --column tumor_1 --output tumor_1.rnk --sort abs
        """
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Import and register subcommands
    from genomatrix.cli import info, convert, rank
    info.register_parser(subparsers)
    convert.register_parser(subparsers)
    rank.register_parser(subparsers)

    raw_args = list(args) if args is not None else sys.argv[1:]
    parsed_args = parser.parse_args(raw_args)

    if parsed_args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Raw args let config merging tell explicit flags from defaults
    parsed_args.cli_args = raw_args

    # Dispatch to subcommand
    return parsed_args.func(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
