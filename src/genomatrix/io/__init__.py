"""
Flat-file marshalling for datasets and dataframes.

Key Functions:
    - read_object / write_object: parse or export by object kind
    - TxtDatasetParser: tab-delimited expression datasets (optional description column)
    - DataframeParser: whitespace-delimited numeric tables

Examples:
    >>> from genomatrix.io import read_object, write_object
    >>> ds = read_object("expression.txt")
    >>> write_object(ds, "expression_copy.txt")
"""

from genomatrix.io.base import (
    AbstractParser,
    Comment,
    LineReader,
    ParserError,
    split_fields,
    is_na,
)
from genomatrix.io.txt_dataset import TxtDatasetParser
from genomatrix.io.dataframe_parser import DataframeParser
from genomatrix.io.registry import (
    PersistentKind,
    kind_of,
    kind_for_path,
    parser_for,
    read_object,
    write_object,
)

__all__ = [
    'AbstractParser',
    'Comment',
    'LineReader',
    'ParserError',
    'split_fields',
    'is_na',
    'TxtDatasetParser',
    'DataframeParser',
    'PersistentKind',
    'kind_of',
    'kind_for_path',
    'parser_for',
    'read_object',
    'write_object',
]
