"""
Configuration file support for the genomatrix CLI.

Supports YAML and JSON config files with CLI argument override.

Example config (YAML):
    ```
    input: data/expression.txt
    output: results/expression.rnk
    parse:
      silent: true
      comment_char: "#"
      na_token: NA
    rank:
      column: tumor_1
      sort: abs
      order: descending
    ```
"""

import json
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from genomatrix.core.modes import Order, SortMode


@dataclass
class ParseConfig:
    """Parser settings shared by every format."""
    comment_char: str = "#"
    na_token: str = "NA"
    silent: bool = False

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "ParseConfig":
        values = values or {}
        unknown = set(values) - {'comment_char', 'na_token', 'silent'}
        if unknown:
            raise ValueError(f"Unknown parse settings: {', '.join(sorted(unknown))}")
        return cls(**values)

    @classmethod
    def from_args(cls, args: Namespace) -> "ParseConfig":
        return cls(
            comment_char=args.comment_char,
            na_token=args.na_token,
            silent=args.silent,
        )

    def parser_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments accepted by every parser constructor."""
        return {
            'silent': self.silent,
            'comment_char': self.comment_char,
            'na_token': self.na_token,
        }


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from YAML or JSON file.

    Parameters:
        config_path: Path to config file (.yaml, .yml, or .json)

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported or invalid

    Examples:
        >>> config = load_config(Path("genomatrix.yaml"))
        >>> print(config['rank']['sort'])
        abs
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    try:
        with open(config_path, 'r') as f:
            if suffix in ('.yaml', '.yml'):
                config = yaml.safe_load(f)
            elif suffix == '.json':
                config = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported config format: {suffix}. "
                    f"Use .yaml, .yml, or .json"
                )
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}") from e

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ValueError("Config file must contain a dictionary/mapping at top level")

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Parameters:
        config: Configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    for section in ('parse', 'rank'):
        if section in config and config[section] is not None and not isinstance(config[section], dict):
            raise ValueError(f"Config section '{section}' must be a mapping")

    parse = config.get('parse') or {}
    ParseConfig.from_dict(parse)
    if 'comment_char' in parse:
        comment_char = parse['comment_char']
        if not isinstance(comment_char, str) or not comment_char:
            raise ValueError(f"parse.comment_char must be a non-empty string, got: {comment_char!r}")
    if 'silent' in parse and not isinstance(parse['silent'], bool):
        raise ValueError(f"parse.silent must be true or false, got: {parse['silent']!r}")

    rank = config.get('rank') or {}
    if 'sort' in rank:
        SortMode.lookup(rank['sort'])
    if 'order' in rank:
        Order.lookup(rank['order'])


def _merge_value(cli_value: Any, config_value: Any, was_explicitly_set: bool) -> Any:
    """
    Merge a single config value with CLI argument.

    Rules:
    - CLI args ALWAYS override config if explicitly set
    - If CLI arg not set, use config value
    - If neither set, keep CLI default
    """
    if was_explicitly_set:
        return cli_value

    if config_value is not None:
        return config_value

    return cli_value


def _explicit_args(cli_args: Optional[List[str]]) -> set:
    """Destination names of the options present in a raw argument list."""
    short_to_long = {
        'i': 'input',
        'o': 'output',
        'c': 'column',
        'q': 'silent',
    }
    explicit = set()
    for arg in cli_args or []:
        if arg.startswith('--'):
            explicit.add(arg[2:].split('=', 1)[0].replace('-', '_'))
        elif arg.startswith('-') and len(arg) == 2 and arg[1] in short_to_long:
            explicit.add(short_to_long[arg[1]])
    return explicit


def merge_config_with_args(config: Dict[str, Any], args: Namespace, cli_args: Optional[List[str]] = None) -> Namespace:
    """
    Merge config file values with CLI arguments.

    Priority (highest to lowest):
    1. Explicitly provided CLI arguments
    2. Config file values
    3. CLI argument defaults

    Only attributes the command actually defines are merged, so one config
    file can serve every subcommand.

    Parameters:
        config: Configuration dictionary from load_config()
        args: Parsed CLI arguments (argparse.Namespace)
        cli_args: Raw CLI arguments list (for detecting explicit values)
                  If None, assumes all args are defaults

    Returns:
        Updated Namespace with merged values
    """
    explicit = _explicit_args(cli_args)
    merged = Namespace(**vars(args))

    def merge(arg_name: str, config_value: Any) -> None:
        if not hasattr(merged, arg_name):
            return
        setattr(merged, arg_name, _merge_value(
            getattr(merged, arg_name), config_value, arg_name in explicit
        ))

    # === Top-level paths ===
    for key in ('input', 'output'):
        if key in config and config[key] is not None:
            merge(key, Path(config[key]))

    # === Parse section ===
    parse = config.get('parse') or {}
    for key in ('comment_char', 'na_token', 'silent'):
        if key in parse:
            merge(key, parse[key])

    # === Rank section ===
    rank = config.get('rank') or {}
    for key in ('column', 'sort', 'order'):
        if key in rank:
            merge(key, rank[key])

    return merged
