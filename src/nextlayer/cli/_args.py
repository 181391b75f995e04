"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_search_path_flags(parser: argparse.ArgumentParser) -> None:
    """Add --path and --config flags selecting the search roots."""
    parser.add_argument(
        "--path",
        type=str,
        help="Search roots, highest priority first, separated by the OS path separator "
        "(overrides config and NEXTLAYER_PATH)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Config file (default: $NEXTLAYER_CONFIG or ./nextlayer.yaml)",
    )


def add_name_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional resource name argument."""
    parser.add_argument(
        "name",
        help="Relative resource path (e.g. 'test.tt')",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use.

    Adds: --json, --path, --config
    """
    add_json_flag(parser)
    add_search_path_flags(parser)


__all__ = [
    "add_json_flag",
    "add_search_path_flags",
    "add_name_arg",
    "add_standard_flags",
]
