"""
nextlayer which command.

SUMMARY: Show which layer supplies a resource

Scans the search path from the highest priority root and prints the first
file found at the given relative path.
"""

from __future__ import annotations

import argparse

from nextlayer.cli import OutputFormatter, add_name_arg, add_standard_flags, get_resolver
from nextlayer.core.exceptions import ConfigError, NextLayerError

SUMMARY = "Show which layer supplies a resource"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_name_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        resolver = get_resolver(args)
        hit = resolver.resolve_first(args.name)
    except ConfigError as exc:
        formatter.error(exc, error_code="config_error")
        return 2
    except NextLayerError as exc:
        formatter.error(exc)
        return 1

    if hit is None:
        formatter.error(LookupError(args.name), f"No layer supplies '{args.name}'", error_code="not_found")
        return 1

    formatter.success({"hit": hit.to_dict()}, hit.absolute_path)
    return 0
