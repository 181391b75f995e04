"""
nextlayer chain command.

SUMMARY: List every layer supplying a resource

Prints each file found at the relative path, highest priority first. The
first line is the file a lookup would use; each following line is what the
line above falls through to.
"""

from __future__ import annotations

import argparse

from nextlayer.cli import OutputFormatter, add_name_arg, add_standard_flags, get_resolver
from nextlayer.core.exceptions import ConfigError, NextLayerError

SUMMARY = "List every layer supplying a resource"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_name_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        resolver = get_resolver(args)
        hits = resolver.chain(args.name)
    except ConfigError as exc:
        formatter.error(exc, error_code="config_error")
        return 2
    except NextLayerError as exc:
        formatter.error(exc)
        return 1

    if not hits:
        formatter.error(LookupError(args.name), f"No layer supplies '{args.name}'", error_code="not_found")
        return 1

    formatter.success(
        {"name": args.name, "hits": [h.to_dict() for h in hits]},
        "\n".join(f"{h.root_index}: {h.absolute_path}" for h in hits),
    )
    return 0
