"""
nextlayer next command.

SUMMARY: Show the file hidden below the layer supplying a resource

Locates the highest priority layer supplying the relative name, then prints
the file the next lower layer supplies at the same relative path. Each CLI
invocation is its own session, so absolute resumption tokens are not accepted;
use ``nextlayer chain`` to see every layer at once.
"""

from __future__ import annotations

import argparse

from nextlayer.cli import OutputFormatter, add_name_arg, add_standard_flags, get_resolver
from nextlayer.core.exceptions import ConfigError, NextLayerError
from nextlayer.core.paths import split_relative

SUMMARY = "Show the file hidden below the layer supplying a resource"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_name_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        resolver = get_resolver(args)
        split_relative(args.name, style=resolver.style)
        hit = resolver.require(args.name)
    except ConfigError as exc:
        formatter.error(exc, error_code="config_error")
        return 2
    except NextLayerError as exc:
        formatter.error(exc)
        return 1

    formatter.success({"hit": hit.to_dict()}, hit.absolute_path)
    return 0
