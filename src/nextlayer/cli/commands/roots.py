"""
nextlayer roots command.

SUMMARY: Show the search path, highest priority first
"""

from __future__ import annotations

import argparse

from nextlayer.cli import OutputFormatter, add_standard_flags, get_resolver
from nextlayer.core.exceptions import ConfigError, NextLayerError

SUMMARY = "Show the search path, highest priority first"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        resolver = get_resolver(args)
    except ConfigError as exc:
        formatter.error(exc, error_code="config_error")
        return 2
    except NextLayerError as exc:
        formatter.error(exc)
        return 1

    layers = resolver.search_path.layers
    lines = [f"{idx}: {layer.path}" for idx, layer in enumerate(layers)]
    formatter.success(
        {"style": resolver.style, **resolver.search_path.to_dict()},
        "\n".join(lines) if lines else "(no roots configured)",
    )
    return 0
