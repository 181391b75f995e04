"""nextlayer command line interface.

Commands are auto-discovered from ``nextlayer/cli/commands/*.py``; each module
exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""
from __future__ import annotations

from ._args import add_json_flag, add_name_arg, add_search_path_flags, add_standard_flags
from ._output import OutputFormatter
from ._utils import get_resolver

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_name_arg",
    "add_search_path_flags",
    "add_standard_flags",
    "get_resolver",
]
