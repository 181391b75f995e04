"""Shared helpers for CLI commands."""
from __future__ import annotations

import argparse

from nextlayer.core.config import ConfigManager
from nextlayer.core.resolver import LayeredPathResolver


def get_resolver(args: argparse.Namespace) -> LayeredPathResolver:
    """Build a resolver from config, honouring a ``--path`` override."""
    manager = ConfigManager(getattr(args, "config", None))
    cfg = manager.load_config()
    raw_path = getattr(args, "path", None)
    if raw_path:
        cfg.setdefault("search_path", {})["roots"] = manager.expand_roots(raw_path)
    return manager.build_resolver(cfg)


__all__ = ["get_resolver"]
