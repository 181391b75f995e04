"""Unified CLI output formatting utilities.

Supports both JSON and text output modes for every nextlayer command.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from nextlayer.core.exceptions import NextLayerError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Output a result: ``data`` in JSON mode, ``message`` otherwise."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Output an error to stderr."""
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, NextLayerError):
                output = {"error": error_code, **error.to_json_error()}
                output["message"] = msg
            else:
                output = {"error": error_code, "message": msg}
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)


__all__ = ["OutputFormatter"]
