from __future__ import annotations

from typing import Any, Dict, Mapping


class NextLayerError(Exception):
    """Base exception for nextlayer."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InsufficientPathsError(NextLayerError, ValueError):
    """Raised when the search path has no second root to fall through to."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        NextLayerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class InvalidRelativePathError(NextLayerError, ValueError):
    """Raised when an absolute path is used as a lookup key into a root."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        NextLayerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UnknownResumptionError(NextLayerError, KeyError):
    """Raised when a resumption token was never recorded in the current session."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        NextLayerError.__init__(self, message, context=context)
        KeyError.__init__(self, message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0]) if self.args else ""


class NoNextLayerError(NextLayerError, LookupError):
    """Raised by strict lookups when no further layer supplies the resource."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        NextLayerError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class ConfigError(NextLayerError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        NextLayerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "NextLayerError",
    "InsufficientPathsError",
    "InvalidRelativePathError",
    "UnknownResumptionError",
    "NoNextLayerError",
    "ConfigError",
]
