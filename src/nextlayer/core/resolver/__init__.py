"""Layered path resolution.

``LayeredPathResolver`` locates the root supplying a relative path and falls
through to lower-priority roots on request; ``ResolutionRecord`` carries the
per-session state that makes chained lookups possible.
"""

from .record import Hit, ResolutionRecord
from .resolver import PROBES, LayeredPathResolver

__all__ = ["Hit", "LayeredPathResolver", "PROBES", "ResolutionRecord"]
