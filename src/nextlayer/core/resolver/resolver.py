"""Layered "next match" resolution over an ordered search path.

Given roots ``[/c, /b, /a]`` and ``test.tt`` present in all three:

    resolver.resolve_first("test.tt")      -> /c/test.tt  (layer 0)
    resolver.resolve_next("/c/test.tt")    -> /b/test.tt  (layer 1)
    resolver.resolve_next("/b/test.tt")    -> /a/test.tt  (layer 2)
    resolver.resolve_next("/a/test.tt")    -> None

The absolute path of each hit is the resumption token for the next call. The
resolver remembers which root supplied each token in its ``ResolutionRecord``,
so chained lookups keep the same relative path and only move down the stack.

Caller contract: the search path must not change while a session is in use.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from nextlayer.core.exceptions import (
    ConfigError,
    InsufficientPathsError,
    NoNextLayerError,
    UnknownResumptionError,
)
from nextlayer.core.layers import SearchPath
from nextlayer.core.paths import concat_path, is_absolute, normalize, split_relative
from nextlayer.core.resolver.record import Hit, ResolutionRecord

logger = logging.getLogger(__name__)

ExistsProbe = Callable[[str], bool]

PROBES: dict[str, ExistsProbe] = {
    "file": os.path.isfile,
    "exists": os.path.exists,
}


class LayeredPathResolver:
    """Resolve a relative path to the first, or next, supplying root."""

    def __init__(
        self,
        search_path: Union[SearchPath, str, Iterable[Any]],
        *,
        record: Optional[ResolutionRecord] = None,
        style: Optional[str] = None,
        exists: Optional[ExistsProbe] = None,
    ) -> None:
        if isinstance(search_path, str):
            search_path = SearchPath.from_string(search_path)
        elif not isinstance(search_path, SearchPath):
            search_path = SearchPath.from_roots(search_path)
        # Hit paths double as resumption tokens, so they must be absolute.
        self.search_path = search_path.absolute(style=style)
        self.record = record if record is not None else ResolutionRecord()
        self.style = style
        self._exists = exists or os.path.isfile

    @classmethod
    def from_config(
        cls,
        cfg: Mapping[str, Any],
        *,
        base_dir: Optional[Path] = None,
        record: Optional[ResolutionRecord] = None,
    ) -> "LayeredPathResolver":
        """Build a resolver from a loaded configuration mapping."""
        resolver_cfg = cfg.get("resolver") or {}
        style = resolver_cfg.get("style") or "native"
        probe_name = resolver_cfg.get("probe") or "file"
        try:
            probe = PROBES[probe_name]
        except KeyError:
            raise ConfigError(
                f"Unknown resolver.probe '{probe_name}'. Expected one of: {', '.join(sorted(PROBES))}"
            ) from None
        return cls(
            SearchPath.from_config(cfg, base_dir=base_dir),
            record=record,
            style=style,
            exists=probe,
        )

    # ---------- Sessions ----------

    def session(self) -> "LayeredPathResolver":
        """Return a resolver sharing this search path with a fresh record."""
        return type(self)(self.search_path, style=self.style, exists=self._exists)

    def __enter__(self) -> "LayeredPathResolver":
        return self

    def __exit__(self, *exc: object) -> None:
        self.record.clear()

    # ---------- Resolution ----------

    def resolve_first(self, relative_path: Union[str, "os.PathLike[str]", Tuple[str, ...]]) -> Optional[Hit]:
        """Return the highest-priority root supplying ``relative_path``.

        Raises:
            InsufficientPathsError: Fewer than two roots are configured.
            InvalidRelativePathError: ``relative_path`` is absolute or empty.
        """
        self._require_fallthrough()
        segments = split_relative(relative_path, style=self.style)
        return self._scan(0, segments)

    def resolve_next(self, previous: Union[str, "os.PathLike[str]"]) -> Optional[Hit]:
        """Return the next lower-priority root supplying the same relative path.

        ``previous`` must be the absolute path of a hit from this session.

        Raises:
            InsufficientPathsError: Fewer than two roots are configured.
            UnknownResumptionError: ``previous`` was never resolved in this session.
        """
        self._require_fallthrough()
        token = normalize(previous, style=self.style)
        try:
            root, relative = self.record[token]
        except KeyError:
            raise UnknownResumptionError(
                f"Could not find absolute path {token} in resolution record",
                context={"path": token, "known": sorted(self.record)},
            ) from None

        index = self.search_path.index_of(root)
        if index is None:
            logger.debug("Root %s supplying %s left the search path; nothing below it", root, token)
            return None
        return self._scan(index + 1, split_relative(relative, style=self.style))

    def resolve(self, name: Union[str, "os.PathLike[str]"]) -> Optional[Hit]:
        """Return the layer below the one currently supplying ``name``.

        An absolute ``name`` is a resumption token (the executing resource was
        itself reached through a previous hit). A relative ``name`` is first
        located from the top of the stack, then resolution continues below it.
        """
        if is_absolute(name, style=self.style):
            return self.resolve_next(name)
        current = self.resolve_first(name)
        if current is None:
            return None
        return self.resolve_next(current.absolute_path)

    def require(self, name: Union[str, "os.PathLike[str]"]) -> Hit:
        """Like :meth:`resolve`, but raise when no further layer exists."""
        hit = self.resolve(name)
        if hit is None:
            raise NoNextLayerError(
                f"No next layer supplies '{os.fspath(name)}'",
                context={"name": os.fspath(name), "roots": list(self.search_path.roots)},
            )
        return hit

    def iter_chain(self, relative_path: Union[str, "os.PathLike[str]"]) -> Iterator[Hit]:
        """Yield every root supplying ``relative_path``, highest priority first."""
        seen = set()
        hit = self.resolve_first(relative_path)
        while hit is not None and hit.absolute_path not in seen:
            seen.add(hit.absolute_path)
            yield hit
            hit = self.resolve_next(hit.absolute_path)
        if hit is not None:
            logger.debug("Chain for %s revisited %s; stopping", hit.relative_path, hit.absolute_path)

    def chain(self, relative_path: Union[str, "os.PathLike[str]"]) -> List[Hit]:
        return list(self.iter_chain(relative_path))

    # ---------- Internals ----------

    def _require_fallthrough(self) -> None:
        if len(self.search_path) < 2:
            raise InsufficientPathsError(
                "Not applicable: there is no second root to fall through to",
                context={"roots": list(self.search_path.roots)},
            )

    def _scan(self, start: int, segments: Tuple[str, ...]) -> Optional[Hit]:
        relative = "/".join(segments)
        roots = self.search_path.roots
        for index in range(start, len(roots)):
            candidate = concat_path(roots[index], segments, style=self.style)
            if not self._exists(candidate):
                logger.debug("Layer %d (%s) does not supply %s", index, roots[index], relative)
                continue
            hit = Hit(
                absolute_path=candidate,
                root_index=index,
                relative_path=relative,
                root=roots[index],
            )
            self.record.register(hit)
            logger.debug("Layer %d supplies %s: %s", index, relative, candidate)
            return hit
        return None


__all__ = ["LayeredPathResolver", "PROBES", "ExistsProbe"]
