from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from nextlayer.core.exceptions import ConfigError
from nextlayer.core.paths import is_absolute

RootLike = Union[str, "os.PathLike[str]", "LayerSpec"]


@dataclass(frozen=True)
class LayerSpec:
    """A single search root (e.g., skin, site, default)."""

    id: str
    path: str


@dataclass(frozen=True)
class SearchPath:
    """Ordered, immutable search roots (high → low priority).

    Index 0 is the highest priority layer. Sessions treat the search path as
    read-only, so a single instance may be shared between concurrent sessions.
    """

    layers: tuple[LayerSpec, ...]

    def __post_init__(self) -> None:
        seen: Dict[str, str] = {}
        for layer in self.layers:
            key = os.path.normpath(layer.path)
            if key in seen:
                raise ConfigError(
                    f"Duplicate search root '{layer.path}' (already listed as layer '{seen[key]}')",
                    context={"path": layer.path, "layer": layer.id},
                )
            seen[key] = layer.id

    @classmethod
    def from_roots(cls, roots: Iterable[RootLike]) -> "SearchPath":
        layers: List[LayerSpec] = []
        for root in roots:
            if isinstance(root, LayerSpec):
                layers.append(root)
                continue
            path = os.fspath(root)
            layers.append(LayerSpec(id=path, path=path))
        return cls(layers=tuple(layers))

    @classmethod
    def from_string(cls, raw: str, *, sep: str = os.pathsep) -> "SearchPath":
        """Parse a separator-joined list of roots (``/c:/b:/a``)."""
        return cls.from_roots(p for p in raw.split(sep) if p.strip())

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any], *, base_dir: Optional[Path] = None) -> "SearchPath":
        """Build a search path from the ``search_path`` config section.

        Entries are either plain path strings or mappings with ``path`` and
        optional ``id``/``enabled`` keys. Disabled entries are skipped.
        """
        section = cfg.get("search_path") if isinstance(cfg.get("search_path"), dict) else {}
        entries = section.get("roots", []) if isinstance(section, dict) else []
        if not isinstance(entries, list):
            raise ConfigError("search_path.roots must be a list", context={"roots": entries})

        seen: set[str] = set()
        layers: List[LayerSpec] = []
        for item in _parse_root_entries(entries, base_dir=base_dir):
            if not item["enabled"]:
                continue
            if item["id"] in seen:
                raise ConfigError(f"Duplicate layer id '{item['id']}' in search_path.roots.")
            seen.add(item["id"])
            layers.append(LayerSpec(id=item["id"], path=item["path"]))
        return cls(layers=tuple(layers))

    @property
    def roots(self) -> tuple[str, ...]:
        return tuple(layer.path for layer in self.layers)

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[str]:
        return iter(self.roots)

    def __getitem__(self, index: int) -> str:
        return self.layers[index].path

    def absolute(self, *, style: Optional[str] = None) -> "SearchPath":
        """Return this search path with every root made absolute.

        Relative native roots are anchored at the current working directory.
        Roots of a foreign ``style`` cannot be anchored and must already be
        absolute.
        """
        layers: List[LayerSpec] = []
        for layer in self.layers:
            if is_absolute(layer.path, style=style):
                layers.append(layer)
                continue
            if style not in (None, "native"):
                raise ConfigError(
                    f"Search root '{layer.path}' must be absolute for {style} paths",
                    context={"path": layer.path, "style": style},
                )
            path = os.path.abspath(layer.path)
            layers.append(LayerSpec(id=path if layer.id == layer.path else layer.id, path=path))
        if tuple(layers) == self.layers:
            return self
        return type(self)(layers=tuple(layers))

    def index_of(self, root: str) -> Optional[int]:
        """Return the priority index of ``root``, or None if it is not present."""
        for idx, layer in enumerate(self.layers):
            if layer.path == root:
                return idx
        return None

    def layer_by_id(self, layer_id: str) -> Optional[LayerSpec]:
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"roots": [{"id": l.id, "path": l.path} for l in self.layers]}


def _expand_layer_path(raw: str, *, base_dir: Optional[Path]) -> str:
    s = os.path.expandvars(str(raw)).strip()
    p = Path(s).expanduser()
    if not p.is_absolute() and base_dir is not None:
        # Relative roots are relative to the config file that declares them.
        p = Path(base_dir) / p
    return str(p)


def _parse_root_entries(entries: List[Any], *, base_dir: Optional[Path]) -> List[Dict[str, Any]]:
    parsed: List[Dict[str, Any]] = []
    for item in entries:
        if isinstance(item, str):
            # Allow merge marker strings from merge_arrays ("+", "=").
            if not item.strip() or item in ("+", "="):
                continue
            path = _expand_layer_path(item, base_dir=base_dir)
            parsed.append({"id": path, "path": path, "enabled": True})
            continue
        if not isinstance(item, dict):
            raise ConfigError(f"Invalid search_path entry: {item!r}", context={"entry": item})
        path_raw = item.get("path")
        if not isinstance(path_raw, str) or not path_raw.strip():
            raise ConfigError("search_path entry is missing 'path'", context={"entry": item})
        path = _expand_layer_path(path_raw, base_dir=base_dir)
        parsed.append(
            {
                "id": str(item.get("id") or path).strip(),
                "path": path,
                "enabled": bool(item.get("enabled", True)),
            }
        )
    return parsed


__all__ = ["LayerSpec", "SearchPath"]
